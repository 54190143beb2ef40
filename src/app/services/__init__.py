"""
Application Services.

역할:
- content: Article/Category 저장소 (JSON 파일)
- uploads: 이미지 → Cloudinary URL
- submission: 게시글 작성/수정 파이프라인
"""

from .content import ContentService, build_content_service
from .submission import (
    apply_article_update,
    resolve_feature_image,
    submit_article,
    validate_article_form,
)
from .uploads import ImageUploader, UploadConfig, UploadResult

__all__ = [
    "ContentService",
    "build_content_service",
    "ImageUploader",
    "UploadConfig",
    "UploadResult",
    "apply_article_update",
    "resolve_feature_image",
    "submit_article",
    "validate_article_form",
]
