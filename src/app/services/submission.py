"""
Article Submission: 게시글 작성/수정 파이프라인.

작성(2단계):
1. resolve_feature_image: 이미지가 있으면 업로드 → URL, 실패하면 "" (non-fatal)
2. submit_article: 필수 필드 검증 → Article 생성 → content service 저장

순서 고정: 업로드 → 검증 → 저장.
필수 필드가 빠진 요청도 업로드는 이미 일어난 뒤일 수 있고, 롤백하지 않는다.

수정은 업로드 없이 폼의 featureImage 값을 그대로 사용.
"""

import logging
from typing import Protocol

from src.app.services.uploads import UploadResult
from src.domain.errors import ErrorCodes, UploadError, ValidationError
from src.domain.schemas import Article, ArticleForm, Category

logger = logging.getLogger(__name__)


# =============================================================================
# Collaborator Interfaces
# =============================================================================

class ContentBackend(Protocol):
    """라우트가 의존하는 content service 인터페이스."""

    async def get_published_articles(self) -> list[Article]: ...
    async def get_categories(self) -> list[Category]: ...
    async def get_posts(self) -> list[Article]: ...
    async def get_posts_by_category(self, category: str) -> list[Article]: ...
    async def get_posts_by_min_date(self, min_date: str) -> list[Article]: ...
    async def get_post_by_id(self, article_id: str | int) -> Article: ...
    async def add_article(self, article: Article) -> Article: ...
    async def update_article(self, article_id: str | int, changes: Article) -> Article: ...
    async def delete_article(self, article_id: str | int) -> None: ...


class Uploader(Protocol):
    """오브젝트 스토어 인터페이스."""

    async def upload_stream(
        self,
        data: bytes,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> UploadResult: ...


# =============================================================================
# Pipeline
# =============================================================================

async def resolve_feature_image(
    uploader: Uploader,
    data: bytes | None,
    filename: str | None = None,
    content_type: str | None = None,
) -> str:
    """
    1단계: 이미지 URL 확정.

    Returns:
        업로드된 URL, 이미지가 없거나 업로드 실패 시 ""
    """
    if not data:
        return ""

    logger.info(
        f"Uploading feature image: filename={filename!r}, "
        f"size={len(data)}, content_type={content_type!r}"
    )
    try:
        result = await uploader.upload_stream(data, filename=filename, content_type=content_type)
    except UploadError as e:
        logger.warning(f"Image upload error, continuing without image: {e}")
        return ""

    return result.url


def validate_article_form(form: ArticleForm) -> None:
    """
    필수 필드 검증.

    Raises:
        ValidationError: MISSING_REQUIRED_FIELD
    """
    missing = form.missing_fields()
    if missing:
        raise ValidationError(
            ErrorCodes.MISSING_REQUIRED_FIELD,
            "Missing required fields",
            fields=missing,
        )


async def submit_article(
    content: ContentBackend,
    form: ArticleForm,
    image_url: str,
) -> Article:
    """
    2단계: 검증 후 저장.

    Args:
        content: content service
        form: 폼 입력
        image_url: 1단계에서 확정된 URL

    Returns:
        저장된 Article

    Raises:
        ValidationError: 필수 필드 누락 (저장 호출 없음)
        ContentError: 저장 실패
    """
    validate_article_form(form)
    article = form.to_article(feature_image=image_url)
    return await content.add_article(article)


async def apply_article_update(
    content: ContentBackend,
    article_id: str,
    form: ArticleForm,
) -> Article:
    """
    수정 적용. featureImage는 폼 값 그대로, published는 "on"일 때만 True.

    Raises:
        NotFoundError, ContentError
    """
    return await content.update_article(article_id, form.to_article())
