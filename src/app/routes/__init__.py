"""
FastAPI Routes.

페이지 라우트 (읽기) + 게시글 라우트 (작성/수정/삭제)
"""

from . import articles, pages

__all__ = ["articles", "pages"]
