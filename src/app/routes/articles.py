"""
Article Routes: 편집자용 작성/수정/삭제.

- GET /articles/add → 작성 폼 (카테고리 실패 시 빈 목록)
- POST /articles/add → 업로드 → 검증 → 저장 → /articles
- GET /article/<id>/modify → 수정 폼 (글 없음 404, 카테고리 실패 500)
- POST /article/<id>/update → 저장 → /post/<id>
- POST /article/<id>/delete → 삭제 → /articles

쓰기 실패는 hard failure: 500 plain text.
리다이렉트는 POST → GET이므로 303.
"""

import logging

from fastapi import APIRouter, File, Form, Request, UploadFile
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response

from src.app.routes.pages import get_content_service
from src.app.services.submission import (
    Uploader,
    apply_article_update,
    resolve_feature_image,
    submit_article,
)
from src.app.views import render
from src.domain.constants import (
    MSG_ARTICLE_NOT_FOUND,
    MSG_INTERNAL_ERROR,
    MSG_MISSING_FIELDS,
    VIEW_ADD_ARTICLE,
    VIEW_MODIFY,
    VIEW_NOT_FOUND,
)
from src.domain.errors import ValidationError
from src.domain.schemas import ArticleForm, ViewModel

logger = logging.getLogger(__name__)

router = APIRouter()


def get_uploader(request: Request) -> Uploader:
    """Request에서 이미지 업로더 가져오기."""
    return request.app.state.uploader


def _internal_error() -> PlainTextResponse:
    return PlainTextResponse(MSG_INTERNAL_ERROR, status_code=500)


# =============================================================================
# Create
# =============================================================================

@router.get("/articles/add", response_class=HTMLResponse)
async def add_article_page(request: Request) -> HTMLResponse:
    """작성 폼. 카테고리 드롭다운 채우기."""
    content = get_content_service(request)
    try:
        categories = await content.get_categories()
    except Exception as e:
        logger.error(f"Error fetching categories: {e}")
        categories = []

    return render(
        request, VIEW_ADD_ARTICLE, ViewModel(title="Add Article", categories=categories)
    )


@router.post("/articles/add")
async def add_article(
    request: Request,
    title: str | None = Form(None),
    content: str | None = Form(None),
    category: str | None = Form(None),
    published: str | None = Form(None),
    feature_image: UploadFile | None = File(None, alias="featureImage"),
) -> Response:
    """
    게시글 작성.

    1. 이미지 업로드 (실패해도 계속, URL = "")
    2. 필수 필드 검증 (누락 시 400)
    3. 저장 → /articles 리다이렉트 (실패 시 500)
    """
    form = ArticleForm(
        title=title,
        content=content,
        category=category,
        published=published,
    )
    logger.info(f"Article submission: title={title!r}, category={category!r}")

    # 1. 업로드
    image_url = ""
    if feature_image is not None and feature_image.filename:
        data = await feature_image.read()
        image_url = await resolve_feature_image(
            get_uploader(request),
            data,
            filename=feature_image.filename,
            content_type=feature_image.content_type,
        )

    # 2-3. 검증 + 저장
    try:
        article = await submit_article(get_content_service(request), form, image_url)
    except ValidationError as e:
        logger.error(f"Missing required fields: {e.context.get('fields')}")
        return PlainTextResponse(MSG_MISSING_FIELDS, status_code=400)
    except Exception as e:
        logger.error(f"Error adding article: {e}", exc_info=True)
        return _internal_error()

    logger.info(f"Article added successfully: id={article.id}")
    return RedirectResponse(url="/articles", status_code=303)


# =============================================================================
# Update
# =============================================================================

@router.get("/article/{article_id}/modify", response_class=HTMLResponse)
async def modify_article_page(request: Request, article_id: str) -> Response:
    """
    수정 폼.

    글 조회 → 카테고리 조회 순서. 글이 없으면 404 뷰,
    글은 있는데 카테고리 조회가 실패하면 500.
    """
    content = get_content_service(request)
    try:
        article = await content.get_post_by_id(article_id)
    except Exception as e:
        logger.error(f"Error fetching article: {e}")
        return render(
            request,
            VIEW_NOT_FOUND,
            ViewModel(title="Not Found", message=MSG_ARTICLE_NOT_FOUND),
            status_code=404,
        )

    try:
        categories = await content.get_categories()
    except Exception as e:
        logger.error(f"Error fetching categories: {e}")
        return _internal_error()

    return render(
        request,
        VIEW_MODIFY,
        ViewModel(title="Modify Article", article=article, categories=categories),
    )


@router.post("/article/{article_id}/update")
async def update_article(
    request: Request,
    article_id: str,
    title: str | None = Form(None),
    content: str | None = Form(None),
    category: str | None = Form(None),
    feature_image: str | None = Form(None, alias="featureImage"),
    published: str | None = Form(None),
) -> Response:
    """게시글 수정. 이미지는 폼 값 그대로 (재업로드 없음)."""
    form = ArticleForm(
        title=title,
        content=content,
        category=category,
        feature_image=feature_image,
        published=published,
    )

    try:
        updated = await apply_article_update(get_content_service(request), article_id, form)
    except Exception as e:
        logger.error(f"Error updating article: {e}", exc_info=True)
        return _internal_error()

    return RedirectResponse(url=f"/post/{updated.id}", status_code=303)


# =============================================================================
# Delete
# =============================================================================

@router.post("/article/{article_id}/delete")
async def delete_article(request: Request, article_id: str) -> Response:
    """게시글 삭제 → 목록으로."""
    try:
        await get_content_service(request).delete_article(article_id)
    except Exception as e:
        logger.error(f"Error deleting article: {e}", exc_info=True)
        return _internal_error()

    return RedirectResponse(url="/articles", status_code=303)
