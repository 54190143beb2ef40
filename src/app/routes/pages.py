"""
Page Routes: 방문자용 읽기 화면.

- GET /, /about → about
- GET /home → 게시된 글 (실패 시 빈 목록)
- GET /articles → 게시된 글 (실패 시 메시지 + 빈 목록)
- GET /categories → 카테고리 (실패 시 메시지 + 빈 목록)
- GET /posts → category / minDate / 전체 (실패 시 400 JSON)
- GET /post/<id> → 단건 (없으면 404 뷰)
- GET /favicon.ico → 204

목록 조회 실패는 soft failure: 200으로 빈 목록 렌더.
/posts만 예외로 400 + {"message": ...}.
content service 예외는 종류와 무관하게 핸들러에서 끝낸다 (전역 500 없음).
"""

import logging

from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse, JSONResponse, Response

from src.app.services.submission import ContentBackend
from src.app.views import render
from src.domain.constants import (
    MSG_NO_ARTICLES,
    MSG_NO_CATEGORIES,
    MSG_POST_NOT_FOUND,
    VIEW_ABOUT,
    VIEW_ARTICLE,
    VIEW_ARTICLES,
    VIEW_CATEGORIES,
    VIEW_HOME,
    VIEW_NOT_FOUND,
)
from src.domain.errors import ContentError
from src.domain.schemas import ViewModel

logger = logging.getLogger(__name__)

router = APIRouter()


def get_content_service(request: Request) -> ContentBackend:
    """Request에서 content service 가져오기."""
    return request.app.state.content_service


# =============================================================================
# Static Pages
# =============================================================================

@router.get("/", response_class=HTMLResponse)
@router.get("/about", response_class=HTMLResponse)
async def about_page(request: Request) -> HTMLResponse:
    """소개 화면. /와 /about은 같은 핸들러."""
    return render(request, VIEW_ABOUT, ViewModel(title="About Us"))


@router.get("/favicon.ico", include_in_schema=False)
async def favicon() -> Response:
    return Response(status_code=204)


# =============================================================================
# Collections
# =============================================================================

@router.get("/home", response_class=HTMLResponse)
async def home_page(request: Request) -> HTMLResponse:
    """홈: 게시된 글 목록."""
    content = get_content_service(request)
    try:
        articles = await content.get_published_articles()
    except Exception as e:
        logger.error(f"Error fetching published articles: {e}")
        articles = []

    return render(request, VIEW_HOME, ViewModel(title="Home", articles=articles))


@router.get("/articles", response_class=HTMLResponse)
async def articles_page(request: Request) -> HTMLResponse:
    """게시된 글 목록."""
    content = get_content_service(request)
    try:
        articles = await content.get_published_articles()
    except Exception as e:
        logger.error(f"Error fetching published articles: {e}")
        return render(
            request,
            VIEW_ARTICLES,
            ViewModel(title="Articles", articles=[], message=MSG_NO_ARTICLES),
        )

    return render(request, VIEW_ARTICLES, ViewModel(title="Articles", articles=articles))


@router.get("/categories", response_class=HTMLResponse)
async def categories_page(request: Request) -> HTMLResponse:
    """카테고리 목록."""
    content = get_content_service(request)
    try:
        categories = await content.get_categories()
    except Exception as e:
        logger.error(f"Error fetching categories: {e}")
        return render(
            request,
            VIEW_CATEGORIES,
            ViewModel(title="Categories", categories=[], message=MSG_NO_CATEGORIES),
        )

    return render(
        request, VIEW_CATEGORIES, ViewModel(title="Categories", categories=categories)
    )


@router.get("/posts", response_class=HTMLResponse)
async def posts_page(
    request: Request,
    category: str | None = None,
    min_date: str | None = Query(None, alias="minDate"),
) -> Response:
    """
    글 목록 필터링.

    우선순위: category > minDate > 전체.
    실패 시 400 JSON.
    """
    content = get_content_service(request)
    try:
        if category:
            posts = await content.get_posts_by_category(category)
        elif min_date:
            posts = await content.get_posts_by_min_date(min_date)
        else:
            posts = await content.get_posts()
    except Exception as e:
        logger.error(f"Error fetching posts: {e}")
        message = e.message if isinstance(e, ContentError) else str(e)
        return JSONResponse(status_code=400, content={"message": message})

    return render(request, VIEW_ARTICLES, ViewModel(title="Articles", articles=posts))


# =============================================================================
# Single Article
# =============================================================================

@router.get("/post/{post_id}", response_class=HTMLResponse)
async def post_page(request: Request, post_id: str) -> HTMLResponse:
    """단건 화면. 없으면 404 뷰."""
    logger.info(f"Fetching post with ID: {post_id}")
    content = get_content_service(request)
    try:
        post = await content.get_post_by_id(post_id)
    except Exception as e:
        logger.error(f"Error fetching post: {e}")
        return render(
            request,
            VIEW_NOT_FOUND,
            ViewModel(title="Not Found", message=MSG_POST_NOT_FOUND),
            status_code=404,
        )

    return render(request, VIEW_ARTICLE, ViewModel(title=post.title, article=post))
