"""
View rendering: ViewModel → Jinja2 템플릿.

src/app/templates/
├── layout.html      # 공통 레이아웃
├── about.html, home.html, articles.html, article.html
├── categories.html, addArticle.html, modify.html
└── 404.html
"""

from pathlib import Path

from fastapi import Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from src.domain.schemas import ViewModel

TEMPLATES_DIR = Path(__file__).parent / "templates"
jinja_templates = Jinja2Templates(directory=TEMPLATES_DIR)


def render(
    request: Request,
    view: str,
    model: ViewModel,
    status_code: int = 200,
) -> HTMLResponse:
    """
    뷰 렌더링.

    Args:
        request: 현재 요청
        view: 템플릿 파일명 (domain.constants.VIEW_*)
        model: 요청 단위 뷰 모델
        status_code: 응답 상태 (404 뷰 등)
    """
    return jinja_templates.TemplateResponse(
        request=request,
        name=view,
        context=model.to_context(),
        status_code=status_code,
    )
