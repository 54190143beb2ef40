"""
Pytest fixtures for the content gateway tests.

구성:
- 경로/설정 fixture
- 인메모리 content service, 가짜 업로더 (라우트 단위 테스트용)
- routers만 올린 테스트용 FastAPI 앱
"""

from datetime import UTC, datetime
from pathlib import Path

import pytest
import yaml
from fastapi import FastAPI
from fastapi.testclient import TestClient

from src.app.routes import articles, pages
from src.app.services.uploads import UploadResult
from src.domain.errors import ContentError, ErrorCodes, NotFoundError, UploadError
from src.domain.schemas import Article, Category

# =============================================================================
# Path Fixtures
# =============================================================================

@pytest.fixture
def project_root() -> Path:
    """프로젝트 루트 경로."""
    return Path(__file__).parent.parent


@pytest.fixture
def default_config(project_root: Path) -> dict:
    """기본 설정 로드."""
    with open(project_root / "default.yaml", encoding="utf-8") as f:
        return yaml.safe_load(f)


# =============================================================================
# Fakes
# =============================================================================

class FakeContentService:
    """
    인메모리 content service.

    fail_on에 메서드 이름을 넣으면 해당 호출이 ContentError로 실패.
    fail_with를 지정하면 그 예외로 실패 (ContentError가 아닌 예외 흉내).
    calls에 (메서드, 인자) 기록.
    """

    def __init__(
        self,
        articles: list[Article] | None = None,
        categories: list[Category] | None = None,
    ):
        self.articles: list[Article] = list(articles or [])
        self.categories: list[Category] = list(categories or [])
        self.fail_on: set[str] = set()
        self.fail_with: Exception | None = None
        self.calls: list[tuple[str, tuple]] = []

    def _record(self, name: str, *args) -> None:
        self.calls.append((name, args))
        if name in self.fail_on:
            if self.fail_with is not None:
                raise self.fail_with
            raise ContentError(ErrorCodes.STORE_CORRUPT, f"{name} failed")

    def called(self, name: str) -> bool:
        return any(call[0] == name for call in self.calls)

    def _find(self, article_id) -> Article:
        for article in self.articles:
            if str(article.id) == str(article_id):
                return article
        raise NotFoundError(ErrorCodes.ARTICLE_NOT_FOUND, f"Article '{article_id}' not found")

    async def get_published_articles(self) -> list[Article]:
        self._record("get_published_articles")
        return [a for a in self.articles if a.published]

    async def get_categories(self) -> list[Category]:
        self._record("get_categories")
        return list(self.categories)

    async def get_posts(self) -> list[Article]:
        self._record("get_posts")
        return list(self.articles)

    async def get_posts_by_category(self, category: str) -> list[Article]:
        self._record("get_posts_by_category", category)
        return [a for a in self.articles if a.category == category]

    async def get_posts_by_min_date(self, min_date: str) -> list[Article]:
        self._record("get_posts_by_min_date", min_date)
        return [a for a in self.articles if a.post_date[:10] >= min_date]

    async def get_post_by_id(self, article_id) -> Article:
        self._record("get_post_by_id", article_id)
        return self._find(article_id)

    async def add_article(self, article: Article) -> Article:
        self._record("add_article", article)
        article.id = max((a.id or 0 for a in self.articles), default=0) + 1
        article.post_date = datetime.now(UTC).isoformat()
        self.articles.append(article)
        return article

    async def update_article(self, article_id, changes: Article) -> Article:
        self._record("update_article", article_id, changes)
        existing = self._find(article_id)
        changes.id = existing.id
        changes.post_date = existing.post_date
        self.articles[self.articles.index(existing)] = changes
        return changes

    async def delete_article(self, article_id) -> None:
        self._record("delete_article", article_id)
        self.articles.remove(self._find(article_id))


class FakeUploader:
    """가짜 이미지 업로더. fail=True면 UploadError."""

    def __init__(self, url: str = "https://img.example.com/cover.png", fail: bool = False):
        self.url = url
        self.fail = fail
        self.uploads: list[dict] = []

    async def upload_stream(self, data: bytes, filename=None, content_type=None) -> UploadResult:
        self.uploads.append({"data": data, "filename": filename, "content_type": content_type})
        if self.fail:
            raise UploadError(ErrorCodes.UPLOAD_FAILED, "upload rejected")
        return UploadResult(url=self.url)


# =============================================================================
# Content Fixtures
# =============================================================================

@pytest.fixture
def sample_categories() -> list[Category]:
    return [Category(id=1, name="Cat1"), Category(id=2, name="Travel")]


@pytest.fixture
def sample_articles() -> list[Article]:
    """게시 2건 + 초안 1건."""
    return [
        Article(
            id=1,
            title="Kyoto in Autumn",
            content="Maple leaves everywhere.",
            category="Travel",
            feature_image="https://img.example.com/kyoto.png",
            published=True,
            post_date="2024-10-01T09:00:00+00:00",
        ),
        Article(
            id=2,
            title="Async Python",
            content="Event loops explained.",
            category="Cat1",
            published=True,
            post_date="2024-11-15T09:00:00+00:00",
        ),
        Article(
            id=3,
            title="Unfinished Draft",
            content="TBD",
            category="Cat1",
            published=False,
            post_date="2024-12-01T09:00:00+00:00",
        ),
    ]


@pytest.fixture
def content_service(sample_articles, sample_categories) -> FakeContentService:
    return FakeContentService(sample_articles, sample_categories)


@pytest.fixture
def uploader() -> FakeUploader:
    return FakeUploader()


# =============================================================================
# App Fixtures
# =============================================================================

@pytest.fixture
def app(content_service: FakeContentService, uploader: FakeUploader) -> FastAPI:
    """테스트용 FastAPI 앱 (lifespan 없음, state 직접 주입)."""
    app = FastAPI()
    app.include_router(pages.router)
    app.include_router(articles.router)

    app.state.config = {}
    app.state.content_service = content_service
    app.state.uploader = uploader

    return app


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    """테스트 클라이언트 (리다이렉트 따라가지 않음)."""
    return TestClient(app, follow_redirects=False)
