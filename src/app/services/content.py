"""
Content Service: Article/Category CRUD + 조회.

라우트 레이어의 유일한 영속화 협력자.
- 저장: data/articles.json, data/categories.json (JsonStore)
- 파일 I/O는 asyncio.to_thread로 이벤트 루프 밖에서 실행
- 빈 결과는 에러가 아님, 단건 조회 실패만 NotFoundError
- 결과는 id 오름차순
"""

import asyncio
import logging
import os
from datetime import UTC, datetime
from collections.abc import Callable
from pathlib import Path
from typing import Any, TypeVar

from src.core.json_store import JsonStore
from src.domain.constants import ARTICLES_FILENAME, CATEGORIES_FILENAME
from src.domain.errors import ContentError, ErrorCodes, NotFoundError
from src.domain.schemas import Article, Category

logger = logging.getLogger(__name__)

T = TypeVar("T")


# =============================================================================
# Helpers
# =============================================================================


def parse_date(value: str) -> datetime:
    """
    날짜 문자열 파싱 (YYYY-MM-DD 또는 ISO datetime).

    timezone 없는 값은 UTC로 간주.

    Raises:
        ContentError: INVALID_DATE
    """
    try:
        parsed = datetime.fromisoformat(value.strip())
    except (ValueError, AttributeError) as e:
        raise ContentError(
            ErrorCodes.INVALID_DATE,
            f"Invalid date: {value!r}",
            value=value,
        ) from e

    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _parse_article_id(article_id: str | int) -> int:
    try:
        return int(article_id)
    except (TypeError, ValueError) as e:
        raise NotFoundError(
            ErrorCodes.ARTICLE_NOT_FOUND,
            f"Article '{article_id}' not found",
            article_id=str(article_id),
        ) from e


def _not_found(article_id: int) -> NotFoundError:
    return NotFoundError(
        ErrorCodes.ARTICLE_NOT_FOUND,
        f"Article '{article_id}' not found",
        article_id=str(article_id),
    )


def _sorted(articles: list[Article]) -> list[Article]:
    return sorted(articles, key=lambda a: a.id or 0)


def _decode(records: list[Any], decoder: Callable[[dict[str, Any]], T], filename: str) -> list[T]:
    """
    레코드 → 도메인 객체. 필드가 깨진 레코드는 STORE_CORRUPT.

    Raises:
        ContentError: STORE_CORRUPT
    """
    decoded: list[T] = []
    for index, record in enumerate(records):
        try:
            decoded.append(decoder(record))
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            raise ContentError(
                ErrorCodes.STORE_CORRUPT,
                f"Malformed record #{index} in {filename}: {e!r}",
                filename=filename,
                index=index,
            ) from e
    return decoded


# =============================================================================
# Content Service
# =============================================================================


class ContentService:
    """
    JSON 파일 기반 콘텐츠 서비스.

    Usage:
        service = ContentService(Path("data"))
        articles = await service.get_published_articles()
    """

    def __init__(self, data_dir: Path, store: JsonStore | None = None):
        """
        Args:
            data_dir: articles.json / categories.json 디렉터리
            store: 주입용 JsonStore (None이면 data_dir 기반 생성)
        """
        self.data_dir = data_dir
        self.store = store if store is not None else JsonStore(data_dir)

    # =========================================================================
    # Sync internals (to_thread에서 실행)
    # =========================================================================

    def _load_articles(self) -> list[Article]:
        records = self.store.read(ARTICLES_FILENAME)
        return _sorted(_decode(records, Article.from_dict, ARTICLES_FILENAME))

    def _load_categories(self) -> list[Category]:
        records = self.store.read(CATEGORIES_FILENAME)
        categories = _decode(records, Category.from_dict, CATEGORIES_FILENAME)
        return sorted(categories, key=lambda c: c.id)

    def _save_articles(self, articles: list[Article]) -> None:
        self.store.write(ARTICLES_FILENAME, [a.to_dict() for a in _sorted(articles)])

    def _add(self, article: Article) -> Article:
        with self.store.locked():
            articles = self._load_articles()
            next_id = max((a.id or 0 for a in articles), default=0) + 1
            now = datetime.now(UTC).isoformat()

            created = Article(
                id=next_id,
                title=article.title,
                content=article.content,
                category=article.category,
                feature_image=article.feature_image or "",
                published=article.published,
                post_date=now,
                updated_at=now,
            )
            articles.append(created)
            self._save_articles(articles)

        return created

    def _update(self, article_id: int, changes: Article) -> Article:
        with self.store.locked():
            articles = self._load_articles()
            for index, existing in enumerate(articles):
                if existing.id != article_id:
                    continue

                updated = Article(
                    id=existing.id,
                    title=changes.title,
                    content=changes.content,
                    category=changes.category,
                    feature_image=changes.feature_image or "",
                    published=changes.published,
                    post_date=existing.post_date,
                    updated_at=datetime.now(UTC).isoformat(),
                )
                articles[index] = updated
                self._save_articles(articles)
                return updated

        raise _not_found(article_id)

    def _delete(self, article_id: int) -> None:
        with self.store.locked():
            articles = self._load_articles()
            remaining = [a for a in articles if a.id != article_id]
            if len(remaining) == len(articles):
                raise _not_found(article_id)
            self._save_articles(remaining)

    # =========================================================================
    # Queries
    # =========================================================================

    async def get_published_articles(self) -> list[Article]:
        """게시된 글 목록."""
        articles = await asyncio.to_thread(self._load_articles)
        return [a for a in articles if a.published]

    async def get_categories(self) -> list[Category]:
        """카테고리 목록."""
        return await asyncio.to_thread(self._load_categories)

    async def get_posts(self) -> list[Article]:
        """전체 글 목록 (게시 여부 무관)."""
        return await asyncio.to_thread(self._load_articles)

    async def get_posts_by_category(self, category: str) -> list[Article]:
        """카테고리가 정확히 일치하는 글 목록."""
        articles = await asyncio.to_thread(self._load_articles)
        return [a for a in articles if a.category == category]

    async def get_posts_by_min_date(self, min_date: str) -> list[Article]:
        """
        postDate가 min_date 이후(포함)인 글 목록.

        postDate가 비었거나 파싱 불가한 글은 제외.

        Raises:
            ContentError: INVALID_DATE
        """
        threshold = parse_date(min_date)
        articles = await asyncio.to_thread(self._load_articles)

        matched: list[Article] = []
        for article in articles:
            if not article.post_date:
                continue
            try:
                posted = parse_date(article.post_date)
            except ContentError:
                logger.warning(
                    f"Skipping article {article.id} with bad postDate {article.post_date!r}"
                )
                continue
            if posted >= threshold:
                matched.append(article)
        return matched

    async def get_post_by_id(self, article_id: str | int) -> Article:
        """
        단건 조회.

        Raises:
            NotFoundError: ARTICLE_NOT_FOUND
        """
        target = _parse_article_id(article_id)
        articles = await asyncio.to_thread(self._load_articles)
        for article in articles:
            if article.id == target:
                return article
        raise _not_found(target)

    # =========================================================================
    # Mutations
    # =========================================================================

    async def add_article(self, article: Article) -> Article:
        """새 글 저장. id/postDate/updatedAt은 여기서 발급."""
        created = await asyncio.to_thread(self._add, article)
        logger.info(f"Article {created.id} created (published={created.published})")
        return created

    async def update_article(self, article_id: str | int, changes: Article) -> Article:
        """
        글 수정. id/postDate는 유지.

        Raises:
            NotFoundError: ARTICLE_NOT_FOUND
        """
        target = _parse_article_id(article_id)
        updated = await asyncio.to_thread(self._update, target, changes)
        logger.info(f"Article {updated.id} updated")
        return updated

    async def delete_article(self, article_id: str | int) -> None:
        """
        글 삭제.

        Raises:
            NotFoundError: ARTICLE_NOT_FOUND
        """
        target = _parse_article_id(article_id)
        await asyncio.to_thread(self._delete, target)
        logger.info(f"Article {target} deleted")


def build_content_service(config: dict[str, Any], project_root: Path) -> ContentService:
    """
    설정에서 ContentService 생성.

    CONTENT_DATA_DIR 환경변수 > content.data_dir.
    상대 경로면 project_root 기준.
    """
    content_config = config.get("content", {})
    data_dir = Path(os.environ.get("CONTENT_DATA_DIR") or content_config.get("data_dir", "data"))
    if not data_dir.is_absolute():
        data_dir = project_root / data_dir

    store = JsonStore(
        data_dir,
        lock_timeout=float(content_config.get("lock_timeout", 10.0)),
    )
    return ContentService(data_dir, store=store)
