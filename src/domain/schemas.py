"""
Data schemas for the content gateway.

Article/Category는 이 레이어가 소유하지 않고 콘텐츠 서비스와 템플릿 사이를
통과만 한다. 직렬화 키는 템플릿/JSON 파일과 동일 (featureImage, postDate).
"""

from dataclasses import dataclass
from typing import Any

from src.domain.constants import PUBLISHED_CHECKED, REQUIRED_ARTICLE_FIELDS

# =============================================================================
# Entities
# =============================================================================

@dataclass
class Category:
    """카테고리 (읽기 전용)."""
    id: int
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Category":
        return cls(id=int(data["id"]), name=str(data["name"]))


@dataclass
class Article:
    """
    게시글.

    id, post_date, updated_at은 콘텐츠 서비스가 채운다.
    생성 시 title/content/category는 비어 있으면 안 됨.
    """
    title: str
    content: str
    category: str
    feature_image: str = ""
    published: bool = False

    id: int | None = None
    post_date: str = ""
    updated_at: str = ""

    def to_dict(self) -> dict[str, Any]:
        """JSON 직렬화용."""
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "category": self.category,
            "featureImage": self.feature_image,
            "published": self.published,
            "postDate": self.post_date,
            "updatedAt": self.updated_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Article":
        raw_id = data.get("id")
        return cls(
            id=int(raw_id) if raw_id is not None else None,
            title=data.get("title", ""),
            content=data.get("content", ""),
            category=str(data.get("category", "")),
            feature_image=data.get("featureImage") or "",
            published=bool(data.get("published", False)),
            post_date=data.get("postDate", ""),
            updated_at=data.get("updatedAt", ""),
        )


# =============================================================================
# Form Input
# =============================================================================

@dataclass
class ArticleForm:
    """
    게시글 작성/수정 폼 입력.

    폼 값은 검증 전이므로 모두 str | None.
    """
    title: str | None = None
    content: str | None = None
    category: str | None = None
    feature_image: str | None = None
    published: str | None = None

    def missing_fields(self) -> list[str]:
        """비어 있는 필수 필드 목록."""
        return [
            name
            for name in REQUIRED_ARTICLE_FIELDS
            if not getattr(self, name)
        ]

    def to_article(self, feature_image: str | None = None) -> Article:
        """
        Article로 변환.

        Args:
            feature_image: 업로드로 확정된 이미지 URL (None이면 폼 값 사용)
        """
        image = feature_image if feature_image is not None else self.feature_image
        return Article(
            title=self.title or "",
            content=self.content or "",
            category=self.category or "",
            feature_image=image or "",
            published=is_published(self.published),
        )


def is_published(value: str | None) -> bool:
    """체크박스 값 정규화: "on"만 True."""
    return value == PUBLISHED_CHECKED


# =============================================================================
# View Model
# =============================================================================

@dataclass
class ViewModel:
    """
    요청 단위 뷰 모델. 렌더링 후 버려진다.

    None인 항목은 템플릿 컨텍스트에 넣지 않는다.
    """
    title: str
    articles: list[Article] | None = None
    categories: list[Category] | None = None
    article: Article | None = None
    message: str | None = None

    def to_context(self) -> dict[str, Any]:
        context: dict[str, Any] = {"title": self.title}
        if self.articles is not None:
            context["articles"] = [a.to_dict() for a in self.articles]
        if self.categories is not None:
            context["categories"] = [c.to_dict() for c in self.categories]
        if self.article is not None:
            context["article"] = self.article.to_dict()
        if self.message is not None:
            context["message"] = self.message
        return context
