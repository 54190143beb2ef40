"""Domain layer: errors, schemas, constants."""

from .errors import ContentError, NotFoundError, UploadError, ValidationError
from .schemas import Article, ArticleForm, Category, ViewModel

__all__ = [
    "ContentError",
    "NotFoundError",
    "UploadError",
    "ValidationError",
    "Article",
    "ArticleForm",
    "Category",
    "ViewModel",
]
