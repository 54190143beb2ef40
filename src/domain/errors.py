"""
Error definitions for the content gateway.

에러 분류 (핸들러 경계에서 한 번만 처리):
- ValidationError → 400 plain text
- NotFoundError → 404 view (조회) / 500 (쓰기)
- ContentError → 목록 조회는 빈 목록으로 degrade, 쓰기는 500
- UploadError → 삼키고 featureImage = ""
"""

from typing import Any


class ContentError(Exception):
    """
    콘텐츠 서비스 에러의 기본 클래스.

    Usage:
        raise ContentError("STORE_CORRUPT", "articles.json is not valid JSON", path=str(path))
    """

    def __init__(self, code: str, message: str, **context: Any) -> None:
        self.code = code
        self.message = message
        self.context = context
        super().__init__(f"[{code}] {message}")

    def to_dict(self) -> dict[str, Any]:
        """로그/JSON 직렬화용."""
        return {
            "code": self.code,
            "message": self.message,
            **self.context,
        }


class ValidationError(ContentError):
    """필수 폼 필드 누락."""


class NotFoundError(ContentError):
    """단일 엔티티 조회 실패."""


class UploadError(ContentError):
    """오브젝트 스토어 업로드 실패. 호출 측에서 항상 non-fatal로 처리."""


# =============================================================================
# Error Codes
# =============================================================================

class ErrorCodes:
    """에러 코드 상수."""

    # === Submission ===
    MISSING_REQUIRED_FIELD = "MISSING_REQUIRED_FIELD"

    # === Content Store ===
    ARTICLE_NOT_FOUND = "ARTICLE_NOT_FOUND"
    INVALID_DATE = "INVALID_DATE"
    STORE_CORRUPT = "STORE_CORRUPT"
    STORE_LOCK_TIMEOUT = "STORE_LOCK_TIMEOUT"
    STORE_WRITE_FAILED = "STORE_WRITE_FAILED"

    # === Uploads ===
    UPLOAD_NOT_CONFIGURED = "UPLOAD_NOT_CONFIGURED"
    UPLOAD_FAILED = "UPLOAD_FAILED"
