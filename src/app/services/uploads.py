"""
Image Upload Service: 바이트 → 오브젝트 스토어 → 공개 URL.

cloudinary SDK 사용:
- cloudinary.config(...)로 인증 정보 설정 (첫 업로드 시 lazy)
- cloudinary.uploader.upload는 동기 호출이므로 asyncio.to_thread로 실행

인증 정보는 시작 시 UploadConfig로 한 번 만들어 주입.
실패는 항상 UploadError. 호출 측(게시글 작성)은 빈 URL로 degrade.
"""

import asyncio
import io
import logging
import os
from dataclasses import dataclass
from typing import Any

import cloudinary
import cloudinary.uploader
from cloudinary.exceptions import Error as CloudinaryError

from src.domain.errors import ErrorCodes, UploadError

logger = logging.getLogger(__name__)

# 환경변수 이름
ENV_CLOUD_NAME = "CLOUDINARY_CLOUD_NAME"
ENV_API_KEY = "CLOUDINARY_API_KEY"
ENV_API_SECRET = "CLOUDINARY_API_SECRET"


# =============================================================================
# Configuration
# =============================================================================

@dataclass
class UploadConfig:
    """
    오브젝트 스토어 설정.

    세 인증 값 중 하나라도 없으면 is_configured=False.
    """
    cloud_name: str | None = None
    api_key: str | None = None
    api_secret: str | None = None

    folder: str | None = None
    timeout: float = 30.0

    @property
    def is_configured(self) -> bool:
        return bool(self.cloud_name and self.api_key and self.api_secret)

    @property
    def missing(self) -> list[str]:
        """비어 있는 인증 환경변수 이름."""
        return [
            name
            for name, value in (
                (ENV_CLOUD_NAME, self.cloud_name),
                (ENV_API_KEY, self.api_key),
                (ENV_API_SECRET, self.api_secret),
            )
            if not value
        ]

    @classmethod
    def from_env(cls, uploads_config: dict[str, Any] | None = None) -> "UploadConfig":
        """
        환경변수 + default.yaml의 uploads 섹션에서 생성.

        Args:
            uploads_config: {"folder": ..., "timeout": ...}
        """
        uploads_config = uploads_config or {}
        return cls(
            cloud_name=os.environ.get(ENV_CLOUD_NAME),
            api_key=os.environ.get(ENV_API_KEY),
            api_secret=os.environ.get(ENV_API_SECRET),
            folder=uploads_config.get("folder"),
            timeout=float(uploads_config.get("timeout", 30.0)),
        )


@dataclass
class UploadResult:
    """업로드 결과."""
    url: str
    public_id: str | None = None
    bytes: int | None = None


# =============================================================================
# Uploader
# =============================================================================

class ImageUploader:
    """
    Cloudinary 업로더.

    Usage:
        uploader = ImageUploader(UploadConfig.from_env())
        result = await uploader.upload_stream(data, filename="cover.png")
    """

    def __init__(self, config: UploadConfig):
        self.config = config
        self._configured = False

    def _configure(self) -> None:
        """cloudinary 전역 설정 (lazy, 한 번만)."""
        if self._configured:
            return
        cloudinary.config(
            cloud_name=self.config.cloud_name,
            api_key=self.config.api_key,
            api_secret=self.config.api_secret,
            secure=True,
        )
        self._configured = True

    async def upload_stream(
        self,
        data: bytes,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> UploadResult:
        """
        바이트 업로드.

        Returns:
            UploadResult (url은 secure_url 우선)

        Raises:
            UploadError: UPLOAD_NOT_CONFIGURED, UPLOAD_FAILED
        """
        if not self.config.is_configured:
            raise UploadError(
                ErrorCodes.UPLOAD_NOT_CONFIGURED,
                "Image upload credentials are not configured",
                missing=self.config.missing,
            )

        self._configure()

        options: dict[str, Any] = {
            "resource_type": "image",
            "timeout": self.config.timeout,
        }
        if self.config.folder:
            options["folder"] = self.config.folder

        logger.debug(f"Uploading {filename or 'stream'} ({content_type}, {len(data)} bytes)")
        try:
            payload = await asyncio.to_thread(
                cloudinary.uploader.upload, io.BytesIO(data), **options
            )
        except CloudinaryError as e:
            raise UploadError(
                ErrorCodes.UPLOAD_FAILED,
                f"Upload rejected: {e}",
            ) from e

        if not isinstance(payload, dict):
            payload = {}

        url = payload.get("secure_url") or payload.get("url")
        if not url:
            raise UploadError(
                ErrorCodes.UPLOAD_FAILED,
                "Upload response has no url",
                response_keys=sorted(payload),
            )

        logger.info(f"Image uploaded: {url}")
        return UploadResult(
            url=url,
            public_id=payload.get("public_id"),
            bytes=payload.get("bytes"),
        )
