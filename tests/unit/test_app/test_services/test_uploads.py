"""
test_uploads.py - ImageUploader 유닛 테스트

cloudinary.uploader.upload를 patch해서 SDK 응답을 흉내낸다.
"""

import io
from unittest.mock import patch

import pytest
from cloudinary.exceptions import Error as CloudinaryError

from src.app.services.uploads import ImageUploader, UploadConfig
from src.domain.errors import ErrorCodes, UploadError


@pytest.fixture
def upload_config() -> UploadConfig:
    return UploadConfig(
        cloud_name="demo",
        api_key="key123",
        api_secret="secret456",
        folder="articles",
        timeout=12.0,
    )


@pytest.fixture
def uploader(upload_config) -> ImageUploader:
    return ImageUploader(upload_config)


class TestUploadConfig:
    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "demo")
        monkeypatch.setenv("CLOUDINARY_API_KEY", "k")
        monkeypatch.setenv("CLOUDINARY_API_SECRET", "s")

        config = UploadConfig.from_env({"folder": "blog", "timeout": 5})

        assert config.is_configured
        assert config.folder == "blog"
        assert config.timeout == 5.0
        assert config.missing == []

    def test_missing_secret_not_configured(self, monkeypatch):
        monkeypatch.setenv("CLOUDINARY_CLOUD_NAME", "demo")
        monkeypatch.setenv("CLOUDINARY_API_KEY", "k")
        monkeypatch.delenv("CLOUDINARY_API_SECRET", raising=False)

        config = UploadConfig.from_env()

        assert not config.is_configured
        assert config.missing == ["CLOUDINARY_API_SECRET"]


class TestUploadStream:
    @pytest.mark.asyncio
    async def test_success_prefers_secure_url(self, uploader):
        response = {
            "url": "http://res.cloudinary.com/demo/a.png",
            "secure_url": "https://res.cloudinary.com/demo/a.png",
            "public_id": "articles/a",
            "bytes": 4,
        }

        with patch("cloudinary.uploader.upload", return_value=response) as mock_upload:
            result = await uploader.upload_stream(
                b"data", filename="a.png", content_type="image/png"
            )

        assert result.url == "https://res.cloudinary.com/demo/a.png"
        assert result.public_id == "articles/a"
        assert result.bytes == 4

        args, kwargs = mock_upload.call_args
        assert isinstance(args[0], io.BytesIO)
        assert args[0].getvalue() == b"data"
        assert kwargs["folder"] == "articles"
        assert kwargs["timeout"] == 12.0
        assert kwargs["resource_type"] == "image"

    @pytest.mark.asyncio
    async def test_sdk_configured_with_credentials(self, uploader):
        with patch("cloudinary.config") as mock_config, patch(
            "cloudinary.uploader.upload", return_value={"url": "http://x/a.png"}
        ):
            await uploader.upload_stream(b"one")
            await uploader.upload_stream(b"two")

        mock_config.assert_called_once_with(
            cloud_name="demo",
            api_key="key123",
            api_secret="secret456",
            secure=True,
        )

    @pytest.mark.asyncio
    async def test_falls_back_to_url(self, uploader):
        with patch(
            "cloudinary.uploader.upload",
            return_value={"url": "http://res.cloudinary.com/demo/b.png"},
        ):
            result = await uploader.upload_stream(b"data")

        assert result.url == "http://res.cloudinary.com/demo/b.png"

    @pytest.mark.asyncio
    async def test_no_folder_option_when_unset(self, upload_config):
        upload_config.folder = None

        with patch("cloudinary.uploader.upload", return_value={"url": "http://x/c.png"}) as mock_upload:
            await ImageUploader(upload_config).upload_stream(b"data")

        assert "folder" not in mock_upload.call_args.kwargs

    @pytest.mark.asyncio
    async def test_not_configured(self):
        uploader = ImageUploader(UploadConfig(cloud_name="demo"))

        with patch("cloudinary.uploader.upload") as mock_upload:
            with pytest.raises(UploadError) as exc_info:
                await uploader.upload_stream(b"data")

        assert exc_info.value.code == ErrorCodes.UPLOAD_NOT_CONFIGURED
        assert "CLOUDINARY_API_SECRET" in exc_info.value.context["missing"]
        mock_upload.assert_not_called()

    @pytest.mark.asyncio
    async def test_sdk_error(self, uploader):
        with patch(
            "cloudinary.uploader.upload",
            side_effect=CloudinaryError("Invalid Signature"),
        ):
            with pytest.raises(UploadError) as exc_info:
                await uploader.upload_stream(b"data")

        assert exc_info.value.code == ErrorCodes.UPLOAD_FAILED
        assert "Invalid Signature" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_response_without_url(self, uploader):
        with patch("cloudinary.uploader.upload", return_value={"public_id": "x"}):
            with pytest.raises(UploadError) as exc_info:
                await uploader.upload_stream(b"data")

        assert exc_info.value.code == ErrorCodes.UPLOAD_FAILED
