#!/usr/bin/env python
"""
이미지 업로드 연결 테스트 스크립트.

.env의 Cloudinary 인증 정보로 1x1 PNG를 실제 업로드해 본다.

실행:
    uv run python scripts/check_upload_connection.py
"""

import asyncio
import base64
import sys
from pathlib import Path

# 프로젝트 루트를 path에 추가
sys.path.insert(0, str(Path(__file__).parent.parent))

# .env 파일 로드
from dotenv import load_dotenv
load_dotenv()

from src.app.main import load_config  # noqa: E402
from src.app.services.uploads import ImageUploader, UploadConfig  # noqa: E402
from src.domain.errors import UploadError  # noqa: E402

# 1x1 흰색 PNG
PIXEL_PNG = base64.b64decode(
    "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mP8/x8AAwMCAO+ip1sAAAAASUVORK5CYII="
)


async def main() -> int:
    print("🚀 이미지 업로드 연결 테스트")
    print("=" * 60)

    config = UploadConfig.from_env(load_config().get("uploads", {}))
    if not config.is_configured:
        print("❌ CLOUDINARY_CLOUD_NAME / CLOUDINARY_API_KEY / CLOUDINARY_API_SECRET 중 누락된 값이 있습니다.")
        print("   .env 파일을 확인하세요.")
        return 1

    print(f"✅ cloud_name: {config.cloud_name}")
    print("📤 테스트 이미지 업로드 중...")

    try:
        result = await ImageUploader(config).upload_stream(
            PIXEL_PNG, filename="connection-check.png", content_type="image/png"
        )
    except UploadError as e:
        print(f"❌ 업로드 실패: {e}")
        return 1

    print(f"📥 URL: {result.url}")
    print("🎉 업로드 연결 성공!")
    return 0


if __name__ == "__main__":
    exit_code = asyncio.run(main())
    sys.exit(exit_code)
