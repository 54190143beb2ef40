"""
FastAPI 애플리케이션 진입점.

실행:
- 개발: uv run uvicorn src.app.main:app --reload --port 4000
- 프로덕션: uv run uvicorn src.app.main:app --port 4000
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

# Routes
from src.app.routes import articles, pages
from src.app.services.content import build_content_service
from src.app.services.uploads import ImageUploader, UploadConfig
from src.core.logging import configure_logging

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent.parent

# =============================================================================
# Configuration
# =============================================================================


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드."""
    if config_path is None:
        # 프로젝트 루트의 default.yaml
        config_path = PROJECT_ROOT / "default.yaml"

    if not config_path.exists():
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}
        return data


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    애플리케이션 생명주기 관리.

    시작 시: .env + 설정 로드, content service / 업로더 생성
    종료 시: 정리할 리소스 없음
    """
    # Startup
    load_dotenv(PROJECT_ROOT / ".env")
    config = load_config()
    configure_logging(config.get("logging", {}).get("level", "INFO"))

    app.state.config = config
    app.state.content_service = build_content_service(config, PROJECT_ROOT)

    upload_config = UploadConfig.from_env(config.get("uploads", {}))
    if not upload_config.is_configured:
        logger.warning("Cloudinary credentials missing: articles will be saved without images")
    app.state.uploader = ImageUploader(upload_config)

    yield


# =============================================================================
# App Instance
# =============================================================================

app = FastAPI(
    title="Content Gateway",
    description="게시글/카테고리 열람 + 편집자용 작성/수정/삭제",
    version="0.1.0",
    lifespan=lifespan,
)

# Static files (CSS)
static_dir = Path(__file__).parent / "static"
if static_dir.exists():
    app.mount("/static", StaticFiles(directory=static_dir), name="static")


# =============================================================================
# Routes
# =============================================================================

app.include_router(pages.router, tags=["Pages"])
app.include_router(articles.router, tags=["Articles"])


@app.get("/health")
async def health() -> dict[str, str]:
    """헬스 체크."""
    return {"status": "ok"}


# =============================================================================
# CLI Entry Point
# =============================================================================

if __name__ == "__main__":
    import uvicorn

    server_config = load_config().get("server", {})
    uvicorn.run(
        "src.app.main:app",
        host=server_config.get("host", "127.0.0.1"),
        port=int(server_config.get("port", 4000)),
        reload=True,
    )
