"""
Logging setup.

모듈마다 logging.getLogger(__name__)을 쓰고, 핸들러/포맷은 시작 시 한 번만 설정.
default.yaml:
    logging:
      level: INFO
"""

import logging
DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str | int = "INFO", fmt: str = DEFAULT_LOG_FORMAT) -> None:
    """
    루트 로거 설정.

    Args:
        level: 로그 레벨 이름 또는 숫자 (잘못된 이름이면 INFO)
        fmt: 로그 포맷
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            resolved = logging.INFO
    else:
        resolved = level

    logging.basicConfig(level=resolved, format=fmt, force=True)
