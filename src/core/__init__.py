"""
Core layer: 로컬 저장소와 로깅.

역할:
- JSON 컬렉션 원자적 쓰기, 파일 락
- 로깅 설정
"""

from .json_store import JsonStore, read_json_list, write_records
from .logging import configure_logging

__all__ = [
    # json_store
    "JsonStore",
    "read_json_list",
    "write_records",
    # logging
    "configure_logging",
]
