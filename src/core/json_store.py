"""
로컬 JSON 저장소: articles.json / categories.json

규칙:
- 원자적 쓰기: 직렬화 → temp → os.replace + fsync
- read-modify-write는 FileLock으로 직렬화 (프로세스 간 포함)
- 파일 없음 = 빈 목록 (첫 쓰기에서 생성)
- 파싱 실패 = STORE_CORRUPT (조용히 빈 목록으로 대체하지 않음)
"""

import json
import logging
import os
import tempfile
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from filelock import FileLock, Timeout

from src.domain.constants import STORE_LOCK_FILENAME
from src.domain.errors import ContentError, ErrorCodes

logger = logging.getLogger(__name__)

# 락 timeout (초)
DEFAULT_LOCK_TIMEOUT = 10.0


# =============================================================================
# Records I/O
# =============================================================================


def write_records(path: Path, records: list[dict[str, Any]]) -> None:
    """
    레코드 목록을 원자적으로 저장.

    직렬화를 먼저 끝낸 뒤 같은 디렉터리의 temp 파일에 쓰고 os.replace.
    직렬화 실패면 디스크는 건드리지 않는다.

    Raises:
        TypeError: JSON으로 직렬화할 수 없는 값
        OSError: 쓰기/교체 실패 (temp 파일은 정리)
    """
    payload = json.dumps(records, indent=2, ensure_ascii=False) + "\n"

    path.parent.mkdir(parents=True, exist_ok=True)
    fd, temp_name = tempfile.mkstemp(dir=path.parent, prefix=f"{path.stem}-", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_name, path)
    except OSError:
        Path(temp_name).unlink(missing_ok=True)
        raise

    # rename 자체를 디스크에 남기기 (POSIX만)
    if hasattr(os, "O_DIRECTORY"):
        dir_fd = os.open(path.parent, os.O_RDONLY | os.O_DIRECTORY)
        try:
            os.fsync(dir_fd)
        except OSError as e:
            logger.warning(f"Directory fsync failed for {path.parent}: {e}")
        finally:
            os.close(dir_fd)


def read_json_list(path: Path) -> list[dict[str, Any]]:
    """
    JSON 배열 파일 읽기.

    Returns:
        레코드 목록 (파일이 없으면 빈 목록)

    Raises:
        ContentError: STORE_CORRUPT
    """
    if not path.exists():
        return []

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, OSError) as e:
        raise ContentError(
            ErrorCodes.STORE_CORRUPT,
            f"Failed to read {path.name}: {e}",
            path=str(path),
        ) from e

    if not isinstance(data, list):
        raise ContentError(
            ErrorCodes.STORE_CORRUPT,
            f"{path.name} must contain a JSON array",
            path=str(path),
        )
    return data


# =============================================================================
# Store
# =============================================================================


class JsonStore:
    """
    디렉터리 하나에 묶인 JSON 컬렉션 저장소.

    구조:
    data/
    ├── articles.json
    ├── categories.json
    └── .content.lock
    """

    def __init__(self, data_dir: Path, lock_timeout: float = DEFAULT_LOCK_TIMEOUT):
        self.data_dir = data_dir
        self.lock_timeout = lock_timeout
        self._lock_path = data_dir / STORE_LOCK_FILENAME

    def path_for(self, filename: str) -> Path:
        return self.data_dir / filename

    @contextmanager
    def locked(self) -> Generator[None, None, None]:
        """
        저장소 전체 락.

        Raises:
            ContentError: STORE_LOCK_TIMEOUT
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        lock = FileLock(self._lock_path, timeout=self.lock_timeout)

        try:
            lock.acquire()
        except Timeout as e:
            raise ContentError(
                ErrorCodes.STORE_LOCK_TIMEOUT,
                "Failed to acquire content store lock",
                timeout=self.lock_timeout,
            ) from e

        try:
            yield
        finally:
            lock.release()

    def read(self, filename: str) -> list[dict[str, Any]]:
        return read_json_list(self.path_for(filename))

    def write(self, filename: str, records: list[dict[str, Any]]) -> None:
        """
        컬렉션 전체 쓰기. 호출 측이 locked() 안에서 호출해야 한다.

        Raises:
            ContentError: STORE_WRITE_FAILED
        """
        path = self.path_for(filename)
        try:
            write_records(path, records)
        except OSError as e:
            raise ContentError(
                ErrorCodes.STORE_WRITE_FAILED,
                f"Failed to write {filename}: {e}",
                path=str(path),
            ) from e
