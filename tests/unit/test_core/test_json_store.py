"""
test_json_store.py - JSON 저장소 테스트

검증 포인트:
1. 원자적 쓰기: temp 파일 남지 않음, 실패 시 기존 파일 유지
2. 읽기: 없음 = 빈 목록, 손상 = STORE_CORRUPT
3. 락 timeout → STORE_LOCK_TIMEOUT
"""

import json
from pathlib import Path

import pytest
from filelock import FileLock

from src.core.json_store import JsonStore, read_json_list, write_records
from src.domain.errors import ContentError, ErrorCodes


class TestWriteRecords:
    def test_writes_and_leaves_no_temp(self, tmp_path: Path):
        path = tmp_path / "nested" / "articles.json"

        write_records(path, [{"id": 1, "title": "한글 제목"}])

        assert json.loads(path.read_text(encoding="utf-8")) == [{"id": 1, "title": "한글 제목"}]
        assert "한글 제목" in path.read_text(encoding="utf-8")
        assert list(path.parent.glob("*.tmp")) == []

    def test_failure_keeps_original(self, tmp_path: Path):
        path = tmp_path / "articles.json"
        write_records(path, [{"id": 1}])

        with pytest.raises(TypeError):
            write_records(path, [{"id": object()}])

        assert json.loads(path.read_text(encoding="utf-8")) == [{"id": 1}]
        assert list(tmp_path.glob("*.tmp")) == []


class TestReadJsonList:
    def test_missing_file(self, tmp_path: Path):
        assert read_json_list(tmp_path / "nope.json") == []

    def test_corrupt_file(self, tmp_path: Path):
        path = tmp_path / "bad.json"
        path.write_text("[{", encoding="utf-8")

        with pytest.raises(ContentError) as exc_info:
            read_json_list(path)

        assert exc_info.value.code == ErrorCodes.STORE_CORRUPT


class TestJsonStore:
    def test_write_then_read(self, tmp_path: Path):
        store = JsonStore(tmp_path)

        with store.locked():
            store.write("categories.json", [{"id": 1, "name": "Cat1"}])

        assert store.read("categories.json") == [{"id": 1, "name": "Cat1"}]

    def test_lock_timeout(self, tmp_path: Path):
        store = JsonStore(tmp_path, lock_timeout=0.05)
        holder = FileLock(tmp_path / ".content.lock")
        holder.acquire()
        try:
            with pytest.raises(ContentError) as exc_info:
                with store.locked():
                    pass
        finally:
            holder.release()

        assert exc_info.value.code == ErrorCodes.STORE_LOCK_TIMEOUT
