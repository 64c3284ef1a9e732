import io
from pathlib import Path
from typing import Callable

import pytest


class FailingReader(io.RawIOBase):
    """Yields `data`, then raises OSError on the next read."""

    def __init__(self, data: bytes):
        self._data = data
        self._pos = 0

    def readable(self) -> bool:
        return True

    def read(self, size: int = -1) -> bytes:
        if self._pos >= len(self._data):
            raise OSError("device unplugged")
        chunk = self._data[self._pos : self._pos + 1]
        self._pos += 1
        return chunk


class FailingWriter(io.BytesIO):
    """Accepts `fail_after` writes, then raises OSError on every write."""

    def __init__(self, fail_after: int):
        super().__init__()
        self._remaining = fail_after

    def write(self, b) -> int:
        if self._remaining <= 0:
            raise OSError("No space left on device")
        self._remaining -= 1
        return super().write(b)


class ShortWriter(io.BytesIO):
    def write(self, b) -> int:
        super().write(bytes(b)[:1])
        return 1


class FailingFlushWriter(io.BytesIO):
    def flush(self) -> None:
        raise OSError("flush failed")


@pytest.fixture
def write_input(tmp_path: Path) -> Callable[[bytes], Path]:
    def write(data: bytes, name: str = "input.txt") -> Path:
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return write
