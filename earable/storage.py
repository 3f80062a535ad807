"""File storage rooted at a directory, standing in for the SD card."""

from __future__ import annotations

import os
from pathlib import Path
from typing import BinaryIO


class StorageError(OSError):
    """Raised when the storage medium cannot be used."""


class Storage:
    """Opens, reads and writes files below a root directory."""

    def __init__(self, root: str | os.PathLike) -> None:
        self.root = Path(root)
        self._available = False
        self._last_file: BinaryIO | None = None

    @property
    def available(self) -> bool:
        return self._available

    def begin(self) -> bool:
        """Mount the medium; succeeds when the root directory exists."""
        if self._available:
            return True
        self._available = self.root.is_dir()
        return self._available

    def end(self) -> None:
        if not self._available:
            return
        if self._last_file is not None:
            self.close_file(self._last_file)
        self._available = False

    def _path(self, name: str) -> Path:
        return self.root / str(name).lstrip("/")

    def open_file(self, name: str, write: bool = True) -> BinaryIO:
        """Open a file; for writing it is created if needed and positioned at its end."""
        if not self._available and not self.begin():
            raise StorageError(f"storage at {self.root} is not available")
        path = self._path(name)
        if not write:
            return open(path, "rb")
        file = open(path, "r+b" if path.exists() else "w+b")
        file.seek(0, os.SEEK_END)
        return file

    def close_file(self, file: BinaryIO | None) -> None:
        if file is None or file.closed:
            return
        file.close()
        self._last_file = None

    def exists(self, name: str) -> bool:
        return self.begin() and self._path(name).exists()

    def mkdir(self, name: str) -> None:
        self._path(name).mkdir(parents=True, exist_ok=True)

    def remove(self, name: str) -> None:
        self._path(name).unlink(missing_ok=True)

    def write_block_at(self, file: BinaryIO, offset: int, block: bytes) -> int:
        self._last_file = file
        file.seek(offset)
        return self.write_block(file, block)

    def write_block(self, file: BinaryIO, block: bytes) -> int:
        self._last_file = file
        written = file.write(block)
        file.flush()
        return written

    def read_block_at(self, file: BinaryIO, offset: int, size: int) -> bytes:
        self._last_file = file
        file.seek(offset)
        return file.read(size)

    def read_block(self, file: BinaryIO, size: int) -> bytes:
        self._last_file = file
        return file.read(size)