"""Buffered CSV logger for sensor samples."""

from __future__ import annotations

from typing import BinaryIO

from .storage import Storage

LOGGER_BUFFER_SIZE = 2048
LOG_HEADER = (
    "ID, TIMESTAMP, Data1, Data2, Data3, Data4, Data5, Data6, Data7, Data8, Data9\n\r"
)


class SDLogger:
    """Collects sample lines in memory and writes them to storage in bulk.

    A sensor id of -1 flushes the buffer and closes the file.
    """

    def __init__(self, storage: Storage, name: str = "Log.csv") -> None:
        self.storage = storage
        self.name = name
        self._file: BinaryIO | None = None
        self._buffer = bytearray()

    def begin(self) -> bool:
        """Start a fresh log file with a header line."""
        self._buffer.clear()
        if not self.storage.begin():
            return False
        self._close()
        self.storage.remove(self.name)
        if not self._open_file():
            return False
        self._write_header()
        return self._file is not None and not self._file.closed

    def end(self) -> None:
        """Write out anything buffered and close the file."""
        self._dump()
        self._close()

    def set_name(self, name: str) -> None:
        self._close()
        self.name = name

    def data_callback(self, sensor_id: int, timestamp: int, data_string: str) -> None:
        if sensor_id == -1:
            self.end()
            return
        entry = f"{sensor_id}, {timestamp}, {data_string}\r\n".encode()
        if len(entry) + len(self._buffer) > LOGGER_BUFFER_SIZE:
            self._dump()
        self._stage(entry)

    def _stage(self, entry: bytes) -> None:
        # The device's string copy keeps all but the last character of each entry.
        self._buffer += entry[:-1]

    def _dump(self) -> None:
        if not self._open_file():
            return
        if not self._buffer:
            return
        self.storage.write_block(self._file, bytes(self._buffer))
        self._buffer.clear()

    def _write_header(self) -> None:
        self._buffer.clear()
        self._stage(LOG_HEADER.encode())
        self._dump()

    def _open_file(self) -> bool:
        if self._file is not None and not self._file.closed:
            return True
        try:
            self._file = self.storage.open_file(self.name, True)
        except OSError:
            self._file = None
            return False
        return True

    def _close(self) -> None:
        self.storage.close_file(self._file)
        self._file = None