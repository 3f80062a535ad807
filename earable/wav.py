"""WAV header structures and a PCM recorder writing to storage."""

from __future__ import annotations

import struct
from dataclasses import astuple, dataclass
from typing import BinaryIO, ClassVar

from .storage import Storage, StorageError

_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")
# In-memory layout of the device's header record: an extra 16-bit field
# after bits-per-sample and two bytes of alignment before the data size.
_INFO = struct.Struct("<4sI4s4sIHHIIHHH4s2xI")


@dataclass
class WaveInfo:
    """Header record as read from the start of a WAV file by the player."""

    chunk_id: bytes = b"RIFF"
    chunk_size: int = 36
    format_id: bytes = b"WAVE"
    subchunk1_id: bytes = b"fmt "
    subchunk1_size: int = 16
    audio_format: int = 1
    num_channels: int = 1
    sample_rate: int = 0
    byte_rate: int = 0
    block_align: int = 0
    bits_per_sample: int = 16
    extra_param_size: int = 0
    subchunk2_id: bytes = b"data"
    subchunk2_size: int = 0

    SIZE: ClassVar[int] = _INFO.size

    def pack(self) -> bytes:
        return _INFO.pack(*astuple(self))

    @classmethod
    def unpack(cls, data: bytes) -> "WaveInfo":
        if len(data) < cls.SIZE:
            raise ValueError(f"need {cls.SIZE} bytes, got {len(data)}")
        return cls(*_INFO.unpack_from(data))


class WavWriter:
    """Writes a 16-bit PCM WAV file in chunks and patches the sizes at the end."""

    HEADER_SIZE = _HEADER.size

    def __init__(self, storage: Storage, name: str = "Recording.wav") -> None:
        self.storage = storage
        self.name = name
        self._file: BinaryIO | None = None
        self.audio_format = 1
        self.subchunk1_size = 16
        self.bits_per_sample = 16
        self.channels = 1
        self.sample_rate = 16000
        self.byte_rate = self.channels * self.sample_rate * self.bits_per_sample // 8
        self.block_align = self.channels * self.bits_per_sample // 8
        self.subchunk2_size = 0
        self.chunk_size = 36

    def begin(self) -> bool:
        return self.storage.begin()

    def end(self) -> None:
        self.storage.close_file(self._file)
        self._file = None

    def clean_file(self) -> None:
        self.storage.remove(self.name)

    def set_name(self, name: str) -> None:
        self.end()
        self.name = name

    def set_sample_rate(self, sample_rate: int) -> None:
        self.sample_rate = sample_rate
        self.byte_rate = self.channels * self.sample_rate * self.bits_per_sample // 8

    def set_channels(self, channels: int) -> None:
        self.channels = channels
        self.byte_rate = self.channels * self.sample_rate * self.bits_per_sample // 8
        self.block_align = self.channels * self.bits_per_sample // 8

    def _header(self) -> bytes:
        return _HEADER.pack(
            b"RIFF", 36, b"WAVE", b"fmt ", self.subchunk1_size, self.audio_format,
            self.channels, self.sample_rate, self.byte_rate, self.block_align,
            self.bits_per_sample, b"data", 0,
        )

    def write_header(self) -> bool:
        """Write a header with empty sizes at the start of the file."""
        try:
            file = self.storage.open_file(self.name)
        except OSError:
            return False
        file.seek(0)
        self.storage.write_block(file, self._header())
        self.storage.close_file(file)
        return True

    def start_recording(self) -> bool:
        """Open the file for appending sample data."""
        try:
            self._file = self.storage.open_file(self.name)
        except OSError:
            return False
        self.subchunk2_size = 0
        self.chunk_size = 36
        return True

    def write_chunk(self, block: bytes) -> bool:
        if self._file is None:
            raise StorageError("recording has not been started")
        written = self.storage.write_block(self._file, block)
        self.subchunk2_size = (self.subchunk2_size + written) & 0xFFFFFFFF
        return bool(written)

    def _write_header_sizes(self) -> None:
        self.storage.write_block_at(self._file, 40, struct.pack("<I", self.subchunk2_size))
        self.chunk_size = (36 + self.subchunk2_size) & 0xFFFFFFFF
        self.storage.write_block_at(self._file, 4, struct.pack("<I", self.chunk_size))

    def end_recording(self) -> bool:
        """Patch the header sizes and close the file."""
        if self._file is None:
            return False
        self._write_header_sizes()
        self.end()
        return True