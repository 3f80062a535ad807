"""Audio source streaming a WAV file from storage into playback blocks."""

from __future__ import annotations

import os
from typing import BinaryIO

from .audio_source import AudioSource, WavConfigurationPacket
from .storage import Storage
from .streams import BufferedStream
from .wav import WaveInfo

_PRELOAD_BLOCKS = 6


class WavPlayer(AudioSource):
    """Reads the header record of a WAV file, then its data block by block."""

    def __init__(self, storage: Storage, name: str) -> None:
        self.storage = storage
        self.name = name
        self.stream: BufferedStream | None = None
        self.info = WaveInfo()
        self._file: BinaryIO | None = None
        self._available = False
        self._opened = False
        self._cur_read = 0

    def begin(self) -> bool:
        if self.stream is None:
            return False
        if self._available:
            return True
        self._available = self._sd_setup()
        if not self._available:
            return False
        header = self.storage.read_block(self._file, WaveInfo.SIZE)
        if len(header) == WaveInfo.SIZE:
            self.info = WaveInfo.unpack(header)
        self._cur_read = WaveInfo.SIZE
        self.provide(_PRELOAD_BLOCKS)
        self.stream.open()
        self._available = self.stream.available()
        return self._available

    def end(self) -> None:
        self.storage.close_file(self._file)
        self._file = None
        self._opened = False
        self._available = False
        if self.stream is not None:
            self.stream.close()

    def available(self) -> bool:
        return self._available

    def set_stream(self, stream: BufferedStream | None) -> None:
        if self._available:
            self.end()
        self.stream = stream

    def provide(self, n: int) -> int:
        """Read up to ``n`` blocks; closes the stream at the end of the file."""
        if not self._available:
            return 0
        cont = min(self.stream.contiguous_blocks(), n)
        if not cont:
            self.stream.close()
            return 0
        if self._read_blocks(cont) < cont:
            self.stream.close()
        return cont

    def get_sample_rate(self) -> int:
        if not self._available:
            raise RuntimeError("player has not been started")
        return self.info.sample_rate

    def get_size(self) -> int:
        """Size of the file in bytes, 0 if it cannot be opened."""
        if not self._open_file():
            return 0
        return os.fstat(self._file.fileno()).st_size

    def get_config(self) -> WavConfigurationPacket:
        name = self.name.encode()
        return WavConfigurationPacket(state=0, size=len(name), name=name)

    def _sd_setup(self) -> bool:
        if not self.storage.begin():
            return False
        return self._open_file()

    def _open_file(self) -> bool:
        if self._opened:
            return True
        self.storage.close_file(self._file)
        try:
            self._file = self.storage.open_file(self.name, False)
        except OSError:
            self._file = None
            self._opened = False
            return False
        self._opened = True
        return True

    def _read_blocks(self, count: int) -> int:
        buffer = self.stream.buffer
        block_size = buffer.block_size
        data = self.storage.read_block(self._file, block_size * count)
        self._cur_read += len(data)
        for index, start in enumerate(range(0, len(data), block_size)):
            piece = data[start:start + block_size]
            buffer.write_view(index)[: len(piece)] = piece
        blocks_read = len(data) // block_size
        if data:
            self.stream.provide(blocks_read)
        return blocks_read