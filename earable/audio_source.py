"""Playback configuration packet and the audio source interface."""

from __future__ import annotations

import struct
from abc import abstractmethod
from dataclasses import dataclass

from .streams import Provider

MAX_WAV_NAME_LENGTH = 64
_PACKET = struct.Struct(f"<BBB{MAX_WAV_NAME_LENGTH}s")


@dataclass
class WavConfigurationPacket:
    """Playback request: mode (idle, wav, tone, jingle), state (idle, start,
    pause, stop), the used length of ``name`` and the name field itself."""

    mode: int = 0
    state: int = 0
    size: int = 0
    name: bytes = b""

    SIZE = _PACKET.size

    def __post_init__(self) -> None:
        for field in ("mode", "state", "size"):
            value = getattr(self, field)
            if not 0 <= value <= 0xFF:
                raise ValueError(f"{field} must fit in one byte, got {value}")
        self.name = bytes(self.name)
        if len(self.name) > MAX_WAV_NAME_LENGTH:
            raise ValueError(f"name is longer than {MAX_WAV_NAME_LENGTH} bytes")

    def pack(self) -> bytes:
        return _PACKET.pack(self.mode, self.state, self.size, self.name)

    @classmethod
    def unpack(cls, data: bytes) -> "WavConfigurationPacket":
        if len(data) < _PACKET.size:
            raise ValueError(f"need {_PACKET.size} bytes, got {len(data)}")
        mode, state, size, name = _PACKET.unpack_from(data)
        return cls(mode, state, size, name.rstrip(b"\0"))

    def name_text(self) -> str:
        """The first ``size`` bytes of the name as text."""
        return self.name[: self.size].decode("utf-8", errors="replace")


class AudioSource(Provider):
    """A provider of playback blocks that can describe itself."""

    @abstractmethod
    def get_config(self) -> WavConfigurationPacket:
        """The packet describing what this source plays."""