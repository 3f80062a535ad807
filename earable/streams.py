"""Block streams that connect producers and consumers through a ring buffer."""

from __future__ import annotations

from abc import ABC, abstractmethod

from .circular_buffer import CircularBlockBuffer


class BufferedStream(ABC):
    """A ring buffer with a direction and an open/closed flag."""

    def __init__(self, buffer: CircularBlockBuffer | None = None) -> None:
        self.buffer = buffer if buffer is not None else CircularBlockBuffer()
        self._available = False

    @abstractmethod
    def provide(self, n: int) -> None:
        """Mark ``n`` blocks as handed over by the provider."""

    @abstractmethod
    def consume(self, blocking: bool = False) -> None:
        """Mark one block as handled by the consumer."""

    @abstractmethod
    def remaining(self) -> int:
        """Blocks left for the consumer."""

    @abstractmethod
    def ready(self) -> int:
        """Blocks the provider may handle now."""

    @abstractmethod
    def contiguous_blocks(self) -> int:
        """Blocks the provider may handle without wrapping."""

    def open(self) -> None:
        self._available = True

    def close(self) -> None:
        self._available = False

    def available(self) -> bool:
        return self._available


class BufferedInputStream(BufferedStream):
    """Provider writes blocks, consumer reads them (playback)."""

    def provide(self, n: int) -> None:
        self.buffer.increment_write(n)

    def consume(self, blocking: bool = False) -> None:
        self.buffer.increment_read(1, blocking)

    def remaining(self) -> int:
        return self.buffer.available_read()

    def ready(self) -> int:
        return self.buffer.available_write()

    def contiguous_blocks(self) -> int:
        return self.buffer.contiguous_write_blocks()


class BufferedOutputStream(BufferedStream):
    """Consumer writes blocks, provider reads them (recording)."""

    def provide(self, n: int) -> None:
        self.buffer.increment_read(n)

    def consume(self, blocking: bool = False) -> None:
        self.buffer.increment_write(1, blocking)

    def remaining(self) -> int:
        return self.buffer.available_write()

    def ready(self) -> int:
        return self.buffer.available_read()

    def contiguous_blocks(self) -> int:
        return self.buffer.contiguous_read_blocks()


class Provider(ABC):
    """Something that moves blocks between a stream and another medium."""

    stream: BufferedStream | None = None

    @abstractmethod
    def provide(self, n: int) -> int:
        """Handle up to ``n`` blocks and return how many were handled."""

    @abstractmethod
    def begin(self) -> bool:
        """Prepare for transfer; return whether it is possible."""

    @abstractmethod
    def available(self) -> bool:
        """Whether the provider is ready."""

    @abstractmethod
    def end(self) -> None:
        """Stop the transfer."""

    @abstractmethod
    def set_stream(self, stream: BufferedStream | None) -> None:
        """Attach the stream to work on."""


class Consumer(ABC):
    """A device that drains (or fills) a stream one block at a time."""

    stream: BufferedStream | None = None

    @abstractmethod
    def consume(self) -> bool:
        """Handle one block; return whether the stream is still available."""