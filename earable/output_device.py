"""Output devices that drain playback blocks from a stream."""

from __future__ import annotations

import logging
from abc import abstractmethod
from collections.abc import Callable
from dataclasses import dataclass

from .equalizer import Equalizer
from .streams import BufferedInputStream, Consumer

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ClockRatio:
    """Master clock divider (of 32 MHz) and master-to-frame clock ratio."""

    divider: int
    ratio: int


_CLOCKS = {
    16000: ClockRatio(63, 32),
    32000: ClockRatio(31, 32),
    41667: ClockRatio(11, 64),
    44100: ClockRatio(23, 32),
    62500: ClockRatio(16, 32),
}


def clock_for_sample_rate(sample_rate: int) -> ClockRatio:
    """Clock setup for a supported sample rate."""
    try:
        return _CLOCKS[sample_rate]
    except KeyError:
        raise ValueError(f"unsupported sample rate: {sample_rate}") from None


class OutputDevice(Consumer):
    """A consumer that plays blocks at a sample rate."""

    @abstractmethod
    def begin(self) -> bool: ...

    @abstractmethod
    def end(self) -> None: ...

    @abstractmethod
    def start(self) -> None: ...

    @abstractmethod
    def stop(self) -> None: ...

    @abstractmethod
    def available(self) -> bool: ...

    @abstractmethod
    def set_sample_rate(self, sample_rate: int) -> int: ...

    @abstractmethod
    def get_sample_rate(self) -> int: ...

    def set_buffer(self, buffer, block_size: int, block_count: int) -> None:
        """Back the device's stream with caller-owned memory."""
        self.stream.buffer.set_buffer(buffer, block_size, block_count)


class BlockPlayer(OutputDevice):
    """Plays blocks one at a time, handing each finished block to ``sink``.

    ``on_block_done`` is called whenever the transfer of the queued block
    completes; it advances the stream and queues the next block.
    """

    def __init__(self, sink: Callable[[bytes], object] | None = None,
                 use_eq: bool = False) -> None:
        self.sink = sink
        self.use_eq = use_eq
        self.eq = Equalizer()
        self.stream = BufferedInputStream()
        self.clock = ClockRatio(23, 32)
        self._sample_rate = 0
        self._available = False
        self._running = False
        self._queued: memoryview | None = None

    def consume(self) -> bool:
        self.stream.consume(True)
        return self.stream.available()

    def _queue_block(self) -> None:
        self._queued = self.stream.buffer.read_view()
        if self.use_eq:
            self.eq.update(self._queued.cast("h"))

    def begin(self) -> bool:
        if self._available:
            return True
        if not self._sample_rate:
            return False
        # The first buffered block is skipped.
        self.consume()
        self._queue_block()
        self._available = True
        return True

    def end(self) -> None:
        self._running = False
        self._available = False
        self._queued = None
        self.stream.buffer.clear()

    def start(self) -> None:
        if not self._available:
            return
        self._running = True

    def stop(self) -> None:
        if not self._available:
            return
        self._running = False

    def available(self) -> bool:
        return self._available

    def is_running(self) -> bool:
        return self._running

    def set_sample_rate(self, sample_rate: int) -> int:
        """Select the clock; an unsupported rate leaves the device unusable."""
        self._sample_rate = sample_rate
        try:
            self.clock = clock_for_sample_rate(sample_rate)
        except ValueError:
            log.error("unsupported sample rate: %s", sample_rate)
            self._sample_rate = 0
        return sample_rate

    def get_sample_rate(self) -> int:
        return self._sample_rate

    def reset_buffer(self) -> None:
        self.stream.buffer.reset()
        self.eq.reset()

    def on_block_done(self) -> None:
        """Deliver the queued block and move on to the next one."""
        if self._queued is not None and self.sink is not None:
            self.sink(bytes(self._queued))
        stream_available = self.consume()
        if self.stream.remaining():
            self._queue_block()
        elif not stream_available:
            self.stop()