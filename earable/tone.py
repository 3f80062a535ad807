"""Tone generator filling playback blocks with a periodic waveform."""

from __future__ import annotations

import math
from array import array
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from enum import IntEnum

from .audio_source import AudioSource, WavConfigurationPacket
from .streams import BufferedStream

SAMPLE_RATE = 1e6 / 23  # fixed by the output clock setup
MAX_INT16 = (1 << 15) - 1
FREQUENCY_LOW = 300.0
FREQUENCY_HIGH = 22000.0


class Waveform(IntEnum):
    SINE = 0
    SQUARE = 1
    TRIANGLE = 2
    SAW = 3


@dataclass
class Tone:
    frequency: float
    amplitude: float


def triangle(f: float) -> float:
    """Triangle wave over one period ``[0, 2*pi)``."""
    return 1 - abs(abs(2 * f / math.pi - 3) - 2)


def square(f: float) -> float:
    """Square wave over one period ``[0, 2*pi)``."""
    return 1.0 if f <= math.pi else -1.0


def saw(f: float) -> float:
    """Sawtooth wave over one period ``[0, 2*pi)``."""
    return f / math.pi - (2 if f > math.pi else 0)


_WAVES: dict[Waveform, Callable[[float], float]] = {
    Waveform.SINE: math.sin,
    Waveform.SQUARE: square,
    Waveform.TRIANGLE: triangle,
    Waveform.SAW: saw,
}


class ToneGenerator(AudioSource):
    """Writes one block of tone samples per provided block.

    With a ``modulation`` callable the tone is replaced by its result every
    ``call_every`` samples.
    """

    def __init__(self, frequency: float = 440.0, amplitude: float = 0.5,
                 waveform: int = Waveform.SINE,
                 modulation: Callable[[], Tone] | None = None,
                 call_every: int = 16) -> None:
        self.stream: BufferedStream | None = None
        self.tone = Tone(0.0, 0.0)
        self.set_frequency(frequency)
        self.set_amplitude(amplitude)
        self.set_waveform(waveform)
        self._modulation = modulation
        self.call_every = call_every
        self._available = False
        self._block_size = 0
        self._delta = 0.0
        self._t = 0.0
        self._t_call = 0

    def set_frequency(self, frequency: float) -> None:
        self.tone.frequency = min(max(float(frequency), FREQUENCY_LOW), FREQUENCY_HIGH)

    def set_amplitude(self, amplitude: float) -> None:
        self.tone.amplitude = min(max(float(amplitude), 0.0), 1.0)

    def set_waveform(self, waveform: int) -> None:
        """Select the waveform; unknown values fall back to a sine."""
        try:
            self.waveform = Waveform(waveform)
        except ValueError:
            self.waveform = Waveform.SINE
        self._wave = _WAVES[self.waveform]

    def provide(self, n: int) -> int:
        for _ in range(n):
            self._update()
        return n

    def available(self) -> bool:
        return self._available

    def begin(self) -> bool:
        if self.stream is None:
            return False
        self.stream.buffer.clear()
        self.stream.open()
        self._block_size = self.stream.buffer.block_size
        self._delta = 2 * math.pi / SAMPLE_RATE
        self._t = 0.0
        self._t_call = 0
        self._available = True
        return True

    def end(self) -> None:
        self._available = False
        if self.stream is not None:
            self.stream.close()

    def set_stream(self, stream: BufferedStream | None) -> None:
        if self._available:
            self.end()
        self.stream = stream

    def get_max_frequency(self) -> int:
        return int(FREQUENCY_HIGH)

    def get_min_frequency(self) -> int:
        return int(FREQUENCY_LOW)

    def get_config(self) -> WavConfigurationPacket:
        name = f"{self.tone.frequency:.2f}Hz".encode()
        return WavConfigurationPacket(state=0, size=len(name), name=name)

    def _samples(self, count: int) -> Iterator[int]:
        for _ in range(count):
            yield int(MAX_INT16 * (self.tone.amplitude * self._wave(self._delta * self._t)))
            self._t += self.tone.frequency
            if self._t >= SAMPLE_RATE:
                self._t -= SAMPLE_RATE
            if self._modulation is not None:
                self._t_call += 1
                if self._t_call >= self.call_every:
                    self.tone = self._modulation()
                    self._t_call -= self.call_every

    def _update(self) -> None:
        if not self._available:
            return
        block = self.stream.buffer.write_view().cast("h")
        block[:] = array("h", self._samples(len(block)))
        self.stream.provide(1)