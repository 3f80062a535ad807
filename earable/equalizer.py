"""Three-section IIR equalizer applied to 16-bit PCM blocks."""

from __future__ import annotations

from collections.abc import MutableSequence

EQ_ORDER = 3

_A = (
    (1.0, -1.88005337532644, 0.886850855731273),
    (1.0, 0.383474723870624, 0.240950274098301),
    (1.0, 0.320433065251179, 0.0),
)
_B = (
    (1.13762426437059, -1.84946471350470, 0.779815253182425),
    (0.668254486486803, 0.383474723870624, 0.572695787611498),
    (0.720639527015944, 0.599793538235235, 0.0),
)
_GAIN = 0.095
_INT16_MIN = -(1 << 15)
_INT16_MAX = (1 << 15) - 1


class Equalizer:
    """Cascade of second-order sections in transposed direct form II."""

    def __init__(self) -> None:
        self._state = [[0.0, 0.0] for _ in range(EQ_ORDER)]

    def reset(self) -> None:
        """Forget the filter history."""
        for state in self._state:
            state[:] = (0.0, 0.0)

    def update(self, samples: MutableSequence[int]) -> MutableSequence[int]:
        """Filter ``samples`` in place and return them."""
        for n, sample in enumerate(samples):
            y = float(sample)
            for (b0, b1, b2), (_, a1, a2), state in zip(_B, _A, self._state):
                out = b0 * y + state[0]
                state[0] = b1 * y - a1 * out + state[1]
                state[1] = b2 * y - a2 * out
                y = out
            samples[n] = int(min(max(_GAIN * y, _INT16_MIN), _INT16_MAX))
        return samples