"""Cooperative scheduler sharing loop time between sensors and audio buffers."""

from __future__ import annotations

from collections.abc import Callable

from .audio_player import AUDIO_BLOCK_COUNT
from .streams import Provider

_MASK = 0xFFFFFFFF

MIN_BLOCKS = 2
MAX_BLOCKS = 4
DEFAULT_LOOP_RATE = 20.0
OVERLAP_MS = 2

_MEAN_PDM = 11.6
_STD_PDM = 4.41
_MEAN_I2S = 5.7
_STD_I2S = 1.7


def _noop() -> None:
    pass


class DeadlineTask:
    """A task that runs at most once."""

    def __init__(self, deadline: int, task: Callable[[], object]) -> None:
        self.deadline = deadline
        self._task = task

    def call(self) -> None:
        self._task()
        self._task = _noop


class TaskManager:
    """Runs sensor updates at a fixed rate and fills audio buffers in between.

    ``player`` exposes ``available()`` and a ``source`` provider; ``recorder``
    exposes ``available()`` and a ``target`` provider. Either may be None.
    """

    def __init__(self, clock: Callable[[], int], edge_update: Callable[[], object],
                 poll: Callable[[], object] | None = None,
                 player=None, recorder=None) -> None:
        self.clock = clock
        self.edge_update = edge_update
        self.poll = poll
        self.player = player
        self.recorder = recorder
        self.edge_delay = 0
        self._edge_last = 0
        self.buffer_interval = 0
        self._buffer_flag = False

    def _player_source(self) -> Provider | None:
        return getattr(self.player, "source", None) if self.player is not None else None

    def _recorder_target(self) -> Provider | None:
        return getattr(self.recorder, "target", None) if self.recorder is not None else None

    def _player_active(self) -> bool:
        return self.player is not None and self.player.available()

    def _recorder_active(self) -> bool:
        return self.recorder is not None and self.recorder.available()

    def _recorder_idle_blocks(self) -> int:
        target = self._recorder_target()
        if target is not None and target.stream is not None:
            return target.stream.buffer.block_count
        return AUDIO_BLOCK_COUNT

    def begin(self, edge_rate: float = 0) -> None:
        """Set the sensor update rate in Hz; non-positive selects the default."""
        if edge_rate <= 0:
            edge_rate = DEFAULT_LOOP_RATE
        self.edge_delay = int(1000.0 / edge_rate)
        self._edge_last = self.clock() & _MASK
        self.buffer_interval = self.edge_delay - OVERLAP_MS

    def update(self) -> None:
        """One loop pass: sensor update if due, then at most one round of buffering."""
        self.update_edge_ml()
        if self._buffer_flag:
            return
        self._buffer_flag = True

        handled = 0
        while not self.check_overlap(None):
            recorder_ready = self._recorder_target().stream.ready() if self._recorder_active() else 0
            player_ready = self._player_source().stream.ready() if self._player_active() else 0
            if max(recorder_ready, player_ready) < MIN_BLOCKS:
                break

            recorder_left = (self._recorder_target().stream.remaining()
                             if self._recorder_active() else self._recorder_idle_blocks())
            player_left = (self._player_source().stream.remaining()
                           if self._player_active() else AUDIO_BLOCK_COUNT)
            diff = recorder_left - player_left
            blocks = min(abs(diff) + MIN_BLOCKS // 2, MAX_BLOCKS - handled)

            if self._player_active() and diff > 0:
                provider = self._player_source()
            elif self._recorder_active():
                provider = self._recorder_target()
            else:
                break

            count = self.run_provider(provider, min(blocks, provider.stream.ready()))
            handled += count
            # Nothing moved: waiting out the time window would not change that.
            if not count or handled >= MAX_BLOCKS:
                break

    def update_edge_ml(self) -> None:
        now = self.clock() & _MASK
        if ((now - self._edge_last) & _MASK) >= self.edge_delay:
            self._edge_last = now
            self._buffer_flag = False
            self.edge_update()
        if self.poll is not None:
            self.poll()

    def run_provider(self, provider: Provider, max_buffers: int) -> int:
        """Let ``provider`` handle up to ``max_buffers`` blocks, in two tries if time allows."""
        if max_buffers <= 0 or provider.stream.ready() == 0:
            return 0
        count = provider.provide(max_buffers)
        if not count or count == max_buffers or self.check_overlap(provider):
            return count
        return count + provider.provide(max_buffers - count)

    def check_overlap(self, provider: Provider | None) -> bool:
        """Whether handling ``provider`` now would run into the next sensor update."""
        estimate = 0.0
        if provider is self._player_source():
            estimate = _MEAN_I2S + 2 * _STD_I2S
        elif provider is self._recorder_target():
            estimate = _MEAN_PDM + 2 * _STD_PDM
        elapsed = (self.clock() - self._edge_last) & _MASK
        return elapsed + estimate > self.buffer_interval