"""Playback state controller joining an audio source and an output device."""

from __future__ import annotations

import struct
from collections.abc import Callable

from .audio_source import AudioSource, WavConfigurationPacket
from .output_device import OutputDevice
from .tone import ToneGenerator

AUDIO_BLOCK_SIZE = 4096
AUDIO_BLOCK_COUNT = 8

_MODE_IDLE, _MODE_WAV, _MODE_TONE, _MODE_JINGLE = range(4)
_STATE_START, _STATE_PAUSE, _STATE_STOP = 1, 2, 3
_TONE = struct.Struct("<ff")


class AudioPlayer:
    """Starts, pauses and stops playback of a source on a device.

    ``wav_factory`` builds the source for a file name received in a
    configuration packet.
    """

    def __init__(self, wav_factory: Callable[[str], AudioSource] | None = None) -> None:
        self.wav_factory = wav_factory
        self.source: AudioSource | None = None
        self.device: OutputDevice | None = None
        self._running = False
        self._available = False
        self._sample_rate = 44100
        self._audio_buffer = bytearray(AUDIO_BLOCK_SIZE * AUDIO_BLOCK_COUNT)

    def available(self) -> bool:
        return self._available

    def begin(self) -> bool:
        if self._available:
            return True
        if self.source is None or self.device is None:
            return False
        self.device.set_buffer(self._audio_buffer, AUDIO_BLOCK_SIZE, AUDIO_BLOCK_COUNT)
        self.source.begin()
        if not self.source.available():
            return False
        self._sample_rate = self.device.set_sample_rate(self._sample_rate)
        self.device.begin()
        self._available = self.device.available()
        if not self._available:
            self.source.end()
        return self._available

    def end(self) -> None:
        if not self._available:
            return
        self.stop()
        self.device.end()
        self._available = False

    def play(self) -> None:
        if self.source is None or self._running:
            return
        if not self._available:
            self.begin()
        if not self.source.available():
            self.source.begin()
            if not self.source.available():
                return
        self._running = True
        self.device.start()

    def pause(self) -> None:
        if not self._available or not self._running:
            return
        self._running = False
        self.device.stop()

    def stop(self) -> None:
        if not self._available:
            return
        if self._running:
            self.device.stop()
        self._running = False
        self.device.end()
        self.source.end()

    def set_source(self, source: AudioSource | None) -> None:
        self.source = source
        if source is None or self.device is None:
            return
        self.device.set_sample_rate(self._sample_rate)
        source.set_stream(self.device.stream)

    def set_device(self, device: OutputDevice | None) -> None:
        self.device = device
        if device is None:
            return
        self._sample_rate = device.set_sample_rate(self._sample_rate)
        if self.source is not None:
            self.source.set_stream(device.stream)

    def ble_configuration(self, configuration: WavConfigurationPacket) -> None:
        """Apply a playback request received from a client."""
        state = configuration.state
        if state == _STATE_START:
            if configuration.size:
                self.end()
                mode = configuration.mode
                if mode == _MODE_IDLE:
                    self.set_source(None)
                    return
                if mode in (_MODE_WAV, _MODE_TONE, _MODE_JINGLE):
                    self.set_source(self._source_for(configuration))
            self.play()
        elif state == _STATE_PAUSE:
            self.pause()
        elif state == _STATE_STOP:
            self.stop()

    def _source_for(self, configuration: WavConfigurationPacket) -> AudioSource:
        if configuration.mode == _MODE_WAV:
            if self.wav_factory is None:
                raise ValueError("no file source is configured")
            return self.wav_factory(configuration.name_text())
        if configuration.mode == _MODE_TONE:
            frequency, amplitude = _TONE.unpack(configuration.name.ljust(_TONE.size, b"\0")[:_TONE.size])
            return ToneGenerator(frequency, amplitude, configuration.size - 1)
        raise ValueError("jingle playback is not available")

    def make_wav_config(self) -> WavConfigurationPacket:
        return self.source.get_config() if self.source is not None else WavConfigurationPacket()