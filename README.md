# earable

A pure-Python model of the logic that runs on an audio earable: block
buffers that move audio between producers and consumers, WAV reading and
writing, buffered CSV logging of sensor data, tone generation, a
three-section equalizer, the playback state machine, battery and button
handling, sensor payload layouts, preset configurations and a cooperative
scheduler.

No hardware is touched. Pins, clocks, USB state and audio output are passed
in as plain callables, and files live below an ordinary directory, so every
part can be driven from tests or simulations.

## Install

```
pip install .
pip install ".[test]"   # with pytest
```

## Modules

- `earable.circular_buffer` – `CircularBlockBuffer`, a ring of fixed-size
  blocks with read/write cursors, blocking reservations and
  `overflow_count` / `underflow_count`. `set_buffer` backs it with
  caller-owned writable memory.
- `earable.streams` – `BufferedInputStream` (provider writes, consumer
  reads) and `BufferedOutputStream` (the reverse) over a block buffer, plus
  the abstract `Provider` and `Consumer` roles.
- `earable.storage` – `Storage`, file access below a root directory;
  `begin()` succeeds when that directory exists, and `open_file` raises
  `StorageError` otherwise.
- `earable.wav` – `WavWriter`, which writes a 44-byte 16-bit PCM header and
  patches the sizes in `end_recording()`, and `WaveInfo`, the 48-byte header
  record the player reads from the start of a file (`pack` / `unpack`).
- `earable.sd_logger` – `SDLogger`, collecting `"id, timestamp, data"` lines
  in a 2048-byte buffer and writing them out in bulk; a sensor id of -1
  flushes and closes the file.
- `earable.equalizer` – `Equalizer`, filtering 16-bit samples in place.
- `earable.audio_source` – `WavConfigurationPacket` (mode, state, size,
  64-byte name) and the abstract `AudioSource`.
- `earable.tone` – `ToneGenerator` with sine, square, triangle and saw
  waveforms (`Waveform`), frequency clamped to 300–22000 Hz, amplitude to
  0–1, and an optional modulation callable.
- `earable.wav_player` – `WavPlayer`, streaming a WAV file from `Storage`
  into playback blocks, six blocks preloaded by `begin()`.
- `earable.output_device` – the abstract `OutputDevice`,
  `clock_for_sample_rate` and `BlockPlayer`, which hands each finished
  block to a sink callable when `on_block_done()` is called. Supported
  rates: 16000, 32000, 41667, 44100 and 62500 Hz.
- `earable.audio_player` – `AudioPlayer`, the play/pause/stop controller,
  which also applies `WavConfigurationPacket` requests
  (`ble_configuration`).
- `earable.battery` – `BatteryMonitor`, `ChargingState` and `arduino_map`.
- `earable.button` – `Button` with debounce, hold detection and
  `ButtonState` notifications.
- `earable.sensors` – `SensorID`, `ModuleID`, sensor descriptions
  (`sensor_config`), `parse_to_string`, `pack_baro`, `pack_imu` and the
  service UUID constants.
- `earable.configuration` – the fifteen `CONFIGURATIONS` presets and
  `ConfigurationHandler`.
- `earable.task_manager` – `TaskManager`, which runs sensor updates at a
  fixed rate and fills audio buffers in between, and `DeadlineTask`.

## Example

```python
from earable.circular_buffer import CircularBlockBuffer
from earable.streams import BufferedInputStream
from earable.tone import ToneGenerator

stream = BufferedInputStream(CircularBlockBuffer(1024, 8))
tone = ToneGenerator(frequency=440, amplitude=0.5)
tone.set_stream(stream)
tone.begin()
tone.provide(6)           # fill six blocks with samples
print(stream.remaining()) # 6
```

## What it does not do

- There is no Bluetooth layer: the UUIDs are constants only, and requests
  are applied by calling methods such as `AudioPlayer.ble_configuration`.
- Jingle playback (packet mode 3) is not available and raises `ValueError`.
- There is no microphone recorder; `TaskManager` takes any object with
  `available()` and a `target` provider if one is to be scheduled.
- Sensors are not read: `pack_baro` and `pack_imu` only lay out values
  given to them.
- There is no command-line program.

## Tests

```
pytest
```