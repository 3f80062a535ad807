import pytest

from earable.circular_buffer import CircularBlockBuffer
from earable.storage import Storage
from earable.streams import BufferedInputStream
from earable.wav import WaveInfo
from earable.wav_player import WavPlayer

BLOCK = 64


@pytest.fixture
def storage(tmp_path):
    return Storage(tmp_path)


@pytest.fixture
def stream():
    return BufferedInputStream(CircularBlockBuffer(BLOCK, 8))


def _write_wav(tmp_path, name, data, sample_rate=44100):
    header = WaveInfo(sample_rate=sample_rate).pack()
    (tmp_path / name).write_bytes(header + data)
    return header + data


def _data(blocks):
    return bytes(i % 256 for i in range(int(blocks * BLOCK)))


def test_begin_without_stream_fails(storage, tmp_path):
    _write_wav(tmp_path, "a.wav", _data(2))
    assert WavPlayer(storage, "a.wav").begin() is False


def test_missing_file_fails(storage, stream):
    player = WavPlayer(storage, "missing.wav")
    player.set_stream(stream)
    assert player.begin() is False
    assert player.available() is False
    assert player.get_size() == 0


def test_begin_preloads_blocks(storage, stream, tmp_path):
    data = _data(10)
    _write_wav(tmp_path, "a.wav", data, sample_rate=16000)
    player = WavPlayer(storage, "a.wav")
    player.set_stream(stream)
    assert player.begin() is True
    assert stream.remaining() == 6
    assert bytes(stream.buffer.read_view(0)) == data[:BLOCK]
    assert bytes(stream.buffer.read_view(5)) == data[5 * BLOCK:6 * BLOCK]
    assert player.get_sample_rate() == 16000


def test_provide_continues_reading(storage, stream, tmp_path):
    data = _data(10)
    _write_wav(tmp_path, "a.wav", data)
    player = WavPlayer(storage, "a.wav")
    player.set_stream(stream)
    player.begin()
    assert player.provide(1) == 1
    assert stream.remaining() == 7
    assert bytes(stream.buffer.read_view(6)) == data[6 * BLOCK:7 * BLOCK]


def test_short_file_closes_stream(storage, stream, tmp_path):
    _write_wav(tmp_path, "a.wav", _data(2.5))
    player = WavPlayer(storage, "a.wav")
    player.set_stream(stream)
    assert player.begin() is True
    assert stream.remaining() == 2
    player.provide(1)
    assert stream.remaining() == 2
    assert stream.available() is False


def test_sample_rate_requires_begin(storage):
    with pytest.raises(RuntimeError):
        WavPlayer(storage, "a.wav").get_sample_rate()


def test_get_size_is_file_size(storage, tmp_path):
    content = _write_wav(tmp_path, "a.wav", _data(3))
    assert WavPlayer(storage, "a.wav").get_size() == len(content)


def test_end_closes_stream(storage, stream, tmp_path):
    _write_wav(tmp_path, "a.wav", _data(10))
    player = WavPlayer(storage, "a.wav")
    player.set_stream(stream)
    player.begin()
    player.end()
    assert stream.available() is False
    assert player.available() is False
    assert player.provide(1) == 0


def test_config_carries_name(storage):
    config = WavPlayer(storage, "song.wav").get_config()
    assert config.name_text() == "song.wav"
    assert config.state == 0