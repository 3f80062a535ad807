import pytest

from earable.circular_buffer import CircularBlockBuffer
from earable.streams import (
    BufferedInputStream,
    BufferedOutputStream,
    BufferedStream,
    Consumer,
    Provider,
)


def test_input_stream_provide_and_consume():
    stream = BufferedInputStream(CircularBlockBuffer(4, 4))
    stream.provide(2)
    assert stream.remaining() == 2
    assert stream.ready() == stream.buffer.block_count - 2
    stream.consume()
    assert stream.remaining() == 1


def test_input_stream_blocking_consume_holds_block():
    stream = BufferedInputStream(CircularBlockBuffer(4, 4))
    stream.provide(2)
    before = stream.ready()
    stream.consume(blocking=True)
    assert stream.ready() == before
    assert stream.remaining() == 1


def test_output_stream_direction_is_reversed():
    stream = BufferedOutputStream(CircularBlockBuffer(4, 4))
    stream.consume()
    assert stream.ready() == 1
    stream.provide(1)
    assert stream.ready() == 0
    assert stream.remaining() == stream.buffer.block_count


def test_contiguous_blocks_follow_direction():
    buf_in = CircularBlockBuffer(4, 4)
    stream_in = BufferedInputStream(buf_in)
    stream_in.provide(3)
    assert stream_in.contiguous_blocks() == buf_in.contiguous_write_blocks()

    buf_out = CircularBlockBuffer(4, 4)
    stream_out = BufferedOutputStream(buf_out)
    stream_out.consume()
    assert stream_out.contiguous_blocks() == buf_out.contiguous_read_blocks()


def test_open_close_flag():
    stream = BufferedInputStream()
    assert stream.available() is False
    stream.open()
    assert stream.available() is True
    stream.close()
    assert stream.available() is False


def test_default_buffer_is_created():
    stream = BufferedInputStream()
    assert stream.ready() == stream.buffer.block_count


def test_abstract_classes_cannot_be_instantiated():
    with pytest.raises(TypeError):
        BufferedStream()
    with pytest.raises(TypeError):
        Provider()
    with pytest.raises(TypeError):
        Consumer()


class _CountingProvider(Provider):
    def __init__(self):
        self._ready = False

    def provide(self, n):
        handled = min(n, self.stream.contiguous_blocks())
        self.stream.provide(handled)
        return handled

    def begin(self):
        self._ready = self.stream is not None
        return self._ready

    def available(self):
        return self._ready

    def end(self):
        self._ready = False

    def set_stream(self, stream):
        self.stream = stream


def test_concrete_provider_fills_stream():
    provider = _CountingProvider()
    stream = BufferedInputStream(CircularBlockBuffer(4, 3))
    provider.set_stream(stream)
    assert provider.begin() is True
    assert provider.provide(10) == stream.buffer.block_count
    assert stream.remaining() == stream.buffer.block_count