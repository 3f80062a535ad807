import pytest

from earable.circular_buffer import (
    DEFAULT_BLOCK_COUNT,
    DEFAULT_BLOCK_SIZE,
    CircularBlockBuffer,
)


def test_default_sizes():
    buf = CircularBlockBuffer()
    assert (buf.block_size, buf.block_count) == (DEFAULT_BLOCK_SIZE, DEFAULT_BLOCK_COUNT)
    assert (DEFAULT_BLOCK_SIZE, DEFAULT_BLOCK_COUNT) == (1024, 10)
    assert len(buf.buffer) == buf.total_size


def test_write_then_read_round_trip():
    buf = CircularBlockBuffer(4, 3)
    buf.write_view()[:] = b"abcd"
    buf.increment_write()
    assert buf.available_read() == 1
    assert bytes(buf.read_view()) == b"abcd"
    buf.increment_read()
    assert buf.available_read() == 0
    assert buf.available_write() == buf.block_count


def test_cursor_wraps_around():
    buf = CircularBlockBuffer(2, 3)
    for chunk in (b"aa", b"bb", b"cc"):
        buf.write_view()[:] = chunk
        buf.increment_write()
    buf.increment_read(2)
    buf.write_view()[:] = b"dd"
    buf.increment_write()
    assert bytes(buf.read_view(0)) == b"cc"
    assert bytes(buf.read_view(1)) == b"dd"
    assert buf.available_read() + buf.available_write() == buf.block_count


def test_overflow_is_counted():
    buf = CircularBlockBuffer(4, 2)
    buf.increment_write(3)
    assert buf.overflow_count == 1


def test_underflow_is_counted():
    buf = CircularBlockBuffer(4, 4)
    buf.increment_read(2)
    assert buf.underflow_count == 2


def test_blocking_write_reserves_until_next_advance():
    buf = CircularBlockBuffer(4, 4)
    buf.increment_write(1, blocking=True)
    assert buf.available_read() == 0
    buf.increment_write(1)
    assert buf.available_read() == 2


def test_contiguous_write_stops_at_end_of_ring():
    buf = CircularBlockBuffer(4, 4)
    buf.increment_write(3)
    buf.increment_read(3)
    assert buf.available_write() == buf.block_count
    assert buf.contiguous_write_blocks() == 1


def test_contiguous_read_matches_available_when_not_wrapped():
    buf = CircularBlockBuffer(4, 4)
    buf.increment_write(2)
    assert buf.contiguous_read_blocks() == buf.available_read()


def test_clear_drops_blocks():
    buf = CircularBlockBuffer(4, 4)
    buf.increment_write(2)
    buf.clear()
    assert buf.available_read() == 0
    assert buf.available_write() == buf.block_count


def test_external_buffer_is_shared_and_zeroed():
    backing = bytearray(b"\xff" * 8)
    buf = CircularBlockBuffer(4, 4)
    buf.set_buffer(backing, 4, 2)
    assert backing == bytearray(8)
    buf.write_view()[:] = b"wxyz"
    assert backing[:4] == b"wxyz"
    assert (buf.block_size, buf.block_count) == (4, 2)


def test_external_buffer_too_small():
    buf = CircularBlockBuffer(4, 4)
    with pytest.raises(ValueError):
        buf.set_buffer(bytearray(3), 4, 2)


def test_set_sizes_with_zero_is_ignored():
    buf = CircularBlockBuffer(8, 5)
    buf.set_sizes(0, 7)
    assert (buf.block_size, buf.block_count) == (8, 5)


def test_reset_rewinds_counters():
    buf = CircularBlockBuffer(4, 2)
    buf.increment_write(5)
    buf.reset()
    assert buf.overflow_count == 0
    assert buf.available_write() == buf.block_count


def test_invalid_constructor_sizes():
    with pytest.raises(ValueError):
        CircularBlockBuffer(0, 4)