"""Fixed-size ring of equally sized blocks with read/write cursors."""

from __future__ import annotations

DEFAULT_BLOCK_COUNT = 10
DEFAULT_BLOCK_SIZE = 1024


class CircularBlockBuffer:
    """A ring buffer that is filled and drained one block at a time.

    Blocks advanced with ``blocking=True`` stay reserved until the next
    advance of the same cursor, which models a block that is still being
    transferred asynchronously.
    """

    def __init__(self, block_size: int = DEFAULT_BLOCK_SIZE,
                 block_count: int = DEFAULT_BLOCK_COUNT) -> None:
        if block_size <= 0 or block_count <= 0:
            raise ValueError("block size and block count must be positive")
        self._buffer: bytearray | memoryview = bytearray()
        self._external = False
        self._block_size = block_size
        self._block_count = block_count
        self._read_block = 0
        self._write_block = 0
        self._reserve_write = 0
        self._reserve_read = 0
        self._reserve_write_total = 0
        self._reserve_read_total = 0
        self._fill = 0
        self.overflow_count = 0
        self.underflow_count = 0
        self.set_sizes(block_size, block_count)

    @property
    def block_size(self) -> int:
        return self._block_size

    @property
    def block_count(self) -> int:
        return self._block_count

    @property
    def total_size(self) -> int:
        return self._block_size * self._block_count

    @property
    def buffer(self) -> memoryview:
        """The whole backing memory."""
        return memoryview(self._buffer)[: self.total_size]

    def set_sizes(self, block_size: int, block_count: int) -> None:
        """Resize the buffer; a zero size leaves it unchanged."""
        if not block_size or not block_count:
            return
        self._block_size = block_size
        self._block_count = block_count
        self.reset()

    def set_buffer(self, buffer, block_size: int, block_count: int) -> None:
        """Use caller-owned writable memory as the backing store."""
        view = memoryview(buffer).cast("B")
        if view.readonly:
            raise ValueError("buffer must be writable")
        if view.nbytes < block_size * block_count:
            raise ValueError("buffer is smaller than block_size * block_count")
        self._buffer = view
        self._block_size = block_size
        self._block_count = block_count
        self._external = True
        self.reset()

    def reset(self) -> None:
        """Zero the memory, rewind both cursors and clear the counters."""
        total = self.total_size
        if self._external:
            self._buffer[:total] = bytes(total)
        else:
            self._buffer = bytearray(total)
        self._read_block = 0
        self._write_block = 0
        self.overflow_count = 0
        self.underflow_count = 0
        self.clear()

    def clear(self) -> None:
        """Drop all buffered blocks without touching the memory."""
        self._read_block = self._write_block
        self._fill = 0
        self._reserve_write = 0
        self._reserve_read = 0
        self._reserve_write_total = 0
        self._reserve_read_total = 0

    def _offset(self, block: int, n: int) -> int:
        return (block + n) % self._block_count

    def _block_view(self, block: int) -> memoryview:
        start = block * self._block_size
        return memoryview(self._buffer)[start:start + self._block_size]

    def write_view(self, n: int = 0) -> memoryview:
        """The block ``n`` positions after the write cursor."""
        return self._block_view(self._offset(self._write_block, n))

    def read_view(self, n: int = 0) -> memoryview:
        """The block ``n`` positions after the read cursor."""
        return self._block_view(self._offset(self._read_block, n))

    def contiguous_read_blocks(self) -> int:
        return min(self.available_read(), self._block_count - self._read_block)

    def contiguous_write_blocks(self) -> int:
        return min(self.available_write(), self._block_count - self._write_block)

    def increment_write(self, n: int = 1, blocking: bool = False) -> None:
        available = self.available_write()
        if available < n:
            self.overflow_count += n - available
        self._reserve_write_total = max(0, self._reserve_write_total - self._reserve_write)
        self._reserve_write = n if blocking else 0
        self._reserve_write_total += self._reserve_write
        self._write_block = self._offset(self._write_block, n)
        self._fill += n

    def increment_read(self, n: int = 1, blocking: bool = False) -> None:
        available = self.available_read()
        if available < n:
            self.underflow_count += n - available
        self._reserve_read_total = max(0, self._reserve_read_total - self._reserve_read)
        self._reserve_read = n if blocking else 0
        self._reserve_read_total += self._reserve_read
        self._read_block = self._offset(self._read_block, n)
        self._fill -= n

    def available_read(self) -> int:
        """Blocks that can be read before an underflow."""
        return self._fill - self._reserve_write_total

    def available_write(self) -> int:
        """Blocks that can be written before an overflow."""
        return self._block_count - self._fill - self._reserve_read_total