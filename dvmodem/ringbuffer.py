"""Fixed-size FIFO ring buffer of bytes with power-of-two capacity."""

from __future__ import annotations


class RingBuffer:
    """A byte FIFO backed by a power-of-two sized circular store.

    Like the index-masking scheme it is built on, one slot is always kept
    free, so a buffer of ``size`` holds at most ``size - 1`` bytes.
    """

    def __init__(self, size: int) -> None:
        if size < 2 or size & (size - 1):
            raise ValueError(f"ring buffer size must be a power of two >= 2, got {size}")
        self._data = bytearray(size)
        self._mask = size - 1
        self._write = 0
        self._read = 0

    @property
    def size(self) -> int:
        """Number of slots in the underlying store."""
        return self._mask + 1

    def put(self, value: int) -> None:
        """Append one byte; raises OverflowError when the buffer is full."""
        if not 0 <= value <= 0xFF:
            raise ValueError(f"value out of byte range: {value}")
        if self.is_full():
            raise OverflowError("ring buffer is full")
        self._data[self._write & self._mask] = value
        self._write += 1

    def get(self) -> int:
        """Remove and return the oldest byte; raises IndexError when empty."""
        if self.is_empty():
            raise IndexError("get from an empty ring buffer")
        value = self._data[self._read & self._mask]
        self._read += 1
        return value

    def reset(self) -> None:
        """Discard everything held."""
        self._read = self._write = 0

    def is_empty(self) -> bool:
        return self._read == self._write

    def is_full(self) -> bool:
        return len(self) == self._mask

    def __len__(self) -> int:
        return (self._write - self._read) & self._mask