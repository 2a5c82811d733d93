"""
pcfont.cursor - bounded read cursor over an in-memory buffer

(c) 2019--2024 Rob Hagemans
licence: https://opensource.org/licenses/MIT
"""

from .errors import TruncatedInputError


class ByteCursor:
    """Seekable, bounds-checked view on a bytes buffer."""

    def __init__(self, data):
        self._data = bytes(data)
        self._pos = 0

    def __len__(self):
        return len(self._data)

    def __repr__(self):
        return f'{type(self).__name__}(pos={self._pos}, size={len(self._data)})'

    @property
    def remaining(self):
        """Number of bytes left to read."""
        return len(self._data) - self._pos

    def tell(self):
        """Current position."""
        return self._pos

    def seek(self, offset):
        """Move to absolute offset."""
        if not 0 <= offset <= len(self._data):
            raise TruncatedInputError(
                f'Seek to {offset} outside input of {len(self._data)} bytes',
                offset=offset,
            )
        self._pos = offset
        return offset

    def read(self, count):
        """Read exactly `count` bytes."""
        if count < 0:
            raise TruncatedInputError(f'Negative read size {count}', offset=self._pos)
        if count > self.remaining:
            raise TruncatedInputError(
                f'Read of {count} bytes at {self._pos} '
                f'exceeds input of {len(self._data)} bytes',
                offset=self._pos,
            )
        chunk = self._data[self._pos:self._pos+count]
        self._pos += count
        return chunk

    def skip(self, count):
        """Move forward by `count` bytes."""
        return self.seek(self._pos + count)
