"""Minimal serial packager: a fixed-size byte buffer with a read/write position."""

import operator
import struct

from mddkit.errors import ModelicaError, message

_REAL = struct.Struct("<d")
_INTEGER = struct.Struct("<i")


class MinimalSerialPackager:
    """Packs reals, integers and NUL-terminated strings into a byte buffer.

    Values are written one after another from the current position; reading
    starts again from the beginning after :meth:`reset_pointer`.
    """

    __slots__ = ("_buffer", "_pos")

    def __init__(self, buffer_size):
        size = operator.index(buffer_size)
        if size < 0:
            raise ValueError(f"buffer size must not be negative, got {size}")
        self._buffer = bytearray(size)
        self._pos = 0

    @property
    def buffer_size(self):
        """Number of bytes in the buffer."""
        return len(self._buffer)

    @property
    def position(self):
        """Current read/write position in bytes."""
        return self._pos

    def _write(self, payload):
        end = self._pos + len(payload)
        if end > len(self._buffer):
            raise ModelicaError("MDDMinimalSerialPackager.h: Buffer overflow.")
        self._buffer[self._pos:end] = payload
        self._pos = end

    def _read(self, count):
        end = self._pos + count
        if self._pos < 0 or end > len(self._buffer):
            raise ModelicaError("MDDMinimalSerialPackager.h: Buffer underflow.")
        chunk = bytes(self._buffer[self._pos:end])
        self._pos = end
        return chunk

    def add_real(self, values):
        """Append the given floats as IEEE doubles."""
        values = [float(v) for v in values]
        self._write(b"".join(_REAL.pack(v) for v in values))

    def add_integer(self, values):
        """Append the given integers as 32-bit signed integers."""
        values = [operator.index(v) for v in values]
        try:
            payload = b"".join(_INTEGER.pack(v) for v in values)
        except struct.error as exc:
            raise ValueError(f"integer out of 32-bit range: {exc}") from None
        self._write(payload)

    def add_string(self, text):
        """Append ``text`` followed by a terminating NUL byte."""
        encoded = text.encode("utf-8")
        cut = encoded.find(b"\0")
        if cut >= 0:
            encoded = encoded[:cut]
        message(f"addString: {text}\n")
        self._write(encoded + b"\0")

    def get_package(self):
        """Return the whole buffer."""
        return bytes(self._buffer)

    def set_package(self, package):
        """Replace the buffer by ``package`` and rewind to the start."""
        self._buffer = bytearray(package)
        self._pos = 0

    def get_real(self, n):
        """Read ``n`` IEEE doubles from the current position."""
        count = operator.index(n)
        chunk = self._read(_REAL.size * count)
        return [value for (value,) in _REAL.iter_unpack(chunk)]

    def get_integer(self, n):
        """Read ``n`` 32-bit signed integers from the current position."""
        count = operator.index(n)
        chunk = self._read(_INTEGER.size * count)
        return [value for (value,) in _INTEGER.iter_unpack(chunk)]

    def get_string(self):
        """Read a NUL-terminated string from the current position."""
        start = self._pos
        end = self._buffer.find(b"\0", start) if start < len(self._buffer) else -1
        if end < 0:
            end = max(start, len(self._buffer))
        text = bytes(self._buffer[start:end]).decode("utf-8", errors="replace")
        self._pos = end + 1
        return text

    def reset_pointer(self):
        """Move the position back to the start of the buffer."""
        self._pos = 0

    def clear(self):
        """Zero the buffer and move the position back to the start."""
        self._buffer[:] = bytes(len(self._buffer))
        self._pos = 0