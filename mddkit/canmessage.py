"""Eight-byte CAN message payload with bit-level packing helpers."""

import math
import struct

from mddkit.errors import ModelicaError

_SIZE = 8
_BITS = _SIZE * 8


def _float_bytes(value):
    """Encode ``value`` as a little-endian IEEE single, saturating to infinity."""
    try:
        return struct.pack("<f", value)
    except OverflowError:
        return struct.pack("<f", math.copysign(math.inf, value))


class CANMessage:
    """The data field of a CAN frame: eight bytes, initially all zero."""

    __slots__ = ("_data",)

    def __init__(self, data=None):
        if data is None:
            self._data = bytearray(_SIZE)
        else:
            buf = bytearray(data)
            if len(buf) != _SIZE:
                raise ValueError(f"CAN message data must be {_SIZE} bytes, got {len(buf)}")
            self._data = buf

    def __bytes__(self):
        return bytes(self._data)

    def __eq__(self, other):
        if not isinstance(other, CANMessage):
            return NotImplemented
        return self._data == other._data

    def __repr__(self):
        return f"CANMessage({bytes(self._data)!r})"

    def _bits(self):
        return [(byte >> k) & 1 for byte in self._data for k in range(8)]

    def format(self, show_bit_vector=False):
        """Return a readable dump of the bytes and optionally of every bit."""
        parts = ["CANMessage start:\nBytes signed dec:   "]
        parts.extend(f" d{b}, " for b in self._data)
        parts.append("\nBytes unsigned hex: ")
        parts.extend(f"0x{b:X}, " for b in self._data)
        if show_bit_vector:
            parts.append("\nBit vector:\n")
            parts.extend(f"{i:2d}," for i in range(_BITS))
            parts.append("\n")
            parts.extend(f"{bit:2d} " for bit in self._bits())
        parts.append("\nCANMessage end.")
        return "".join(parts)

    @staticmethod
    def _check_region(bit_start, width):
        if bit_start < 0 or width < 0 or bit_start + width > _BITS:
            raise ValueError(
                f"bit region start={bit_start} width={width} exceeds the {_BITS}-bit message"
            )

    def unpack_integer(self, bit_start, width):
        """Read an unsigned integer of ``width`` bits starting at ``bit_start`` (Intel order)."""
        self._check_region(bit_start, width)
        whole = int.from_bytes(self._data, "little")
        return (whole >> bit_start) & ((1 << width) - 1)

    def pack_integer(self, bit_start, width, value):
        """Write the low ``width`` bits of ``value`` starting at ``bit_start`` (Intel order)."""
        self._check_region(bit_start, width)
        whole = int.from_bytes(self._data, "little")
        mask = ((1 << width) - 1) << bit_start
        whole = (whole & ~mask) | ((value << bit_start) & mask)
        self._data[:] = whole.to_bytes(_SIZE, "little")

    @staticmethod
    def _check_float_start(bit_start, action):
        if bit_start < 0:
            raise ValueError(f"bit start position must not be negative, got {bit_start}")
        if bit_start > 32:
            raise ModelicaError(
                f"MDDCANMessage: Error: Bit start position for {action} IEEE float > 32 "
                "=> size(float) exceeds message size!"
            )

    def pack_float(self, bit_start, value):
        """Write ``value`` as an IEEE single starting at ``bit_start`` (at most 32)."""
        self._check_float_start(bit_start, "writing")
        encoded = _float_bytes(value)
        byte_start, offset = divmod(bit_start, 8)
        if offset == 0:
            self._data[byte_start:byte_start + 4] = encoded
            return
        keep = 8 - offset
        data = self._data
        for i, fbyte in enumerate(encoded, start=byte_start):
            data[i] = ((data[i] >> keep) << keep) | (fbyte >> offset)
            data[i + 1] = (data[i + 1] | (fbyte << keep)) & 0xFF

    def unpack_float(self, bit_start):
        """Read an IEEE single starting at ``bit_start`` (at most 32)."""
        self._check_float_start(bit_start, "reading")
        byte_start, offset = divmod(bit_start, 8)
        data = self._data
        if offset == 0:
            raw = bytes(data[byte_start:byte_start + 4])
        else:
            raw = bytes(
                ((data[i] << offset) & 0xFF) | (data[i + 1] >> (8 - offset))
                for i in range(byte_start, byte_start + 4)
            )
        return struct.unpack("<f", raw)[0]

    def pack_double(self, value):
        """Fill the whole message with ``value`` as an IEEE double."""
        self._data[:] = struct.pack("<d", value)

    def unpack_double(self):
        """Read the whole message as an IEEE double."""
        return struct.unpack("<d", self._data)[0]