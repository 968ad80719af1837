"""
Bounds-checked little-endian reading and writing of descriptor payloads,
and the base class shared by every typed descriptor shape.
"""

from dataclasses import dataclass, field, fields
from typing import Optional
import logging

from ..exception import DescriptorTooShort

logger = logging.getLogger(__name__)

__all__ = ["Cursor", "Builder", "Struct", "string_field",
           "Invalid", "Undefined", "Generic"]

class Cursor:
    """
    Read position over a payload. Every read validates the remaining
    length first and raises DescriptorTooShort naming the total size the
    payload would need at that point.
    """

    def __init__(self, data, name):
        self.data = bytes(data)
        self.name = name
        self.offset = 0

    def __len__(self):
        return len(self.data)

    @property
    def remaining(self):
        return len(self.data) - self.offset

    @property
    def consumed(self):
        return self.offset

    def require(self, count):
        """
        Check that count more bytes are available.
        """
        if count < 0 or self.remaining < count:
            raise DescriptorTooShort(self.name, self.offset + max(count, 0),
                                     len(self.data))
        return self

    def take(self, count):
        self.require(count)
        chunk = self.data[self.offset:self.offset + count]
        self.offset += count
        return chunk

    def uint(self, size):
        return int.from_bytes(self.take(size), "little")

    def u8(self):
        return self.uint(1)

    def u16(self):
        return self.uint(2)

    def u24(self):
        return self.uint(3)

    def u32(self):
        return self.uint(4)

    def u64(self):
        return self.uint(8)

    def u8s(self, count):
        return list(self.take(count))

    def u16s(self, count):
        self.require(2 * count)
        return [self.u16() for _ in range(count)]

    def u32s(self, count):
        self.require(4 * count)
        return [self.u32() for _ in range(count)]

    def uints(self, size, count):
        self.require(size * count)
        return [self.uint(size) for _ in range(count)]

    def rest(self):
        return self.take(self.remaining)

class Builder(bytearray):
    """
    Little-endian payload writer, the inverse of Cursor.
    """

    def uint(self, size, value):
        self += int(value).to_bytes(size, "little")
        return self

    def u8(self, value):
        return self.uint(1, value)

    def u16(self, value):
        return self.uint(2, value)

    def u24(self, value):
        return self.uint(3, value)

    def u32(self, value):
        return self.uint(4, value)

    def u64(self, value):
        return self.uint(8, value)

    def u8s(self, values):
        self += bytes(values)
        return self

    def u16s(self, values):
        for v in values:
            self.u16(v)
        return self

    def u32s(self, values):
        for v in values:
            self.u32(v)
        return self

    def uints(self, size, values):
        for v in values:
            self.uint(size, v)
        return self

    def raw(self, data):
        self += data
        return self

def string_field():
    """
    Field holding a string descriptor resolved after decoding. Not part of
    the wire format, ignored by comparisons.
    """
    return field(default = None, compare = False)

@dataclass
class Struct:
    """
    Base of typed descriptor shapes.

    Subclasses declare their fields as a dataclass, MIN_LENGTH (the fixed
    prefix validated before anything is read), and implement _decode()
    over a Cursor and _encode() into a Builder. Bytes left over after the
    layout are kept in `trailing` so encode() reproduces the input.

    STRINGS maps a string field to the field holding its descriptor index.
    """

    trailing: bytes = field(default = b"", kw_only = True, repr = False)

    MIN_LENGTH = 0
    STRINGS = {}

    @classmethod
    def decode(cls, data):
        cursor = Cursor(data, cls.__name__)
        cursor.require(cls.MIN_LENGTH)
        self = cls._decode(cursor)
        self.trailing = cursor.rest()
        return self

    @classmethod
    def _decode(cls, cursor):
        raise NotImplementedError()

    def encode(self):
        builder = Builder()
        self._encode(builder)
        builder.raw(self.trailing)
        return bytes(builder)

    def _encode(self, builder):
        raise NotImplementedError()

    def resolve_strings(self, capability):
        """
        Fill string fields from their indices through a backend capability.
        Index 0 means no string.
        """
        for name, index_name in self.STRINGS.items():
            index = getattr(self, index_name)
            if index:
                setattr(self, name, capability.get_descriptor_string(index))
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Struct):
                value.resolve_strings(capability)

@dataclass
class Invalid:
    """
    Payload of a recognised descriptor that failed to decode.
    """
    raw: bytes

    def encode(self):
        return bytes(self.raw)

    def resolve_strings(self, capability):
        pass

@dataclass
class Undefined:
    """
    Payload carrying an undefined or reserved subtype.
    """
    raw: bytes

    def encode(self):
        return bytes(self.raw)

    def resolve_strings(self, capability):
        pass

@dataclass
class Generic:
    """
    Payload of a subtype that is valid but not decoded.
    """
    raw: bytes

    def encode(self):
        return bytes(self.raw)

    def resolve_strings(self, capability):
        pass

def decode_or_invalid(shape, payload, *args):
    """
    Decode payload with shape, turning a length failure into Invalid.
    """
    try:
        return shape.decode(payload, *args)
    except DescriptorTooShort as e:
        logger.warning("Invalid descriptor: %s", e)
        return Invalid(bytes(payload))
