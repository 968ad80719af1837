from dataclasses import dataclass
from typing import Optional
import logging

from ..exception import DescriptorTooShort

logger = logging.getLogger(__name__)

__all__ = ["GenericDescriptor", "StandardDescriptor", "ClassCodeTriplet",
           "split_descriptors"]

@dataclass(frozen = True)
class ClassCodeTriplet:
    """
    (class, subclass, protocol) context used to interpret class specific
    descriptors.
    """
    base_class: int
    sub_class: int
    protocol: int

    def __iter__(self):
        return iter((self.base_class, self.sub_class, self.protocol))

@dataclass
class GenericDescriptor:
    """
    Untyped descriptor chunk: length, type and subtype bytes followed by
    the payload.
    """
    length: int
    descriptor_type: int
    descriptor_subtype: Optional[int] = None
    data: Optional[bytes] = None

    @classmethod
    def from_bytes(cls, raw):
        raw = bytes(raw)
        if len(raw) < 2:
            raise DescriptorTooShort(cls.__name__, 2, len(raw))
        length = raw[0]
        if length < 2 or length > len(raw):
            raise DescriptorTooShort(cls.__name__, max(length, 2), len(raw))
        raw = raw[:length]
        return cls(length = length,
                   descriptor_type = raw[1],
                   descriptor_subtype = raw[2] if length > 2 else None,
                   data = raw[3:] if length > 3 else None)

    @classmethod
    def from_payload(cls, descriptor_type, descriptor_subtype, payload):
        """
        Build a chunk from a typed descriptor's encoded payload.
        """
        payload = bytes(payload)
        return cls(length = 3 + len(payload),
                   descriptor_type = descriptor_type,
                   descriptor_subtype = descriptor_subtype,
                   data = payload or None)

    @property
    def payload(self):
        """
        Bytes following the length, type and subtype bytes
        """
        return self.data or b""

    @property
    def body(self):
        """
        Bytes following the length and type bytes, subtype included. Used
        by descriptors without a subtype byte.
        """
        if self.descriptor_subtype is None:
            return b""
        return bytes([self.descriptor_subtype]) + self.payload

    @classmethod
    def from_body(cls, descriptor_type, body):
        body = bytes(body)
        return cls(length = 2 + len(body),
                   descriptor_type = descriptor_type,
                   descriptor_subtype = body[0] if body else None,
                   data = body[1:] or None)

    def to_bytes(self):
        out = bytearray([self.length, self.descriptor_type])
        if self.descriptor_subtype is not None:
            out.append(self.descriptor_subtype)
        out += self.payload
        return bytes(out)

    def to_generic(self):
        return self

def split_descriptors(data):
    """
    Split a buffer of concatenated descriptors into GenericDescriptor
    chunks. Stops at the first chunk whose length byte is below 2 or
    exceeds the remaining bytes.

    :returns: (list of GenericDescriptor, count of unconsumed bytes)
    """
    data = bytes(data)
    chunks = []
    offset = 0
    while offset < len(data):
        length = data[offset]
        if length < 2 or length > len(data) - offset:
            break
        chunks.append(GenericDescriptor.from_bytes(data[offset:offset + length]))
        offset += length
    return chunks, len(data) - offset

@dataclass
class StandardDescriptor:
    """
    Decoded descriptor without a subtype byte (HID, Interface
    Association...). `interface` holds the typed body, or an Invalid
    fallback.
    """
    descriptor_type: int
    interface: object

    def to_generic(self):
        return GenericDescriptor.from_body(self.descriptor_type,
                                           self.interface.encode())

    def resolve_strings(self, capability):
        self.interface.resolve_strings(capability)
