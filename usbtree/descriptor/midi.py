"""
USB MIDI Streaming (audio subclass 3) descriptors.
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple
import enum

from ..constant import DescriptorType, enum_or_int
from .cursor import *
from .cursor import decode_or_invalid
from .generic import GenericDescriptor

class MidiSubtype(enum.IntEnum):
    Undefined = 0
    Header = 1
    InputJack = 2
    OutputJack = 3
    Element = 4

class MidiEndpointSubtype(enum.IntEnum):
    Undefined = 0
    General = 1

class JackType(enum.IntEnum):
    Undefined = 0
    Embedded = 1
    External = 2

@dataclass
class MidiHeader(Struct):
    version: int
    total_length: int

    MIN_LENGTH = 4

    @classmethod
    def _decode(cls, c):
        return cls(c.u16(), c.u16())

    def _encode(self, b):
        b.u16(self.version).u16(self.total_length)

@dataclass
class MidiInputJack(Struct):
    jack_type: int
    jack_id: int
    jack_string_index: int
    jack_string: Optional[str] = string_field()

    MIN_LENGTH = 3
    STRINGS = {"jack_string": "jack_string_index"}

    @property
    def kind(self):
        return enum_or_int(JackType, self.jack_type)

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u8(), c.u8())

    def _encode(self, b):
        b.u8(self.jack_type).u8(self.jack_id).u8(self.jack_string_index)

def _pins(c):
    count = c.u8()
    c.require(2 * count)
    return [(c.u8(), c.u8()) for _ in range(count)]

def _encode_pins(b, pins):
    b.u8(len(pins))
    for source_id, source_pin in pins:
        b.u8(source_id).u8(source_pin)

@dataclass
class MidiOutputJack(Struct):
    """
    Output jack; sources are (source id, source pin) couples.
    """
    jack_type: int
    jack_id: int
    sources: List[Tuple[int, int]]
    jack_string_index: int
    jack_string: Optional[str] = string_field()

    MIN_LENGTH = 4
    STRINGS = {"jack_string": "jack_string_index"}

    @property
    def kind(self):
        return enum_or_int(JackType, self.jack_type)

    @property
    def num_input_pins(self):
        return len(self.sources)

    @classmethod
    def _decode(cls, c):
        jack_type = c.u8()
        jack_id = c.u8()
        sources = _pins(c)
        return cls(jack_type, jack_id, sources, c.u8())

    def _encode(self, b):
        b.u8(self.jack_type).u8(self.jack_id)
        _encode_pins(b, self.sources)
        b.u8(self.jack_string_index)

@dataclass
class MidiElement(Struct):
    element_id: int
    sources: List[Tuple[int, int]]
    num_output_pins: int
    in_terminal_link: int
    out_terminal_link: int
    capabilities_size: int
    capabilities: int
    element_string_index: int
    element_string: Optional[str] = string_field()

    MIN_LENGTH = 8
    STRINGS = {"element_string": "element_string_index"}

    @property
    def num_input_pins(self):
        return len(self.sources)

    @classmethod
    def _decode(cls, c):
        element_id = c.u8()
        sources = _pins(c)
        num_output_pins = c.u8()
        in_terminal_link = c.u8()
        out_terminal_link = c.u8()
        capabilities_size = c.u8()
        capabilities = c.uint(capabilities_size)
        return cls(element_id, sources, num_output_pins, in_terminal_link,
                   out_terminal_link, capabilities_size, capabilities, c.u8())

    def _encode(self, b):
        b.u8(self.element_id)
        _encode_pins(b, self.sources)
        b.u8(self.num_output_pins).u8(self.in_terminal_link)
        b.u8(self.out_terminal_link).u8(self.capabilities_size)
        b.uint(self.capabilities_size, self.capabilities)
        b.u8(self.element_string_index)

@dataclass
class MidiEndpoint(Struct):
    jack_ids: List[int]

    MIN_LENGTH = 1

    @property
    def num_jacks(self):
        return len(self.jack_ids)

    @classmethod
    def _decode(cls, c):
        return cls(c.u8s(c.u8()))

    def _encode(self, b):
        b.u8(len(self.jack_ids)).u8s(self.jack_ids)

_INTERFACE_SHAPES = {
    MidiSubtype.Header: MidiHeader,
    MidiSubtype.InputJack: MidiInputJack,
    MidiSubtype.OutputJack: MidiOutputJack,
    MidiSubtype.Element: MidiElement,
}

@dataclass
class MidiDescriptor:
    descriptor_type: int
    descriptor_subtype: int
    subtype: object
    interface: object

    def to_generic(self):
        return GenericDescriptor.from_payload(self.descriptor_type,
                                              self.descriptor_subtype,
                                              self.interface.encode())

    def resolve_strings(self, capability):
        self.interface.resolve_strings(capability)

def from_generic(triplet, generic):
    payload = generic.payload
    raw_subtype = generic.descriptor_subtype

    if generic.descriptor_type == DescriptorType.CsEndpoint:
        subtype = enum_or_int(MidiEndpointSubtype, raw_subtype)
        if subtype == MidiEndpointSubtype.General:
            interface = decode_or_invalid(MidiEndpoint, payload)
        elif subtype == MidiEndpointSubtype.Undefined:
            interface = Undefined(payload)
        else:
            interface = Generic(payload)
        return MidiDescriptor(generic.descriptor_type, raw_subtype, subtype,
                              interface)

    subtype = enum_or_int(MidiSubtype, raw_subtype)
    shape = _INTERFACE_SHAPES.get(subtype)
    if shape is not None:
        interface = decode_or_invalid(shape, payload)
    elif subtype == MidiSubtype.Undefined:
        interface = Undefined(payload)
    else:
        interface = Generic(payload)
    return MidiDescriptor(generic.descriptor_type, raw_subtype, subtype,
                          interface)
