"""
Communications Device Class functional descriptors.
"""

from dataclasses import dataclass
from typing import List, Optional
import enum
import uuid

from ..constant import DescriptorType, enum_or_int
from .cursor import *
from .cursor import decode_or_invalid
from .generic import GenericDescriptor

class CdcSubtype(enum.IntEnum):
    Header = 0x00
    CallManagement = 0x01
    AbstractControlManagement = 0x02
    DirectLineManagement = 0x03
    TelephoneRinger = 0x04
    TelephoneCall = 0x05
    Union = 0x06
    CountrySelection = 0x07
    TelephoneOperationalModes = 0x08
    UsbTerminal = 0x09
    NetworkChannel = 0x0a
    ProtocolUnit = 0x0b
    ExtensionUnit = 0x0c
    MultiChannel = 0x0d
    CapiControl = 0x0e
    EthernetNetworking = 0x0f
    AtmNetworking = 0x10
    WirelessHandsetControl = 0x11
    MobileDirectLine = 0x12
    MobileDirectLineDetail = 0x13
    DeviceManagement = 0x14
    Obex = 0x15
    CommandSet = 0x16
    CommandSetDetail = 0x17
    TelephoneControl = 0x18
    ObexServiceIdentifier = 0x19
    Ncm = 0x1a
    Mbim = 0x1b
    MbimExtended = 0x1c

@dataclass
class CdcHeader(Struct):
    version: int

    MIN_LENGTH = 2

    @classmethod
    def _decode(cls, c):
        return cls(c.u16())

    def _encode(self, b):
        b.u16(self.version)

@dataclass
class CallManagement(Struct):
    capabilities: int
    data_interface: int

    MIN_LENGTH = 2

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u8())

    def _encode(self, b):
        b.u8(self.capabilities).u8(self.data_interface)

@dataclass
class AbstractControlManagement(Struct):
    capabilities: int

    MIN_LENGTH = 1

    @classmethod
    def _decode(cls, c):
        return cls(c.u8())

    def _encode(self, b):
        b.u8(self.capabilities)

@dataclass
class CdcUnion(Struct):
    control_interface: int
    subordinate_interfaces: List[int]

    MIN_LENGTH = 1

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u8s(c.remaining))

    def _encode(self, b):
        b.u8(self.control_interface).u8s(self.subordinate_interfaces)

@dataclass
class CountrySelection(Struct):
    country_code_date_index: int
    country_codes: List[int]
    country_code_date: Optional[str] = string_field()

    MIN_LENGTH = 1
    STRINGS = {"country_code_date": "country_code_date_index"}

    @classmethod
    def _decode(cls, c):
        index = c.u8()
        return cls(index, c.u16s(c.remaining // 2))

    def _encode(self, b):
        b.u8(self.country_code_date_index).u16s(self.country_codes)

@dataclass
class NetworkChannel(Struct):
    entity_id: int
    name_index: int
    channel_index: int
    physical_interface: int
    name: Optional[str] = string_field()

    MIN_LENGTH = 4
    STRINGS = {"name": "name_index"}

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u8(), c.u8(), c.u8())

    def _encode(self, b):
        b.u8(self.entity_id).u8(self.name_index).u8(self.channel_index)
        b.u8(self.physical_interface)

@dataclass
class EthernetNetworking(Struct):
    mac_address_index: int
    statistics: int
    max_segment_size: int
    num_mc_filters: int
    num_power_filters: int
    mac_address: Optional[str] = string_field()

    MIN_LENGTH = 10
    STRINGS = {"mac_address": "mac_address_index"}

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u32(), c.u16(), c.u16(), c.u8())

    def _encode(self, b):
        b.u8(self.mac_address_index).u32(self.statistics)
        b.u16(self.max_segment_size).u16(self.num_mc_filters)
        b.u8(self.num_power_filters)

@dataclass
class CommandSet(Struct):
    version: int
    command_set_index: int
    command_set_id: uuid.UUID
    command_set: Optional[str] = string_field()

    MIN_LENGTH = 19
    STRINGS = {"command_set": "command_set_index"}

    @classmethod
    def _decode(cls, c):
        return cls(c.u16(), c.u8(), uuid.UUID(bytes_le = c.take(16)))

    def _encode(self, b):
        b.u16(self.version).u8(self.command_set_index)
        b.raw(self.command_set_id.bytes_le)

@dataclass
class Ncm(Struct):
    version: int
    network_capabilities: int

    MIN_LENGTH = 3

    @classmethod
    def _decode(cls, c):
        return cls(c.u16(), c.u8())

    def _encode(self, b):
        b.u16(self.version).u8(self.network_capabilities)

@dataclass
class Mbim(Struct):
    version: int
    max_control_message: int
    number_filters: int
    max_filter_size: int
    max_segment_size: int
    network_capabilities: int

    MIN_LENGTH = 9

    @classmethod
    def _decode(cls, c):
        return cls(c.u16(), c.u16(), c.u8(), c.u8(), c.u16(), c.u8())

    def _encode(self, b):
        b.u16(self.version).u16(self.max_control_message)
        b.u8(self.number_filters).u8(self.max_filter_size)
        b.u16(self.max_segment_size).u8(self.network_capabilities)

_SHAPES = {
    CdcSubtype.Header: CdcHeader,
    CdcSubtype.CallManagement: CallManagement,
    CdcSubtype.AbstractControlManagement: AbstractControlManagement,
    CdcSubtype.Union: CdcUnion,
    CdcSubtype.CountrySelection: CountrySelection,
    CdcSubtype.NetworkChannel: NetworkChannel,
    CdcSubtype.EthernetNetworking: EthernetNetworking,
    CdcSubtype.CommandSet: CommandSet,
    CdcSubtype.Ncm: Ncm,
    CdcSubtype.Mbim: Mbim,
}

@dataclass
class CdcDescriptor:
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
    if (generic.descriptor_type != DescriptorType.CsInterface
            or generic.descriptor_subtype is None):
        return generic
    subtype = enum_or_int(CdcSubtype, generic.descriptor_subtype)
    shape = _SHAPES.get(subtype)
    if shape is None:
        interface = Generic(generic.payload)
    else:
        interface = decode_or_invalid(shape, generic.payload)
    return CdcDescriptor(generic.descriptor_type, generic.descriptor_subtype,
                         subtype, interface)
