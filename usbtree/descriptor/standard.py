"""
Standard descriptors beyond device/configuration/interface/endpoint:
Interface Association in configuration extra data, and the descriptors
read from the device with GET_DESCRIPTOR/GET_STATUS (device qualifier,
debug, BOS with WebUSB).
"""

from dataclasses import dataclass, field
from typing import List, Optional
import enum
import logging
import uuid

from ..capability import ControlRequest
from ..constant import *
from ..exception import Error
from .cursor import *
from .cursor import decode_or_invalid
from .generic import GenericDescriptor, StandardDescriptor, split_descriptors

logger = logging.getLogger(__name__)

WEBUSB_PLATFORM_UUID = uuid.UUID("3408b638-09a9-47a0-8bfd-a0768815b665")
WEBUSB_REQUEST_GET_URL = 0x02

class DeviceStatus(enum.IntFlag):
    SelfPowered = 0x0001
    RemoteWakeup = 0x0002

class BosCapabilityType(enum.IntEnum):
    WirelessUsb = 0x01
    Usb20Extension = 0x02
    SuperSpeed = 0x03
    ContainerId = 0x04
    Platform = 0x05
    PowerDelivery = 0x06
    BatteryInfo = 0x07
    PdConsumerPort = 0x08
    PdProviderPort = 0x09
    SuperSpeedPlus = 0x0a
    PrecisionTimeMeasurement = 0x0b
    WirelessUsbExt = 0x0c
    Billboard = 0x0d
    Authentication = 0x0e
    BillboardEx = 0x0f
    ConfigurationSummary = 0x10

class WebUsbScheme(enum.IntEnum):
    Http = 0
    Https = 1
    Other = 255

@dataclass
class InterfaceAssociation(Struct):
    first_interface: int
    interface_count: int
    function_class: int
    function_sub_class: int
    function_protocol: int
    function_string_index: int
    function_string: Optional[str] = string_field()

    MIN_LENGTH = 6
    STRINGS = {"function_string": "function_string_index"}

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u8(), c.u8(), c.u8(), c.u8(), c.u8())

    def _encode(self, b):
        b.u8(self.first_interface).u8(self.interface_count)
        b.u8(self.function_class).u8(self.function_sub_class)
        b.u8(self.function_protocol).u8(self.function_string_index)

@dataclass
class DeviceQualifier(Struct):
    """
    Device qualifier: how a high-speed capable device would enumerate at
    the other speed.
    """
    version: int
    device_class: int
    sub_class: int
    protocol: int
    max_packet_size: int
    num_configurations: int

    MIN_LENGTH = 7

    @classmethod
    def _decode(cls, c):
        return cls(c.u16(), c.u8(), c.u8(), c.u8(), c.u8(), c.u8())

    def _encode(self, b):
        b.u16(self.version).u8(self.device_class).u8(self.sub_class)
        b.u8(self.protocol).u8(self.max_packet_size)
        b.u8(self.num_configurations)

@dataclass
class DebugDescriptor(Struct):
    debug_in_endpoint: int
    debug_out_endpoint: int

    MIN_LENGTH = 2

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u8())

    def _encode(self, b):
        b.u8(self.debug_in_endpoint).u8(self.debug_out_endpoint)

@dataclass
class WebUsbPlatform(Struct):
    version: int
    vendor_code: int
    landing_page_index: int

    MIN_LENGTH = 4

    @classmethod
    def _decode(cls, c):
        return cls(c.u16(), c.u8(), c.u8())

    def _encode(self, b):
        b.u16(self.version).u8(self.vendor_code).u8(self.landing_page_index)

@dataclass
class BosCapability:
    """
    One chunk of the BOS descriptor set, kept as read so it encodes back
    unchanged whatever its type.
    """
    descriptor: GenericDescriptor

    @property
    def capability_type(self):
        return self.descriptor.descriptor_subtype

    @property
    def data(self):
        return self.descriptor.payload

    @property
    def kind(self):
        if self.descriptor.descriptor_type != DescriptorType.DeviceCapability \
           or self.capability_type is None:
            return None
        return enum_or_int(BosCapabilityType, self.capability_type)

    @property
    def platform_uuid(self):
        if self.kind != BosCapabilityType.Platform or len(self.data) < 17:
            return None
        return uuid.UUID(bytes_le = self.data[1:17])

    @property
    def webusb(self):
        """
        WebUSB platform data, None for other capabilities
        """
        if self.platform_uuid != WEBUSB_PLATFORM_UUID:
            return None
        return decode_or_invalid(WebUsbPlatform, self.data[17:])

    def to_generic(self):
        return self.descriptor

@dataclass
class Bos(Struct):
    total_length: int
    num_capabilities: int
    capabilities: List[BosCapability]

    MIN_LENGTH = 3

    @property
    def webusb(self):
        for capability in self.capabilities:
            webusb = capability.webusb
            if isinstance(webusb, WebUsbPlatform):
                return webusb
        return None

    @classmethod
    def _decode(cls, c):
        total_length = c.u16()
        num_capabilities = c.u8()
        chunks, unconsumed = split_descriptors(c.data[c.offset:])
        c.take(c.remaining - unconsumed)
        return cls(total_length, num_capabilities,
                   [BosCapability(chunk) for chunk in chunks])

    def _encode(self, b):
        b.u16(self.total_length).u8(self.num_capabilities)
        for capability in self.capabilities:
            b.raw(capability.to_generic().to_bytes())

@dataclass
class WebUsbUrl(Struct):
    """
    WebUSB URL descriptor. `url` holds the bytes as sent by the device,
    `text` their UTF-8 reading.
    """
    scheme: int
    url: bytes

    MIN_LENGTH = 1

    @property
    def text(self):
        return self.url.decode("utf-8", "replace")

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.rest())

    def _encode(self, b):
        b.u8(self.scheme).raw(self.url)

    def __str__(self):
        if self.scheme == WebUsbScheme.Http:
            return "http://" + self.text
        if self.scheme == WebUsbScheme.Https:
            return "https://" + self.text
        return self.text

def from_generic(triplet, generic):
    if generic.descriptor_type != DescriptorType.InterfaceAssociation:
        return generic
    return StandardDescriptor(generic.descriptor_type,
                              decode_or_invalid(InterfaceAssociation,
                                                generic.body))

def _get_descriptor(capability, type, length, index = 0):
    request = ControlRequest(control_type = RequestTypeType.Standard,
                             recipient = RequestTypeRecipient.Device,
                             request = Request.GetDescriptor,
                             value = (type << 8) | index,
                             index = 0,
                             length = length)
    try:
        data = capability.get_control_message(request)
    except Error as e:
        logger.debug("GET_DESCRIPTOR 0x%02x: %s", type, e)
        return None
    if len(data) < 2 or data[1] != type:
        return None
    return bytes(data[:data[0]])

def fetch_device_qualifier(capability):
    data = _get_descriptor(capability, DescriptorType.DeviceQualifier, 10)
    if data is None:
        return None
    return decode_or_invalid(DeviceQualifier, data[2:])

def fetch_debug(capability):
    data = _get_descriptor(capability, DescriptorType.Debug, 4)
    if data is None:
        return None
    return decode_or_invalid(DebugDescriptor, data[2:])

def fetch_bos(capability):
    """
    Read the BOS header, then the whole descriptor set it announces.
    """
    header = _get_descriptor(capability, DescriptorType.Bos, 5)
    if header is None or len(header) < 5:
        return None
    total_length = int.from_bytes(header[2:4], "little")
    request = ControlRequest(control_type = RequestTypeType.Standard,
                             recipient = RequestTypeRecipient.Device,
                             request = Request.GetDescriptor,
                             value = DescriptorType.Bos << 8,
                             index = 0,
                             length = total_length)
    try:
        data = capability.get_control_message(request)
    except Error as e:
        logger.debug("BOS: %s", e)
        return None
    return decode_or_invalid(Bos, bytes(data[2:]))

def fetch_webusb_url(capability, webusb):
    """
    Read the landing page URL advertised by a WebUSB platform capability.
    """
    if not webusb.landing_page_index:
        return None
    request = ControlRequest(control_type = RequestTypeType.Vendor,
                             recipient = RequestTypeRecipient.Device,
                             request = webusb.vendor_code,
                             value = webusb.landing_page_index,
                             index = WEBUSB_REQUEST_GET_URL,
                             length = 255)
    try:
        data = capability.get_control_message(request)
    except Error as e:
        logger.debug("WebUSB URL: %s", e)
        return None
    if len(data) < 3:
        return None
    url = decode_or_invalid(WebUsbUrl, bytes(data[2:data[0]]))
    return url if isinstance(url, WebUsbUrl) else None

def fetch_status(capability):
    request = ControlRequest(control_type = RequestTypeType.Standard,
                             recipient = RequestTypeRecipient.Device,
                             request = Request.GetStatus,
                             value = 0,
                             index = 0,
                             length = 2)
    try:
        data = capability.get_control_message(request)
    except Error as e:
        logger.debug("GET_STATUS: %s", e)
        return None
    if len(data) < 2:
        return None
    return DeviceStatus(int.from_bytes(data[:2], "little") & 0x3)
