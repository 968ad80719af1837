"""
USB Video Class descriptors.
"""

from dataclasses import dataclass
from typing import List, Optional
import enum
import uuid

from ..constant import DescriptorType, enum_or_int
from .cursor import *
from .cursor import decode_or_invalid
from .generic import GenericDescriptor

class VideoSubclass(enum.IntEnum):
    Undefined = 0
    Control = 1
    Streaming = 2
    InterfaceCollection = 3

class VideoControlSubtype(enum.IntEnum):
    Undefined = 0
    Header = 1
    InputTerminal = 2
    OutputTerminal = 3
    SelectorUnit = 4
    ProcessingUnit = 5
    ExtensionUnit = 6
    EncodingUnit = 7

class VideoStreamingSubtype(enum.IntEnum):
    Undefined = 0x00
    InputHeader = 0x01
    OutputHeader = 0x02
    StillImageFrame = 0x03
    FormatUncompressed = 0x04
    FrameUncompressed = 0x05
    FormatMjpeg = 0x06
    FrameMjpeg = 0x07
    FormatMpeg2ts = 0x0a
    FormatDv = 0x0c
    ColorFormat = 0x0d
    FormatFrameBased = 0x10
    FrameFrameBased = 0x11
    FormatStreamBased = 0x12
    FormatH264 = 0x13
    FrameH264 = 0x14
    FormatH264Simulcast = 0x15
    FormatVp8 = 0x16
    FrameVp8 = 0x17
    FormatVp8Simulcast = 0x18

class VideoEndpointSubtype(enum.IntEnum):
    Undefined = 0
    General = 1
    Endpoint = 2
    Interrupt = 3

def _guid(c):
    return uuid.UUID(bytes_le = c.take(16))

@dataclass
class VideoHeader(Struct):
    version: int
    total_length: int
    clock_frequency: int
    interfaces: List[int]

    MIN_LENGTH = 9

    @classmethod
    def _decode(cls, c):
        version = c.u16()
        total_length = c.u16()
        clock_frequency = c.u32()
        return cls(version, total_length, clock_frequency, c.u8s(c.u8()))

    def _encode(self, b):
        b.u16(self.version).u16(self.total_length).u32(self.clock_frequency)
        b.u8(len(self.interfaces)).u8s(self.interfaces)

@dataclass
class VideoInputTerminal(Struct):
    """
    Input terminal. Terminal type specific fields (camera controls and
    so on) are kept raw in `specific`.
    """
    terminal_id: int
    terminal_type: int
    assoc_terminal: int
    terminal_index: int
    specific: bytes = b""
    terminal: Optional[str] = string_field()

    MIN_LENGTH = 5
    STRINGS = {"terminal": "terminal_index"}

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u16(), c.u8(), c.u8(), c.rest())

    def _encode(self, b):
        b.u8(self.terminal_id).u16(self.terminal_type).u8(self.assoc_terminal)
        b.u8(self.terminal_index).raw(self.specific)

@dataclass
class VideoOutputTerminal(Struct):
    terminal_id: int
    terminal_type: int
    assoc_terminal: int
    source_id: int
    terminal_index: int
    specific: bytes = b""
    terminal: Optional[str] = string_field()

    MIN_LENGTH = 6
    STRINGS = {"terminal": "terminal_index"}

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u16(), c.u8(), c.u8(), c.u8(), c.rest())

    def _encode(self, b):
        b.u8(self.terminal_id).u16(self.terminal_type).u8(self.assoc_terminal)
        b.u8(self.source_id).u8(self.terminal_index).raw(self.specific)

@dataclass
class VideoSelectorUnit(Struct):
    unit_id: int
    source_ids: List[int]
    selector_index: int
    selector: Optional[str] = string_field()

    MIN_LENGTH = 3
    STRINGS = {"selector": "selector_index"}

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        source_ids = c.u8s(c.u8())
        return cls(unit_id, source_ids, c.u8())

    def _encode(self, b):
        b.u8(self.unit_id).u8(len(self.source_ids)).u8s(self.source_ids)
        b.u8(self.selector_index)

@dataclass
class VideoProcessingUnit(Struct):
    """
    Processing unit. bmVideoStandards only exists from UVC 1.1 on.
    """
    unit_id: int
    source_id: int
    max_multiplier: int
    controls: bytes
    processing_index: int
    video_standards: Optional[int] = None
    processing: Optional[str] = string_field()

    MIN_LENGTH = 6
    STRINGS = {"processing": "processing_index"}

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        source_id = c.u8()
        max_multiplier = c.u16()
        controls = c.take(c.u8())
        processing_index = c.u8()
        video_standards = c.u8() if c.remaining else None
        return cls(unit_id, source_id, max_multiplier, controls,
                   processing_index, video_standards)

    def _encode(self, b):
        b.u8(self.unit_id).u8(self.source_id).u16(self.max_multiplier)
        b.u8(len(self.controls)).raw(self.controls)
        b.u8(self.processing_index)
        if self.video_standards is not None:
            b.u8(self.video_standards)

@dataclass
class VideoExtensionUnit(Struct):
    unit_id: int
    extension_code: uuid.UUID
    num_controls: int
    source_ids: List[int]
    controls: bytes
    extension_index: int
    extension: Optional[str] = string_field()

    MIN_LENGTH = 21
    STRINGS = {"extension": "extension_index"}

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        extension_code = _guid(c)
        num_controls = c.u8()
        source_ids = c.u8s(c.u8())
        controls = c.take(c.u8())
        return cls(unit_id, extension_code, num_controls, source_ids,
                   controls, c.u8())

    def _encode(self, b):
        b.u8(self.unit_id).raw(self.extension_code.bytes_le)
        b.u8(self.num_controls)
        b.u8(len(self.source_ids)).u8s(self.source_ids)
        b.u8(len(self.controls)).raw(self.controls)
        b.u8(self.extension_index)

@dataclass
class VideoEncodingUnit(Struct):
    unit_id: int
    source_id: int
    encoding_index: int
    controls: bytes
    controls_runtime: bytes
    encoding: Optional[str] = string_field()

    MIN_LENGTH = 4
    STRINGS = {"encoding": "encoding_index"}

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        source_id = c.u8()
        encoding_index = c.u8()
        size = c.u8()
        return cls(unit_id, source_id, encoding_index, c.take(size),
                   c.take(size))

    def _encode(self, b):
        b.u8(self.unit_id).u8(self.source_id).u8(self.encoding_index)
        b.u8(len(self.controls)).raw(self.controls).raw(self.controls_runtime)

@dataclass
class VideoInputHeader(Struct):
    """
    Streaming input header; `controls` holds one bmaControls entry of
    control_size bytes per format.
    """
    total_length: int
    endpoint_address: int
    info: int
    terminal_link: int
    still_capture_method: int
    trigger_support: int
    trigger_usage: int
    control_size: int
    controls: List[int]

    MIN_LENGTH = 10

    @property
    def num_formats(self):
        return len(self.controls)

    @classmethod
    def _decode(cls, c):
        num_formats = c.u8()
        total_length = c.u16()
        endpoint_address = c.u8()
        info = c.u8()
        terminal_link = c.u8()
        still_capture_method = c.u8()
        trigger_support = c.u8()
        trigger_usage = c.u8()
        control_size = c.u8()
        controls = c.uints(control_size, num_formats)
        return cls(total_length, endpoint_address, info, terminal_link,
                   still_capture_method, trigger_support, trigger_usage,
                   control_size, controls)

    def _encode(self, b):
        b.u8(len(self.controls)).u16(self.total_length)
        b.u8(self.endpoint_address).u8(self.info).u8(self.terminal_link)
        b.u8(self.still_capture_method).u8(self.trigger_support)
        b.u8(self.trigger_usage).u8(self.control_size)
        b.uints(self.control_size, self.controls)

@dataclass
class VideoFormatUncompressed(Struct):
    format_index: int
    num_frame_descriptors: int
    guid_format: uuid.UUID
    bits_per_pixel: int
    default_frame_index: int
    aspect_ratio_x: int
    aspect_ratio_y: int
    interlace_flags: int
    copy_protect: int

    MIN_LENGTH = 24

    @property
    def fourcc(self):
        """
        Four character code from the first bytes of the format GUID
        """
        return self.guid_format.bytes_le[:4].decode("ascii", "replace")

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u8(), _guid(c), c.u8(), c.u8(), c.u8(), c.u8(),
                   c.u8(), c.u8())

    def _encode(self, b):
        b.u8(self.format_index).u8(self.num_frame_descriptors)
        b.raw(self.guid_format.bytes_le).u8(self.bits_per_pixel)
        b.u8(self.default_frame_index).u8(self.aspect_ratio_x)
        b.u8(self.aspect_ratio_y).u8(self.interlace_flags).u8(self.copy_protect)

@dataclass
class VideoFormatMjpeg(Struct):
    format_index: int
    num_frame_descriptors: int
    flags: int
    default_frame_index: int
    aspect_ratio_x: int
    aspect_ratio_y: int
    interlace_flags: int
    copy_protect: int

    MIN_LENGTH = 8

    @classmethod
    def _decode(cls, c):
        return cls(*[c.u8() for _ in range(8)])

    def _encode(self, b):
        b.u8(self.format_index).u8(self.num_frame_descriptors).u8(self.flags)
        b.u8(self.default_frame_index).u8(self.aspect_ratio_x)
        b.u8(self.aspect_ratio_y).u8(self.interlace_flags).u8(self.copy_protect)

@dataclass
class VideoFrame(Struct):
    """
    Uncompressed or MJPEG frame. Intervals are in 100ns units; when
    frame_interval_type is 0 they are (min, max, step).
    """
    frame_index: int
    capabilities: int
    width: int
    height: int
    min_bit_rate: int
    max_bit_rate: int
    max_video_frame_buffer_size: int
    default_frame_interval: int
    frame_interval_type: int
    intervals: List[int]

    MIN_LENGTH = 23

    @property
    def continuous(self):
        return self.frame_interval_type == 0

    @classmethod
    def _decode(cls, c):
        frame_index = c.u8()
        capabilities = c.u8()
        width = c.u16()
        height = c.u16()
        min_bit_rate = c.u32()
        max_bit_rate = c.u32()
        max_video_frame_buffer_size = c.u32()
        default_frame_interval = c.u32()
        frame_interval_type = c.u8()
        intervals = c.u32s(frame_interval_type or 3)
        return cls(frame_index, capabilities, width, height, min_bit_rate,
                   max_bit_rate, max_video_frame_buffer_size,
                   default_frame_interval, frame_interval_type, intervals)

    def _encode(self, b):
        b.u8(self.frame_index).u8(self.capabilities)
        b.u16(self.width).u16(self.height)
        b.u32(self.min_bit_rate).u32(self.max_bit_rate)
        b.u32(self.max_video_frame_buffer_size)
        b.u32(self.default_frame_interval).u8(self.frame_interval_type)
        b.u32s(self.intervals)

@dataclass
class VideoColorFormat(Struct):
    color_primaries: int
    transfer_characteristics: int
    matrix_coefficients: int

    MIN_LENGTH = 3

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u8(), c.u8())

    def _encode(self, b):
        b.u8(self.color_primaries).u8(self.transfer_characteristics)
        b.u8(self.matrix_coefficients)

@dataclass
class VideoInterruptEndpoint(Struct):
    max_transfer_size: int

    MIN_LENGTH = 2

    @classmethod
    def _decode(cls, c):
        return cls(c.u16())

    def _encode(self, b):
        b.u16(self.max_transfer_size)

_CONTROL_SHAPES = {
    VideoControlSubtype.Header: VideoHeader,
    VideoControlSubtype.InputTerminal: VideoInputTerminal,
    VideoControlSubtype.OutputTerminal: VideoOutputTerminal,
    VideoControlSubtype.SelectorUnit: VideoSelectorUnit,
    VideoControlSubtype.ProcessingUnit: VideoProcessingUnit,
    VideoControlSubtype.ExtensionUnit: VideoExtensionUnit,
    VideoControlSubtype.EncodingUnit: VideoEncodingUnit,
}

_STREAMING_SHAPES = {
    VideoStreamingSubtype.InputHeader: VideoInputHeader,
    VideoStreamingSubtype.FormatUncompressed: VideoFormatUncompressed,
    VideoStreamingSubtype.FrameUncompressed: VideoFrame,
    VideoStreamingSubtype.FormatMjpeg: VideoFormatMjpeg,
    VideoStreamingSubtype.FrameMjpeg: VideoFrame,
    VideoStreamingSubtype.ColorFormat: VideoColorFormat,
}

_ENDPOINT_SHAPES = {
    VideoEndpointSubtype.Interrupt: VideoInterruptEndpoint,
}

@dataclass
class UvcDescriptor:
    descriptor_type: int
    descriptor_subtype: int
    subclass: int
    subtype: object
    interface: object

    def to_generic(self):
        return GenericDescriptor.from_payload(self.descriptor_type,
                                              self.descriptor_subtype,
                                              self.interface.encode())

    def resolve_strings(self, capability):
        self.interface.resolve_strings(capability)

def from_generic(triplet, generic):
    """
    Decode a class specific descriptor found on a Video interface.
    """
    if generic.descriptor_subtype is None:
        return generic
    if generic.descriptor_type == DescriptorType.CsEndpoint:
        subtypes, shapes = VideoEndpointSubtype, _ENDPOINT_SHAPES
    elif generic.descriptor_type != DescriptorType.CsInterface:
        return generic
    elif triplet.sub_class == VideoSubclass.Control:
        subtypes, shapes = VideoControlSubtype, _CONTROL_SHAPES
    elif triplet.sub_class == VideoSubclass.Streaming:
        subtypes, shapes = VideoStreamingSubtype, _STREAMING_SHAPES
    else:
        return generic

    payload = generic.payload
    subtype = enum_or_int(subtypes, generic.descriptor_subtype)
    shape = shapes.get(subtype)
    if shape is not None:
        interface = decode_or_invalid(shape, payload)
    elif subtype == 0:
        interface = Undefined(payload)
    else:
        interface = Generic(payload)
    return UvcDescriptor(generic.descriptor_type, generic.descriptor_subtype,
                         triplet.sub_class, subtype, interface)
