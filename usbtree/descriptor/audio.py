"""
USB Audio Class descriptors.

UAC1, UAC2 and UAC3 share class, subclass and subtype byte values but not
their meanings: the interface protocol selects the revision, and Audio
Control subtypes are remapped onto a single numbering before the
revision-specific layout is chosen.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union
import enum
import logging

from ..constant import DescriptorType, enum_or_int
from .cursor import *
from .cursor import decode_or_invalid
from .generic import GenericDescriptor
from . import midi

logger = logging.getLogger(__name__)

class UacProtocol(enum.IntEnum):
    Uac1 = 0x00
    Uac2 = 0x20
    Uac3 = 0x30

class AudioSubclass(enum.IntEnum):
    Undefined = 0
    Control = 1
    Streaming = 2
    MidiStreaming = 3

class ControlSubtype(enum.IntEnum):
    """
    Audio Control interface subtypes, numbered as in UAC3.
    """
    Undefined = 0x00
    Header = 0x01
    InputTerminal = 0x02
    OutputTerminal = 0x03
    ExtendedTerminal = 0x04
    MixerUnit = 0x05
    SelectorUnit = 0x06
    FeatureUnit = 0x07
    EffectUnit = 0x08
    ProcessingUnit = 0x09
    ExtensionUnit = 0x0a
    ClockSource = 0x0b
    ClockSelector = 0x0c
    ClockMultiplier = 0x0d
    SampleRateConverter = 0x0e
    Connectors = 0x0f
    PowerDomain = 0x10

_UAC1_CONTROL_SUBTYPES = {
    0x04: ControlSubtype.MixerUnit,
    0x05: ControlSubtype.SelectorUnit,
    0x06: ControlSubtype.FeatureUnit,
    0x07: ControlSubtype.ProcessingUnit,
    0x08: ControlSubtype.ExtensionUnit,
}

_UAC2_CONTROL_SUBTYPES = {
    0x04: ControlSubtype.MixerUnit,
    0x05: ControlSubtype.SelectorUnit,
    0x06: ControlSubtype.FeatureUnit,
    0x07: ControlSubtype.EffectUnit,
    0x08: ControlSubtype.ProcessingUnit,
    0x09: ControlSubtype.ExtensionUnit,
    0x0a: ControlSubtype.ClockSource,
    0x0b: ControlSubtype.ClockSelector,
    0x0c: ControlSubtype.ClockMultiplier,
    0x0d: ControlSubtype.SampleRateConverter,
}

def control_subtype(value, protocol):
    """
    Map an Audio Control subtype byte to ControlSubtype for the given
    interface protocol. Unknown values map to Undefined.
    """
    if protocol == UacProtocol.Uac1 and value in _UAC1_CONTROL_SUBTYPES:
        return _UAC1_CONTROL_SUBTYPES[value]
    if protocol == UacProtocol.Uac2 and value in _UAC2_CONTROL_SUBTYPES:
        return _UAC2_CONTROL_SUBTYPES[value]
    try:
        return ControlSubtype(value)
    except ValueError:
        return ControlSubtype.Undefined

class StreamingSubtype(enum.IntEnum):
    Undefined = 0
    General = 1
    FormatType = 2
    FormatSpecific = 3

class LockDelayUnits(enum.IntEnum):
    Undefined = 0
    Milliseconds = 1
    DecodedPcmSamples = 2

class FormatType(enum.IntEnum):
    Undefined = 0
    TypeI = 1
    TypeII = 2
    TypeIII = 3
    TypeIV = 4

class FormatTag(enum.IntEnum):
    Mpeg = 0x1001
    Ac3 = 0x1002

class ProcessingUnitType1(enum.IntEnum):
    Undefined = 0
    UpDownMix = 1
    DolbyPrologic = 2
    StereoExtender3d = 3
    Reverberation = 4
    Chorus = 5
    DynamicRangeCompressor = 6

class ProcessingUnitType2(enum.IntEnum):
    Undefined = 0
    UpDownMix = 1
    DolbyPrologic = 2
    StereoExtender = 3

class ProcessingUnitType3(enum.IntEnum):
    Undefined = 0
    UpDownMix = 1
    StereoExtender = 2
    MultiFunction = 3

class EffectUnitType(enum.IntEnum):
    Undefined = 0
    ParametricEqualizer = 1
    Reverberation = 2
    ModulationDelay = 3
    DynamicRangeCompressor = 4

class MultiFunctionAlgorithm(enum.IntFlag):
    AlgorithmUndefined = 0x01
    BeamForming = 0x02
    AcousticEchoCancellation = 0x04
    ActiveNoiseCancellation = 0x08
    BlindSourceSeparation = 0x10
    NoiseSuppression = 0x20

UAC1_CHANNEL_NAMES = [
    "Left Front (L)", "Right Front (R)", "Center Front (C)",
    "Low Frequency Enhancement (LFE)", "Left Surround (LS)",
    "Right Surround (RS)", "Left of Center (LC)", "Right of Center (RC)",
    "Surround (S)", "Side Left (SL)", "Side Right (SR)", "Top (T)",
]

UAC2_CHANNEL_NAMES = [
    "Front Left (FL)", "Front Right (FR)", "Front Center (FC)",
    "Low Frequency Effects (LFE)", "Back Left (BL)", "Back Right (BR)",
    "Front Left of Center (FLC)", "Front Right of Center (FRC)",
    "Back Center (BC)", "Side Left (SL)", "Side Right (SR)",
    "Top Center (TC)", "Top Front Left (TFL)", "Top Front Center (TFC)",
    "Top Front Right (TFR)", "Top Back Left (TBL)", "Top Back Center (TBC)",
    "Top Back Right (TBR)", "Top Front Left of Center (TFLC)",
    "Top Front Right of Center (TFRC)", "Left Low Frequency Effects (LLFE)",
    "Right Low Frequency Effects (RLFE)", "Top Side Left (TSL)",
    "Top Side Right (TSR)", "Bottom Center (BC)",
    "Back Left of Center (BLC)", "Back Right of Center (BRC)",
]

def channel_names(config, protocol):
    """
    Names of the spatial locations set in a channel config bitmap.
    """
    if protocol == UacProtocol.Uac1:
        names = UAC1_CHANNEL_NAMES
    elif protocol == UacProtocol.Uac2:
        names = UAC2_CHANNEL_NAMES
    else:
        return []
    return [name for bit, name in enumerate(names) if config & (1 << bit)]

# =============================================================================
# Audio Control: headers and terminals
# =============================================================================

@dataclass
class Header1(Struct):
    version: int
    total_length: int
    interfaces: List[int]

    MIN_LENGTH = 5

    @property
    def collection_bytes(self):
        return len(self.interfaces)

    @classmethod
    def _decode(cls, c):
        version = c.u16()
        total_length = c.u16()
        return cls(version, total_length, c.u8s(c.u8()))

    def _encode(self, b):
        b.u16(self.version).u16(self.total_length)
        b.u8(len(self.interfaces)).u8s(self.interfaces)

@dataclass
class Header2(Struct):
    version: int
    category: int
    total_length: int
    controls: int

    MIN_LENGTH = 6

    @classmethod
    def _decode(cls, c):
        return cls(c.u16(), c.u8(), c.u16(), c.u8())

    def _encode(self, b):
        b.u16(self.version).u8(self.category).u16(self.total_length).u8(self.controls)

@dataclass
class Header3(Struct):
    category: int
    total_length: int
    controls: int

    MIN_LENGTH = 7

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u16(), c.u32())

    def _encode(self, b):
        b.u8(self.category).u16(self.total_length).u32(self.controls)

@dataclass
class InputTerminal1(Struct):
    terminal_id: int
    terminal_type: int
    assoc_terminal: int
    nr_channels: int
    channel_config: int
    channel_names_index: int
    terminal_index: int
    channel_names: Optional[str] = string_field()
    terminal: Optional[str] = string_field()

    MIN_LENGTH = 9
    STRINGS = {"channel_names": "channel_names_index",
               "terminal": "terminal_index"}

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u16(), c.u8(), c.u8(), c.u16(), c.u8(), c.u8())

    def _encode(self, b):
        b.u8(self.terminal_id).u16(self.terminal_type).u8(self.assoc_terminal)
        b.u8(self.nr_channels).u16(self.channel_config)
        b.u8(self.channel_names_index).u8(self.terminal_index)

@dataclass
class InputTerminal2(Struct):
    terminal_id: int
    terminal_type: int
    assoc_terminal: int
    csource_id: int
    nr_channels: int
    channel_config: int
    channel_names_index: int
    controls: int
    terminal_index: int
    channel_names: Optional[str] = string_field()
    terminal: Optional[str] = string_field()

    MIN_LENGTH = 14
    STRINGS = {"channel_names": "channel_names_index",
               "terminal": "terminal_index"}

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u16(), c.u8(), c.u8(), c.u8(), c.u32(), c.u8(),
                   c.u16(), c.u8())

    def _encode(self, b):
        b.u8(self.terminal_id).u16(self.terminal_type).u8(self.assoc_terminal)
        b.u8(self.csource_id).u8(self.nr_channels).u32(self.channel_config)
        b.u8(self.channel_names_index).u16(self.controls).u8(self.terminal_index)

@dataclass
class InputTerminal3(Struct):
    terminal_id: int
    terminal_type: int
    assoc_terminal: int
    csource_id: int
    controls: int
    cluster_descr_id: int
    ex_terminal_descr_id: int
    connectors_descr_id: int
    terminal_descr_str: int

    MIN_LENGTH = 17

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u16(), c.u8(), c.u8(), c.u32(), c.u16(), c.u16(),
                   c.u16(), c.u16())

    def _encode(self, b):
        b.u8(self.terminal_id).u16(self.terminal_type).u8(self.assoc_terminal)
        b.u8(self.csource_id).u32(self.controls).u16(self.cluster_descr_id)
        b.u16(self.ex_terminal_descr_id).u16(self.connectors_descr_id)
        b.u16(self.terminal_descr_str)

@dataclass
class OutputTerminal1(Struct):
    terminal_id: int
    terminal_type: int
    assoc_terminal: int
    source_id: int
    terminal_index: int
    terminal: Optional[str] = string_field()

    MIN_LENGTH = 6
    STRINGS = {"terminal": "terminal_index"}

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u16(), c.u8(), c.u8(), c.u8())

    def _encode(self, b):
        b.u8(self.terminal_id).u16(self.terminal_type).u8(self.assoc_terminal)
        b.u8(self.source_id).u8(self.terminal_index)

@dataclass
class OutputTerminal2(Struct):
    terminal_id: int
    terminal_type: int
    assoc_terminal: int
    source_id: int
    csource_id: int
    controls: int
    terminal_index: int
    terminal: Optional[str] = string_field()

    MIN_LENGTH = 9
    STRINGS = {"terminal": "terminal_index"}

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u16(), c.u8(), c.u8(), c.u8(), c.u16(), c.u8())

    def _encode(self, b):
        b.u8(self.terminal_id).u16(self.terminal_type).u8(self.assoc_terminal)
        b.u8(self.source_id).u8(self.csource_id).u16(self.controls)
        b.u8(self.terminal_index)

@dataclass
class OutputTerminal3(Struct):
    terminal_id: int
    terminal_type: int
    assoc_terminal: int
    source_id: int
    csource_id: int
    controls: int
    ex_terminal_descr_id: int
    connectors_descr_id: int
    terminal_descr_str: int

    MIN_LENGTH = 16

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u16(), c.u8(), c.u8(), c.u8(), c.u32(), c.u16(),
                   c.u16(), c.u16())

    def _encode(self, b):
        b.u8(self.terminal_id).u16(self.terminal_type).u8(self.assoc_terminal)
        b.u8(self.source_id).u8(self.csource_id).u32(self.controls)
        b.u16(self.ex_terminal_descr_id).u16(self.connectors_descr_id)
        b.u16(self.terminal_descr_str)

@dataclass
class ExtendedTerminalHeader(Struct):
    descriptor_id: int
    nr_channels: int

    MIN_LENGTH = 3

    @classmethod
    def _decode(cls, c):
        return cls(c.u16(), c.u8())

    def _encode(self, b):
        b.u16(self.descriptor_id).u8(self.nr_channels)

@dataclass
class PowerDomain(Struct):
    power_domain_id: int
    recovery_time_1: int
    recovery_time_2: int
    entity_ids: List[int]
    domain_descr_str: int

    MIN_LENGTH = 8

    @classmethod
    def _decode(cls, c):
        power_domain_id = c.u8()
        recovery_time_1 = c.u16()
        recovery_time_2 = c.u16()
        entity_ids = c.u8s(c.u8())
        return cls(power_domain_id, recovery_time_1, recovery_time_2,
                   entity_ids, c.u16())

    def _encode(self, b):
        b.u8(self.power_domain_id).u16(self.recovery_time_1)
        b.u16(self.recovery_time_2)
        b.u8(len(self.entity_ids)).u8s(self.entity_ids)
        b.u16(self.domain_descr_str)

# =============================================================================
# Audio Control: units
# =============================================================================

@dataclass
class MixerUnit1(Struct):
    unit_id: int
    source_ids: List[int]
    nr_channels: int
    channel_config: int
    channel_names_index: int
    controls: bytes
    mixer_index: int
    channel_names: Optional[str] = string_field()
    mixer: Optional[str] = string_field()

    MIN_LENGTH = 7
    STRINGS = {"channel_names": "channel_names_index", "mixer": "mixer_index"}

    @property
    def nr_in_pins(self):
        return len(self.source_ids)

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        source_ids = c.u8s(c.u8())
        nr_channels = c.u8()
        channel_config = c.u16()
        channel_names_index = c.u8()
        # bmControls fills everything up to the trailing iMixer
        c.require(1)
        controls = c.take(c.remaining - 1)
        return cls(unit_id, source_ids, nr_channels, channel_config,
                   channel_names_index, controls, c.u8())

    def _encode(self, b):
        b.u8(self.unit_id).u8(len(self.source_ids)).u8s(self.source_ids)
        b.u8(self.nr_channels).u16(self.channel_config)
        b.u8(self.channel_names_index).raw(self.controls).u8(self.mixer_index)

@dataclass
class MixerUnit2(Struct):
    unit_id: int
    source_ids: List[int]
    nr_channels: int
    channel_config: int
    channel_names_index: int
    mixer_controls: bytes
    controls: int
    mixer_index: int
    channel_names: Optional[str] = string_field()
    mixer: Optional[str] = string_field()

    MIN_LENGTH = 10
    STRINGS = {"channel_names": "channel_names_index", "mixer": "mixer_index"}

    @property
    def nr_in_pins(self):
        return len(self.source_ids)

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        source_ids = c.u8s(c.u8())
        nr_channels = c.u8()
        channel_config = c.u32()
        channel_names_index = c.u8()
        c.require(2)
        mixer_controls = c.take(c.remaining - 2)
        return cls(unit_id, source_ids, nr_channels, channel_config,
                   channel_names_index, mixer_controls, c.u8(), c.u8())

    def _encode(self, b):
        b.u8(self.unit_id).u8(len(self.source_ids)).u8s(self.source_ids)
        b.u8(self.nr_channels).u32(self.channel_config)
        b.u8(self.channel_names_index).raw(self.mixer_controls)
        b.u8(self.controls).u8(self.mixer_index)

@dataclass
class MixerUnit3(Struct):
    unit_id: int
    source_ids: List[int]
    cluster_descr_id: int
    mixer_controls: bytes
    controls: int
    mixer_descr_str: int

    MIN_LENGTH = 10

    @property
    def nr_in_pins(self):
        return len(self.source_ids)

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        source_ids = c.u8s(c.u8())
        cluster_descr_id = c.u16()
        c.require(6)
        mixer_controls = c.take(c.remaining - 6)
        return cls(unit_id, source_ids, cluster_descr_id, mixer_controls,
                   c.u32(), c.u16())

    def _encode(self, b):
        b.u8(self.unit_id).u8(len(self.source_ids)).u8s(self.source_ids)
        b.u16(self.cluster_descr_id).raw(self.mixer_controls)
        b.u32(self.controls).u16(self.mixer_descr_str)

@dataclass
class SelectorUnit1(Struct):
    unit_id: int
    source_ids: List[int]
    selector_index: int
    selector: Optional[str] = string_field()

    MIN_LENGTH = 3
    STRINGS = {"selector": "selector_index"}

    @property
    def nr_in_pins(self):
        return len(self.source_ids)

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        source_ids = c.u8s(c.u8())
        return cls(unit_id, source_ids, c.u8())

    def _encode(self, b):
        b.u8(self.unit_id).u8(len(self.source_ids)).u8s(self.source_ids)
        b.u8(self.selector_index)

@dataclass
class SelectorUnit2(Struct):
    unit_id: int
    source_ids: List[int]
    controls: int
    selector_index: int
    selector: Optional[str] = string_field()

    MIN_LENGTH = 4
    STRINGS = {"selector": "selector_index"}

    @property
    def nr_in_pins(self):
        return len(self.source_ids)

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        source_ids = c.u8s(c.u8())
        return cls(unit_id, source_ids, c.u8(), c.u8())

    def _encode(self, b):
        b.u8(self.unit_id).u8(len(self.source_ids)).u8s(self.source_ids)
        b.u8(self.controls).u8(self.selector_index)

@dataclass
class SelectorUnit3(Struct):
    unit_id: int
    source_ids: List[int]
    controls: int
    selector_descr_str: int

    MIN_LENGTH = 8

    @property
    def nr_in_pins(self):
        return len(self.source_ids)

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        source_ids = c.u8s(c.u8())
        return cls(unit_id, source_ids, c.u32(), c.u16())

    def _encode(self, b):
        b.u8(self.unit_id).u8(len(self.source_ids)).u8s(self.source_ids)
        b.u32(self.controls).u16(self.selector_descr_str)

@dataclass
class ProcessingModes1(Struct):
    """
    Up/Down-mix and Dolby Prologic mode list, 16-bit channel configs.
    """
    modes: List[int]

    MIN_LENGTH = 1

    @classmethod
    def _decode(cls, c):
        return cls(c.u16s(c.u8()))

    def _encode(self, b):
        b.u8(len(self.modes)).u16s(self.modes)

@dataclass
class ProcessingModes2(Struct):
    """
    Up/Down-mix and Dolby Prologic mode list, 32-bit channel configs.
    """
    modes: List[int]

    MIN_LENGTH = 1

    @classmethod
    def _decode(cls, c):
        return cls(c.u32s(c.u8()))

    def _encode(self, b):
        b.u8(len(self.modes)).u32s(self.modes)

@dataclass
class UpDownMix3(Struct):
    controls: int
    cluster_descr_ids: List[int]

    MIN_LENGTH = 5

    @classmethod
    def _decode(cls, c):
        controls = c.u32()
        return cls(controls, c.u16s(c.u8()))

    def _encode(self, b):
        b.u32(self.controls).u8(len(self.cluster_descr_ids))
        b.u16s(self.cluster_descr_ids)

@dataclass
class StereoExtender3(Struct):
    controls: int

    MIN_LENGTH = 4

    @classmethod
    def _decode(cls, c):
        return cls(c.u32())

    def _encode(self, b):
        b.u32(self.controls)

@dataclass
class MultiFunction3(Struct):
    controls: int
    cluster_descr_id: int
    algorithms: int

    MIN_LENGTH = 10

    @property
    def algorithm_flags(self):
        return MultiFunctionAlgorithm(self.algorithms & 0x3f)

    @classmethod
    def _decode(cls, c):
        return cls(c.u32(), c.u16(), c.u32())

    def _encode(self, b):
        b.u32(self.controls).u16(self.cluster_descr_id).u32(self.algorithms)

@dataclass
class ProcessingUnit1(Struct):
    unit_id: int
    process_type: int
    source_ids: List[int]
    nr_channels: int
    channel_config: int
    channel_names_index: int
    controls: bytes
    processing_index: int
    specific: Optional[ProcessingModes1] = None
    channel_names: Optional[str] = string_field()
    processing: Optional[str] = string_field()

    MIN_LENGTH = 10
    STRINGS = {"channel_names": "channel_names_index",
               "processing": "processing_index"}

    @property
    def nr_in_pins(self):
        return len(self.source_ids)

    @property
    def kind(self):
        return enum_or_int(ProcessingUnitType1, self.process_type)

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        process_type = c.u16()
        source_ids = c.u8s(c.u8())
        nr_channels = c.u8()
        channel_config = c.u16()
        channel_names_index = c.u8()
        controls = c.take(c.u8())
        processing_index = c.u8()
        specific = None
        if (process_type in (ProcessingUnitType1.UpDownMix,
                             ProcessingUnitType1.DolbyPrologic)
                and c.remaining):
            specific = ProcessingModes1._decode(c)
        return cls(unit_id, process_type, source_ids, nr_channels,
                   channel_config, channel_names_index, controls,
                   processing_index, specific)

    def _encode(self, b):
        b.u8(self.unit_id).u16(self.process_type)
        b.u8(len(self.source_ids)).u8s(self.source_ids)
        b.u8(self.nr_channels).u16(self.channel_config)
        b.u8(self.channel_names_index)
        b.u8(len(self.controls)).raw(self.controls)
        b.u8(self.processing_index)
        if self.specific is not None:
            self.specific._encode(b)

@dataclass
class ProcessingUnit2(Struct):
    unit_id: int
    process_type: int
    source_ids: List[int]
    nr_channels: int
    channel_config: int
    channel_names_index: int
    controls: int
    processing_index: int
    specific: Optional[ProcessingModes2] = None
    channel_names: Optional[str] = string_field()
    processing: Optional[str] = string_field()

    MIN_LENGTH = 13
    STRINGS = {"channel_names": "channel_names_index",
               "processing": "processing_index"}

    @property
    def nr_in_pins(self):
        return len(self.source_ids)

    @property
    def kind(self):
        return enum_or_int(ProcessingUnitType2, self.process_type)

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        process_type = c.u16()
        source_ids = c.u8s(c.u8())
        nr_channels = c.u8()
        channel_config = c.u32()
        channel_names_index = c.u8()
        controls = c.u16()
        processing_index = c.u8()
        specific = None
        if (process_type in (ProcessingUnitType2.UpDownMix,
                             ProcessingUnitType2.DolbyPrologic)
                and c.remaining):
            specific = ProcessingModes2._decode(c)
        return cls(unit_id, process_type, source_ids, nr_channels,
                   channel_config, channel_names_index, controls,
                   processing_index, specific)

    def _encode(self, b):
        b.u8(self.unit_id).u16(self.process_type)
        b.u8(len(self.source_ids)).u8s(self.source_ids)
        b.u8(self.nr_channels).u32(self.channel_config)
        b.u8(self.channel_names_index).u16(self.controls)
        b.u8(self.processing_index)
        if self.specific is not None:
            self.specific._encode(b)

_PROCESSING_SPECIFIC_3 = {
    ProcessingUnitType3.UpDownMix: UpDownMix3,
    ProcessingUnitType3.StereoExtender: StereoExtender3,
    ProcessingUnitType3.MultiFunction: MultiFunction3,
}

@dataclass
class ProcessingUnit3(Struct):
    unit_id: int
    process_type: int
    source_ids: List[int]
    processing_descr_str: int
    specific: Union[UpDownMix3, StereoExtender3, MultiFunction3, None] = None

    MIN_LENGTH = 6

    @property
    def nr_in_pins(self):
        return len(self.source_ids)

    @property
    def kind(self):
        return enum_or_int(ProcessingUnitType3, self.process_type)

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        process_type = c.u16()
        source_ids = c.u8s(c.u8())
        processing_descr_str = c.u16()
        specific = None
        shape = _PROCESSING_SPECIFIC_3.get(process_type)
        if shape is not None and c.remaining:
            specific = shape._decode(c)
        return cls(unit_id, process_type, source_ids, processing_descr_str,
                   specific)

    def _encode(self, b):
        b.u8(self.unit_id).u16(self.process_type)
        b.u8(len(self.source_ids)).u8s(self.source_ids)
        b.u16(self.processing_descr_str)
        if self.specific is not None:
            self.specific._encode(b)

def _word_controls(c, index_size):
    """
    bmaControls words filling the payload up to a trailing string index of
    index_size bytes. Bytes short of a whole word are returned apart.
    """
    c.require(index_size)
    span = c.remaining - index_size
    return c.u32s(span // 4), c.take(span % 4)

@dataclass
class EffectUnit2(Struct):
    unit_id: int
    effect_type: int
    source_id: int
    controls: List[int]
    effect_index: int
    padding: bytes = field(default = b"", repr = False)
    effect: Optional[str] = string_field()

    MIN_LENGTH = 9
    STRINGS = {"effect": "effect_index"}

    @property
    def kind(self):
        return enum_or_int(EffectUnitType, self.effect_type)

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        effect_type = c.u16()
        source_id = c.u8()
        # one bmaControls word per channel, master included, then iEffects
        controls, padding = _word_controls(c, 1)
        return cls(unit_id, effect_type, source_id, controls, c.u8(), padding)

    def _encode(self, b):
        b.u8(self.unit_id).u16(self.effect_type).u8(self.source_id)
        b.u32s(self.controls).raw(self.padding).u8(self.effect_index)

@dataclass
class EffectUnit3(Struct):
    unit_id: int
    effect_type: int
    source_id: int
    controls: List[int]
    effect_descr_str: int
    padding: bytes = field(default = b"", repr = False)

    MIN_LENGTH = 10

    @property
    def kind(self):
        return enum_or_int(EffectUnitType, self.effect_type)

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        effect_type = c.u16()
        source_id = c.u8()
        controls, padding = _word_controls(c, 2)
        return cls(unit_id, effect_type, source_id, controls, c.u16(), padding)

    def _encode(self, b):
        b.u8(self.unit_id).u16(self.effect_type).u8(self.source_id)
        b.u32s(self.controls).raw(self.padding).u16(self.effect_descr_str)

@dataclass
class FeatureUnit1(Struct):
    unit_id: int
    source_id: int
    control_size: int
    controls: List[int]
    feature_index: int
    feature: Optional[str] = string_field()

    MIN_LENGTH = 4
    STRINGS = {"feature": "feature_index"}

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        source_id = c.u8()
        control_size = c.u8()
        # at least the master control and iFeature
        c.require(control_size + 1)
        count = (c.remaining - 1) // control_size if control_size else 0
        controls = c.uints(control_size, count)
        return cls(unit_id, source_id, control_size, controls, c.u8())

    def _encode(self, b):
        b.u8(self.unit_id).u8(self.source_id).u8(self.control_size)
        b.uints(self.control_size, self.controls).u8(self.feature_index)

@dataclass
class FeatureUnit2(Struct):
    unit_id: int
    source_id: int
    controls: List[int]
    feature_index: int
    padding: bytes = field(default = b"", repr = False)
    feature: Optional[str] = string_field()

    MIN_LENGTH = 7
    STRINGS = {"feature": "feature_index"}

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        source_id = c.u8()
        controls, padding = _word_controls(c, 1)
        return cls(unit_id, source_id, controls, c.u8(), padding)

    def _encode(self, b):
        b.u8(self.unit_id).u8(self.source_id)
        b.u32s(self.controls).raw(self.padding).u8(self.feature_index)

@dataclass
class FeatureUnit3(Struct):
    unit_id: int
    source_id: int
    controls: List[int]
    feature_descr_str: int
    padding: bytes = field(default = b"", repr = False)

    MIN_LENGTH = 8

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        source_id = c.u8()
        controls, padding = _word_controls(c, 2)
        return cls(unit_id, source_id, controls, c.u16(), padding)

    def _encode(self, b):
        b.u8(self.unit_id).u8(self.source_id)
        b.u32s(self.controls).raw(self.padding).u16(self.feature_descr_str)

@dataclass
class ExtensionUnit1(Struct):
    unit_id: int
    extension_code: int
    source_ids: List[int]
    nr_channels: int
    channel_config: int
    channel_names_index: int
    controls: bytes
    extension_index: int
    channel_names: Optional[str] = string_field()
    extension: Optional[str] = string_field()

    MIN_LENGTH = 10
    STRINGS = {"channel_names": "channel_names_index",
               "extension": "extension_index"}

    @property
    def nr_in_pins(self):
        return len(self.source_ids)

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        extension_code = c.u16()
        source_ids = c.u8s(c.u8())
        nr_channels = c.u8()
        channel_config = c.u16()
        channel_names_index = c.u8()
        controls = c.take(c.u8())
        return cls(unit_id, extension_code, source_ids, nr_channels,
                   channel_config, channel_names_index, controls, c.u8())

    def _encode(self, b):
        b.u8(self.unit_id).u16(self.extension_code)
        b.u8(len(self.source_ids)).u8s(self.source_ids)
        b.u8(self.nr_channels).u16(self.channel_config)
        b.u8(self.channel_names_index)
        b.u8(len(self.controls)).raw(self.controls)
        b.u8(self.extension_index)

@dataclass
class ExtensionUnit2(Struct):
    unit_id: int
    extension_code: int
    source_ids: List[int]
    nr_channels: int
    channel_config: int
    channel_names_index: int
    controls: int
    extension_index: int
    channel_names: Optional[str] = string_field()
    extension: Optional[str] = string_field()

    MIN_LENGTH = 12
    STRINGS = {"channel_names": "channel_names_index",
               "extension": "extension_index"}

    @property
    def nr_in_pins(self):
        return len(self.source_ids)

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        extension_code = c.u16()
        source_ids = c.u8s(c.u8())
        return cls(unit_id, extension_code, source_ids, c.u8(), c.u32(),
                   c.u8(), c.u8(), c.u8())

    def _encode(self, b):
        b.u8(self.unit_id).u16(self.extension_code)
        b.u8(len(self.source_ids)).u8s(self.source_ids)
        b.u8(self.nr_channels).u32(self.channel_config)
        b.u8(self.channel_names_index).u8(self.controls)
        b.u8(self.extension_index)

@dataclass
class ExtensionUnit3(Struct):
    unit_id: int
    extension_code: int
    source_ids: List[int]
    extension_descr_str: int
    controls: int
    cluster_descr_id: int

    MIN_LENGTH = 12

    @property
    def nr_in_pins(self):
        return len(self.source_ids)

    @classmethod
    def _decode(cls, c):
        unit_id = c.u8()
        extension_code = c.u16()
        source_ids = c.u8s(c.u8())
        return cls(unit_id, extension_code, source_ids, c.u16(), c.u32(),
                   c.u16())

    def _encode(self, b):
        b.u8(self.unit_id).u16(self.extension_code)
        b.u8(len(self.source_ids)).u8s(self.source_ids)
        b.u16(self.extension_descr_str).u32(self.controls)
        b.u16(self.cluster_descr_id)

# =============================================================================
# Audio Control: clock entities
# =============================================================================

@dataclass
class ClockSource2(Struct):
    clock_id: int
    attributes: int
    controls: int
    assoc_terminal: int
    clock_source_index: int
    clock_source: Optional[str] = string_field()

    MIN_LENGTH = 5
    STRINGS = {"clock_source": "clock_source_index"}

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u8(), c.u8(), c.u8(), c.u8())

    def _encode(self, b):
        b.u8(self.clock_id).u8(self.attributes).u8(self.controls)
        b.u8(self.assoc_terminal).u8(self.clock_source_index)

@dataclass
class ClockSource3(Struct):
    clock_id: int
    attributes: int
    controls: int
    reference_terminal: int
    clock_source_descr_str: int

    MIN_LENGTH = 9

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u8(), c.u32(), c.u8(), c.u16())

    def _encode(self, b):
        b.u8(self.clock_id).u8(self.attributes).u32(self.controls)
        b.u8(self.reference_terminal).u16(self.clock_source_descr_str)

@dataclass
class ClockSelector2(Struct):
    clock_id: int
    csource_ids: List[int]
    controls: int
    clock_selector_index: int
    clock_selector: Optional[str] = string_field()

    MIN_LENGTH = 4
    STRINGS = {"clock_selector": "clock_selector_index"}

    @property
    def nr_in_pins(self):
        return len(self.csource_ids)

    @classmethod
    def _decode(cls, c):
        clock_id = c.u8()
        csource_ids = c.u8s(c.u8())
        return cls(clock_id, csource_ids, c.u8(), c.u8())

    def _encode(self, b):
        b.u8(self.clock_id).u8(len(self.csource_ids)).u8s(self.csource_ids)
        b.u8(self.controls).u8(self.clock_selector_index)

@dataclass
class ClockSelector3(Struct):
    clock_id: int
    csource_ids: List[int]
    controls: int
    clock_selector_descr_str: int

    MIN_LENGTH = 8

    @property
    def nr_in_pins(self):
        return len(self.csource_ids)

    @classmethod
    def _decode(cls, c):
        clock_id = c.u8()
        csource_ids = c.u8s(c.u8())
        return cls(clock_id, csource_ids, c.u32(), c.u16())

    def _encode(self, b):
        b.u8(self.clock_id).u8(len(self.csource_ids)).u8s(self.csource_ids)
        b.u32(self.controls).u16(self.clock_selector_descr_str)

@dataclass
class ClockMultiplier2(Struct):
    clock_id: int
    csource_id: int
    controls: int
    clock_multiplier_index: int
    clock_multiplier: Optional[str] = string_field()

    MIN_LENGTH = 4
    STRINGS = {"clock_multiplier": "clock_multiplier_index"}

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u8(), c.u8(), c.u8())

    def _encode(self, b):
        b.u8(self.clock_id).u8(self.csource_id).u8(self.controls)
        b.u8(self.clock_multiplier_index)

@dataclass
class ClockMultiplier3(Struct):
    clock_id: int
    csource_id: int
    controls: int
    clock_multiplier_descr_str: int

    MIN_LENGTH = 8

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u8(), c.u32(), c.u16())

    def _encode(self, b):
        b.u8(self.clock_id).u8(self.csource_id).u32(self.controls)
        b.u16(self.clock_multiplier_descr_str)

@dataclass
class SampleRateConverter2(Struct):
    unit_id: int
    source_id: int
    csource_in_id: int
    csource_out_id: int
    src_index: int
    src: Optional[str] = string_field()

    MIN_LENGTH = 5
    STRINGS = {"src": "src_index"}

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u8(), c.u8(), c.u8(), c.u8())

    def _encode(self, b):
        b.u8(self.unit_id).u8(self.source_id).u8(self.csource_in_id)
        b.u8(self.csource_out_id).u8(self.src_index)

@dataclass
class SampleRateConverter3(Struct):
    unit_id: int
    source_id: int
    csource_in_id: int
    csource_out_id: int
    src_descr_str: int

    MIN_LENGTH = 6

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u8(), c.u8(), c.u8(), c.u16())

    def _encode(self, b):
        b.u8(self.unit_id).u8(self.source_id).u8(self.csource_in_id)
        b.u8(self.csource_out_id).u16(self.src_descr_str)

# =============================================================================
# Audio Streaming
# =============================================================================

@dataclass
class StreamingInterface1(Struct):
    terminal_link: int
    delay: int
    format_tag: int

    MIN_LENGTH = 4

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u8(), c.u16())

    def _encode(self, b):
        b.u8(self.terminal_link).u8(self.delay).u16(self.format_tag)

@dataclass
class StreamingInterface2(Struct):
    terminal_link: int
    controls: int
    format_type: int
    formats: int
    nr_channels: int
    channel_config: int
    channel_names_index: int
    channel_names: Optional[str] = string_field()

    MIN_LENGTH = 13
    STRINGS = {"channel_names": "channel_names_index"}

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u8(), c.u8(), c.u32(), c.u8(), c.u32(), c.u8())

    def _encode(self, b):
        b.u8(self.terminal_link).u8(self.controls).u8(self.format_type)
        b.u32(self.formats).u8(self.nr_channels).u32(self.channel_config)
        b.u8(self.channel_names_index)

@dataclass
class StreamingInterface3(Struct):
    terminal_link: int
    controls: int
    cluster_descr_id: int
    formats: int
    sub_slot_size: int
    bit_resolution: int
    aux_protocols: int
    control_size: int

    MIN_LENGTH = 20

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u32(), c.u16(), c.u64(), c.u8(), c.u8(), c.u16(),
                   c.u8())

    def _encode(self, b):
        b.u8(self.terminal_link).u32(self.controls).u16(self.cluster_descr_id)
        b.u64(self.formats).u8(self.sub_slot_size).u8(self.bit_resolution)
        b.u16(self.aux_protocols).u8(self.control_size)

@dataclass
class DataStreamingEndpoint1(Struct):
    attributes: int
    lock_delay_units: int
    lock_delay: int

    MIN_LENGTH = 4

    @property
    def lock_delay_unit(self):
        return enum_or_int(LockDelayUnits, self.lock_delay_units)

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u8(), c.u16())

    def _encode(self, b):
        b.u8(self.attributes).u8(self.lock_delay_units).u16(self.lock_delay)

@dataclass
class DataStreamingEndpoint2(Struct):
    attributes: int
    controls: int
    lock_delay_units: int
    lock_delay: int

    MIN_LENGTH = 5

    @property
    def lock_delay_unit(self):
        return enum_or_int(LockDelayUnits, self.lock_delay_units)

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u8(), c.u8(), c.u16())

    def _encode(self, b):
        b.u8(self.attributes).u8(self.controls).u8(self.lock_delay_units)
        b.u16(self.lock_delay)

@dataclass
class DataStreamingEndpoint3(Struct):
    controls: int
    lock_delay_units: int
    lock_delay: int

    MIN_LENGTH = 7

    @property
    def lock_delay_unit(self):
        return enum_or_int(LockDelayUnits, self.lock_delay_units)

    @classmethod
    def _decode(cls, c):
        return cls(c.u32(), c.u8(), c.u16())

    def _encode(self, b):
        b.u32(self.controls).u8(self.lock_delay_units).u16(self.lock_delay)

def _sampling_frequencies(c):
    # bSamFreqType 0 is a continuous range given as lower and upper bounds
    sam_freq_type = c.u8()
    return sam_freq_type, c.uints(3, sam_freq_type or 2)

@dataclass
class FormatTypeI1(Struct):
    """
    UAC1 Type I and Type III format: discrete table of sampling
    frequencies, or a continuous range when sam_freq_type is 0.
    """
    nr_channels: int
    subframe_size: int
    bit_resolution: int
    sam_freq_type: int
    frequencies: List[int]

    MIN_LENGTH = 4

    @property
    def continuous(self):
        return self.sam_freq_type == 0

    @classmethod
    def _decode(cls, c):
        nr_channels = c.u8()
        subframe_size = c.u8()
        bit_resolution = c.u8()
        sam_freq_type, frequencies = _sampling_frequencies(c)
        return cls(nr_channels, subframe_size, bit_resolution, sam_freq_type,
                   frequencies)

    def _encode(self, b):
        b.u8(self.nr_channels).u8(self.subframe_size).u8(self.bit_resolution)
        b.u8(self.sam_freq_type).uints(3, self.frequencies)

class FormatTypeIII1(FormatTypeI1):
    pass

@dataclass
class FormatTypeII1(Struct):
    max_bit_rate: int
    samples_per_frame: int
    sam_freq_type: int
    frequencies: List[int]

    MIN_LENGTH = 5

    @property
    def continuous(self):
        return self.sam_freq_type == 0

    @classmethod
    def _decode(cls, c):
        max_bit_rate = c.u16()
        samples_per_frame = c.u16()
        sam_freq_type, frequencies = _sampling_frequencies(c)
        return cls(max_bit_rate, samples_per_frame, sam_freq_type, frequencies)

    def _encode(self, b):
        b.u16(self.max_bit_rate).u16(self.samples_per_frame)
        b.u8(self.sam_freq_type).uints(3, self.frequencies)

@dataclass
class FormatTypeI2(Struct):
    sub_slot_size: int
    bit_resolution: int

    MIN_LENGTH = 2

    @classmethod
    def _decode(cls, c):
        return cls(c.u8(), c.u8())

    def _encode(self, b):
        b.u8(self.sub_slot_size).u8(self.bit_resolution)

class FormatTypeIII2(FormatTypeI2):
    pass

@dataclass
class FormatTypeII2(Struct):
    max_bit_rate: int
    slots_per_frame: int

    MIN_LENGTH = 4

    @classmethod
    def _decode(cls, c):
        return cls(c.u16(), c.u16())

    def _encode(self, b):
        b.u16(self.max_bit_rate).u16(self.slots_per_frame)

_FORMAT_SHAPES = {
    (UacProtocol.Uac1, FormatType.TypeI): FormatTypeI1,
    (UacProtocol.Uac1, FormatType.TypeII): FormatTypeII1,
    (UacProtocol.Uac1, FormatType.TypeIII): FormatTypeIII1,
    (UacProtocol.Uac2, FormatType.TypeI): FormatTypeI2,
    (UacProtocol.Uac2, FormatType.TypeII): FormatTypeII2,
    (UacProtocol.Uac2, FormatType.TypeIII): FormatTypeIII2,
}

@dataclass
class StreamingFormat:
    """
    FORMAT_TYPE descriptor: bFormatType selects the layout of the rest,
    together with the interface protocol.
    """
    format_type: int
    interface: object

    MIN_LENGTH = 1

    @property
    def kind(self):
        return enum_or_int(FormatType, self.format_type)

    @classmethod
    def decode(cls, data, protocol):
        c = Cursor(data, cls.__name__).require(cls.MIN_LENGTH)
        format_type = c.u8()
        rest = c.rest()
        if protocol not in (UacProtocol.Uac1, UacProtocol.Uac2):
            return cls(format_type, Invalid(rest))
        shape = _FORMAT_SHAPES.get((protocol, format_type))
        if shape is None:
            return cls(format_type, Undefined(rest))
        return cls(format_type, shape.decode(rest))

    def encode(self):
        return bytes([self.format_type]) + self.interface.encode()

    def resolve_strings(self, capability):
        self.interface.resolve_strings(capability)

@dataclass
class MpegFormat(Struct):
    capabilities: int
    features: int

    MIN_LENGTH = 3

    @classmethod
    def _decode(cls, c):
        return cls(c.u16(), c.u8())

    def _encode(self, b):
        b.u16(self.capabilities).u8(self.features)

@dataclass
class Ac3Format(Struct):
    bsid: int
    features: int

    MIN_LENGTH = 5

    @classmethod
    def _decode(cls, c):
        return cls(c.u32(), c.u8())

    def _encode(self, b):
        b.u32(self.bsid).u8(self.features)

_FORMAT_SPECIFIC_SHAPES = {
    FormatTag.Mpeg: MpegFormat,
    FormatTag.Ac3: Ac3Format,
}

@dataclass
class StreamingFormatSpecific:
    """
    FORMAT_SPECIFIC descriptor, layout selected by wFormatTag.
    """
    format_tag: int
    interface: object

    MIN_LENGTH = 2

    @classmethod
    def decode(cls, data):
        c = Cursor(data, cls.__name__).require(cls.MIN_LENGTH)
        format_tag = c.u16()
        rest = c.rest()
        shape = _FORMAT_SPECIFIC_SHAPES.get(format_tag)
        if shape is None:
            return cls(format_tag, Undefined(rest))
        return cls(format_tag, shape.decode(rest))

    def encode(self):
        return self.format_tag.to_bytes(2, "little") + self.interface.encode()

    def resolve_strings(self, capability):
        pass

# =============================================================================
# Dispatch
# =============================================================================

_CONTROL_SHAPES = {
    ControlSubtype.Header: {
        UacProtocol.Uac1: Header1,
        UacProtocol.Uac2: Header2,
        UacProtocol.Uac3: Header3,
    },
    ControlSubtype.InputTerminal: {
        UacProtocol.Uac1: InputTerminal1,
        UacProtocol.Uac2: InputTerminal2,
        UacProtocol.Uac3: InputTerminal3,
    },
    ControlSubtype.OutputTerminal: {
        UacProtocol.Uac1: OutputTerminal1,
        UacProtocol.Uac2: OutputTerminal2,
        UacProtocol.Uac3: OutputTerminal3,
    },
    ControlSubtype.ExtendedTerminal: {
        UacProtocol.Uac3: ExtendedTerminalHeader,
    },
    ControlSubtype.MixerUnit: {
        UacProtocol.Uac1: MixerUnit1,
        UacProtocol.Uac2: MixerUnit2,
        UacProtocol.Uac3: MixerUnit3,
    },
    ControlSubtype.SelectorUnit: {
        UacProtocol.Uac1: SelectorUnit1,
        UacProtocol.Uac2: SelectorUnit2,
        UacProtocol.Uac3: SelectorUnit3,
    },
    ControlSubtype.FeatureUnit: {
        UacProtocol.Uac1: FeatureUnit1,
        UacProtocol.Uac2: FeatureUnit2,
        UacProtocol.Uac3: FeatureUnit3,
    },
    ControlSubtype.EffectUnit: {
        UacProtocol.Uac2: EffectUnit2,
        UacProtocol.Uac3: EffectUnit3,
    },
    ControlSubtype.ProcessingUnit: {
        UacProtocol.Uac1: ProcessingUnit1,
        UacProtocol.Uac2: ProcessingUnit2,
        UacProtocol.Uac3: ProcessingUnit3,
    },
    ControlSubtype.ExtensionUnit: {
        UacProtocol.Uac1: ExtensionUnit1,
        UacProtocol.Uac2: ExtensionUnit2,
        UacProtocol.Uac3: ExtensionUnit3,
    },
    ControlSubtype.ClockSource: {
        UacProtocol.Uac2: ClockSource2,
        UacProtocol.Uac3: ClockSource3,
    },
    ControlSubtype.ClockSelector: {
        UacProtocol.Uac2: ClockSelector2,
        UacProtocol.Uac3: ClockSelector3,
    },
    ControlSubtype.ClockMultiplier: {
        UacProtocol.Uac2: ClockMultiplier2,
        UacProtocol.Uac3: ClockMultiplier3,
    },
    ControlSubtype.SampleRateConverter: {
        UacProtocol.Uac2: SampleRateConverter2,
        UacProtocol.Uac3: SampleRateConverter3,
    },
    ControlSubtype.PowerDomain: {
        UacProtocol.Uac3: PowerDomain,
    },
}

_STREAMING_INTERFACE_SHAPES = {
    UacProtocol.Uac1: StreamingInterface1,
    UacProtocol.Uac2: StreamingInterface2,
    UacProtocol.Uac3: StreamingInterface3,
}

_DATA_ENDPOINT_SHAPES = {
    UacProtocol.Uac1: DataStreamingEndpoint1,
    UacProtocol.Uac2: DataStreamingEndpoint2,
    UacProtocol.Uac3: DataStreamingEndpoint3,
}

def _unsupported(subtype, protocol, payload):
    logger.warning("Audio descriptor %s not defined for protocol 0x%02x",
                   getattr(subtype, "name", subtype), protocol)
    return Invalid(bytes(payload))

def decode_control(subtype, protocol, payload):
    """
    Decode an Audio Control interface payload for an already remapped
    ControlSubtype.
    """
    if subtype == ControlSubtype.Undefined:
        return Undefined(bytes(payload))
    shapes = _CONTROL_SHAPES.get(subtype)
    if shapes is None:
        return Generic(bytes(payload))
    shape = shapes.get(protocol)
    if shape is None:
        return _unsupported(subtype, protocol, payload)
    return decode_or_invalid(shape, payload)

def decode_streaming(descriptor_type, subtype, protocol, payload):
    """
    Decode an Audio Streaming interface or endpoint payload.
    """
    if subtype == StreamingSubtype.Undefined:
        return Undefined(bytes(payload))
    if subtype == StreamingSubtype.General:
        if descriptor_type == DescriptorType.CsEndpoint:
            shape = _DATA_ENDPOINT_SHAPES.get(protocol)
        else:
            shape = _STREAMING_INTERFACE_SHAPES.get(protocol)
        if shape is None:
            return _unsupported(subtype, protocol, payload)
        return decode_or_invalid(shape, payload)
    if protocol == UacProtocol.Uac3:
        # UAC3 reuses these codes for descriptors fetched by class request
        return Generic(bytes(payload))
    if subtype == StreamingSubtype.FormatType:
        return decode_or_invalid(StreamingFormat, payload, protocol)
    if subtype == StreamingSubtype.FormatSpecific:
        return decode_or_invalid(StreamingFormatSpecific, payload)
    return Generic(bytes(payload))

@dataclass
class UacDescriptor:
    """
    Class specific descriptor of an Audio Control or Audio Streaming
    interface or endpoint.
    """
    descriptor_type: int
    descriptor_subtype: int
    subclass: AudioSubclass
    subtype: object
    protocol: int
    interface: object

    @property
    def length(self):
        return 3 + len(self.interface.encode())

    def to_generic(self):
        return GenericDescriptor.from_payload(self.descriptor_type,
                                              self.descriptor_subtype,
                                              self.interface.encode())

    def resolve_strings(self, capability):
        self.interface.resolve_strings(capability)

def from_generic(triplet, generic):
    """
    Decode a class specific descriptor found on an Audio interface.
    Returns the GenericDescriptor unchanged when it is not class specific.
    """
    if (generic.descriptor_type not in (DescriptorType.CsInterface,
                                        DescriptorType.CsEndpoint)
            or generic.descriptor_subtype is None):
        return generic

    if triplet.sub_class == AudioSubclass.MidiStreaming:
        return midi.from_generic(triplet, generic)

    protocol = triplet.protocol
    raw_subtype = generic.descriptor_subtype
    payload = generic.payload

    if triplet.sub_class == AudioSubclass.Control:
        subtype = control_subtype(raw_subtype, protocol)
        interface = decode_control(subtype, protocol, payload)
    elif triplet.sub_class == AudioSubclass.Streaming:
        subtype = enum_or_int(StreamingSubtype, raw_subtype)
        interface = decode_streaming(generic.descriptor_type, subtype,
                                     protocol, payload)
    else:
        return generic

    return UacDescriptor(generic.descriptor_type, raw_subtype,
                         AudioSubclass(triplet.sub_class), subtype, protocol,
                         interface)
