"""
HID class descriptor (type 0x21). It has no subtype byte: the byte after
the descriptor type is the low byte of bcdHID.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple
import logging

from ..constant import (DescriptorType, Request, RequestTypeType,
                        RequestTypeRecipient)
from ..capability import ControlRequest
from ..exception import Error
from .cursor import *
from .cursor import decode_or_invalid
from .generic import StandardDescriptor

logger = logging.getLogger(__name__)

@dataclass
class HidDescriptor(Struct):
    """
    HID descriptor; `descriptors` lists the class descriptors (usually
    one Report descriptor) as (type, length) couples.
    """
    version: int
    country_code: int
    descriptors: List[Tuple[int, int]]
    report_descriptor: Optional[bytes] = field(default = None, compare = False)

    MIN_LENGTH = 4

    @property
    def num_descriptors(self):
        return len(self.descriptors)

    @property
    def report_length(self):
        for type, length in self.descriptors:
            if type == DescriptorType.Report:
                return length
        return None

    @classmethod
    def _decode(cls, c):
        version = c.u16()
        country_code = c.u8()
        count = c.u8()
        c.require(3 * count)
        descriptors = [(c.u8(), c.u16()) for _ in range(count)]
        return cls(version, country_code, descriptors)

    def _encode(self, b):
        b.u16(self.version).u8(self.country_code).u8(len(self.descriptors))
        for type, length in self.descriptors:
            b.u8(type).u16(length)

    def fetch_report_descriptor(self, capability, interface_number):
        """
        Read the Report descriptor through a backend capability. The
        interface is claimed for the duration of the request.
        """
        length = self.report_length
        if not length:
            return None
        request = ControlRequest(control_type = RequestTypeType.Standard,
                                 recipient = RequestTypeRecipient.Interface,
                                 request = Request.GetDescriptor,
                                 value = DescriptorType.Report << 8,
                                 index = interface_number,
                                 length = length,
                                 claim_interface = True)
        try:
            self.report_descriptor = capability.get_control_message(request)
        except Error as e:
            logger.debug("Report descriptor of interface %d: %s",
                         interface_number, e)
        return self.report_descriptor

def from_generic(triplet, generic):
    if generic.descriptor_type != DescriptorType.Hid:
        return generic
    return StandardDescriptor(generic.descriptor_type,
                              decode_or_invalid(HidDescriptor, generic.body))
