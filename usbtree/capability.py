"""
Backend capability used while decoding: string descriptor lookup and
control transfers on an open device.
"""

from dataclasses import dataclass

from .constant import *

__all__ = ["ControlRequest", "DeviceCapability"]

@dataclass
class ControlRequest:
    """
    Control IN request. When claim_interface is set, the interface
    numbered by the low byte of index is claimed around the transfer.
    """
    control_type: RequestTypeType
    recipient: RequestTypeRecipient
    request: int
    value: int
    index: int
    length: int
    claim_interface: bool = False

    @property
    def request_type(self):
        """
        bmRequestType byte
        """
        return RequestType.pack(RequestTypeDirection.DeviceToHost,
                                self.control_type, self.recipient)

class DeviceCapability:
    """
    Interface of an open device as seen by decoders.
    """

    def get_descriptor_string(self, index):
        """
        Retrieve string descriptor `index`, None if it cannot be read.
        """
        raise NotImplementedError()

    def get_control_message(self, request):
        """
        Perform a ControlRequest and return the data read. Failures raise
        one of the transfer errors.
        """
        raise NotImplementedError()
