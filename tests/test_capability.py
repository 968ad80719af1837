"""Tests for control request packing."""

import pytest

from usbtree.capability import ControlRequest
from usbtree.constant import *


@pytest.mark.parametrize("type, recipient, expected", [
    (RequestTypeType.Standard, RequestTypeRecipient.Device, 0x80),
    (RequestTypeType.Standard, RequestTypeRecipient.Interface, 0x81),
    (RequestTypeType.Class, RequestTypeRecipient.Device, 0xa0),
    (RequestTypeType.Class, RequestTypeRecipient.Other, 0xa3),
    (RequestTypeType.Vendor, RequestTypeRecipient.Device, 0xc0),
])
def test_request_type(type, recipient, expected):
    request = ControlRequest(control_type = type, recipient = recipient,
                             request = Request.GetDescriptor,
                             value = 0, index = 0, length = 0)
    assert request.request_type == expected


def test_pack_out():
    assert RequestType.pack(RequestTypeDirection.HostToDevice,
                            RequestTypeType.Class,
                            RequestTypeRecipient.Endpoint) == 0x22


def test_enum_or_int():
    assert enum_or_int(Request, 6) is Request.GetDescriptor
    assert enum_or_int(Request, 0x55) == 0x55
