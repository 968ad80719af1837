import pytest

from usbtree.exception import TransferStalled


class DeviceStub:
    """
    Capability answering control requests from a table keyed by
    (bRequest, wValue, wIndex). Unknown requests stall.
    """
    def __init__(self, replies = None, strings = None):
        self.replies = dict(replies or {})
        self.strings = dict(strings or {})
        self.requests = []

    def get_descriptor_string(self, index):
        return self.strings.get(index)

    def get_control_message(self, request):
        self.requests.append(request)
        data = self.replies.get((request.request, request.value, request.index))
        if data is None:
            raise TransferStalled()
        return bytes(data[:request.length])


@pytest.fixture
def device_stub():
    return DeviceStub
