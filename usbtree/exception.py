__all__ = ["Error",
           "TransferError", "TransferTimeout", "TransferStalled",
           "DeviceError", "TransferOverflow",
           "DescriptorTooShort", "InvalidPortPath", "TopologyError",
           "BackendUnavailable"]

class Error(Exception):
    pass

class TransferError(Error):
    pass
class TransferTimeout(Error):
    pass
class TransferStalled(Error):
    pass
class DeviceError(Error):
    pass
class TransferOverflow(Error):
    pass

class DescriptorTooShort(Error):
    """
    A descriptor payload is shorter than its layout requires.
    """
    def __init__(self, name, expected, actual):
        Error.__init__(self, "%s: expected at least %d bytes, got %d" % (
            name, expected, actual))
        self.name = name
        self.expected = expected
        self.actual = actual

class InvalidPortPath(Error, ValueError):
    pass

class TopologyError(Error):
    """
    A device could not be attached to the tree: its parent hub is not
    part of the enumeration.
    """
    def __init__(self, path, parent):
        Error.__init__(self, "No node at %s for device %s" % (parent, path))
        self.path = path
        self.parent = parent

class BackendUnavailable(Error):
    pass
