import functools
from .exception import *

__all__ = ["PortPath"]

@functools.total_ordering
class PortPath:
    """
    Hierarchical address of a device: bus number and the ports of each
    hub traversed from the root hub. A path without ports designates the
    root hub of the bus.
    """

    __slots__ = ("_bus", "_ports")

    def __init__(self, bus, ports = ()):
        ports = tuple(ports)
        if not 0 <= bus <= 255:
            raise InvalidPortPath("Bus number %r out of range" % (bus,))
        for p in ports:
            if not 1 <= p <= 255:
                raise InvalidPortPath("Port number %r out of range" % (p,))
        self._bus = bus
        self._ports = ports

    @classmethod
    def parse(cls, text):
        """
        Parse the textual form, "<bus>-<port>.<port>...", "<bus>-0" for
        the root hub. An interface suffix (":<config>.<interface>") is
        ignored.
        """
        head = text.strip().split(":", 1)[0]
        bus, sep, ports = head.partition("-")
        if not sep or not ports:
            raise InvalidPortPath("Malformed port path %r" % text)
        try:
            bus = int(bus, 10)
            ports = [int(p, 10) for p in ports.split(".")]
        except ValueError:
            raise InvalidPortPath("Malformed port path %r" % text)
        if ports == [0]:
            ports = []
        return cls(bus, ports)

    @property
    def bus(self):
        return self._bus

    @property
    def ports(self):
        """
        Port numbers from the root hub down, as a tuple
        """
        return self._ports

    @property
    def depth(self):
        return len(self._ports)

    @property
    def is_root(self):
        return not self._ports

    @property
    def port(self):
        """
        Port number on the parent hub, 0 for the root hub
        """
        return self._ports[-1] if self._ports else 0

    def parent(self):
        """
        Path of the upstream hub, None for a root hub.
        """
        if self.is_root:
            return None
        return PortPath(self._bus, self._ports[:-1])

    def child(self, port):
        return PortPath(self._bus, self._ports + (port,))

    def is_ancestor_of(self, other):
        return (self._bus == other._bus
                and len(self._ports) < len(other._ports)
                and other._ports[:len(self._ports)] == self._ports)

    def _key(self):
        return (self._bus, self._ports)

    def __eq__(self, other):
        if not isinstance(other, PortPath):
            return NotImplemented
        return self._key() == other._key()

    def __lt__(self, other):
        if not isinstance(other, PortPath):
            return NotImplemented
        return self._key() < other._key()

    def __hash__(self):
        return hash(self._key())

    def __str__(self):
        if not self._ports:
            return "%d-0" % self._bus
        return "%d-%s" % (self._bus, ".".join(str(p) for p in self._ports))

    def __repr__(self):
        return "PortPath(%r)" % str(self)
