__doc__ = """
Descriptor decoding.

Extra descriptor bytes are split into GenericDescriptor chunks, then each
chunk is resolved into a typed descriptor according to the class context
of the interface it belongs to::

  from usbtree.descriptor import ClassCodeTriplet, read_extra

  triplet = ClassCodeTriplet(0x01, 0x01, 0x00)   # UAC1 Audio Control
  for d in read_extra(extra_bytes, triplet):
      print(d)

Every typed descriptor converts back to its GenericDescriptor with
to_generic(), byte for byte.
"""

from .cursor import Cursor, Builder, Struct, Invalid, Undefined, Generic
from .generic import *
from .dispatch import *
