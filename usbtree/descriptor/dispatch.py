import logging

from ..constant import ClassCode, DescriptorType
from . import audio, cdc, hid, standard, video
from .generic import GenericDescriptor, split_descriptors

logger = logging.getLogger(__name__)

__all__ = ["resolve", "read_extra"]

_CLASS_DECODERS = {
    ClassCode.Audio: audio.from_generic,
    ClassCode.CdcCommunications: cdc.from_generic,
    ClassCode.Hid: hid.from_generic,
    ClassCode.Video: video.from_generic,
}

def resolve(triplet, generic):
    """
    Turn one GenericDescriptor into its typed form using the class context
    of the interface (or device) it was found on.

    Chunks that are neither a known standard descriptor nor class
    specific to a supported class are returned unchanged.
    """
    if generic.descriptor_type == DescriptorType.InterfaceAssociation:
        return standard.from_generic(triplet, generic)
    decoder = _CLASS_DECODERS.get(triplet.base_class)
    if decoder is None:
        return generic
    return decoder(triplet, generic)

def read_extra(data, triplet):
    """
    Decode an extra descriptor region into a list of descriptors, in
    encounter order. Bytes following a chunk whose length byte is invalid
    are dropped.
    """
    if not data:
        return []
    chunks, unconsumed = split_descriptors(data)
    if unconsumed:
        logger.warning("Dropping %d bytes of malformed extra descriptor data "
                       "(class %02x:%02x:%02x)", unconsumed, *triplet)
    return [resolve(triplet, chunk) for chunk in chunks]
