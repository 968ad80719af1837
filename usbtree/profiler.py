"""
libusb1 backend: enumerate devices, read their descriptors and assemble
the system profile.
"""

import logging
import usb1

from .capability import DeviceCapability
from .constant import *
from .exception import *
from .descriptor import ClassCodeTriplet, StandardDescriptor, read_extra
from .descriptor.hid import HidDescriptor
from .descriptor import standard
from .model import *
from .topology import assemble, merge
from .util.hub import hub_get

logger = logging.getLogger(__name__)

__all__ = ["HandleCapability", "Profiler"]

_TRANSFER_ERRORS = (
    (usb1.USBErrorTimeout, TransferTimeout),
    (usb1.USBErrorPipe, TransferStalled),
    (usb1.USBErrorNoDevice, DeviceError),
    (usb1.USBErrorOverflow, TransferOverflow),
)

def transfer_error(e):
    """
    Translate a usb1 error into the matching transfer error.
    """
    for usb_error, error in _TRANSFER_ERRORS:
        if isinstance(e, usb_error):
            return error(str(e))
    return TransferError(str(e))

class HandleCapability(DeviceCapability):
    """
    DeviceCapability over an opened usb1 device handle.
    """
    def __init__(self, handle, timeout = 1000, language = None):
        self.handle = handle
        self.timeout = timeout
        self.language = language

    def get_descriptor_string(self, index):
        if not index:
            return None
        try:
            if self.language is None:
                return self.handle.getASCIIStringDescriptor(index, errors = "replace")
            return self.handle.getStringDescriptor(index, self.language,
                                                   errors = "replace")
        except usb1.USBError as e:
            logger.debug("String descriptor %d: %s", index, e)
            return None

    def _control_read(self, request):
        return bytes(self.handle.controlRead(
            request.request_type, request.request,
            request.value, request.index, request.length,
            timeout = self.timeout))

    def get_control_message(self, request):
        try:
            if request.claim_interface:
                with self.handle.claimInterface(request.index & 0xff):
                    return self._control_read(request)
            return self._control_read(request)
        except usb1.USBError as e:
            raise transfer_error(e) from e

def _extra(source, what):
    """
    Extra descriptor bytes of a usb1 configuration, setting or endpoint.
    """
    try:
        return b"".join(bytes(chunk) for chunk in source.getExtra())
    except ValueError as e:
        logger.warning("Unreadable extra descriptors of %s: %s", what, e)
        return b""

def _resolve_strings(descriptors, capability):
    for d in descriptors:
        resolve = getattr(d, "resolve_strings", None)
        if resolve is not None:
            resolve(capability)

def _super_speed(device):
    return device.speed is not None and device.speed >= Speed.Super

def _hid_reports(interface, capability):
    for d in interface.extra:
        if isinstance(d, StandardDescriptor) \
           and isinstance(d.interface, HidDescriptor):
            d.interface.fetch_report_descriptor(capability, interface.number)

class Profiler:
    """
    System profiler over a libusb1 context.

    :param context: usb1.USBContext to use, a new one is opened if None
    :param with_extra: also read configurations, class descriptors and
        device level descriptors (hub, BOS, qualifier...)
    :param ignore_access_errors: skip devices that cannot be enumerated or
        opened instead of raising
    :param strict: passed to assemble()
    :param timeout: control transfer timeout, in milliseconds
    :param language: string descriptor language id, None for the first
        language the device supports
    """
    def __init__(self, context = None, with_extra = False,
                 ignore_access_errors = True, strict = True,
                 timeout = 1000, language = None):
        self.owned = context is None
        if context is None:
            try:
                context = usb1.USBContext()
                context.open()
            except usb1.USBError as e:
                raise BackendUnavailable(str(e)) from e
        self.context = context
        self.with_extra = with_extra
        self.ignore_access_errors = ignore_access_errors
        self.strict = strict
        self.timeout = timeout
        self.language = language

    def close(self):
        if self.owned:
            self.context.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def _open(self, usb_device):
        try:
            return usb_device.open()
        except usb1.USBError as e:
            if not self.ignore_access_errors:
                raise transfer_error(e) from e
            logger.info("Cannot open %03d:%03d: %s",
                         usb_device.getBusNumber(),
                         usb_device.getDeviceAddress(), e)
            return None

    def _endpoint(self, usb_endpoint, triplet):
        return Endpoint(address = usb_endpoint.getAddress(),
                        attributes = usb_endpoint.getAttributes(),
                        max_packet_size = usb_endpoint.getMaxPacketSize(),
                        interval = usb_endpoint.getInterval(),
                        refresh = usb_endpoint.getRefresh(),
                        sync_address = usb_endpoint.getSyncAddress(),
                        extra = read_extra(_extra(usb_endpoint, "endpoint"), triplet))

    def _interface(self, setting):
        triplet = ClassCodeTriplet(setting.getClass(), setting.getSubClass(),
                                   setting.getProtocol())
        return Interface(number = setting.getNumber(),
                         alt_setting = setting.getAlternateSetting(),
                         class_code = setting.getClass(),
                         sub_class = setting.getSubClass(),
                         protocol = setting.getProtocol(),
                         string_index = setting.getDescriptor(),
                         endpoints = [self._endpoint(e, triplet) for e in setting],
                         extra = read_extra(_extra(setting, "interface"), triplet))

    def _configuration(self, usb_config, triplet):
        config = Configuration(number = usb_config.getConfigurationValue(),
                               attributes = usb_config.getAttributes(),
                               max_power = usb_config.getMaxPower(),
                               string_index = usb_config.getDescriptor(),
                               extra = read_extra(_extra(usb_config, "configuration"),
                                                  triplet))
        for usb_interface in usb_config:
            for setting in usb_interface:
                config.interfaces.append(self._interface(setting))
        return config

    def _device_extra(self, usb_device, device, capability):
        mps0 = usb_device.getMaxPacketSize0()
        if _super_speed(device):
            mps0 = 1 << mps0
        extra = DeviceExtra(max_packet_size0 = mps0)

        for usb_config in usb_device.iterConfigurations():
            extra.configurations.append(self._configuration(usb_config, device.triplet))

        if capability is None:
            return extra

        for c in extra.configurations:
            c.name = capability.get_descriptor_string(c.string_index)
            _resolve_strings(c.extra, capability)
            for i in c.interfaces:
                i.name = capability.get_descriptor_string(i.string_index)
                _resolve_strings(i.extra, capability)
                _hid_reports(i, capability)

        extra.status = standard.fetch_status(capability)
        if device.is_hub():
            extra.hub = hub_get(capability, super_speed = _super_speed(device))
        if (device.bcd_usb or 0) >= 0x0200:
            extra.qualifier = standard.fetch_device_qualifier(capability)
        extra.debug = standard.fetch_debug(capability)
        if (device.bcd_usb or 0) >= 0x0201:
            extra.bos = standard.fetch_bos(capability)
            webusb = getattr(extra.bos, "webusb", None)
            if webusb is not None:
                url = standard.fetch_webusb_url(capability, webusb)
                extra.webusb_url = str(url) if url is not None else None
        return extra

    def device(self, usb_device):
        """
        Build the Device record of a usb1 device. Children are not
        populated.
        """
        device = Device(
            location_id = LocationId(usb_device.getBusNumber(),
                                     usb_device.getDeviceAddress(),
                                     list(usb_device.getPortNumberList())),
            vendor_id = usb_device.getVendorID(),
            product_id = usb_device.getProductID(),
            bcd_usb = usb_device.getbcdUSB(),
            bcd_device = usb_device.getbcdDevice(),
            class_code = usb_device.getDeviceClass(),
            sub_class = usb_device.getDeviceSubClass(),
            protocol = usb_device.getDeviceProtocol(),
            speed = enum_or_int(Speed, usb_device.getDeviceSpeed()))

        handle = self._open(usb_device)
        capability = None
        try:
            if handle is not None:
                capability = HandleCapability(handle, self.timeout, self.language)
                device.manufacturer = capability.get_descriptor_string(
                    usb_device.getManufacturerDescriptor())
                device.name = capability.get_descriptor_string(
                    usb_device.getProductDescriptor())
                device.serial = capability.get_descriptor_string(
                    usb_device.getSerialNumberDescriptor())
            if self.with_extra:
                device.extra = self._device_extra(usb_device, device, capability)
        finally:
            if handle is not None:
                handle.close()
        return device

    def devices(self):
        """
        Iterate over Device records of all enumerated devices, in
        enumeration order.
        """
        for usb_device in self.context.getDeviceIterator(
                skip_on_error = self.ignore_access_errors):
            logger.debug("Bus %03d device %03d: %04x:%04x",
                         usb_device.getBusNumber(), usb_device.getDeviceAddress(),
                         usb_device.getVendorID(), usb_device.getProductID())
            yield self.device(usb_device)

    def profile(self):
        """
        Enumerate all devices and assemble them into a SystemProfile.
        """
        return assemble(self.devices(), {}, strict = self.strict)

    def refresh(self, profile):
        """
        Re-enumerate and merge the result into `profile`.
        """
        return merge(profile, self.profile())
