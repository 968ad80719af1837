import enum

class RequestTypeDirection(enum.IntEnum):
    HostToDevice = 0
    DeviceToHost = 1

class RequestTypeType(enum.IntEnum):
    Standard = 0
    Class = 1
    Vendor = 2
    Reserved = 3

class RequestTypeRecipient(enum.IntEnum):
    Device = 0
    Interface = 1
    Endpoint = 2
    Other = 3

class RequestType:
    @staticmethod
    def pack(direction, type, recipient):
        return (int(direction) << 7) | (int(type) << 5) | int(recipient)

class Request(enum.IntEnum):
    GetStatus = 0
    GetDescriptor = 6

class DescriptorType(enum.IntEnum):
    Device = 1
    Configuration = 2
    String = 3
    Interface = 4
    Endpoint = 5
    DeviceQualifier = 6
    OtherSpeedConfiguration = 7
    InterfacePower = 8
    Otg = 9
    Debug = 10
    InterfaceAssociation = 11
    Bos = 15
    DeviceCapability = 16
    Hid = 0x21
    Report = 0x22
    Physical = 0x23
    CsInterface = 0x24
    CsEndpoint = 0x25
    Hub = 0x29
    SsHub = 0x2a
    SsEndpointCompanion = 0x30

class ClassCode(enum.IntEnum):
    UseInterfaceDescriptor = 0x00
    Audio = 0x01
    CdcCommunications = 0x02
    Hid = 0x03
    Physical = 0x05
    Image = 0x06
    Printer = 0x07
    MassStorage = 0x08
    Hub = 0x09
    CdcData = 0x0a
    SmartCard = 0x0b
    ContentSecurity = 0x0d
    Video = 0x0e
    PersonalHealthcare = 0x0f
    AudioVideo = 0x10
    Billboard = 0x11
    UsbTypeCBridge = 0x12
    Diagnostic = 0xdc
    WirelessController = 0xe0
    Miscellaneous = 0xef
    ApplicationSpecific = 0xfe
    VendorSpecific = 0xff

class Speed(enum.IntEnum):
    """
    Connection speed, numbered like libusb's LIBUSB_SPEED_* values.
    """
    Unknown = 0
    Low = 1
    Full = 2
    High = 3
    Super = 4
    SuperPlus = 5

def enum_or_int(enum_class, value):
    """
    Convert value to a member of enum_class, or keep the raw integer when
    it is not a known member.
    """
    try:
        return enum_class(value)
    except ValueError:
        return value
