"""Configuration tables and error texts for Softing CANL2 interface cards."""

import enum
import operator
from dataclasses import dataclass

from mddkit.errors import ModelicaError


@dataclass(frozen=True)
class BitTiming:
    """Bit timing register values for one CAN baud rate."""

    prescaler: int
    sync_jump_width: int
    time_seg1: int
    time_seg2: int
    sample: int
    label: str


# Keyed by the baud rate enumeration value (1 = fastest).
# The sync jump width of the first five entries is 3 on purpose; the
# recommended value would be 1.
_BIT_TIMINGS = {
    1: BitTiming(1, 3, 4, 3, 0, "1 MBaud"),
    2: BitTiming(1, 3, 6, 3, 0, "800 kBaud"),
    3: BitTiming(1, 3, 8, 7, 0, "500 kBaud"),
    4: BitTiming(2, 3, 8, 7, 0, "250 kBaud"),
    5: BitTiming(4, 3, 8, 7, 0, "125 kBaud"),
    6: BitTiming(4, 4, 11, 8, 0, "100 kBaud"),
    7: BitTiming(32, 4, 16, 8, 0, "10 kBaud"),
}

# Acceptance filter and output control used when a channel is set up.
ACCEPT_MASK = 0x0000
ACCEPT_CODE = 0x0000
ACCEPT_MASK_XTD = 0x00000000
ACCEPT_CODE_XTD = 0x00000000
OUTPUT_CONTROL = -1


def bit_timing(baud_rate):
    """Return the bit timing for the baud rate enumeration value ``baud_rate`` (1..7)."""
    rate = operator.index(baud_rate)
    try:
        return _BIT_TIMINGS[rate]
    except KeyError:
        raise ModelicaError(
            "SoftingCAN: Initializing chip with not (yet) supported Baud Rate "
            f"(enum value {rate})"
        ) from None


class ObjectType(enum.IntEnum):
    """Direction and identifier format of a CAN object (numbered from 1)."""

    STD_RX = 1
    STD_TX = 2
    EXT_RX = 3
    EXT_TX = 4

    @property
    def canl2_type(self):
        """The zero-based type number the CANL2 interface expects."""
        return self.value - 1


_OBJECT_TYPE_NAMES = {
    ObjectType.STD_RX: "std rx",
    ObjectType.STD_TX: "std tx",
    ObjectType.EXT_RX: "ext rx",
    ObjectType.EXT_TX: "ext tx",
}


def object_type_name(object_type):
    """Return the short name of an object type, such as ``"std rx"``."""
    try:
        return _OBJECT_TYPE_NAMES[ObjectType(operator.index(object_type))]
    except ValueError:
        raise ModelicaError("SoftingCAN: Unsupported message type.") from None


_MINUS_ONE_DETAILS = {
    "CANL2_write_signals": (
        "CANL2_write_signals: signals have not yet been initialized, "
        "this must be done by using CANL2_init_signals() \n"
    ),
    "CANL2_set_rcv_fifo_size": (
        "CANL2_set_rcv_fifo_size: The FIFO size can not be changed, "
        "because the CAN controller is already online \n"
    ),
    "CANL2_init_signals": "CANL2_init_signals: signals have already been initialized \n",
}

_MINUS_TWO_BASE = "An exclusive input port has been defined as output. \n\n"

_MINUS_TWO_DETAILS = {
    "CANL2_write_signals": "CANL2_write_signals: write access to an input signal \n",
    "CANL2_init_signals": (
        "CANL2_init_signals: An exclusive input port has been defined as output / "
        "Error: write access to an input signal \n\n"
    ),
}

_DESCRIPTIONS = {
    -3: "Error accessing DPRAM \n\n",
    -4: "Timeout firmware communication \n\n",
    -99: (
        "Board not initialized: INIL2_initialize_channel() was not yet called "
        "or a INIL2_close_channel() was done \n\n"
    ),
    -102: "Parameter error / wrong parameter \n\n",
    -104: "Timeout firmware communication \n\n",
    -108: "Wrong hardware; (CANcard2 or EDICcard2 with 25MHz instead of 24MHz) \n\n",
    -109: "Dyn. Obj. buffer mode not enabled \n\n",
    -110: "Last request still pending \n\n",
    -111: "Receive data frame overrun \n\n",
    -112: "Receive remote frame overrun \n\n",
    -113: "Object is undefined \n\n",
    -114: "Transmit acknowledge overrun \n\n",
    -115: (
        "Object is not defined / access to an object denied, because the object "
        "has not been initialized with data using CANL2_supply_object() \n\n"
    ),
    -116: "Transmit request FIFO overrun \n\n",
    -602: "Unable to open USB pipe \n\n",
    -603: "Communication via USB pipe broken \n\n",
    -604: "No valid lookup table entry found \n\n",
    -611: "CANusb framework initialization failed \n\n",
    -1000: (
        "Invalid channel handle / Channel not initialized: INIL2_initialize_channel() "
        "was not yet called or a INIL2_close_channel() was done \n\n"
    ),
    -1002: "Too many open channels. \n\n",
    -1003: "Wrong DLL or driver version. \n\n",
    -1004: "Error while loading the firmware. (This may be a DPRAM access error) \n\n",
    -1005: "CANusb DLL (CANusbM.dll) not found \n\n",
    -536215500: "Error while calling a Windows function \n\n",
    -536215511: "Channel can not be accessed, because it is not open \n\n",
    -536215512: (
        "An incompatible firmware is running on that device "
        "(CANalyzer/CANopen/DeviceNet firmware) \n\n"
    ),
    -536215514: "Device is already open \n\n",
    -536215516: "Interrupt does not work/Interrupt test failed! \n\n",
    -536215519: "Can not access the DPRAM memory \n\n",
    -536215521: "Error while accessing hardware \n\n",
    -536215522: "Can not get a free address region for DPRAM from system \n\n",
    -536215523: "Device not found \n\n",
    -536215531: "An error occurred while hooking the interrupt service routine \n\n",
    -536215541: "Out of memory \n\n",
    -536215542: "Driver not loaded / not installed, or device is not plugged. \n\n",
    -536215546: "Illegal driver call \n\n",
    -536215550: "General Error \n\n",
    -536215551: "Internal Error \n\n",
}


def descriptive_error(code, caller_function):
    """Turn a CANL2 return code into a readable description.

    Negative codes start with a line naming the code and the calling function,
    followed by the known explanation, if any. Code -2 replaces that first
    line by its own explanation. Non-negative codes are not errors and give
    an empty string.
    """
    code = operator.index(code)
    if code >= 0:
        return ""
    text = f"CANL2 Error nr: {code} in function {caller_function}: \n"
    if code == -1:
        text += _MINUS_ONE_DETAILS.get(caller_function, "")
    elif code == -2:
        text = _MINUS_TWO_BASE + _MINUS_TWO_DETAILS.get(caller_function, "")
    else:
        text += _DESCRIPTIONS.get(code, "")
    return text