"""Small utilities: parameter files, MAC addresses and UUIDs."""

import re
import sys
import uuid

import psutil

from mddkit.errors import ModelicaError

_FLOAT_PREFIX = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:e[+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


def _atof(text):
    """Parse the leading number of ``text``; 0.0 if there is none."""
    match = _FLOAT_PREFIX.match(text)
    return float(match.group(1)) if match else 0.0


def load_real_parameter(file, name):
    """Return the value assigned to ``name`` in a text file of ``name = value`` lines.

    The name counts as found when it is followed by a space, a tab or '='.
    """
    try:
        handle = open(file, "r", encoding="utf-8", errors="replace")
    except OSError:
        raise ModelicaError(f"MDDUtilities.h: Could not open file {file}.") from None
    with handle:
        for line in handle:
            found = line.find(name)
            if found < 0:
                continue
            after = found + len(name)
            follower = line[after] if after < len(line) else ""
            if follower not in (" ", "=", "\t"):
                continue
            equals = line.find("=", found + 1)
            if equals >= 0:
                return _atof(line[equals + 1:])
    raise ModelicaError(f"MDDUtilities.h: Parameter name not found: {name}")


def _format_mac(address, upper):
    parts = [p for p in re.split(r"[:\-.]", address) if p]
    octets = [int(p, 16) for p in parts]
    spec = "{:02X}" if upper else "{:02x}"
    return "-".join(spec.format(o) for o in octets)


def get_mac_address(index):
    """Return the hardware address of the ``index``-th network interface (from 1).

    Bytes are joined with '-'. The loopback interface is skipped except on
    Windows. An empty string is returned when there is no such interface.
    """
    windows = sys.platform.startswith("win")
    position = 0
    for name, addresses in psutil.net_if_addrs().items():
        link = next((a for a in addresses if a.family == psutil.AF_LINK), None)
        if link is None:
            continue
        if not windows and name == "lo":
            continue
        position += 1
        if position == index:
            return _format_mac(link.address or "", upper=windows)
    return ""


def generate_uuid():
    """Return a new random UUID in its canonical 36-character form."""
    return str(uuid.uuid4())