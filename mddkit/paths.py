"""Small path and timing helpers."""

import time


def last_file_name(pathname):
    """Return the part of ``pathname`` after its last '/' or '\\' separator."""
    cut = max(pathname.rfind("/"), pathname.rfind("\\"))
    return pathname[cut + 1:] if cut >= 0 else pathname


def msleep(ms):
    """Sleep for ``ms`` milliseconds."""
    if ms < 0:
        raise ValueError(f"sleep time must not be negative, got {ms}")
    time.sleep(ms / 1000.0)