"""Error type and message output shared by the device driver helpers."""

import sys


class ModelicaError(RuntimeError):
    """Raised where a driver function reports a fatal error to the simulation."""


def message(text):
    """Write a message to standard output, exactly as given."""
    sys.stdout.write(text)
    sys.stdout.flush()


def warning(text):
    """Write a warning message to standard error, exactly as given."""
    sys.stderr.write(text)
    sys.stderr.flush()