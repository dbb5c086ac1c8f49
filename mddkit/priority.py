"""Process priority control for real-time simulation runs."""

import enum
import operator
import os
import sys

import psutil

from mddkit.errors import ModelicaError, message

# Below the priority PREEMPT_RT uses for kernel tasklets and interrupt handlers.
_RT_PRIORITY = 49


class Priority(enum.IntEnum):
    """Requested process priority levels."""

    IDLE = -2
    BELOW_NORMAL = -1
    NORMAL = 0
    HIGH = 1
    REALTIME = 2


_WINDOWS_CLASSES = {
    Priority.IDLE: ("IDLE_PRIORITY_CLASS", "idle"),
    Priority.BELOW_NORMAL: ("BELOW_NORMAL_PRIORITY_CLASS", "below normal"),
    Priority.NORMAL: ("NORMAL_PRIORITY_CLASS", "normal"),
    Priority.HIGH: ("HIGH_PRIORITY_CLASS", "high"),
    Priority.REALTIME: ("REALTIME_PRIORITY_CLASS", "realtime"),
}

_NICE_STEPS = {
    Priority.IDLE: (20, "idle"),
    Priority.BELOW_NORMAL: (10, "below normal"),
    Priority.NORMAL: (0, "normal"),
    Priority.HIGH: (-20, "high"),
}


def _is_windows():
    return sys.platform.startswith("win")


class ProcessPriority:
    """Changes the priority of the current process.

    On Windows the priority class that was active when the object was created
    is restored by :meth:`close`. Elsewhere the niceness is changed by an
    increment, as ``nice`` does, and is left as it is on close.
    """

    def __init__(self):
        self._process = psutil.Process()
        self._windows = _is_windows()
        self._last = self._process.nice() if self._windows else None
        self._closed = False

    def set_priority(self, priority):
        """Set the process priority (-2 idle .. 2 realtime).

        Returns the niceness (or, on Windows, the priority class) in effect
        afterwards. Values outside the range keep the default priority.
        """
        level = operator.index(priority)
        if self._windows:
            return self._set_windows(level)
        return self._set_posix(level)

    def _set_windows(self, level):
        try:
            target = Priority(level)
        except ValueError:
            target = Priority.NORMAL
        self._apply_windows_class(target)
        return self._process.nice()

    def _apply_windows_class(self, target):
        const_name, label = _WINDOWS_CLASSES[target]
        wanted = getattr(psutil, const_name)
        if self._process.nice() == wanted:
            return
        message("setting...\n")
        try:
            self._process.nice(wanted)
        except (psutil.Error, OSError) as exc:
            message(f"LastError: {exc}\n")
        else:
            message(f"ProcessPriority set to {label}.\n")

    def _set_posix(self, level):
        message(f"Trying to set ProcessPriority: {level}.\n")
        try:
            target = Priority(level)
        except ValueError:
            message("Using default process priority\n")
            return self._process.nice()

        if target is Priority.REALTIME:
            self._set_realtime()
            return self._process.nice()

        increment, label = _NICE_STEPS[target]
        if target is Priority.HIGH:
            message('ProcessPriority "high" needs generally *root* privileges! Trying..\n')
        try:
            niceness = os.nice(increment)
        except OSError:
            raise ModelicaError(
                f"MDDRealtimeSynchronize.h: nice({increment}) failed"
            ) from None
        message(f'ProcessPriority set to {niceness}=nice({increment}) "{label}".\n')
        return niceness

    def _set_realtime(self):
        message(
            'ProcessPriority "Realtime" needs generally *root* privileges '
            "and a real-time kernel (PRREMPT_RT) for hard realtime! Trying..\n"
        )
        setter = getattr(os, "sched_setscheduler", None)
        policy = getattr(os, "SCHED_FIFO", None)
        if setter is None or policy is None:
            raise ModelicaError("MDDRealtimeSynchronize.h: sched_setscheduler failed")
        try:
            setter(0, policy, os.sched_param(_RT_PRIORITY))
        except OSError:
            raise ModelicaError(
                "MDDRealtimeSynchronize.h: sched_setscheduler failed"
            ) from None
        message('ProcessPriority set to "Realtime"!\n')

    def close(self):
        """Restore the original priority class on Windows; safe to call twice."""
        if self._closed:
            return
        self._closed = True
        if not self._windows:
            return
        for level, (const_name, _label) in _WINDOWS_CLASSES.items():
            if getattr(psutil, const_name) == self._last:
                self._apply_windows_class(level)
                return
        self._apply_windows_class(Priority.NORMAL)

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()