"""Slow a simulation down so that simulation time follows wall-clock time."""

import math
import time
from dataclasses import dataclass, replace

from mddkit.errors import ModelicaError, message

_NS_PER_S = 1_000_000_000
_FIRST_SAMPLE = 1e-4


def _now_ns():
    return time.monotonic_ns()


def _seconds_to_ns(seconds):
    """Convert seconds to nanoseconds, flooring the fractional part."""
    fraction, whole = math.modf(seconds)
    return int(whole) * _NS_PER_S + math.floor(fraction * _NS_PER_S)


def _ns_to_seconds(ns):
    return ns / _NS_PER_S


def _sleep_until(deadline_ns):
    """Block until the monotonic clock reaches ``deadline_ns``."""
    while True:
        remaining = deadline_ns - _now_ns()
        if remaining <= 0:
            return
        time.sleep(remaining / _NS_PER_S)


def get_time_ms():
    """Return the time of a monotonic clock in milliseconds."""
    seconds, nanoseconds = divmod(_now_ns(), _NS_PER_S)
    return seconds * 1000.0 + math.floor(nanoseconds / 1e6 + 0.5)


@dataclass(frozen=True)
class SyncResult:
    """Timing figures of one synchronization step, all in seconds.

    ``computing_time`` is the wall-clock time since the previous step,
    ``remaining_time`` the time that was left before the deadline (negative
    when it was missed), ``wall_clock_time`` the time elapsed since the
    synchronizer was created and ``last_sim_time`` the simulation time of
    the previous step.
    """

    computing_time: float = 0.0
    remaining_time: float = 0.0
    wall_clock_time: float = 0.0
    last_sim_time: float = 0.0


class RealtimeSynchronizer:
    """Simple real-time synchronization that assumes a start time of zero."""

    def __init__(self):
        self._t_start = _now_ns()
        self._t_clock = self._t_start
        self.last_sim_time = 0.0
        self.last_sync_time = 0.0

    def synchronize(self, sim_time, enable_scaling, scaling):
        """Wait until wall-clock time catches up with ``sim_time``.

        With ``enable_scaling`` the step since the previous call is stretched
        by ``scaling`` (> 1 runs slower than real time); otherwise the
        deadline is ``sim_time`` itself.
        """
        previous_sim_time = self.last_sim_time
        last_clock = self._t_clock
        self._t_clock = _now_ns()
        computing_time = _ns_to_seconds(self._t_clock - last_clock)

        if enable_scaling:
            sync_time = self.last_sync_time + (sim_time - self.last_sim_time) * scaling
        else:
            sync_time = sim_time

        t_abs = self._t_start + _seconds_to_ns(sync_time)
        remaining_time = _ns_to_seconds(t_abs - self._t_clock)

        _sleep_until(t_abs)

        self._t_clock = _now_ns()
        self.last_sim_time = sim_time
        self.last_sync_time = sync_time
        return SyncResult(
            computing_time=computing_time,
            remaining_time=remaining_time,
            wall_clock_time=_ns_to_seconds(self._t_clock - self._t_start),
            last_sim_time=previous_sim_time,
        )

    def sampled_synchronize(self, sim_time, last_sim_time, scaling):
        """Wait one scaled sampling period after the previous synchronization.

        A missed deadline is not caught up in the next period. Simulation
        times below 1e-4 s count as the first sample and are not synchronized.
        """
        previous_sim_time = self.last_sim_time
        if sim_time < _FIRST_SAMPLE:
            return SyncResult(last_sim_time=previous_sim_time)
        if sim_time < last_sim_time:
            raise ModelicaError(
                f"MDDRealtimeSynchronize.h: simTime={sim_time:f} < lastSimTime={last_sim_time:f}"
            )

        sampling_period = sim_time - last_sim_time
        if sampling_period < _FIRST_SAMPLE:
            message(
                "MDDRealtimeSynchronize.h: WARNING requesting unrealistic small real-time "
                f"synchronization period of {sampling_period:f} s\n"
            )

        t_abs = self._t_clock + _seconds_to_ns(sampling_period * scaling)

        last_clock = self._t_clock
        self._t_clock = _now_ns()
        computing_time = _ns_to_seconds(self._t_clock - last_clock)
        remaining_time = _ns_to_seconds(t_abs - self._t_clock)

        _sleep_until(t_abs)

        self._t_clock = _now_ns()
        self.last_sim_time = sim_time

        elapsed = self._t_clock - self._t_start
        if elapsed < 0:
            raise ModelicaError(
                "MDDRealtimeSynchronize.h: timespec_subtract returned negative number"
            )
        return SyncResult(
            computing_time=computing_time,
            remaining_time=remaining_time,
            wall_clock_time=_ns_to_seconds(elapsed),
            last_sim_time=previous_sim_time,
        )


class RTSync:
    """Real-time synchronization with optional catching up of missed deadlines.

    With ``should_catchup_time`` the deadlines follow an ideal schedule, so a
    late step is followed by shorter waits; otherwise each period is measured
    from the end of the previous step.
    """

    def __init__(self, start_sim_time=0.0, should_catchup_time=False):
        self._t_start = _now_ns()
        self._t_last = self._t_start
        self._t_ideal = self._t_start
        self.start_sim_time = start_sim_time
        self.last_sim_time = start_sim_time
        self.should_catchup_time = bool(should_catchup_time)
        self._last_result = SyncResult(last_sim_time=start_sim_time)

    def synchronize(self, sim_time, scaling=1.0):
        """Wait until wall-clock time reaches the deadline for ``sim_time``."""
        previous_sim_time = self.last_sim_time

        if sim_time - self.start_sim_time < _FIRST_SAMPLE:
            result = SyncResult(last_sim_time=previous_sim_time)
            self._last_result = result
            return result

        if sim_time < self.last_sim_time:
            message(
                f"MDDRealtimeSynchronize.h: WARNING simTime={sim_time:f} < "
                f"lastSimTime={self.last_sim_time:f} "
                "(possibly due to solver step-size adaption)\n"
            )
            return replace(self._last_result, last_sim_time=previous_sim_time)

        sampling_period = sim_time - self.last_sim_time
        t_now = _now_ns()
        elapsed = t_now - self._t_last
        if elapsed < 0:
            raise ModelicaError("MDDRealtimeSynchronize.h: Uups, negative computing time?!")
        computing_time = _ns_to_seconds(elapsed)

        step = _seconds_to_ns(sampling_period * scaling)
        if self.should_catchup_time:
            self._t_ideal += step
            t_abs = self._t_ideal
        else:
            t_abs = self._t_last + step

        remaining_time = _ns_to_seconds(t_abs - t_now)

        _sleep_until(t_abs)

        self._t_last = _now_ns()
        self.last_sim_time = sim_time

        since_start = self._t_last - self._t_start
        if since_start < 0:
            raise ModelicaError(
                "MDDRealtimeSynchronize.h: timespec_subtract returned negative number"
            )
        result = SyncResult(
            computing_time=computing_time,
            remaining_time=remaining_time,
            wall_clock_time=_ns_to_seconds(since_start),
            last_sim_time=previous_sim_time,
        )
        self._last_result = result
        return result