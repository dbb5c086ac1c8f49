from unittest import mock

import psutil
import pytest

from mddkit.errors import ModelicaError
from mddkit.priority import Priority, ProcessPriority


def test_priority_levels_match_source_numbering():
    assert [p.value for p in Priority] == [-2, -1, 0, 1, 2]
    assert Priority(-1) is Priority.BELOW_NORMAL


def test_below_normal_uses_nice_10(capsys):
    with mock.patch("os.nice", return_value=10, create=True) as nice:
        result = ProcessPriority().set_priority(-1)
    assert result == 10
    nice.assert_called_once_with(10)
    out = capsys.readouterr().out
    assert "Trying to set ProcessPriority: -1." in out
    assert 'ProcessPriority set to 10=nice(10) "below normal".' in out


def test_idle_uses_nice_20():
    with mock.patch("os.nice", return_value=19, create=True) as nice:
        result = ProcessPriority().set_priority(Priority.IDLE)
    assert result == 19
    nice.assert_called_once_with(20)


def test_normal_uses_nice_0(capsys):
    with mock.patch("os.nice", return_value=0, create=True) as nice:
        result = ProcessPriority().set_priority(0)
    assert result == 0
    nice.assert_called_once_with(0)
    assert '"normal"' in capsys.readouterr().out


def test_high_failure_raises():
    with mock.patch("os.nice", side_effect=PermissionError, create=True):
        with pytest.raises(ModelicaError, match=r"nice\(-20\) failed"):
            ProcessPriority().set_priority(1)


def test_unknown_level_keeps_default(capsys):
    with mock.patch("os.nice", create=True) as nice:
        result = ProcessPriority().set_priority(5)
    nice.assert_not_called()
    assert result == psutil.Process().nice()
    assert "Using default process priority" in capsys.readouterr().out


def test_realtime_failure_raises():
    with mock.patch("os.sched_setscheduler", side_effect=PermissionError, create=True):
        with pytest.raises(ModelicaError, match="sched_setscheduler failed"):
            ProcessPriority().set_priority(Priority.REALTIME)


def test_realtime_success_reports(capsys):
    with mock.patch("os.sched_setscheduler", create=True) as setter:
        ProcessPriority().set_priority(2)
    assert setter.call_count == 1
    assert setter.call_args.args[0] == 0
    assert 'ProcessPriority set to "Realtime"!' in capsys.readouterr().out


def test_below_normal_really_lowers_priority():
    before = psutil.Process().nice()
    with ProcessPriority() as prio:
        result = prio.set_priority(-1)
    assert result == min(before + 10, 19)
    assert psutil.Process().nice() == result


def test_context_manager_returns_self_and_close_is_repeatable():
    prio = ProcessPriority()
    with prio as entered:
        assert entered is prio
    prio.close()
    assert prio._closed is True