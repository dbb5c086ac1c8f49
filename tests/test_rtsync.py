import time

import pytest

from mddkit.errors import ModelicaError
from mddkit.rtsync import RealtimeSynchronizer, RTSync, SyncResult, get_time_ms


def test_get_time_ms_tracks_sleep():
    first = get_time_ms()
    time.sleep(0.05)
    second = get_time_ms()
    assert 45.0 <= second - first < 1000.0


def test_synchronize_always_in_time_without_scaling():
    ts = 0.1
    sync = RealtimeSynchronizer()
    always_in_time = True
    sim_time = ts
    while sim_time < 1.0:
        result = sync.synchronize(sim_time, False, 1.0)
        always_in_time = always_in_time and result.remaining_time > 0
        sim_time += ts
    assert always_in_time
    assert sync.last_sim_time == pytest.approx(sim_time - ts)


def test_synchronize_waits_for_simulation_time():
    sync = RealtimeSynchronizer()
    result = sync.synchronize(0.05, False, 1.0)
    assert result.wall_clock_time >= 0.05
    assert 0.0 < result.remaining_time <= 0.05
    assert result.last_sim_time == 0.0


def test_synchronize_with_scaling_stretches_time():
    sync = RealtimeSynchronizer()
    result = sync.synchronize(0.02, True, 2.0)
    assert result.wall_clock_time >= 0.04
    assert sync.last_sync_time == pytest.approx(0.04)


def test_sampled_first_sample_is_skipped():
    sync = RealtimeSynchronizer()
    assert sync.sampled_synchronize(0.00005, 0.0, 1.0) == SyncResult()


def test_sampled_rejects_time_going_backwards():
    sync = RealtimeSynchronizer()
    with pytest.raises(ModelicaError):
        sync.sampled_synchronize(0.5, 0.6, 1.0)


def test_sampled_waits_one_period():
    sync = RealtimeSynchronizer()
    result = sync.sampled_synchronize(0.05, 0.0, 1.0)
    assert result.wall_clock_time >= 0.05
    assert 0.0 < result.remaining_time <= 0.05
    assert sync.last_sim_time == 0.05


def test_sampled_warns_about_tiny_period(capsys):
    sync = RealtimeSynchronizer()
    sync.sampled_synchronize(0.5, 0.49995, 1.0)
    assert "unrealistic small" in capsys.readouterr().out


def test_rtsync_first_sample_gives_zeros():
    rt = RTSync(1.0, False)
    result = rt.synchronize(1.00005, 1.0)
    assert result == SyncResult(last_sim_time=1.0)


def test_rtsync_reports_previous_sim_time():
    rt = RTSync(0.0, False)
    first = rt.synchronize(0.05, 1.0)
    second = rt.synchronize(0.1, 1.0)
    assert first.last_sim_time == 0.0
    assert second.last_sim_time == 0.05
    assert second.wall_clock_time >= 0.1
    assert first.remaining_time > 0.0


def test_rtsync_scaling():
    rt = RTSync(0.0, False)
    result = rt.synchronize(0.02, 2.0)
    assert result.wall_clock_time >= 0.04


def test_rtsync_backwards_time_keeps_state(capsys):
    rt = RTSync(0.0, False)
    rt.synchronize(0.05, 1.0)
    backwards = rt.synchronize(0.02, 1.0)
    assert backwards.last_sim_time == 0.05
    assert rt.last_sim_time == 0.05
    assert "WARNING" in capsys.readouterr().out
    after = rt.synchronize(0.06, 1.0)
    assert after.last_sim_time == 0.05


def test_rtsync_catchup_shortens_next_wait():
    catchup = RTSync(0.0, True)
    plain = RTSync(0.0, False)
    time.sleep(0.1)
    catchup.synchronize(0.05, 1.0)
    plain.synchronize(0.05, 1.0)
    caught = catchup.synchronize(0.1, 1.0)
    waited = plain.synchronize(0.1, 1.0)
    assert caught.remaining_time < 0.02
    assert waited.remaining_time > 0.03
    assert waited.wall_clock_time >= 0.15