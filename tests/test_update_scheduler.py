"""
Tests for the fixed-rate UpdateScheduler gate.
"""

import random

import pytest

from gps_emulator.update_scheduler import UpdateScheduler


def test_gate_opens_once_interval_elapsed():
    scheduler = UpdateScheduler(interval=0.2)

    assert scheduler.should_publish(0.1) is False
    assert scheduler.should_publish(0.2) is True
    assert scheduler.last_publish == 0.2


def test_false_result_leaves_state_unchanged():
    scheduler = UpdateScheduler(interval=0.2, start_time=1.0)

    assert scheduler.should_publish(1.05) is False
    assert scheduler.should_publish(1.19) is False
    assert scheduler.last_publish == 1.0


def test_gating_with_fast_ticks():
    """interval=0.2s, ticks every 0.05s: at most 1 in 4 ticks publishes."""
    scheduler = UpdateScheduler(interval=0.2)

    publish_times = []
    n_ticks = 400
    for i in range(1, n_ticks + 1):
        now = i * 0.05
        if scheduler.should_publish(now):
            publish_times.append(now)

    assert len(publish_times) <= n_ticks // 4
    assert len(publish_times) == n_ticks // 4
    gaps = [b - a for a, b in zip(publish_times, publish_times[1:])]
    assert all(gap >= 0.2 - 1e-9 for gap in gaps)


def test_gating_with_irregular_ticks():
    """Gate depends on elapsed simulated time, not tick count."""
    rng = random.Random(3)
    scheduler = UpdateScheduler(interval=0.2)

    now = 0.0
    publish_times = []
    for _ in range(2000):
        now += rng.uniform(0.001, 0.09)
        if scheduler.should_publish(now):
            publish_times.append(now)

    assert len(publish_times) > 0
    gaps = [b - a for a, b in zip(publish_times, publish_times[1:])]
    assert min(gaps) >= 0.2 - 1e-9
    # Never more than one tick late
    assert max(gaps) < 0.2 + 0.09


def test_slow_ticks_publish_every_tick():
    """Host step longer than the interval: every tick is a publish tick."""
    scheduler = UpdateScheduler(interval=0.2)

    results = [scheduler.should_publish(i * 0.5) for i in range(1, 11)]

    assert all(results)


def test_reset_restarts_gate():
    scheduler = UpdateScheduler(interval=0.2)
    assert scheduler.should_publish(5.0) is True

    scheduler.reset(start_time=0.0)

    assert scheduler.last_publish == 0.0
    assert scheduler.should_publish(0.2) is True


@pytest.mark.parametrize("interval", [0.0, -0.2])
def test_non_positive_interval_rejected(interval):
    with pytest.raises(ValueError):
        UpdateScheduler(interval=interval)
