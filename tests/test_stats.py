"""Tests for SessionStats counters."""

from __future__ import annotations

from tracker.core.stats import SessionStats


def test_initial_stats():
    stats = SessionStats()
    snap = stats.snapshot()
    assert snap["samples_received"] == 0
    assert snap["fixes_received"] == 0
    assert snap["sound_requests"] == 0
    assert snap["last_sample_ms"] == 0


def test_record_sample_and_fix():
    stats = SessionStats()
    stats.record_sample(1000)
    stats.record_sample(2000)
    stats.record_fix(1500)

    snap = stats.snapshot()
    assert snap["samples_received"] == 2
    assert snap["last_sample_ms"] == 2000
    assert snap["fixes_received"] == 1
    assert snap["last_fix_ms"] == 1500


def test_sound_counters():
    stats = SessionStats()
    stats.record_sound()
    stats.record_sound(failed=True)

    snap = stats.snapshot()
    assert snap["sound_requests"] == 2
    assert snap["sound_failures"] == 1


def test_error_and_reset_counters():
    stats = SessionStats()
    stats.record_fix_error()
    stats.record_fix_error()
    stats.record_fix_ignored()
    stats.record_base_reset()

    snap = stats.snapshot()
    assert snap["fix_errors"] == 2
    assert snap["fixes_ignored"] == 1
    assert snap["base_resets"] == 1
