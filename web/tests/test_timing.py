"""Tests for the request timing tracker."""

import time

from web.timing import TimingTracker, get_timings, reset_timings, timer


def test_timing_basic():
    """Test basic timing functionality."""
    reset_timings()

    with timer("fast_operation"):
        time.sleep(0.02)

    with timer("slow_operation"):
        time.sleep(0.08)

    timings = get_timings()

    assert "fast_operation" in timings
    assert "slow_operation" in timings
    assert timings["__summary__"]["slowest_operation"] == "slow_operation"
    assert timings["slow_operation"]["total_seconds"] >= timings["fast_operation"]["total_seconds"]


def test_timing_repeated_operations():
    """Test that repeated operations are aggregated."""
    tracker = TimingTracker()
    for _ in range(3):
        with tracker.measure("page_ranking"):
            pass

    stats = tracker.get_all()["page_ranking"]

    assert stats["count"] == 3
    assert stats["min_seconds"] <= stats["avg_seconds"] <= stats["max_seconds"]


def test_end_without_start():
    """Test that ending an unknown operation is harmless."""
    assert TimingTracker().end("never_started") == 0.0


def test_reset_clears_everything():
    """Test that reset empties the tracker."""
    reset_timings()
    with timer("op"):
        pass
    reset_timings()
    assert get_timings() == {}


def test_request_scoped_tracker(client):
    """Test that a request gets its own tracker."""
    reset_timings()
    with timer("outside_request"):
        pass

    from web.app import app
    with app.test_request_context("/"):
        assert get_timings() == {}
        with timer("inside_request"):
            pass
        assert "inside_request" in get_timings()

    assert "outside_request" in get_timings()
