"""Tests for the in-process feed hub."""

from __future__ import annotations

from tracker.feed.hub import FeedHub


def test_publish_reaches_all_subscribers():
    hub: FeedHub[int] = FeedHub("test")
    seen_a, seen_b = [], []
    hub.subscribe(seen_a.append)
    hub.subscribe(seen_b.append)

    assert hub.publish(1) == 2
    assert seen_a == [1]
    assert seen_b == [1]


def test_cancel_is_idempotent():
    hub: FeedHub[int] = FeedHub("test")
    seen = []
    sub = hub.subscribe(seen.append)
    assert sub.active

    sub.cancel()
    sub.cancel()
    assert not sub.active
    assert hub.subscriber_count() == 0
    assert hub.publish(1) == 0
    assert seen == []


def test_errors_only_go_to_error_handlers():
    hub: FeedHub[int] = FeedHub("test")
    errors = []
    hub.subscribe(lambda e: None)
    hub.subscribe(lambda e: None, on_error=errors.append)

    assert hub.publish_error("Timeout expired") == 1
    assert errors == ["Timeout expired"]


def test_failing_handler_does_not_reach_publisher():
    hub: FeedHub[int] = FeedHub("test")
    seen = []

    def broken(event):
        raise RuntimeError("boom")

    hub.subscribe(broken)
    hub.subscribe(seen.append)

    assert hub.publish(7) == 1
    assert seen == [7]


def test_subscriber_can_cancel_during_publish():
    hub: FeedHub[int] = FeedHub("test")
    seen = []
    subs = []

    def once(event):
        seen.append(event)
        subs[0].cancel()

    subs.append(hub.subscribe(once))
    hub.publish(1)
    hub.publish(2)
    assert seen == [1]
