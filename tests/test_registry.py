"""Tests for SubscriberRegistry ordering, reentrancy and lifecycle hooks."""

import pytest

from marketsim.registry import SubscriberRegistry


class TestSubscribe:
    def test_broadcast_in_order(self):
        reg = SubscriberRegistry()
        calls = []
        reg.subscribe(lambda x: calls.append(("a", x)))
        reg.subscribe(lambda x: calls.append(("b", x)))
        reg.broadcast(1)
        assert calls == [("a", 1), ("b", 1)]

    def test_returns_delivered_count(self):
        reg = SubscriberRegistry()
        reg.subscribe(lambda: None)
        reg.subscribe(lambda: None)
        assert reg.broadcast() == 2

    def test_rejects_non_callable(self):
        reg = SubscriberRegistry()
        with pytest.raises(TypeError):
            reg.subscribe("not callable")  # type: ignore[arg-type]

    def test_handle_removes_only_its_registration(self):
        reg = SubscriberRegistry()
        calls = []

        def cb():
            calls.append(1)

        first = reg.subscribe(cb)
        reg.subscribe(cb)
        first()
        reg.broadcast()
        assert calls == [1]
        assert len(reg) == 1

    def test_unsubscribe_idempotent(self):
        reg = SubscriberRegistry()
        handle = reg.subscribe(lambda: None)
        handle()
        handle()
        assert len(reg) == 0


class TestReentrancy:
    def test_unsubscribe_other_during_broadcast(self):
        reg = SubscriberRegistry()
        calls = []
        handles = {}

        def a():
            calls.append("a")
            handles["b"]()

        def b():
            calls.append("b")

        reg.subscribe(a)
        handles["b"] = reg.subscribe(b)
        reg.broadcast()
        reg.broadcast()
        # b was removed before its turn in the first broadcast
        assert calls == ["a", "a"]

    def test_unsubscribe_self_during_broadcast(self):
        reg = SubscriberRegistry()
        calls = []
        handles = {}

        def once():
            calls.append("once")
            handles["once"]()

        handles["once"] = reg.subscribe(once)
        reg.subscribe(lambda: calls.append("other"))
        reg.broadcast()
        reg.broadcast()
        assert calls == ["once", "other", "other"]

    def test_subscribe_during_broadcast_waits_for_next(self):
        reg = SubscriberRegistry()
        calls = []

        def late():
            calls.append("late")

        def adder():
            calls.append("adder")
            if "late" not in calls and len(reg) == 1:
                reg.subscribe(late)

        reg.subscribe(adder)
        reg.broadcast()
        assert calls == ["adder"]
        reg.broadcast()
        assert calls == ["adder", "adder", "late"]

    def test_no_double_delivery(self):
        reg = SubscriberRegistry()
        counts = {"x": 0}
        handles = {}

        def x():
            counts["x"] += 1
            handles["x"]()
            handles["x"] = reg.subscribe(x)

        handles["x"] = reg.subscribe(x)
        reg.broadcast()
        assert counts["x"] == 1


class TestIsolation:
    def test_failing_callback_does_not_stop_broadcast(self, log_messages):
        reg = SubscriberRegistry(name="test")
        calls = []

        def bad():
            raise ValueError("nope")

        reg.subscribe(bad)
        reg.subscribe(lambda: calls.append("ok"))
        delivered = reg.broadcast()
        assert calls == ["ok"]
        assert delivered == 1
        assert any("bad" in m for m in log_messages)


class TestLifecycleHooks:
    def test_first_and_empty_transitions(self):
        events = []
        reg = SubscriberRegistry(
            on_first=lambda: events.append("first"),
            on_empty=lambda: events.append("empty"),
        )
        h1 = reg.subscribe(lambda: None)
        h2 = reg.subscribe(lambda: None)
        h1()
        h2()
        h3 = reg.subscribe(lambda: None)
        h3()
        assert events == ["first", "empty", "first", "empty"]
