"""Post-load hook and theme-change subscription behaviour."""

from __future__ import annotations

import pytest

from lib_machine_settings.hooks import ThemeEvents, attach_after_load


def test_attach_runs_once_without_channel() -> None:
    calls: list[str] = []
    assert attach_after_load(lambda: calls.append("ran")) is None
    assert calls == ["ran"]


def test_attach_then_theme_changes() -> None:
    calls: list[object] = []
    events = ThemeEvents()
    subscription = attach_after_load(lambda *args: calls.append(args), events)
    assert calls == [()]
    events.emit("dark")
    events.emit("light")
    assert calls == [(), ("dark",), ("light",)]
    assert subscription is not None and subscription.active


def test_zero_argument_callback_is_called_bare_on_emit() -> None:
    calls: list[str] = []
    events = ThemeEvents()

    def refresh() -> None:
        calls.append("refresh")

    attach_after_load(refresh, events)
    events.emit("dark")
    assert calls == ["refresh", "refresh"]


def test_subscribing_twice_keeps_one_registration() -> None:
    calls: list[object] = []
    events = ThemeEvents()
    first = events.subscribe(calls.append)
    second = events.subscribe(calls.append)
    assert first is second
    assert len(events) == 1
    events.emit("dark")
    assert calls == ["dark"]


def test_cancel_stops_delivery_and_is_idempotent() -> None:
    calls: list[object] = []
    events = ThemeEvents()
    subscription = events.subscribe(calls.append)
    subscription.cancel()
    subscription.cancel()
    events.emit("dark")
    assert calls == []
    assert len(events) == 0
    assert not subscription.active


def test_subscription_as_context_manager() -> None:
    calls: list[object] = []
    events = ThemeEvents()
    with events.subscribe(calls.append):
        events.emit("inside")
    events.emit("outside")
    assert calls == ["inside"]


def test_callback_cancelled_during_emit_keeps_others_running() -> None:
    calls: list[str] = []
    events = ThemeEvents()

    def first(theme) -> None:
        calls.append("first")
        later.cancel()

    def second(theme) -> None:
        calls.append("second")

    events.subscribe(first)
    later = events.subscribe(second)
    events.emit("dark")
    assert calls == ["first"]


def test_callback_errors_propagate() -> None:
    events = ThemeEvents()

    def broken(theme) -> None:
        raise RuntimeError("theme refresh failed")

    events.subscribe(broken)
    with pytest.raises(RuntimeError, match="theme refresh failed"):
        events.emit("dark")
