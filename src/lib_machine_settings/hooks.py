"""Post-load hook and theme-change subscriptions.

Purpose
    Run a host-supplied callback once after a successful load pass and again
    after every later theme change, through an explicit channel with
    cancellable subscriptions instead of a process-wide hook list.

Contents
    - ``ThemeEvents``: notification channel emitting theme-change events.
    - ``Subscription``: handle returned by ``ThemeEvents.subscribe``.
    - ``attach_after_load``: invoke-once-then-subscribe helper.

System Integration
    :func:`lib_machine_settings.core.read_machine_settings` calls
    ``attach_after_load`` when ``after_load`` is supplied and at least one
    machine file loaded. Callback exceptions propagate to the emitter.
"""

from __future__ import annotations

import inspect
from typing import Any, Callable

from .observability import log_debug

AfterLoadHook = Callable[..., Any]


class Subscription:
    """Live registration of a callback on a :class:`ThemeEvents` channel.

    Usable as a context manager; leaving the block cancels it.
    """

    def __init__(self, events: ThemeEvents, callback: AfterLoadHook) -> None:
        self._events = events
        self.callback = callback
        self.active = True

    def cancel(self) -> None:
        """Stop receiving events. Cancelling twice is a no-op."""

        if self.active:
            self.active = False
            self._events._discard(self)

    def __enter__(self) -> Subscription:
        return self

    def __exit__(self, *_exc: object) -> None:
        self.cancel()


class ThemeEvents:
    """Channel announcing that a theme was (re)loaded.

    Examples
    --------
    >>> events = ThemeEvents()
    >>> seen = []
    >>> subscription = events.subscribe(seen.append)
    >>> events.emit("solarized")
    >>> subscription.cancel()
    >>> events.emit("zenburn")
    >>> seen
    ['solarized']
    """

    def __init__(self) -> None:
        self._subscriptions: list[Subscription] = []

    def subscribe(self, callback: AfterLoadHook) -> Subscription:
        """Register *callback*; an already subscribed callback keeps its subscription."""

        for subscription in self._subscriptions:
            if subscription.callback == callback:
                return subscription
        subscription = Subscription(self, callback)
        self._subscriptions.append(subscription)
        return subscription

    def emit(self, theme: Any = None) -> None:
        """Invoke every live subscriber, in subscription order, with *theme*."""

        log_debug("theme_changed", tier=None, path=None, theme=str(theme), subscribers=len(self._subscriptions))
        for subscription in list(self._subscriptions):
            if subscription.active:
                _invoke(subscription.callback, theme)

    def __len__(self) -> int:
        return len(self._subscriptions)

    def _discard(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)


def attach_after_load(callback: AfterLoadHook, events: ThemeEvents | None = None) -> Subscription | None:
    """Call *callback* once, then subscribe it to *events* when given.

    The first call passes no argument. Theme events pass the theme to a
    callback that accepts one positional argument and call the others bare.

    Examples
    --------
    >>> calls = []
    >>> events = ThemeEvents()
    >>> subscription = attach_after_load(lambda theme=None: calls.append(theme), events)
    >>> events.emit("dark")
    >>> calls
    [None, 'dark']
    >>> attach_after_load(lambda: calls.append("once")) is None
    True
    """

    callback()
    if events is None:
        return None
    return events.subscribe(callback)


def _invoke(callback: AfterLoadHook, theme: Any) -> None:
    """Call *callback* with *theme* when its signature accepts it."""

    try:
        inspect.signature(callback).bind(theme)
    except TypeError:
        callback()
    except ValueError:
        # builtins without an introspectable signature
        callback(theme)
    else:
        callback(theme)
