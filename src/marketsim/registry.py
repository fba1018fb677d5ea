"""Subscriber registry: ordered callbacks with copy-on-broadcast delivery."""

from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

from loguru import logger

Unsubscribe = Callable[[], None]


class _Subscription:
    __slots__ = ("callback", "active")

    def __init__(self, callback: Callable[..., Any]) -> None:
        self.callback = callback
        self.active = True


class SubscriberRegistry:
    """Ordered list of subscriber callbacks.

    ``broadcast`` iterates a copy of the list taken when it starts, so
    callbacks may subscribe or unsubscribe others mid-broadcast. A callback
    removed during a broadcast is skipped for the rest of it; one added
    during a broadcast first hears from the next one.

    ``on_first`` and ``on_empty`` fire on the empty -> non-empty and
    non-empty -> empty transitions. They run outside the registry lock.
    """

    def __init__(
        self,
        name: str = "feed",
        on_first: Callable[[], None] | None = None,
        on_empty: Callable[[], None] | None = None,
    ) -> None:
        self.name = name
        self._subs: list[_Subscription] = []
        self._lock = threading.Lock()
        self._on_first = on_first
        self._on_empty = on_empty

    def __len__(self) -> int:
        with self._lock:
            return len(self._subs)

    def __bool__(self) -> bool:
        return len(self) > 0

    def subscribe(self, callback: Callable[..., Any]) -> Unsubscribe:
        """Register ``callback``; the returned handle removes exactly this registration."""
        if not callable(callback):
            raise TypeError(f"subscriber must be callable, got {type(callback).__name__}")

        sub = _Subscription(callback)
        with self._lock:
            self._subs.append(sub)
            first = len(self._subs) == 1
        logger.debug(f"[{self.name}] subscriber added ({len(self)} active)")
        if first and self._on_first is not None:
            self._on_first()

        def unsubscribe() -> None:
            self._remove(sub)

        return unsubscribe

    def _remove(self, sub: _Subscription) -> None:
        with self._lock:
            if not sub.active:
                return
            sub.active = False
            self._subs.remove(sub)
            empty = not self._subs
        logger.debug(f"[{self.name}] subscriber removed ({len(self)} active)")
        if empty and self._on_empty is not None:
            self._on_empty()

    def broadcast(self, *args: Any) -> int:
        """Deliver ``args`` to every active subscriber.

        Each callback is isolated: an exception is logged and delivery
        continues with the next subscriber.

        Returns:
            Number of callbacks that completed without raising.
        """
        with self._lock:
            targets = list(self._subs)

        delivered = 0
        for sub in targets:
            if not sub.active:
                continue
            try:
                sub.callback(*args)
                delivered += 1
            except Exception:
                logger.exception(
                    f"[{self.name}] subscriber {getattr(sub.callback, '__name__', sub.callback)!r} failed"
                )
        return delivered
