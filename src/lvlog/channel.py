# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: lvlog
"""
Unbuffered hand-off between logging callers and a logger's worker.

A HandoffChannel holds at most one item. ``send`` returns only after the
receiver has taken the item, so a slow destination throttles every caller of
that logger instead of letting memory grow. There is no timeout: a receiver
that never comes back stalls its senders forever.
"""

from __future__ import annotations

import threading
from typing import Generic, TypeVar

T = TypeVar("T")

_EMPTY = object()


class HandoffChannel(Generic[T]):
    """Synchronous rendezvous channel for one receiver and many senders."""

    def __init__(self) -> None:
        self._send_lock = threading.Lock()
        self._cond = threading.Condition()
        self._item: object = _EMPTY

    def send(self, item: T) -> None:
        """Hand ``item`` to the receiver, blocking until it has been taken."""
        # One sender at a time owns the slot; the others queue on the lock.
        with self._send_lock, self._cond:
            self._item = item
            self._cond.notify_all()
            while self._item is not _EMPTY:
                self._cond.wait()

    def receive(self) -> T:
        """Take the next item, blocking until a sender provides one."""
        with self._cond:
            while self._item is _EMPTY:
                self._cond.wait()
            item = self._item
            self._item = _EMPTY
            self._cond.notify_all()
        return item  # type: ignore[return-value]


class Barrier:
    """Marker passed through a channel in place of a line.

    The worker releases it instead of writing it. Since the channel is
    ordered, a released barrier means every line sent before it is written.
    """

    def __init__(self) -> None:
        self._reached = threading.Event()

    def release(self) -> None:
        self._reached.set()

    def wait(self, timeout: float | None = None) -> bool:
        return self._reached.wait(timeout)
