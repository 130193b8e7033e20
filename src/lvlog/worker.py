# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: lvlog
"""
Background writer owned by each Logger.

The worker is the only code that touches a logger's destination. It takes one
formatted line at a time from the hand-off channel and writes it, so writes
never overlap and land in hand-off order. It runs until the process exits.
"""

from __future__ import annotations

import io
import itertools
import logging
import threading
from typing import Any

from lvlog.channel import Barrier, HandoffChannel

logger = logging.getLogger(__name__)

_worker_ids = itertools.count(1)


class LogWorker(threading.Thread):
    """Daemon thread draining a HandoffChannel into one destination."""

    def __init__(self, out: Any, channel: HandoffChannel[str | Barrier]) -> None:
        super().__init__(name=f"lvlog-worker-{next(_worker_ids)}", daemon=True)
        self._out = out
        self._channel = channel
        self._text_mode = isinstance(out, io.TextIOBase)

    def run(self) -> None:
        logger.debug("%s started for %r", self.name, self._out)
        while True:
            item = self._channel.receive()
            if isinstance(item, Barrier):
                item.release()
                continue
            self._write(item)

    def _write(self, line: str) -> None:
        data: str | bytes = line if self._text_mode else line.encode("utf-8")
        try:
            self._out.write(data)
            flush = getattr(self._out, "flush", None)
            if flush is not None:
                flush()
        except Exception:
            # A failed write is dropped; the loop must keep serving callers.
            logger.warning("%s: write to %r failed", self.name, self._out, exc_info=True)
