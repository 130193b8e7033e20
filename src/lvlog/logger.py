# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: lvlog
"""
Leveled logger with a serialized background write path.

A Logger is bound to one destination, a minimum priority and a set of format
flags. Messages are filtered and formatted on the calling thread; the finished
line is then handed to the logger's own worker thread, which performs the
write. Concurrent callers therefore never interleave partial lines, and they
wait on slow I/O only for as long as the hand-off takes.

Several loggers, each with a different destination and priority, can coexist
in one process.
"""

from __future__ import annotations

import contextlib
import inspect
import itertools
import os
import sys
import threading
import traceback
from collections.abc import Mapping
from types import FrameType
from typing import Any, NoReturn

from lvlog.channel import Barrier, HandoffChannel
from lvlog.errors import PanicError
from lvlog.flags import FormatFlags
from lvlog.formatter import UNKNOWN_CALL_SITE, CallSite, format_line
from lvlog.level import Priority
from lvlog.worker import LogWorker
from lvlog.writers import DEFAULT_SYSLOG_ADDRESS, SyslogWriter, open_file_writer

MAX_BACKTRACE_FRAMES = 64
PANIC_BACKTRACE_DEPTH = 5

_FILE_FLAGS = FormatFlags.LONG_FILE | FormatFlags.SHORT_FILE


def _sprintf(fmt: Any, args: tuple[Any, ...]) -> str:
    if not args:
        return str(fmt)
    values: Any = args
    # A lone non-empty mapping feeds "%(name)s" placeholders, as in logging.LogRecord.
    if len(args) == 1 and isinstance(args[0], Mapping) and args[0]:
        values = args[0]
    try:
        return str(fmt) % values
    except (TypeError, ValueError, KeyError):
        return f"{fmt} {args!r}"


def _caller(depth: int) -> CallSite:
    """Call site ``depth`` frames above the function calling this one."""
    frame = inspect.currentframe()
    for _ in range(depth + 1):
        if frame is None:
            break
        frame = frame.f_back
    if frame is None:
        return UNKNOWN_CALL_SITE
    return CallSite(frame.f_code.co_filename, frame.f_lineno)


def _render_frame(frame: FrameType, lineno: int | None) -> str:
    code = frame.f_code
    if not code.co_filename or lineno is None:
        return "*unknown*"
    module = frame.f_globals.get("__name__", "?")
    return f"{code.co_filename}:{lineno} [{module}.{code.co_qualname}]"


class Logger:
    """
    Leveled logger writing through a dedicated worker thread.

    Usage:
        log = Logger(sys.stderr, Priority.INFO, flags=FormatFlags.STD)
        log.debug("dropped: %s", expensive)  # not formatted below threshold
        log.info("listening on %s:%d", host, port)

        log = Logger.from_file("/var/log/app.log", Priority.DEBUG)
        log = Logger.from_syslog(Priority.WARNING)

    There is no close operation: the worker lives as long as the process.
    """

    def __init__(
        self,
        out: Any,
        prio: Priority | int = Priority.NONE,
        prefix: str = "",
        flags: FormatFlags | int = FormatFlags.STD,
    ) -> None:
        """Create a logger writing to ``out``.

        Args:
            out: Destination with a ``write`` method. Text streams receive
                ``str``; anything else receives UTF-8 ``bytes``.
            prio: Minimum priority to emit
            prefix: Line prefix
            flags: Header options

        Raises:
            TypeError: If ``out`` has no callable ``write``
        """
        if not callable(getattr(out, "write", None)):
            raise TypeError(f"log destination must have a write() method, got {out!r}")
        self._mu = threading.Lock()
        self._prio = Priority(prio)
        self._prefix = prefix
        self._flags = FormatFlags(flags)
        self._activate(out)

    def _activate(self, out: Any) -> None:
        self._logch: HandoffChannel[str | Barrier] = HandoffChannel()
        self._worker = LogWorker(out, self._logch)
        self._worker.start()

    @classmethod
    def from_file(
        cls,
        path: str | os.PathLike[str],
        prio: Priority | int = Priority.NONE,
        prefix: str = "",
        flags: FormatFlags | int = FormatFlags.STD,
    ) -> Logger:
        """Create a logger writing to ``path``. Previous file contents are erased.

        Raises:
            OpenError: If the file cannot be opened or created
        """
        return cls(open_file_writer(path), prio, prefix, flags)

    @classmethod
    def from_syslog(
        cls,
        prio: Priority | int = Priority.NONE,
        prefix: str = "",
        flags: FormatFlags | int = FormatFlags.STD,
        *,
        address: str = DEFAULT_SYSLOG_ADDRESS,
        ident: str | None = None,
    ) -> Logger:
        """Create a logger writing to the system log.

        FormatFlags.SYSLOG is always added to ``flags``.

        Raises:
            ConnectError: If the system log is unavailable
        """
        writer = SyslogWriter(address, ident)
        return cls(writer, prio, prefix, FormatFlags(flags) | FormatFlags.SYSLOG)

    def output(self, call_depth: int, prio: Priority, message: str) -> None:
        """Format ``message`` and hand it to the worker.

        ``call_depth`` selects the frame reported by the file flags: 1 is the
        caller of output, 2 the caller of that function. 0 disables file info.
        An empty message is ignored. Write errors are never reported here.
        Blocks until the worker has taken the line.
        """
        if not message:
            return

        flags = self.flags
        call_site = None
        if call_depth > 0 and flags & _FILE_FLAGS:
            call_site = _caller(call_depth)

        self._handoff(format_line(prio, flags, message, call_site))

    def _handoff(self, item: str | Barrier) -> bool:
        # The worker cannot rendezvous with itself. This happens when a
        # logging handler routes the worker's own diagnostics back here.
        if threading.current_thread() is self._worker:
            return False
        self._logch.send(item)
        return True

    def backtrace(self, depth: int = 0) -> None:
        """Write a stack backtrace, ignoring the priority threshold.

        The trace starts at the caller of this method's caller and holds at
        most ``depth`` frames (all frames, up to 64, when ``depth`` is 0).
        Each frame is written as ``file:line [module.function]``.
        """
        lines: list[str] = []
        frame = inspect.currentframe()
        start = frame.f_back.f_back if frame is not None and frame.f_back else None
        del frame
        if start is not None:
            stack = itertools.islice(traceback.walk_stack(start), MAX_BACKTRACE_FRAMES)
            lines = [_render_frame(f, lineno) for f, lineno in stack]

        if 0 < depth < len(lines):
            lines = lines[:depth]
        lines.append("\n")

        self._handoff("Backtrace:\n    " + "\n    ".join(lines))

    def sync(self, timeout: float | None = None) -> bool:
        """Wait until every line handed off before this call is written.

        Returns False if ``timeout`` expires first. The timeout covers the
        wait for earlier writes only; handing off the marker can still block
        on a stalled worker like any other call. Called from the worker
        itself it returns False at once.
        """
        barrier = Barrier()
        if not self._handoff(barrier):
            return False
        return barrier.wait(timeout)

    def loggable(self, prio: Priority) -> bool:
        """True if a message at ``prio`` passes this logger's threshold."""
        threshold = self.prio
        return threshold >= Priority.NONE and prio >= threshold

    def printf(self, fmt: Any, *args: Any) -> None:
        """Write at INFO regardless of the threshold."""
        self.output(0, Priority.INFO, _sprintf(fmt, args))

    def print(self, *values: Any) -> None:
        """Write the values, space separated, at INFO regardless of the threshold."""
        self.output(0, Priority.INFO, " ".join(str(v) for v in values))

    def debug(self, fmt: Any, *args: Any) -> None:
        if self.loggable(Priority.DEBUG):
            self.output(2, Priority.DEBUG, _sprintf(fmt, args))

    def info(self, fmt: Any, *args: Any) -> None:
        if self.loggable(Priority.INFO):
            self.output(0, Priority.INFO, _sprintf(fmt, args))

    def warn(self, fmt: Any, *args: Any) -> None:
        if self.loggable(Priority.WARNING):
            self.output(0, Priority.WARNING, _sprintf(fmt, args))

    warning = warn

    def error(self, fmt: Any, *args: Any) -> None:
        if self.loggable(Priority.ERR):
            self.output(2, Priority.ERR, _sprintf(fmt, args))

    err = error

    def crit(self, fmt: Any, *args: Any) -> None:
        if self.loggable(Priority.CRIT):
            self.output(2, Priority.CRIT, _sprintf(fmt, args))

    critical = crit

    def fatal(self, fmt: Any, *args: Any) -> NoReturn:
        """Write at EMERG with a full backtrace, then terminate the process with status 1.

        The process ends from any thread and cannot be caught: no exception
        unwinds, so ``finally`` blocks and ``atexit`` handlers do not run.
        Standard output and standard error are flushed first.
        """
        self.output(2, Priority.EMERG, _sprintf(fmt, args))
        self.backtrace(0)
        self.sync()
        for stream in (sys.stdout, sys.stderr):
            with contextlib.suppress(AttributeError, OSError, ValueError):
                stream.flush()
        os._exit(1)

    def panic(self, fmt: Any, *args: Any) -> NoReturn:
        """Write at EMERG with a 5 frame backtrace, then raise PanicError."""
        message = _sprintf(fmt, args)
        self.output(2, Priority.EMERG, message)
        self.backtrace(PANIC_BACKTRACE_DEPTH)
        self.sync()
        raise PanicError(message)

    @property
    def prio(self) -> Priority:
        with self._mu:
            return self._prio

    @prio.setter
    def prio(self, prio: Priority | int) -> None:
        prio = Priority(prio)
        with self._mu:
            self._prio = prio

    @property
    def flags(self) -> FormatFlags:
        with self._mu:
            return self._flags

    @flags.setter
    def flags(self, flags: FormatFlags | int) -> None:
        flags = FormatFlags(flags)
        with self._mu:
            self._flags = flags

    @property
    def prefix(self) -> str:
        with self._mu:
            return self._prefix

    @prefix.setter
    def prefix(self, prefix: str) -> None:
        with self._mu:
            self._prefix = prefix

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(prio={self.prio.name}, "
            f"flags={self.flags!r}, worker={self._worker.name})"
        )
