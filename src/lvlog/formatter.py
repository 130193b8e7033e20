# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: lvlog
"""
Line formatting for lvlog.

Every function here is pure: given a timestamp, the flags, an optional call
site, a priority and a message, it returns the text of one log line. Nothing
here reads logger state.
"""

from __future__ import annotations

import datetime
import os
from typing import NamedTuple

from lvlog.flags import FormatFlags
from lvlog.level import Priority

_FILE_FLAGS = FormatFlags.LONG_FILE | FormatFlags.SHORT_FILE
_CLOCK_FLAGS = FormatFlags.TIME | FormatFlags.MICROSECONDS
_HEADER_FLAGS = FormatFlags.DATE | _CLOCK_FLAGS


class CallSite(NamedTuple):
    """Source location of a logging call."""

    file: str
    line: int


UNKNOWN_CALL_SITE = CallSite("???", 0)


def itoa(i: int, wid: int) -> str:
    """Render a non-negative integer zero-padded to ``wid`` digits.

    A zero with a width of 1 or less renders as a bare "0"; a width of 0 or
    less otherwise means no padding.
    """
    if i == 0 and wid <= 1:
        return "0"
    if wid <= 0:
        return str(i)
    return str(i).zfill(wid)


def format_header(t: datetime.datetime, flags: FormatFlags) -> str:
    """Render the timestamp header, including its trailing space.

    Returns an empty string when none of DATE, TIME or MICROSECONDS is set.
    """
    if not flags & _HEADER_FLAGS:
        return ""

    s = ""
    if flags & FormatFlags.DATE:
        s += itoa(t.year, 4) + "/" + itoa(t.month, 2) + "/" + itoa(t.day, 2)
    if flags & _CLOCK_FLAGS:
        s += " " + itoa(t.hour, 2) + ":" + itoa(t.minute, 2) + ":" + itoa(t.second, 2)
        if flags & FormatFlags.MICROSECONDS:
            s += "." + itoa(t.microsecond, 6)
    return s + " "


def format_file_info(call_site: CallSite, flags: FormatFlags) -> str:
    """Render "(file:line) ", or "" when no file flag is set."""
    if not flags & _FILE_FLAGS:
        return ""
    file = call_site.file
    if flags & FormatFlags.SHORT_FILE:
        file = os.path.basename(file)
    return f"({file}:{call_site.line}) "


def format_line(
    prio: Priority,
    flags: FormatFlags,
    message: str,
    call_site: CallSite | None = None,
    now: datetime.datetime | None = None,
) -> str:
    """Render one complete, newline-terminated log line.

    Returns an empty string for an empty message; callers must not enqueue it.
    With FormatFlags.SYSLOG set, neither the "<N>:" tag nor the timestamp is
    written since the system log records both itself.
    """
    if not message:
        return ""

    buf = ""
    if not flags & FormatFlags.SYSLOG:
        if now is None:
            now = datetime.datetime.now()
        buf = f"<{int(prio)}>:" + format_header(now, flags)

    if call_site is not None:
        buf += format_file_info(call_site, flags)

    buf += message
    if not message.endswith("\n"):
        buf += "\n"
    return buf
