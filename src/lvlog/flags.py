# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: lvlog
"""
Format flags controlling what is written in front of each log message.

Bits are or'ed together. There is no control over the order the items
appear in (the order listed here) or the way they are rendered:

    <2>:2009/01/23 01:23:23.123123 (d.py:23) message
"""

from __future__ import annotations

import re
from enum import IntFlag

from lvlog.errors import ConfigError


class FormatFlags(IntFlag):
    """Header options. Bit positions are stable."""

    DATE = 1 << 0  # the date: 2009/01/23
    TIME = 1 << 1  # the time: 01:23:23
    MICROSECONDS = 1 << 2  # 01:23:23.123123, implies TIME
    LONG_FILE = 1 << 3  # full file path and line: /a/b/c/d.py:23
    SHORT_FILE = 1 << 4  # final path element and line: d.py:23, overrides LONG_FILE
    SYSLOG = 1 << 5  # destination is syslog; no priority tag or timestamp
    STD = DATE | TIME

    @classmethod
    def parse(cls, value: int | str) -> FormatFlags:
        """Build flags from an int, a numeric string, or names such as "DATE|TIME".

        Names may be separated by "|", "," or whitespace and are case-insensitive.

        Raises:
            ConfigError: On an unknown name or out-of-range bits
        """
        if isinstance(value, str):
            text = value.strip()
            if text.isdigit():
                value = int(text)
            else:
                flags = cls(0)
                for name in filter(None, re.split(r"[|,\s]+", text)):
                    try:
                        flags |= cls[name.upper()]
                    except KeyError:
                        raise ConfigError(
                            f"Invalid format flag: {name}",
                            config_key="flags",
                            config_value=value,
                        ) from None
                return flags

        if value < 0 or value & ~_ALL_BITS:
            raise ConfigError(
                f"Invalid format flags: {value}", config_key="flags", config_value=value
            )
        return cls(value)


_ALL_BITS = int(
    FormatFlags.DATE
    | FormatFlags.TIME
    | FormatFlags.MICROSECONDS
    | FormatFlags.LONG_FILE
    | FormatFlags.SHORT_FILE
    | FormatFlags.SYSLOG
)
