# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: lvlog

"""
Public API for lvlog.

lvlog provides leveled loggers bound to a file, the system log, or any
writable object. Each logger filters by priority, formats on the calling
thread and writes through its own background worker.
"""

from __future__ import annotations

from lvlog.config import LoggerSettings
from lvlog.errors import (
    ConfigError,
    ConnectError,
    ErrorSeverity,
    LvlogError,
    OpenError,
    PanicError,
)
from lvlog.factory import from_settings, new_logger
from lvlog.flags import FormatFlags
from lvlog.formatter import CallSite, format_header, format_line
from lvlog.level import PRIO_NAME, PRIO_STRING, Priority
from lvlog.logger import Logger
from lvlog.writers import SyslogWriter, WriterProtocol

__all__ = [
    # Core
    "Logger",
    "Priority",
    "FormatFlags",
    "PRIO_NAME",
    "PRIO_STRING",
    # Formatting
    "CallSite",
    "format_header",
    "format_line",
    # Destinations
    "SyslogWriter",
    "WriterProtocol",
    # Errors
    "LvlogError",
    "ErrorSeverity",
    "OpenError",
    "ConnectError",
    "PanicError",
    "ConfigError",
    # Settings
    "LoggerSettings",
    # Factory functions
    "new_logger",
    "from_settings",
]
