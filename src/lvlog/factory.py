# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: lvlog
"""
Logger construction by destination name or from settings.
"""

from __future__ import annotations

import logging
import sys

from lvlog.config import LoggerSettings
from lvlog.flags import FormatFlags
from lvlog.level import Priority
from lvlog.logger import Logger

logger = logging.getLogger(__name__)

SYSLOG = "SYSLOG"


def new_logger(
    name: str,
    prio: Priority | int = Priority.NONE,
    prefix: str = "",
    flags: FormatFlags | int = FormatFlags.STD,
) -> Logger:
    """Create a syslog logger or a file logger.

    ``name`` equal to "SYSLOG" in any case selects the system log. Any other
    name is a file path; file loggers are created with an empty prefix.

    Raises:
        ConnectError: If the system log is unavailable
        OpenError: If the file cannot be opened or created
    """
    if name.upper() == SYSLOG:
        return Logger.from_syslog(prio, prefix, flags)
    return Logger.from_file(name, prio, "", flags)


def from_settings(settings: LoggerSettings | None = None) -> Logger:
    """Create a logger from settings, loading them from the environment if omitted.

    Without a destination the logger writes to standard error.
    """
    if settings is None:
        settings = LoggerSettings.load()

    destination = settings.destination
    logger.debug("building logger for destination %r", destination or "<stderr>")
    if destination is None:
        return Logger(sys.stderr, settings.priority, settings.prefix, settings.flags)
    if destination.upper() == SYSLOG:
        return Logger.from_syslog(
            settings.priority,
            settings.prefix,
            settings.flags,
            address=settings.syslog_address,
            ident=settings.syslog_ident,
        )
    return Logger.from_file(destination, settings.priority, settings.prefix, settings.flags)
