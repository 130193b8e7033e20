# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: lvlog
"""
Log priorities.

Priorities form a hierarchy: a logger configured with a given priority only
emits messages at that priority or above. A logger at INFO emits INFO and
higher, and drops DEBUG.
"""

from __future__ import annotations

from enum import IntEnum
from types import MappingProxyType
from typing import Mapping

from lvlog.errors import ConfigError


class Priority(IntEnum):
    """Ordered log priority, NONE lowest and EMERG highest."""

    NONE = 0
    DEBUG = 1
    INFO = 2
    WARNING = 3
    ERR = 4
    CRIT = 5
    EMERG = 6

    @property
    def label(self) -> str:
        """Display name, e.g. "ERROR" for ERR. NONE has no display name."""
        return PRIO_STRING.get(self, "")

    @classmethod
    def from_name(cls, name: str) -> Priority:
        """Convert a configuration name to a Priority.

        Accepts the bare form ("WARN") and the prefixed form ("LOG_WARNING").
        Lookup is case-sensitive.

        Raises:
            ConfigError: If the name is not in PRIO_NAME
        """
        try:
            return PRIO_NAME[name]
        except KeyError:
            raise ConfigError(
                f"Invalid log priority: {name}", config_key="priority", config_value=name
            ) from None


# Names accepted in config files, mapped to priorities.
PRIO_NAME: Mapping[str, Priority] = MappingProxyType(
    {
        "LOG_DEBUG": Priority.DEBUG,
        "LOG_INFO": Priority.INFO,
        "LOG_WARNING": Priority.WARNING,
        "LOG_WARN": Priority.WARNING,
        "LOG_ERR": Priority.ERR,
        "LOG_ERROR": Priority.ERR,
        "LOG_CRIT": Priority.CRIT,
        "LOG_EMERG": Priority.EMERG,
        "DEBUG": Priority.DEBUG,
        "INFO": Priority.INFO,
        "WARNING": Priority.WARNING,
        "WARN": Priority.WARNING,
        "ERR": Priority.ERR,
        "ERROR": Priority.ERR,
        "CRIT": Priority.CRIT,
        "CRITICAL": Priority.CRIT,
        "EMERG": Priority.EMERG,
        "EMERGENCY": Priority.EMERG,
    }
)

PRIO_STRING: Mapping[Priority, str] = MappingProxyType(
    {
        Priority.DEBUG: "DEBUG",
        Priority.INFO: "INFO",
        Priority.WARNING: "WARNING",
        Priority.ERR: "ERROR",
        Priority.CRIT: "CRITICAL",
        Priority.EMERG: "EMERGENCY",
    }
)
