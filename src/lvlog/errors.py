# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: lvlog
"""
Error types for lvlog.

Construction failures (a file that cannot be opened, a system log that cannot
be reached) are raised synchronously from the constructors. Write failures
after a logger is running are never raised; see lvlog.worker.
"""

from __future__ import annotations

import threading
from datetime import UTC, datetime
from enum import Enum
from typing import Any, Final


class ErrorSeverity(str, Enum):
    """Severity attached to an lvlog error."""

    CRITICAL = "critical"
    ERROR = "error"
    WARNING = "warning"
    FATAL = "fatal"


class ErrorCategory:
    """Named group of error codes."""

    def __init__(self, name: str) -> None:
        self.name = name

    def __str__(self) -> str:
        return self.name

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorCategory):
            return False
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    @classmethod
    def get_or_create(cls, name: str) -> ErrorCategory:
        """Get or create an error category."""
        return registry.get_category(name)


class ErrorCode:
    """Machine-readable error code bound to a category."""

    def __init__(self, code: str, category: ErrorCategory) -> None:
        self.code = code
        self.category = category

    def __str__(self) -> str:
        return self.code

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ErrorCode):
            return False
        return self.code == other.code

    def __hash__(self) -> int:
        return hash(self.code)

    @classmethod
    def get_or_create(cls, code: str, category: ErrorCategory) -> ErrorCode:
        """Get or create an error code."""
        return registry.get_code(code, category)

    @classmethod
    def get_by_code(cls, code: str) -> ErrorCode | None:
        """Look up a registered code without creating it."""
        return registry.lookup_code(code)


class ErrorRegistry:
    """Process-wide registry of error categories and codes."""

    def __init__(self) -> None:
        self._lock = threading.RLock()
        self._categories: dict[str, ErrorCategory] = {}
        self._codes: dict[str, ErrorCode] = {}

    def get_category(self, name: str) -> ErrorCategory:
        with self._lock:
            if name not in self._categories:
                self._categories[name] = ErrorCategory(name)
            return self._categories[name]

    def get_code(self, code: str, category: ErrorCategory) -> ErrorCode:
        with self._lock:
            if code not in self._codes:
                self._codes[code] = ErrorCode(code, self.get_category(category.name))
            return self._codes[code]

    def lookup_code(self, code: str) -> ErrorCode | None:
        with self._lock:
            return self._codes.get(code)


registry = ErrorRegistry()

LVLOG = ErrorCategory.get_or_create("LVLOG")
LVLOG_OPEN_ERROR: Final = ErrorCode.get_or_create("LVLOG_OPEN_ERROR", LVLOG)
LVLOG_CONNECT_ERROR: Final = ErrorCode.get_or_create("LVLOG_CONNECT_ERROR", LVLOG)
LVLOG_PANIC: Final = ErrorCode.get_or_create("LVLOG_PANIC", LVLOG)
LVLOG_CONFIG_ERROR: Final = ErrorCode.get_or_create("LVLOG_CONFIG_ERROR", LVLOG)


class LvlogError(Exception):
    """
    Base error class for lvlog errors.
    Should only be subclassed for specific errors, not instantiated directly.
    """

    message: str
    code: ErrorCode
    severity: ErrorSeverity
    context: dict[str, Any]
    timestamp: datetime

    def __new__(cls, *args: Any, **kwargs: Any) -> LvlogError:
        if cls is LvlogError:
            raise TypeError(
                "Do not instantiate LvlogError directly; subclass it for specific errors."
            )
        return super().__new__(cls)

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: dict[str, Any] | None = None,
        **kwargs: Any,
    ) -> None:
        """Initialize a new LvlogError.

        Args:
            message: Human-readable error message
            code: ErrorCode object containing the code and category
            severity: Severity level of the error
            context: Additional contextual information
            **kwargs: Additional context keys (merged into context)
        """
        if not isinstance(code, ErrorCode):
            raise TypeError("code must be an ErrorCode instance, not a string")
        super().__init__(message)

        full_context = dict(context or {})
        full_context.update(kwargs)

        self.message = message
        self.code = code
        self.category = code.category
        self.severity = severity
        self.context = full_context
        self.timestamp = datetime.now(UTC)

    def add_context(self, key: str, value: Any) -> LvlogError:
        """Add a key-value pair to the error context and return self for chaining."""
        self.context[key] = value
        return self

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        """Return a dictionary representation of the error."""
        return {
            "code": str(self.code),
            "message": self.message,
            "category": self.category.name,
            "severity": self.severity.name,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }


class OpenError(LvlogError):
    """A log file could not be opened or created."""

    def __init__(self, message: str, path: str | None = None, **kwargs: Any) -> None:
        if path is not None:
            kwargs["path"] = path
        super().__init__(message, code=LVLOG_OPEN_ERROR, **kwargs)


class ConnectError(LvlogError):
    """The system log could not be reached."""

    def __init__(self, message: str, address: Any = None, **kwargs: Any) -> None:
        if address is not None:
            kwargs["address"] = str(address)
        super().__init__(message, code=LVLOG_CONNECT_ERROR, **kwargs)


class PanicError(LvlogError):
    """Raised by Logger.panic after the message and backtrace are written."""

    def __init__(self, message: str, **kwargs: Any) -> None:
        super().__init__(
            message, code=LVLOG_PANIC, severity=ErrorSeverity.FATAL, **kwargs
        )


class ConfigError(LvlogError, ValueError):
    """Invalid logger configuration value."""

    def __init__(
        self,
        message: str,
        config_key: str | None = None,
        config_value: Any | None = None,
        **kwargs: Any,
    ) -> None:
        if config_key:
            kwargs["config_key"] = config_key
        if config_value is not None:
            kwargs["config_value"] = str(config_value)
        super().__init__(message, code=LVLOG_CONFIG_ERROR, **kwargs)
