# SPDX-FileCopyrightText: 2024-present Richard Dahl <richard@dahl.us>
# SPDX-License-Identifier: MIT
# SPDX-Package-Name: lvlog
"""
Configuration for lvlog loggers.

Settings are read from ``LVLOG_*`` environment variables, or built explicitly.
Priorities and flags may be given by name, so values taken from config files
("LOG_WARNING", "DATE|TIME|SHORT_FILE") can be passed through unchanged.
"""

from __future__ import annotations

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from lvlog.flags import FormatFlags
from lvlog.level import Priority
from lvlog.writers import DEFAULT_SYSLOG_ADDRESS


class LoggerSettings(BaseSettings):
    """
    Settings for building a Logger.
    Loads from environment variables using Pydantic v2's env support.
    """

    model_config = SettingsConfigDict(
        env_prefix="LVLOG_",
        extra="ignore",
        case_sensitive=False,
        frozen=False,
    )

    destination: str | None = Field(
        default=None,
        description='"SYSLOG", a log file path, or unset for standard error',
    )
    priority: Priority = Field(default=Priority.NONE, description="Minimum priority")
    prefix: str = Field(default="", description="Line prefix")
    flags: int = Field(default=FormatFlags.STD, description="Format flags")
    syslog_address: str = Field(
        default=DEFAULT_SYSLOG_ADDRESS, description="Local syslog socket"
    )
    syslog_ident: str | None = Field(default=None, description="Syslog tag")

    @field_validator("priority", mode="before")
    @classmethod
    def validate_priority(cls, v: Any) -> Any:
        """Accept a Priority, an int, or a configuration name."""
        if isinstance(v, str):
            text = v.strip()
            if text.isdigit():
                return int(text)
            if text == Priority.NONE.name:
                return Priority.NONE
            return Priority.from_name(text)
        return v

    @field_validator("flags", mode="before")
    @classmethod
    def parse_flags(cls, v: Any) -> int:
        """Accept an int or flag names joined by "|" or ","."""
        if isinstance(v, (int, str)):
            return int(FormatFlags.parse(v))
        raise ValueError(f"Format flags must be an int or a string, got {type(v).__name__}")

    @field_validator("flags", mode="after")
    @classmethod
    def as_format_flags(cls, v: int) -> FormatFlags:
        return FormatFlags(v)

    @classmethod
    def load(cls) -> LoggerSettings:
        """
        Load logger settings from environment variables or defaults.
        Returns:
            LoggerSettings: Loaded and validated settings instance.
        """
        return cls()
