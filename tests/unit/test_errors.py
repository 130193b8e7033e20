"""Tests for the lvlog error hierarchy."""

from __future__ import annotations

import pytest

from lvlog import ConfigError, ConnectError, ErrorSeverity, LvlogError, OpenError, PanicError
from lvlog.errors import (
    LVLOG,
    LVLOG_CONFIG_ERROR,
    LVLOG_CONNECT_ERROR,
    LVLOG_OPEN_ERROR,
    ErrorCategory,
    ErrorCode,
)


def test_base_error_cannot_be_instantiated() -> None:
    with pytest.raises(TypeError, match="Do not instantiate LvlogError directly"):
        LvlogError("nope", LVLOG_OPEN_ERROR)


def test_code_must_be_error_code() -> None:
    class CustomError(LvlogError):
        pass

    with pytest.raises(TypeError, match="ErrorCode instance"):
        CustomError("bad", "LVLOG_OPEN_ERROR")


def test_open_error() -> None:
    err = OpenError("Can't open log file 'x': denied", path="x")
    assert err.code is LVLOG_OPEN_ERROR
    assert err.category is LVLOG
    assert err.severity is ErrorSeverity.ERROR
    assert err.context == {"path": "x"}
    assert str(err) == "LVLOG_OPEN_ERROR: Can't open log file 'x': denied"


def test_connect_error_stringifies_address() -> None:
    err = ConnectError("down", address=("localhost", 514))
    assert err.code is LVLOG_CONNECT_ERROR
    assert err.context["address"] == "('localhost', 514)"


def test_panic_error_is_fatal() -> None:
    err = PanicError("boom")
    assert err.severity is ErrorSeverity.FATAL
    assert err.message == "boom"


def test_config_error_is_value_error() -> None:
    err = ConfigError("Invalid log priority: X", config_key="priority", config_value="X")
    assert isinstance(err, ValueError)
    assert isinstance(err, LvlogError)
    assert err.code is LVLOG_CONFIG_ERROR
    assert err.context == {"config_key": "priority", "config_value": "X"}


def test_add_context_chains() -> None:
    err = OpenError("failed").add_context("attempt", 2).add_context("user", "svc")
    assert err.context == {"attempt": 2, "user": "svc"}


def test_to_dict() -> None:
    err = OpenError("failed", path="/var/log/x")
    data = err.to_dict()
    assert data["code"] == "LVLOG_OPEN_ERROR"
    assert data["message"] == "failed"
    assert data["category"] == "LVLOG"
    assert data["severity"] == "ERROR"
    assert data["context"] == {"path": "/var/log/x"}
    assert data["timestamp"].endswith("+00:00")


def test_registry_returns_same_instances() -> None:
    assert ErrorCategory.get_or_create("LVLOG") is LVLOG
    assert ErrorCode.get_or_create("LVLOG_OPEN_ERROR", LVLOG) is LVLOG_OPEN_ERROR
    assert ErrorCode.get_by_code("LVLOG_CONNECT_ERROR") is LVLOG_CONNECT_ERROR
    assert ErrorCode.get_by_code("NOT_REGISTERED") is None


def test_codes_compare_by_value() -> None:
    assert ErrorCode("LVLOG_PANIC", LVLOG) == ErrorCode.get_by_code("LVLOG_PANIC")
    assert ErrorCategory("LVLOG") == LVLOG
    assert len({ErrorCode("A", LVLOG), ErrorCode("A", LVLOG)}) == 1
    assert ErrorCode("A", LVLOG) != "A"
