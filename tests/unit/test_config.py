"""Unit tests for logger configuration."""

import logging

import pytest

from sqldevlog import DEFAULT_THRESHOLDS, POSTGRES, TDS, Color, DevLoggerConfig, DurationThreshold
from sqldevlog.exceptions import ImproperConfigurationError, UnsupportedDialectError


def test_defaults() -> None:
    config = DevLoggerConfig()
    assert config.thresholds == DEFAULT_THRESHOLDS
    assert config.default_color is None
    assert config.log_level == logging.DEBUG
    assert config.include_repo_name is False
    assert config.stacktrace_exclude == ()
    assert config.sink is None
    assert config.dialect is None


def test_values_are_normalized() -> None:
    config = DevLoggerConfig(
        thresholds=[(0.2, "yellow"), (1, "red")],  # type: ignore[arg-type]
        default_color="white",  # type: ignore[arg-type]
        log_level="info",
        stacktrace_exclude=["/venv/"],  # type: ignore[arg-type]
        dialect="postgresql",
    )
    assert config.thresholds == (DurationThreshold(0.2, Color.YELLOW), DurationThreshold(1.0, Color.RED))
    assert config.default_color is Color.WHITE
    assert config.log_level == logging.INFO
    assert config.stacktrace_exclude == ("/venv/",)
    assert config.dialect is POSTGRES


def test_invalid_values_are_rejected() -> None:
    with pytest.raises(ImproperConfigurationError):
        DevLoggerConfig(thresholds=[(1, "red"), (0.5, "yellow")])  # type: ignore[arg-type]
    with pytest.raises(ImproperConfigurationError):
        DevLoggerConfig(log_level="LOUD")
    with pytest.raises(UnsupportedDialectError):
        DevLoggerConfig(dialect="oracle")


def test_copy_and_equality() -> None:
    config = DevLoggerConfig(include_repo_name=True, stacktrace_exclude=("/venv/",))
    clone = config.copy()
    assert clone == config
    assert clone is not config


def test_merge_prefers_override() -> None:
    sink_calls: list[str] = []
    base = DevLoggerConfig(dialect="postgres", stacktrace_exclude=("/venv/",), include_repo_name=True)
    override = DevLoggerConfig(dialect="tds", stacktrace_exclude=("/venv/", "/usr/lib/"), sink=sink_calls.append)
    merged = DevLoggerConfig.merge(base, override)
    assert merged.dialect is TDS
    assert merged.include_repo_name is True
    assert merged.stacktrace_exclude == ("/venv/", "/usr/lib/")
    assert merged.sink == sink_calls.append


def test_merge_with_missing_sides() -> None:
    base = DevLoggerConfig(include_repo_name=True)
    assert DevLoggerConfig.merge(None, None) == DevLoggerConfig()
    assert DevLoggerConfig.merge(base, None) == base
    assert DevLoggerConfig.merge(None, base) == base
