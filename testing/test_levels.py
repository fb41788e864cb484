"""Unit tests for log level ordering."""

import itertools

import pytest

from exec_logger.levels import (
    LogLevel,
    compare,
    display,
    is_filtered,
    padded,
    severity,
)
from exec_logger.registry import create_custom_level


class TestBuiltinLevels:
    """Tests for the fixed ERROR..TRACE levels."""

    def test_severities(self):
        """Built-in levels use fixed severities."""
        assert [severity(level) for level in LogLevel.builtin()] == [50, 40, 30, 20, 10]

    def test_ordering(self):
        """More severe levels compare greater."""
        assert LogLevel.ERROR > LogLevel.WARN > LogLevel.INFO > LogLevel.DEBUG > LogLevel.TRACE

    def test_display_names(self):
        assert [display(level) for level in LogLevel.builtin()] == [
            "ERROR",
            "WARN",
            "INFO",
            "DEBUG",
            "TRACE",
        ]
        assert str(LogLevel.WARN) == "WARN"
        assert int(LogLevel.DEBUG) == 20

    def test_from_name(self):
        """Names resolve case-insensitively; WARNING is an alias of WARN."""
        assert LogLevel.from_name("info") is LogLevel.INFO
        assert LogLevel.from_name(" Error ") is LogLevel.ERROR
        assert LogLevel.from_name("warning") is LogLevel.WARN

    def test_from_name_unknown(self):
        with pytest.raises(ValueError):
            LogLevel.from_name("verbose")


class TestCustomLevels:
    """Tests for user-defined levels."""

    def test_create_custom_level(self):
        stat = create_custom_level("STAT", 25)
        assert stat.name == "STAT"
        assert stat.severity == 25
        assert stat.custom is True

    def test_custom_sits_between_builtins(self):
        stat = create_custom_level("STAT", 25)
        assert LogLevel.DEBUG < stat < LogLevel.INFO

    def test_equal_severity_compares_equal(self):
        """Identity for ordering is the severity alone, not the name."""
        a = create_custom_level("AUDIT", 30)
        b = create_custom_level("NOTICE", 30)
        assert a == b
        assert a == LogLevel.INFO
        assert hash(a) == hash(LogLevel.INFO)
        assert compare(a, b) == 0

    def test_immutable(self):
        stat = create_custom_level("STAT", 25)
        with pytest.raises(AttributeError):
            stat.severity = 99


class TestCompare:
    def test_compare_signs(self):
        assert compare(LogLevel.TRACE, LogLevel.ERROR) == -1
        assert compare(LogLevel.ERROR, LogLevel.TRACE) == 1
        assert compare(LogLevel.INFO, LogLevel.INFO) == 0


class TestFiltering:
    """Tests for is_filtered()."""

    def test_no_filter_shows_everything(self):
        for level in LogLevel.builtin():
            assert is_filtered(level, None) is False

    def test_filter_matrix(self):
        """A level is filtered exactly when it is less severe than the filter."""
        levels = list(LogLevel.builtin()) + [create_custom_level("STAT", 25)]
        for level, filter_level in itertools.product(levels, repeat=2):
            expected = level.severity < filter_level.severity
            assert is_filtered(level, filter_level) is expected, (level, filter_level)


class TestPadding:
    def test_short_names_padded_to_seven(self):
        assert padded(LogLevel.INFO) == "INFO   "
        assert padded(LogLevel.ERROR) == "ERROR  "

    def test_long_names_not_truncated(self):
        assert padded(create_custom_level("STATISTIC", 25)) == "STATISTIC"
