"""Severity levels and their ordering.

Built-in levels use fixed severities (ERROR=50 down to TRACE=10). Custom
levels carry their own severity and display name. Ordering and equality are
defined by severity alone, so two levels sharing a severity compare equal
even when their names differ.
"""

from dataclasses import dataclass, field
from functools import total_ordering

# Minimum width of the {LEVEL} placeholder, left-justified
LEVEL_FIELD_WIDTH = 7


@total_ordering
@dataclass(frozen=True, eq=False)
class LogLevel:
    """A severity tag with a display name."""

    name: str
    severity: int
    custom: bool = field(default=False, repr=False)

    # Built-in levels, assigned below the class body
    ERROR = None  # type: LogLevel
    WARN = None  # type: LogLevel
    INFO = None  # type: LogLevel
    DEBUG = None  # type: LogLevel
    TRACE = None  # type: LogLevel

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity == other.severity

    def __lt__(self, other: "LogLevel") -> bool:
        if not isinstance(other, LogLevel):
            return NotImplemented
        return self.severity < other.severity

    def __hash__(self) -> int:
        return hash(self.severity)

    def __int__(self) -> int:
        return self.severity

    def __str__(self) -> str:
        return self.name

    @classmethod
    def custom_level(cls, name: str, severity: int) -> "LogLevel":
        """Create a user-defined level."""
        return cls(name=name, severity=int(severity), custom=True)

    @classmethod
    def builtin(cls) -> tuple["LogLevel", ...]:
        """Return the built-in levels, most severe first."""
        return (cls.ERROR, cls.WARN, cls.INFO, cls.DEBUG, cls.TRACE)

    @classmethod
    def from_name(cls, name: str) -> "LogLevel":
        """Resolve a built-in level from its display name (case-insensitive).

        Raises:
            ValueError: If the name is not a built-in level. "WARNING" is
                accepted as an alias of WARN.
        """
        wanted = name.strip().upper()
        if wanted == "WARNING":
            wanted = "WARN"
        for level in cls.builtin():
            if level.name == wanted:
                return level
        raise ValueError(f"Unknown log level: {name!r}")


LogLevel.ERROR = LogLevel("ERROR", 50)
LogLevel.WARN = LogLevel("WARN", 40)
LogLevel.INFO = LogLevel("INFO", 30)
LogLevel.DEBUG = LogLevel("DEBUG", 20)
LogLevel.TRACE = LogLevel("TRACE", 10)


def severity(level: LogLevel) -> int:
    """Return the integer severity of a level."""
    return level.severity


def compare(a: LogLevel, b: LogLevel) -> int:
    """Compare two levels by severity.

    Returns:
        -1 if a is less severe than b, 0 if equal, 1 if more severe.
    """
    return (a.severity > b.severity) - (a.severity < b.severity)


def display(level: LogLevel) -> str:
    """Return the display name of a level."""
    return level.name


def padded(level: LogLevel) -> str:
    """Return the display name left-justified to the {LEVEL} field width."""
    return f"{level.name:<{LEVEL_FIELD_WIDTH}}"


def is_filtered(level: LogLevel, filter_level: LogLevel | None) -> bool:
    """Return True when a message at `level` should be suppressed."""
    return filter_level is not None and level < filter_level
