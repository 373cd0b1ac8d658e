"""
secretgen.errors
Leveled diagnostics for a generation session, plus the exception types
raised by the entropy and sampling layers.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import List, Optional

from .logging import get_logger

log = get_logger(__name__)


class Severity(IntEnum):
    INFORMATIONAL = 0
    WARNING = 1
    ERROR = 2
    CRITICAL = 3
    FATAL = 4


class SecretGenError(Exception):
    """Base class for secretgen failures."""


class ParseError(SecretGenError):
    """A character list could not be turned into a usable class."""


class CapacityError(SecretGenError):
    """Required character counts do not fit the requested length."""


class EntropyIOError(SecretGenError, OSError):
    """The entropy source could not be opened or read."""


class FatalState(SecretGenError):
    """A draw was attempted after the session reached its fail threshold."""


@dataclass(frozen=True)
class Diagnostic:
    message: str
    severity: Severity

    @property
    def level_str(self) -> str:
        return self.severity.name

    def as_tuple(self):
        """(severityName, severityNumber, message), as handed to callers."""
        return (self.severity.name, int(self.severity), self.message)

    def __str__(self) -> str:
        return f"{self.severity.name}({int(self.severity)}): {self.message}"


class ErrorTracker:
    """
    Ordered diagnostic log with a running maximum severity.

    Every component of a session writes through `log()`; the session reads
    `is_fatal()` before each draw and before handing out a secret.
    """

    def __init__(self) -> None:
        self._entries: List[Diagnostic] = []
        self._highest: Optional[Severity] = None

    def log(self, message: str, severity=Severity.WARNING) -> Diagnostic:
        severity = Severity(severity)
        entry = Diagnostic(message, severity)
        self._entries.append(entry)
        if self._highest is None or severity > self._highest:
            self._highest = severity
        log.debug("%s", entry)
        return entry

    def highest_severity(self) -> Optional[Severity]:
        """Highest severity logged so far, or None when the log is empty."""
        return self._highest

    def is_fatal(self, fail_threshold) -> bool:
        if self._highest is None:
            return False
        return self._highest >= fail_threshold

    @property
    def entries(self) -> List[Diagnostic]:
        return list(self._entries)

    def last(self) -> Optional[Diagnostic]:
        return self._entries[-1] if self._entries else None

    def clear(self) -> None:
        self._entries = []
        self._highest = None

    def report(self) -> str:
        """One `NAME(n): message` line per diagnostic."""
        return "".join(f"{e}\n" for e in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)
