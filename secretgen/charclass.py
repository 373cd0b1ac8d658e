"""
secretgen.charclass
Character-list parser.

A character list is an optional "<count>:" prefix followed by literal
characters and ranges:

    a-z        inclusive range by code point (also written a..z)
    \\-         escaped character, always literal
    -abc, abc-  a hyphen with nothing on one side is literal

Without a count prefix the class is optional and only feeds the fill pool.
"""

import re
import string
from dataclasses import dataclass
from typing import List, Optional

from .errors import ErrorTracker, ParseError, Severity

DEFAULT_CHARS = string.digits + string.ascii_lowercase + string.ascii_uppercase

_COUNT_PREFIX = re.compile(r"^(\d+):")
_RANGE_OPERATORS = ("..", "-")


@dataclass(frozen=True)
class CharacterClass:
    chars: str
    required: Optional[int] = None  # None -> optional
    source: str = ""

    def __post_init__(self):
        if not self.chars:
            raise ValueError("a character class cannot be empty")

    @property
    def is_optional(self) -> bool:
        return self.required is None

    def __len__(self) -> int:
        return len(self.chars)

    def __contains__(self, ch) -> bool:
        return ch in self.chars


def default_class() -> CharacterClass:
    return CharacterClass(DEFAULT_CHARS, None, "0-9a-zA-Z")


def _operator_at(body: str, pos: int) -> int:
    for op in _RANGE_OPERATORS:
        if body.startswith(op, pos):
            return len(op)
    return 0


def _expand(body: str, tracker: ErrorTracker) -> List[str]:
    out: List[str] = []
    i, n = 0, len(body)
    while i < n:
        ch = body[i]
        if ch == "\\":
            # a trailing backslash stands for itself
            if i + 1 < n:
                out.append(body[i + 1])
                i += 2
            else:
                out.append(ch)
                i += 1
            continue
        op_len = _operator_at(body, i + 1)
        end_pos = i + 1 + op_len
        if op_len and end_pos < n and body[end_pos] != "\\":
            end = body[end_pos]
            lo, hi = ord(ch), ord(end)
            if lo > hi:
                tracker.log(
                    f'Byte val of START larger than END for char range "{body[i:end_pos + 1]}". Range used in reverse.',
                    Severity.WARNING,
                )
                lo, hi = hi, lo
            out.extend(chr(c) for c in range(lo, hi + 1))
            i = end_pos + 1
            continue
        out.append(ch)
        i += 1
    return out


def parse_charclass(spec: str, tracker: Optional[ErrorTracker] = None) -> Optional[CharacterClass]:
    """
    Parse one character list into a CharacterClass.

    Returns None (after logging an ERROR) when the list expands to nothing.
    Called without a tracker, that case raises ParseError instead.
    A "0:" prefix is treated the same as no prefix.
    """
    strict = tracker is None
    if strict:
        tracker = ErrorTracker()
    body = spec
    required = None
    m = _COUNT_PREFIX.match(spec)
    if m:
        required = int(m.group(1)) or None
        body = spec[m.end():]

    chars = "".join(dict.fromkeys(_expand(body, tracker)))
    if not chars:
        if strict:
            raise ParseError(f'character list "{spec}" contains no characters')
        tracker.log(f'Character list "{spec}" contains no characters; ignored.', Severity.ERROR)
        return None
    return CharacterClass(chars, required, spec)
