"""
secretgen.entropy
Single-byte reader over an external entropy stream (device, file, pipe or stdin).
"""

import sys
from typing import BinaryIO, Optional, Union

from .errors import EntropyIOError, ErrorTracker, Severity
from .logging import get_logger

log = get_logger(__name__)

DEFAULT_RNDSRC = "/dev/urandom"
STDIN_MARKER = "-"


class EntropySource:
    """
    Wraps exactly one byte stream.

    `descriptor` is a path, the stdin marker "-", or an already-open binary
    stream. The stream is opened on the first `next_byte()` call and never
    reopened; `close()` releases it on every exit path of the owning session.
    Streams this object did not open itself (stdin, caller-supplied) are
    left open.
    """

    def __init__(self, descriptor: Union[str, BinaryIO] = DEFAULT_RNDSRC, tracker: Optional[ErrorTracker] = None):
        self.descriptor = descriptor
        self.tracker = tracker if tracker is not None else ErrorTracker()
        self._fh: Optional[BinaryIO] = None
        self._owned = False
        self._open_failed = False
        self._closed = False
        self.bytes_read = 0

    @property
    def name(self) -> str:
        if isinstance(self.descriptor, str):
            return self.descriptor
        return getattr(self.descriptor, "name", repr(self.descriptor))

    @property
    def is_open(self) -> bool:
        return self._fh is not None

    def _open(self) -> BinaryIO:
        if self._closed:
            self.tracker.log(f"Rnd source '{self.name}' was already closed.", Severity.FATAL)
            raise EntropyIOError(f"entropy source '{self.name}' is closed")
        if self._open_failed:
            raise EntropyIOError(f"Rnd source '{self.name}' already failed to open")
        if not isinstance(self.descriptor, str):
            self._fh = self.descriptor
        elif self.descriptor == STDIN_MARKER:
            self._fh = sys.stdin.buffer
        else:
            try:
                self._fh = open(self.descriptor, "rb", buffering=0)
            except OSError as e:
                self._open_failed = True
                self.tracker.log(f"Error reading Rnd source '{self.descriptor}': {e}", Severity.FATAL)
                raise EntropyIOError(f"cannot open entropy source '{self.descriptor}'") from e
            self._owned = True
        log.debug("opened entropy source %s", self.name)
        return self._fh

    def next_byte(self) -> int:
        fh = self._fh if self._fh is not None else self._open()
        try:
            buf = fh.read(1)
        except OSError as e:
            self.tracker.log(f"Error reading Rnd source '{self.name}': {e}", Severity.FATAL)
            raise EntropyIOError(f"read from entropy source '{self.name}' failed") from e
        if not buf:
            self.tracker.log(f"Rnd source '{self.name}' is exhausted after {self.bytes_read} bytes", Severity.FATAL)
            raise EntropyIOError(f"entropy source '{self.name}' is exhausted")
        self.bytes_read += 1
        return buf[0]

    def close(self) -> None:
        if self._fh is not None and self._owned:
            self._fh.close()
            log.debug("closed entropy source %s after %d bytes", self.name, self.bytes_read)
        self._fh = None
        self._owned = False
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
