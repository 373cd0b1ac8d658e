"""
secretgen.generator
Generation session: class table, entropy stream and diagnostics for one request.
"""

from dataclasses import dataclass, field
from typing import BinaryIO, List, Optional, Sequence, Tuple, Union

from .assembler import SpecificationList, assemble, build_spec_list, check_capacity, random_string
from .entropy import DEFAULT_RNDSRC, EntropySource
from .errors import CapacityError, Diagnostic, EntropyIOError, ErrorTracker, FatalState, Severity
from .logging import get_logger
from .sampler import RangeSampler
from .shuffle import shuffle, shuffle_string

log = get_logger(__name__)

DEFAULT_LENGTH = 12
DEFAULT_ERROR_LEVEL_FAIL = int(Severity.CRITICAL)


@dataclass
class GenerationResult:
    """
    Outcome of one `get_secret` call.

    `secret` is None whenever the run failed. `attempted` holds whatever was
    assembled and shuffled regardless, so a caller may still show it next to
    the failure report.
    """
    secret: Optional[str]
    attempted: Optional[str]
    failed: bool
    diagnostics: List[Tuple[str, int, str]] = field(default_factory=list)
    report: str = ""


class SecretGenerator:
    """
    One generation session.

    Character lists are parsed and checked against `length` on construction,
    before the entropy source is touched. Use as a context manager so the
    entropy stream is released however the session ends.
    """

    def __init__(
        self,
        length: int = DEFAULT_LENGTH,
        charlists: Sequence[str] = (),
        no_default: bool = False,
        rndsrc: Union[str, BinaryIO] = DEFAULT_RNDSRC,
        error_level_fail: int = DEFAULT_ERROR_LEVEL_FAIL,
    ):
        if length is None:
            length = DEFAULT_LENGTH
        if length <= 0:
            raise ValueError("length must be > 0")
        if not 0 <= int(error_level_fail) <= int(Severity.FATAL):
            raise ValueError("error_level_fail must be between 0 and 4")
        if isinstance(charlists, str):
            charlists = [charlists]

        self.length = length
        self.error_level_fail = Severity(int(error_level_fail))
        self.tracker = ErrorTracker()
        self.source = EntropySource(rndsrc, self.tracker)
        self.sampler = RangeSampler(self.source, self.tracker, self.error_level_fail)
        self.specs: SpecificationList = build_spec_list(charlists, no_default, self.tracker)
        check_capacity(self.specs, self.length, self.tracker)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def close(self) -> None:
        self.source.close()

    def get_secret(self, length: Optional[int] = None) -> GenerationResult:
        if length is None:
            length = self.length
        elif length <= 0:
            raise ValueError("length must be > 0")
        elif length != self.length:
            check_capacity(self.specs, length, self.tracker)

        attempted = None
        if not self.specs.can_reach(length):
            # no bytes are drawn; re-log if the errors were cleared since
            if not self.tracker.is_fatal(Severity.CRITICAL):
                check_capacity(self.specs, length, self.tracker)
            return self._result(None, failed=True)
        try:
            chars = assemble(self.sampler, self.specs, length)
            attempted = "".join(shuffle(self.sampler, chars))
        except (CapacityError, FatalState, EntropyIOError) as e:
            # already recorded in the tracker
            log.debug("generation stopped: %s", type(e).__name__)

        failed = attempted is None or self.tracker.is_fatal(self.error_level_fail)
        return self._result(attempted, failed)

    def _result(self, attempted: Optional[str], failed: bool) -> GenerationResult:
        return GenerationResult(
            secret=None if failed else attempted,
            attempted=attempted,
            failed=failed,
            diagnostics=[d.as_tuple() for d in self.tracker],
            report=self.tracker.report(),
        )

    def random_string(self, length: int, chars: str) -> Optional[str]:
        return random_string(self.sampler, length, chars)

    def shuffle_string(self, text: str) -> str:
        return shuffle_string(self.sampler, text)

    def random_int(self, start: int = 0, end: int = 255) -> int:
        return self.sampler.uniform_int(start, end)

    # diagnostics

    def errors_list(self) -> List[Diagnostic]:
        return self.tracker.entries

    def errors_str(self) -> str:
        return self.tracker.report()

    def last_error_str(self) -> Optional[str]:
        last = self.tracker.last()
        return last.message if last else None

    def last_error_level(self) -> int:
        last = self.tracker.last()
        return int(last.severity) if last else 0

    def high_error_level(self) -> int:
        highest = self.tracker.highest_severity()
        return int(highest) if highest is not None else 0

    def clear_errors(self) -> None:
        self.tracker.clear()


def generate(
    length: int = DEFAULT_LENGTH,
    charlists: Sequence[str] = (),
    no_default: bool = False,
    rndsrc: Union[str, BinaryIO] = DEFAULT_RNDSRC,
    error_level_fail: int = DEFAULT_ERROR_LEVEL_FAIL,
) -> GenerationResult:
    """
    Generate one secret in a fresh session and release the entropy source.
    """
    with SecretGenerator(length, charlists, no_default, rndsrc, error_level_fail) as gen:
        return gen.get_secret()
