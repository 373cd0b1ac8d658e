"""
secretgen.sampler
Turns single bytes from an EntropySource into range-bounded integers.

`uniform_byte` is plain rejection sampling and is exactly uniform.
`uniform_int` keeps the historical block/coin-flip decomposition for ranges
past 255; it is NOT uniform and exists for output compatibility only.
`uniform_index` is the unbiased choice used for picking characters and
shuffle positions of any size.
"""

from typing import Optional

from .entropy import EntropySource
from .errors import ErrorTracker, FatalState, Severity

DEFAULT_FAIL_THRESHOLD = Severity.CRITICAL


class RangeSampler:
    def __init__(self, source: EntropySource, tracker: Optional[ErrorTracker] = None,
                 fail_threshold=DEFAULT_FAIL_THRESHOLD):
        self.source = source
        self.tracker = tracker if tracker is not None else source.tracker
        self.fail_threshold = fail_threshold

    def _guard(self) -> None:
        if self.tracker.is_fatal(self.fail_threshold):
            highest = self.tracker.highest_severity()
            self.tracker.log(
                f"Currently in fatal state (highest error level is {int(highest)}). Not continuing.",
                Severity.FATAL,
            )
            raise FatalState(self.tracker.report())

    def uniform_byte(self, start: Optional[int] = 0, end: Optional[int] = 255) -> int:
        """
        Return the first byte from the source that falls inside [start, end].
        A `start` of None means no lower bound.
        """
        if start is None:
            start = 0
        if end is None:
            end = 255
        if start < 0 or end > 255 or start > end:
            raise ValueError(f"byte range [{start}, {end}] is not within [0, 255]")
        self._guard()
        while True:
            value = self.source.next_byte()
            if start <= value <= end:
                return value

    def uniform_int(self, start: Optional[int] = 0, end: Optional[int] = 255) -> int:
        """
        Integer in [start, end] built from single bytes.

        The span is split into 256-wide blocks plus a remainder. A first byte
        scales the number of full blocks summed, and a coin-flip byte decides
        whether the remainder draw is added at all.
        """
        if start is None:
            start = 0
        if end is None:
            end = 255
        if start < 0 or start > end:
            raise ValueError(f"invalid range [{start}, {end}]")
        span = end - start
        high_part, low_remainder = divmod(span, 256)

        block_count = (self.uniform_byte(0, 255) // 256) * high_part
        total = 0
        for _ in range(block_count):
            total += self.uniform_byte(0, 255)
        if self.uniform_byte(0, 255) // 128:
            total += self.uniform_byte(0, low_remainder)
        return start + total

    def uniform_index(self, upper: int) -> int:
        """Unbiased integer in [0, upper] for any non-negative `upper`."""
        if upper < 0:
            raise ValueError("upper bound must be >= 0")
        if upper <= 255:
            return self.uniform_byte(0, upper)
        nbytes = (upper.bit_length() + 7) // 8
        mask = (1 << upper.bit_length()) - 1
        while True:
            value = 0
            for _ in range(nbytes):
                value = (value << 8) | self.uniform_byte(0, 255)
            value &= mask
            if value <= upper:
                return value
