"""
secretgen.assembler
Builds the class table for a request and draws the unshuffled characters.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .charclass import CharacterClass, default_class, parse_charclass
from .errors import CapacityError, ErrorTracker, Severity
from .sampler import RangeSampler


@dataclass
class SpecificationList:
    classes: List[CharacterClass] = field(default_factory=list)
    include_default: bool = True

    @property
    def required(self) -> List[CharacterClass]:
        return [c for c in self.classes if not c.is_optional]

    @property
    def optional(self) -> List[CharacterClass]:
        return [c for c in self.classes if c.is_optional]

    @property
    def required_sum(self) -> int:
        return sum(c.required for c in self.required)

    @property
    def has_optional(self) -> bool:
        return any(c.is_optional for c in self.classes)

    def can_reach(self, length: int) -> bool:
        """False when required counts alone fall short and nothing can fill the gap."""
        return self.required_sum >= length or self.has_optional

    def optional_pool(self) -> str:
        """Union of every optional class, first-seen order."""
        return "".join(dict.fromkeys("".join(c.chars for c in self.optional)))


def build_spec_list(charlists: Iterable[str], no_default: bool = False,
                    tracker: Optional[ErrorTracker] = None) -> SpecificationList:
    if tracker is None:
        tracker = ErrorTracker()
    specs = SpecificationList(include_default=not no_default)
    if not no_default:
        specs.classes.append(default_class())
    for raw in charlists:
        cls = parse_charclass(raw, tracker)
        if cls is not None:
            specs.classes.append(cls)
    return specs


def check_capacity(specs: SpecificationList, length: int, tracker: Optional[ErrorTracker] = None) -> bool:
    """
    Compare required counts against `length` before any byte is drawn.
    Returns False when the request cannot be satisfied as asked; without a
    tracker the first problem raises CapacityError.
    """
    problems = []
    required = specs.required_sum
    if required > length:
        problems.append((
            f"Sum of required char ({required}) exceeds requested secret length ({length}).",
            Severity.ERROR,
        ))
    if required < length and not specs.has_optional:
        problems.append((
            f"Total required char count ({required}) must equal requested secret length ({length}) "
            "when no optional char lists are provided.",
            Severity.CRITICAL,
        ))
    if problems and tracker is None:
        raise CapacityError(problems[0][0])
    for message, severity in problems:
        tracker.log(message, severity)
    return not problems


def random_string(sampler: RangeSampler, length: int, chars: str) -> Optional[str]:
    """`length` characters drawn independently and uniformly from `chars`."""
    if not chars:
        sampler.tracker.log("No character list provided to random_string.", Severity.CRITICAL)
        return None
    upper = len(chars) - 1
    return "".join(chars[sampler.uniform_index(upper)] for _ in range(length))


def assemble(sampler: RangeSampler, specs: SpecificationList, length: int) -> List[str]:
    """
    Required draws for every counted class, then fill up to `length` from the
    optional pool. Required classes are visited in declaration order. When
    required counts already exceed `length` nothing is trimmed.

    Raises CapacityError, before drawing anything, when `length` cannot be
    reached.
    """
    if not specs.can_reach(length):
        message = f"Only {specs.required_sum} of {length} characters can be assembled."
        sampler.tracker.log(message, Severity.CRITICAL)
        raise CapacityError(message)

    out: List[str] = []
    for cls in specs.required:
        out.extend(random_string(sampler, cls.required, cls.chars))

    missing = length - len(out)
    pool = specs.optional_pool()
    if missing > 0 and pool:
        out.extend(random_string(sampler, missing, pool))

    return out
