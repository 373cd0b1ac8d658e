"""
secretgen.shuffle
Fisher-Yates shuffle driven by a RangeSampler.
"""

from typing import List, MutableSequence

from .sampler import RangeSampler


def shuffle(sampler: RangeSampler, items: MutableSequence) -> MutableSequence:
    """Permute `items` in place; each i swaps with a j drawn from [0, i]."""
    for i in range(len(items)):
        j = sampler.uniform_index(i)
        items[i], items[j] = items[j], items[i]
    return items


def shuffle_string(sampler: RangeSampler, text: str) -> str:
    chars: List[str] = list(text)
    return "".join(shuffle(sampler, chars))
