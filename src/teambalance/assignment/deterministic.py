"""Seeded pseudo-random sequences and reproducible seed derivation."""

from __future__ import annotations

import math
import random
from typing import Iterable, List, Optional, Sequence, TypeVar

from teambalance.errors import EmptyInputError, InvalidSeedError


T = TypeVar("T")

_UINT32_MASK = 0xFFFFFFFF
_INT32_SIGN = 0x80000000
MAX_SEED = 2**31 - 1

_HEX_DIGITS = "0123456789abcdef"


class SequenceGenerator:
    """Deterministic random source for a single assignment run.

    Instances hold mutable state and must not be shared between runs.
    """

    def __init__(self, seed: int):
        self.seed = seed
        self._rng = random.Random(seed)

    def next(self) -> float:
        """Return a float in ``[0, 1)``."""

        return self._rng.random()

    def next_int(self, low: int, high: int) -> int:
        """Return an integer in ``[low, high]`` inclusive."""

        return math.floor(self.next() * (high - low + 1)) + low

    def shuffle(self, items: Sequence[T]) -> List[T]:
        """Fisher-Yates shuffle of a copy; ``items`` is left untouched."""

        shuffled = list(items)
        for i in range(len(shuffled) - 1, 0, -1):
            j = self.next_int(0, i)
            shuffled[i], shuffled[j] = shuffled[j], shuffled[i]
        return shuffled

    def pick(self, items: Sequence[T]) -> T:
        if not items:
            raise EmptyInputError("Cannot pick from an empty sequence")
        return items[self.next_int(0, len(items) - 1)]

    def token(self, length: int = 8) -> str:
        """Deterministic hex identifier for tracking a run."""

        return "".join(_HEX_DIGITS[self.next_int(0, len(_HEX_DIGITS) - 1)] for _ in range(length))


def data_seed(player_ids: Iterable[int]) -> int:
    """Fold the sorted player ids into a non-negative 32-bit seed."""

    value = 0
    for player_id in sorted(player_ids):
        value = ((value << 5) - value + player_id) & _UINT32_MASK
    if value & _INT32_SIGN:
        value -= 1 << 32
    return abs(value)


def combine_seed(caller_seed: Optional[int], seed_from_data: int) -> int:
    """Mix the caller seed into the data seed; without one the data seed is used."""

    if caller_seed is None:
        return seed_from_data
    return (caller_seed ^ seed_from_data) & _UINT32_MASK


def describe_seed(caller_seed: Optional[int], effective_seed: int) -> str:
    if caller_seed is None:
        return f"Using data-derived seed: {effective_seed}"
    return f"Using caller seed {caller_seed} (effective: {effective_seed})"


def validate_seed(seed: object) -> int:
    if isinstance(seed, bool) or not isinstance(seed, int):
        raise InvalidSeedError("Seed must be an integer")
    if seed < 0:
        raise InvalidSeedError("Seed must be non-negative")
    if seed > MAX_SEED:
        raise InvalidSeedError("Seed must be less than 2^31")
    return seed
