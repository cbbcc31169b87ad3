"""Seeded randomness and small numeric helpers shared by the engines.

Every stochastic engine call takes a ``random.Random`` instance; nothing in
the package touches the module-level random state, so an identical seed
and call order reproduces a whole career.
"""

import math
import random
import string
from typing import Iterable, Optional, Sequence, TypeVar

T = TypeVar("T")

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 12


def make_rng(seed: int | str | None = None) -> random.Random:
    """Create an independent random generator."""
    return random.Random(seed)


def weighted_choice(
    rng: random.Random,
    items: Iterable[tuple[T, float]],
) -> Optional[T]:
    """Pick one item with probability proportional to its weight.

    Negative weights count as zero. Returns None when no item has a
    positive weight.
    """
    candidates = [(item, weight) for item, weight in items if weight > 0]
    if not candidates:
        return None
    population = [item for item, _ in candidates]
    weights = [weight for _, weight in candidates]
    return rng.choices(population, weights=weights, k=1)[0]


def chance(rng: random.Random, probability: float) -> bool:
    """Return True with the given probability."""
    return rng.random() < probability


def pick(rng: random.Random, items: Sequence[T]) -> T:
    return items[rng.randrange(len(items))]


def generate_id(prefix: str, rng: random.Random) -> str:
    """Build an id like ``neg_k3f9a0c1b2d4`` from the generator."""
    suffix = "".join(ID_ALPHABET[rng.randrange(len(ID_ALPHABET))] for _ in range(ID_LENGTH))
    return f"{prefix}_{suffix}"


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up (2.5 -> 3)."""
    return math.floor(value + 0.5)
