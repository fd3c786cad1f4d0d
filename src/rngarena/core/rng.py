"""Die-roll providers: an ambient wrapper over random.Random and a seeded MINSTD generator."""
from __future__ import annotations

from random import Random
from typing import Protocol

DEFAULT_SEED = 12345
MINSTD_MODULUS = 2**31 - 1
MINSTD_MULTIPLIER = 16807


class DieRoller(Protocol):
    """Anything able to roll a uniform die with faces 1..sides."""

    def roll_die(self, sides: int) -> int:
        ...


def _check_sides(sides: int) -> None:
    if sides <= 0:
        raise ValueError("sides must be > 0")


class RNG:
    """Wrapper around random.Random used for non-reproducible (PVE) fights."""

    def __init__(self, seed: int | None = None) -> None:
        self._random = Random(seed)

    def roll_die(self, sides: int) -> int:
        """Roll 1..sides."""
        _check_sides(sides)
        return self._random.randint(1, sides)


class SeededRNG:
    """
    Park-Miller multiplicative LCG (modulus 2**31 - 1, multiplier 16807).

    Each call to ``random`` advances the state and maps it into [0, 1), so a
    fight replays identically from the same seed.
    """

    def __init__(self, seed: int) -> None:
        state = abs(seed) % MINSTD_MODULUS
        # A zero state would stay zero forever.
        if state == 0:
            state = DEFAULT_SEED
        self._seed = seed
        self._state = state

    @property
    def seed(self) -> int:
        """The seed as given, before reduction into the generator's state range."""
        return self._seed

    def random(self) -> float:
        """Advance the generator and return a float in [0.0, 1.0)."""
        self._state = (self._state * MINSTD_MULTIPLIER) % MINSTD_MODULUS
        return (self._state - 1) / (MINSTD_MODULUS - 1)

    def roll_die(self, sides: int) -> int:
        """Roll 1..sides."""
        _check_sides(sides)
        return int(self.random() * sides) + 1


def seed_from_names(left_name: str, right_name: str) -> int:
    """
    Derive a fight seed from both participant names.

    Rolling ``hash * 31 + unit`` over the UTF-16 code units of the joined
    names, wrapped to a signed 32-bit integer. Returns the absolute value, or
    DEFAULT_SEED when that is zero.

    Lone surrogates (undecodable bytes smuggled in via surrogateescape) hash
    as their raw code unit.
    """
    combined = (left_name + right_name).encode("utf-16-le", "surrogatepass")
    value = 0
    for index in range(0, len(combined), 2):
        unit = combined[index] | (combined[index + 1] << 8)
        value = (value * 31 + unit) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return abs(value) or DEFAULT_SEED


__all__ = ["DEFAULT_SEED", "DieRoller", "RNG", "SeededRNG", "seed_from_names"]
