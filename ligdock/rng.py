"""Linear congruential generators and helpers for uniform random draws."""

from __future__ import annotations

import math
import random
from typing import Protocol

_MASK32 = 0xFFFFFFFF

# Divisor that maps a 32-bit state into [0, 1).
MAX_UINT = 4294967296.0

# Constants of the gcc linear congruential generator.
GCC_MULTIPLIER = 1103515245
GCC_INCREMENT = 12345

# Constants of the Visual C++ linear congruential generator.
MSVC_MULTIPLIER = 214013
MSVC_INCREMENT = 2531011

_default_source = random.Random()


class UniformSource(Protocol):
    """Anything with a ``random()`` method returning floats in [0, 1)."""

    def random(self) -> float: ...


class Lcg:
    """A 32-bit linear congruential generator."""

    def __init__(self, seed: int, multiplier: int, increment: int) -> None:
        self.state = seed & _MASK32
        self.multiplier = multiplier
        self.increment = increment

    def next_uint(self) -> int:
        """Advance the state and return it as an unsigned 32-bit integer."""
        self.state = (self.multiplier * self.state + self.increment) & _MASK32
        return self.state

    def next_float(self) -> float:
        """Advance the state and return a float in [0, 1)."""
        return (self.next_uint() / MAX_UINT) * 0.999999


def gcc_lcg(seed: int) -> Lcg:
    """Generator using the gcc constants."""
    return Lcg(seed, GCC_MULTIPLIER, GCC_INCREMENT)


def msvc_lcg(seed: int) -> Lcg:
    """Generator using the Visual C++ constants."""
    return Lcg(seed, MSVC_MULTIPLIER, MSVC_INCREMENT)


def random_unit(rng: UniformSource | None = None) -> float:
    """A random float strictly between 0 and 1."""
    source = rng if rng is not None else _default_source
    while True:
        value = source.random()
        if value != 0.0 and value != 1.0:
            return value


def random_below(limit: int, rng: UniformSource | None = None) -> int:
    """A random integer in the range [0, limit)."""
    return math.floor(limit * random_unit(rng))