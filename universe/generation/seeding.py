"""Seed derivation and the reproducible random stream.

Every generated galaxy, system and body is keyed on an identifier string
built from its index path. The identifier is folded into the master seed
with a multiply-by-31 rolling hash using 32-bit signed wraparound, and the
result seeds a linear congruential generator. Both recurrences are exact
integer arithmetic so any process on any machine reproduces the same
values.
"""
from __future__ import annotations

from dataclasses import dataclass

INT32_MODULUS = 1 << 32
INT32_MAX = (1 << 31) - 1

LCG_MULTIPLIER = 1103515245
LCG_INCREMENT = 12345
LCG_MODULUS = 1 << 31


def _to_int32(value: int) -> int:
    value &= INT32_MODULUS - 1
    if value > INT32_MAX:
        value -= INT32_MODULUS
    return value


def derive_seed(master_seed: int, identifier: str) -> int:
    """Fold ``identifier`` into ``master_seed`` and return a non-negative seed."""

    acc = _to_int32(master_seed)
    for char in identifier:
        acc = _to_int32((acc << 5) - acc + ord(char))
    # abs(-2**31) would overflow the 31-bit range; it folds to 0.
    return abs(acc) & INT32_MAX


def galaxy_identifier(galaxy_index: int) -> str:
    return f"galaxy_{galaxy_index}"


def system_identifier(galaxy_index: int, system_index: int) -> str:
    return f"galaxy_{galaxy_index}_system_{system_index}"


def body_identifier(galaxy_index: int, system_index: int, body_index: int) -> str:
    return f"galaxy_{galaxy_index}_system_{system_index}_body_{body_index}"


@dataclass(frozen=True)
class HierarchicalPath:
    """Index path identifying a body for generation purposes."""

    galaxy_index: int
    system_index: int
    body_index: int = 0

    def __post_init__(self) -> None:
        for label, value in (
            ("galaxy_index", self.galaxy_index),
            ("system_index", self.system_index),
            ("body_index", self.body_index),
        ):
            if value < 0:
                raise ValueError(f"{label} must be non-negative, got {value}")

    def galaxy_seed(self, master_seed: int) -> int:
        return derive_seed(master_seed, galaxy_identifier(self.galaxy_index))

    def system_seed(self, master_seed: int) -> int:
        return derive_seed(master_seed, system_identifier(self.galaxy_index, self.system_index))

    def body_seed(self, master_seed: int) -> int:
        return derive_seed(
            master_seed,
            body_identifier(self.galaxy_index, self.system_index, self.body_index),
        )


class SeededStream:
    """Linear congruential generator yielding floats in ``[0, 1)``."""

    def __init__(self, seed: int) -> None:
        self._state = seed % LCG_MODULUS

    @property
    def state(self) -> int:
        return self._state

    def next(self) -> float:
        self._state = (self._state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self._state / LCG_MODULUS

    __call__ = next

    def uniform(self, low: float, high: float) -> float:
        return low + self.next() * (high - low)


__all__ = [
    "HierarchicalPath",
    "SeededStream",
    "body_identifier",
    "derive_seed",
    "galaxy_identifier",
    "system_identifier",
]
