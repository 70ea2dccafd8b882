"""Weighted category selection driven by a stream draw."""
from __future__ import annotations

from typing import Iterable, Mapping, Tuple, TypeVar, Union

K = TypeVar("K")

Weights = Union[Mapping[K, float], Iterable[Tuple[K, float]]]


def select_category(weights: Weights, draw: float, fallback: K) -> K:
    """Return the first label whose cumulative weight reaches ``draw``.

    Labels are visited in the table's own order. Floating point shortfall
    in the cumulative sum falls through to ``fallback``.
    """

    items = weights.items() if isinstance(weights, Mapping) else weights
    cumulative = 0.0
    for label, weight in items:
        cumulative += weight
        if draw <= cumulative:
            return label
    return fallback


__all__ = ["select_category"]
