"""Orbital spacing repair so that generated bodies never overlap."""
from __future__ import annotations

import math
from dataclasses import replace
from typing import List, Optional, Sequence, Tuple

from universe.config.tables import CollisionSettings
from universe.engine.logger import GenerationLogger, resolve_channel
from universe.generation.bodies import BodyParams, RingworldGravity, orbital_period


def gravity_radius(body: BodyParams, collision: CollisionSettings) -> float:
    """Influence radius used for spacing; never used for simulation."""

    shape = body.gravity_shape
    if isinstance(shape, RingworldGravity):
        return shape.major_radius + shape.minor_radius
    return shape.radius * collision.gravity_radius_multiplier


def min_spacing(a: BodyParams, b: BodyParams, collision: CollisionSettings) -> float:
    return (gravity_radius(a, collision) + gravity_radius(b, collision)) * collision.orbital_spacing_multiplier


class SpacingValidator:
    """Single forward pass that pushes crowded bodies outward.

    Pushing body ``i`` outward only widens the gaps after it, so earlier
    pairs never need revisiting.
    """

    def __init__(self, collision: CollisionSettings, logger: Optional[GenerationLogger] = None) -> None:
        self.collision = collision
        self._log = resolve_channel(logger, "spacing")

    def validate(self, bodies: Sequence[BodyParams]) -> Tuple[BodyParams, ...]:
        # sorted() is stable: equal radii keep their original order.
        ordered = sorted(bodies, key=lambda body: body.orbital.radius)
        result: List[BodyParams] = []
        for body in ordered:
            body = replace(body, biome_distribution=dict(body.biome_distribution))
            if result:
                previous = result[-1]
                required = min_spacing(previous, body, self.collision)
                gap = body.orbital.radius - previous.orbital.radius
                if gap < required:
                    radius = previous.orbital.radius + required
                    # Rounding can leave the sum a hair short of the required gap.
                    while radius - previous.orbital.radius < required:
                        radius = math.nextafter(radius, math.inf)
                    self._log.debug(
                        "Pushed body %d of system %d/%d from %.2f to %.2f (gap %.2f < %.2f)",
                        body.body_index,
                        body.galaxy_index,
                        body.system_index,
                        body.orbital.radius,
                        radius,
                        gap,
                        required,
                    )
                    body = replace(
                        body,
                        orbital=replace(body.orbital, radius=radius, period=orbital_period(radius)),
                    )
            result.append(body)
        return tuple(result)

    def is_valid(self, bodies: Sequence[BodyParams]) -> bool:
        """True when every adjacent pair in radius order is far enough apart."""

        ordered = sorted(bodies, key=lambda body: body.orbital.radius)
        return all(
            ordered[i].orbital.radius - ordered[i - 1].orbital.radius
            >= min_spacing(ordered[i - 1], ordered[i], self.collision)
            for i in range(1, len(ordered))
        )


def validate_orbital_spacing(
    bodies: Sequence[BodyParams],
    collision: CollisionSettings,
    logger: Optional[GenerationLogger] = None,
) -> Tuple[BodyParams, ...]:
    return SpacingValidator(collision, logger).validate(bodies)


__all__ = ["SpacingValidator", "gravity_radius", "min_spacing", "validate_orbital_spacing"]
