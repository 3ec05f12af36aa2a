"""Outgoing commands produced by the input translator.

Two kinds of command leave the translator:

- ``Velocity``: a complete velocity target (never a delta) for the base.
- ``SteeringAdjust``: a one-shot event that nudges a single wheel or
  realigns all four wheels to a canonical layout.

On the wire a steering adjustment is a single signed integer. The magnitude
selects the wheel (or layout) and the sign carries the direction, which is
why the codes start at 1: there is no -0.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class AdjustWheel(IntEnum):
    """Wheel / layout codes carried by the adjust_steering topic."""
    NONE = 0
    FR = 1            # Front Right
    FL = 2            # Front Left
    BR = 3            # Back Right
    BL = 4            # Back Left
    ALL_STRAIGHT = 5
    ALL_HORIZ = 6
    ALL_TWIST = 7

    @property
    def is_single_wheel(self) -> bool:
        return self in (AdjustWheel.FR, AdjustWheel.FL, AdjustWheel.BR, AdjustWheel.BL)


class Direction(Enum):
    INCREASE = 1
    DECREASE = -1


@dataclass(frozen=True)
class Velocity:
    """Velocity target for the base, six degrees of freedom."""

    linear_x: float = 0.0
    linear_y: float = 0.0
    linear_z: float = 0.0
    angular_x: float = 0.0
    angular_y: float = 0.0
    angular_z: float = 0.0

    @classmethod
    def zero(cls) -> "Velocity":
        """Create the neutral (all-zero) command."""
        return cls()

    @property
    def is_neutral(self) -> bool:
        return all(
            value == 0.0
            for value in (
                self.linear_x, self.linear_y, self.linear_z,
                self.angular_x, self.angular_y, self.angular_z,
            )
        )


@dataclass(frozen=True)
class SteeringAdjust:
    """Discrete steering adjustment.

    ``direction`` only matters for single wheel targets; the all-wheel
    layouts are always sent as positive codes.
    """

    target: AdjustWheel
    direction: Direction = Direction.INCREASE

    def __post_init__(self) -> None:
        if self.target == AdjustWheel.NONE:
            raise ValueError("SteeringAdjust requires a wheel or layout target")

    @property
    def code(self) -> int:
        """Signed integer published on the adjust_steering topic."""
        if not self.target.is_single_wheel:
            return int(self.target)
        return int(self.target) * self.direction.value


__all__ = ['AdjustWheel', 'Direction', 'Velocity', 'SteeringAdjust']
