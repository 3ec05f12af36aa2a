"""Mode arbitration: turns one joystick snapshot into outgoing commands.

Resolution order is fixed and the first match wins:

1. drive enable button held  -> DRIVE velocity
2. horiz enable button held  -> HORIZ velocity
3. twist enable button held  -> TWIST velocity
4. front adjust axis moved   -> nudge FL (positive) / FR (negative)
5. back adjust axis moved    -> nudge BL (positive) / BR (negative)
6. nothing                   -> a single neutral velocity, then silence

Nudges and idle share the stop rule: the first snapshot after motion sends a
neutral velocity before anything else.

Entering a mode (or dropping back to idle) is a transition. Entering a mode
first realigns the wheels for that mode and sends a neutral velocity, so the
base never carries motion from one wheel layout into another.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple, Union

from .bindings import BindingTable, Mode
from .commands import AdjustWheel, Direction, SteeringAdjust, Velocity

Command = Union[Velocity, SteeringAdjust]

# Steering-delta axis must be pushed past this to qualify a nudge
NUDGE_THRESHOLD = 0.5

REALIGN_TARGET = {
    Mode.DRIVE: AdjustWheel.ALL_STRAIGHT,
    Mode.HORIZ: AdjustWheel.ALL_HORIZ,
    Mode.TWIST: AdjustWheel.ALL_TWIST,
}

# Highest priority first
MODE_PRIORITY: Tuple[Mode, ...] = (Mode.DRIVE, Mode.HORIZ, Mode.TWIST)


@dataclass(frozen=True)
class InputSnapshot:
    """One atomic read of the joystick."""

    buttons: Sequence[bool] = ()
    axes: Sequence[float] = ()

    @classmethod
    def from_joy(cls, axes: Sequence[float], buttons: Sequence[int]) -> "InputSnapshot":
        """Copy the arrays of a Joy message."""
        return cls(buttons=tuple(bool(b) for b in buttons), axes=tuple(float(a) for a in axes))


@dataclass
class TranslatorState:
    active_mode: Optional[Mode] = None
    neutral_already_sent: bool = False


class InputTranslator:
    """Translate snapshots into velocity and steering commands.

    Not reentrant: snapshots must be evaluated one at a time, in the order
    they were read.
    """

    def __init__(self, bindings: BindingTable) -> None:
        self.bindings = bindings
        self.state = TranslatorState()
        self.logger = logging.getLogger('InputTranslator')

    def evaluate(self, snapshot: InputSnapshot) -> List[Command]:
        """Resolve the active mode for ``snapshot`` and emit its commands.

        Never raises for bad bindings: an index the snapshot does not have
        reads as an idle button / centred axis.

        Args:
            snapshot: Joystick state to translate

        Returns:
            Commands in the order they must be delivered (possibly empty)
        """
        mode = self._resolve_mode(snapshot)
        if mode is not None:
            commands: List[Command] = []
            if mode != self.state.active_mode:
                commands.extend(self._enter_mode(mode))
            commands.append(self._velocity(snapshot, mode))
            self.state.neutral_already_sent = False
            return commands

        front = self._axis(snapshot, self.bindings.adjust_front_index())
        if front:
            return self._nudge(snapshot, AdjustWheel.FL if front > 0 else AdjustWheel.FR)

        back = self._axis(snapshot, self.bindings.adjust_back_index())
        if back:
            return self._nudge(snapshot, AdjustWheel.BL if back > 0 else AdjustWheel.BR)

        return self._idle()

    def _resolve_mode(self, snapshot: InputSnapshot) -> Optional[Mode]:
        """Return the highest-priority mode whose enable button is held."""
        for mode in MODE_PRIORITY:
            if self._button(snapshot, self.bindings.enable_button_index(mode)):
                return mode
        return None

    def _enter_mode(self, mode: Mode) -> List[Command]:
        """Record the new mode and return its realign + stop commands, in that order."""
        previous = self.state.active_mode
        self.logger.info(
            f"Mode transition: {previous.name if previous else 'IDLE'} -> {mode.name}"
        )
        self.state.active_mode = mode
        self.state.neutral_already_sent = True
        return [SteeringAdjust(REALIGN_TARGET[mode]), Velocity.zero()]

    def _velocity(self, snapshot: InputSnapshot, mode: Mode) -> Velocity:
        """Scale each bound axis by the mode's factor; unbound channels read 0.0."""
        def value(channel: str) -> float:
            axis = self._axis(snapshot, self.bindings.axis_index(channel))
            if axis is None:
                return 0.0
            return axis * self.bindings.scale(mode, channel)

        return Velocity(
            linear_x=value('x'),
            linear_y=value('y'),
            linear_z=value('z'),
            angular_x=value('roll'),
            angular_y=value('pitch'),
            angular_z=value('yaw'),
        )

    def _nudge(self, snapshot: InputSnapshot, wheel: AdjustWheel) -> List[Command]:
        # The base must be stopped before any wheel is turned; active_mode is kept
        commands: List[Command] = []
        if not self.state.neutral_already_sent:
            self.state.neutral_already_sent = True
            commands.append(Velocity.zero())

        delta = self._axis(snapshot, self.bindings.steering_delta_index()) or 0.0
        if delta < -NUDGE_THRESHOLD:
            direction = Direction.DECREASE
        elif delta > NUDGE_THRESHOLD:
            direction = Direction.INCREASE
        else:
            self.logger.debug(f"Nudge {wheel.name} ignored, steering delta {delta:+.2f} in deadband")
            return commands

        commands.append(SteeringAdjust(wheel, direction))
        return commands

    def _idle(self) -> List[Command]:
        """Leave any active mode and send at most one stop per idle streak."""
        if self.state.active_mode is not None:
            self.logger.info(f"Mode transition: {self.state.active_mode.name} -> IDLE")
            self.state.active_mode = None

        if self.state.neutral_already_sent:
            return []
        self.state.neutral_already_sent = True
        return [Velocity.zero()]

    @staticmethod
    def _axis(snapshot: InputSnapshot, index: Optional[int]) -> Optional[float]:
        if index is None or index < 0 or index >= len(snapshot.axes):
            return None
        return float(snapshot.axes[index])

    @staticmethod
    def _button(snapshot: InputSnapshot, index: Optional[int]) -> bool:
        if index is None or index < 0 or index >= len(snapshot.buttons):
            return False
        return bool(snapshot.buttons[index])


__all__ = ['Command', 'InputSnapshot', 'InputTranslator', 'TranslatorState']
