"""Joystick bindings: which axis drives which channel and how hard.

A ``BindingTable`` is resolved once at startup from the node parameters and
never changes afterwards. Every index it stores is either a non-negative
offset into the Joy arrays or ``None`` when the feature is disabled; whether
that offset actually exists is only known per message, so range checks
against the live arrays happen in the translator.
"""
from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


class ConfigurationError(ValueError):
    """Raised when the bindings cannot be used as configured."""


class Mode(Enum):
    """Operating modes, each selected by holding its enable button."""
    DRIVE = 'drive'
    HORIZ = 'horiz'
    TWIST = 'twist'


LINEAR_CHANNELS: Tuple[str, ...] = ('x', 'y', 'z')
ANGULAR_CHANNELS: Tuple[str, ...] = ('yaw', 'pitch', 'roll')
CHANNELS: Tuple[str, ...] = LINEAR_CHANNELS + ANGULAR_CHANNELS

# Parameter names used by the teleop node, keyed by mode.
ENABLE_BUTTON_PARAMS: Dict[Mode, str] = {
    Mode.DRIVE: 'enable_button',
    Mode.HORIZ: 'enable_horiz_button',
    Mode.TWIST: 'enable_twist_button',
}


def _mode(value: Any) -> Mode:
    if isinstance(value, Mode):
        return value
    try:
        return Mode(value)
    except ValueError:
        raise ConfigurationError(f"Unknown mode '{value}'") from None


def _channel(value: Any) -> str:
    if value not in CHANNELS:
        raise ConfigurationError(f"Unknown channel '{value}' (valid: {', '.join(CHANNELS)})")
    return value


def _index(value: Any) -> Optional[int]:
    """Resolve a configured index, mapping negatives and None to disabled."""
    if value is None:
        return None
    index = int(value)
    return index if index >= 0 else None


class BindingTable:
    """Immutable axis/button bindings and per-mode scale factors.

    All accessors are read-only; the table is safe to share between
    translators.
    """

    def __init__(
        self,
        axis_index: Optional[Mapping[str, Any]] = None,
        scale: Optional[Mapping[Tuple[Any, str], float]] = None,
        enable_button_index: Optional[Mapping[Any, Any]] = None,
        adjust_axis_front_index: Any = None,
        adjust_axis_back_index: Any = None,
        steering_delta_axis_index: Any = None,
    ):
        """Resolve and validate the bindings.

        Args:
            axis_index: channel name -> axis index
            scale: (mode, channel) -> scale factor, modes given as ``Mode``
                   or their names
            enable_button_index: mode -> button index
            adjust_axis_front_index: axis nudging the front wheels
            adjust_axis_back_index: axis nudging the back wheels
            steering_delta_axis_index: axis qualifying a nudge as increase
                                       or decrease

        Negative or ``None`` indices disable the feature.

        Raises:
            ConfigurationError: unknown mode/channel names, or a nonzero
                scale for a channel that has no axis while its mode is
                enabled.
        """
        axes: Dict[str, int] = {}
        for channel, index in (axis_index or {}).items():
            channel = _channel(channel)
            resolved = _index(index)
            if resolved is not None:
                axes[channel] = resolved

        buttons: Dict[Mode, int] = {}
        for mode, index in (enable_button_index or {}).items():
            mode = _mode(mode)
            resolved = _index(index)
            if resolved is not None:
                buttons[mode] = resolved

        scales: Dict[Tuple[Mode, str], float] = {}
        for (mode, channel), value in (scale or {}).items():
            scales[(_mode(mode), _channel(channel))] = float(value)

        for (mode, channel), value in scales.items():
            if value != 0.0 and mode in buttons and channel not in axes:
                raise ConfigurationError(
                    f"Mode '{mode.value}' scales channel '{channel}' by {value} "
                    f"but no axis is mapped to '{channel}'"
                )

        self._axes = MappingProxyType(axes)
        self._buttons = MappingProxyType(buttons)
        self._scales = MappingProxyType(scales)
        self._adjust_front = _index(adjust_axis_front_index)
        self._adjust_back = _index(adjust_axis_back_index)
        self._steering_delta = _index(steering_delta_axis_index)

    @property
    def axes(self) -> Mapping[str, int]:
        """Mapped channels and their axis indices."""
        return self._axes

    def axis_index(self, channel: str) -> Optional[int]:
        return self._axes.get(channel)

    def scale(self, mode: Mode, channel: str) -> float:
        return self._scales.get((_mode(mode), channel), 0.0)

    def enable_button_index(self, mode: Mode) -> Optional[int]:
        return self._buttons.get(_mode(mode))

    def adjust_front_index(self) -> Optional[int]:
        return self._adjust_front

    def adjust_back_index(self) -> Optional[int]:
        return self._adjust_back

    def steering_delta_index(self) -> Optional[int]:
        return self._steering_delta

    def __repr__(self) -> str:
        buttons = {mode.value: index for mode, index in self._buttons.items()}
        return (
            f"BindingTable(axes={dict(self._axes)}, buttons={buttons}, "
            f"adjust_front={self._adjust_front}, adjust_back={self._adjust_back}, "
            f"steering_delta={self._steering_delta})"
        )


def bindings_from_parameters(params: Mapping[str, Any]) -> BindingTable:
    """Build a ``BindingTable`` from flat node parameters.

    Parameter names follow the teleop node: ``enable_button``,
    ``enable_horiz_button``, ``enable_twist_button``, ``axis_adjust_front``,
    ``axis_adjust_back``, ``axis_adjust_steering``, ``axis_linear.<ch>``,
    ``axis_angular.<ch>``, ``scale_linear.<ch>`` and ``scale_angular.<ch>``.
    Missing entries are treated as disabled (indices) or 0.0 (scales).

    Only a single "normal" scale set exists, so every mode gets the same
    scale factors.
    """
    axis_index: Dict[str, Optional[int]] = {}
    normal_scale: Dict[str, float] = {}
    for prefix, channels in (('linear', LINEAR_CHANNELS), ('angular', ANGULAR_CHANNELS)):
        for channel in channels:
            axis_index[channel] = _index(params.get(f'axis_{prefix}.{channel}'))
            value = params.get(f'scale_{prefix}.{channel}')
            if value is not None:
                normal_scale[channel] = float(value)

    return BindingTable(
        axis_index=axis_index,
        scale={
            (mode, channel): value
            for mode in Mode
            for channel, value in normal_scale.items()
        },
        enable_button_index={mode: params.get(name) for mode, name in ENABLE_BUTTON_PARAMS.items()},
        adjust_axis_front_index=params.get('axis_adjust_front'),
        adjust_axis_back_index=params.get('axis_adjust_back'),
        steering_delta_axis_index=params.get('axis_adjust_steering'),
    )


__all__ = [
    'ANGULAR_CHANNELS',
    'BindingTable',
    'CHANNELS',
    'ConfigurationError',
    'ENABLE_BUTTON_PARAMS',
    'LINEAR_CHANNELS',
    'Mode',
    'bindings_from_parameters',
]
