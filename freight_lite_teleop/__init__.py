"""freight_lite_teleop package."""

from .bindings import BindingTable, ConfigurationError, Mode, bindings_from_parameters
from .commands import AdjustWheel, Direction, SteeringAdjust, Velocity
from .translator import InputSnapshot, InputTranslator, TranslatorState

__all__ = [
    'AdjustWheel',
    'BindingTable',
    'ConfigurationError',
    'Direction',
    'InputSnapshot',
    'InputTranslator',
    'Mode',
    'SteeringAdjust',
    'TranslatorState',
    'Velocity',
    'bindings_from_parameters',
]

try:
    from .teleop_joy_node import TeleopJoyNode
except ImportError:
    TeleopJoyNode = None  # type: ignore[assignment]
else:
    __all__.append('TeleopJoyNode')
