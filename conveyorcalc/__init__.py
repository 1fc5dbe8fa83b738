"""Belt conveyor preliminary design after the CEMA analytical method."""
from .config import CemaConstants, DEFAULT_CONSTANTS, load_constants
from .engine import calculate
from .models import ConveyorDirection, ConveyorInput, ConveyorResult, DriveConfig
from .validation import CalculationOutcome, InvalidConveyorInput, calculate_checked

__all__ = [
    "CalculationOutcome",
    "CemaConstants",
    "ConveyorDirection",
    "ConveyorInput",
    "ConveyorResult",
    "DEFAULT_CONSTANTS",
    "DriveConfig",
    "InvalidConveyorInput",
    "calculate",
    "calculate_checked",
    "load_constants",
]
