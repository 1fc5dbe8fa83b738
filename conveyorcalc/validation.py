"""
Guarded entry point around the total calculation.

``engine.calculate`` never raises on degenerate input; it hands back inf/nan.
This module rejects the known degenerate cases up front and reports them as
plain reasons, so the UI (or any other caller) can show them instead of a
result full of non-finite numbers.
"""
import logging
import math
from dataclasses import dataclass, fields
from typing import List, Optional

from .config import CemaConstants
from .engine import calculate
from .models import ConveyorInput, ConveyorResult

logger = logging.getLogger(__name__)

_NON_NEGATIVE = (
    "design_capacity",
    "material_density",
    "lump_size",
    "carrier_pitch",
    "return_pitch",
    "belt_width",
    "belt_mass",
    "idler_mass",
    "return_idler_mass",
    "friction_idlers",
    "hopper_height",
    "hopper_bottom_width",
    "hopper_bottom_length",
    "skirt_length",
    "skirt_width",
    "tripper_count",
    "scraper_count",
    "plough_count",
)


class InvalidConveyorInput(ValueError):
    """Input that would drive the pipeline into a meaningless result."""

    def __init__(self, reasons: List[str]):
        self.reasons = list(reasons)
        super().__init__("; ".join(self.reasons))


@dataclass
class CalculationOutcome:
    """Result of a guarded calculation."""
    success: bool
    result: Optional[ConveyorResult] = None
    error: str = ""


def validate_input(inp: ConveyorInput) -> List[str]:
    """Return the reasons ``inp`` is invalid; empty when it is fine."""
    reasons = []

    for f in fields(inp):
        value = getattr(inp, f.name)
        if isinstance(value, (int, float)) and not isinstance(value, bool) and not math.isfinite(value):
            reasons.append(f"{f.name} must be a finite number")
    if reasons:
        return reasons

    if inp.horizontal_length <= 0:
        reasons.append("Horizontal length must be > 0")
    if inp.belt_speed <= 0:
        reasons.append("Belt speed must be > 0")
    if not 0 < inp.wrap_angle < 360:
        reasons.append("Wrap angle must be between 0 and 360 deg (exclusive)")
    if not 0 < inp.drive_efficiency <= 1:
        reasons.append("Drive efficiency must be in (0, 1]")
    if inp.belt_sag <= 0:
        reasons.append("Belt sag must be > 0 %")

    for name in _NON_NEGATIVE:
        value = getattr(inp, name)
        if value is not None and value < 0:
            reasons.append(f"{name} must be >= 0")

    return reasons


def ensure_valid(inp: ConveyorInput) -> ConveyorInput:
    reasons = validate_input(inp)
    if reasons:
        raise InvalidConveyorInput(reasons)
    return inp


def calculate_checked(inp: ConveyorInput, constants: Optional[CemaConstants] = None) -> CalculationOutcome:
    """
    Validate, calculate, and refuse non-finite results.

    Args:
        inp: Conveyor design parameters.
        constants: Optional override of the CEMA allowances.

    Returns:
        CalculationOutcome with the result, or the reason it was refused.
    """
    try:
        ensure_valid(inp)
    except InvalidConveyorInput as e:
        logger.warning("Rejected conveyor input: %s", e)
        return CalculationOutcome(success=False, error=str(e))

    result = calculate(inp, constants)
    if not result.is_finite():
        logger.warning("Calculation produced non-finite figures for %s", inp.material_name)
        return CalculationOutcome(success=False, result=result,
                                  error="Calculation produced non-finite values")
    return CalculationOutcome(success=True, result=result)
