"""
Widget defaults for the design form.

Every sidebar widget is seeded from the input currently loaded, so a saved
project reopens with exactly the values it was saved with.
"""
import math
from typing import Dict, List, Optional, Sequence, Tuple

from .materials import MaterialProperties
from .models import ConveyorInput
from .projects import SavedProject

TROUGH_ANGLES = [20, 35, 45]
CONDITIONS = ["Dry", "Wet", "Sticky"]
BELT_WIDTHS = [400, 500, 600, 650, 800, 1000, 1200, 1400, 1600, 1800, 2000]


def choices(options: Sequence, value) -> Tuple[List, int]:
    """Options plus the index of ``value``; a value not offered is added, never dropped."""
    options = list(options)
    if value not in options:
        options.append(value)
        if all(isinstance(o, (int, float)) for o in options):
            options.sort()
    return options, options.index(value)


def trough_choices(inp: ConveyorInput) -> Tuple[List, int]:
    angle = inp.trough_angle
    if float(angle).is_integer():
        angle = int(angle)
    return choices(TROUGH_ANGLES, angle)


def condition_choices(inp: ConveyorInput) -> Tuple[List, int]:
    return choices(CONDITIONS, inp.material_condition)


def width_choices(inp: ConveyorInput) -> Tuple[List, int]:
    width = inp.belt_width
    if float(width).is_integer():
        width = int(width)
    return choices(BELT_WIDTHS, width)


def default_density(inp: ConveyorInput, material: Optional[MaterialProperties]) -> float:
    # switching to another table material proposes its typical density
    if material is not None and material.name != inp.material_name:
        return float(material.typical_density)
    return float(inp.material_density)


def slope_angle_deg(inp: ConveyorInput) -> float:
    return math.degrees(math.atan2(inp.lift_height, inp.horizontal_length))


def project_choices(projects: Sequence[SavedProject]) -> Dict[str, str]:
    """Project id -> picker label; ids keep same-named projects apart."""
    return {p.id: f"{p.name or p.id} ({p.updated_at[:10]})" for p in projects}
