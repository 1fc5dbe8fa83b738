"""
Bulk material reference table (CEMA typical values, SI units).
"""
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import List, Optional

from .models import ConveyorInput


class Abrasiveness(StrEnum):
    NON_ABRASIVE = "Non-abrasive"
    ABRASIVE = "Abrasive"
    VERY_ABRASIVE = "Very Abrasive"
    SHARP = "Sharp"


@dataclass(frozen=True)
class MaterialProperties:
    name: str
    density_min: float          # kg/m^3
    density_max: float          # kg/m^3
    angle_repose: float         # deg
    angle_surcharge: float      # deg
    abrasiveness: Abrasiveness
    description: str = ""

    @property
    def typical_density(self) -> float:
        return (self.density_min + self.density_max) / 2


MATERIAL_DATABASE: List[MaterialProperties] = [
    MaterialProperties("Anthracite Coal", 800, 960, 27, 10, Abrasiveness.NON_ABRASIVE, "Sized, washed, clean."),
    MaterialProperties("Bituminous Coal", 640, 880, 35, 20, Abrasiveness.NON_ABRASIVE, "Run of mine."),
    MaterialProperties("Lignite Coal", 640, 800, 38, 25, Abrasiveness.NON_ABRASIVE, "Air dried."),
    MaterialProperties("Limestone (Crushed)", 1360, 1600, 38, 20, Abrasiveness.ABRASIVE),
    MaterialProperties("Sand (Dry)", 1440, 1760, 35, 25, Abrasiveness.VERY_ABRASIVE),
    # density varies widely; corrosive as well
    MaterialProperties("NPK Fertilizer", 880, 1120, 32, 15, Abrasiveness.ABRASIVE),
    MaterialProperties("Urea Prills", 700, 780, 28, 15, Abrasiveness.NON_ABRASIVE),
    MaterialProperties("Wood Chips", 220, 480, 45, 25, Abrasiveness.NON_ABRASIVE, "Interlocking."),
    MaterialProperties("Iron Ore (Crushed)", 2000, 2800, 35, 25, Abrasiveness.VERY_ABRASIVE),
]


def material_names() -> List[str]:
    return [m.name for m in MATERIAL_DATABASE]


def get_material_by_name(name: str) -> Optional[MaterialProperties]:
    for m in MATERIAL_DATABASE:
        if m.name == name:
            return m
    return None


def apply_material(inp: ConveyorInput, material: MaterialProperties) -> ConveyorInput:
    """Copy of ``inp`` with name, typical density and pile angles from the table."""
    return replace(
        inp,
        material_name=material.name,
        material_density=material.typical_density,
        surcharge_angle=material.angle_surcharge,
        repose_angle=material.angle_repose,
    )
