"""
Input and result records for the conveyor calculation.

Units follow the design form: t/h, m/s, m, mm for belt width, kg/m for
linear masses, kg/m^3 for density, degrees for angles, N for forces,
kW for power.
"""
from __future__ import annotations

import math
from dataclasses import dataclass, asdict, fields
from enum import StrEnum
from typing import Any, Dict, Optional


class DriveConfig(StrEnum):
    HEAD = "Head"
    TAIL = "Tail"
    DUAL_HEAD = "Dual Head"
    DUAL_TAIL = "Dual Tail"


class ConveyorDirection(StrEnum):
    INCLINE = "Incline"
    DECLINE = "Decline"
    HORIZONTAL = "Horizontal"
    REVERSIBLE = "Reversible"


# --- INPUT ---
@dataclass(frozen=True)
class ConveyorInput:
    # 1. Design targets
    drive_config: DriveConfig = DriveConfig.HEAD
    conveyor_direction: ConveyorDirection = ConveyorDirection.INCLINE
    design_capacity: float = 225.0      # t/h
    belt_speed: float = 1.5             # m/s
    wrap_angle: float = 210.0           # deg

    # 2. Material
    material_name: str = "Coal"
    material_density: float = 800.0     # kg/m^3
    lump_size: float = 75.0             # mm
    surcharge_angle: float = 30.0       # deg
    repose_angle: float = 35.0          # deg
    material_condition: str = "Dry"

    # 3. Geometry
    horizontal_length: float = 25.0     # m
    lift_height: float = 5.0            # m, negative for decline
    carrier_pitch: float = 1.2          # m
    return_pitch: float = 2.4           # m
    trough_angle: float = 35.0          # deg
    number_of_plies: Optional[int] = None

    # 4. Belt & components
    belt_width: float = 600.0           # mm
    belt_mass: float = 15.0             # kg/m
    idler_mass: float = 25.0            # kg/m, carrying side
    return_idler_mass: Optional[float] = None
    belt_sag: float = 2.0               # % of idler pitch
    friction_idlers: float = 0.02
    drive_efficiency: float = 0.9

    # 5. Accessories
    hopper_height: float = 0.0
    hopper_bottom_width: float = 0.0
    hopper_bottom_length: float = 0.0
    skirt_length: float = 0.0
    skirt_width: float = 0.0
    tripper_count: int = 0
    scraper_count: int = 0
    plough_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["drive_config"] = self.drive_config.value
        data["conveyor_direction"] = self.conveyor_direction.value
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConveyorInput":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown input field(s): {', '.join(unknown)}")
        kwargs = dict(data)
        if "drive_config" in kwargs:
            kwargs["drive_config"] = DriveConfig(kwargs["drive_config"])
        if "conveyor_direction" in kwargs:
            kwargs["conveyor_direction"] = ConveyorDirection(kwargs["conveyor_direction"])
        return cls(**kwargs)


# --- RESULTS ---
@dataclass(frozen=True)
class GeometryResult:
    angle_rad: float
    angle_deg: float
    conveyor_length: float      # sloped length, m


@dataclass(frozen=True)
class CapacityResult:
    area_factor: float
    cross_section_area: float   # m^2
    volumetric: float           # m^3/h
    mass: float                 # t/h
    status: str                 # "OK" / "NOT OK"

    @property
    def ok(self) -> bool:
        return self.status == "OK"


@dataclass(frozen=True)
class LinearMasses:
    material: float             # Wm, kg/m
    belt: float                 # Wb
    carry_idlers: float         # Wi
    return_idlers: float        # Wri


@dataclass(frozen=True)
class Resistances:
    carrier_friction: float
    return_friction: float
    lift: float
    skirt: float
    hopper: float
    cleaners: float
    bending: float

    @property
    def idlers(self) -> float:
        return self.carrier_friction + self.return_friction

    @property
    def accessories(self) -> float:
        # bending is reported on its own, not as an accessory
        return self.skirt + self.hopper + self.cleaners

    @property
    def effective_tension(self) -> float:
        return (self.carrier_friction + self.return_friction + self.lift
                + self.skirt + self.hopper + self.cleaners + self.bending)


@dataclass(frozen=True)
class PowerResult:
    f_idlers: float
    f_lift: float
    f_hopper: float
    f_skirt: float
    f_bending: float
    f_cleaners: float
    f_accel: float
    effective_tension: float    # Te, N

    p_belt: float               # kW
    p_horizontal: float
    p_lift: float
    p_accessories: float
    p_total_shaft: float
    p_motor_min: float
    p_motor_installed: float


@dataclass(frozen=True)
class TensionResult:
    t1: float
    t2: float
    t3: float
    t4: float
    t_tail: float
    t_max: float
    min_tension_sag: float
    min_tension_drive: float
    drive_factor: float


@dataclass(frozen=True)
class PulleyResult:
    diameter: float             # mm
    face_width: float           # mm
    shaft_torque: float         # N·m
    resultant_load: float       # N


@dataclass(frozen=True)
class ConveyorResult:
    geometry: GeometryResult
    capacity: CapacityResult
    power: PowerResult
    tension: TensionResult
    pulley: PulleyResult

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def is_finite(self) -> bool:
        """False when any numeric figure is NaN or infinite."""
        for block in (self.geometry, self.capacity, self.power, self.tension, self.pulley):
            for f in fields(block):
                value = getattr(block, f.name)
                if isinstance(value, float) and not math.isfinite(value):
                    return False
        return True
