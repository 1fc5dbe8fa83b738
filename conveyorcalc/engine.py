"""
CEMA calculation engine.

Pure functions, one per stage, chained by ``calculate``. No validation is
done here: arithmetic runs on numpy float64 with floating-point errors
silenced, so degenerate input (zero length, zero wrap, zero speed) comes out
as inf/nan rather than an exception. Use ``validation.calculate_checked``
for a guarded call.
"""
import logging
from typing import Optional

import numpy as np

from .config import CemaConstants, DEFAULT_CONSTANTS
from .models import (
    CapacityResult,
    ConveyorInput,
    ConveyorResult,
    GeometryResult,
    LinearMasses,
    PowerResult,
    PulleyResult,
    Resistances,
    TensionResult,
)

logger = logging.getLogger(__name__)

_f = np.float64


# --- 1. GEOMETRY ---
@np.errstate(all="ignore")
def resolve_geometry(horizontal_length: float, lift_height: float) -> GeometryResult:
    L, H = _f(horizontal_length), _f(lift_height)
    angle = np.arctan(H / L)
    length = np.sqrt(L ** 2 + H ** 2)
    return GeometryResult(float(angle), float(np.degrees(angle)), float(length))


# --- 2. CAPACITY ---
def area_factor(trough_angle: float, constants: CemaConstants = DEFAULT_CONSTANTS) -> float:
    """Two-bin cross-section factor: deep trough (>= edge) or shallow."""
    if trough_angle >= constants.trough_bin_edge_deg:
        return constants.area_factor_deep
    return constants.area_factor_shallow


@np.errstate(all="ignore")
def evaluate_capacity(inp: ConveyorInput, constants: CemaConstants = DEFAULT_CONSTANTS) -> CapacityResult:
    k = area_factor(inp.trough_angle, constants)
    bw_m = _f(inp.belt_width) / 1000
    area = k * (bw_m * bw_m)
    cap_vol = area * _f(inp.belt_speed) * 3600
    cap_mass = cap_vol * (_f(inp.material_density) / 1000)
    # one-sided: surplus capacity is never flagged
    status = "OK" if cap_mass >= inp.design_capacity else "NOT OK"
    return CapacityResult(k, float(area), float(cap_vol), float(cap_mass), status)


# --- 3. MASSES ---
@np.errstate(all="ignore")
def model_masses(inp: ConveyorInput, constants: CemaConstants = DEFAULT_CONSTANTS) -> LinearMasses:
    # Wm from the target capacity, not the computed one.
    # NOTE: divides by 3.6, not 3600; kept as-is pending a CEMA worked example.
    Wm = (_f(inp.design_capacity) * 1000) / (3.6 * _f(inp.belt_speed))
    Wi = _f(inp.idler_mass)
    # zero counts as "not given"
    Wri = _f(inp.return_idler_mass) if inp.return_idler_mass else Wi * constants.return_idler_ratio
    return LinearMasses(float(Wm), float(inp.belt_mass), float(Wi), float(Wri))


# --- 4. RESISTANCES ---
@np.errstate(all="ignore")
def aggregate_resistances(inp: ConveyorInput, geometry: GeometryResult, masses: LinearMasses,
                          constants: CemaConstants = DEFAULT_CONSTANTS) -> Resistances:
    g = constants.gravity
    f = _f(inp.friction_idlers)
    ell = _f(geometry.conveyor_length)
    cos_a = np.cos(_f(geometry.angle_rad))
    Wb, Wi, Wri, Wm = _f(masses.belt), _f(masses.carry_idlers), _f(masses.return_idlers), _f(masses.material)

    # A. main rolling resistance, carry and return strands
    F_carrier = f * ell * g * (Wb + Wi + Wm) * cos_a
    F_return = f * ell * g * (Wb + Wri) * cos_a

    # B. lift: belt weight cancels around the loop, material lift only
    F_lift = Wm * g * _f(inp.lift_height)

    # C. accessories
    F_skirt = inp.skirt_length * 2 * constants.skirt_resistance_per_m if inp.skirt_length > 0 else 0.0
    F_hopper = constants.hopper_pullout if inp.hopper_height > 0 else 0.0
    F_cleaners = (inp.scraper_count * constants.scraper_resistance
                  + inp.plough_count * constants.plough_resistance)

    return Resistances(
        carrier_friction=float(F_carrier),
        return_friction=float(F_return),
        lift=float(F_lift),
        skirt=float(F_skirt),
        hopper=float(F_hopper),
        cleaners=float(F_cleaners),
        bending=float(constants.bending_resistance),
    )


# --- 5. POWER ---
@np.errstate(all="ignore")
def convert_power(inp: ConveyorInput, resistances: Resistances,
                  constants: CemaConstants = DEFAULT_CONSTANTS) -> PowerResult:
    v = _f(inp.belt_speed)
    Te = _f(resistances.effective_tension)
    P_belt = Te * v / 1000
    P_shaft = P_belt / _f(inp.drive_efficiency)
    P_installed = P_shaft * constants.safety_margin
    return PowerResult(
        f_idlers=resistances.idlers,
        f_lift=resistances.lift,
        f_hopper=resistances.hopper,
        f_skirt=resistances.skirt,
        f_bending=resistances.bending,
        f_cleaners=resistances.cleaners,
        f_accel=0.0,
        effective_tension=float(Te),
        p_belt=float(P_belt),
        p_horizontal=float(_f(resistances.idlers) * v / 1000),
        p_lift=float(_f(resistances.lift) * v / 1000),
        p_accessories=float(_f(resistances.accessories) * v / 1000),
        p_total_shaft=float(P_shaft),
        p_motor_min=float(P_shaft),
        p_motor_installed=float(P_installed),
    )


# --- 6. TENSIONS ---
@np.errstate(all="ignore")
def drive_factor(wrap_angle_deg: float, constants: CemaConstants = DEFAULT_CONSTANTS) -> float:
    """Capstan multiplier 1 / (e^(mu*theta) - 1); diverges as wrap -> 0."""
    theta = np.radians(_f(wrap_angle_deg))
    return float(1 / (np.exp(constants.drive_friction * theta) - 1))


@np.errstate(all="ignore")
def solve_tensions(inp: ConveyorInput, resistances: Resistances, masses: LinearMasses,
                   constants: CemaConstants = DEFAULT_CONSTANTS) -> TensionResult:
    Te = _f(resistances.effective_tension)
    k_drive = _f(drive_factor(inp.wrap_angle, constants))
    T2_slip = Te * k_drive

    # sag control on the carrying strand; reported, not enforced
    sag = _f(inp.belt_sag) / 100
    T_sag = (_f(masses.belt) + _f(masses.material)) * constants.gravity * _f(inp.carrier_pitch) / (8 * sag)

    T2 = np.maximum(T2_slip, constants.min_pretension)
    T1 = Te + T2
    F_ret = _f(resistances.return_friction)
    return TensionResult(
        t1=float(T1),
        t2=float(T2),
        t3=float(T2 - F_ret / 2),
        t4=float(T2 - F_ret),
        t_tail=float(T2 - F_ret),
        t_max=float(T1),
        min_tension_sag=float(T_sag),
        min_tension_drive=float(T2_slip),
        drive_factor=float(k_drive),
    )


# --- 7. PULLEY ---
@np.errstate(all="ignore")
def size_pulley(inp: ConveyorInput, resistances: Resistances, tension: TensionResult,
                constants: CemaConstants = DEFAULT_CONSTANTS) -> PulleyResult:
    d_mm = constants.pulley_diameter_mm
    torque = _f(resistances.effective_tension) * (d_mm / 1000 / 2)
    T1, T2 = _f(tension.t1), _f(tension.t2)
    theta = np.radians(_f(inp.wrap_angle))
    R = np.sqrt(T1 ** 2 + T2 ** 2 - 2 * T1 * T2 * np.cos(theta))
    return PulleyResult(
        diameter=float(d_mm),
        face_width=float(inp.belt_width + constants.face_clearance_mm),
        shaft_torque=float(torque),
        resultant_load=float(R),
    )


# --- PIPELINE ---
def calculate(inp: ConveyorInput, constants: Optional[CemaConstants] = None) -> ConveyorResult:
    """Run the seven stages over one input and return the full result."""
    constants = constants or DEFAULT_CONSTANTS
    geometry = resolve_geometry(inp.horizontal_length, inp.lift_height)
    logger.debug("geometry: %s", geometry)
    capacity = evaluate_capacity(inp, constants)
    logger.debug("capacity: %s", capacity)
    masses = model_masses(inp, constants)
    logger.debug("masses: %s", masses)
    resistances = aggregate_resistances(inp, geometry, masses, constants)
    logger.debug("resistances: %s", resistances)
    power = convert_power(inp, resistances, constants)
    tension = solve_tensions(inp, resistances, masses, constants)
    pulley = size_pulley(inp, resistances, tension, constants)

    logger.info("Te=%.1f N, P_installed=%.2f kW, T1=%.1f N, capacity %s",
                power.effective_tension, power.p_motor_installed, tension.t1, capacity.status)
    return ConveyorResult(geometry, capacity, power, tension, pulley)
