"""
Calculation constants.

Every fixed allowance used by the CEMA pipeline lives here so it can be
overridden per call (or from a YAML file) instead of being a bare literal.
"""
import os
import logging
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Optional, Union

import yaml

logger = logging.getLogger(__name__)

CONSTANTS_ENV_VAR = "CONVEYORCALC_CONSTANTS"


class ConfigError(ValueError):
    """Raised when a constants file cannot be applied."""


# ──────────────────────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class CemaConstants:
    gravity: float = 9.81                  # m/s^2
    drive_friction: float = 0.35           # rubber on steel
    safety_margin: float = 1.2             # SFM on installed motor power
    pulley_diameter_mm: float = 600.0      # drive pulley
    face_clearance_mm: float = 100.0       # face width = belt width + this
    bending_resistance: float = 500.0      # N
    skirt_resistance_per_m: float = 60.0   # N per m, per side
    hopper_pullout: float = 1500.0         # N
    scraper_resistance: float = 1500.0     # N per scraper
    plough_resistance: float = 800.0       # N per plough
    min_pretension: float = 5000.0         # N, floor on T2
    return_idler_ratio: float = 0.4        # Wri / Wi when not given
    trough_bin_edge_deg: float = 30.0
    area_factor_deep: float = 0.17         # trough >= edge
    area_factor_shallow: float = 0.13


DEFAULT_CONSTANTS = CemaConstants()


def load_constants(path: Optional[Union[str, Path]] = None) -> CemaConstants:
    """
    Build constants from a YAML mapping of overrides.

    When ``path`` is omitted the ``CONVEYORCALC_CONSTANTS`` environment
    variable is checked; with neither, the defaults are returned.
    """
    if path is None:
        path = os.environ.get(CONSTANTS_ENV_VAR)
        if not path:
            return DEFAULT_CONSTANTS

    with open(path, "r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}

    if not isinstance(raw, dict):
        raise ConfigError(f"{path}: expected a mapping, got {type(raw).__name__}")

    known = {f.name for f in fields(CemaConstants)}
    unknown = sorted(set(raw) - known)
    if unknown:
        raise ConfigError(f"{path}: unknown constants {', '.join(unknown)}")

    overrides = {}
    for key, value in raw.items():
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise ConfigError(f"{path}: '{key}' must be a number, got {value!r}")
        overrides[key] = float(value)

    logger.info("Loaded %d constant override(s) from %s", len(overrides), path)
    return replace(DEFAULT_CONSTANTS, **overrides)
