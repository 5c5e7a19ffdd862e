"""
Flat Insulation Calculator - Physical Constants and Calibration Data
====================================================================
Physical constants, empirical calibration constants and the fixed
manufacturing catalogs used by the flat-wall insulation calculations.

The calibration constants below were fitted against an external reference
dataset for elastomeric sheet insulation. Changing any of them changes
observable outputs and must be treated as a breaking change.

Author: Flat Insulation Calculator
Version: 1.0.0
License: MIT
"""

from typing import Tuple


# =============================================================================
# PHYSICAL CONSTANTS
# =============================================================================

class PhysicalConstants:
    """Fundamental constants and unit conversions."""

    # Thickness conversion [m/mm]
    MM_TO_M = 1.0 / 1000.0

    # Power conversion [kW/W]
    W_TO_KW = 1.0 / 1000.0


# =============================================================================
# CALIBRATION CONSTANTS
# =============================================================================

class CalibrationConstants:
    """Empirical constants of the ISO 12241 flat-wall model."""

    # Fallback conductivity for materials missing from the registry [W/(m·K)]
    FALLBACK_LAMBDA = 0.036

    # Heat-loss λ is read at ambient + offset, approximating the outer-surface
    # temperature rise over the surrounding air [°C]
    LAMBDA_SURFACE_OFFSET_C = 5.0

    # Bare-surface natural convection: alpha = COEFF * dT^EXPONENT [W/(m²·K)]
    NATURAL_CONVECTION_COEFF = 1.32
    NATURAL_CONVECTION_EXPONENT = 0.33

    # Minimum film resistance; floors the bare-surface convection term [m²·K/W]
    MIN_SURFACE_RESISTANCE = 0.13

    # Bare-surface emissivity (painted or oxidised steel)
    BARE_SURFACE_EMISSIVITY = 0.93

    # Radiative calibration factor; alpha_rad = emissivity * C [W/(m²·K)].
    # Stands in for a full radiative-exchange computation.
    RADIATION_CALIBRATION = 1.428

    # Margin kept between the outer-surface temperature and the dew point [°C]
    DEFAULT_SAFETY_MARGIN_C = 0.3

    # Energy-efficiency design heat flux ceiling [W/m²]
    DEFAULT_TARGET_FLUX_W_M2 = 15.0

    # Default outer-surface film coefficient, reciprocal of the minimum film
    # resistance [W/(m²·K)]
    DEFAULT_SURFACE_COEFFICIENT = 1.0 / MIN_SURFACE_RESISTANCE

    # Default energy tariff [currency/kWh]
    DEFAULT_ENERGY_COST_PER_KWH = 0.12


# =============================================================================
# MANUFACTURING CATALOGS
# =============================================================================

# Manufacturable sheet thicknesses, ascending [mm]
SHEET_THICKNESS_CATALOG_MM: Tuple[int, ...] = (6, 9, 10, 13, 19, 25, 32, 40, 50)

# (exclusive lower bound, nominal size) pairs, checked top-down [mm].
# A minimum thickness strictly above the bound maps to the nominal size.
# The 13 mm row deviates from the reference table (> 7) so that exactly 7 mm maps to 13.
NOMINAL_THICKNESS_BREAKPOINTS: Tuple[Tuple[float, int], ...] = (
    (37.99, 50),
    (29.99, 40),
    (22.99, 32),
    (16.99, 25),
    (10.99, 19),
    (6.99, 13),
    (4.99, 9),
)

# Nominal size when no breakpoint is exceeded [mm]
NOMINAL_THICKNESS_FLOOR_MM = 6


# =============================================================================
# SOLVER DEFAULTS
# =============================================================================

class SolverDefaults:
    """Anti-condensation bisection parameters."""

    # Search bracket [mm]
    MIN_THICKNESS_MM = 0.01
    MAX_THICKNESS_MM = 100.0

    # Bracket width at which the search stops; also the output grid [mm]
    RESOLUTION_MM = 0.01

    # Returned when even the maximum thickness cannot keep the surface dry [mm]
    FALLBACK_THICKNESS_MM = 50.0


# =============================================================================
# EXPORT ALL
# =============================================================================

__all__ = [
    'PhysicalConstants',
    'CalibrationConstants',
    'SolverDefaults',
    'SHEET_THICKNESS_CATALOG_MM',
    'NOMINAL_THICKNESS_BREAKPOINTS',
    'NOMINAL_THICKNESS_FLOOR_MM',
]
