"""
Flat Insulation Calculator - Flat-Wall Heat Transfer
====================================================
ISO 12241 flat-wall U-value and steady-state heat loss of an insulated
surface, compared against an empirical bare-surface baseline.

    R_total = 1/h + s/λ        [m²·K/W]
    U       = 1/R_total        [W/(m²·K)]
    Q       = U · A · ΔT       [W]

Author: Flat Insulation Calculator
Version: 1.0.0
"""

from dataclasses import dataclass, asdict
from typing import Dict, Optional, Sequence

import numpy as np

from ..core.constants import CalibrationConstants, PhysicalConstants
from ..core.exceptions import require_positive
from ..utils.logger import get_logger
from .lambda_interpolator import MaterialLambdaInterpolator, get_default_interpolator


# =============================================================================
# U-VALUE
# =============================================================================

class FlatUValueCalculator:
    """Overall heat-transfer coefficient of a single flat insulation layer."""

    @staticmethod
    def validate(h: float, thickness_mm: float, lam: float):
        require_positive('h', h)
        require_positive('thickness_mm', thickness_mm)
        require_positive('lambda', lam)

    @classmethod
    def thermal_resistance(cls, h: float, thickness_mm: float, lam: float) -> float:
        """Area-normalised resistance film + layer [m²·K/W]."""
        cls.validate(h, thickness_mm, lam)
        r_conv = 1.0 / h
        r_ins = thickness_mm * PhysicalConstants.MM_TO_M / lam
        return r_conv + r_ins

    @classmethod
    def u_value(cls, h: float, thickness_mm: float, lam: float) -> float:
        """U [W/(m²·K)]."""
        return 1.0 / cls.thermal_resistance(h, thickness_mm, lam)

    @classmethod
    def u_values(cls, h: float, thicknesses_mm: Sequence[float], lam: float) -> np.ndarray:
        """U for each thickness in one pass [W/(m²·K)]."""
        thicknesses = np.asarray(thicknesses_mm, dtype=np.float64)
        require_positive('h', h)
        require_positive('lambda', lam)
        if thicknesses.size and not np.all(thicknesses > 0):
            require_positive('thickness_mm', float(thicknesses.min()))
        return 1.0 / (1.0 / h + thicknesses * PhysicalConstants.MM_TO_M / lam)


def flat_u(h: float, thickness_mm: float, lam: float) -> float:
    """U-value of a flat insulation layer [W/(m²·K)]."""
    return FlatUValueCalculator.u_value(h, thickness_mm, lam)


# =============================================================================
# BARE-SURFACE BASELINE
# =============================================================================

def bare_surface_coefficient(delta_t: float) -> float:
    """Empirical h0 = α_conv + α_rad of an uninsulated surface [W/(m²·K)].

    α_conv follows the natural-convection correlation 1.32·ΔT^0.33, floored
    at the minimum film coefficient 1/0.13. α_rad is the calibrated
    radiative term ε·C.
    """
    c = CalibrationConstants
    alpha_conv = max(
        c.NATURAL_CONVECTION_COEFF * abs(delta_t) ** c.NATURAL_CONVECTION_EXPONENT,
        1.0 / c.MIN_SURFACE_RESISTANCE,
    )
    alpha_rad = c.BARE_SURFACE_EMISSIVITY * c.RADIATION_CALIBRATION
    return alpha_conv + alpha_rad


# =============================================================================
# HEAT LOSS
# =============================================================================

@dataclass(frozen=True)
class CalculationResult:
    """Heat loss of one insulated flat surface."""
    lambda_w_mk: float          # λ used [W/(m·K)]
    u_value: float              # [W/(m²·K)]
    heat_flow_w: float          # Q [W]
    decrease_pct: float         # reduction vs. bare surface [%]
    cost_per_hour: float        # [currency/h]
    delta_t: float = 0.0        # |medium - ambient| [K]
    bare_coefficient: float = 0.0  # h0 [W/(m²·K)]
    bare_heat_flow_w: float = 0.0  # Q0 [W]

    @property
    def heat_flux_w_m2(self) -> float:
        return self.u_value * self.delta_t

    def to_dict(self) -> Dict:
        return asdict(self)


class HeatLossEstimator:
    """Heat flow, reduction against bare surface, and energy cost."""

    def __init__(self, interpolator: Optional[MaterialLambdaInterpolator] = None):
        self.interpolator = interpolator or get_default_interpolator()
        self.logger = get_logger()

    def estimate(self, ambient_temp: float, medium_temp: float, thickness_mm: float,
                 area_m2: float, material_id: str, h: float,
                 cost_per_kwh: float) -> CalculationResult:
        """Steady-state heat loss of an insulated flat surface.

        Args:
            ambient_temp: Surrounding air temperature [°C]
            medium_temp: Process medium temperature [°C]
            thickness_mm: Insulation thickness [mm]
            area_m2: Surface area [m²]
            material_id: Registry identifier of the insulation
            h: Outer-surface film coefficient [W/(m²·K)]
            cost_per_kwh: Energy tariff [currency/kWh]

        Returns:
            CalculationResult

        Raises:
            InvalidInputError: area, thickness or h not strictly positive
        """
        require_positive('area_m2', area_m2)
        require_positive('thickness_mm', thickness_mm)
        require_positive('h', h)

        self.logger.log_calculation('heat_loss', {
            'ambient': ambient_temp, 'medium': medium_temp, 'thickness_mm': thickness_mm,
            'area_m2': area_m2, 'material': material_id, 'h': h,
        })

        # λ at the estimated outer-surface temperature, not the bulk air
        lambda_temp = ambient_temp + CalibrationConstants.LAMBDA_SURFACE_OFFSET_C
        lam = self.interpolator.interpolate(lambda_temp, material_id)

        u = flat_u(h, thickness_mm, lam)
        delta_t = abs(medium_temp - ambient_temp)
        q = u * area_m2 * delta_t

        h0 = bare_surface_coefficient(delta_t)
        q0 = h0 * area_m2 * delta_t
        decrease = (q0 - q) / q0 * 100.0 if q0 > 0 else 0.0

        cost_per_hour = q * PhysicalConstants.W_TO_KW * cost_per_kwh

        self.logger.debug(f"lambda={lam:.5f}, U={u:.4f}, Q={q:.3f}W, Q0={q0:.3f}W, "
                          f"decrease={decrease:.2f}%")

        return CalculationResult(
            lambda_w_mk=lam,
            u_value=u,
            heat_flow_w=q,
            decrease_pct=decrease,
            cost_per_hour=cost_per_hour,
            delta_t=delta_t,
            bare_coefficient=h0,
            bare_heat_flow_w=q0,
        )


def compute_heat_loss(ambient_temp: float, medium_temp: float, thickness_mm: float,
                      area_m2: float, material_id: str, h: float,
                      cost_per_kwh: float) -> CalculationResult:
    """Heat loss of an insulated flat surface using the global registry."""
    return HeatLossEstimator().estimate(
        ambient_temp, medium_temp, thickness_mm, area_m2, material_id, h, cost_per_kwh
    )


__all__ = [
    'FlatUValueCalculator',
    'CalculationResult',
    'HeatLossEstimator',
    'flat_u',
    'bare_surface_coefficient',
    'compute_heat_loss',
]
