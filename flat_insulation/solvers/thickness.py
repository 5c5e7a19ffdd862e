"""
Flat Insulation Calculator - Catalog Thickness Selection
========================================================
Energy-efficiency thickness recommendation against a heat-flux ceiling, and
rounding of a continuous minimum thickness to the next manufacturable size.

Author: Flat Insulation Calculator
Version: 1.0.0
"""

from typing import Dict, Optional, Sequence, Tuple

import numpy as np

from ..core.constants import (
    CalibrationConstants,
    NOMINAL_THICKNESS_BREAKPOINTS,
    NOMINAL_THICKNESS_FLOOR_MM,
    SHEET_THICKNESS_CATALOG_MM,
)
from ..utils.logger import get_logger
from .heat_transfer import FlatUValueCalculator
from .lambda_interpolator import MaterialLambdaInterpolator, get_default_interpolator


class ThicknessRecommender:
    """Smallest catalog thickness keeping the heat flux under a ceiling."""

    def __init__(self, interpolator: Optional[MaterialLambdaInterpolator] = None,
                 catalog_mm: Sequence[float] = SHEET_THICKNESS_CATALOG_MM):
        self.interpolator = interpolator or get_default_interpolator()
        self.catalog_mm: Tuple[float, ...] = tuple(sorted(catalog_mm))
        self.logger = get_logger()

    def flux_table(self, ambient_temp: float, medium_temp: float, material_id: str,
                   h: float) -> Dict[float, float]:
        """Heat flux q = U·ΔT per catalog thickness [W/m²]."""
        fluxes = self._fluxes(ambient_temp, medium_temp, material_id, h)
        return {t: float(q) for t, q in zip(self.catalog_mm, fluxes)}

    def _fluxes(self, ambient_temp: float, medium_temp: float, material_id: str,
                h: float) -> np.ndarray:
        # λ at the ambient temperature itself, unlike the heat-loss estimate
        lam = self.interpolator.interpolate(ambient_temp, material_id)
        delta_t = abs(medium_temp - ambient_temp)
        return FlatUValueCalculator.u_values(h, self.catalog_mm, lam) * delta_t

    def recommend(self, ambient_temp: float, medium_temp: float, material_id: str, h: float,
                  target_flux_w_m2: float = CalibrationConstants.DEFAULT_TARGET_FLUX_W_M2) -> float:
        """Thinnest catalog thickness with q ≤ target [mm].

        Falls back to the thickest catalog entry when none qualifies.
        """
        fluxes = self._fluxes(ambient_temp, medium_temp, material_id, h)
        meets_target = fluxes <= target_flux_w_m2

        if not meets_target.any():
            self.logger.warning(
                f"No catalog thickness reaches {target_flux_w_m2} W/m² "
                f"(best {fluxes[-1]:.2f} W/m²), using {self.catalog_mm[-1]} mm"
            )
            return self.catalog_mm[-1]

        return self.catalog_mm[int(np.argmax(meets_target))]


class NominalThicknessRounder:
    """Maps a continuous minimum thickness onto the manufacturing catalog."""

    def __init__(self, breakpoints: Sequence[Tuple[float, int]] = NOMINAL_THICKNESS_BREAKPOINTS,
                 floor_mm: int = NOMINAL_THICKNESS_FLOOR_MM):
        self.breakpoints = tuple(breakpoints)
        self.floor_mm = floor_mm

    def nominal(self, minimum_thickness_mm: float) -> int:
        for lower_bound, size in self.breakpoints:
            if minimum_thickness_mm > lower_bound:
                return size
        return self.floor_mm


def recommended_thickness(ambient_temp: float, medium_temp: float, material_id: str, h: float,
                          target_flux_w_m2: float = CalibrationConstants.DEFAULT_TARGET_FLUX_W_M2) -> float:
    """Energy-efficiency catalog thickness [mm] using the global registry."""
    return ThicknessRecommender().recommend(ambient_temp, medium_temp, material_id, h, target_flux_w_m2)


def nominal_thickness_recommendation(minimum_thickness_mm: float) -> int:
    """Next manufacturable size for a continuous minimum thickness [mm]."""
    return NominalThicknessRounder().nominal(minimum_thickness_mm)


__all__ = [
    'ThicknessRecommender',
    'NominalThicknessRounder',
    'recommended_thickness',
    'nominal_thickness_recommendation',
]
