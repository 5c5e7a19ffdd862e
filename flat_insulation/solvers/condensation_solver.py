"""
Flat Insulation Calculator - Anti-Condensation Thickness Solver
===============================================================
Minimum continuous sheet thickness keeping the outer surface at or above
the dew point plus a safety margin.

Surface temperature model for thickness t [mm]:

    R_total(t) = (t/1000)/λ + 1/h
    q(t)       = (T_medium - T_ambient) / R_total(t)
    T_s(t)     = T_ambient + q(t)/h

λ is read once at the mean of ambient and medium temperature.

The search is a bisection on the predicate T_s(t) >= target. It assumes the
predicate is monotone in t (false below a threshold, true above). This holds
for the heat-flow direction the model is built for: a medium colder than the
air, where T_s rises toward ambient as t grows. With a medium warmer than the
air T_s never drops below ambient, the predicate is true everywhere and the
search collapses onto the lower bracket.

Author: Flat Insulation Calculator
Version: 1.0.0
"""

import math
from typing import Optional

from ..core.constants import CalibrationConstants, PhysicalConstants, SolverDefaults
from ..core.exceptions import InvalidInputError, PhysicallyImpossibleError, require_positive
from ..utils.logger import get_logger
from .lambda_interpolator import MaterialLambdaInterpolator, get_default_interpolator


class SurfaceTemperatureModel:
    """Outer-surface temperature of a flat sheet as a function of thickness."""

    def __init__(self, ambient_temp: float, medium_temp: float, h: float, lam: float):
        require_positive('h', h)
        require_positive('lambda', lam)
        self.ambient_temp = ambient_temp
        self.medium_temp = medium_temp
        self.h = h
        self.lam = lam
        self.r_conv = 1.0 / h

    def surface_temperature_at(self, thickness_mm: float) -> float:
        """T_s at the given thickness [°C]."""
        r_ins = thickness_mm * PhysicalConstants.MM_TO_M / self.lam
        r_total = r_ins + self.r_conv
        q = (self.medium_temp - self.ambient_temp) / r_total  # W/m²
        return self.ambient_temp + q * self.r_conv


class CondensationThicknessSolver:
    """Bisection search for the minimum anti-condensation thickness."""

    def __init__(self, interpolator: Optional[MaterialLambdaInterpolator] = None,
                 min_mm: float = SolverDefaults.MIN_THICKNESS_MM,
                 max_mm: float = SolverDefaults.MAX_THICKNESS_MM,
                 resolution_mm: float = SolverDefaults.RESOLUTION_MM,
                 fallback_mm: float = SolverDefaults.FALLBACK_THICKNESS_MM):
        require_positive('min_mm', min_mm)
        require_positive('resolution_mm', resolution_mm)
        if not max_mm > min_mm:
            raise InvalidInputError(
                f"Search bracket is empty: max_mm ({max_mm}) must exceed min_mm ({min_mm})",
                context={'min_mm': min_mm, 'max_mm': max_mm},
            )

        self.interpolator = interpolator or get_default_interpolator()
        self.min_mm = min_mm
        self.max_mm = max_mm
        self.resolution_mm = resolution_mm
        self.fallback_mm = fallback_mm
        self.logger = get_logger()

    def build_model(self, ambient_temp: float, medium_temp: float, material_id: str,
                    h: float) -> SurfaceTemperatureModel:
        """Surface model with λ at the mean of ambient and medium."""
        require_positive('h', h)
        mean_temp = (ambient_temp + medium_temp) / 2.0
        lam = self.interpolator.interpolate(mean_temp, material_id)
        return SurfaceTemperatureModel(ambient_temp, medium_temp, h, lam)

    @staticmethod
    def validate(ambient_temp: float, dew_point: float, h: float, safety_margin_c: float):
        require_positive('h', h)

        if dew_point >= ambient_temp:
            raise PhysicallyImpossibleError(
                f"Dew point ({dew_point:.1f}°C) must be below the ambient temperature "
                f"({ambient_temp:.1f}°C); check the humidity input",
                context={'dew_point': dew_point, 'ambient_temp': ambient_temp},
            )

        target = dew_point + safety_margin_c
        if target > ambient_temp:
            raise PhysicallyImpossibleError(
                f"Required surface temperature ({target:.1f}°C) is above the ambient "
                f"temperature ({ambient_temp:.1f}°C); condensation cannot be prevented",
                context={'target_surface_temp': target, 'ambient_temp': ambient_temp,
                         'safety_margin_c': safety_margin_c},
            )

    def minimum_thickness(self, ambient_temp: float, medium_temp: float, dew_point: float,
                          material_id: str, h: float,
                          safety_margin_c: float = CalibrationConstants.DEFAULT_SAFETY_MARGIN_C) -> float:
        """Minimum sheet thickness preventing surface condensation [mm].

        The result lies on a 0.01 mm grid and is rounded up, never down.
        Returns the fallback thickness when even the bracket maximum cannot
        keep the surface above the target.

        Raises:
            InvalidInputError: h not strictly positive
            PhysicallyImpossibleError: dew point at or above ambient, or
                dew point + margin above ambient
        """
        self.validate(ambient_temp, dew_point, h, safety_margin_c)
        target = dew_point + safety_margin_c
        model = self.build_model(ambient_temp, medium_temp, material_id, h)

        self.logger.log_calculation('minimum_thickness', {
            'ambient': ambient_temp, 'medium': medium_temp, 'dew_point': dew_point,
            'material': material_id, 'h': h, 'lambda': model.lam, 'target': target,
        })

        if model.surface_temperature_at(self.max_mm) < target:
            self.logger.warning(
                f"Surface stays below {target:.2f}°C even at {self.max_mm} mm, "
                f"using fallback {self.fallback_mm} mm"
            )
            return self.fallback_mm

        lo, hi = self.min_mm, self.max_mm
        iterations = 0
        while hi - lo > self.resolution_mm:
            mid = (lo + hi) / 2.0
            if model.surface_temperature_at(mid) >= target:
                hi = mid
            else:
                lo = mid
            iterations += 1

        rounded_up = math.ceil(hi / self.resolution_mm) * self.resolution_mm
        result = round(rounded_up, 2)
        self.logger.debug(f"Bisection converged in {iterations} iterations: {result} mm")
        return result


def surface_temperature_at(thickness_mm: float, ambient_temp: float, medium_temp: float,
                           material_id: str, h: float) -> float:
    """Outer-surface temperature of a sheet of the given thickness [°C]."""
    model = CondensationThicknessSolver().build_model(ambient_temp, medium_temp, material_id, h)
    return model.surface_temperature_at(thickness_mm)


def minimum_sheet_thickness(ambient_temp: float, medium_temp: float, dew_point: float,
                            material_id: str, h: float,
                            safety_margin_c: float = CalibrationConstants.DEFAULT_SAFETY_MARGIN_C) -> float:
    """Minimum anti-condensation thickness [mm] using the global registry."""
    return CondensationThicknessSolver().minimum_thickness(
        ambient_temp, medium_temp, dew_point, material_id, h, safety_margin_c
    )


__all__ = [
    'SurfaceTemperatureModel',
    'CondensationThicknessSolver',
    'surface_temperature_at',
    'minimum_sheet_thickness',
]
