"""
Flat Insulation Calculator - Conductivity Interpolation
=======================================================
Maps (temperature, material) to thermal conductivity λ using the material's
anchor table.

Rules:
- unknown material: CalibrationConstants.FALLBACK_LAMBDA
- exact anchor: the stored λ, bit for bit
- between anchors: linear interpolation on the bracketing pair
- below the lowest anchor: the lowest anchor's λ
- above the highest anchor: per ExtrapolationPolicy

Author: Flat Insulation Calculator
Version: 1.0.0
"""

import math
import threading
from enum import Enum
from typing import Optional, Union

import numpy as np

from ..core.constants import CalibrationConstants
from ..core.exceptions import InvalidInputError
from ..core.materials import MaterialsDatabase, MaterialThermalProfile, get_materials_database
from ..utils.logger import get_logger


class ExtrapolationPolicy(Enum):
    """λ returned for temperatures above the highest anchor."""

    # Lowest anchor's λ. Reference outputs are calibrated against this.
    LOWEST_ANCHOR = "lowest_anchor"

    # Highest anchor's λ.
    CLAMP_HIGHEST = "clamp_highest"

    @classmethod
    def parse(cls, value: Union[str, 'ExtrapolationPolicy']) -> 'ExtrapolationPolicy':
        if isinstance(value, cls):
            return value
        return cls(str(value).lower())


def interpolate_profile(temperature: float, profile: MaterialThermalProfile,
                        policy: ExtrapolationPolicy = ExtrapolationPolicy.LOWEST_ANCHOR) -> float:
    """λ of a profile at temperature [W/(m·K)]."""
    if math.isnan(temperature):
        raise InvalidInputError("temperature must be a number, got NaN",
                                context={'temperature': temperature})

    exact = profile.lambda_at_anchor(temperature)
    if exact is not None:
        return exact

    temps = np.asarray(profile.temperatures, dtype=np.float64)
    lambdas = profile.conductivities

    if temperature < temps[0]:
        return lambdas[0]

    if temperature > temps[-1]:
        if policy is ExtrapolationPolicy.CLAMP_HIGHEST:
            return lambdas[-1]
        return lambdas[0]

    # temps[idx - 1] < temperature < temps[idx]
    idx = int(np.searchsorted(temps, temperature, side='left'))
    t0, t1 = profile.temperatures[idx - 1], profile.temperatures[idx]
    l0, l1 = lambdas[idx - 1], lambdas[idx]
    return l0 + (l1 - l0) * (temperature - t0) / (t1 - t0)


class MaterialLambdaInterpolator:
    """Temperature-dependent λ lookup against a materials registry."""

    def __init__(self, database: Optional[MaterialsDatabase] = None,
                 policy: Union[str, ExtrapolationPolicy] = ExtrapolationPolicy.LOWEST_ANCHOR,
                 fallback_lambda: float = CalibrationConstants.FALLBACK_LAMBDA):
        self.database = database
        self.policy = ExtrapolationPolicy.parse(policy)
        self.fallback_lambda = fallback_lambda
        self.logger = get_logger()

    def _registry(self) -> MaterialsDatabase:
        return self.database if self.database is not None else get_materials_database()

    def interpolate(self, temperature: float, material_id: str) -> float:
        """λ of material_id at temperature [W/(m·K)].

        Unknown materials return the fallback conductivity; they occur
        during incremental data entry and must not abort a calculation.
        """
        profile = self._registry().get(material_id)
        if profile is None:
            self.logger.debug(
                f"Unknown material '{material_id}', using fallback lambda {self.fallback_lambda}"
            )
            return self.fallback_lambda
        return interpolate_profile(temperature, profile, self.policy)


_default_interpolator: Optional[MaterialLambdaInterpolator] = None
_default_interpolator_lock = threading.Lock()


def get_default_interpolator() -> MaterialLambdaInterpolator:
    """Interpolator bound to the global registry with the reference policy."""
    global _default_interpolator
    with _default_interpolator_lock:
        if _default_interpolator is None:
            _default_interpolator = MaterialLambdaInterpolator()
        return _default_interpolator


def interpolate_lambda(temperature: float, material_id: str) -> float:
    """λ of material_id at temperature using the global registry."""
    return get_default_interpolator().interpolate(temperature, material_id)


__all__ = [
    'ExtrapolationPolicy',
    'MaterialLambdaInterpolator',
    'interpolate_profile',
    'interpolate_lambda',
    'get_default_interpolator',
]
