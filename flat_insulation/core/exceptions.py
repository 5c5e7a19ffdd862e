"""
Flat Insulation Calculator - Exceptions
=======================================
Error types raised by the calculation core.

Hierarchy:
    InsulationCalculationError (base, a ValueError)
    ├── InvalidInputError          non-positive or NaN h/thickness/area/λ,
    │                              malformed material tables
    └── PhysicallyImpossibleError  dew point at or above ambient, required
                                   surface temperature above ambient

Both are raised at the point of detection, before any derived quantity is
computed. Unknown material identifiers are not errors.

Author: Flat Insulation Calculator
Version: 1.0.0
"""

import re
import json
from typing import Any, Dict, Optional


class InsulationCalculationError(ValueError):
    """Base exception for calculation errors.

    Attributes:
        message: Human-readable error message
        error_code: Identifier derived from the class name (e.g. "FI_INVALID_INPUT_ERROR")
        context: Offending parameter values
    """

    ERROR_PREFIX = "FI"

    def __init__(self, message: str, error_code: Optional[str] = None,
                 context: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self._generate_error_code()
        self.context = context or {}

    def _generate_error_code(self) -> str:
        error_type = re.sub(r'(?<!^)(?=[A-Z])', '_', self.__class__.__name__).upper()
        return f"{self.ERROR_PREFIX}_{error_type}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            'error_type': self.__class__.__name__,
            'error_code': self.error_code,
            'message': self.message,
            'context': self.context,
        }

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def __str__(self) -> str:
        return f"[{self.error_code}] {self.message}"


class InvalidInputError(InsulationCalculationError):
    """A parameter is outside its physically meaningful domain."""


class PhysicallyImpossibleError(InsulationCalculationError):
    """The requested condensation protection cannot exist."""


def require_positive(name: str, value: float) -> None:
    """Raise InvalidInputError unless value > 0 (NaN fails the comparison)."""
    if not value > 0:
        raise InvalidInputError(
            f"{name} must be strictly positive, got {value}",
            context={name: value},
        )


__all__ = [
    'InsulationCalculationError',
    'InvalidInputError',
    'PhysicallyImpossibleError',
    'require_positive',
]
