"""
Flat Insulation Calculator - Core Module
========================================
Constants, material profiles, configuration and error types.
"""

from .constants import (
    PhysicalConstants, CalibrationConstants, SolverDefaults,
    SHEET_THICKNESS_CATALOG_MM, NOMINAL_THICKNESS_BREAKPOINTS, NOMINAL_THICKNESS_FLOOR_MM,
)

from .exceptions import (
    InsulationCalculationError, InvalidInputError, PhysicallyImpossibleError,
)

from .materials import (
    MaterialThermalProfile, MaterialsDatabase, DEFAULT_MATERIAL_ID, get_materials_database,
)

from .config import (
    CalculationInputs, CalculationSettings, InsulationProjectConfig, ConfigManager,
)

__all__ = [
    # Constants
    'PhysicalConstants', 'CalibrationConstants', 'SolverDefaults',
    'SHEET_THICKNESS_CATALOG_MM', 'NOMINAL_THICKNESS_BREAKPOINTS', 'NOMINAL_THICKNESS_FLOOR_MM',

    # Errors
    'InsulationCalculationError', 'InvalidInputError', 'PhysicallyImpossibleError',

    # Materials
    'MaterialThermalProfile', 'MaterialsDatabase', 'DEFAULT_MATERIAL_ID', 'get_materials_database',

    # Configuration
    'CalculationInputs', 'CalculationSettings', 'InsulationProjectConfig', 'ConfigManager',
]
