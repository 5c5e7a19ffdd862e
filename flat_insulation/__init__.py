"""
Flat Insulation Calculator
==========================
Thermal performance of flat insulation sheets on equipment and duct
surfaces, following the ISO 12241 flat-wall resistance model.

Features:
- Temperature-dependent conductivity from material anchor tables
- U-value, heat loss, energy cost and reduction against a bare surface
- Energy-efficiency thickness selection from the sheet catalog
- Minimum anti-condensation thickness and its nominal catalog size

Example:
    >>> from flat_insulation import compute_heat_loss, minimum_sheet_thickness
    >>> result = compute_heat_loss(25, 55, 10, 1.0, 'ELASTOMERIC_ST', 7.69, 0.12)
    >>> round(result.heat_flow_w, 1)
    74.9
    >>> minimum_sheet_thickness(25, 5, 20, 'ELASTOMERIC_ST', 1 / 0.13)
    15.14

Author: Flat Insulation Calculator
Version: 1.0.0
License: MIT
"""

__version__ = "1.0.0"

from .core import (
    CalibrationConstants,
    SHEET_THICKNESS_CATALOG_MM,
    InsulationCalculationError,
    InvalidInputError,
    PhysicallyImpossibleError,
    MaterialThermalProfile,
    MaterialsDatabase,
    DEFAULT_MATERIAL_ID,
    get_materials_database,
    CalculationInputs,
    CalculationSettings,
    InsulationProjectConfig,
    ConfigManager,
)

from .solvers import (
    ExtrapolationPolicy,
    MaterialLambdaInterpolator,
    FlatUValueCalculator,
    CalculationResult,
    HeatLossEstimator,
    ThicknessRecommender,
    NominalThicknessRounder,
    CondensationThicknessSolver,
    AnalysisReport,
    InsulationAnalysisEngine,
    interpolate_lambda,
    flat_u,
    compute_heat_loss,
    recommended_thickness,
    minimum_sheet_thickness,
    nominal_thickness_recommendation,
    surface_temperature_at,
    run_analysis,
)

from .utils import get_logger, initialize_logger

__all__ = [
    '__version__',
    # Calculations
    'interpolate_lambda',
    'flat_u',
    'compute_heat_loss',
    'recommended_thickness',
    'minimum_sheet_thickness',
    'nominal_thickness_recommendation',
    'surface_temperature_at',
    'run_analysis',
    # Components
    'ExtrapolationPolicy',
    'MaterialLambdaInterpolator',
    'FlatUValueCalculator',
    'CalculationResult',
    'HeatLossEstimator',
    'ThicknessRecommender',
    'NominalThicknessRounder',
    'CondensationThicknessSolver',
    'AnalysisReport',
    'InsulationAnalysisEngine',
    # Data and configuration
    'CalibrationConstants',
    'SHEET_THICKNESS_CATALOG_MM',
    'MaterialThermalProfile',
    'MaterialsDatabase',
    'DEFAULT_MATERIAL_ID',
    'get_materials_database',
    'CalculationInputs',
    'CalculationSettings',
    'InsulationProjectConfig',
    'ConfigManager',
    # Errors
    'InsulationCalculationError',
    'InvalidInputError',
    'PhysicallyImpossibleError',
    # Logging
    'get_logger',
    'initialize_logger',
]
