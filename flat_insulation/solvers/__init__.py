"""
Flat Insulation Calculator - Solvers Module
===========================================
Conductivity interpolation, flat-wall heat transfer and thickness solvers.
"""

from .lambda_interpolator import (
    ExtrapolationPolicy,
    MaterialLambdaInterpolator,
    interpolate_profile,
    interpolate_lambda,
)

from .heat_transfer import (
    FlatUValueCalculator,
    CalculationResult,
    HeatLossEstimator,
    flat_u,
    bare_surface_coefficient,
    compute_heat_loss,
)

from .thickness import (
    ThicknessRecommender,
    NominalThicknessRounder,
    recommended_thickness,
    nominal_thickness_recommendation,
)

from .condensation_solver import (
    SurfaceTemperatureModel,
    CondensationThicknessSolver,
    surface_temperature_at,
    minimum_sheet_thickness,
)

from .analysis_engine import (
    AnalysisReport,
    InsulationAnalysisEngine,
    run_analysis,
)

__all__ = [
    # Conductivity
    'ExtrapolationPolicy',
    'MaterialLambdaInterpolator',
    'interpolate_profile',
    'interpolate_lambda',
    # Heat transfer
    'FlatUValueCalculator',
    'CalculationResult',
    'HeatLossEstimator',
    'flat_u',
    'bare_surface_coefficient',
    'compute_heat_loss',
    # Thickness
    'ThicknessRecommender',
    'NominalThicknessRounder',
    'recommended_thickness',
    'nominal_thickness_recommendation',
    # Condensation
    'SurfaceTemperatureModel',
    'CondensationThicknessSolver',
    'surface_temperature_at',
    'minimum_sheet_thickness',
    # Engine
    'AnalysisReport',
    'InsulationAnalysisEngine',
    'run_analysis',
]
