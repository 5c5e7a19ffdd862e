"""
Flat Insulation Calculator - Analysis Engine
============================================
Runs the complete flat-surface assessment for a calculation case:

1. Heat loss and energy cost at the installed thickness
2. Energy-efficiency catalog thickness
3. Anti-condensation minimum thickness and its nominal size (dew point given)

Author: Flat Insulation Calculator
Version: 1.0.0
"""

import time
from dataclasses import dataclass, asdict
from typing import Callable, Dict, List, Optional, Sequence

from ..core.config import CalculationInputs, CalculationSettings, InsulationProjectConfig
from ..core.constants import SHEET_THICKNESS_CATALOG_MM
from ..core.materials import MaterialsDatabase
from ..utils.logger import get_logger, log_section, timed_function
from .condensation_solver import CondensationThicknessSolver
from .heat_transfer import CalculationResult, HeatLossEstimator
from .lambda_interpolator import MaterialLambdaInterpolator
from .thickness import NominalThicknessRounder, ThicknessRecommender


@dataclass(frozen=True)
class AnalysisReport:
    """Results of one complete flat-surface assessment."""
    label: str
    heat_loss: CalculationResult
    recommended_thickness_mm: float
    target_flux_w_m2: float
    minimum_thickness_mm: Optional[float] = None
    nominal_thickness_mm: Optional[int] = None
    surface_temp_at_nominal_c: Optional[float] = None

    @property
    def condensation_checked(self) -> bool:
        return self.minimum_thickness_mm is not None

    def to_dict(self) -> Dict:
        return asdict(self)


class InsulationAnalysisEngine:
    """Coordinates the calculators for one or more cases."""

    def __init__(self, settings: Optional[CalculationSettings] = None,
                 database: Optional[MaterialsDatabase] = None):
        self.settings = settings or CalculationSettings()
        self.logger = get_logger()

        if self.settings.materials_file:
            # site materials go into a private copy; the caller's registry is left as is
            if database is None:
                database = MaterialsDatabase()
            else:
                database = MaterialsDatabase(database.snapshot().values())
            database.load_json(self.settings.materials_file)
        self.database = database

        self.interpolator = MaterialLambdaInterpolator(
            database=database, policy=self.settings.extrapolation_policy
        )
        self.heat_loss = HeatLossEstimator(self.interpolator)
        self.recommender = ThicknessRecommender(self.interpolator)
        self.condensation = CondensationThicknessSolver(self.interpolator)
        self.rounder = NominalThicknessRounder()
        self.progress_callback: Optional[Callable[[float, str], None]] = None

    def set_progress_callback(self, callback: Callable[[float, str], None]):
        """Set progress callback function."""
        self.progress_callback = callback

    def _report_progress(self, progress: float, message: str):
        if self.progress_callback:
            self.progress_callback(progress, message)

    @timed_function("insulation_analysis")
    def run_analysis(self, inputs: CalculationInputs) -> AnalysisReport:
        """Assess one case.

        Raises:
            InvalidInputError, PhysicallyImpossibleError: propagated from
                the calculators after being logged
        """
        target_flux = self.settings.resolve_target_flux(inputs)

        try:
            self._report_progress(0.0, "Computing heat loss...")
            loss = self.heat_loss.estimate(
                inputs.ambient_temp_c, inputs.medium_temp_c, inputs.thickness_mm,
                inputs.area_m2, inputs.material_id, inputs.h_w_m2k, inputs.cost_per_kwh,
            )

            self._report_progress(0.4, "Selecting energy-efficiency thickness...")
            recommended = self.recommender.recommend(
                inputs.ambient_temp_c, inputs.medium_temp_c, inputs.material_id,
                inputs.h_w_m2k, target_flux,
            )

            minimum = nominal = surface_temp = None
            if inputs.dew_point_c is not None:
                self._report_progress(0.7, "Solving anti-condensation thickness...")
                margin = self.settings.resolve_safety_margin(inputs)
                minimum = self.condensation.minimum_thickness(
                    inputs.ambient_temp_c, inputs.medium_temp_c, inputs.dew_point_c,
                    inputs.material_id, inputs.h_w_m2k, margin,
                )
                nominal = self.rounder.nominal(minimum)
                model = self.condensation.build_model(
                    inputs.ambient_temp_c, inputs.medium_temp_c, inputs.material_id, inputs.h_w_m2k,
                )
                surface_temp = model.surface_temperature_at(nominal)

        except Exception as e:
            self.logger.error(f"Analysis of case '{inputs.label}' failed: {e}")
            raise

        self._report_progress(1.0, "Analysis complete")
        return AnalysisReport(
            label=inputs.label,
            heat_loss=loss,
            recommended_thickness_mm=recommended,
            target_flux_w_m2=target_flux,
            minimum_thickness_mm=minimum,
            nominal_thickness_mm=nominal,
            surface_temp_at_nominal_c=surface_temp,
        )

    def analyze_project(self, config: InsulationProjectConfig) -> List[AnalysisReport]:
        """Assess every case of a project in order."""
        reports = []
        start_time = time.time()
        total = len(config.cases)

        with log_section(f"Project analysis ({total} cases)"):
            for i, case in enumerate(config.cases):
                self._report_progress(i / total, f"Case {i + 1}/{total}: {case.label}")
                reports.append(self.run_analysis(case))

        self.logger.info(f"Analysed {total} cases in {time.time() - start_time:.3f}s")
        return reports

    def thickness_sweep(self, inputs: CalculationInputs,
                        thicknesses_mm: Optional[Sequence[float]] = None) -> Dict[float, CalculationResult]:
        """Heat-loss results for each thickness (default: the catalog)."""
        if thicknesses_mm is None:
            thicknesses_mm = SHEET_THICKNESS_CATALOG_MM
        return {
            t: self.heat_loss.estimate(
                inputs.ambient_temp_c, inputs.medium_temp_c, t, inputs.area_m2,
                inputs.material_id, inputs.h_w_m2k, inputs.cost_per_kwh,
            )
            for t in thicknesses_mm
        }


def run_analysis(inputs: CalculationInputs,
                 settings: Optional[CalculationSettings] = None) -> AnalysisReport:
    """Convenience function to assess one case."""
    return InsulationAnalysisEngine(settings).run_analysis(inputs)


__all__ = [
    'AnalysisReport',
    'InsulationAnalysisEngine',
    'run_analysis',
]
