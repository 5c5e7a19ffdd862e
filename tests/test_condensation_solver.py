"""Tests for the anti-condensation thickness solver."""

import pytest

from flat_insulation.core.exceptions import InvalidInputError, PhysicallyImpossibleError
from flat_insulation.core.materials import DEFAULT_MATERIAL_ID
from flat_insulation.solvers.condensation_solver import (
    CondensationThicknessSolver,
    SurfaceTemperatureModel,
    minimum_sheet_thickness,
    surface_temperature_at,
)
from flat_insulation.solvers.lambda_interpolator import interpolate_lambda
from flat_insulation.solvers.thickness import nominal_thickness_recommendation
from flat_insulation.utils.logger import get_logger


AMBIENT = 25.0
MEDIUM = 5.0
DEW_POINT = 20.0
MARGIN = 0.3


def surface_temp(thickness_mm, h):
    return surface_temperature_at(thickness_mm, AMBIENT, MEDIUM, DEFAULT_MATERIAL_ID, h)


# ==============================================================================
# Surface temperature model
# ==============================================================================

class TestSurfaceTemperatureModel:
    """T_s = T_amb + q/h with q through the series resistance."""

    def test_known_value(self):
        model = SurfaceTemperatureModel(25.0, 5.0, 10.0, 0.04)
        # R = 0.1 + 0.02/0.04 = 0.6, q = -20/0.6
        assert model.surface_temperature_at(20.0) == pytest.approx(25.0 - 20.0 / 0.6 / 10.0)

    def test_cold_medium_surface_rises_with_thickness(self):
        model = SurfaceTemperatureModel(25.0, 5.0, 8.0, 0.036)
        temps = [model.surface_temperature_at(t) for t in (1, 5, 10, 20, 50)]
        assert all(a < b for a, b in zip(temps, temps[1:]))
        assert temps[-1] < 25.0

    def test_lambda_at_mean_temperature(self, default_h):
        model = CondensationThicknessSolver().build_model(AMBIENT, MEDIUM, DEFAULT_MATERIAL_ID, default_h)
        assert model.lam == pytest.approx(interpolate_lambda(15.0, DEFAULT_MATERIAL_ID))


# ==============================================================================
# Minimum thickness search
# ==============================================================================

class TestMinimumThickness:
    """Bisection on T_s(t) ≥ dew point + margin."""

    def test_reference_case(self, default_h):
        # λ(15 °C) = 0.03575; analytic threshold 15.129 mm
        t = minimum_sheet_thickness(AMBIENT, MEDIUM, DEW_POINT, DEFAULT_MATERIAL_ID, default_h)
        assert t == pytest.approx(15.14, abs=0.011)
        assert nominal_thickness_recommendation(t) == 19

    def test_result_brackets_target(self, default_h):
        for dew in (12.0, 16.0, 20.0, 22.5):
            t = minimum_sheet_thickness(AMBIENT, MEDIUM, dew, DEFAULT_MATERIAL_ID, default_h)
            target = dew + MARGIN
            assert surface_temp(t, default_h) >= target
            # the rounded-up result sits at most two grid steps above the bracket floor
            assert surface_temp(t - 0.02, default_h) < target

    def test_result_on_hundredth_grid(self, default_h):
        t = minimum_sheet_thickness(AMBIENT, MEDIUM, DEW_POINT, DEFAULT_MATERIAL_ID, default_h)
        assert t == round(t, 2)

    def test_higher_dew_point_needs_more_insulation(self, default_h):
        thicknesses = [
            minimum_sheet_thickness(AMBIENT, MEDIUM, dew, DEFAULT_MATERIAL_ID, default_h)
            for dew in (10.0, 15.0, 20.0, 23.0)
        ]
        assert all(a < b for a, b in zip(thicknesses, thicknesses[1:]))

    def test_larger_margin_needs_more_insulation(self, default_h):
        base = minimum_sheet_thickness(AMBIENT, MEDIUM, DEW_POINT, DEFAULT_MATERIAL_ID, default_h, 0.3)
        wider = minimum_sheet_thickness(AMBIENT, MEDIUM, DEW_POINT, DEFAULT_MATERIAL_ID, default_h, 1.0)
        assert wider > base

    def test_unreachable_target_returns_fallback(self, default_h):
        # Even 100 mm leaves the surface near 22.2 °C against a 24.8 °C target
        t = minimum_sheet_thickness(AMBIENT, -40.0, 24.5, DEFAULT_MATERIAL_ID, default_h)
        assert t == 50.0

    def test_warm_medium_collapses_to_lower_bracket(self, default_h):
        t = minimum_sheet_thickness(20.0, 60.0, 10.0, DEFAULT_MATERIAL_ID, default_h)
        assert t <= 0.02


# ==============================================================================
# Preconditions
# ==============================================================================

class TestPreconditions:
    """Validation happens before any search."""

    @pytest.mark.parametrize("h", [0.0, -3.0])
    def test_non_positive_h(self, h):
        with pytest.raises(InvalidInputError):
            minimum_sheet_thickness(AMBIENT, MEDIUM, DEW_POINT, DEFAULT_MATERIAL_ID, h)

    def test_h_checked_before_dew_point(self):
        with pytest.raises(InvalidInputError):
            minimum_sheet_thickness(AMBIENT, MEDIUM, 30.0, DEFAULT_MATERIAL_ID, 0.0)

    @pytest.mark.parametrize("dew", [25.0, 26.0, 40.0])
    def test_dew_point_not_below_ambient(self, dew, default_h):
        with pytest.raises(PhysicallyImpossibleError):
            minimum_sheet_thickness(AMBIENT, MEDIUM, dew, DEFAULT_MATERIAL_ID, default_h)

    def test_target_above_ambient(self, default_h):
        with pytest.raises(PhysicallyImpossibleError) as exc_info:
            minimum_sheet_thickness(AMBIENT, MEDIUM, 24.9, DEFAULT_MATERIAL_ID, default_h, 0.3)
        assert exc_info.value.context['ambient_temp'] == AMBIENT
        assert exc_info.value.error_code == "FI_PHYSICALLY_IMPOSSIBLE_ERROR"

    def test_errors_are_value_errors(self, default_h):
        with pytest.raises(ValueError):
            minimum_sheet_thickness(AMBIENT, MEDIUM, 30.0, DEFAULT_MATERIAL_ID, default_h)


# ==============================================================================
# Solver construction
# ==============================================================================

class TestSolverConstruction:
    """Search parameters are checked when the solver is built."""

    @pytest.mark.parametrize("resolution", [0.0, -0.01])
    def test_non_positive_resolution(self, resolution):
        with pytest.raises(InvalidInputError):
            CondensationThicknessSolver(resolution_mm=resolution)

    @pytest.mark.parametrize("min_mm, max_mm", [(10.0, 10.0), (50.0, 5.0)])
    def test_empty_bracket(self, min_mm, max_mm):
        with pytest.raises(InvalidInputError) as exc_info:
            CondensationThicknessSolver(min_mm=min_mm, max_mm=max_mm)
        assert exc_info.value.context == {'min_mm': min_mm, 'max_mm': max_mm}

    def test_non_positive_min(self):
        with pytest.raises(InvalidInputError):
            CondensationThicknessSolver(min_mm=0.0)

    def test_repeated_calls_leave_no_timings(self, default_h):
        tracker = get_logger().performance
        before = tracker.get_all_stats()
        for _ in range(50):
            minimum_sheet_thickness(AMBIENT, MEDIUM, DEW_POINT, DEFAULT_MATERIAL_ID, default_h)
        assert tracker.get_all_stats() == before
