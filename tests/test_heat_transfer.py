"""Tests for the flat-wall U-value and heat-loss estimator."""

import math

import pytest

from flat_insulation.core.constants import CalibrationConstants
from flat_insulation.core.exceptions import InvalidInputError
from flat_insulation.core.materials import DEFAULT_MATERIAL_ID
from flat_insulation.solvers.heat_transfer import (
    FlatUValueCalculator,
    HeatLossEstimator,
    bare_surface_coefficient,
    compute_heat_loss,
    flat_u,
)


# ==============================================================================
# U-value
# ==============================================================================

class TestFlatU:
    """U = 1 / (1/h + s/λ)."""

    def test_known_value(self):
        # R = 1/10 + 0.05/0.04 = 1.35
        assert flat_u(10.0, 50.0, 0.04) == pytest.approx(1 / 1.35)

    def test_thermal_resistance(self):
        assert FlatUValueCalculator.thermal_resistance(10.0, 50.0, 0.04) == pytest.approx(1.35)

    def test_strictly_decreasing_in_thickness(self):
        values = [flat_u(8.0, t, 0.036) for t in (1, 6, 9, 13, 25, 50, 100)]
        assert all(a > b for a, b in zip(values, values[1:]))

    def test_strictly_increasing_in_lambda(self):
        values = [flat_u(8.0, 19.0, lam) for lam in (0.02, 0.03, 0.036, 0.05, 0.1)]
        assert all(a < b for a, b in zip(values, values[1:]))

    def test_bounded_by_film_coefficient(self):
        assert flat_u(8.0, 0.001, 0.04) < 8.0

    @pytest.mark.parametrize("h, thickness, lam", [
        (0.0, 10.0, 0.036),
        (-5.0, 10.0, 0.036),
        (math.nan, 10.0, 0.036),
        (8.0, 0.0, 0.036),
        (8.0, -1.0, 0.036),
        (8.0, 10.0, 0.0),
        (8.0, 10.0, -0.036),
    ])
    def test_rejects_non_positive_inputs(self, h, thickness, lam):
        with pytest.raises(InvalidInputError):
            flat_u(h, thickness, lam)

    def test_vectorised_matches_scalar(self):
        thicknesses = [6, 9, 13, 25]
        values = FlatUValueCalculator.u_values(8.0, thicknesses, 0.036)
        for t, u in zip(thicknesses, values):
            assert u == pytest.approx(flat_u(8.0, t, 0.036))

    def test_vectorised_rejects_zero_thickness(self):
        with pytest.raises(InvalidInputError):
            FlatUValueCalculator.u_values(8.0, [6, 0, 13], 0.036)


# ==============================================================================
# Bare-surface baseline
# ==============================================================================

class TestBareSurfaceCoefficient:
    """h0 = max(1.32·ΔT^0.33, 1/0.13) + 0.93·1.428."""

    def test_floor_applies_at_moderate_delta_t(self):
        assert bare_surface_coefficient(30.0) == pytest.approx(9.020, abs=1e-3)
        assert bare_surface_coefficient(100.0) == bare_surface_coefficient(30.0)

    def test_correlation_applies_at_large_delta_t(self):
        expected = 1.32 * 500.0 ** 0.33 + 0.93 * 1.428
        assert bare_surface_coefficient(500.0) == pytest.approx(expected)
        assert bare_surface_coefficient(500.0) > bare_surface_coefficient(30.0)


# ==============================================================================
# Heat loss
# ==============================================================================

class TestHeatLossEstimator:
    """Heat flow, reduction and cost of an insulated surface."""

    def test_reference_scenario(self):
        """Ambient 25 °C, ΔT 30 K, 1 m², default h and material."""
        result = compute_heat_loss(
            25.0, 55.0, 10.0, 1.0, DEFAULT_MATERIAL_ID,
            CalibrationConstants.DEFAULT_SURFACE_COEFFICIENT, 0.12,
        )
        assert result.lambda_w_mk == pytest.approx(0.037)
        assert result.heat_flow_w == pytest.approx(74.825, rel=5e-3)
        assert result.decrease_pct == pytest.approx(72.35, abs=0.1)
        assert result.bare_heat_flow_w == pytest.approx(270.61, abs=0.01)
        assert result.bare_coefficient == pytest.approx(9.020, abs=1e-3)
        assert result.delta_t == 30.0

    def test_components_are_consistent(self, interpolator):
        estimator = HeatLossEstimator(interpolator)
        result = estimator.estimate(10.0, 60.0, 13.0, 2.5, 'TEST_FOAM', 9.0, 0.2)

        # λ read 5 °C above ambient
        assert result.lambda_w_mk == pytest.approx(interpolator.interpolate(15.0, 'TEST_FOAM'))
        assert result.u_value == pytest.approx(flat_u(9.0, 13.0, result.lambda_w_mk))
        assert result.heat_flow_w == pytest.approx(result.u_value * 2.5 * 50.0)
        assert result.cost_per_hour == pytest.approx(result.heat_flow_w / 1000 * 0.2)
        assert result.heat_flux_w_m2 == pytest.approx(result.u_value * 50.0)

    def test_cold_medium_uses_absolute_difference(self, interpolator):
        estimator = HeatLossEstimator(interpolator)
        hot = estimator.estimate(20.0, 50.0, 13.0, 1.0, 'TEST_FOAM', 8.0, 0.1)
        cold = estimator.estimate(20.0, -10.0, 13.0, 1.0, 'TEST_FOAM', 8.0, 0.1)
        assert cold.heat_flow_w == pytest.approx(hot.heat_flow_w)

    def test_zero_delta_t(self, interpolator):
        result = HeatLossEstimator(interpolator).estimate(20.0, 20.0, 13.0, 1.0, 'TEST_FOAM', 8.0, 0.1)
        assert result.heat_flow_w == 0.0
        assert result.decrease_pct == 0.0
        assert result.cost_per_hour == 0.0

    def test_unknown_material_falls_back(self, interpolator):
        result = HeatLossEstimator(interpolator).estimate(20.0, 50.0, 13.0, 1.0, 'MISSING', 8.0, 0.1)
        assert result.lambda_w_mk == 0.036

    def test_thicker_insulation_saves_more(self, interpolator):
        estimator = HeatLossEstimator(interpolator)
        thin = estimator.estimate(20.0, 70.0, 6.0, 1.0, 'TEST_FOAM', 8.0, 0.1)
        thick = estimator.estimate(20.0, 70.0, 32.0, 1.0, 'TEST_FOAM', 8.0, 0.1)
        assert thick.heat_flow_w < thin.heat_flow_w
        assert thick.decrease_pct > thin.decrease_pct

    @pytest.mark.parametrize("thickness, area, h", [
        (10.0, 0.0, 8.0),
        (10.0, -1.0, 8.0),
        (0.0, 1.0, 8.0),
        (10.0, 1.0, 0.0),
    ])
    def test_rejects_non_positive_inputs(self, thickness, area, h):
        with pytest.raises(InvalidInputError):
            compute_heat_loss(20.0, 50.0, thickness, area, DEFAULT_MATERIAL_ID, h, 0.1)

    def test_result_is_immutable(self):
        result = compute_heat_loss(20.0, 50.0, 10.0, 1.0, DEFAULT_MATERIAL_ID, 8.0, 0.1)
        with pytest.raises(AttributeError):
            result.heat_flow_w = 0.0
        assert result.to_dict()['u_value'] == result.u_value
