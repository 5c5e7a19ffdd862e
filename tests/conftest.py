# -*- coding: utf-8 -*-
"""Pytest configuration and shared fixtures."""

import pytest

from flat_insulation.core.constants import CalibrationConstants
from flat_insulation.core.materials import MaterialThermalProfile, MaterialsDatabase
from flat_insulation.solvers.lambda_interpolator import MaterialLambdaInterpolator


DEFAULT_H = CalibrationConstants.DEFAULT_SURFACE_COEFFICIENT


@pytest.fixture
def test_profile():
    """Three-anchor profile with round numbers."""
    return MaterialThermalProfile(
        material_id='TEST_FOAM',
        anchors=((0.0, 0.030), (10.0, 0.032), (40.0, 0.041)),
        name='Test Foam',
    )


@pytest.fixture
def database(test_profile):
    """Fresh registry with the built-in materials plus the test profile."""
    db = MaterialsDatabase()
    db.register(test_profile)
    return db


@pytest.fixture
def interpolator(database):
    """Interpolator bound to the fresh registry, reference policy."""
    return MaterialLambdaInterpolator(database=database)


@pytest.fixture
def default_h():
    return DEFAULT_H
