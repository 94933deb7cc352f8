# File: tests/test_foundation.py
"""
Test the foundation analyzer against its sizing formulas.
"""

import math

import pytest

from greenhouse_structural.errors import ComputationDomainError
from greenhouse_structural.foundation import analyze_foundation
from greenhouse_structural.model import SoilProperties
from greenhouse_structural.results import GlobalResults


def summary(total_weight=10000.0):
    base_shear = 0.1 * total_weight
    return GlobalResults(
        total_weight=total_weight,
        base_shear=base_shear,
        overturning_moment=20.0 * base_shear,
    )


def test_footing_sizing_formulas():
    """
    W = 10000 lb:  P = 15000, H = 1000, M = 20000
        A = 15000 / 3000 = 5 ft²,  L = √7.5,  B = 5 / L
    """
    result = analyze_foundation(summary(), analysis_id="a-1")

    P, H, M = 15000.0, 1000.0, 20000.0
    A = P / 3000.0
    L = math.sqrt(1.5 * A)
    B = A / L

    assert result.analysis_id == "a-1"
    assert result.loads.vertical_load == pytest.approx(P)
    assert result.loads.uplift_force == 0.0
    assert result.design.type == 'shallow'
    assert result.design.dimensions.length == pytest.approx(L)
    assert result.design.dimensions.width == pytest.approx(B)
    assert result.design.dimensions.length * result.design.dimensions.width == pytest.approx(A)
    assert not result.design.reinforcement.required

    assert result.results.bearing_pressure == pytest.approx(3000.0)
    assert result.results.overturning_factor == pytest.approx(P * B / 2.0 / M)
    assert result.results.sliding_factor == pytest.approx(P * math.tan(math.radians(30.0)) / H)
    assert result.results.settlement == 0.0

    expected_util = max(1.0, M / (P * B / 2.0), H / (P * math.tan(math.radians(30.0))))
    assert result.results.utilization == pytest.approx(expected_util)
    assert result.results.passed == (expected_util <= 1.0)


def test_bearing_ratio_is_one_by_construction():
    """The footing is sized to the allowable bearing, so q / q_allow = 1."""
    for soil in (SoilProperties(), SoilProperties(bearing_capacity=1500.0, friction_angle=20.0)):
        result = analyze_foundation(summary(), soil)
        assert result.results.bearing_pressure / soil.bearing_capacity == pytest.approx(1.0)
        assert result.results.utilization >= 1.0 - 1e-12


def test_foundation_is_idempotent():
    results = summary(2345.0)
    assert analyze_foundation(results, analysis_id="x") == analyze_foundation(results, analysis_id="x")


def test_default_soil():
    soil = analyze_foundation(summary()).soil_properties
    assert soil.bearing_capacity == 3000.0
    assert soil.friction_angle == 30.0
    assert soil.soil_class == 'C'


@pytest.mark.parametrize("weight", [0.0, -100.0, float('nan')])
def test_no_weight_rejected(weight):
    with pytest.raises(ComputationDomainError, match="foundation"):
        analyze_foundation(summary(weight))
