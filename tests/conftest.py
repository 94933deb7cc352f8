# File: tests/conftest.py
"""
Shared fixtures: a small gutter-connected greenhouse with steel frames,
a material database and site parameters that give round load numbers.
"""

import pytest

from greenhouse_structural.model import (
    AnalysisParameters,
    ComponentGeometry,
    Dimensions,
    FrameComponent,
    GreenhouseModel,
    MaterialDatabase,
    MaterialRecord,
    SiteParameters,
)


@pytest.fixture
def materials():
    return MaterialDatabase([
        MaterialRecord(
            id="steel-a36",
            name="ASTM A36 Steel",
            elastic_modulus=29e6,
            yield_strength=36000.0,
            tensile_strength=58000.0,
            density=490.0,
            thermal_expansion=6.5e-6,
        ),
        MaterialRecord(id="aluminum-6061", name="6061-T6 Aluminum"),
    ])


@pytest.fixture
def make_component():
    """Factory for frame components; length is given in feet for readability."""

    def _make(id, name="roof beam", length_ft=20.0, material_id="steel-a36",
              section_name="W12X26", width=6.5, height=12.2, **kwargs):
        return FrameComponent(
            id=id,
            name=name,
            material_id=material_id,
            geometry=ComponentGeometry(length=length_ft * 12.0, width=width, height=height),
            section_name=section_name,
            **kwargs,
        )

    return _make


@pytest.fixture
def site():
    # pg = 25 psf, exposure B, risk II  ->  snow 20 psf
    # V = 115 mph                       ->  wind 23.02 psf
    return SiteParameters(
        latitude=40.0,
        longitude=-105.0,
        elevation=5000.0,
        ground_snow_load=25.0,
        basic_wind_speed=115.0,
        exposure_category="B",
        risk_category="II",
    )


@pytest.fixture
def parameters(site):
    return AnalysisParameters(location=site)


@pytest.fixture
def greenhouse(make_component):
    return GreenhouseModel(
        id="gh-1",
        name="Test Greenhouse",
        structure_type="gutter_connected",
        glazing_type="polycarbonate",
        dimensions=Dimensions(length=60.0, width=30.0, height=12.0, bay_spacing=10.0),
        frame=[
            make_component("beam-1", name="roof beam 1"),
            make_component("beam-2", name="roof beam 2"),
            make_component("post-1", name="corner post", length_ft=10.0, section_name="W8X31"),
            make_component("truss-1", name="roof truss", length_ft=30.0, section_name="W10X49"),
        ],
    )
