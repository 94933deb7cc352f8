# greenhouse_structural/foundation.py
"""
FOUNDATION ANALYZER
===================

Sizes a single spread footing for the superstructure and checks its
stability, using the aggregate results of the structural analysis:

    P   = 1.5 · W_total                         (vertical load, lb)
    H   = base shear                            (horizontal load, lb)
    M   = overturning moment                    (ft-lb)

    A   = P / q_allow                           (ft²)
    L   = √(1.5·A),  B = A / L                  (1.5 aspect ratio)
    q   = P / A                                 (bearing pressure, psf)
    FSo = (P · B/2) / M                         (overturning)
    FSs = (P · tan φ) / H                       (sliding)

    utilization = max(q / q_allow, 1/FSo, 1/FSs),   passed = utilization ≤ 1.0

The analyzer is a pure function of the results and the soil: running it
twice on the same inputs gives identical footing and safety factors.
"""

import math
from dataclasses import dataclass, field
from typing import Optional

from loguru import logger

from .errors import ComputationDomainError
from .model import SoilProperties
from .results import GlobalResults


VERTICAL_LOAD_FACTOR = 1.5
FOOTING_ASPECT_RATIO = 1.5


@dataclass(frozen=True)
class FoundationLoads:
    vertical_load: float       # lb
    horizontal_load: float     # lb
    overturning_moment: float  # ft-lb
    uplift_force: float = 0.0  # lb


@dataclass(frozen=True)
class FootingDimensions:
    length: float     # ft
    width: float      # ft
    depth: float      # ft
    thickness: float  # ft


@dataclass(frozen=True)
class Reinforcement:
    required: bool = False
    top_reinforcement: str = 'None'
    bottom_reinforcement: str = 'None'
    stirrups: str = 'None'
    development_length: float = 0.0  # in


@dataclass(frozen=True)
class FoundationDesign:
    type: str
    dimensions: FootingDimensions
    reinforcement: Reinforcement = field(default_factory=Reinforcement)


@dataclass(frozen=True)
class FoundationResults:
    bearing_pressure: float    # psf
    settlement: float          # in
    overturning_factor: float
    sliding_factor: float
    utilization: float
    passed: bool


@dataclass(frozen=True)
class FoundationAnalysis:
    analysis_id: str
    soil_properties: SoilProperties
    loads: FoundationLoads
    design: FoundationDesign
    results: FoundationResults


def analyze_foundation(
    results: GlobalResults,
    soil: Optional[SoilProperties] = None,
    analysis_id: str = '',
    depth: float = 2.0,
    thickness: float = 0.33,
) -> FoundationAnalysis:
    """
    Size the spread footing and check bearing, overturning and sliding.

    Args:
        results: Global results of a completed structural analysis
        soil: Soil properties (defaults to SoilProperties())
        analysis_id: Id of the structural analysis, carried for traceability
        depth: Footing embedment depth (ft)
        thickness: Footing thickness (ft)

    Raises:
        ComputationDomainError: if the structure has no weight to found
    """
    if soil is None:
        soil = SoilProperties()

    loads = FoundationLoads(
        vertical_load=results.total_weight * VERTICAL_LOAD_FACTOR,
        horizontal_load=results.base_shear,
        overturning_moment=results.overturning_moment,
    )
    if not (math.isfinite(loads.vertical_load) and loads.vertical_load > 0):
        raise ComputationDomainError(
            f"Cannot size a footing for vertical load {loads.vertical_load}",
            stage="foundation",
        )
    if loads.horizontal_load <= 0 or loads.overturning_moment <= 0:
        raise ComputationDomainError(
            "Foundation stability needs positive base shear and overturning moment",
            stage="foundation",
        )

    allowable = soil.bearing_capacity
    area = loads.vertical_load / allowable
    length = math.sqrt(area * FOOTING_ASPECT_RATIO)
    width = area / length

    bearing_pressure = loads.vertical_load / area
    overturning_factor = (loads.vertical_load * width / 2.0) / loads.overturning_moment
    sliding_factor = (
        loads.vertical_load * math.tan(math.radians(soil.friction_angle))
    ) / loads.horizontal_load

    utilization = max(
        bearing_pressure / allowable,
        1.0 / overturning_factor,
        1.0 / sliding_factor,
    )

    foundation = FoundationAnalysis(
        analysis_id=analysis_id,
        soil_properties=soil,
        loads=loads,
        design=FoundationDesign(
            type='shallow',
            dimensions=FootingDimensions(length=length, width=width, depth=depth, thickness=thickness),
        ),
        results=FoundationResults(
            bearing_pressure=bearing_pressure,
            settlement=0.0,
            overturning_factor=overturning_factor,
            sliding_factor=sliding_factor,
            utilization=utilization,
            passed=utilization <= 1.0,
        ),
    )

    logger.info(
        "Footing {:.2f} x {:.2f} ft: q={:.0f} psf FSo={:.2f} FSs={:.2f} utilization={:.3f}",
        length, width, bearing_pressure, overturning_factor, sliding_factor, utilization,
    )
    return foundation
