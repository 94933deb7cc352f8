# greenhouse_structural/loads.py - Load conditions from geometry and site data
"""
LOAD CONDITION GENERATOR
========================

Derives the area loads acting on the greenhouse from its geometry, glazing,
installed systems and the site parameters:

- dead:      framing + glazing + hung equipment weight over the plan area
- live:      20 psf maintenance load (greenhouse / agricultural occupancy)
- snow:      ASCE 7 flat roof snow load with the minimum roof snow load floor
- wind:      simplified ASCE 7 design wind pressure
- equipment: allowance per installed system (heating, lighting, irrigation)

Every LoadCondition carries its own LRFD load factor, importance factor,
duration factor, code citation and a calculation string with the numbers
substituted, so a reviewer can re-derive each value by hand.

The generator is pure: the same model and site always yield the same list.
"""

from dataclasses import dataclass
from typing import List, Optional

from loguru import logger

from .config import EngineConfig
from .model import GreenhouseModel, LoadKind, SiteParameters


@dataclass(frozen=True)
class ApplicationArea:
    """Rectangle the load acts on, in plan or elevation (ft)."""
    x1: float
    y1: float
    x2: float
    y2: float

    @property
    def area(self) -> float:
        return abs(self.x2 - self.x1) * abs(self.y2 - self.y1)


@dataclass(frozen=True)
class LoadCondition:
    """One characteristic (unfactored) load acting on the structure."""
    id: str
    kind: LoadKind
    description: str
    magnitude: float
    unit: str
    direction: str            # vertical | horizontal | lateral
    distribution: str         # uniform | concentrated | triangular | trapezoidal
    application_area: ApplicationArea
    load_factor: float
    importance_factor: float
    duration_factor: float
    code_reference: str
    calculation: str
    exposure_category: Optional[str] = None
    risk_category: Optional[str] = None


# ============================================================================
# CODE FACTORS
# ============================================================================

def exposure_factor(category: str, config: EngineConfig) -> float:
    """Snow exposure factor Ce (A/B 1.0, C 1.2, D 1.3); unknown categories take 1.0."""
    return config.exposure_factors.get(category, 1.0)


def importance_factor(category: str, config: EngineConfig) -> float:
    """Importance factor I by risk category (I 0.8, II 1.0, III 1.1, IV 1.2)."""
    return config.importance_factors.get(category, 1.0)


# ============================================================================
# LOAD MAGNITUDES
# ============================================================================

def calculate_dead_load(model: GreenhouseModel, config: EngineConfig) -> float:
    """
    Dead load in psf.

    DL = (W_frame + W_glazing + W_equipment) / A_plan, where each weight is
    the plan area times a per-square-foot constant.
    """
    area = model.plan_area
    structure_weight = area * config.frame_weight_psf
    glazing_weight = area * config.glazing_weight(model.glazing_type)
    equipment_weight = area * config.equipment_weight_psf

    return (structure_weight + glazing_weight + equipment_weight) / area


def calculate_snow_load(location: SiteParameters, config: EngineConfig) -> float:
    """
    Flat roof snow load (ASCE 7 Chapter 7), psf.

        pf = 0.7 · Ce · Ct · I · pg

    floored at the minimum roof snow load min(20, I · pg).

    Example:
    --------
    pg = 25 psf, exposure B, risk II:
        pf = 0.7 × 1.0 × 1.0 × 1.0 × 25 = 17.5
        floor = min(20, 25) = 20   →   20 psf
    """
    pg = location.ground_snow_load
    Ce = exposure_factor(location.exposure_category, config)
    Ct = config.snow_thermal_factor
    I = importance_factor(location.risk_category, config)

    pf = 0.7 * Ce * Ct * I * pg
    minimum_snow = min(config.minimum_snow_load_psf, I * pg)

    return max(pf, minimum_snow)


def calculate_wind_load(location: SiteParameters, config: EngineConfig) -> float:
    """
    Design wind pressure (simplified ASCE 7 Chapter 27), psf.

        qz = 0.00256 · V²        (V in mph)
        p  = qz · G · Cp · I
    """
    V = location.basic_wind_speed
    qz = 0.00256 * V * V
    G = config.wind_gust_factor
    Cp = config.wind_pressure_coefficient
    I = importance_factor(location.risk_category, config)

    return qz * G * Cp * I


def calculate_equipment_load(model: GreenhouseModel) -> float:
    """Equipment allowance in psf: heating 2, lighting 1, irrigation 1."""
    equipment_load = 0.0

    if model.systems.heating != 'none':
        equipment_load += 2.0
    if model.systems.lighting:
        equipment_load += 1.0
    if model.systems.irrigation != 'none':
        equipment_load += 1.0

    return equipment_load


# ============================================================================
# GENERATOR
# ============================================================================

def generate_load_conditions(
    model: GreenhouseModel,
    location: SiteParameters,
    config: Optional[EngineConfig] = None,
) -> List[LoadCondition]:
    """
    Build the list of load conditions for one analysis run.

    Parameters:
    -----------
    model : GreenhouseModel
        Geometry, glazing and installed systems
    location : SiteParameters
        Ground snow load, wind speed, exposure and risk category
    config : EngineConfig, optional
        Code tables and constants (defaults to EngineConfig())

    Returns:
    --------
    List[LoadCondition]
        dead, live, snow, wind and, when non-zero, equipment, in that order
    """
    if config is None:
        config = EngineConfig()

    dims = model.dimensions
    plan = ApplicationArea(0.0, 0.0, dims.length, dims.width)
    elevation = ApplicationArea(0.0, 0.0, dims.length, dims.height)
    Ce = exposure_factor(location.exposure_category, config)
    I = importance_factor(location.risk_category, config)

    loads: List[LoadCondition] = []

    dead = calculate_dead_load(model, config)
    glazing_psf = config.glazing_weight(model.glazing_type)
    loads.append(LoadCondition(
        id='load-dead',
        kind=LoadKind.DEAD,
        description='Dead load from structure weight',
        magnitude=dead,
        unit='psf',
        direction='vertical',
        distribution='uniform',
        application_area=plan,
        load_factor=1.2,
        importance_factor=1.0,
        duration_factor=1.0,
        code_reference='IBC Table 1607.1',
        calculation=(
            f"DL = frame {config.frame_weight_psf:g} + glazing ({model.glazing_type}) {glazing_psf:g}"
            f" + equipment {config.equipment_weight_psf:g} = {dead:.2f} psf"
        ),
    ))

    live = config.maintenance_live_load_psf
    loads.append(LoadCondition(
        id='load-live',
        kind=LoadKind.LIVE,
        description='Live load for maintenance access',
        magnitude=live,
        unit='psf',
        direction='vertical',
        distribution='uniform',
        application_area=plan,
        load_factor=1.6,
        importance_factor=1.0,
        duration_factor=1.0,
        code_reference='IBC Table 1607.1',
        calculation=f"Maintenance live load for greenhouse structures = {live:g} psf",
    ))

    snow = calculate_snow_load(location, config)
    pg = location.ground_snow_load
    loads.append(LoadCondition(
        id='load-snow',
        kind=LoadKind.SNOW,
        description='Snow load based on ground snow load',
        magnitude=snow,
        unit='psf',
        direction='vertical',
        distribution='uniform',
        application_area=plan,
        load_factor=1.6,
        importance_factor=I,
        duration_factor=1.15,
        code_reference='ASCE 7 Chapter 7',
        calculation=(
            f"pf = 0.7 * Ce * Ct * I * pg = 0.7 * {Ce:g} * {config.snow_thermal_factor:g} * {I:g} * {pg:g}"
            f" = {0.7 * Ce * config.snow_thermal_factor * I * pg:.2f};"
            f" min = min({config.minimum_snow_load_psf:g}, I * pg) = {min(config.minimum_snow_load_psf, I * pg):.2f};"
            f" design = {snow:.2f} psf"
        ),
        exposure_category=location.exposure_category,
        risk_category=location.risk_category,
    ))

    wind = calculate_wind_load(location, config)
    V = location.basic_wind_speed
    loads.append(LoadCondition(
        id='load-wind',
        kind=LoadKind.WIND,
        description='Wind load based on basic wind speed',
        magnitude=wind,
        unit='psf',
        direction='horizontal',
        distribution='uniform',
        application_area=elevation,
        load_factor=1.0,
        importance_factor=I,
        duration_factor=1.6,
        code_reference='ASCE 7 Chapter 27',
        calculation=(
            f"qz = 0.00256 * {V:g}^2 = {0.00256 * V * V:.3f};"
            f" p = qz * G * Cp * I = {0.00256 * V * V:.3f} * {config.wind_gust_factor:g}"
            f" * {config.wind_pressure_coefficient:g} * {I:g} = {wind:.2f} psf"
        ),
        exposure_category=location.exposure_category,
        risk_category=location.risk_category,
    ))

    equipment = calculate_equipment_load(model)
    if equipment > 0:
        loads.append(LoadCondition(
            id='load-equipment',
            kind=LoadKind.EQUIPMENT,
            description='Equipment load from HVAC, lighting, etc.',
            magnitude=equipment,
            unit='psf',
            direction='vertical',
            distribution='uniform',
            application_area=plan,
            load_factor=1.2,
            importance_factor=1.0,
            duration_factor=1.0,
            code_reference='Equipment specifications',
            calculation=(
                f"heating {model.systems.heating}, lighting {model.systems.lighting},"
                f" irrigation {model.systems.irrigation} = {equipment:g} psf"
            ),
        ))

    logger.debug(
        "Generated {} load conditions for model {}: {}",
        len(loads), model.id, ", ".join(f"{l.kind.value}={l.magnitude:.2f}" for l in loads),
    )
    return loads
