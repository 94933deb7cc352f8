# greenhouse_structural/config.py
"""
Engine configuration.

All code tables, section data and tuning constants the pipeline needs are
gathered in one EngineConfig, built once by the caller and passed into the
engine. Stages read from it; nothing writes to it.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .catalog import (
    DEFAULT_GLAZING_WEIGHT,
    EQUIPMENT_WEIGHT_PSF,
    FRAME_WEIGHT_PSF,
    GLAZING_WEIGHTS,
    STEEL_SECTIONS,
    STRUCTURAL_STEEL_DEFAULTS,
    MaterialDefaults,
    Section,
)
from .combinations import LoadCombination, default_combination_tables


# ASD safety factor applied to yield stress although member demands are
# LRFD-factored (mixed basis).
LEGACY_MIXED_SAFETY_FACTOR = 1.67

# Gravitational acceleration in in/s², for mass from weight per inch
GRAVITY_IN_S2 = 386.1

SUPPORTED_STRUCTURE_TYPES: Tuple[str, ...] = (
    'gutter_connected',
    'freestanding',
    'lean_to',
    'multi_span',
    'gothic',
    'quonset',
)

EXPOSURE_FACTORS: Dict[str, float] = {'A': 1.0, 'B': 1.0, 'C': 1.2, 'D': 1.3}
IMPORTANCE_FACTORS: Dict[str, float] = {'I': 0.8, 'II': 1.0, 'III': 1.1, 'IV': 1.2}


@dataclass(frozen=True)
class EngineConfig:
    """Configuration for one StructuralAnalysisEngine."""

    # Code tables
    building_code: str = 'LRFD'
    combination_tables: Mapping[str, Tuple[LoadCombination, ...]] = field(
        default_factory=default_combination_tables
    )
    exposure_factors: Mapping[str, float] = field(default_factory=lambda: dict(EXPOSURE_FACTORS))
    importance_factors: Mapping[str, float] = field(default_factory=lambda: dict(IMPORTANCE_FACTORS))
    supported_structure_types: Tuple[str, ...] = SUPPORTED_STRUCTURE_TYPES

    # Reference data
    sections: Mapping[str, Section] = field(default_factory=lambda: dict(STEEL_SECTIONS))
    material_defaults: MaterialDefaults = STRUCTURAL_STEEL_DEFAULTS
    glazing_weights: Mapping[str, float] = field(default_factory=lambda: dict(GLAZING_WEIGHTS))
    default_glazing_weight: float = DEFAULT_GLAZING_WEIGHT
    frame_weight_psf: float = FRAME_WEIGHT_PSF
    equipment_weight_psf: float = EQUIPMENT_WEIGHT_PSF

    # Load generation
    maintenance_live_load_psf: float = 20.0
    snow_thermal_factor: float = 1.0      # Ct, heated greenhouse
    minimum_snow_load_psf: float = 20.0
    wind_gust_factor: float = 0.85        # G
    wind_pressure_coefficient: float = 0.8  # Cp

    # Member analysis
    safety_factor: float = LEGACY_MIXED_SAFETY_FACTOR
    effective_length_factor: float = 1.0  # K
    gravity: float = GRAVITY_IN_S2
    seismic_coefficient: float = 0.1
    overturning_height_ft: float = 20.0

    # Execution
    max_workers: int = 1
    strict_members: bool = False
    fea_timeout_s: Optional[float] = 300.0

    def __post_init__(self):
        # Read-only views of the tables
        tables = {name: tuple(combos) for name, combos in self.combination_tables.items()}
        object.__setattr__(self, 'combination_tables', MappingProxyType(tables))
        for name in ('exposure_factors', 'importance_factors', 'sections', 'glazing_weights'):
            object.__setattr__(self, name, MappingProxyType(dict(getattr(self, name))))
        object.__setattr__(self, 'supported_structure_types', tuple(self.supported_structure_types))

    def glazing_weight(self, glazing_type: str) -> float:
        return self.glazing_weights.get(glazing_type, self.default_glazing_weight)
