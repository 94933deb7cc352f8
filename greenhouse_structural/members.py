# greenhouse_structural/members.py
"""
STRUCTURAL MEMBER BUILDER
=========================

Turns frame components from the CAD model into analyzable members:

    FrameComponent + MaterialRecord  →  StructuralMember
        role        (MemberRole tag, or legacy name heuristic)
        section     (section table entry, or bounding-box rectangle)
        material    (record values with structural steel fallbacks)
        boundaries  (pinned-pinned unless the component overrides them)

A component that cannot be turned into a valid member is skipped and
reported as a BuildDiagnostic; it never aborts the run:

- MaterialNotFoundError:  material id not in the database
- ComputationDomainError: zero length, zero area, non-finite properties,
                          or a free-free span with no support at all

With EngineConfig.strict_members the domain errors are re-raised instead.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from loguru import logger

from .catalog import Section, rectangular_section
from .config import EngineConfig
from .errors import ComputationDomainError, MaterialNotFoundError
from .model import (
    Fixity,
    FrameComponent,
    GreenhouseModel,
    MaterialDatabase,
    MaterialRecord,
    MemberRole,
    Point3D,
)


@dataclass(frozen=True)
class MaterialProperties:
    """Material snapshot taken when the member is built (psi, pcf, /°F)."""
    id: str
    elastic_modulus: float
    shear_modulus: float
    yield_strength: float
    ultimate_strength: float
    density: float
    thermal_expansion: float


@dataclass(frozen=True)
class AxisFlags:
    x: bool
    y: bool
    z: bool


@dataclass(frozen=True)
class BoundaryCondition:
    """
    Support condition at one member end.

    translation / rotation flags are True where the degree of freedom is
    restrained.
    """
    fixity: Fixity
    translation: AxisFlags
    rotation: AxisFlags

    @classmethod
    def from_fixity(cls, fixity: Fixity) -> "BoundaryCondition":
        if fixity == Fixity.FIXED:
            return cls(fixity, AxisFlags(True, True, True), AxisFlags(True, True, True))
        if fixity == Fixity.PINNED:
            return cls(fixity, AxisFlags(True, True, True), AxisFlags(False, False, False))
        if fixity == Fixity.ROLLER:
            # Free to slide along the member axis
            return cls(fixity, AxisFlags(False, True, True), AxisFlags(False, False, False))
        return cls(fixity, AxisFlags(False, False, False), AxisFlags(False, False, False))


@dataclass(frozen=True)
class MemberResults:
    """Per-member envelope written once by the member analysis."""
    max_moment: float           # lb-in
    max_shear: float            # lb
    max_deflection: float       # in
    max_stress: float           # psi
    utilization: float
    buckling_capacity: float    # lb
    vibration_frequency: float  # Hz


@dataclass(frozen=True)
class StructuralMember:
    """An analyzable member. `length` and `tributary_width` are in feet."""
    id: str
    component_id: str
    role: MemberRole
    start_point: Point3D
    end_point: Point3D
    length: float
    tributary_width: float
    section: Section
    material: MaterialProperties
    start_condition: BoundaryCondition
    end_condition: BoundaryCondition
    results: Optional[MemberResults] = None

    @property
    def length_in(self) -> float:
        return self.length * 12.0

    @property
    def weight(self) -> float:
        """Self weight in lb: A (in²) × L (in) × ρ (pcf) / 1728."""
        return self.section.area * self.length_in * self.material.density / 1728.0


@dataclass(frozen=True)
class BuildDiagnostic:
    """Why a component did not become a member."""
    component_id: str
    error: str
    message: str


@dataclass
class MemberBuildResult:
    members: List[StructuralMember] = field(default_factory=list)
    diagnostics: List[BuildDiagnostic] = field(default_factory=list)


# ============================================================================
# CLASSIFICATION, SECTION AND MATERIAL
# ============================================================================

def determine_member_role(component: FrameComponent) -> MemberRole:
    """
    Member role for a component.

    The authored `role` tag wins. Name matching is the legacy path for
    components authored without one: "post" → column, "beam" → beam,
    "truss" → truss, anything else → beam.
    """
    if component.role is not None:
        return component.role

    name = component.name.lower()
    if 'post' in name:
        return MemberRole.COLUMN
    if 'beam' in name:
        return MemberRole.BEAM
    if 'truss' in name:
        return MemberRole.TRUSS
    return MemberRole.BEAM


def section_from_dimensions(component: FrameComponent, config: EngineConfig) -> Section:
    """Section table entry named by the component, else its bounding-box rectangle."""
    if component.section_name:
        key = component.section_name.upper()
        if key in config.sections:
            return config.sections[key]
        logger.warning(
            "Section '{}' of component {} not in section table; using bounding box",
            component.section_name, component.id,
        )

    width = component.geometry.width
    height = component.geometry.height
    if width <= 0 or height <= 0:
        raise ComputationDomainError(
            f"Component has non-positive section dimensions {width} x {height} in",
            stage="member_builder",
            member_id=component.id,
        )
    return rectangular_section(width, height)


def material_properties(record: MaterialRecord, config: EngineConfig) -> MaterialProperties:
    """Snapshot a material record, filling gaps with structural steel defaults."""
    defaults = config.material_defaults

    E = record.elastic_modulus or defaults.elastic_modulus
    if record.elastic_modulus:
        G = record.elastic_modulus / defaults.shear_modulus_ratio
    else:
        G = defaults.shear_modulus

    return MaterialProperties(
        id=record.id,
        elastic_modulus=E,
        shear_modulus=G,
        yield_strength=record.yield_strength or defaults.yield_strength,
        ultimate_strength=record.tensile_strength or defaults.ultimate_strength,
        density=record.density or defaults.density,
        thermal_expansion=record.thermal_expansion or defaults.thermal_expansion,
    )


def _end_point(component: FrameComponent) -> Point3D:
    if component.geometry.end_point is not None:
        return component.geometry.end_point
    start = component.geometry.position
    return Point3D(x=start.x + component.geometry.length, y=start.y, z=start.z)


def _validate(member: StructuralMember) -> None:
    values = {
        'length': member.length,
        'area': member.section.area,
        'ix': member.section.ix,
        'iy': member.section.iy,
        'sx': member.section.sx,
        'elastic_modulus': member.material.elastic_modulus,
        'yield_strength': member.material.yield_strength,
        'density': member.material.density,
    }
    for name, value in values.items():
        if not math.isfinite(value) or value <= 0:
            raise ComputationDomainError(
                f"Member {name} must be positive and finite, got {value}",
                stage="member_builder",
                member_id=member.id,
            )

    if not is_supported(*fixity_pair(member)):
        raise ComputationDomainError(
            "Member ends {}/{} do not form a stable span".format(*(f.value for f in fixity_pair(member))),
            stage="member_builder",
            member_id=member.id,
        )


# ============================================================================
# BUILDER
# ============================================================================

def build_member(
    component: FrameComponent,
    materials: MaterialDatabase,
    bay_spacing: float,
    config: EngineConfig,
) -> StructuralMember:
    """
    Build one member from a frame component.

    Raises:
        MaterialNotFoundError: material id not in the database
        ComputationDomainError: geometry or properties outside the valid domain
    """
    record = materials.get_material(component.material_id)
    if record is None:
        raise MaterialNotFoundError(component.material_id, component.id)

    member = StructuralMember(
        id=f"member-{component.id}",
        component_id=component.id,
        role=determine_member_role(component),
        start_point=component.geometry.position,
        end_point=_end_point(component),
        length=component.geometry.length / 12.0,  # in -> ft
        tributary_width=component.tributary_width or bay_spacing,
        section=section_from_dimensions(component, config),
        material=material_properties(record, config),
        start_condition=BoundaryCondition.from_fixity(component.start_fixity),
        end_condition=BoundaryCondition.from_fixity(component.end_fixity),
    )
    _validate(member)
    return member


def build_members(
    model: GreenhouseModel,
    materials: MaterialDatabase,
    config: Optional[EngineConfig] = None,
) -> MemberBuildResult:
    """
    Build members for every frame component of the model.

    Components that fail are skipped and reported in `diagnostics`.
    """
    if config is None:
        config = EngineConfig()

    result = MemberBuildResult()
    for component in model.frame:
        try:
            member = build_member(component, materials, model.dimensions.bay_spacing, config)
        except MaterialNotFoundError as e:
            logger.warning("Skipping component {}: {}", component.id, e)
            result.diagnostics.append(BuildDiagnostic(component.id, 'MaterialNotFoundError', str(e)))
            continue
        except ComputationDomainError as e:
            if config.strict_members:
                raise
            logger.warning("Rejecting component {}: {}", component.id, e)
            result.diagnostics.append(BuildDiagnostic(component.id, 'ComputationDomainError', str(e)))
            continue
        result.members.append(member)

    logger.info(
        "Built {} members from {} frame components ({} skipped)",
        len(result.members), len(model.frame), len(result.diagnostics),
    )
    return result


def fixity_pair(member: StructuralMember) -> Tuple[Fixity, Fixity]:
    return member.start_condition.fixity, member.end_condition.fixity


def is_supported(start: Fixity, end: Fixity) -> bool:
    """A free end is only stable opposite a fixed end (cantilever)."""
    if Fixity.FREE in (start, end):
        return Fixity.FIXED in (start, end)
    return True
