# greenhouse_structural/model.py
"""
INPUT MODEL: GREENHOUSE GEOMETRY, MATERIALS AND SITE DATA
=========================================================

PURPOSE:
--------
Everything the engine reads from its collaborators lives here:

- GreenhouseModel: dimensions, frame components, glazing and installed systems
- MaterialDatabase: lookup of material records by id
- AnalysisParameters: site location, serviceability limits, design factors
- SoilProperties: foundation soil assumptions

These are pydantic models so that bad input (negative spans, unknown
exposure categories) is rejected at the boundary, before any load is
generated. The engine never mutates them.

UNITS:
------
- Building dimensions: feet
- Component geometry (length, width, height): inches
- Area loads: psf, wind speed: mph
- Material strengths and moduli: psi, density: pcf
"""

from enum import Enum
from typing import Dict, Iterable, List, Literal, Optional

from pydantic import BaseModel, Field, field_validator


# ============================================================================
# ENUMERATIONS
# ============================================================================

class LoadKind(str, Enum):
    """Kind of load condition (ASCE 7 load types used by the combinations)."""
    DEAD = "dead"
    LIVE = "live"
    SNOW = "snow"
    WIND = "wind"
    SEISMIC = "seismic"
    THERMAL = "thermal"
    EQUIPMENT = "equipment"


class MemberRole(str, Enum):
    """Structural role of a frame component, assigned when the model is authored."""
    BEAM = "beam"
    COLUMN = "column"
    TRUSS = "truss"
    CONNECTION = "connection"
    FOUNDATION = "foundation"


class Fixity(str, Enum):
    """End fixity of a member."""
    FIXED = "fixed"
    PINNED = "pinned"
    ROLLER = "roller"
    FREE = "free"


ExposureCategory = Literal["A", "B", "C", "D"]
RiskCategory = Literal["I", "II", "III", "IV"]
SiteClass = Literal["A", "B", "C", "D", "E", "F"]


# ============================================================================
# GEOMETRY
# ============================================================================

class Point3D(BaseModel):
    """A point in model space (inches)."""
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0


class ComponentGeometry(BaseModel):
    """Bounding box and placement of a frame component (inches)."""
    length: float = Field(..., description="Member length along its axis (in)")
    width: float = Field(..., description="Section width (in)")
    height: float = Field(..., description="Section depth (in)")
    position: Point3D = Field(default_factory=Point3D, description="Start point (in)")
    end_point: Optional[Point3D] = Field(None, description="Explicit end point (in)")


class FrameComponent(BaseModel):
    """
    One structural frame component from the CAD model.

    `role` is the authoritative member classification. Components authored
    before roles existed leave it empty and are classified from `name`.
    """
    id: str
    name: str
    material_id: str
    geometry: ComponentGeometry
    role: Optional[MemberRole] = None
    section_name: Optional[str] = Field(None, description="Key into the section table, e.g. 'W12X26'")
    tributary_width: Optional[float] = Field(None, gt=0.0, description="Loaded width (ft); defaults to bay spacing")
    start_fixity: Fixity = Fixity.PINNED
    end_fixity: Fixity = Fixity.PINNED


class Dimensions(BaseModel):
    """Overall greenhouse dimensions (ft)."""
    length: float = Field(..., gt=0.0, description="Building length (ft)")
    width: float = Field(..., gt=0.0, description="Building width (ft)")
    height: float = Field(12.0, gt=0.0, description="Ridge height (ft)")
    bay_spacing: float = Field(10.0, gt=0.0, description="Frame spacing (ft)")
    gutter_height: float = Field(10.0, gt=0.0, description="Gutter height (ft)")


class Systems(BaseModel):
    """Installed building systems that add equipment load."""
    heating: str = Field("none", description="radiant, forced_air, hydronic or none")
    irrigation: str = Field("none", description="overhead, drip, flood_floor or none")
    lighting: bool = True


class GreenhouseModel(BaseModel):
    """Read-only view of the parametric greenhouse model."""
    id: str
    name: str = ""
    structure_type: str = Field("gutter_connected", description="gutter_connected, freestanding, lean_to, ...")
    glazing_type: str = Field("polycarbonate", description="Roof glazing type")
    dimensions: Dimensions
    systems: Systems = Field(default_factory=Systems)
    frame: List[FrameComponent] = Field(default_factory=list)

    @property
    def plan_area(self) -> float:
        return self.dimensions.length * self.dimensions.width


# ============================================================================
# MATERIALS
# ============================================================================

class MaterialRecord(BaseModel):
    """
    Material record as stored in the material database.

    Any structural property may be missing; the member builder substitutes
    structural steel defaults.
    """
    id: str
    name: str = ""
    elastic_modulus: Optional[float] = Field(None, gt=0.0, description="psi")
    yield_strength: Optional[float] = Field(None, gt=0.0, description="psi")
    tensile_strength: Optional[float] = Field(None, gt=0.0, description="psi")
    density: Optional[float] = Field(None, gt=0.0, description="pcf")
    thermal_expansion: Optional[float] = Field(None, gt=0.0, description="in/in/°F")


class MaterialDatabase:
    """In-memory material lookup keyed by material id."""

    def __init__(self, materials: Optional[Iterable[MaterialRecord]] = None):
        self._materials: Dict[str, MaterialRecord] = {}
        for material in materials or []:
            self.add(material)

    def add(self, material: MaterialRecord) -> None:
        self._materials[material.id] = material

    def get_material(self, material_id: str) -> Optional[MaterialRecord]:
        return self._materials.get(material_id)

    def __contains__(self, material_id: str) -> bool:
        return material_id in self._materials

    def __len__(self) -> int:
        return len(self._materials)


# ============================================================================
# SITE AND ANALYSIS PARAMETERS
# ============================================================================

class SiteParameters(BaseModel):
    """Site data, usually derived from geocoding the project address."""
    latitude: float = Field(0.0, ge=-90.0, le=90.0)
    longitude: float = Field(0.0, ge=-180.0, le=180.0)
    elevation: float = Field(0.0, description="ft above sea level")
    ground_snow_load: float = Field(..., ge=0.0, description="pg (psf)")
    basic_wind_speed: float = Field(..., ge=0.0, description="V (mph)")
    seismic_class: SiteClass = "D"
    exposure_category: ExposureCategory = "C"
    risk_category: RiskCategory = "II"

    @field_validator("exposure_category", "seismic_class", mode="before")
    @classmethod
    def _upper_letter(cls, v):
        return v.upper() if isinstance(v, str) else v


class ServiceabilityLimits(BaseModel):
    """Serviceability criteria."""
    deflection_limit: float = Field(360.0, gt=0.0, description="Span ratio, e.g. 360 for L/360")
    vibration_limit: float = Field(5.0, ge=0.0, description="Minimum natural frequency (Hz)")
    drift_limit: float = Field(1.0, gt=0.0, description="Story drift limit (%)")


class DesignFactors(BaseModel):
    """Code factors carried with the analysis for downstream reporting."""
    live_load_reduction: bool = False
    wind_directionality: float = Field(0.85, gt=0.0)
    seismic_response_modification: float = Field(3.0, gt=0.0)
    overstrength_factor: float = Field(2.0, gt=0.0)


class AnalysisParameters(BaseModel):
    """Everything the caller supplies besides the model itself."""
    location: SiteParameters
    serviceability: ServiceabilityLimits = Field(default_factory=ServiceabilityLimits)
    factors: DesignFactors = Field(default_factory=DesignFactors)


class SoilProperties(BaseModel):
    """Foundation soil assumptions (defaults are a generic class C soil)."""
    bearing_capacity: float = Field(3000.0, gt=0.0, description="Allowable bearing (psf)")
    cohesion: float = Field(500.0, ge=0.0, description="psf")
    friction_angle: float = Field(30.0, gt=0.0, lt=90.0, description="degrees")
    unit_weight: float = Field(120.0, gt=0.0, description="pcf")
    liquid_limit: float = 40.0
    plastic_limit: float = 20.0
    soil_class: SiteClass = "C"
