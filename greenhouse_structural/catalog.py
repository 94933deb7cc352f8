"""
CATALOG: SECTION, MATERIAL AND CLADDING PROPERTIES
==================================================

PURPOSE:
--------
This module defines the reference data the engine looks things up in:

- a table of standard steel sections (AISC W-shapes and square HSS) that a
  frame component can name instead of relying on its bounding box,
- the structural steel defaults used when a material record is incomplete,
- per-square-foot weights of glazing and framing used for dead load.

Nothing here is a module-level cache that the engine mutates. The tables are
copied into an EngineConfig once and passed into the pipeline.

ENGINEERING CONTEXT:
--------------------
- **Section** properties (imperial):
  - area (in²): axial capacity and self-weight
  - ix, iy (in⁴): bending stiffness about the strong and weak axis
  - sx, sy (in³): elastic section moduli, σ = M / S
  - rx, ry (in): radii of gyration, r = √(I / A)
  - torsional_constant J (in⁴), warping_constant Cw (in⁶)

- **Rectangular fallback**: for a b × d box,
  A = b·d, Ix = b·d³/12, Iy = d·b³/12, Sx = Ix/(d/2), Sy = Iy/(b/2).
"""

import math
from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Section:
    """
    Cross-sectional properties of a structural member (inches).

    Frozen so a member's section can never drift after the member is built.
    """
    name: str
    area: float               # in²
    ix: float                 # in⁴
    iy: float                 # in⁴
    sx: float                 # in³
    sy: float                 # in³
    rx: float                 # in
    ry: float                 # in
    torsional_constant: float = 0.0  # in⁴
    warping_constant: float = 0.0    # in⁶

    @property
    def i_min(self) -> float:
        """Weak-axis moment of inertia, governs Euler buckling."""
        return min(self.ix, self.iy)


def rectangular_section(width: float, height: float) -> Section:
    """
    Build a solid rectangular section from a component bounding box.

    Parameters:
    -----------
    width : float
        Section width b (in)
    height : float
        Section depth d (in), measured in the plane of strong-axis bending

    Returns:
    --------
    Section
        Named "<width>x<height>". The torsional constant is approximated as
        Ix + Iy (polar moment), which is adequate for reporting only.
    """
    area = width * height
    ix = width * height ** 3 / 12.0
    iy = height * width ** 3 / 12.0
    sx = ix / (height / 2.0)
    sy = iy / (width / 2.0)

    return Section(
        name=f"{width:g}x{height:g}",
        area=area,
        ix=ix,
        iy=iy,
        sx=sx,
        sy=sy,
        rx=math.sqrt(ix / area),
        ry=math.sqrt(iy / area),
        torsional_constant=ix + iy,
        warping_constant=0.0,
    )


# ============================================================================
# STEEL SECTIONS (AISC Steel Construction Manual, imperial)
# ============================================================================

STEEL_SECTIONS: Dict[str, Section] = {
    # Wide Flange Sections
    'W12X26': Section(
        name='W12X26', area=7.65, ix=204.0, iy=17.3, sx=33.4, sy=5.34,
        rx=5.17, ry=1.51, torsional_constant=0.300, warping_constant=607.0,
    ),
    'W10X49': Section(
        name='W10X49', area=14.4, ix=272.0, iy=93.4, sx=54.6, sy=18.7,
        rx=4.35, ry=2.54, torsional_constant=1.39, warping_constant=2070.0,
    ),
    'W8X31': Section(
        name='W8X31', area=9.13, ix=110.0, iy=37.1, sx=27.5, sy=9.27,
        rx=3.47, ry=2.02, torsional_constant=0.536, warping_constant=530.0,
    ),
    'W6X25': Section(
        name='W6X25', area=7.34, ix=53.4, iy=17.1, sx=16.7, sy=5.61,
        rx=2.70, ry=1.52, torsional_constant=0.461, warping_constant=150.0,
    ),
    # HSS (Hollow Structural Sections)
    'HSS6X6X1/4': Section(
        name='HSS6X6X1/4', area=5.24, ix=28.6, iy=28.6, sx=9.54, sy=9.54,
        rx=2.34, ry=2.34, torsional_constant=45.6,
    ),
    'HSS4X4X1/4': Section(
        name='HSS4X4X1/4', area=3.37, ix=7.80, iy=7.80, sx=3.90, sy=3.90,
        rx=1.52, ry=1.52, torsional_constant=12.8,
    ),
    'HSS3X3X3/16': Section(
        name='HSS3X3X3/16', area=1.89, ix=2.46, iy=2.46, sx=1.64, sy=1.64,
        rx=1.14, ry=1.14, torsional_constant=4.03,
    ),
}


# ============================================================================
# MATERIAL DEFAULTS (ASTM A36 structural steel)
# ============================================================================

@dataclass(frozen=True)
class MaterialDefaults:
    """Values substituted for properties a material record does not provide."""
    elastic_modulus: float = 29_000_000.0   # psi
    shear_modulus: float = 12_000_000.0     # psi, used only when E is also missing
    shear_modulus_ratio: float = 2.4        # G = E / 2.4 when E is known
    yield_strength: float = 36_000.0        # psi
    ultimate_strength: float = 58_000.0     # psi
    density: float = 490.0                  # pcf
    thermal_expansion: float = 0.0000065    # in/in/°F


STRUCTURAL_STEEL_DEFAULTS = MaterialDefaults()


# ============================================================================
# DEAD LOAD WEIGHTS (psf of plan area)
# ============================================================================

GLAZING_WEIGHTS: Dict[str, float] = {
    'polycarbonate': 1.2,
    'tempered_glass': 6.0,
    'acrylic': 1.5,
    'polyethylene_film': 0.1,
}

# Used for glazing types missing from GLAZING_WEIGHTS
DEFAULT_GLAZING_WEIGHT = 2.0

# Typical light-gauge steel greenhouse frame
FRAME_WEIGHT_PSF = 3.0

# Hung equipment (benches, piping, fans) carried as permanent load
EQUIPMENT_WEIGHT_PSF = 2.0
