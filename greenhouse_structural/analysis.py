# greenhouse_structural/analysis.py - Member forces, stresses and global summary
"""
MEMBER ANALYSIS CORE
====================

PURPOSE:
--------
For every member and every load combination this module evaluates the
closed-form beam response to the combination's factored uniform load, then
reduces across combinations to a per-member envelope and across members to
the global summary of the structure.

ENGINEERING MODEL:
------------------
Each member is idealized as a single span carrying a uniform line load

    w = Σ_k factor_k · q_k · b_trib          (plf → lb/in)

where q_k is the area load of kind k (psf) and b_trib is the member's
tributary width (ft). For a simply supported span (pinned or roller ends):

    M = w·L²/8        V = w·L/2        Δ = 5·w·L⁴ / (384·E·I)

Other end conditions use the standard coefficients:

    fixed-fixed    M = wL²/12   V = wL/2    Δ = wL⁴/(384EI)
    fixed-pinned   M = wL²/8    V = 5wL/8   Δ = wL⁴/(185EI)
    cantilever     M = wL²/2    V = wL      Δ = wL⁴/(8EI)

Strength is checked as a stress ratio

    f_b = M / Sx,   F_allow = Fy / 1.67,   utilization = f_b / F_allow

Note the mixed basis: LRFD-factored demand against an ASD allowable. The
1.67 factor is EngineConfig.safety_factor (LEGACY_MIXED_SAFETY_FACTOR).

Note also the single load path: every member, whatever its MemberRole
(columns included), carries the same area pressure times its own tributary
width as one transverse UDL. Wind pressure is summed with the gravity terms
into that UDL rather than applied laterally, and |Σ| is used so uplift
loads the span like downward pressure. The role tag is reported, not used
in the analysis.

REDUCTION:
----------
Moment, shear, deflection and utilization are maximized independently
(elementwise max). The controlling load is the combination that produced
the maximum moment. Max and sum are associative and commutative, so the
order in which combinations or members are evaluated does not change the
result; members may be fanned out to worker threads.

UNITS:
------
Inputs: L in ft, w in plf, E in psi, I in in⁴, S in in³.
Internally L is converted to inches and w to lb/in, so M is lb-in, V is lb,
Δ is in, stresses are psi.
"""

import math
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, replace
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

import numpy as np
from loguru import logger

from .combinations import LoadCombination
from .config import EngineConfig
from .errors import ComputationDomainError
from .loads import LoadCondition
from .members import MemberResults, StructuralMember, fixity_pair
from .model import Fixity, LoadKind
from .results import GlobalResults, MemberResultRow


LOAD_KINDS: Tuple[LoadKind, ...] = tuple(LoadKind)


@dataclass(frozen=True)
class SpanCoefficients:
    """M = moment·wL², V = shear·wL, Δ = deflection·wL⁴/(EI)."""
    moment: float
    shear: float
    deflection: float


SIMPLY_SUPPORTED = SpanCoefficients(moment=1.0 / 8.0, shear=1.0 / 2.0, deflection=5.0 / 384.0)
FIXED_FIXED = SpanCoefficients(moment=1.0 / 12.0, shear=1.0 / 2.0, deflection=1.0 / 384.0)
PROPPED_CANTILEVER = SpanCoefficients(moment=1.0 / 8.0, shear=5.0 / 8.0, deflection=1.0 / 185.0)
CANTILEVER = SpanCoefficients(moment=1.0 / 2.0, shear=1.0, deflection=1.0 / 8.0)


@dataclass(frozen=True)
class CombinationResult:
    """Response of one member to one load combination."""
    combination: str
    line_load: float     # lb/in
    moment: float        # lb-in
    shear: float         # lb
    deflection: float    # in
    stress: float        # psi
    utilization: float


# ============================================================================
# ELEMENTARY FORMULAS
# ============================================================================

def span_coefficients(start: Fixity, end: Fixity) -> SpanCoefficients:
    """
    Beam coefficients for a pair of end fixities.

    Rollers behave as pins for transverse load. Unstable pairs (a free end
    opposite anything but a fixed end) raise ComputationDomainError.
    """
    ends = {Fixity.PINNED if f == Fixity.ROLLER else f for f in (start, end)}

    if ends == {Fixity.PINNED}:
        return SIMPLY_SUPPORTED
    if ends == {Fixity.FIXED}:
        return FIXED_FIXED
    if ends == {Fixity.FIXED, Fixity.PINNED}:
        return PROPPED_CANTILEVER
    if ends == {Fixity.FIXED, Fixity.FREE}:
        return CANTILEVER

    raise ComputationDomainError(
        f"Unstable end conditions {start.value}/{end.value}",
        stage="member_analysis",
    )


def load_magnitudes(load_conditions: Sequence[LoadCondition]) -> Dict[LoadKind, float]:
    """Total characteristic area load per kind (psf)."""
    magnitudes: Dict[LoadKind, float] = {}
    for load in load_conditions:
        magnitudes[load.kind] = magnitudes.get(load.kind, 0.0) + load.magnitude
    return magnitudes


def buckling_capacity(member: StructuralMember, K: float = 1.0) -> float:
    """
    Euler buckling load (lb), informational.

        Pe = π² · E · I_min / (K·L)²      with L in inches
    """
    KL = K * member.length_in
    return math.pi ** 2 * member.material.elastic_modulus * member.section.i_min / KL ** 2


def natural_frequency(member: StructuralMember, gravity: float = 386.1) -> float:
    """
    First-mode bending frequency of the span under self weight (Hz), informational.

        f1 = (π / 2L²) · √(E·I·g / w)

    with w = A·ρ/1728 (lb/in) and g in in/s².
    """
    E = member.material.elastic_modulus
    I = member.section.ix
    w = member.section.area * member.material.density / 1728.0
    L = member.length_in
    return (math.pi / (2.0 * L ** 2)) * math.sqrt(E * I * gravity / w)


def member_weight(member: StructuralMember) -> float:
    """Σ A·L·ρ/1728 contribution of one member (lb)."""
    return member.weight


# ============================================================================
# VECTORIZED EVALUATION
# ============================================================================

def _factor_matrix(combinations: Sequence[LoadCombination]) -> np.ndarray:
    # rows: combinations, columns: LOAD_KINDS
    return np.array(
        [[c.factor(kind) for kind in LOAD_KINDS] for c in combinations],
        dtype=float,
    ).reshape(len(combinations), len(LOAD_KINDS))


def _evaluate(
    member: StructuralMember,
    combinations: Sequence[LoadCombination],
    magnitudes: Mapping[LoadKind, float],
    config: EngineConfig,
) -> Dict[str, np.ndarray]:
    """Evaluate every combination for one member at once."""
    q = np.array([magnitudes.get(kind, 0.0) for kind in LOAD_KINDS], dtype=float)
    coef = span_coefficients(*fixity_pair(member))

    w = np.abs(_factor_matrix(combinations) @ q) * member.tributary_width / 12.0  # lb/in
    L = member.length_in
    E = member.material.elastic_modulus
    I = member.section.ix
    Sx = member.section.sx

    moment = coef.moment * w * L ** 2
    shear = coef.shear * w * L
    deflection = coef.deflection * w * L ** 4 / (E * I)

    allowable_stress = member.material.yield_strength / config.safety_factor
    stress = moment / Sx
    utilization = stress / allowable_stress

    response = {
        'line_load': w,
        'moment': moment,
        'shear': shear,
        'deflection': deflection,
        'stress': stress,
        'utilization': utilization,
    }

    for name, values in response.items():
        bad = np.flatnonzero(~np.isfinite(values))
        if bad.size:
            raise ComputationDomainError(
                f"Non-finite {name} ({values[bad[0]]})",
                stage="member_analysis",
                member_id=member.id,
                combination=combinations[bad[0]].name,
            )
    return response


def evaluate_combination(
    member: StructuralMember,
    combination: LoadCombination,
    magnitudes: Mapping[LoadKind, float],
    config: Optional[EngineConfig] = None,
) -> CombinationResult:
    """Response of one member to a single load combination."""
    if config is None:
        config = EngineConfig()

    r = _evaluate(member, [combination], magnitudes, config)
    return CombinationResult(
        combination=combination.name,
        line_load=float(r['line_load'][0]),
        moment=float(r['moment'][0]),
        shear=float(r['shear'][0]),
        deflection=float(r['deflection'][0]),
        stress=float(r['stress'][0]),
        utilization=float(r['utilization'][0]),
    )


def analyze_member(
    member: StructuralMember,
    combinations: Sequence[LoadCombination],
    load_conditions: Sequence[LoadCondition],
    config: Optional[EngineConfig] = None,
) -> Tuple[StructuralMember, MemberResultRow]:
    """
    Envelope one member over all combinations.

    Returns:
    --------
    (member, row)
        member : copy of the member with `results` attached
        row    : compact summary with the controlling load combination
    """
    if config is None:
        config = EngineConfig()
    if not combinations:
        raise ComputationDomainError(
            "No load combinations to evaluate", stage="member_analysis", member_id=member.id,
        )

    r = _evaluate(member, combinations, load_magnitudes(load_conditions), config)

    max_moment = float(np.max(r['moment']))
    controlling = combinations[int(np.argmax(r['moment']))].name
    max_shear = float(np.max(r['shear']))
    max_deflection = float(np.max(r['deflection']))
    utilization = float(np.max(r['utilization']))

    results = MemberResults(
        max_moment=max_moment,
        max_shear=max_shear,
        max_deflection=max_deflection,
        max_stress=max_moment / member.section.sx,
        utilization=utilization,
        buckling_capacity=buckling_capacity(member, config.effective_length_factor),
        vibration_frequency=natural_frequency(member, config.gravity),
    )
    row = MemberResultRow(
        member_id=member.id,
        max_moment=max_moment,
        max_shear=max_shear,
        max_deflection=max_deflection,
        utilization=utilization,
        controlling_load=controlling,
    )
    return replace(member, results=results), row


def analyze_members(
    members: Sequence[StructuralMember],
    combinations: Sequence[LoadCombination],
    load_conditions: Sequence[LoadCondition],
    building_height: float,
    config: Optional[EngineConfig] = None,
) -> Tuple[List[StructuralMember], GlobalResults]:
    """
    Analyze all members and build the global summary.

    Parameters:
    -----------
    members : Sequence[StructuralMember]
        Members from the member builder
    combinations : Sequence[LoadCombination]
        Factored combinations to envelope
    load_conditions : Sequence[LoadCondition]
        Characteristic loads from the load generator
    building_height : float
        Structure height (ft) for the fundamental period estimate
    config : EngineConfig, optional
        max_workers > 1 evaluates members on a thread pool

    Returns:
    --------
    (members, results)
        members with results attached (input order preserved) and the
        GlobalResults summary
    """
    if config is None:
        config = EngineConfig()

    def run(member: StructuralMember) -> Tuple[StructuralMember, MemberResultRow]:
        return analyze_member(member, combinations, load_conditions, config)

    if config.max_workers > 1 and len(members) > 1:
        with ThreadPoolExecutor(max_workers=config.max_workers) as pool:
            outcomes = list(pool.map(run, members))
    else:
        outcomes = [run(m) for m in members]

    results = GlobalResults()
    analyzed: List[StructuralMember] = []
    for member, row in outcomes:
        analyzed.append(member)
        results.member_results.append(row)
        results.max_deflection = max(results.max_deflection, row.max_deflection)
        results.max_stress = max(results.max_stress, member.results.max_stress)
        results.max_utilization = max(results.max_utilization, row.utilization)
        results.total_weight += member_weight(member)

    # Simplified global quantities
    results.fundamental_period = 0.1 * math.sqrt(building_height)
    results.base_shear = results.total_weight * config.seismic_coefficient
    results.overturning_moment = results.base_shear * config.overturning_height_ft

    logger.info(
        "Analyzed {} members x {} combinations: max utilization {:.3f}, total weight {:.0f} lb",
        len(analyzed), len(combinations), results.max_utilization, results.total_weight,
    )
    return analyzed, results
