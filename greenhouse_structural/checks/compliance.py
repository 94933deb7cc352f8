# greenhouse_structural/checks/compliance.py
"""
Code compliance checks on analyzed members.

Three independent gates, each starting True and flipped by the first
violation in its category:

    deflection      Δmax > L/limit                 → error
    strength        utilization > 1.0              → error, critical above 1.2
    serviceability  f1 < vibration limit           → warning

`overall` is deflection AND strength. A serviceability violation is listed
and flips `serviceability`, but it is advisory and leaves `overall`
untouched.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Sequence

from loguru import logger

from ..members import StructuralMember
from ..model import ServiceabilityLimits


RECOMMENDATIONS = {
    'deflection': 'Increase member size or add intermediate supports',
    'strength': 'Increase member size or reduce loads',
    'serviceability': 'Increase member stiffness or add bracing',
}

CRITICAL_UTILIZATION = 1.2


@dataclass(frozen=True)
class Violation:
    type: str           # strength | deflection | serviceability | stability
    member: str
    description: str
    severity: str       # warning | error | critical
    recommendation: str


@dataclass(frozen=True)
class CheckRecord:
    """One code check on one member."""
    name: str
    value: float
    limit: float
    ratio: float
    passed: bool


@dataclass
class CodeCompliance:
    """
    Compliance verdict for an analysis.

    NOTE: `overall` ignores `serviceability`. Vibration is
    reported as a warning only.
    """
    overall: bool = True
    deflection: bool = True
    strength: bool = True
    serviceability: bool = True
    violations: List[Violation] = field(default_factory=list)
    member_checks: Dict[str, List[CheckRecord]] = field(default_factory=dict)

    def violations_for(self, member_id: str) -> List[Violation]:
        return [v for v in self.violations if v.member == member_id]


def _ratio(value: float, limit: float) -> float:
    return value / limit if limit > 0 else 0.0


def check_code_compliance(
    members: Sequence[StructuralMember],
    limits: ServiceabilityLimits,
) -> CodeCompliance:
    """
    Evaluate deflection, strength and serviceability gates.

    Args:
        members: Members with results attached; members without results are skipped
        limits: Deflection span ratio and minimum vibration frequency

    Returns:
        CodeCompliance with flags, violations and per-member check records
    """
    compliance = CodeCompliance()
    analyzed = [m for m in members if m.results is not None]

    deflection_limit = limits.deflection_limit
    for member in analyzed:
        allowable = member.length * 12.0 / deflection_limit  # ft -> in
        actual = member.results.max_deflection
        passed = actual <= allowable
        compliance.member_checks.setdefault(member.id, []).append(
            CheckRecord('deflection', actual, allowable, _ratio(actual, allowable), passed)
        )
        if not passed:
            compliance.deflection = False
            compliance.violations.append(Violation(
                type='deflection',
                member=member.id,
                description=(
                    f"Deflection {actual:.3f} in exceeds L/{deflection_limit:g} limit"
                    f" of {allowable:.3f} in"
                ),
                severity='error',
                recommendation=RECOMMENDATIONS['deflection'],
            ))

    for member in analyzed:
        utilization = member.results.utilization
        passed = utilization <= 1.0
        compliance.member_checks.setdefault(member.id, []).append(
            CheckRecord('strength', utilization, 1.0, utilization, passed)
        )
        if not passed:
            compliance.strength = False
            compliance.violations.append(Violation(
                type='strength',
                member=member.id,
                description=f"Member utilization ratio {utilization:.2f} exceeds 1.0",
                severity='critical' if utilization > CRITICAL_UTILIZATION else 'error',
                recommendation=RECOMMENDATIONS['strength'],
            ))

    vibration_limit = limits.vibration_limit
    for member in analyzed:
        frequency = member.results.vibration_frequency
        passed = frequency >= vibration_limit
        compliance.member_checks.setdefault(member.id, []).append(
            # Frequency is a minimum, so the ratio is limit / actual
            CheckRecord('vibration', frequency, vibration_limit, _ratio(vibration_limit, frequency), passed)
        )
        if not passed:
            compliance.serviceability = False
            compliance.violations.append(Violation(
                type='serviceability',
                member=member.id,
                description=f"Vibration frequency {frequency:.1f} Hz below {vibration_limit:g} Hz limit",
                severity='warning',
                recommendation=RECOMMENDATIONS['serviceability'],
            ))

    compliance.overall = compliance.deflection and compliance.strength

    logger.info(
        "Code compliance: overall={} deflection={} strength={} serviceability={} ({} violations)",
        compliance.overall, compliance.deflection, compliance.strength,
        compliance.serviceability, len(compliance.violations),
    )
    return compliance
