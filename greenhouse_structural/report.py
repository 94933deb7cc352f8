# greenhouse_structural/report.py
"""
Analysis report and tabular views.

The report condenses a StructuralAnalysis into what the drawing and
document generators consume: a summary with the critical member, the
compliance verdict with violations mapped to code sections, and the
optimization recommendations. The DataFrame helpers give the member and
violation tables in a form that is easy to export or plot.
"""

from dataclasses import dataclass, field
from typing import List, Optional

import pandas as pd

from .results import StructuralAnalysis


@dataclass(frozen=True)
class ReportSummary:
    max_displacement: float
    max_stress: float
    max_utilization: float
    critical_member: str
    controlling_load: str
    safety_factor: Optional[float]  # None when nothing is loaded


@dataclass(frozen=True)
class ReportViolation:
    code: str
    section: str
    description: str
    severity: str  # critical | warning
    recommendation: str


@dataclass(frozen=True)
class ReportRecommendation:
    member: str
    description: str
    weight_savings: float
    cost_savings: float


@dataclass
class AnalysisReport:
    summary: ReportSummary
    overall_compliance: bool
    violations: List[ReportViolation] = field(default_factory=list)
    over_designed_members: List[str] = field(default_factory=list)
    under_designed_members: List[str] = field(default_factory=list)
    recommendations: List[ReportRecommendation] = field(default_factory=list)


def generate_report(analysis: StructuralAnalysis, code: str = 'IBC', section: str = '1605') -> AnalysisReport:
    """Build the report for a completed analysis."""
    results = analysis.results

    critical = max(results.member_results, key=lambda r: r.utilization, default=None)
    safety_factor = 1.0 / results.max_utilization if results.max_utilization > 0 else None

    summary = ReportSummary(
        max_displacement=results.max_deflection,
        max_stress=results.max_stress,
        max_utilization=results.max_utilization,
        critical_member=critical.member_id if critical else '',
        controlling_load=critical.controlling_load if critical else '',
        safety_factor=safety_factor,
    )

    violations = [
        ReportViolation(
            code=code,
            section=section,
            description=v.description,
            severity='critical' if v.severity == 'critical' else 'warning',
            recommendation=v.recommendation,
        )
        for v in analysis.code_compliance.violations
    ]

    recommendations = [
        ReportRecommendation(
            member=s.member,
            description=s.description,
            weight_savings=s.weight_reduction,
            cost_savings=s.potential_savings,
        )
        for s in analysis.optimization.suggestions
    ]

    return AnalysisReport(
        summary=summary,
        overall_compliance=analysis.code_compliance.overall,
        violations=violations,
        over_designed_members=[s.member for s in analysis.optimization.suggestions if s.type == 'section'],
        under_designed_members=sorted({
            v.member for v in analysis.code_compliance.violations if v.type == 'strength'
        }),
        recommendations=recommendations,
    )


MEMBER_COLUMNS = [
    'member_id', 'role', 'length_ft', 'section', 'max_moment', 'max_shear',
    'max_deflection', 'max_stress', 'utilization', 'controlling_load',
    'buckling_capacity', 'vibration_frequency', 'weight',
]


def member_results_frame(analysis: StructuralAnalysis) -> pd.DataFrame:
    """One row per analyzed member."""
    rows_by_id = {r.member_id: r for r in analysis.results.member_results}
    records = []
    for member in analysis.members:
        row = rows_by_id.get(member.id)
        res = member.results
        records.append({
            'member_id': member.id,
            'role': member.role.value,
            'length_ft': member.length,
            'section': member.section.name,
            'max_moment': row.max_moment if row else float('nan'),
            'max_shear': row.max_shear if row else float('nan'),
            'max_deflection': row.max_deflection if row else float('nan'),
            'max_stress': res.max_stress if res else float('nan'),
            'utilization': row.utilization if row else float('nan'),
            'controlling_load': row.controlling_load if row else '',
            'buckling_capacity': res.buckling_capacity if res else float('nan'),
            'vibration_frequency': res.vibration_frequency if res else float('nan'),
            'weight': member.weight,
        })
    return pd.DataFrame(records, columns=MEMBER_COLUMNS)


def violations_frame(analysis: StructuralAnalysis) -> pd.DataFrame:
    """One row per code violation."""
    columns = ['type', 'member', 'description', 'severity', 'recommendation']
    return pd.DataFrame(
        [{c: getattr(v, c) for c in columns} for v in analysis.code_compliance.violations],
        columns=columns,
    )
