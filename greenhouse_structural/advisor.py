# greenhouse_structural/advisor.py
"""
Optimization advisor.

A post-hoc scan of the analyzed members for savings opportunities. It never
feeds back into compliance and never fails a run:

- over-designed members (utilization < 0.6): downsize, 20 % of material
  cost and 15 % of weight
- heavy steel frames (> 1000 lb of steel): high-strength steel, 15 % weight
  at $2.50/lb
- long spans (> 30 ft): intermediate supports
"""

from dataclasses import dataclass, field
from typing import List, Sequence

from loguru import logger

from .members import StructuralMember


STEEL_PRICE_PER_LB = 2.50
OVER_DESIGN_UTILIZATION = 0.6
DOWNSIZE_COST_SAVINGS = 0.20
DOWNSIZE_WEIGHT_REDUCTION = 0.15
STEEL_WEIGHT_THRESHOLD_LB = 1000.0
HIGH_STRENGTH_WEIGHT_REDUCTION = 0.15
LONG_SPAN_FT = 30.0


@dataclass(frozen=True)
class Suggestion:
    type: str  # material | section | configuration | connection
    description: str
    potential_savings: float         # USD
    weight_reduction: float          # lb
    performance_improvement: float  # %
    member: str = ''


@dataclass
class Optimization:
    suggestions: List[Suggestion] = field(default_factory=list)

    @property
    def total_savings(self) -> float:
        return sum(s.potential_savings for s in self.suggestions)


def downsize_savings(member: StructuralMember) -> float:
    """Cost saved by downsizing: 20 % of the member's steel cost."""
    return member.weight * STEEL_PRICE_PER_LB * DOWNSIZE_COST_SAVINGS


def downsize_weight_reduction(member: StructuralMember) -> float:
    return member.weight * DOWNSIZE_WEIGHT_REDUCTION


def generate_optimization_suggestions(members: Sequence[StructuralMember]) -> Optimization:
    """Scan analyzed members and return advisory suggestions."""
    suggestions: List[Suggestion] = []

    for member in members:
        if member.results is not None and member.results.utilization < OVER_DESIGN_UTILIZATION:
            suggestions.append(Suggestion(
                type='section',
                description=(
                    f"Member {member.id} is over-designed"
                    f" (utilization {member.results.utilization * 100:.1f}%)"
                ),
                potential_savings=downsize_savings(member),
                weight_reduction=downsize_weight_reduction(member),
                performance_improvement=0.0,
                member=member.id,
            ))

    total_steel_weight = sum(m.weight for m in members if 'steel' in m.material.id.lower())
    if total_steel_weight > STEEL_WEIGHT_THRESHOLD_LB:
        reduction = total_steel_weight * HIGH_STRENGTH_WEIGHT_REDUCTION
        suggestions.append(Suggestion(
            type='material',
            description='Consider high-strength steel to reduce member sizes',
            potential_savings=reduction * STEEL_PRICE_PER_LB,
            weight_reduction=reduction,
            performance_improvement=20.0,
        ))

    max_span = max((m.length for m in members), default=0.0)
    if max_span > LONG_SPAN_FT:
        suggestions.append(Suggestion(
            type='configuration',
            description=f"Consider intermediate supports for spans over {LONG_SPAN_FT:g} feet",
            potential_savings=5000.0,
            weight_reduction=500.0,
            performance_improvement=30.0,
        ))

    logger.debug("Optimization advisor produced {} suggestions", len(suggestions))
    return Optimization(suggestions=suggestions)
