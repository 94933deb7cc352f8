# greenhouse_structural/results.py
"""Aggregate analysis records shared by the pipeline stages and the FEA backend."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List, Optional

from .advisor import Optimization
from .checks.compliance import CodeCompliance
from .combinations import LoadCombination
from .loads import LoadCondition
from .members import BuildDiagnostic, StructuralMember
from .model import AnalysisParameters


@dataclass(frozen=True)
class MemberResultRow:
    """Compact per-member summary (lb-in, lb, in)."""
    member_id: str
    max_moment: float
    max_shear: float
    max_deflection: float
    utilization: float
    controlling_load: str


@dataclass(frozen=True)
class ConnectionResult:
    """Connection forces; produced only by FEA backends that model connections."""
    connection_id: str
    tension: float
    compression: float
    shear: float
    utilization: float
    capacity: float


@dataclass
class GlobalResults:
    max_deflection: float = 0.0      # in
    max_stress: float = 0.0          # psi
    max_utilization: float = 0.0
    total_weight: float = 0.0        # lb
    fundamental_period: float = 0.0  # s
    base_shear: float = 0.0          # lb
    overturning_moment: float = 0.0  # ft-lb
    member_results: List[MemberResultRow] = field(default_factory=list)
    connection_results: List[ConnectionResult] = field(default_factory=list)


@dataclass
class StructuralAnalysis:
    """
    Aggregate root for one analysis run.

    Created fresh per invocation. Each pipeline stage writes its own field:
    load_conditions, members, load_combinations, results, code_compliance,
    optimization.
    """
    model_id: str
    parameters: Optional[AnalysisParameters] = None
    analysis_type: str = 'linear'
    building_code: str = 'LRFD'
    safety_method: str = 'LRFD'
    id: str = field(default_factory=lambda: f"analysis-{uuid.uuid4().hex[:12]}")
    load_conditions: List[LoadCondition] = field(default_factory=list)
    load_combinations: List[LoadCombination] = field(default_factory=list)
    members: List[StructuralMember] = field(default_factory=list)
    results: GlobalResults = field(default_factory=GlobalResults)
    code_compliance: CodeCompliance = field(default_factory=CodeCompliance)
    optimization: Optimization = field(default_factory=Optimization)
    diagnostics: List[BuildDiagnostic] = field(default_factory=list)
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def member(self, member_id: str) -> StructuralMember:
        for m in self.members:
            if m.id == member_id:
                return m
        raise KeyError(member_id)
