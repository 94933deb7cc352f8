# greenhouse_structural - Structural analysis for greenhouse frames
"""
GREENHOUSE STRUCTURAL: Code-based analysis of greenhouse frames
===============================================================

This package provides:
- Code-based load generation (dead, live, snow, wind, equipment)
- Member building from CAD frame components
- LRFD load combinations and closed-form member analysis
- Code compliance checks (deflection, strength, serviceability)
- Spread footing sizing and stability checks
- Optimization suggestions and an analysis report

ARCHITECTURE:
-------------
    model.py          Caller-facing inputs (pydantic models)
    config.py         EngineConfig: code tables and constants
    catalog.py        Steel section table and material defaults
    loads.py          Load generator
    members.py        Structural member builder
    combinations.py   LRFD load combination tables
    analysis.py       Member analysis core and global summary
    checks/           Code compliance checker
    foundation.py     Foundation analyzer
    advisor.py        Optimization advisor
    results.py        StructuralAnalysis aggregate
    report.py         Analysis report and DataFrame views
    fea.py            External FEA backend integration
    engine.py         StructuralAnalysisEngine (pipeline orchestration)
"""

from .engine import AnalysisEvent, AnalysisRun, StructuralAnalysisEngine
from .errors import (
    AnalysisFailed,
    ComputationDomainError,
    ExternalAnalysisFailure,
    MaterialNotFoundError,
    StructuralEngineError,
    UnsupportedModelConfiguration,
)
from .config import EngineConfig
from .model import (
    AnalysisParameters,
    GreenhouseModel,
    MaterialDatabase,
    MaterialRecord,
    SiteParameters,
    SoilProperties,
)

__version__ = "0.1.0"
