# greenhouse_structural/engine.py - Pipeline orchestration
"""
STRUCTURAL ANALYSIS ENGINE
==========================

Runs the whole pipeline for one greenhouse model:

    1. Validate      structure type and building code are supported
    2. Loads         dead, live, snow, wind, equipment       (loads.py)
    3. Members       frame components → members             (members.py)
    4. Combinations  LRFD table for the building code       (combinations.py)
    5. Analysis      per-member envelope + global summary    (analysis.py)
    6. Compliance    deflection / strength / serviceability  (checks/)
    7. Advisor       optimization suggestions                (advisor.py)
    8. Foundation    spread footing from the global summary  (foundation.py)
    9. Report        summary for drawings and documents      (report.py)

Every run creates a fresh StructuralAnalysis; nothing is shared between
runs except the read-only material database and EngineConfig.

Lifecycle events (started / completed / error) are delivered to the
optional `on_event` callback. A failing callback propagates like any other
error.

The advanced path replaces steps 3 to 5 with an external FEA backend.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from loguru import logger

from .advisor import generate_optimization_suggestions
from .analysis import analyze_members
from .checks import check_code_compliance
from .combinations import load_combination_table, mark_governing
from .config import EngineConfig
from .errors import UnsupportedModelConfiguration
from .fea import FEABackend, run_fea_analysis
from .foundation import FoundationAnalysis, analyze_foundation
from .loads import generate_load_conditions
from .logging_utils import get_run_logger
from .members import build_members
from .model import AnalysisParameters, GreenhouseModel, MaterialDatabase, SoilProperties
from .report import AnalysisReport, generate_report
from .results import StructuralAnalysis


@dataclass(frozen=True)
class AnalysisEvent:
    kind: str  # started | completed | error
    analysis_id: str
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass
class AnalysisRun:
    """Everything one call to the engine produces."""
    analysis: StructuralAnalysis
    report: AnalysisReport
    foundation: Optional[FoundationAnalysis] = None


class StructuralAnalysisEngine:
    """
    Entry point for structural analysis of a greenhouse model.

    Args:
        material_db: Read-only material lookup shared across runs
        config: Code tables and constants (defaults to EngineConfig())
        fea_backend: Backend for analyze_structure_advanced
        on_event: Called with an AnalysisEvent at each lifecycle boundary
    """

    def __init__(
        self,
        material_db: MaterialDatabase,
        config: Optional[EngineConfig] = None,
        fea_backend: Optional[FEABackend] = None,
        on_event: Optional[Callable[[AnalysisEvent], None]] = None,
    ):
        self.material_db = material_db
        self.config = config if config is not None else EngineConfig()
        self.fea_backend = fea_backend
        self.on_event = on_event

    def _emit(self, kind: str, analysis_id: str, **payload: Any) -> None:
        if self.on_event is not None:
            self.on_event(AnalysisEvent(kind, analysis_id, payload))

    def _validate_model(self, model: GreenhouseModel) -> None:
        if model.structure_type not in self.config.supported_structure_types:
            raise UnsupportedModelConfiguration(
                f"Unsupported structure type '{model.structure_type}'. "
                f"Supported: {list(self.config.supported_structure_types)}",
                stage="validation",
            )

    def analyze_structure(
        self,
        model: GreenhouseModel,
        parameters: AnalysisParameters,
        soil: Optional[SoilProperties] = None,
    ) -> AnalysisRun:
        """
        Run the closed-form pipeline.

        Raises:
            UnsupportedModelConfiguration: unknown structure type or building code,
                before any load is generated
            ComputationDomainError: a stage produced a non-finite result
        """
        config = self.config
        analysis = StructuralAnalysis(
            model_id=model.id,
            parameters=parameters,
            building_code=config.building_code,
        )
        log = get_run_logger(analysis.id, model.id)
        self._emit('started', analysis.id, model_id=model.id, analysis_type='linear')

        try:
            self._validate_model(model)
            combinations = load_combination_table(config.building_code, config.combination_tables)

            analysis.load_conditions = generate_load_conditions(model, parameters.location, config)
            log.debug("Generated {} load conditions", len(analysis.load_conditions))

            built = build_members(model, self.material_db, config)
            analysis.diagnostics = built.diagnostics

            analysis.members, analysis.results = analyze_members(
                built.members,
                combinations,
                analysis.load_conditions,
                building_height=model.dimensions.height,
                config=config,
            )
            analysis.load_combinations = mark_governing(
                combinations,
                (row.controlling_load for row in analysis.results.member_results),
            )

            analysis.code_compliance = check_code_compliance(analysis.members, parameters.serviceability)
            analysis.optimization = generate_optimization_suggestions(analysis.members)

            foundation = None
            if analysis.results.total_weight > 0:
                foundation = analyze_foundation(analysis.results, soil, analysis_id=analysis.id)
            else:
                log.warning("No members were analyzed; foundation not sized")

            report = generate_report(analysis)
        except Exception as e:
            log.error("Analysis failed: {}", e)
            self._emit('error', analysis.id, error=str(e), error_type=type(e).__name__)
            raise

        log.info(
            "Analysis complete: {} members, max utilization {:.3f}, compliant={}",
            len(analysis.members), analysis.results.max_utilization, analysis.code_compliance.overall,
        )
        self._emit('completed', analysis.id, overall=analysis.code_compliance.overall)
        return AnalysisRun(analysis=analysis, report=report, foundation=foundation)

    async def analyze_structure_advanced(
        self,
        model: GreenhouseModel,
        parameters: AnalysisParameters,
        analysis_type: str = 'linear',
    ) -> AnalysisRun:
        """
        Run the FEA-backed pipeline.

        Loads are generated here and handed to the backend, which returns the
        analyzed StructuralAnalysis. Compliance, advisor and report run on
        that result. When the backend fails no compliance result is produced.

        Raises:
            UnsupportedModelConfiguration: unknown structure type, or no backend configured
            AnalysisFailed: backend error or timeout
        """
        if self.fea_backend is None:
            raise UnsupportedModelConfiguration("No FEA backend configured", stage="fea")

        # Provisional id for events raised before the backend returns its own analysis
        run_id = StructuralAnalysis(model_id=model.id).id
        log = get_run_logger(run_id, model.id)
        self._emit('started', run_id, model_id=model.id, analysis_type=analysis_type)

        try:
            self._validate_model(model)
            load_conditions = generate_load_conditions(model, parameters.location, self.config)

            analysis = await run_fea_analysis(
                self.fea_backend,
                model,
                load_conditions,
                analysis_type,
                timeout=self.config.fea_timeout_s,
            )
            if analysis.parameters is None:
                analysis.parameters = parameters
            if not analysis.load_conditions:
                analysis.load_conditions = load_conditions

            analysis.code_compliance = check_code_compliance(analysis.members, parameters.serviceability)
            analysis.optimization = generate_optimization_suggestions(analysis.members)
            report = generate_report(analysis)
        except Exception as e:
            log.error("Advanced analysis failed: {}", e)
            self._emit('error', run_id, error=str(e), error_type=type(e).__name__)
            raise

        log.info("Advanced analysis {} complete: compliant={}", analysis.id, analysis.code_compliance.overall)
        self._emit('completed', run_id, overall=analysis.code_compliance.overall)
        return AnalysisRun(analysis=analysis, report=report)
