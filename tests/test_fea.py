# File: tests/test_fea.py
"""
Test the FEA-backed analysis path with in-process fake backends.

Coroutines are driven with asyncio.run so no async test plugin is needed.
"""

import asyncio
from dataclasses import replace

import pytest

from greenhouse_structural import (
    AnalysisFailed,
    EngineConfig,
    ExternalAnalysisFailure,
    StructuralAnalysisEngine,
    UnsupportedModelConfiguration,
)
from greenhouse_structural.analysis import analyze_members
from greenhouse_structural.combinations import LRFD_COMBINATIONS
from greenhouse_structural.fea import FEABackend, run_fea_analysis
from greenhouse_structural.members import build_members
from greenhouse_structural.results import StructuralAnalysis


class ClosedFormBackend:
    """Stands in for a real FEA service by running the closed-form analysis."""

    def __init__(self, materials):
        self.materials = materials
        self.calls = []

    async def perform_structural_analysis(self, model, load_conditions, analysis_type):
        self.calls.append(analysis_type)
        await asyncio.sleep(0)
        members, results = analyze_members(
            build_members(model, self.materials).members,
            LRFD_COMBINATIONS,
            load_conditions,
            model.dimensions.height,
        )
        return StructuralAnalysis(
            model_id=model.id,
            analysis_type=analysis_type,
            members=members,
            results=results,
        )


class SlowBackend:
    async def perform_structural_analysis(self, model, load_conditions, analysis_type):
        await asyncio.sleep(10)


class BrokenBackend:
    def __init__(self):
        self.calls = 0

    async def perform_structural_analysis(self, model, load_conditions, analysis_type):
        self.calls += 1
        raise ConnectionError("solver unreachable")


class NaNBackend(ClosedFormBackend):
    """Returns the first member with NaN utilization and deflection."""

    async def perform_structural_analysis(self, model, load_conditions, analysis_type):
        analysis = await super().perform_structural_analysis(model, load_conditions, analysis_type)
        first = analysis.members[0]
        analysis.members[0] = replace(first, results=replace(
            first.results, utilization=float("nan"), max_deflection=float("nan"),
        ))
        return analysis


class WrongTypeBackend:
    async def perform_structural_analysis(self, model, load_conditions, analysis_type):
        return {"max_displacement": 0.1}


def test_backends_satisfy_protocol(materials):
    assert isinstance(ClosedFormBackend(materials), FEABackend)
    assert isinstance(SlowBackend(), FEABackend)


def test_advanced_analysis_runs_compliance_on_backend_result(greenhouse, parameters, materials):
    backend = ClosedFormBackend(materials)
    engine = StructuralAnalysisEngine(materials, fea_backend=backend)

    run = asyncio.run(engine.analyze_structure_advanced(greenhouse, parameters, 'nonlinear'))

    assert backend.calls == ['nonlinear']
    assert run.analysis.analysis_type == 'nonlinear'
    assert run.analysis.parameters == parameters
    assert len(run.analysis.load_conditions) == 5
    assert run.analysis.code_compliance.overall
    assert set(run.analysis.code_compliance.member_checks) == {m.id for m in run.analysis.members}
    assert run.report.summary.critical_member
    assert run.foundation is None


def test_advanced_matches_closed_form(greenhouse, parameters, materials):
    engine = StructuralAnalysisEngine(materials, fea_backend=ClosedFormBackend(materials))
    advanced = asyncio.run(engine.analyze_structure_advanced(greenhouse, parameters)).analysis
    closed = engine.analyze_structure(greenhouse, parameters).analysis

    assert advanced.results.max_utilization == pytest.approx(closed.results.max_utilization)
    assert advanced.code_compliance.overall == closed.code_compliance.overall


def test_timeout_raises_analysis_failed(greenhouse, parameters, materials):
    events = []
    engine = StructuralAnalysisEngine(
        materials,
        config=EngineConfig(fea_timeout_s=0.01),
        fea_backend=SlowBackend(),
        on_event=events.append,
    )

    with pytest.raises(AnalysisFailed, match="timed out"):
        asyncio.run(engine.analyze_structure_advanced(greenhouse, parameters))

    assert [e.kind for e in events] == ['started', 'error']


def test_backend_error_is_wrapped_and_not_retried(greenhouse, parameters, materials):
    backend = BrokenBackend()
    engine = StructuralAnalysisEngine(materials, fea_backend=backend)

    with pytest.raises(ExternalAnalysisFailure, match="solver unreachable") as excinfo:
        asyncio.run(engine.analyze_structure_advanced(greenhouse, parameters))

    assert backend.calls == 1
    assert isinstance(excinfo.value.__cause__, ConnectionError)
    assert excinfo.value.stage == 'fea'


def test_wrong_result_type_rejected(greenhouse, materials, site):
    with pytest.raises(ExternalAnalysisFailure, match="expected StructuralAnalysis"):
        asyncio.run(run_fea_analysis(WrongTypeBackend(), greenhouse, [], timeout=1.0))


def test_no_backend_configured(greenhouse, parameters, materials):
    engine = StructuralAnalysisEngine(materials)
    with pytest.raises(UnsupportedModelConfiguration, match="backend"):
        asyncio.run(engine.analyze_structure_advanced(greenhouse, parameters))


def test_non_finite_backend_results_fail_the_run(greenhouse, parameters, materials):
    events = []
    engine = StructuralAnalysisEngine(
        materials, fea_backend=NaNBackend(materials), on_event=events.append,
    )

    with pytest.raises(AnalysisFailed, match="non-finite") as excinfo:
        asyncio.run(engine.analyze_structure_advanced(greenhouse, parameters))

    assert excinfo.value.member_id == 'member-beam-1'
    assert excinfo.value.stage == 'fea'
    assert [e.kind for e in events] == ['started', 'error']


def test_non_finite_global_results_rejected(greenhouse, materials, site):
    class InfWeightBackend(ClosedFormBackend):
        async def perform_structural_analysis(self, model, load_conditions, analysis_type):
            analysis = await super().perform_structural_analysis(model, load_conditions, analysis_type)
            analysis.results.total_weight = float("inf")
            return analysis

    with pytest.raises(ExternalAnalysisFailure, match="total_weight"):
        asyncio.run(run_fea_analysis(InfWeightBackend(materials), greenhouse, [], timeout=5.0))
