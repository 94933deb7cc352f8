# greenhouse_structural/fea.py
"""
External FEA integration.

An advanced finite element backend may stand in for the closed-form member
analysis. The engine treats it as an opaque asynchronous call: invoked once
per request, awaited with a timeout, never retried. Any backend error or a
timeout becomes ExternalAnalysisFailure and the run stops there, as does a
result carrying NaN or inf.
"""

import asyncio
import math
from dataclasses import fields
from typing import Optional, Protocol, Sequence, runtime_checkable

from loguru import logger

from .errors import ExternalAnalysisFailure
from .loads import LoadCondition
from .model import GreenhouseModel
from .results import StructuralAnalysis


@runtime_checkable
class FEABackend(Protocol):
    """Anything with an async perform_structural_analysis coroutine."""

    async def perform_structural_analysis(
        self,
        model: GreenhouseModel,
        load_conditions: Sequence[LoadCondition],
        analysis_type: str,
    ) -> StructuralAnalysis:
        ...


async def run_fea_analysis(
    backend: FEABackend,
    model: GreenhouseModel,
    load_conditions: Sequence[LoadCondition],
    analysis_type: str = 'linear',
    timeout: Optional[float] = None,
) -> StructuralAnalysis:
    """
    Await the backend once.

    Raises:
        ExternalAnalysisFailure: backend raised, timed out, returned something
            other than a StructuralAnalysis, or returned non-finite results
    """
    logger.info("Starting FEA analysis of model {} ({})", model.id, analysis_type)
    try:
        analysis = await asyncio.wait_for(
            backend.perform_structural_analysis(model, list(load_conditions), analysis_type),
            timeout=timeout,
        )
    except asyncio.TimeoutError as e:
        logger.error("FEA analysis of model {} timed out after {}s", model.id, timeout)
        raise ExternalAnalysisFailure(
            f"FEA backend timed out after {timeout}s", stage="fea",
        ) from e
    except asyncio.CancelledError:
        raise
    except Exception as e:
        logger.error("FEA analysis of model {} failed: {}", model.id, e)
        raise ExternalAnalysisFailure(f"FEA backend failed: {e}", stage="fea") from e

    if not isinstance(analysis, StructuralAnalysis):
        raise ExternalAnalysisFailure(
            f"FEA backend returned {type(analysis).__name__}, expected StructuralAnalysis",
            stage="fea",
        )
    _check_finite(analysis)
    return analysis


def _check_finite(analysis: StructuralAnalysis) -> None:
    """Reject backend results carrying NaN or inf before any check consumes them."""
    for member in analysis.members:
        if member.results is None:
            continue
        for f in fields(member.results):
            value = getattr(member.results, f.name)
            if not math.isfinite(value):
                raise ExternalAnalysisFailure(
                    f"FEA backend returned non-finite {f.name} ({value})",
                    stage="fea",
                    member_id=member.id,
                )

    for f in fields(analysis.results):
        value = getattr(analysis.results, f.name)
        if isinstance(value, float) and not math.isfinite(value):
            raise ExternalAnalysisFailure(
                f"FEA backend returned non-finite {f.name} ({value})", stage="fea",
            )

    for row in analysis.results.member_results:
        for name in ('max_moment', 'max_shear', 'max_deflection', 'utilization'):
            value = getattr(row, name)
            if not math.isfinite(value):
                raise ExternalAnalysisFailure(
                    f"FEA backend returned non-finite {name} ({value})",
                    stage="fea",
                    member_id=row.member_id,
                )
