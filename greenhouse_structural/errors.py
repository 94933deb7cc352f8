# greenhouse_structural/errors.py
"""Error taxonomy for the structural analysis pipeline."""

from typing import Optional


class StructuralEngineError(RuntimeError):
    """
    Base class for engine errors.

    Carries enough context (stage, member id, combination name) to
    reproduce the failing evaluation.
    """

    def __init__(
        self,
        message: str,
        stage: Optional[str] = None,
        member_id: Optional[str] = None,
        combination: Optional[str] = None,
    ):
        self.stage = stage
        self.member_id = member_id
        self.combination = combination

        context = []
        if stage:
            context.append(f"stage={stage}")
        if member_id:
            context.append(f"member={member_id}")
        if combination:
            context.append(f"combination={combination}")

        if context:
            message = f"{message} [{', '.join(context)}]"
        super().__init__(message)


class MaterialNotFoundError(StructuralEngineError):
    """Raised when a component references a material id the database does not hold."""

    def __init__(self, material_id: str, component_id: Optional[str] = None):
        self.material_id = material_id
        self.component_id = component_id
        super().__init__(
            f"Material '{material_id}' not found"
            + (f" for component '{component_id}'" if component_id else ""),
            stage="member_builder",
        )


class UnsupportedModelConfiguration(StructuralEngineError):
    """Raised when the model cannot be analysed at all (unknown structure type, building code)."""
    pass


class ExternalAnalysisFailure(StructuralEngineError):
    """Raised when the external FEA backend errors or times out."""
    pass


# Name used by callers of the advanced (FEA-backed) analysis path
AnalysisFailed = ExternalAnalysisFailure


class ComputationDomainError(StructuralEngineError):
    """Raised for inputs or intermediate results outside the numeric domain (zero length, NaN, inf)."""
    pass
