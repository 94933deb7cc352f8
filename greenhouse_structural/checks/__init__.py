# greenhouse_structural/checks - Code compliance checks
"""Deflection, strength and serviceability checks on analyzed members."""

from .compliance import (
    CRITICAL_UTILIZATION,
    RECOMMENDATIONS,
    CheckRecord,
    CodeCompliance,
    Violation,
    check_code_compliance,
)

__all__ = [
    'CRITICAL_UTILIZATION',
    'RECOMMENDATIONS',
    'CheckRecord',
    'CodeCompliance',
    'Violation',
    'check_code_compliance',
]
