"""Execution gate (final authorization before a script run).

The gate is deliberately stricter than ValidationResult.is_secure: a script
can be reported as secure in the UI and still be refused at dispatch time.
Dispatchers must treat is_safe_for_execution as the only execution signal.
"""

from scriptgate_core.scripts.scoring import count_by_severity
from scriptgate_core.types import Severity, ValidationResult

GATE_MIN_SCORE = 70
GATE_MAX_HIGH_FINDINGS = 1


def is_safe_for_execution(result: ValidationResult) -> bool:
    """
    Decide whether a validated script may be executed.

    Requires zero critical findings, at most one high finding, a score of
    at least 70, and a valid result.

    Args:
        result: Output of ScriptValidator.validate

    Returns:
        True to permit the run, False to deny it
    """
    critical = count_by_severity(result.findings, Severity.CRITICAL)
    high = count_by_severity(result.findings, Severity.HIGH)
    return (
        critical == 0
        and high <= GATE_MAX_HIGH_FINDINGS
        and result.security_score >= GATE_MIN_SCORE
        and result.is_valid
    )
