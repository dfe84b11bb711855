"""Security scoring and verdicts.

The score starts at 100 and every finding subtracts a penalty chosen by the
detector that produced it:

    critical_pattern  severity-weighted (critical 30, high 20, medium 10, low 5)
    language          5
    obfuscation       15
    path              10
    privilege         25
    size              10

Penalties are summed without per-category caps. Detectors run
independently, so the same text can be penalized by several of them (e.g.
`exec(` in a Python script costs both a code_execution and a
python_security penalty). The total is clamped to [0, 100].

The verdict thresholds below are fixed policy, not per-call options.
"""

from collections.abc import Iterable

from scriptgate_core.types import Finding, FindingSource, Severity

MAX_SCORE = 100
MIN_SCORE = 0

SEVERITY_PENALTIES = {
    Severity.CRITICAL: 30,
    Severity.HIGH: 20,
    Severity.MEDIUM: 10,
    Severity.LOW: 5,
}

FLAT_PENALTIES = {
    FindingSource.SIZE: 10,
    FindingSource.LANGUAGE: 5,
    FindingSource.OBFUSCATION: 15,
    FindingSource.PATH: 10,
    FindingSource.PRIVILEGE: 25,
}

VALID_MIN_SCORE = 30
SECURE_MIN_SCORE = 60
SECURE_MAX_HIGH_FINDINGS = 2


def penalty_for(finding: Finding) -> int:
    """Return the score deduction for a single finding."""
    if finding.source == FindingSource.CRITICAL_PATTERN:
        return SEVERITY_PENALTIES[finding.severity]
    return FLAT_PENALTIES.get(finding.source, 0)


def compute_security_score(findings: Iterable[Finding]) -> int:
    """
    Compute the clamped 0-100 security score for a set of findings.

    Args:
        findings: Findings from all detectors

    Returns:
        Score in [0, 100], higher is safer
    """
    score = MAX_SCORE - sum(penalty_for(f) for f in findings)
    return max(MIN_SCORE, min(MAX_SCORE, score))


def count_by_severity(findings: Iterable[Finding], severity: Severity) -> int:
    """Count findings with the given severity."""
    return sum(1 for f in findings if f.severity == severity)


def is_valid_verdict(critical_count: int, score: int) -> bool:
    """A script is valid with no critical findings and score >= 30."""
    return critical_count == 0 and score >= VALID_MIN_SCORE


def is_secure_verdict(critical_count: int, high_count: int, score: int) -> bool:
    """
    Informational "secure" verdict.

    Looser than the execution gate: allows up to two high findings and a
    score of 60. Use scriptgate_core.scripts.gate to authorize a run.
    """
    return (
        critical_count == 0
        and high_count <= SECURE_MAX_HIGH_FINDINGS
        and score >= SECURE_MIN_SCORE
    )
