"""Inline annotation of critical findings.

The annotated copy is for human review only. Dangerous lines are kept
verbatim beneath their warning; nothing is removed or neutralized, and the
output must never be executed in place of the original.
"""

from collections import defaultdict
from collections.abc import Iterable

from scriptgate_core.types import Finding, ScriptLanguage, Severity

COMMENT_PREFIXES = {
    ScriptLanguage.BATCH: "REM",
}
DEFAULT_COMMENT_PREFIX = "#"


def annotate_critical_lines(
    content: str,
    findings: Iterable[Finding],
    language: ScriptLanguage | str,
) -> str:
    """
    Insert a warning comment above every line with a critical finding.

    Findings without a line number are not annotated.

    Args:
        content: Original script content
        findings: Findings from validation
        language: Script language, selects the comment syntax

    Returns:
        Annotated copy of the content
    """
    prefix = COMMENT_PREFIXES.get(language, DEFAULT_COMMENT_PREFIX)
    warnings: dict[int, list[str]] = defaultdict(list)
    for finding in findings:
        if finding.severity == Severity.CRITICAL and finding.line:
            warnings[finding.line].append(finding.description)

    if not warnings:
        return content

    annotated: list[str] = []
    for line_no, line in enumerate(content.split("\n"), start=1):
        for description in warnings.get(line_no, ()):
            annotated.append(f"{prefix} SECURITY: {description}")
        annotated.append(line)
    return "\n".join(annotated)
