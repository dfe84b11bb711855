"""Obfuscation detection.

Flags encoded payloads and fragmented string literals that could be used to
slip past the literal patterns. Content is never decoded and re-scanned.
All checks run over the whole document and report no line number.
"""

from scriptgate_core.scripts.patterns import (
    BASE64_MIN_LENGTH,
    BASE64_PATTERN,
    CONCAT_MAX_OCCURRENCES,
    CONCAT_PATTERN,
    HEX_ESCAPE_PATTERN,
)
from scriptgate_core.types import Finding, FindingSource, Severity


def _has_long_base64_run(content: str) -> bool:
    return any(
        len(match.group(0)) >= BASE64_MIN_LENGTH
        for match in BASE64_PATTERN.finditer(content)
    )


def detect_obfuscation(content: str) -> list[Finding]:
    """
    Detect base64 blocks, hex escapes and excessive string concatenation.

    Args:
        content: Script content to scan

    Returns:
        At most one finding per check
    """
    findings: list[Finding] = []

    if _has_long_base64_run(content):
        findings.append(
            Finding(
                severity=Severity.HIGH,
                category="obfuscation",
                description="Detected potential base64 encoded content",
                suggestion="Avoid encoded content in scripts",
                source=FindingSource.OBFUSCATION,
            )
        )

    if HEX_ESCAPE_PATTERN.search(content):
        findings.append(
            Finding(
                severity=Severity.MEDIUM,
                category="obfuscation",
                description="Detected hex-encoded content",
                suggestion="Use plain text instead of encoded content",
                source=FindingSource.OBFUSCATION,
            )
        )

    if len(CONCAT_PATTERN.findall(content)) > CONCAT_MAX_OCCURRENCES:
        findings.append(
            Finding(
                severity=Severity.MEDIUM,
                category="obfuscation",
                description="Excessive string concatenation detected",
                suggestion="Use clear, readable string literals",
                source=FindingSource.OBFUSCATION,
            )
        )

    return findings
