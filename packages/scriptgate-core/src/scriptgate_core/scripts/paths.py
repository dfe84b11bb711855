"""Path traversal, sensitive file and privilege escalation detection.

Each pattern is tested once against the whole document; a hit yields one
finding without a line number. Traversal and sensitive-file checks are
independent, so `cat ../../etc/passwd` is reported by both.

Privilege escalation is the one check that depends on caller context: when
the caller has explicitly allowed elevation, escalation idioms are not
reported at all.
"""

import logging

from scriptgate_core.scripts.patterns import (
    ESCALATION_PATTERNS,
    SENSITIVE_FILE_PATTERNS,
    TRAVERSAL_PATTERNS,
)
from scriptgate_core.types import Finding, FindingSource, Severity

logger = logging.getLogger(__name__)


def detect_path_risks(content: str) -> list[Finding]:
    """
    Detect path traversal sequences and sensitive file references.

    Args:
        content: Script content to scan

    Returns:
        One high path_traversal finding per matching traversal pattern,
        then one critical sensitive_file_access finding per matching path
    """
    findings: list[Finding] = []

    for pattern, _desc in TRAVERSAL_PATTERNS:
        if pattern.search(content):
            findings.append(
                Finding(
                    severity=Severity.HIGH,
                    category="path_traversal",
                    description="Detected potential path traversal pattern",
                    suggestion="Use absolute paths or validate path inputs",
                    source=FindingSource.PATH,
                )
            )

    for pattern, _desc in SENSITIVE_FILE_PATTERNS:
        if pattern.search(content):
            findings.append(
                Finding(
                    severity=Severity.CRITICAL,
                    category="sensitive_file_access",
                    description="Detected access to sensitive system files",
                    suggestion="Avoid accessing sensitive system files",
                    source=FindingSource.PATH,
                )
            )

    return findings


def detect_privilege_escalation(content: str, elevation_allowed: bool) -> list[Finding]:
    """
    Detect privilege escalation idioms.

    Args:
        content: Script content to scan
        elevation_allowed: Caller has authorized elevated execution

    Returns:
        One critical finding per matching idiom, or an empty list when
        elevation is allowed
    """
    if elevation_allowed:
        logger.debug("Elevation allowed by caller, skipping privilege escalation scan")
        return []

    findings: list[Finding] = []
    for pattern, _desc in ESCALATION_PATTERNS:
        if pattern.search(content):
            findings.append(
                Finding(
                    severity=Severity.CRITICAL,
                    category="privilege_escalation",
                    description="Detected privilege escalation attempt",
                    suggestion="Use service accounts with minimal required privileges",
                    source=FindingSource.PRIVILEGE,
                )
            )

    return findings
