"""Line-by-line risk analysis against the pattern catalog.

Two passes share the same loop shape: every pattern is tried against every
non-blank line and each match yields its own finding. Nothing is
deduplicated, so one line can produce several findings, even within a
single category.
"""

from scriptgate_core.scripts.patterns import (
    CATEGORY_SEVERITY,
    CATEGORY_SUGGESTIONS,
    CRITICAL_PATTERNS,
    DEFAULT_SUGGESTION,
    LANGUAGE_PATTERNS,
)
from scriptgate_core.types import Finding, FindingSource, ScriptLanguage, Severity

def _numbered_lines(content: str) -> list[tuple[int, str]]:
    """Return (1-based line number, line) pairs for non-blank lines."""
    return [
        (index, line)
        for index, line in enumerate(content.split("\n"), start=1)
        if line.strip()
    ]

def severity_for_category(category: str) -> Severity:
    """Map a critical-pattern category to its fixed severity."""
    return CATEGORY_SEVERITY.get(category, Severity.LOW)

def analyze_critical_patterns(content: str) -> list[Finding]:
    """
    Scan script content against the language-agnostic risk categories.

    Findings are ordered by category, then pattern, then line.

    Args:
        content: Script content to scan

    Returns:
        One finding per (pattern, matching line)
    """
    findings: list[Finding] = []
    lines = _numbered_lines(content)

    for category, patterns in CRITICAL_PATTERNS.items():
        severity = severity_for_category(category)
        suggestion = CATEGORY_SUGGESTIONS.get(category, DEFAULT_SUGGESTION)
        label = category.replace("_", " ")
        for pattern, _desc in patterns:
            for line_no, line in lines:
                match = pattern.search(line)
                if match:
                    findings.append(
                        Finding(
                            severity=severity,
                            category=f"critical_{category}",
                            description=f"Detected {label} operation: {match.group(0)}",
                            line=line_no,
                            suggestion=suggestion,
                            source=FindingSource.CRITICAL_PATTERN,
                        )
                    )

    return findings


def analyze_language_patterns(content: str, language: ScriptLanguage | str) -> list[Finding]:
    """
    Scan script content against the patterns for its declared language.

    A language without a pattern table yields no findings.

    Args:
        content: Script content to scan
        language: Declared script language

    Returns:
        One high-severity finding per (pattern, matching line)
    """
    patterns = LANGUAGE_PATTERNS.get(language)
    if not patterns:
        return []

    name = language.value if isinstance(language, ScriptLanguage) else language
    findings: list[Finding] = []
    lines = _numbered_lines(content)

    for pattern, _desc in patterns:
        for line_no, line in lines:
            match = pattern.search(line)
            if match:
                findings.append(
                    Finding(
                        severity=Severity.HIGH,
                        category=f"{name}_security",
                        description=f"Detected potentially dangerous {name} operation: {match.group(0)}",
                        line=line_no,
                        suggestion=f"Consider using safer alternatives for {name}",
                        source=FindingSource.LANGUAGE,
                    )
                )

    return findings
