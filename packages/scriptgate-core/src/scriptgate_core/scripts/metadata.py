"""Descriptive script statistics.

Metadata is computed from keyword tests over the raw text and never from the
findings, so the capability flags can disagree with what the detectors
report. Consumers must not treat it as a security verdict.
"""

from scriptgate_core.scripts.patterns import (
    CAPABILITY_PATTERNS,
    CONTROL_STRUCTURE_PATTERNS,
    FUNCTION_DEFINITION_PATTERNS,
    FUNCTION_DEFINITION_WEIGHT,
)
from scriptgate_core.types import ScriptMetadata


def calculate_complexity(content: str) -> int:
    """Count control structures plus weighted function definitions."""
    complexity = 0
    for pattern in CONTROL_STRUCTURE_PATTERNS:
        complexity += len(pattern.findall(content))
    for pattern in FUNCTION_DEFINITION_PATTERNS:
        complexity += len(pattern.findall(content)) * FUNCTION_DEFINITION_WEIGHT
    return complexity


def generate_metadata(content: str) -> ScriptMetadata:
    """
    Derive line count, complexity and capability flags.

    Args:
        content: Script content

    Returns:
        ScriptMetadata for the content
    """
    lines_of_code = sum(1 for line in content.split("\n") if line.strip())
    flags = {
        name: pattern.search(content) is not None
        for name, pattern in CAPABILITY_PATTERNS.items()
    }
    return ScriptMetadata(
        lines_of_code=lines_of_code,
        complexity=calculate_complexity(content),
        **flags,
    )
