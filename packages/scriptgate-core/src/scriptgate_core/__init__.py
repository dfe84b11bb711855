"""Scriptgate - static risk analysis and execution gating for automation scripts."""

from scriptgate_core.types import (
    Finding,
    FindingSource,
    ScriptLanguage,
    ScriptMetadata,
    Severity,
    Signature,
    ValidationResult,
)

__all__ = [
    "Finding",
    "FindingSource",
    "ScriptLanguage",
    "ScriptMetadata",
    "Severity",
    "Signature",
    "ValidationResult",
]

__version__ = "0.1.0"
