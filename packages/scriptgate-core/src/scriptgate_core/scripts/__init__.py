"""Script validation and execution gating for scriptgate.

This module provides lexical security analysis for automation scripts
(bash, PowerShell, Python, Ansible, batch) before they are dispatched to an
external runner. Validation covers dangerous pattern detection, obfuscation,
path traversal, privilege escalation, composite scoring and a stricter
execution gate. Signatures attest content integrity independently of risk.

Public exports:
    ScriptValidator: Main validator class
    validate_script: Validate with a shared validator
    is_safe_for_execution: Execution gate decision
    generate_signature: Sign script content
    verify_signature: Verify script content against a signature
    generate_security_report: Render a plain-text report
    PATTERN_CATALOG_VERSION: Version of the pattern tables
"""

from scriptgate_core.scripts.gate import is_safe_for_execution
from scriptgate_core.scripts.patterns import PATTERN_CATALOG_VERSION
from scriptgate_core.scripts.report import generate_security_report
from scriptgate_core.scripts.signature import generate_signature, verify_signature
from scriptgate_core.scripts.validation import ScriptValidator, validate_script

__all__ = [
    "ScriptValidator",
    "validate_script",
    "is_safe_for_execution",
    "generate_signature",
    "verify_signature",
    "generate_security_report",
    "PATTERN_CATALOG_VERSION",
]
