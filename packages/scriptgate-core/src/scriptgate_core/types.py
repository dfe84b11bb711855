"""
Core data types for script validation.

This module defines the structures produced by the validation pipeline:
- Severity: Ordinal risk level of a finding
- ScriptLanguage: Closed set of supported script languages
- FindingSource: Which detector produced a finding
- Finding: One detected issue
- ScriptMetadata: Descriptive statistics about a script
- ValidationResult: Aggregate verdict for one validation call
- Signature: Content-integrity hash for a script version

Per project patterns:
- Use str enum for JSON serialization compatibility
- Pydantic BaseModel for validation and serialization
- Models are frozen; every validation call builds fresh instances
"""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, computed_field


class Severity(str, Enum):
    """
    Ordinal risk level of a finding.

    Ordered low < medium < high < critical.
    """

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ScriptLanguage(str, Enum):
    """Script languages accepted by the validator."""

    BASH = "bash"
    POWERSHELL = "powershell"
    PYTHON = "python"
    ANSIBLE = "ansible"
    BATCH = "batch"


class FindingSource(str, Enum):
    """
    Detector that produced a finding.

    The scoring engine uses the source to choose between severity-weighted
    and flat penalties.
    """

    INPUT = "input"
    """Input checks (empty script)."""

    SIZE = "size"
    """Script size limit check."""

    CRITICAL_PATTERN = "critical_pattern"
    """Language-agnostic category patterns."""

    LANGUAGE = "language"
    """Language-specific patterns."""

    OBFUSCATION = "obfuscation"
    """Encoding and concatenation checks."""

    PATH = "path"
    """Path traversal and sensitive file checks."""

    PRIVILEGE = "privilege"
    """Privilege escalation checks."""

    INTERNAL = "internal"
    """Internal validation failure."""


class Finding(BaseModel):
    """
    One detected issue in a script.

    Attributes:
        severity: Risk level
        category: Tag such as critical_destructive or path_traversal
        description: Human-readable explanation including the matched text
        line: 1-based line number, None for whole-document checks
        suggestion: Remediation hint
        source: Detector that produced the finding
    """

    model_config = ConfigDict(frozen=True)

    severity: Severity = Field(..., description="Risk level")
    category: str = Field(..., description="Finding category tag")
    description: str = Field(..., description="What was detected")
    line: int | None = Field(default=None, description="1-based line number")
    suggestion: str | None = Field(default=None, description="Remediation hint")
    source: FindingSource = Field(..., description="Detector that produced the finding")


class ScriptMetadata(BaseModel):
    """
    Descriptive statistics about a script.

    Derived from keyword tests over the whole text, independent of the
    findings. Not a security verdict.
    """

    model_config = ConfigDict(frozen=True)

    lines_of_code: int = Field(default=0, description="Non-blank line count")
    complexity: int = Field(default=0, description="Control structures plus 2x function definitions")
    has_elevated_commands: bool = Field(default=False)
    has_network_access: bool = Field(default=False)
    has_file_system_access: bool = Field(default=False)
    has_dangerous_operations: bool = Field(default=False)


class ValidationResult(BaseModel):
    """
    Aggregate outcome of validating one script.

    Attributes:
        is_valid: No critical findings and score >= 30
        is_secure: No critical findings, at most 2 high, score >= 60
        security_score: 0-100, higher is safer
        findings: Findings in detection order
        sanitized_content: Script with critical lines annotated (None when
            analysis did not run)
        metadata: Descriptive statistics
    """

    model_config = ConfigDict(frozen=True)

    is_valid: bool
    is_secure: bool
    security_score: int = Field(..., ge=0, le=100)
    findings: tuple[Finding, ...] = Field(default=())
    sanitized_content: str | None = None
    metadata: ScriptMetadata = Field(default_factory=ScriptMetadata)

    @computed_field
    @property
    def critical_count(self) -> int:
        """Number of critical findings."""
        return sum(1 for f in self.findings if f.severity == Severity.CRITICAL)

    @computed_field
    @property
    def high_count(self) -> int:
        """Number of high findings."""
        return sum(1 for f in self.findings if f.severity == Severity.HIGH)


class Signature(BaseModel):
    """
    Content-integrity signature for a script.

    Attests that content is unaltered since signing, not that it is safe.
    The caller persists it alongside the script version.
    """

    model_config = ConfigDict(frozen=True)

    hash: str = Field(..., description="Hex digest of the script content")
    algorithm: str = Field(..., description="Digest algorithm identifier")
    timestamp: datetime = Field(..., description="When the signature was generated")
    signed_by: str = Field(..., description="Signer identity")
