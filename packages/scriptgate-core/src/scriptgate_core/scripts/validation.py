"""Multi-layer script validation for execution gating.

This module provides the ScriptValidator class which runs every detector
over a script and folds the findings into a single ValidationResult:
  1. Input check - empty scripts short-circuit to a zero score
  2. Size check - oversized scripts are flagged, not rejected
  3. Critical patterns - language-agnostic risk categories
  4. Language patterns - per-language dangerous constructs
  5. Obfuscation - encoded payloads and fragmented strings
  6. Paths - traversal sequences and sensitive files
  7. Privilege escalation - skipped when elevation is allowed

Unlike a fail-fast validator, all layers run and every finding is kept.
Any unexpected error fails closed: the script is reported invalid with a
zero score and is never approved by default.
"""

import logging

from scriptgate_core.scripts.metadata import generate_metadata
from scriptgate_core.scripts.obfuscation import detect_obfuscation
from scriptgate_core.scripts.paths import detect_path_risks, detect_privilege_escalation
from scriptgate_core.scripts.risk import analyze_critical_patterns, analyze_language_patterns
from scriptgate_core.scripts.sanitize import annotate_critical_lines
from scriptgate_core.scripts.scoring import (
    compute_security_score,
    count_by_severity,
    is_secure_verdict,
    is_valid_verdict,
)
from scriptgate_core.types import (
    Finding,
    FindingSource,
    ScriptLanguage,
    ScriptMetadata,
    Severity,
    ValidationResult,
)

logger = logging.getLogger(__name__)


class ScriptValidator:
    """
    Multi-layer validator for automation scripts.

    Holds no mutable state; one instance can serve concurrent callers.

    Example:
        validator = ScriptValidator()
        result = validator.validate("rm -rf /", ScriptLanguage.BASH)
        result.is_valid  # False
    """

    MAX_SIZE = 100_000  # Characters; larger scripts get a size_limit finding

    def validate(
        self,
        content: str,
        language: ScriptLanguage | str,
        elevation_allowed: bool = False,
    ) -> ValidationResult:
        """
        Validate a script through all layers.

        Args:
            content: Script source text
            language: Declared script language
            elevation_allowed: Caller has authorized elevated execution

        Returns:
            ValidationResult; never raises
        """
        if not content or not content.strip():
            return self._empty_result()

        try:
            return self._analyze(content, language, elevation_allowed)
        except Exception:
            logger.exception(f"Script validation failed for language '{language}', failing closed")
            return self._failed_result()

    def _analyze(
        self,
        content: str,
        language: ScriptLanguage | str,
        elevation_allowed: bool,
    ) -> ValidationResult:
        findings: list[Finding] = []

        if len(content) > self.MAX_SIZE:
            findings.append(
                Finding(
                    severity=Severity.MEDIUM,
                    category="size_limit",
                    description="Script exceeds maximum size limit",
                    suggestion="Consider breaking into smaller scripts",
                    source=FindingSource.SIZE,
                )
            )

        findings.extend(analyze_critical_patterns(content))
        findings.extend(analyze_language_patterns(content, language))
        findings.extend(detect_obfuscation(content))
        findings.extend(detect_path_risks(content))
        findings.extend(detect_privilege_escalation(content, elevation_allowed))

        metadata = generate_metadata(content)
        score = compute_security_score(findings)
        critical_count = count_by_severity(findings, Severity.CRITICAL)
        high_count = count_by_severity(findings, Severity.HIGH)
        is_valid = is_valid_verdict(critical_count, score)
        is_secure = is_secure_verdict(critical_count, high_count, score)

        logger.info(
            f"Script validation completed: language={language} score={score} "
            f"findings={len(findings)} secure={is_secure} valid={is_valid} "
            f"lines={metadata.lines_of_code}"
        )

        return ValidationResult(
            is_valid=is_valid,
            is_secure=is_secure,
            security_score=score,
            findings=tuple(findings),
            sanitized_content=annotate_critical_lines(content, findings, language),
            metadata=metadata,
        )

    def _empty_result(self) -> ValidationResult:
        return ValidationResult(
            is_valid=False,
            is_secure=False,
            security_score=0,
            findings=(
                Finding(
                    severity=Severity.CRITICAL,
                    category="empty_script",
                    description="Script content is empty",
                    source=FindingSource.INPUT,
                ),
            ),
            metadata=ScriptMetadata(),
        )

    def _failed_result(self) -> ValidationResult:
        return ValidationResult(
            is_valid=False,
            is_secure=False,
            security_score=0,
            findings=(
                Finding(
                    severity=Severity.CRITICAL,
                    category="validation_error",
                    description="Failed to validate script due to internal error",
                    source=FindingSource.INTERNAL,
                ),
            ),
            metadata=ScriptMetadata(),
        )


_default_validator = ScriptValidator()


def validate_script(
    content: str,
    language: ScriptLanguage | str,
    elevation_allowed: bool = False,
) -> ValidationResult:
    """Validate with a shared ScriptValidator instance."""
    return _default_validator.validate(content, language, elevation_allowed)
