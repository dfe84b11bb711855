"""Plain-text security report for operator review."""

from scriptgate_core.types import ValidationResult


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


def generate_security_report(result: ValidationResult) -> str:
    """
    Render a validation result as a human-readable report.

    Sections: header, score, validity/security status, metadata block and
    the enumerated findings in detection order.
    """
    metadata = result.metadata
    lines = [
        "Script Security Analysis Report",
        "=====================================",
        "",
        f"Security Score: {result.security_score}/100",
        f"Validation Status: {'VALID' if result.is_valid else 'INVALID'}",
        f"Security Status: {'SECURE' if result.is_secure else 'INSECURE'}",
        "",
        "Metadata:",
        f"- Lines of Code: {metadata.lines_of_code}",
        f"- Complexity Score: {metadata.complexity}",
        f"- Has Elevated Commands: {_yes_no(metadata.has_elevated_commands)}",
        f"- Has Network Access: {_yes_no(metadata.has_network_access)}",
        f"- Has File System Access: {_yes_no(metadata.has_file_system_access)}",
        f"- Has Dangerous Operations: {_yes_no(metadata.has_dangerous_operations)}",
        "",
    ]

    if not result.findings:
        lines.append("No security risks detected.")
        return "\n".join(lines) + "\n"

    lines.append(f"Security Risks ({len(result.findings)} found):")
    lines.append("========================")
    for index, finding in enumerate(result.findings, start=1):
        lines.append(f"{index}. [{finding.severity.value.upper()}] {finding.category}")
        lines.append(f"   Description: {finding.description}")
        if finding.line:
            lines.append(f"   Line: {finding.line}")
        if finding.suggestion:
            lines.append(f"   Suggestion: {finding.suggestion}")
        lines.append("")

    return "\n".join(lines) + "\n"
