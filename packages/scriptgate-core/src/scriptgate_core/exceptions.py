"""
Exception classes for loading scripts and signatures from disk.

Validation itself never raises: input problems become findings and internal
failures become a fail-closed result. These exceptions cover the CLI layer,
where a file has to be read before anything can be validated:
- ScriptReadError: Script file missing, unreadable or not UTF-8
- SignatureFormatError: Signature file is not a valid signature document

Per project patterns:
- Inherit from Exception for base exception type
- Store context data in attributes for error handling
- Include descriptive message with relevant details
"""

from pathlib import Path


class ScriptReadError(Exception):
    """
    Raised when a script file cannot be loaded.

    Attributes:
        path: The file that was requested
        reason: Why loading failed
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read script {path}: {reason}")


class SignatureFormatError(Exception):
    """
    Raised when a signature document cannot be parsed.

    Attributes:
        path: The signature file
        reason: Parser error summary
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid signature file {path}: {reason}")
