"""Shared helpers for scriptgate CLI commands."""

from pathlib import Path
from typing import Optional

import typer

from scriptgate_core.config import get_settings
from scriptgate_core.exceptions import ScriptReadError
from scriptgate_core.types import ScriptLanguage

EXTENSION_LANGUAGES = {
    ".sh": ScriptLanguage.BASH,
    ".bash": ScriptLanguage.BASH,
    ".ps1": ScriptLanguage.POWERSHELL,
    ".psm1": ScriptLanguage.POWERSHELL,
    ".py": ScriptLanguage.PYTHON,
    ".yml": ScriptLanguage.ANSIBLE,
    ".yaml": ScriptLanguage.ANSIBLE,
    ".bat": ScriptLanguage.BATCH,
    ".cmd": ScriptLanguage.BATCH,
}


def load_script(path: Path) -> str:
    """
    Read a script file as UTF-8 text, keeping line endings byte-for-byte.

    Raises:
        ScriptReadError: If the file is missing, unreadable or not UTF-8
    """
    try:
        return path.read_bytes().decode("utf-8")
    except FileNotFoundError:
        raise ScriptReadError(path, "file not found")
    except UnicodeDecodeError as e:
        raise ScriptReadError(path, f"not valid UTF-8 ({e.reason})")
    except OSError as e:
        raise ScriptReadError(path, e.strerror or str(e))


def resolve_language(path: Path, language: Optional[str]) -> ScriptLanguage:
    """
    Pick the script language from --language, the file extension, or settings.

    Raises:
        typer.BadParameter: If --language is not a supported language
    """
    if language:
        try:
            return ScriptLanguage(language.lower())
        except ValueError:
            choices = ", ".join(lang.value for lang in ScriptLanguage)
            raise typer.BadParameter(f"unsupported language '{language}' (choose from {choices})")
    return EXTENSION_LANGUAGES.get(path.suffix.lower(), get_settings().default_language)
