"""Environment-based configuration for the scriptgate CLI."""

from pydantic_settings import BaseSettings

from scriptgate_core.types import ScriptLanguage


class GateSettings(BaseSettings):
    """Scriptgate CLI configuration.

    All settings can be overridden via environment variables with
    SCRIPTGATE_ prefix. For example:
        SCRIPTGATE_LOG_LEVEL=INFO
        SCRIPTGATE_DEFAULT_SIGNER=release-bot

    Scoring and gate thresholds are fixed policy and are not configurable.
    """

    # Logging
    log_level: str = "WARNING"

    # Signature identity used when --signed-by is not given
    default_signer: str = "scriptgate"

    # Language used when it cannot be inferred from the file extension
    default_language: ScriptLanguage = ScriptLanguage.BASH

    model_config = {"env_prefix": "SCRIPTGATE_"}


def get_settings() -> GateSettings:
    """Load settings from the current environment."""
    return GateSettings()
