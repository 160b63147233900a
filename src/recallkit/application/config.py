from pathlib import Path
from typing import Any, Literal

from pydantic import Field, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from recallkit.domain.constants import (
    DEFAULT_DESIRED_RETENTION,
    DEFAULT_READ_SIZE,
    TARGET_STEP_TOLERANCE,
)

def config_files() -> list[Path]:
    return [
        Path.home() / ".config/recallkit/config.toml",
        Path.home() / ".recallkit.toml",
    ]

class AppConfig(BaseSettings):
    """
    Configuration model for recallkit hosts.
    Supports loading from:
    1. Environment variables (RECALLKIT_*)
    2. Config file (~/.config/recallkit/config.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="RECALLKIT_",
        extra="ignore",
    )

    # Scheduling
    scheduler: Literal["legacy", "fsrs"] = "legacy"
    desired_retention: float = DEFAULT_DESIRED_RETENTION
    fsrs_parameters: list[float] | None = None

    # Drill grading
    target_step_tolerance: int = Field(default=TARGET_STEP_TOLERANCE, ge=0)

    # Streaming
    stream_read_size: int = Field(default=DEFAULT_READ_SIZE, gt=0)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # Sources listed first win; the first existing file is used
        toml_file = next((f for f in config_files() if f.exists()), None)

        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        return (init_settings, env_settings)

    @field_validator("desired_retention")
    @classmethod
    def check_retention(cls, v: float) -> float:
        if not 0.0 < v < 1.0:
            raise ValueError("desired_retention must be between 0 and 1 (exclusive)")
        return v

def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/recallkit/config.toml (if exists)
    3. Environment variables (RECALLKIT_*)
    4. cli_overrides (passed from Typer)
    """
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
