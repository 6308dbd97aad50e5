"""Configuration management using Pydantic Settings with YAML support."""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PlayerConfig(BaseModel):
    """Which media player application to address."""

    app_name: str | None = None  # Skips OS detection when set
    modern_app_name: str = "Music"
    legacy_app_name: str = "iTunes"
    modern_min_version: str = "10.15"

    @field_validator("modern_min_version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        parts = v.split(".")
        if len(parts) < 2 or not all(p.isdigit() for p in parts):
            raise ValueError("Version must look like MAJOR.MINOR")
        return v

    @property
    def modern_min_version_tuple(self) -> tuple[int, ...]:
        return tuple(int(p) for p in self.modern_min_version.split("."))


class BridgeConfig(BaseModel):
    """osascript bridge configuration."""

    osascript_path: str = "osascript"
    timeout_seconds: float | None = None
    scripts_dir: str | None = None

    @field_validator("timeout_seconds")
    @classmethod
    def validate_timeout(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError("Timeout must be positive")
        return v

    @property
    def scripts_dir_resolved(self) -> Path | None:
        return Path(self.scripts_dir).expanduser() if self.scripts_dir else None


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    json_format: bool = False
    file: str | None = None

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return level

    @property
    def file_resolved(self) -> Path | None:
        return Path(self.file).expanduser() if self.file else None


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_prefix="MUSIC_REMOTE_",
        env_nested_delimiter="__",
    )

    player: PlayerConfig = Field(default_factory=PlayerConfig)
    bridge: BridgeConfig = Field(default_factory=BridgeConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def load_config(config_path: Path | str = "config.yaml") -> Settings:
    """Load configuration from YAML file with environment variable overrides."""
    path = Path(config_path)

    if path.exists():
        with open(path) as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    yaml_config = _expand_env_vars(yaml_config)

    return Settings(**yaml_config)


def _expand_env_vars(obj: Any) -> Any:
    """Recursively expand ${VAR} patterns in config values."""
    import os
    import re

    if isinstance(obj, str):
        pattern = re.compile(r"\$\{([^}]+)\}")
        for var in pattern.findall(obj):
            obj = obj.replace(f"${{{var}}}", os.environ.get(var, ""))
        return obj
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(item) for item in obj]
    return obj
