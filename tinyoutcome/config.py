from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.errors import InvalidConfiguration
from .core.outcome import OutcomeTracker, WarmupPolicy, resolve_warmup


class TrackerConfig(BaseModel):
    """Shape of the trackers built by the CLI and registry.
    """

    precision: int = Field(128, description="Number of historic samples to keep", ge=1)
    warmup: Union[WarmupPolicy, int] = Field(
        WarmupPolicy.FULL,
        description="Named warmup policy or explicit sample count",
    )

    @field_validator("warmup", mode="before")
    @classmethod
    def _coerce_warmup(cls, v):  # type: ignore[no-untyped-def]
        if isinstance(v, str) and not isinstance(v, WarmupPolicy):
            return v.strip().lower()
        return v

    def warmup_threshold(self) -> int:
        return resolve_warmup(self.precision, self.warmup)

    def build(self) -> OutcomeTracker:
        return OutcomeTracker(self.precision, self.warmup)


class RuntimeConfig(BaseModel):
    tracker: TrackerConfig = Field(default_factory=TrackerConfig)
    stats_every: int = Field(0, description="Refresh min/max/avg every N samples (0 = only at the end)", ge=0)
    log_every: int = Field(0, description="Emit a progress log line every N samples (0 = never)", ge=0)


class EnvSettings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    LOG_LEVEL: str = "INFO"


class AppConfig(BaseModel):
    env: EnvSettings
    runtime: RuntimeConfig

    @field_validator("env", mode="before")
    @classmethod
    def _coerce_env(cls, v):  # type: ignore[no-untyped-def]
        if isinstance(v, dict):
            return EnvSettings(**v)
        return v

    @staticmethod
    def load(config_path: Optional[Path] = None) -> "AppConfig":
        env = EnvSettings()  # loads from environment and .env

        runtime = RuntimeConfig()
        if config_path is None:
            default_path = Path("config.yaml")
            config_path = default_path if default_path.exists() else None
        elif not Path(config_path).exists():
            raise InvalidConfiguration(f"Config file not found: {config_path}")

        if config_path:
            with open(config_path, "r", encoding="utf-8") as fh:
                raw = yaml.safe_load(fh) or {}
            try:
                runtime = RuntimeConfig(**raw)
            except (ValidationError, TypeError) as ve:
                raise InvalidConfiguration(f"Invalid {config_path}: {ve}") from ve

        # Surface warmup/precision mismatches (e.g. warmup 200 of 100) at load time.
        runtime.tracker.warmup_threshold()
        return AppConfig(env=env, runtime=runtime)


def load_config(config_path: Optional[Path] = None) -> AppConfig:
    """Load merged configuration from environment and optional YAML."""

    return AppConfig.load(config_path)
