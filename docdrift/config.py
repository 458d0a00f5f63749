"""Doc-Drift settings loaded from environment variables."""

from enum import Enum
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from docdrift.drift import AnalysisOptions
from docdrift.models import ConflictResolution, MergeStrategy


class LogLevel(Enum):
    """Logging levels accepted by settings and the CLI."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class Settings(BaseSettings):
    """Settings for the drift workflow and the CLI."""

    similarity_threshold: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Similarity a stored document needs to count as the same subject.",
    )
    ignore_minor_changes: bool = False
    focus_areas: Optional[list[str]] = Field(
        default=None, description="Metadata fields to compare instead of the defaults."
    )
    merge_strategy: ConflictResolution = ConflictResolution.MERGE_SECTIONS
    enable_drift_detection: bool = True

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="DOCDRIFT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LogLevel.__members__:
            choices = ", ".join(LogLevel.__members__)
            raise ValueError(f"Unknown log level '{value}' (expected one of {choices})")
        return level

    def analysis_options(self) -> AnalysisOptions:
        return AnalysisOptions(
            threshold=self.similarity_threshold,
            ignore_minor_changes=self.ignore_minor_changes,
            focus_areas=tuple(self.focus_areas) if self.focus_areas is not None else None,
        )

    def default_merge_strategy(self) -> MergeStrategy:
        return MergeStrategy(conflict_resolution=self.merge_strategy)


def load_settings(**overrides) -> Settings:
    """Build settings from the environment, with explicit overrides applied."""
    return Settings(**overrides)
