"""Configuration loader."""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field

# Environment variables that override values from the YAML file.
ENV_OVERRIDES = {
    "COLLEGE_DATASET_PATH": "DATASET_PATH",
    "COLLEGE_CUSTOM_ENTRIES_PATH": "CUSTOM_ENTRIES_PATH",
    "COLLEGE_LOG_LEVEL": "LOG_LEVEL",
}


class ConfidenceLevels(BaseModel):
    """Confidence assigned by each resolver stage."""

    SPECIAL: float = Field(default=1.0, ge=0.0, le=1.0)
    EXACT: float = Field(default=1.0, ge=0.0, le=1.0)
    NORMALIZED: float = Field(default=0.9, ge=0.0, le=1.0)
    SUBSTRING: float = Field(default=0.8, ge=0.0, le=1.0)
    PREFIX: float = Field(default=0.9, ge=0.0, le=1.0)


class ScoringWeights(BaseModel):
    """Weights used to rank variants inside a canonical group."""

    EXACT_BASE_NAME: int = Field(default=50)
    MAIN_CAMPUS: int = Field(default=15)
    DISQUALIFIER: int = Field(default=-40)
    CONCISE_NAME: int = Field(default=10)
    CONCISE_SLACK: int = Field(default=20)
    DISQUALIFYING_TERMS: list[str] = Field(
        default=[
            "system office",
            "online",
            "extension",
            "center",
            "hospital",
            "medical center",
            "graduate school only",
            "administrative",
        ]
    )


class Config(BaseModel):
    """Application configuration."""

    DATASET_PATH: str = Field(default="data/ipeds-institutions.json")
    CUSTOM_ENTRIES_PATH: Optional[str] = None
    SEARCH_LIMIT_DEFAULT: int = Field(default=50, ge=1)
    SEARCH_LIMIT_MAX: int = Field(default=500, ge=1)
    PREFIX_MIN_LENGTH: int = Field(default=3, ge=1)
    STRIP_LABEL_SUFFIX: bool = Field(default=True)
    CONFIDENCE: ConfidenceLevels = Field(default_factory=ConfidenceLevels)
    SCORING: ScoringWeights = Field(default_factory=ScoringWeights)
    LOG_LEVEL: str = Field(default="INFO")

    @property
    def dataset_path(self) -> Path:
        return Path(self.DATASET_PATH)

    @property
    def custom_entries_path(self) -> Optional[Path]:
        return Path(self.CUSTOM_ENTRIES_PATH) if self.CUSTOM_ENTRIES_PATH else None


def apply_env_overrides(data: dict) -> dict:
    """Overlay COLLEGE_* environment variables onto raw config data."""
    merged = dict(data)
    for env_var, key in ENV_OVERRIDES.items():
        value = os.getenv(env_var)
        if value:
            merged[key] = value
    return merged


def load_config(config_path: Optional[str] = None) -> Config:
    """Load configuration from YAML file, then apply environment overrides."""
    data: dict = {}
    if config_path is not None:
        path = Path(config_path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}

    return Config(**apply_env_overrides(data))
