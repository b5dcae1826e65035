"""Configuration management."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import yaml

from daily_tools.core import ScoringConfig


@dataclass
class PathsConfig:
    """Path settings."""
    data_dir: Path = Path("data")
    sandbox_dir: Path = Path("sandbox")


@dataclass
class HttpConfig:
    """HTTP settings for enrichment lookups."""
    timeout: float = 30.0
    request_delay: float = 1.0


@dataclass
class ReportConfig:
    """Report settings."""
    top_n: int = 5


@dataclass
class Settings:
    """Application settings."""

    # API Keys (from environment only)
    github_token: Optional[str] = None

    # Config sections
    paths: PathsConfig = field(default_factory=PathsConfig)
    http: HttpConfig = field(default_factory=HttpConfig)
    report: ReportConfig = field(default_factory=ReportConfig)
    scoring: ScoringConfig = field(default_factory=ScoringConfig)

    @property
    def data_dir(self) -> Path:
        return self.paths.data_dir

    @property
    def sandbox_dir(self) -> Path:
        return self.paths.sandbox_dir


def load_config(config_path: Path = Path("config.yaml")) -> dict:
    """Load configuration from YAML file."""
    if not config_path.exists():
        return {}

    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def get_settings(config_path: Path = Path("config.yaml")) -> Settings:
    """Get application settings from YAML config and environment."""
    config = load_config(config_path)

    settings = Settings(github_token=os.getenv("GITHUB_TOKEN") or None)

    if "paths" in config:
        for key, value in config["paths"].items():
            setattr(settings.paths, key, Path(value))

    if "http" in config:
        for key, value in config["http"].items():
            setattr(settings.http, key, float(value))

    if "report" in config:
        for key, value in config["report"].items():
            setattr(settings.report, key, value)

    # ScoringConfig validates weights and thresholds on construction
    if "scoring" in config:
        settings.scoring = ScoringConfig.from_dict(config["scoring"] or {})

    return settings
