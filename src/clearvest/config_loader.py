"""Utilities for loading runtime settings from YAML files."""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional, Union

import yaml

from .calculation.portfolio_summary import FORECAST_YEARS, GROWTH_RATE, OPTIMIZED_COST_RATE
from .market_data import DEFAULT_TIMEOUT, YAHOO_FINANCE_CHART_URL

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "CLEARVEST_CONFIG"
DEFAULT_CONFIG_PATH = Path("config") / "clearvest.yaml"


@dataclass(frozen=True)
class Settings:
    """Tunable knobs; every field has a working default."""

    log_level: str = "INFO"
    market_data_url: str = YAHOO_FINANCE_CHART_URL
    market_data_timeout: float = DEFAULT_TIMEOUT
    market_data_workers: int = 4
    optimized_cost_rate: float = OPTIMIZED_COST_RATE
    growth_rate: float = GROWTH_RATE
    forecast_years: int = FORECAST_YEARS
    export_basename: str = "clearvest-portfolio-analysis"
    cors_origins: List[str] = field(default_factory=lambda: ["*"])


def _load_yaml(path: Path) -> dict:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def _resolve_path(path: Optional[Union[str, Path]]) -> Optional[Path]:
    if path is not None:
        return Path(path)
    env_val = os.getenv(CONFIG_ENV_VAR)
    if env_val:
        return Path(env_val)
    if DEFAULT_CONFIG_PATH.exists():
        return DEFAULT_CONFIG_PATH
    return None


def load_settings(path: Optional[Union[str, Path]] = None) -> Settings:
    """Load settings from ``path``, ``$CLEARVEST_CONFIG`` or ``config/clearvest.yaml``.

    Missing keys keep their defaults and unknown keys are ignored. With no
    config file at all the defaults are returned.
    """
    resolved = _resolve_path(path)
    if resolved is None:
        return Settings()

    raw = _load_yaml(resolved)
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(raw) - known)
    if unknown:
        logger.warning(f"Ignoring unknown settings in {resolved}: {', '.join(unknown)}")

    values = {key: value for key, value in raw.items() if key in known}
    if "cors_origins" in values:
        values["cors_origins"] = list(values["cors_origins"] or [])
    logger.info(f"Loaded settings from {resolved}")
    return Settings(**values)
