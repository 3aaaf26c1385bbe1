from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import streamlit as st

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "settings.json"
STORE_FILE_NAME = "spacity.json"
ENV_DATA_DIR = "SPACITY_DATA_DIR"
ENV_LOG_LEVEL = "SPACITY_LOG_LEVEL"
SESSION_DATA_DIR = "spacity_data_dir"

# Spa operator share used when no branch is selected.
DEFAULT_SPA_PERCENT = 30


@dataclass(frozen=True)
class Settings:
    data_dir: Path
    store_path: Path
    currency: str = "IDR"
    default_spa_percent: float = DEFAULT_SPA_PERCENT
    top_services_limit: int = 5
    analytics_periods: tuple[int, ...] = (7, 14, 30)
    log_level: str = "INFO"


def _default_data_dir() -> Path:
    return Path.home() / ".spacity"


def _load_persisted_settings(data_dir: Path) -> dict:
    cfg = data_dir / CONFIG_FILE_NAME
    if cfg.exists():
        try:
            return json.loads(cfg.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable settings file %s", cfg)
            return {}
    return {}


def persist_data_dir(data_dir_str: str) -> Path:
    data_dir = Path(data_dir_str).expanduser().resolve()
    data_dir.mkdir(parents=True, exist_ok=True)

    cfg = _default_data_dir() / CONFIG_FILE_NAME
    cfg.parent.mkdir(parents=True, exist_ok=True)
    cfg.write_text(json.dumps({"data_dir": str(data_dir)}, indent=2), encoding="utf-8")
    logger.info("Data directory set to %s", data_dir)
    return data_dir


def load_settings(session_data_dir: Optional[str] = None) -> Settings:
    # Priority order:
    # 1) Session state (set via Data Management page)
    # 2) Environment variable
    # 3) Persisted settings in default folder
    # 4) Default folder
    if session_data_dir:
        data_dir = Path(session_data_dir).expanduser().resolve()
    elif os.getenv(ENV_DATA_DIR):
        data_dir = Path(os.getenv(ENV_DATA_DIR, "")).expanduser().resolve()
    else:
        default_dir = _default_data_dir()
        persisted = _load_persisted_settings(default_dir)
        data_dir = Path(persisted.get("data_dir", default_dir)).expanduser().resolve()

    data_dir.mkdir(parents=True, exist_ok=True)
    return Settings(
        data_dir=data_dir,
        store_path=data_dir / STORE_FILE_NAME,
        log_level=os.getenv(ENV_LOG_LEVEL, "INFO").upper(),
    )


@st.cache_resource
def _cached_settings(session_data_dir: Optional[str]) -> Settings:
    return load_settings(session_data_dir)


def get_settings() -> Settings:
    return _cached_settings(st.session_state.get(SESSION_DATA_DIR))


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
