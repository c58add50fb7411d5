from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Any, Dict, Tuple

import yaml
from dotenv import load_dotenv


@dataclass(frozen=True)
class Settings:
    env: str
    log_level: str
    scenario_store_path: str
    cors_origins: Tuple[str, ...]
    port: int


def _deep_get(d: Dict[str, Any], path: str, default=None):
    cur = d
    for part in path.split("."):
        if not isinstance(cur, dict) or part not in cur:
            return default
        cur = cur[part]
    return cur


def _env_or_cfg(cfg: Dict[str, Any], key: str, cfg_path: str, default):
    # empty env vars count as unset
    v = os.getenv(key)
    if v is None or v.strip() == "":
        return _deep_get(cfg, cfg_path, default)
    return v.strip()


def load_settings(config_path: str = "config.yaml") -> Settings:
    """
    Loads config.yaml + overrides from .env/environment variables.
    """
    load_dotenv()

    cfg: Dict[str, Any] = {}
    if os.path.exists(config_path):
        with open(config_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}

    origins = _env_or_cfg(
        cfg,
        "CORS_ORIGINS",
        "api.cors_origins",
        ["http://localhost:5173", "http://127.0.0.1:5173"],
    )
    if isinstance(origins, str):
        origins = [o.strip() for o in origins.split(",") if o.strip()]

    return Settings(
        env=_env_or_cfg(cfg, "APP_ENV", "app.env", "dev"),
        log_level=str(_env_or_cfg(cfg, "LOG_LEVEL", "app.log_level", "INFO")).upper(),
        scenario_store_path=_env_or_cfg(
            cfg, "SCENARIO_STORE_PATH", "storage.scenarios_path", "data/scenarios.json"
        ),
        cors_origins=tuple(origins),
        port=int(_env_or_cfg(cfg, "PORT", "api.port", 5000)),
    )
