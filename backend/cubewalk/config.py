from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping, Optional


@dataclass(slots=True)
class Settings:
    max_input_bytes: int = 1_000_000
    max_nets: int = 64
    load_timeout: float = 10.0
    log_level: str = "INFO"


def _as_int(v: Optional[str]) -> Optional[int]:
    try:
        return int(v) if v is not None else None
    except ValueError:
        return None


def _as_float(v: Optional[str]) -> Optional[float]:
    try:
        return float(v) if v is not None else None
    except ValueError:
        return None


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Read ``CUBEWALK_*`` overrides, clamped to sane ranges."""
    env = os.environ if env is None else env
    settings = Settings()

    max_input_bytes = _as_int(env.get("CUBEWALK_MAX_INPUT_BYTES"))
    max_nets = _as_int(env.get("CUBEWALK_MAX_NETS"))
    load_timeout = _as_float(env.get("CUBEWALK_LOAD_TIMEOUT"))
    log_level = env.get("CUBEWALK_LOG_LEVEL")

    if max_input_bytes is not None:
        settings.max_input_bytes = max(1024, min(50_000_000, max_input_bytes))
    if max_nets is not None:
        settings.max_nets = max(1, min(10_000, max_nets))
    if load_timeout is not None:
        settings.load_timeout = max(0.5, min(300.0, load_timeout))
    if log_level:
        settings.log_level = log_level.upper()
    return settings
