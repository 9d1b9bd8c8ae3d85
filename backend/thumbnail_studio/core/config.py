from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional


def _env_int(env: Mapping[str, str], key: str, default: int) -> int:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_float(env: Mapping[str, str], key: str, default: float) -> float:
    raw = (env.get(key) or "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    """Process-wide settings, built once at start-up and injected where needed.

    The compositing core never reads the environment; only the HTTP layer and
    the variation pool consume these values.
    """

    log_level: str = "INFO"
    composite_workers: int = field(default_factory=lambda: os.cpu_count() or 1)
    lifestyle_blur_radius: float = 12.0
    lifestyle_vignette_opacity: float = 0.25
    max_variations: int = 4

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        workers = _env_int(env, "COMPOSITE_WORKERS", os.cpu_count() or 1)
        return cls(
            log_level=(env.get("LOG_LEVEL") or "INFO").strip().upper(),
            composite_workers=max(1, workers),
            lifestyle_blur_radius=_env_float(env, "LIFESTYLE_BLUR_RADIUS", 12.0),
            lifestyle_vignette_opacity=_env_float(env, "LIFESTYLE_VIGNETTE_OPACITY", 0.25),
            max_variations=max(1, _env_int(env, "MAX_VARIATIONS", 4)),
        )
