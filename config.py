"""
config.py — Visualizer Settings
================================
One dataclass with every tunable the core and the web app read.

    from config import VisualizerConfig, load_config, SPEED_PRESETS

Defaults mirror the browser version: 50 bars, heights 10–359 px,
a 50 ms step interval and a 100 ms pause poll.  Environment variables
prefixed with SORTVIZ_ override them (SORTVIZ_MAX_SIZE=120, …).
"""

import os
from dataclasses import dataclass, fields
from typing import Dict, Mapping, Optional


# ---------------------------------------------------------------------------
# Speed presets (milliseconds per step)
# ---------------------------------------------------------------------------
SPEED_PRESETS: Dict[str, int] = {
    "slow":   250,    # teaching mode
    "medium": 50,
    "fast":   10,     # demo mode
    "turbo":  1,
}

ENV_PREFIX = "SORTVIZ_"


@dataclass
class VisualizerConfig:
    max_size:         int   = 200
    default_size:     int   = 50
    min_value:        int   = 10
    max_value:        int   = 359
    default_speed_ms: int   = SPEED_PRESETS["medium"]
    min_speed_ms:     int   = 0
    max_speed_ms:     int   = 1000
    pause_poll_ms:    int   = 100
    max_sessions:     int   = 64      # live controllers kept by the web app
    host:             str   = "127.0.0.1"
    port:             int   = 5000
    debug:            bool  = False

    def clamp_speed(self, speed_ms: float) -> float:
        return max(self.min_speed_ms, min(self.max_speed_ms, speed_ms))

    def validate(self) -> "VisualizerConfig":
        if self.max_size < 1:
            raise ValueError("max_size must be at least 1")
        if not 1 <= self.default_size <= self.max_size:
            raise ValueError("default_size must be between 1 and max_size")
        if self.min_value < 0 or self.max_value < self.min_value:
            raise ValueError("value range must be non-negative and non-empty")
        if self.min_speed_ms < 0 or self.max_speed_ms < self.min_speed_ms:
            raise ValueError("speed range must be non-negative and non-empty")
        if self.max_sessions < 1:
            raise ValueError("max_sessions must be at least 1")
        return self


def load_config(environ: Optional[Mapping[str, str]] = None) -> VisualizerConfig:
    """Build a config from defaults overlaid with SORTVIZ_* variables."""
    environ = os.environ if environ is None else environ
    overrides = {}
    for f in fields(VisualizerConfig):
        raw = environ.get(ENV_PREFIX + f.name.upper())
        if raw is None:
            continue
        if f.type in (bool, "bool"):
            overrides[f.name] = raw.strip().lower() in ("1", "true", "yes", "on")
        elif f.type in (int, "int"):
            try:
                overrides[f.name] = int(raw)
            except ValueError:
                raise ValueError(f"{ENV_PREFIX}{f.name.upper()} must be an integer, got {raw!r}")
        else:
            overrides[f.name] = raw
    return VisualizerConfig(**overrides).validate()


DEFAULT_CONFIG = VisualizerConfig()
