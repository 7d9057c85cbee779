from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class RadarConfig:
    tick_interval: float = 0.15  # seconds between flickers
    tick_count: int = 15
    scan_delay: float = 1.5  # minimum time spent in the scanning state


DEFAULT_RADAR_CONFIG = RadarConfig()
