"""
Simulation configuration.

All tunables live here as dataclass defaults so the loader, the view
queries and the camera never hard-code thresholds of their own.

    cfg = SimConfig()                       # defaults
    cfg = SimConfig.from_args(namespace)    # from main.py argparse
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional


@dataclass
class ViewConfig:
    """Culling and target-selection thresholds (light-years / degrees)."""
    # Visible set
    visible_max_distance_ly: float = 1000.0
    visible_half_angle_deg: float = 75.0       # half of a 150° cone

    # Closest-to-centre selection
    target_max_distance_ly: float = 500.0
    target_half_angle_deg: float = 15.0
    target_score_max_distance_ly: float = 100.0
    target_candidate_limit: int = 10
    target_near_distance_ly: float = 5.0       # score halved below this
    target_distance_norm_ly: float = 10.0
    target_angle_weight: float = 0.7
    target_distance_weight: float = 0.3


@dataclass
class CameraConfig:
    yaw_deg: float = -90.0                     # looking down -Z
    pitch_deg: float = 0.0
    movement_speed: float = 1.0                # ly per second
    mouse_sensitivity: float = 0.1
    zoom_deg: float = 45.0

    pitch_limit_deg: float = 89.0
    zoom_min_deg: float = 1.0
    zoom_max_deg: float = 120.0
    speed_factor: float = 1.5
    speed_min: float = 0.01
    speed_max: float = 100.0

    # Spawn next to the Sun
    spawn_offset_ly: float = 0.8
    spawn_speed: float = 0.1
    teleport_offset_ly: float = 0.1


@dataclass
class SimConfig:
    stars_path: Path = Path("stars.csv")
    planets_path: Optional[Path] = Path("planets.csv")
    log_level: str = "INFO"
    view: ViewConfig = field(default_factory=ViewConfig)
    camera: CameraConfig = field(default_factory=CameraConfig)

    @classmethod
    def from_args(cls, args) -> "SimConfig":
        planets = getattr(args, "planets", None)
        return cls(
            stars_path=Path(args.stars),
            planets_path=Path(planets) if planets else None,
            log_level=getattr(args, "log_level", "INFO") or "INFO",
        )


LOG_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"


def configure_logging(level: str | int = "INFO") -> None:
    """Root logging setup for the command-line entry point."""
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(level=level, format=LOG_FORMAT)
