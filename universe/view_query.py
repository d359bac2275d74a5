"""
View queries: what the renderer needs from the star set each frame.

  visible_stars(...)      stars inside the view cone, farthest first
                          (back-to-front order for alpha blending)
  closest_to_center(...)  the single star the camera is looking at

Both are pure functions of (stars, camera position, forward vector, config):
nothing is cached between frames. Distances and angles are evaluated with
numpy over the whole star list, then the survivors are ordered in Python.
"""

from __future__ import annotations
import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from core.config import ViewConfig
from .bodies import CelestialBody
from .spectral import RGB

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VisibleStar:
    """One entry of the paint list."""
    body: CelestialBody
    distance_ly: float          # sort key: unique, strictly decreasing along the list
    color: RGB
    radius_km: float


@dataclass(frozen=True)
class FrameView:
    visible: Tuple[VisibleStar, ...]
    target: Optional[CelestialBody]


def _geometry(stars: Sequence[CelestialBody], position, forward
              ) -> Tuple[np.ndarray, np.ndarray]:
    """
    Distance from the camera and cosine to the forward axis for every star.
    Stars sitting exactly on the camera get cos = NaN (no direction).
    """
    cam = np.asarray(position, dtype=np.float64)
    fwd = np.asarray(forward, dtype=np.float64)
    fwd = fwd / np.linalg.norm(fwd)

    pos = np.array([s.position for s in stars], dtype=np.float64).reshape(-1, 3)
    offsets = pos - cam
    dist = np.linalg.norm(offsets, axis=1)
    with np.errstate(invalid="ignore", divide="ignore"):
        cos = (offsets @ fwd) / dist
    return dist, cos


def _unique_keys(distances) -> List[float]:
    """
    Make equal distances distinct by nudging later ones to the next
    representable double, so no entry collapses onto another.
    """
    used = set()
    keys = []
    for d in distances:
        d = float(d)
        while d in used:
            d = math.nextafter(d, math.inf)
        used.add(d)
        keys.append(d)
    return keys


def visible_stars(stars: Sequence[CelestialBody], position, forward,
                  config: Optional[ViewConfig] = None) -> List[VisibleStar]:
    """
    Stars within visible_max_distance_ly and the visible half-angle cone,
    ordered by strictly decreasing distance (farthest first).
    """
    cfg = config or ViewConfig()
    if not stars:
        return []

    dist, cos = _geometry(stars, position, forward)
    cos_limit = math.cos(math.radians(cfg.visible_half_angle_deg))
    with np.errstate(invalid="ignore"):
        mask = (dist > 0.0) & (dist <= cfg.visible_max_distance_ly) & (cos > cos_limit)

    idx = np.nonzero(mask)[0]
    keys = _unique_keys(dist[idx])

    entries = [
        VisibleStar(body=stars[i], distance_ly=k,
                    color=stars[i].color, radius_km=stars[i].radius_km)
        for i, k in zip(idx, keys)
    ]
    entries.sort(key=lambda e: e.distance_ly, reverse=True)
    return entries


def closest_to_center(stars: Sequence[CelestialBody], position, forward,
                      config: Optional[ViewConfig] = None) -> Optional[CelestialBody]:
    """
    Star nearest the centre of view, or None.

    Candidates lie within target_max_distance_ly and strictly inside the
    target cone. Only the target_candidate_limit nearest are scored:

        score = 0.7 * angle/max_angle + 0.3 * min(d/10, 1)    (halved below 5 ly)

    Candidates beyond target_score_max_distance_ly are not scored; if none
    was scored the nearest candidate is returned.
    """
    cfg = config or ViewConfig()
    if not stars:
        return None

    dist, cos = _geometry(stars, position, forward)
    max_angle = math.radians(cfg.target_half_angle_deg)
    with np.errstate(invalid="ignore"):
        angle = np.arccos(np.clip(cos, -1.0, 1.0))
        mask = (dist > 0.0) & (dist <= cfg.target_max_distance_ly) & (angle < max_angle)

    idx = np.nonzero(mask)[0]
    if idx.size == 0:
        return None

    keys = _unique_keys(dist[idx])
    candidates = sorted(zip(keys, idx), key=lambda c: c[0])

    best: Optional[CelestialBody] = None
    best_score = math.inf
    for _, i in candidates[:cfg.target_candidate_limit]:
        d = float(dist[i])
        if d > cfg.target_score_max_distance_ly:
            continue
        score = (cfg.target_angle_weight * float(angle[i]) / max_angle
                 + cfg.target_distance_weight * min(d / cfg.target_distance_norm_ly, 1.0))
        if d < cfg.target_near_distance_ly:
            score *= 0.5
        if score < best_score:
            best, best_score = stars[i], score

    if best is None:
        best = stars[candidates[0][1]]
    return best


def frame_view(stars: Sequence[CelestialBody], camera,
               config: Optional[ViewConfig] = None) -> FrameView:
    """Both queries for one frame. `camera` needs .position and .front."""
    visible = visible_stars(stars, camera.position, camera.front, config)
    target = closest_to_center(stars, camera.position, camera.front, config)
    logger.debug("Frame: %d visible, target=%s",
                 len(visible), target.name if target else None)
    return FrameView(visible=tuple(visible), target=target)
