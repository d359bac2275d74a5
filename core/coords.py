from __future__ import annotations
import math

import numpy as np

Vec3 = tuple[float, float, float]


def clamp(x: float, lo: float, hi: float) -> float:
    return lo if x < lo else hi if x > hi else x


def parse_ra_hms(ra_str: str) -> float:
    """
    Parse right ascension "HH:MM:SS.ss" into radians.
    1 hour = 15 degrees. Raises ValueError on bad format or hours outside [0, 24).
    """
    parts = ra_str.strip().split(":")
    if len(parts) != 3:
        raise ValueError(f"Invalid RA format: {ra_str}")
    hours = float(parts[0]) + float(parts[1]) / 60.0 + float(parts[2]) / 3600.0
    if not 0 <= hours < 24:
        raise ValueError(f"RA hours out of range [0, 24): {hours}")
    return math.radians(hours * 15.0)


def parse_dec_dms(dec_str: str) -> float:
    """
    Parse declination "(+/-)DD:MM:SS.ss" into radians.
    Raises ValueError on bad format or degrees outside [-90, 90].
    """
    s = dec_str.strip()
    sign = 1.0
    if s.startswith(("-", "+")):
        sign = -1.0 if s[0] == "-" else 1.0
        s = s[1:]

    parts = s.split(":")
    if len(parts) != 3:
        raise ValueError(f"Invalid Dec format: {dec_str}")
    degrees = float(parts[0]) + float(parts[1]) / 60.0 + float(parts[2]) / 3600.0
    degrees *= sign
    if not -90 <= degrees <= 90:
        raise ValueError(f"Dec degrees out of range [-90, 90]: {degrees}")
    return math.radians(degrees)


def equatorial_to_cartesian(ra_rad: float, dec_rad: float, distance: float) -> Vec3:
    """Standard equatorial -> Cartesian, scaled by distance (same unit out as in)."""
    c = math.cos(dec_rad)
    return (distance * c * math.cos(ra_rad),
            distance * c * math.sin(ra_rad),
            distance * math.sin(dec_rad))


def distance(a: Vec3, b: Vec3) -> float:
    dx = a[0] - b[0]
    dy = a[1] - b[1]
    dz = a[2] - b[2]
    return math.sqrt(dx*dx + dy*dy + dz*dz)


def normalize(v: np.ndarray) -> np.ndarray:
    """Unit vector in the direction of v. Zero vectors are returned unchanged."""
    n = np.linalg.norm(v)
    if n == 0.0:
        return v
    return v / n
