"""
Physical estimates (mass, radius, colour) from a spectral class string.

A class such as "G2V", "K0 III" or "M5.5Ve" is split into:
  type letter       first character, upper-cased ('G' when empty)
  subtype           second character when it is a digit
  luminosity class  Roman numeral I..VII (defaults to V, main sequence)

Base values come from the per-type tables below (solar units), refined by
a per-type linear subtype correction and a luminosity-class factor.
The estimates are deliberately coarse: they exist so every catalogue row
yields a plausible size and colour for the viewer, not for astrophysics.
"""

from __future__ import annotations
import math
from typing import NamedTuple, Optional, Tuple

RGB = Tuple[int, int, int]

DEFAULT_TYPE = "G"
MAIN_SEQUENCE = "V"
MAX_RADIUS_SOLAR = 25.0


# ---------------------------------------------------------------------------
# Per-type tables
# ---------------------------------------------------------------------------

SPECTRAL_COLOR: dict[str, RGB] = {
    # Main sequence
    "O": (155, 180, 255),
    "B": (170, 195, 255),
    "A": (210, 225, 255),
    "F": (255, 245, 230),
    "G": (255, 230, 130),
    "K": (255, 190, 100),
    "M": (255, 140, 90),
    # Brown dwarfs
    "L": (230, 100, 50),
    "T": (200, 80, 40),
    "Y": (170, 70, 40),
    # Other
    "W": (120, 170, 255),   # Wolf-Rayet
    "C": (255, 100, 100),   # carbon
    "S": (255, 120, 90),
    "D": (200, 210, 255),   # white dwarf
    "Q": (170, 180, 200),   # neutron star
    "X": (30, 30, 40),      # black hole
    "P": (180, 190, 255),   # planetary nebula
    "N": (240, 170, 130),
    "R": (255, 110, 90),
}
COLOR_WHITE: RGB = (255, 255, 255)

# Main-sequence radius, solar radii
SPECTRAL_RADIUS_V: dict[str, float] = {
    "O": 15.0, "B": 7.0, "A": 1.8, "F": 1.3, "G": 1.0, "K": 0.8, "M": 0.5,
    "L": 0.1, "T": 0.08, "Y": 0.07,
    "W": 12.0, "C": 100.0, "S": 80.0, "D": 0.01, "Q": 0.0001, "X": 0.0001,
    "N": 90.0, "R": 70.0,
}

# Main-sequence mass, solar masses
SPECTRAL_MASS_V: dict[str, float] = {
    "O": 40.0, "B": 10.0, "A": 2.5, "F": 1.5, "G": 1.0, "K": 0.7, "M": 0.3,
    "L": 0.08, "T": 0.05, "Y": 0.02,
    "W": 25.0, "C": 3.0, "S": 2.5, "D": 0.7, "Q": 1.4, "X": 10.0,
    "N": 2.8, "R": 2.5,
}

# Subtype corrections: value = intercept - subtype * slope
#   type: ((mass_intercept, mass_slope), (radius_intercept, radius_slope))
SUBTYPE_LINEAR: dict[str, tuple[tuple[float, float], tuple[float, float]]] = {
    "O": ((40.0, 3.0),  (20.0, 1.0)),    # O0=40 / O9=13 M☉
    "B": ((18.0, 1.5),  (10.0, 0.6)),
    "A": ((3.2, 0.18),  (2.5, 0.08)),
    "F": ((1.7, 0.07),  (1.6, 0.05)),
    "G": ((1.1, 0.04),  (1.1, 0.03)),
    "K": ((0.8, 0.04),  (0.85, 0.04)),
    "M": ((0.5, 0.04),  (0.5, 0.03)),    # M0=0.5 / M9=0.14 M☉
}

RADIUS_LUMINOSITY_FACTOR = {"I": 20.0, "II": 10.0, "III": 6.0, "IV": 2.0}
MASS_LUMINOSITY_FACTOR = {"I": 15.0, "II": 9.0, "III": 5.0, "IV": 2.0}

# Longest first so "III" wins over "II"/"I", "VII" over "VI"/"V"
_NUMERALS = ("VII", "III", "VI", "IV", "II", "V", "I")


class SpectralInfo(NamedTuple):
    type_letter: str
    subtype: Optional[int]
    luminosity_class: str


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def spectral_type(spectral_class: str) -> str:
    s = (spectral_class or "").strip()
    return s[0].upper() if s else DEFAULT_TYPE


def spectral_subtype(spectral_class: str) -> Optional[int]:
    s = (spectral_class or "").strip()
    if len(s) > 1 and s[1].isdigit():
        return int(s[1])
    return None


def luminosity_class(spectral_class: str) -> str:
    """
    Roman-numeral luminosity class of a spectral string.

    Order of attempts:
      1. space-prefixed token (" III", " IV" ...), longest numeral found
      2. numeral at the very end of the string, longest first
      3. words: SUPERGIANT -> I, GIANT -> III, DWARF -> V
      4. "V"
    """
    upper = (spectral_class or "").strip().upper()
    if not upper:
        return MAIN_SEQUENCE

    for numeral in _NUMERALS:
        if " " + numeral in upper:
            return numeral

    for numeral in _NUMERALS:
        if upper.endswith(numeral):
            return numeral

    if "SUPERGIANT" in upper:
        return "I"
    if "GIANT" in upper:
        return "III"
    if "DWARF" in upper:
        return "V"
    return MAIN_SEQUENCE


def classify(spectral_class: str) -> SpectralInfo:
    return SpectralInfo(spectral_type(spectral_class),
                        spectral_subtype(spectral_class),
                        luminosity_class(spectral_class))


# ---------------------------------------------------------------------------
# Estimates
# ---------------------------------------------------------------------------

def estimate_mass_solar(spectral_class: str) -> float:
    """Mass in solar masses estimated from the spectral class alone."""
    info = classify(spectral_class)
    mass = SPECTRAL_MASS_V.get(info.type_letter, 1.0)

    linear = SUBTYPE_LINEAR.get(info.type_letter)
    if linear is not None and info.subtype is not None:
        intercept, slope = linear[0]
        mass = intercept - info.subtype * slope

    return mass * MASS_LUMINOSITY_FACTOR.get(info.luminosity_class, 1.0)


def estimate_radius_solar(spectral_class: str, mass_solar: float) -> float:
    """
    Radius in solar radii.

    Main-sequence stars with a known mass use the mass-radius power law
    instead of the table (R ∝ M^0.8 below 1 M☉, M^0.57 up to 2 M☉, M^0.5 above).
    """
    info = classify(spectral_class)
    radius = SPECTRAL_RADIUS_V.get(info.type_letter, 1.0)

    linear = SUBTYPE_LINEAR.get(info.type_letter)
    if linear is not None and info.subtype is not None:
        intercept, slope = linear[1]
        radius = intercept - info.subtype * slope

    radius *= RADIUS_LUMINOSITY_FACTOR.get(info.luminosity_class, 1.0)
    radius = min(radius, MAX_RADIUS_SOLAR)

    if info.luminosity_class == MAIN_SEQUENCE and mass_solar > 0:
        if 0.1 < mass_solar < 2.0:
            radius = math.pow(mass_solar, 0.8 if mass_solar < 1.0 else 0.57)
        elif mass_solar >= 2.0:
            radius = math.pow(mass_solar, 0.5)

    return radius


def star_color(spectral_class: str) -> RGB:
    """Display colour; white for unknown letters, G-yellow for an empty class."""
    s = (spectral_class or "").strip()
    if not s:
        return SPECTRAL_COLOR[DEFAULT_TYPE]
    return SPECTRAL_COLOR.get(s[0].upper(), COLOR_WHITE)
