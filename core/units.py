"""
Physical constants and unit conversion helpers.

Every body in the simulation stores:
  position  in light-years (Sun-centred)
  mass      in kg
  radius    in km

Catalogues arrive in AU, parsecs, Earth/solar masses and Earth/solar radii;
the helpers below are the only place those units are converted.
"""

from __future__ import annotations


# ---------------------------------------------------------------------------
# Distances
# ---------------------------------------------------------------------------

AU_TO_KM = 149597870.7
LY_TO_KM = 9.461e12
AU_TO_LY = AU_TO_KM / LY_TO_KM      # ≈ 1.58125e-5
KM_TO_LY = 1.0 / LY_TO_KM           # ≈ 1.057e-13
PARSEC_TO_LY = 3.26156

# ---------------------------------------------------------------------------
# Masses
# ---------------------------------------------------------------------------

EARTH_MASS_KG = 5.972e24
SOLAR_MASS_KG = 1.989e30
EARTH_MASS_TO_SOLAR_MASS = EARTH_MASS_KG / SOLAR_MASS_KG   # ≈ 3.003e-6

# ---------------------------------------------------------------------------
# Radii
# ---------------------------------------------------------------------------

EARTH_RADIUS_KM = 6371.0
SOLAR_RADIUS_KM = 696340.0


def au_to_km(au: float) -> float:
    return au * AU_TO_KM


def km_to_au(km: float) -> float:
    return km / AU_TO_KM


def au_to_ly(au: float) -> float:
    return au * AU_TO_LY


def ly_to_au(ly: float) -> float:
    return ly / AU_TO_LY


def km_to_ly(km: float) -> float:
    return km * KM_TO_LY


def ly_to_km(ly: float) -> float:
    return ly * LY_TO_KM


def parsecs_to_ly(pc: float) -> float:
    return pc * PARSEC_TO_LY


def ly_to_parsecs(ly: float) -> float:
    return ly / PARSEC_TO_LY


def earth_masses_to_kg(m: float) -> float:
    return m * EARTH_MASS_KG


def solar_masses_to_kg(m: float) -> float:
    return m * SOLAR_MASS_KG


def kg_to_solar_masses(kg: float) -> float:
    return kg / SOLAR_MASS_KG


def kg_to_earth_masses(kg: float) -> float:
    return kg / EARTH_MASS_KG


def earth_radii_to_km(r: float) -> float:
    return r * EARTH_RADIUS_KM


def solar_radii_to_km(r: float) -> float:
    return r * SOLAR_RADIUS_KM


def km_to_solar_radii(km: float) -> float:
    return km / SOLAR_RADIUS_KM
