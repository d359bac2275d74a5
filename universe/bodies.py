"""
CelestialBody — stars and planets of the simulation.

A body is one dataclass with the shared physical fields plus a payload for
its kind:

    CelestialBody (kind=STAR)    + StarDetails
    CelestialBody (kind=PLANET)  + PlanetDetails

Derived attributes (position, radius) are computed by calculate_position()
and calculate_radius(), which switch on body.kind.

Construction goes through the factories:
    star_from_galactic(...)    current catalogue rows (HIP + galactic pc)
    star_from_equatorial(...)  legacy rows (RA/Dec strings + distance in ly)
    planet_around(...)         planets, placed relative to their host star

Units: position in light-years from the Sun, mass in kg, radius in km.
"""

from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from core import units
from core.coords import equatorial_to_cartesian, parse_dec_dms, parse_ra_hms
from . import spectral

logger = logging.getLogger(__name__)

Vec3 = Tuple[float, float, float]
ORIGIN: Vec3 = (0.0, 0.0, 0.0)

SUN_NAME = "sun"
SUN_ABSOLUTE_MAGNITUDE = 4.85


class BodyKind(Enum):
    STAR = "star"
    PLANET = "planet"


@dataclass
class StarDetails:
    hip_id: int = 0                       # 0 = no Hipparcos id
    habitable: bool = False
    spectral_class: str = ""
    distance_parsecs: float = 0.0
    distance_ly: float = 0.0
    galactic: Vec3 = ORIGIN               # parsecs
    absolute_magnitude: float = 0.0
    system_name: str = ""                 # legacy rows only
    # raw equatorial strings of legacy rows; None for galactic rows
    ra: Optional[str] = None
    dec: Optional[str] = None


@dataclass
class PlanetDetails:
    host_uid: int                         # arena id of the host star (non-owning)
    distance_from_star_au: float
    has_rings: bool = False


@dataclass
class CelestialBody:
    name: str
    kind: BodyKind
    position: Vec3 = ORIGIN
    mass_kg: float = 0.0
    radius_km: float = 0.0
    uid: int = -1                         # assigned by Universe.add_*
    star: Optional[StarDetails] = None
    planet: Optional[PlanetDetails] = None

    @property
    def is_star(self) -> bool:
        return self.kind is BodyKind.STAR

    @property
    def is_planet(self) -> bool:
        return self.kind is BodyKind.PLANET

    @property
    def is_sun(self) -> bool:
        return is_sun_name(self.name)

    @property
    def mass_solar(self) -> float:
        return units.kg_to_solar_masses(self.mass_kg)

    @property
    def radius_ly(self) -> float:
        return units.km_to_ly(self.radius_km)

    @property
    def color(self) -> spectral.RGB:
        if self.star is not None:
            return spectral.star_color(self.star.spectral_class)
        return spectral.COLOR_WHITE

    def __repr__(self) -> str:
        x, y, z = self.position
        return (f"<{self.kind.value.title()} #{self.uid} '{self.name}' "
                f"at ({x:.3f}, {y:.3f}, {z:.3f}) ly>")


def is_sun_name(name: str) -> bool:
    return name.strip().lower() == SUN_NAME


# ---------------------------------------------------------------------------
# Derived attributes
# ---------------------------------------------------------------------------

def calculate_position(body: CelestialBody,
                       host: Optional[CelestialBody] = None) -> Vec3:
    """
    Position in light-years.

    STAR    galactic pc * 3.26156, or RA/Dec * distance for legacy rows;
            the Sun is always the origin.
    PLANET  host position + distance (AU -> ly) along global +X.
    """
    if body.kind is BodyKind.STAR:
        return _star_position(body)
    elif body.kind is BodyKind.PLANET:
        return _planet_position(body, host)
    raise ValueError(f"Unknown body kind: {body.kind}")


def calculate_radius(body: CelestialBody) -> float:
    """Radius in km. Stars estimate it from their class, planets keep the catalogue value."""
    if body.kind is BodyKind.STAR:
        if body.is_sun:
            return units.SOLAR_RADIUS_KM
        radius_solar = spectral.estimate_radius_solar(
            body.star.spectral_class, body.mass_solar)
        return units.solar_radii_to_km(radius_solar)
    elif body.kind is BodyKind.PLANET:
        return body.radius_km
    raise ValueError(f"Unknown body kind: {body.kind}")


def _star_position(body: CelestialBody) -> Vec3:
    if body.is_sun:
        return ORIGIN

    info = body.star
    if info.ra is None and info.dec is None:
        xg, yg, zg = info.galactic
        return (units.parsecs_to_ly(xg),
                units.parsecs_to_ly(yg),
                units.parsecs_to_ly(zg))

    if not info.ra or not info.dec or info.ra == "0" or info.dec == "0" \
            or info.distance_ly == 0:
        logger.warning("Using origin for star %s: missing coordinate data", body.name)
        return ORIGIN

    try:
        ra = parse_ra_hms(info.ra)
        dec = parse_dec_dms(info.dec)
    except ValueError as e:
        logger.warning("Bad coordinates for star %s (%s / %s): %s; using origin",
                       body.name, info.ra, info.dec, e)
        return ORIGIN
    return equatorial_to_cartesian(ra, dec, info.distance_ly)


def _planet_position(body: CelestialBody, host: Optional[CelestialBody]) -> Vec3:
    if host is None:
        logger.warning("Planet %s has no host star; using origin", body.name)
        return ORIGIN
    hx, hy, hz = host.position
    return (hx + units.au_to_ly(body.planet.distance_from_star_au), hy, hz)


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------

def _finish_star(body: CelestialBody, mass_solar: Optional[float]) -> CelestialBody:
    if body.is_sun:
        if mass_solar is None or mass_solar <= 0:
            mass_solar = 1.0
    elif mass_solar is None or mass_solar <= 0:
        mass_solar = spectral.estimate_mass_solar(body.star.spectral_class)

    body.mass_kg = units.solar_masses_to_kg(mass_solar)
    body.position = calculate_position(body)
    body.radius_km = calculate_radius(body)
    return body


def star_from_galactic(hip_id: int, habitable: bool, name: str, spectral_class: str,
                       distance_parsecs: float, xg: float, yg: float, zg: float,
                       absolute_magnitude: Optional[float] = None) -> CelestialBody:
    """Star from a current-format row. Mass is always estimated from the class."""
    if absolute_magnitude is None:
        absolute_magnitude = SUN_ABSOLUTE_MAGNITUDE if is_sun_name(name) else 0.0

    details = StarDetails(
        hip_id=hip_id,
        habitable=habitable,
        spectral_class=(spectral_class or "").strip(),
        distance_parsecs=distance_parsecs,
        distance_ly=units.parsecs_to_ly(distance_parsecs),
        galactic=(xg, yg, zg),
        absolute_magnitude=absolute_magnitude,
    )
    body = CelestialBody(name=name, kind=BodyKind.STAR, star=details)
    return _finish_star(body, None)


def star_from_equatorial(name: str, spectral_class: str, distance_ly: float,
                         ra: str, dec: str,
                         mass_solar: Optional[float] = None,
                         absolute_magnitude: Optional[float] = None,
                         system_name: str = "") -> CelestialBody:
    """Star from a legacy row. Unparsable coordinates fall back to the origin."""
    if absolute_magnitude is None:
        absolute_magnitude = SUN_ABSOLUTE_MAGNITUDE if is_sun_name(name) else 0.0

    details = StarDetails(
        spectral_class=(spectral_class or "").strip(),
        distance_parsecs=units.ly_to_parsecs(distance_ly),
        distance_ly=distance_ly,
        absolute_magnitude=absolute_magnitude,
        system_name=system_name,
        ra=ra or "",
        dec=dec or "",
    )
    body = CelestialBody(name=name, kind=BodyKind.STAR, star=details)
    return _finish_star(body, mass_solar)


def planet_around(name: str, host: CelestialBody, distance_au: float,
                  mass_earth: float, radius_earth: float,
                  has_rings: bool = False) -> CelestialBody:
    """
    Planet offset from its host along +X. The host must already be in the
    catalogue (host.uid >= 0) so the reference can be resolved later.
    """
    if not host.is_star:
        raise ValueError(f"Host of planet {name} is not a star: {host.name}")
    if mass_earth <= 0 or radius_earth <= 0:
        raise ValueError(f"Planet {name} needs positive mass and radius "
                         f"(got {mass_earth}, {radius_earth})")

    body = CelestialBody(
        name=name,
        kind=BodyKind.PLANET,
        mass_kg=units.earth_masses_to_kg(mass_earth),
        radius_km=units.earth_radii_to_km(radius_earth),
        planet=PlanetDetails(host_uid=host.uid,
                             distance_from_star_au=distance_au,
                             has_rings=has_rings),
    )
    body.position = calculate_position(body, host)
    body.radius_km = calculate_radius(body)
    return body
