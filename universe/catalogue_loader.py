"""
Catalogue Loader

Reads the comma-separated star and planet catalogues into the Universe.
This is the bridge between the raw data files and the 3D universe
representation.

Star catalogue, two row grammars detected per row:

  current  hip,habitable,name,spectral,dist_pc,xg,yg,zg[,absmag]
           (≥ 8 fields, first field an integer; galactic parsecs)
  legacy   system,name,class,dist_ly,ra(HH:MM:SS),dec(±DD:MM:SS),mass[,absmag]
           (≥ 7 fields; equatorial coordinates)

Planet catalogue:

  name,star,dfs,mass,radius,rings
  (distance in AU, mass/radius in Earth units, rings "1"/"yes")

The first line of every file is a header. Blank lines, '#' comments and
comma-only lines are ignored. A bad row is skipped with a warning and never
aborts the load; only a missing/unreadable file is fatal. Undecodable
bytes are replaced, so they only affect the row they sit in.
"""

from __future__ import annotations
import logging
import math
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, List, Optional

from .bodies import is_sun_name, planet_around, star_from_equatorial, star_from_galactic
from .universe import Universe

logger = logging.getLogger(__name__)

CURRENT_FORMAT = "current"
LEGACY_FORMAT = "legacy"

_COMMA_ONLY = re.compile(r"^,*$")


class CatalogLoadError(Exception):
    """Catalogue file missing or unreadable."""


class RowError(ValueError):
    """A single catalogue row that cannot be turned into a body."""


@dataclass
class Diagnostic:
    line: int
    message: str

    def __str__(self) -> str:
        return f"line {self.line}: {self.message}"


@dataclass
class LoadReport:
    """What a single catalogue load did."""
    source: str
    loaded: int = 0
    current_rows: int = 0
    legacy_rows: int = 0
    overlaps_removed: int = 0
    skipped: List[Diagnostic] = field(default_factory=list)

    def skip(self, line: int, message: str) -> None:
        self.skipped.append(Diagnostic(line, message))
        logger.warning("%s: skipping line %d: %s", self.source, line, message)

    def __repr__(self) -> str:
        return (f"<LoadReport {self.source}: {self.loaded} loaded, "
                f"{len(self.skipped)} skipped>")


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------

def _is_int(s: str) -> bool:
    s = s.strip()
    if not s:
        return False
    try:
        int(s)
        return True
    except ValueError:
        return False


def _float(value: str, what: str, default: Optional[float] = None) -> Optional[float]:
    """Parse a numeric field; blank gives the default (or an error if there is none)."""
    value = value.strip()
    if not value:
        if default is None:
            raise RowError(f"missing {what}")
        return default
    try:
        number = float(value)
    except ValueError:
        raise RowError(f"invalid {what}: {value!r}") from None
    if not math.isfinite(number):
        raise RowError(f"{what} is not finite: {value!r}")
    return number


def _optional_float(parts: List[str], i: int, what: str) -> Optional[float]:
    if i >= len(parts) or not parts[i].strip():
        return None
    return _float(parts[i], what)


def _data_lines(lines: Iterable[str]):
    """
    Yield (line_number, header?, stripped_line) skipping comments and blanks.
    Line numbers are 1-based and count the header.
    """
    for line_no, raw in enumerate(lines, start=1):
        line = raw.strip()
        if line_no == 1:
            yield line_no, True, line
            continue
        if not line or line.startswith("#") or _COMMA_ONLY.match(line):
            continue
        yield line_no, False, line


def _check_position(star) -> None:
    if not all(math.isfinite(c) for c in star.position):
        raise RowError(f"position of {star.name} is not finite: {star.position}")


def _open(path) -> List[str]:
    path = Path(path)
    try:
        with path.open("r", encoding="utf-8", errors="replace") as f:
            return f.readlines()
    except OSError as e:
        raise CatalogLoadError(f"Cannot read catalogue {path}: {e}") from e


# ---------------------------------------------------------------------------
# Stars
# ---------------------------------------------------------------------------

def _check_star_header(header: str, source: str) -> None:
    h = header.lower()
    if "hip" in h and "hab" in h:
        logger.info("%s: current star format (Hipparcos ids, galactic coordinates)", source)
    elif "system" not in h and "name" not in h:
        logger.warning("%s: unexpected header in star catalogue: %s", source, header)


def _parse_current_row(parts: List[str], universe: Universe) -> None:
    hip_id = int(parts[0].strip()) if parts[0].strip() else 0
    flag = parts[1].strip()
    habitable = bool(flag) and flag != "0"

    name = parts[2].strip()
    if not name:
        raise RowError("name is empty")
    spectral_class = parts[3].strip()

    distance_pc = _float(parts[4], "distance", 0.0)
    xg = _float(parts[5], "galactic x", 0.0)
    yg = _float(parts[6], "galactic y", 0.0)
    zg = _float(parts[7], "galactic z", 0.0)
    abs_mag = _optional_float(parts, 8, "absolute magnitude")

    star = star_from_galactic(hip_id, habitable, name, spectral_class,
                              distance_pc, xg, yg, zg, abs_mag)
    _check_position(star)
    universe.add_star(star, overwrite_name=True)


def _parse_legacy_row(parts: List[str], universe: Universe) -> None:
    """
    Absolute magnitude is optional: a 7-field row without it still loads
    (magnitude 0.0, or 4.85 for the Sun) instead of being skipped.
    """
    system_name = parts[0].strip()
    name = parts[1].strip()
    if not name:
        raise RowError("name is empty")
    stellar_class = parts[2].strip()

    distance_ly = _float(parts[3], "distance")
    ra = parts[4].strip()
    dec = parts[5].strip()

    sun = is_sun_name(name)
    mass = _float(parts[6], "mass", 1.0 if sun else -1.0)
    abs_mag = _optional_float(parts, 7, "absolute magnitude")

    star = star_from_equatorial(name, stellar_class, distance_ly, ra, dec,
                                mass_solar=mass if mass > 0 else None,
                                absolute_magnitude=abs_mag,
                                system_name=system_name)
    _check_position(star)
    universe.add_star(star, overwrite_name=False, system_name=system_name)


def parse_star_rows(lines: Iterable[str], universe: Universe,
                    source: str = "<stars>") -> LoadReport:
    """Parse star catalogue lines (header included) into the universe."""
    report = LoadReport(source)

    for line_no, is_header, line in _data_lines(lines):
        if is_header:
            _check_star_header(line, source)
            continue

        parts = line.split(",")
        try:
            if len(parts) >= 8 and _is_int(parts[0]):
                _parse_current_row(parts, universe)
                report.current_rows += 1
            elif len(parts) >= 7:
                _parse_legacy_row(parts, universe)
                report.legacy_rows += 1
            else:
                report.skip(line_no, f"not enough fields ({len(parts)})")
                continue
        except ValueError as e:
            report.skip(line_no, str(e))
            continue
        report.loaded += 1

    logger.info("Loaded %d stars from %s (%d current, %d legacy, %d skipped)",
                report.loaded, source, report.current_rows, report.legacy_rows,
                len(report.skipped))
    return report


def load_stars(path, universe: Universe) -> LoadReport:
    """Load a star catalogue file. Raises CatalogLoadError if it cannot be read."""
    return parse_star_rows(_open(path), universe, source=str(path))


# ---------------------------------------------------------------------------
# Planets
# ---------------------------------------------------------------------------

def _parse_planet_row(parts: List[str], universe: Universe) -> None:
    name = parts[0].strip()
    star_name = parts[1].strip()
    distance_au = _float(parts[2], "distance")
    mass = _float(parts[3], "mass")
    radius = _float(parts[4], "radius")
    rings = parts[5].strip().lower() in ("1", "yes")

    if not name or not star_name:
        raise RowError("name or star name is empty")

    host = universe.lookup(star_name)
    if host is None:
        raise RowError(f"planet {name}: host star '{star_name}' not found")

    planet = planet_around(name, host, distance_au, mass, radius, rings)
    universe.add_planet(planet)


def parse_planet_rows(lines: Iterable[str], universe: Universe,
                      source: str = "<planets>") -> LoadReport:
    """
    Parse planet catalogue lines into the universe.
    Stars must already be loaded: a planet whose host is unknown is dropped.
    """
    report = LoadReport(source)

    for line_no, is_header, line in _data_lines(lines):
        if is_header:
            if not line.lower().startswith("name,star,dfs"):
                logger.warning("%s: unexpected header in planet catalogue: %s",
                               source, line)
            continue

        parts = line.split(",")
        if len(parts) < 6:
            report.skip(line_no, f"expected 6+ fields, got {len(parts)}")
            continue
        try:
            _parse_planet_row(parts, universe)
        except ValueError as e:
            report.skip(line_no, str(e))
            continue
        report.loaded += 1

    logger.info("Loaded %d planets from %s (%d skipped)",
                report.loaded, source, len(report.skipped))
    return report


def load_planets(path, universe: Universe) -> LoadReport:
    return parse_planet_rows(_open(path), universe, source=str(path))
