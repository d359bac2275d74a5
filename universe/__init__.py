"""
Universe module — stars and planets in a Sun-centred 3D space (light-years).

Usage:
    from universe import build_universe
    universe, reports = build_universe("stars.csv", "planets.csv")

    # Query
    stars = universe.get_stars()
    star = universe.lookup("alpha centauri")
    star = universe.search("hip71683")
    visible = visible_stars(stars, camera.position, camera.front)
"""

from .bodies import (
    BodyKind,
    CelestialBody,
    PlanetDetails,
    StarDetails,
    planet_around,
    star_from_equatorial,
    star_from_galactic,
)
from .universe import Universe, build_universe

__all__ = [
    "BodyKind",
    "CelestialBody",
    "PlanetDetails",
    "StarDetails",
    "planet_around",
    "star_from_equatorial",
    "star_from_galactic",
    "Universe",
    "build_universe",
]

# Catalogue ingestion
from .catalogue_loader import (
    CatalogLoadError,
    LoadReport,
    load_planets,
    load_stars,
    parse_planet_rows,
    parse_star_rows,
)

from .overlap import remove_overlapping_stars

from .view_query import (
    FrameView,
    VisibleStar,
    closest_to_center,
    frame_view,
    visible_stars,
)

__all__ += [
    "CatalogLoadError",
    "LoadReport",
    "load_planets",
    "load_stars",
    "parse_planet_rows",
    "parse_star_rows",
    # overlap
    "remove_overlapping_stars",
    # view queries
    "FrameView",
    "VisibleStar",
    "closest_to_center",
    "frame_view",
    "visible_stars",
]
