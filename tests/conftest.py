import pytest

from core import units
from universe.bodies import BodyKind, CelestialBody, StarDetails
from universe.universe import Universe

CURRENT_HEADER = "hip,hab?,display name,spectral class,distance,xg,yg,zg,absmag"
LEGACY_HEADER = "system,name,stellar class,distance,ra,dec,mass,absmag"
PLANET_HEADER = "name,star,dfs,mass,radius,rings"

CURRENT_ROWS = [
    "0,,Sun,G2V,0,0,0,0,4.85",
    "71683,1,Alpha Centauri,G2V,4.3,4.3,0,0,4.38",
    "70890,0,Proxima Centauri,M5.5Ve,1.30,1.30,0.05,0,15.5",
    "32349,,Sirius,A1V,2.64,-0.5,-2.5,-0.6,1.42",
]

LEGACY_ROWS = [
    "Sol,Sun,G2V,0,0,0,1,4.83",
    "Barnard,Barnard's Star,M4V,5.96,17:57:48.5,+04:41:36,0.144,13.2",
    "Wolf 359,Wolf 359,M6V,7.86,10:56:29.2,+07:00:53,0.09,16.6",
]

PLANET_ROWS = [
    "Earth,Sun,1.0,1.0,1.0,0",
    "Saturn,sun,9.5,95.2,9.45,yes",
    "Proxima b,Proxima Centauri,0.0485,1.07,1.1,0",
]


@pytest.fixture
def current_lines():
    return [CURRENT_HEADER] + CURRENT_ROWS


@pytest.fixture
def legacy_lines():
    return [LEGACY_HEADER] + LEGACY_ROWS


@pytest.fixture
def planet_lines():
    return [PLANET_HEADER] + PLANET_ROWS


@pytest.fixture
def catalog_files(tmp_path, current_lines, planet_lines):
    stars = tmp_path / "stars.csv"
    planets = tmp_path / "planets.csv"
    stars.write_text("\n".join(current_lines) + "\n", encoding="utf-8")
    planets.write_text("\n".join(planet_lines) + "\n", encoding="utf-8")
    return stars, planets


def make_star(name, position, radius_solar=1.0, spectral_class="G2V", hip_id=0):
    """Star placed directly in light-years, bypassing catalogue estimation."""
    return CelestialBody(
        name=name,
        kind=BodyKind.STAR,
        position=tuple(float(c) for c in position),
        mass_kg=units.SOLAR_MASS_KG,
        radius_km=units.solar_radii_to_km(radius_solar),
        star=StarDetails(hip_id=hip_id, spectral_class=spectral_class),
    )


@pytest.fixture
def star_factory():
    return make_star


@pytest.fixture
def empty_universe():
    return Universe()
