"""
Universe — the single source of truth for all bodies in the simulation.

Architecture
------------
Bodies live in an arena keyed by a stable integer uid. Lookups go through
separate index tables instead of duplicate object handles:

  _name_index      lowercase display name      -> uid
  _compound_index  "system_name" (legacy rows) -> uid
  _hip_index       Hipparcos id                -> uid

Planets reference their host by uid. Removing a star removes its planets
too, so no planet ever points at a missing host.

Query interface
---------------
  universe.get_stars()               → stars, insertion order
  universe.get_planets()             → planets, insertion order
  universe.get(uid)                  → single body
  universe.lookup("alpha centauri")  → star by any key ("hip71683" too)
  universe.search("barnard")         → free-text search (HIP id, key, substring)
  universe.planets_of(star)          → planets orbiting a star
"""

from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional, Set, Tuple

from .bodies import BodyKind, CelestialBody

logger = logging.getLogger(__name__)


def compound_key(system_name: str, name: str) -> str:
    return f"{system_name}_{name}".lower().replace(" ", "_")


def _parse_hip_query(query: str) -> Optional[int]:
    """'hip123' or '123' -> 123, anything else -> None."""
    digits = query[3:] if query.startswith("hip") and len(query) > 3 else query
    try:
        return int(digits)
    except ValueError:
        return None


class Universe:
    """
    Arena of stars and planets plus their lookup indices.

    Populated once by the catalogue loader; the overlap pass may remove
    stars before the first frame. Read-only afterwards.
    """

    def __init__(self):
        self._bodies: Dict[int, CelestialBody] = {}
        self._next_uid = 0

        self._name_index: Dict[str, int] = {}
        self._compound_index: Dict[str, int] = {}
        self._hip_index: Dict[int, int] = {}

        # reverse maps: uid -> (index name, key) it owns; host uid -> planet uids
        self._keys_of: Dict[int, Set[Tuple[str, object]]] = {}
        self._planets_by_host: Dict[int, Dict[int, None]] = {}

    # -----------------------------------------------------------------------
    # Mutation
    # -----------------------------------------------------------------------

    def _insert(self, body: CelestialBody) -> int:
        uid = self._next_uid
        self._next_uid += 1
        body.uid = uid
        self._bodies[uid] = body
        return uid

    def _index(self, which: str) -> Dict:
        return {"name": self._name_index,
                "compound": self._compound_index,
                "hip": self._hip_index}[which]

    def _set_key(self, which: str, key, uid: int) -> Optional[int]:
        """Point key at uid; returns the uid that held it before, if another."""
        index = self._index(which)
        old = index.get(key)
        if old is not None and old != uid:
            self._keys_of[old].discard((which, key))
        index[key] = uid
        self._keys_of.setdefault(uid, set()).add((which, key))
        return old if old != uid else None

    def add_star(self, star: CelestialBody, *, overwrite_name: bool = True,
                 system_name: Optional[str] = None) -> int:
        """
        Add a star and index it.

        overwrite_name   True: a later star with the same name takes the name
                         key (current format). False: first write wins (legacy).
        system_name      also index under the compound "system_name" key.

        A star that loses all of its keys to a newer one is dropped.
        """
        if star.kind is not BodyKind.STAR:
            raise ValueError(f"Not a star: {star.name}")

        uid = self._insert(star)
        self._keys_of[uid] = set()
        displaced: List[Optional[int]] = []

        name_key = star.name.lower()
        if overwrite_name or name_key not in self._name_index:
            displaced.append(self._set_key("name", name_key, uid))

        if system_name is not None:
            displaced.append(self._set_key("compound",
                                           compound_key(system_name, star.name), uid))

        hip_id = star.star.hip_id if star.star else 0
        if hip_id > 0:
            displaced.append(self._set_key("hip", hip_id, uid))

        for old in displaced:
            if old is not None and old in self._bodies and not self._is_indexed(old):
                logger.debug("Star #%d '%s' replaced by a later entry",
                             old, self._bodies[old].name)
                self.remove(old)
        return uid

    def add_planet(self, planet: CelestialBody) -> int:
        if planet.kind is not BodyKind.PLANET:
            raise ValueError(f"Not a planet: {planet.name}")
        host_uid = planet.planet.host_uid
        if host_uid not in self._bodies:
            raise KeyError(f"Host star #{host_uid} of {planet.name} "
                           f"is not in the universe")
        uid = self._insert(planet)
        self._planets_by_host.setdefault(host_uid, {})[uid] = None
        return uid

    def remove(self, uid: int) -> List[CelestialBody]:
        """
        Remove a body and everything that depends on it.
        Returns the removed bodies (the body itself first).
        """
        body = self._bodies.pop(uid, None)
        if body is None:
            return []
        removed = [body]

        if body.kind is BodyKind.STAR:
            for which, key in self._keys_of.pop(uid, ()):
                del self._index(which)[key]
            for planet_uid in self._planets_by_host.pop(uid, {}):
                removed.extend(self.remove(planet_uid))
        else:
            siblings = self._planets_by_host.get(body.planet.host_uid)
            if siblings is not None:
                siblings.pop(uid, None)
        return removed

    def remove_many(self, uids: Iterable[int]) -> List[CelestialBody]:
        removed: List[CelestialBody] = []
        for uid in uids:
            removed.extend(self.remove(uid))
        return removed

    def _is_indexed(self, uid: int) -> bool:
        return bool(self._keys_of.get(uid))

    # -----------------------------------------------------------------------
    # Queries
    # -----------------------------------------------------------------------

    def get(self, uid: int) -> Optional[CelestialBody]:
        return self._bodies.get(uid)

    def get_stars(self) -> List[CelestialBody]:
        return [b for b in self._bodies.values() if b.kind is BodyKind.STAR]

    def get_planets(self) -> List[CelestialBody]:
        return [b for b in self._bodies.values() if b.kind is BodyKind.PLANET]

    def planets_of(self, star: CelestialBody) -> List[CelestialBody]:
        return [self._bodies[uid] for uid in self._planets_by_host.get(star.uid, ())]

    def host_of(self, planet: CelestialBody) -> Optional[CelestialBody]:
        if planet.planet is None:
            return None
        return self._bodies.get(planet.planet.host_uid)

    def get_by_hip(self, hip_id: int) -> Optional[CelestialBody]:
        uid = self._hip_index.get(hip_id)
        return self._bodies.get(uid) if uid is not None else None

    def lookup(self, key: str) -> Optional[CelestialBody]:
        """
        Resolve a catalogue key: display name, compound "system_name" key,
        or "hipNNN". Case-insensitive.
        """
        key = key.strip().lower()
        uid = self._name_index.get(key)
        if uid is None:
            uid = self._compound_index.get(key)
        if uid is None and key.startswith("hip"):
            hip_id = _parse_hip_query(key)
            if hip_id is not None:
                uid = self._hip_index.get(hip_id)
        return self._bodies.get(uid) if uid is not None else None

    def keys(self) -> List[str]:
        """Every lookup key, the way the catalogue indexed it."""
        return (list(self._name_index)
                + list(self._compound_index)
                + [f"hip{h}" for h in self._hip_index])

    def search(self, query: str) -> Optional[CelestialBody]:
        """
        Free-text star search.

        1. "hip123" or "123"  → Hipparcos index
        2. exact key          → name / compound key
        3. substring          → first star whose name contains the query
        """
        q = query.strip().lower()
        if not q:
            return None

        if q.startswith("hip") or q.isdigit():
            hip_id = _parse_hip_query(q)
            if hip_id is not None:
                found = self.get_by_hip(hip_id)
                if found is not None:
                    return found

        found = self.lookup(q)
        if found is not None:
            return found

        for star in self.get_stars():
            if q in star.name.lower():
                return star
        return None

    # -----------------------------------------------------------------------
    # Stats
    # -----------------------------------------------------------------------

    @property
    def star_count(self) -> int:
        return sum(1 for b in self._bodies.values() if b.kind is BodyKind.STAR)

    @property
    def planet_count(self) -> int:
        return sum(1 for b in self._bodies.values() if b.kind is BodyKind.PLANET)

    def __len__(self) -> int:
        return len(self._bodies)

    def __contains__(self, uid: int) -> bool:
        return uid in self._bodies

    def __repr__(self) -> str:
        return f"<Universe: {self.star_count} stars, {self.planet_count} planets>"


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------

def build_universe(stars_path, planets_path=None, *, resolve_overlaps: bool = True):
    """
    Build the universe from catalogue files. Call once at startup.

    Order: stars → overlap removal → planets (planets only see surviving hosts).
    Raises CatalogLoadError when a file is missing or unreadable.
    Returns (universe, reports) where reports maps "stars"/"planets" to LoadReport.
    """
    from .catalogue_loader import load_planets, load_stars
    from .overlap import remove_overlapping_stars

    u = Universe()
    logger.info("Building universe...")

    reports = {"stars": load_stars(stars_path, u)}

    if resolve_overlaps:
        removed = remove_overlapping_stars(u)
        reports["stars"].overlaps_removed = len(removed)

    if planets_path is not None:
        reports["planets"] = load_planets(planets_path, u)

    logger.info("Universe ready: %r", u)
    return u, reports
