"""
Overlap removal: drops catalogue duplicates whose physical extents overlap.

Merged catalogues often list the same star twice under slightly different
names, or place a giant on top of a companion. Two stars overlap when
their separation is smaller than either radius; the larger one is removed,
keeping the compact body.

Stars are bucketed by their truncated integer (x, y, z) in light-years so
only stars within the same cubic light-year are compared.

Runs once, after the star load and before planets are attached or any
view query runs.
"""

from __future__ import annotations
import logging
from collections import defaultdict
from typing import Dict, List, Set, Tuple

from core.coords import distance
from .bodies import CelestialBody
from .universe import Universe

logger = logging.getLogger(__name__)

BucketKey = Tuple[int, int, int]


def bucket_key(star: CelestialBody) -> BucketKey:
    x, y, z = star.position
    return (int(x), int(y), int(z))     # truncation toward zero


def build_buckets(stars: List[CelestialBody]) -> Dict[BucketKey, List[CelestialBody]]:
    buckets: Dict[BucketKey, List[CelestialBody]] = defaultdict(list)
    for star in stars:
        buckets[bucket_key(star)].append(star)
    return buckets


def overlaps(a: CelestialBody, b: CelestialBody) -> bool:
    """Centre of one star lies inside the other."""
    sep = distance(a.position, b.position)
    return sep < a.radius_ly or sep < b.radius_ly


def find_overlapping(stars: List[CelestialBody]) -> Set[int]:
    """
    Return uids of the stars to remove.

    Pairs are visited in bucket insertion order. On overlap the larger radius
    is marked (the second star on a tie); once the outer star is marked it
    is not compared again.
    """
    marked: Set[int] = set()

    for bucket in build_buckets(stars).values():
        if len(bucket) <= 1:
            continue

        for i, star1 in enumerate(bucket):
            if star1.uid in marked:
                continue
            for star2 in bucket[i + 1:]:
                if star2.uid in marked:
                    continue
                if not overlaps(star1, star2):
                    continue
                if star1.radius_km > star2.radius_km:
                    marked.add(star1.uid)
                    break
                marked.add(star2.uid)

    return marked


def remove_overlapping_stars(universe: Universe) -> List[CelestialBody]:
    """Remove overlapping stars (larger ones) from the universe. Returns the removed stars."""
    stars = universe.get_stars()
    logger.info("Starting overlap removal with %d stars", len(stars))

    marked = find_overlapping(stars)
    removed = universe.remove_many(sorted(marked))
    removed_stars = [b for b in removed if b.is_star]

    for star in removed_stars:
        logger.debug("Removed overlapping star %s", star.name)
    logger.info("Removed %d overlapping stars (larger ones)", len(removed_stars))
    return removed_stars
