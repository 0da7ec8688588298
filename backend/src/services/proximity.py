from __future__ import annotations

import math
from typing import Iterable, List, Sequence

from loguru import logger

from models import Candidate, GeoPoint, LocationPreference, ProximityResult


EARTH_RADIUS_MILES = 3959.0


def distance_miles(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance in miles (haversine)."""
    phi1 = math.radians(a.latitude)
    phi2 = math.radians(b.latitude)
    dphi = math.radians(b.latitude - a.latitude)
    dlambda = math.radians(b.longitude - a.longitude)
    h = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # rounding can push h just outside [0, 1] for identical or antipodal points
    h = min(max(h, 0.0), 1.0)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_MILES * c


def is_within_radius(origin: GeoPoint, target: GeoPoint, radius_miles: float) -> bool:
    return distance_miles(origin, target) <= radius_miles


def _is_nearby(origin: GeoPoint, candidate: Candidate, radius_miles: float) -> bool:
    if candidate.owner_point is None or radius_miles <= 0:
        return False
    return is_within_radius(origin, candidate.owner_point, radius_miles)


def filter_by_distance(
    origin: GeoPoint,
    candidates: Iterable[Candidate],
    radius_miles: float,
) -> List[Candidate]:
    """Keep only candidates whose owner is within the radius; drops unlocated ones."""
    return [c for c in candidates if _is_nearby(origin, c, radius_miles)]


def rank_by_proximity(
    preference: LocationPreference,
    candidates: Sequence[Candidate],
    cap: int,
) -> ProximityResult:
    """Move candidates within the preference radius ahead of the rest.

    Proximity only prioritises: candidates outside the radius (or without an
    owner location) still follow the nearby tier. Relative order inside each
    tier is the input order. ``nearby_count`` is counted before ``cap`` is
    applied so callers can tell "nothing nearby" apart from "nearby but cut".
    """
    cap = max(0, cap)

    if not preference.is_active:
        return ProximityResult(items=list(candidates[:cap]), nearby_count=0)

    assert preference.point is not None and preference.radius_miles is not None
    nearby: list[Candidate] = []
    other: list[Candidate] = []
    for candidate in candidates:
        if _is_nearby(preference.point, candidate, preference.radius_miles):
            nearby.append(candidate)
        else:
            other.append(candidate)

    logger.debug(
        "proximity buckets nearby={} other={} radius_miles={} cap={}",
        len(nearby),
        len(other),
        preference.radius_miles,
        cap,
    )
    ranked = nearby + other
    return ProximityResult(items=ranked[:cap], nearby_count=len(nearby))
