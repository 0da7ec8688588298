from __future__ import annotations

from typing import Iterable, List, Optional

from models import Candidate, FeedResult, LocationPreference
from services.proximity import rank_by_proximity


def exclude_seen(
    candidates: Iterable[Candidate],
    requester_id: Optional[str],
    swiped_ids: Iterable[str] = (),
) -> List[Candidate]:
    """Drop the requester's own listings, already-swiped listings and inactive ones."""
    swiped = set(swiped_ids)
    kept: list[Candidate] = []
    for c in candidates:
        if c.item.get("is_active") is False:
            continue
        if requester_id is not None and c.item.get("user_id") == requester_id:
            continue
        if c.item.get("id") in swiped:
            continue
        kept.append(c)
    return kept


def feed_notice(preference: LocationPreference, nearby_count: int) -> Optional[str]:
    if not preference.is_active:
        return None
    radius = f"{preference.radius_miles:g}"
    if nearby_count > 0:
        return f"Prioritizing items within {radius} miles"
    return f"No items found within {radius} miles - showing all items"


def build_feed(
    preference: LocationPreference,
    candidates: Iterable[Candidate],
    *,
    requester_id: Optional[str] = None,
    swiped_ids: Iterable[str] = (),
    cap: int = 10,
    fetch_limit: int = 50,
) -> FeedResult:
    pool = exclude_seen(candidates, requester_id, swiped_ids)[: max(0, fetch_limit)]
    ranked = rank_by_proximity(preference, pool, cap)
    return FeedResult(
        items=ranked.items,
        nearby_count=ranked.nearby_count,
        location_active=preference.is_active,
        notice=feed_notice(preference, ranked.nearby_count),
    )
