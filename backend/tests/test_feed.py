from models import Candidate, GeoPoint, LocationPreference
from services.feed import build_feed, exclude_seen, feed_notice


HOME = GeoPoint(47.6062, -122.3321)  # Seattle
NEAR = GeoPoint(47.6205, -122.3493)
FAR = GeoPoint(45.5152, -122.6784)  # Portland


def _item(item_id, owner, point=None, **extra):
    return Candidate(item={"id": item_id, "user_id": owner, **extra}, owner_point=point)


def test_exclude_seen_drops_own_swiped_and_inactive():
    candidates = [
        _item("1", "me"),
        _item("2", "bob"),
        _item("3", "amy"),
        _item("4", "amy", is_active=False),
        _item("5", "amy"),
    ]
    kept = exclude_seen(candidates, "me", swiped_ids=["3"])
    assert [c.item["id"] for c in kept] == ["2", "5"]


def test_build_feed_ranks_nearby_first_and_caps():
    pref = LocationPreference(point=HOME, radius_miles=25, enabled=True)
    candidates = [
        _item("far", "bob", FAR),
        _item("mine", "me", NEAR),
        _item("near", "amy", NEAR),
        _item("unknown", "cal"),
    ]

    feed = build_feed(pref, candidates, requester_id="me", cap=2)

    assert [c.item["id"] for c in feed.items] == ["near", "far"]
    assert feed.nearby_count == 1
    assert feed.has_nearby_items
    assert feed.location_active
    assert feed.notice == "Prioritizing items within 25 miles"


def test_build_feed_respects_fetch_limit():
    pref = LocationPreference(point=HOME, radius_miles=25, enabled=True)
    candidates = [_item(str(i), "bob", FAR) for i in range(3)] + [_item("near", "amy", NEAR)]

    feed = build_feed(pref, candidates, cap=10, fetch_limit=3)

    assert [c.item["id"] for c in feed.items] == ["0", "1", "2"]
    assert feed.nearby_count == 0
    assert feed.notice == "No items found within 25 miles - showing all items"


def test_feed_notice_absent_when_location_off():
    pref = LocationPreference(point=HOME, radius_miles=25, enabled=False)
    assert feed_notice(pref, 0) is None
    assert feed_notice(LocationPreference(point=None, radius_miles=25, enabled=True), 3) is None
