from __future__ import annotations

from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel, Field

load_dotenv()

from config import Configuration
from models import Candidate, GeoPoint, LocationPreference
from services.feed import build_feed
from services.location_settings import LocationUpdate, location_settings


app = FastAPI(title="Thrift Swipe Discovery")
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class LocationUpdateRequest(BaseModel):
    latitude: Optional[float] = Field(None, description="Latitude in degrees")
    longitude: Optional[float] = Field(None, description="Longitude in degrees")
    search_radius_miles: Optional[float] = Field(None, description="Search radius in miles")
    location_enabled: Optional[bool] = Field(None, description="Prioritise nearby items in the feed")


class LocationPayload(BaseModel):
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    search_radius_miles: Optional[float] = None
    location_enabled: bool = False
    updated_at: Optional[float] = None


class CandidateRequest(BaseModel):
    item: Dict[str, Any] = {}
    owner_latitude: Optional[float] = None
    owner_longitude: Optional[float] = None


class DiscoverRequest(BaseModel):
    user_id: str = Field(..., description="Requesting user")
    candidates: List[CandidateRequest] = Field(default_factory=list)
    swiped_ids: List[str] = Field(default_factory=list, description="Items the user already swiped on")
    limit: Optional[int] = Field(None, ge=0, description="Max items to return; defaults to FEED_CAP")


class DiscoverResponse(BaseModel):
    items: List[Dict[str, Any]]
    nearby_count: int
    has_nearby_items: bool
    notice: Optional[str] = None


def _to_location_payload(pref: LocationPreference) -> LocationPayload:
    return LocationPayload(
        latitude=pref.point.latitude if pref.point else None,
        longitude=pref.point.longitude if pref.point else None,
        search_radius_miles=pref.radius_miles,
        location_enabled=pref.enabled,
        updated_at=pref.updated_at,
    )


@app.get("/healthz")
def healthz() -> dict:
    cfg = Configuration.from_env()
    logger.info("cfg: {}", cfg.log_summary())
    return {"status": "ok"}


@app.get("/profile/{user_id}/location")
def get_location(user_id: str) -> dict:
    pref = location_settings.get(user_id)
    return {"location": _to_location_payload(pref).model_dump()}


@app.post("/profile/{user_id}/location")
def update_location(user_id: str, req: LocationUpdateRequest) -> dict:
    update = LocationUpdate(
        latitude=req.latitude,
        longitude=req.longitude,
        search_radius_miles=req.search_radius_miles,
        location_enabled=req.location_enabled,
    )
    try:
        pref = location_settings.update(user_id, update)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    return {"profile": _to_location_payload(pref).model_dump()}


@app.post("/discover", response_model=DiscoverResponse)
def discover(req: DiscoverRequest) -> DiscoverResponse:
    cfg = Configuration.from_env()
    try:
        pref = location_settings.get(req.user_id)
        candidates = [
            Candidate(item=c.item, owner_point=GeoPoint.from_fields(c.owner_latitude, c.owner_longitude))
            for c in req.candidates
        ]
        feed = build_feed(
            pref,
            candidates,
            requester_id=req.user_id,
            swiped_ids=req.swiped_ids,
            cap=req.limit if req.limit is not None else cfg.feed_cap,
            fetch_limit=cfg.feed_fetch_limit,
        )
        logger.info(
            "discover user={} candidates={} returned={} nearby={} location_active={}",
            req.user_id,
            len(candidates),
            len(feed.items),
            feed.nearby_count,
            feed.location_active,
        )
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    except Exception as exc:
        logger.exception("discover failed: {}", exc)
        raise HTTPException(status_code=500, detail="internal error")

    return DiscoverResponse(
        items=[c.item for c in feed.items],
        nearby_count=feed.nearby_count,
        has_nearby_items=feed.has_nearby_items,
        notice=feed.notice,
    )


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=8010, reload=True)
