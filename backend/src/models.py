"""Data models for the thrift swipe discovery backend."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    @classmethod
    def from_fields(cls, latitude: Optional[float], longitude: Optional[float]) -> Optional["GeoPoint"]:
        """Build a point from nullable storage columns; 0.0 is a real coordinate."""
        if latitude is None or longitude is None:
            return None
        return cls(latitude=float(latitude), longitude=float(longitude))


@dataclass
class LocationPreference:
    point: Optional[GeoPoint] = None
    radius_miles: Optional[float] = None
    enabled: bool = False
    updated_at: Optional[float] = None

    @property
    def is_active(self) -> bool:
        return self.enabled and self.point is not None and self.radius_miles is not None


@dataclass
class Candidate:
    item: Dict[str, Any] = field(default_factory=dict)
    owner_point: Optional[GeoPoint] = None


@dataclass
class ProximityResult:
    items: List[Candidate]
    nearby_count: int = 0

    @property
    def has_nearby_items(self) -> bool:
        return self.nearby_count > 0


@dataclass
class FeedResult:
    items: List[Candidate]
    nearby_count: int = 0
    location_active: bool = False
    notice: Optional[str] = None

    @property
    def has_nearby_items(self) -> bool:
        return self.nearby_count > 0
