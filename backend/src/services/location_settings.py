from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Dict, Optional

from loguru import logger

from config import Configuration
from models import GeoPoint, LocationPreference


@dataclass
class LocationUpdate:
    """Partial update; fields left as None are not touched."""

    latitude: Optional[float] = None
    longitude: Optional[float] = None
    search_radius_miles: Optional[float] = None
    location_enabled: Optional[bool] = None


def validate_location_update(update: LocationUpdate, cfg: Configuration) -> None:
    if update.latitude is not None and not -90 <= update.latitude <= 90:
        raise ValueError("Invalid latitude")
    if update.longitude is not None and not -180 <= update.longitude <= 180:
        raise ValueError("Invalid longitude")
    if update.search_radius_miles is not None and not (
        cfg.min_radius_miles <= update.search_radius_miles <= cfg.max_radius_miles
    ):
        raise ValueError("Invalid search radius")


@dataclass
class _StoredSettings:
    latitude: Optional[float]
    longitude: Optional[float]
    radius_miles: Optional[float]
    enabled: bool
    updated_at: float

    def to_preference(self) -> LocationPreference:
        return LocationPreference(
            point=GeoPoint.from_fields(self.latitude, self.longitude),
            radius_miles=self.radius_miles,
            enabled=self.enabled,
            updated_at=self.updated_at,
        )


class LocationSettingsManager:
    """Simple in-memory store of per-user location settings."""

    def __init__(self, cfg: Optional[Configuration] = None) -> None:
        self.cfg = cfg or Configuration.from_env()
        self._settings: Dict[str, _StoredSettings] = {}
        self._last_access: Dict[str, float] = {}

    def get(self, user_id: str) -> LocationPreference:
        self._cleanup()
        stored = self._settings.get(user_id)
        if stored is None:
            return self._default()
        self._last_access[user_id] = time.time()
        return stored.to_preference()

    def update(self, user_id: str, update: LocationUpdate) -> LocationPreference:
        validate_location_update(update, self.cfg)
        self._cleanup()

        now = time.time()
        current = self._settings.get(user_id)
        if current is None:
            current = _StoredSettings(
                latitude=None,
                longitude=None,
                radius_miles=self.cfg.default_radius_miles,
                enabled=self.cfg.location_enabled_default,
                updated_at=now,
            )

        if update.latitude is not None:
            current.latitude = update.latitude
        if update.longitude is not None:
            current.longitude = update.longitude
        if update.search_radius_miles is not None:
            current.radius_miles = update.search_radius_miles
        if update.location_enabled is not None:
            current.enabled = update.location_enabled
        current.updated_at = now

        self._settings[user_id] = current
        self._last_access[user_id] = now
        logger.debug("location settings updated user={} enabled={}", user_id, current.enabled)
        return current.to_preference()

    def reset(self, user_id: str) -> None:
        self._settings.pop(user_id, None)
        self._last_access.pop(user_id, None)

    def _default(self) -> LocationPreference:
        return LocationPreference(
            point=None,
            radius_miles=self.cfg.default_radius_miles,
            enabled=self.cfg.location_enabled_default,
        )

    def _cleanup(self) -> None:
        """Drop settings not touched within the TTL."""
        now = time.time()
        expired = [
            uid for uid, last in self._last_access.items()
            if now - last > self.cfg.settings_ttl_sec
        ]
        for uid in expired:
            del self._settings[uid]
            del self._last_access[uid]


# Global singleton
location_settings = LocationSettingsManager()
