from __future__ import annotations

import os
from typing import Any, Optional

from pydantic import BaseModel, Field


class Configuration(BaseModel):
    # Feed
    feed_cap: int = Field(default=10)
    feed_fetch_limit: int = Field(default=50)

    # Location settings
    default_radius_miles: float = Field(default=25.0)
    min_radius_miles: float = Field(default=1.0)
    max_radius_miles: float = Field(default=1000.0)
    location_enabled_default: bool = Field(default=False)
    settings_ttl_sec: int = Field(default=86400)

    @classmethod
    def from_env(cls, overrides: Optional[dict[str, Any]] = None) -> "Configuration":
        raw: dict[str, Any] = {}

        env_map = {
            "feed_cap": os.getenv("FEED_CAP"),
            "feed_fetch_limit": os.getenv("FEED_FETCH_LIMIT"),
            "default_radius_miles": os.getenv("DEFAULT_RADIUS_MILES"),
            "min_radius_miles": os.getenv("MIN_RADIUS_MILES"),
            "max_radius_miles": os.getenv("MAX_RADIUS_MILES"),
            "location_enabled_default": os.getenv("LOCATION_ENABLED_DEFAULT"),
            "settings_ttl_sec": os.getenv("LOCATION_SETTINGS_TTL_SEC"),
        }

        bool_fields = {"location_enabled_default"}

        for k, v in env_map.items():
            if v is None:
                continue
            if k in bool_fields:
                raw[k] = str(v).lower() in {"1", "true", "yes", "on"}
            else:
                raw[k] = v

        if overrides:
            raw.update({k: v for k, v in overrides.items() if v is not None})

        return cls(**raw)

    def log_summary(self) -> str:
        return (
            "feed_cap=%s fetch_limit=%s default_radius=%.1f radius_range=[%.1f, %.1f] location_default=%s"
            % (
                self.feed_cap,
                self.feed_fetch_limit,
                self.default_radius_miles,
                self.min_radius_miles,
                self.max_radius_miles,
                self.location_enabled_default,
            )
        )
