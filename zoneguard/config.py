"""Engine settings.

Values come from keyword arguments or, via EngineSettings.from_env(), from
ZONEGUARD_* environment variables:

    ZONEGUARD_DANGER_OVERLAP_RATIO   (default 0.2)
    ZONEGUARD_FALLBACK_OVERLAP_FRACTION (default 0.01)
    ZONEGUARD_MISSING_ZONE_TYPE      (default DID)
    ZONEGUARD_ZONE_CACHE_TTL         (seconds, default 300)
    ZONEGUARD_LOG_LEVEL              (default INFO)
    ZONEGUARD_PROFILE                (0/1, default 0)
"""
import os
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from zoneguard.model.zone_types import ZoneType

_FALSY = ("0", "false", "False", "no", "")


class EngineSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    # area checks above this overlap ratio are DANGER, below it WARNING
    danger_overlap_ratio: float = Field(0.2, ge=0.0, le=1.0)
    # share of the smaller area used when the exact intersection fails
    fallback_overlap_fraction: float = Field(0.01, ge=0.0, le=1.0)
    # zone type assigned to features that carry no type property at all
    missing_zone_type: ZoneType = ZoneType.DID
    zone_cache_ttl_seconds: float = Field(300.0, gt=0)
    log_level: str = "INFO"
    profile: bool = False

    @classmethod
    def from_env(cls, environ: Optional[dict] = None) -> "EngineSettings":
        env = os.environ if environ is None else environ
        values = {}
        if "ZONEGUARD_DANGER_OVERLAP_RATIO" in env:
            values["danger_overlap_ratio"] = env["ZONEGUARD_DANGER_OVERLAP_RATIO"]
        if "ZONEGUARD_FALLBACK_OVERLAP_FRACTION" in env:
            values["fallback_overlap_fraction"] = env["ZONEGUARD_FALLBACK_OVERLAP_FRACTION"]
        if "ZONEGUARD_MISSING_ZONE_TYPE" in env:
            values["missing_zone_type"] = env["ZONEGUARD_MISSING_ZONE_TYPE"].strip().upper()
        if "ZONEGUARD_ZONE_CACHE_TTL" in env:
            values["zone_cache_ttl_seconds"] = env["ZONEGUARD_ZONE_CACHE_TTL"]
        values["log_level"] = env.get("ZONEGUARD_LOG_LEVEL", "INFO").upper()
        values["profile"] = env.get("ZONEGUARD_PROFILE", "0") not in _FALSY
        return cls(**values)


DEFAULT_SETTINGS = EngineSettings()
