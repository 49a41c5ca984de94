# bionic_subtitles/config.py
"""
Service configuration.
"""
import os
from dataclasses import dataclass, field
from typing import FrozenSet, Optional

from dotenv import load_dotenv

from .limits import FREE_TIER_LIMIT


@dataclass
class ServiceConfig:
    """Settings for the HTTP service."""
    host: str = "0.0.0.0"
    port: int = 8000
    max_request_bytes: int = 10 * 1024 * 1024
    free_tier_limit: int = FREE_TIER_LIMIT
    rate_limit_requests: int = 30
    rate_limit_window_seconds: int = 60
    min_intensity: float = 0.1
    max_intensity: float = 1.0
    default_intensity: float = 0.5
    license_keys: FrozenSet[str] = field(default_factory=frozenset)
    download_tagger: bool = True

    def clamp_intensity(self, value) -> float:
        """Clamp a requested intensity; non-numbers get the default."""
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return self.default_intensity
        return min(self.max_intensity, max(self.min_intensity, float(value)))

    def is_licensed(self, key: Optional[str]) -> bool:
        return bool(key) and key in self.license_keys

    @classmethod
    def from_env(cls, env_file: Optional[str] = None) -> "ServiceConfig":
        """
        Build a config from BIONIC_* environment variables.

        Values in a .env file are loaded first without overriding the
        process environment.
        """
        load_dotenv(env_file, override=False)
        defaults = cls()
        keys = os.getenv("BIONIC_LICENSE_KEYS", "")
        return cls(
            host=os.getenv("BIONIC_HOST", defaults.host),
            port=int(os.getenv("BIONIC_PORT", defaults.port)),
            max_request_bytes=int(os.getenv("BIONIC_MAX_REQUEST_BYTES", defaults.max_request_bytes)),
            free_tier_limit=int(os.getenv("BIONIC_FREE_TIER_LIMIT", defaults.free_tier_limit)),
            rate_limit_requests=int(os.getenv("BIONIC_RATE_LIMIT_REQUESTS", defaults.rate_limit_requests)),
            rate_limit_window_seconds=int(
                os.getenv("BIONIC_RATE_LIMIT_WINDOW_SECONDS", defaults.rate_limit_window_seconds)
            ),
            license_keys=frozenset(k.strip() for k in keys.split(",") if k.strip()),
            download_tagger=os.getenv("BIONIC_DOWNLOAD_TAGGER", "1").lower() not in ("0", "false", "no"),
        )
