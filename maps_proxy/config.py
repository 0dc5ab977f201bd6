import os
from dataclasses import dataclass
from typing import Optional

# =========================
# 🗺️ UPSTREAM PROVIDER
# =========================
MAPS_SCRIPT_URL = "https://maps.googleapis.com/maps/api/js"
GEOCODE_URL = "https://maps.googleapis.com/maps/api/geocode/json"
PLACES_TEXT_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/textsearch/json"
PLACE_DETAILS_URL = "https://maps.googleapis.com/maps/api/place/details/json"

UPSTREAM_LANGUAGE = "ja"
DEFAULT_CALLBACK = "initMap"
PLACE_DETAILS_FIELDS = "opening_hours,price_level,formatted_phone_number,website"
PLACES_OK_STATUSES = ("OK", "ZERO_RESULTS")

SCRIPT_CACHE_CONTROL = "public, max-age=3600"
GEOCODE_CACHE_CONTROL = "public, max-age=86400"
PLACES_CACHE_CONTROL = "public, max-age=3600"


def _optional(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


# =========================
# 🌍 ENVIRONMENT CONFIG
# =========================
@dataclass(frozen=True)
class Settings:
    maps_api_key: Optional[str] = None
    server_api_key: Optional[str] = None
    facility_store: Optional[str] = None
    mongo_host: str = "mongo"
    mongo_port: int = 27017
    mongo_db_name: str = "maps_proxy"
    facility_collection: str = "facilities"
    environment: str = "development"
    log_level: str = "INFO"
    request_timeout: Optional[float] = None
    metrics_port: Optional[int] = None

    @property
    def server_key(self) -> Optional[str]:
        """Credential for server-to-provider calls, never returned to clients."""
        return self.server_api_key or self.maps_api_key

    @property
    def mongo_uri(self) -> str:
        return f"mongodb://{self.mongo_host}:{self.mongo_port}"

    @classmethod
    def from_env(cls) -> "Settings":
        timeout = _optional("REQUEST_TIMEOUT")
        metrics_port = _optional("METRICS_PORT")
        store = _optional("FACILITY_STORE")
        return cls(
            maps_api_key=_optional("GOOGLE_MAPS_API_KEY"),
            server_api_key=_optional("GOOGLE_MAPS_SERVER_API_KEY"),
            facility_store=store.lower() if store else None,
            mongo_host=os.getenv("MONGO_HOST", "mongo"),
            mongo_port=int(os.getenv("MONGO_PORT", "27017")),
            mongo_db_name=os.getenv("MONGO_DB_NAME", "maps_proxy"),
            facility_collection=os.getenv("FACILITY_COLLECTION", "facilities"),
            environment=os.getenv("ENVIRONMENT", "development"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            request_timeout=float(timeout) if timeout else None,
            metrics_port=int(metrics_port) if metrics_port else None,
        )
