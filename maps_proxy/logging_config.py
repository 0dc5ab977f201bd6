import logging
import json
import os
from datetime import datetime, timezone

ENVIRONMENT = os.getenv("ENVIRONMENT", "development")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=getattr(logging, LOG_LEVEL.upper(), logging.INFO)
)
logger = logging.getLogger("maps_proxy")


def configure_logging(environment: str, log_level: str):
    """Apply the app's settings; unknown levels fall back to INFO."""
    global ENVIRONMENT
    ENVIRONMENT = environment
    logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))


def log_structured(message: str, level: str = "INFO", **kwargs):
    log_data = {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "environment": ENVIRONMENT,
        "service": "maps-proxy",
        "message": message,
        **kwargs
    }
    getattr(logger, level.lower())(json.dumps(log_data, default=str))
