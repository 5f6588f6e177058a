"""Runtime configuration read from environment variables."""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

logger = logging.getLogger(__name__)

DEFAULT_MAINTENANCE_API_URL = "http://localhost:5001/api"
DEFAULT_VEHICLE_API_URL = "http://localhost:8000/api"
DEFAULT_DRIVER_API_URL = "http://localhost:8001/api"
DEFAULT_TIMEOUT = 30.0
DEFAULT_SESSION_TTL_MINUTES = 480


@dataclass
class Config:
    maintenance_api_url: str = DEFAULT_MAINTENANCE_API_URL
    vehicle_api_url: str = DEFAULT_VEHICLE_API_URL
    driver_api_url: str = DEFAULT_DRIVER_API_URL
    api_timeout: float = DEFAULT_TIMEOUT
    session_ttl_minutes: int = DEFAULT_SESSION_TTL_MINUTES
    secret_key: str = "dev-secret-key-change-in-prod"
    log_level: str = "INFO"


def _number(env: Mapping[str, str], name: str, default, cast):
    raw = env.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        value = cast(raw)
    except ValueError:
        logger.warning("Invalid %s=%r, using default %s", name, raw, default)
        return default
    if value <= 0:
        logger.warning("%s must be positive, using default %s", name, default)
        return default
    return value


def load_config(env: Optional[Mapping[str, str]] = None) -> Config:
    """Build a Config from the environment (or a given mapping)."""
    env = os.environ if env is None else env
    return Config(
        maintenance_api_url=env.get("MAINTENANCE_API_URL", DEFAULT_MAINTENANCE_API_URL).rstrip("/"),
        vehicle_api_url=env.get("VEHICLE_API_URL", DEFAULT_VEHICLE_API_URL).rstrip("/"),
        driver_api_url=env.get("DRIVER_API_URL", DEFAULT_DRIVER_API_URL).rstrip("/"),
        api_timeout=_number(env, "API_TIMEOUT", DEFAULT_TIMEOUT, float),
        session_ttl_minutes=_number(env, "SESSION_TTL_MINUTES", DEFAULT_SESSION_TTL_MINUTES, int),
        secret_key=env.get("SECRET_KEY", "dev-secret-key-change-in-prod"),
        log_level=env.get("LOG_LEVEL", "INFO").upper(),
    )


def setup_logging(config: Config) -> None:
    logging.basicConfig(
        level=getattr(logging, config.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
