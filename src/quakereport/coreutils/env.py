from dotenv import load_dotenv
import os

load_dotenv()  # take environment variables from .env

ENV_PREFIX = "QUAKEREPORT_"


def env_get(key: str, default: str | None = None) -> str | None:
    """Get environment variable or return default."""
    return os.getenv(key, default)


def setting(name: str, default: str | None = None) -> str | None:
    """Get a QUAKEREPORT_-prefixed setting, treating blank values as unset."""
    value = env_get(f"{ENV_PREFIX}{name.upper()}")
    if value is None or not value.strip():
        return default
    return value.strip()
