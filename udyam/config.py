"""Runtime settings - read from the environment (and a .env file when present)."""

import os
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field


DEFAULT_DATABASE_URL = "sqlite:///udyam.db"
DEFAULT_API_URL = "http://127.0.0.1:8000"
DEFAULT_PINCODE_API_URL = "https://api.postalpincode.in/pincode"


class Settings(BaseModel):
    """Process-wide configuration, resolved once at startup."""

    model_config = ConfigDict(frozen=True)

    database_url: str = Field(DEFAULT_DATABASE_URL, description="SQLAlchemy URL for registration records")
    api_url: str = Field(DEFAULT_API_URL, description="Base URL of the registration service")
    pincode_api_url: str = Field(DEFAULT_PINCODE_API_URL, description="Postal-code lookup endpoint")
    timeout: float = Field(10.0, description="HTTP timeout in seconds")
    schema_name: str = Field("udyam", description="Schema document to load from udyam/schemas")
    log_level: str = Field("INFO", description="Root logging level")
    verbose: bool = Field(False, description="Log request/response details")


def load_settings(env_file: Optional[str] = None) -> Settings:
    """Build Settings from UDYAM_* environment variables.

    Args:
        env_file: Optional path to a .env file (default: ./.env if present)

    Returns:
        Settings instance
    """
    load_dotenv(env_file)

    verbose = os.environ.get('UDYAM_VERBOSE', '').lower().strip() in ('y', 'yes', 'true', '1')
    log_level = os.environ.get('UDYAM_LOG_LEVEL', 'INFO').upper()
    if verbose:
        log_level = 'DEBUG'

    return Settings(
        database_url=os.environ.get('UDYAM_DATABASE_URL', DEFAULT_DATABASE_URL),
        api_url=os.environ.get('UDYAM_API_URL', DEFAULT_API_URL).rstrip('/'),
        pincode_api_url=os.environ.get('UDYAM_PINCODE_API_URL', DEFAULT_PINCODE_API_URL).rstrip('/'),
        timeout=float(os.environ.get('UDYAM_TIMEOUT', '10')),
        schema_name=os.environ.get('UDYAM_SCHEMA', 'udyam'),
        log_level=log_level,
        verbose=verbose,
    )
