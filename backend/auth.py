"""
API key check for the calculator endpoints.

Keys come from API_KEY_USER1..API_KEY_USER5.  With ENVIRONMENT=development
and no keys set, the single key "dev-key-insecure" is accepted so the
dashboard works out of the box on a laptop.
"""

import logging
import os
from typing import Dict, Mapping, Optional

from dotenv import load_dotenv
from fastapi import HTTPException, Security, status
from fastapi.security import APIKeyHeader

load_dotenv()

logger = logging.getLogger(__name__)

API_KEY_HEADER = APIKeyHeader(name="X-API-Key", auto_error=False)

MAX_API_USERS = 5
DEV_API_KEY = "dev-key-insecure"


def load_api_keys(environ: Optional[Mapping[str, str]] = None) -> Dict[str, str]:
    """Map of API key → user label read from *environ* (default os.environ)."""
    env = os.environ if environ is None else environ
    keys = {
        env[f"API_KEY_USER{i}"]: f"user{i}"
        for i in range(1, MAX_API_USERS + 1)
        if env.get(f"API_KEY_USER{i}")
    }
    if keys:
        return keys
    if env.get("ENVIRONMENT") == "development":
        logger.warning("No API keys configured, accepting the development key")
        return {DEV_API_KEY: "dev_user"}
    raise ValueError("No API keys configured! Set API_KEY_USER1 in environment")


VALID_API_KEYS = load_api_keys()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "ApiKey"},
    )


async def verify_api_key(api_key: Optional[str] = Security(API_KEY_HEADER)) -> str:
    """User label for the X-API-Key header; 401 when it is missing or unknown."""
    if not api_key:
        raise _unauthorized("API key required. Include 'X-API-Key' header.")
    try:
        return VALID_API_KEYS[api_key]
    except KeyError:
        logger.info("Rejected an unknown API key")
        raise _unauthorized("Invalid API key") from None
