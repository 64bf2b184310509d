"""
Reverse geocoding for the "use my location" fee mode.

Turns device coordinates into a US state name so the fee table can be
consulted.  This is the only network-bound collaborator in the project and
it is kept out of the calculation core entirely: callers resolve the fee
first and pass a plain number to the hedge engine.

The default endpoint (BigDataCloud reverse-geocode-client) needs no API key
and returns the state in ``principalSubdivision``.
"""

import logging
from typing import Optional

import requests

from backend.config import get_settings

logger = logging.getLogger(__name__)


class GeolocationError(RuntimeError):
    """Coordinates could not be resolved to a jurisdiction."""


class ReverseGeocoder:
    """Client for a BigDataCloud-compatible reverse geocoding endpoint"""

    def __init__(self, url: Optional[str] = None, timeout: Optional[float] = None):
        settings = get_settings()
        self.url = url or settings.geocode_url
        self.timeout = timeout if timeout is not None else settings.geocode_timeout_s

    def state_for_coordinates(self, latitude: float, longitude: float) -> str:
        """
        Resolve coordinates to a state / principal subdivision name.

        Raises:
            GeolocationError: coordinates out of range, network or HTTP
                failure, or a response without a subdivision.
        """
        if not -90.0 <= latitude <= 90.0 or not -180.0 <= longitude <= 180.0:
            raise GeolocationError(
                f"Coordinates out of range: ({latitude}, {longitude})"
            )

        params = {
            "latitude": latitude,
            "longitude": longitude,
            "localityLanguage": "en",
        }

        try:
            response = requests.get(self.url, params=params, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.exceptions.RequestException as e:
            logger.error("Reverse geocoding failed: %s", e)
            raise GeolocationError("Geocoding failed") from e
        except ValueError as e:
            logger.error("Reverse geocoder returned invalid JSON: %s", e)
            raise GeolocationError("Geocoding failed") from e

        state = (data or {}).get("principalSubdivision")
        if not state:
            logger.warning(
                "No subdivision for (%.4f, %.4f), country=%s",
                latitude, longitude, (data or {}).get("countryCode"),
            )
            raise GeolocationError("Could not determine your state")

        logger.info("Resolved (%.4f, %.4f) to %s", latitude, longitude, state)
        return state
