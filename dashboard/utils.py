"""Shared helpers for the dashboard: API calls, the API key and labels."""

import logging
import os

import requests
import streamlit as st

from backend.config import get_settings
from backend.core.money import format_money

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT_S = 15
INVALID_INPUT_MESSAGE = "Enter valid values"

_DEFAULT_API_KEY = os.getenv("API_KEY_USER1", "")

OUTCOME_LABELS = {
    "guaranteed_profit": "🟢 Guaranteed profit",
    "mixed":             "🟡 Profit on one side only",
    "loss_either_way":   "🔴 Loss either way",
}

__all__ = [
    "OUTCOME_LABELS",
    "api_get",
    "api_post",
    "current_api_key",
    "format_money",
    "sidebar_api_key",
]


def current_api_key() -> str:
    """Key typed into the sidebar, else API_KEY_USER1 from the environment."""
    return st.session_state.get("api_key") or _DEFAULT_API_KEY


def sidebar_api_key() -> None:
    """Ask for an API key in the sidebar until one is known."""
    if current_api_key():
        return
    entered = st.sidebar.text_input("API Key", type="password", key="api_key_sidebar")
    if entered:
        st.session_state["api_key"] = entered
        st.rerun()


def _error_detail(response: requests.Response) -> str:
    """Human-readable reason from an error response, JSON or not."""
    try:
        body = response.json()
    except ValueError:
        # e.g. an HTML error page from a proxy
        return response.text.strip()[:200] or (response.reason or "no details")
    if isinstance(body, dict) and "detail" in body:
        return str(body["detail"])
    return str(body)


def _request(method: str, endpoint: str, quiet_422: bool = False, **kwargs):
    """Call the API and return the decoded JSON body, or None after showing the error."""
    url = f"{get_settings().api_url}{endpoint}"
    try:
        r = requests.request(
            method,
            url,
            headers={"X-API-Key": current_api_key()},
            timeout=REQUEST_TIMEOUT_S,
            **kwargs,
        )
        r.raise_for_status()
        return r.json()
    except requests.HTTPError as exc:
        response = exc.response
        if quiet_422 and response.status_code == 422:
            st.warning(INVALID_INPUT_MESSAGE)
            return None
        detail = _error_detail(response)
        logger.warning("%s %s failed with %s: %s", method, endpoint, response.status_code, detail)
        st.error(f"API {response.status_code}: {detail}")
        return None
    except requests.RequestException as exc:
        logger.warning("%s %s failed: %s", method, endpoint, exc)
        st.error(f"Request failed: {exc}")
        return None


def api_get(endpoint: str, params: dict = None):
    return _request("GET", endpoint, params=params)


def api_post(endpoint: str, payload: dict, quiet_422: bool = False):
    """POST JSON; with quiet_422 a calculator rejection shows "Enter valid values"."""
    return _request("POST", endpoint, quiet_422=quiet_422, json=payload)
