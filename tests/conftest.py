"""Shared test setup: API keys must exist before backend.auth is imported."""

import os

os.environ.setdefault("API_KEY_USER1", "test-key")
os.environ.setdefault("ENVIRONMENT", "development")
