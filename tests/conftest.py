"""Pytest configuration and fixtures."""

import os

import pytest


@pytest.fixture(scope="session", autouse=True)
def setup_test_env():
    """Set up test environment variables."""
    os.environ["SUPABASE_URL"] = "https://test.supabase.co"
    os.environ["SUPABASE_SERVICE_ROLE_KEY"] = "test-key"
    os.environ["APP_ENV"] = "test"
    # No token: HubSpot sync runs in demo mode unless a test patches settings
    os.environ.pop("HUBSPOT_ACCESS_TOKEN", None)


@pytest.fixture(autouse=True)
def clear_settings_cache():
    """Re-read settings for every test."""
    from app.core.config import get_settings

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
