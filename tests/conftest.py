"""Pytest configuration and shared fixtures."""

import os

import django
from django.test import Client

import pytest

# Configure Django settings for tests
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "preference_service.settings_test")
django.setup()


@pytest.fixture
def api_client():
    """Provide Django test client."""
    return Client()


@pytest.fixture
def preference_record(db):
    """Provide a fully opted-in preference record with every address set."""
    from tests.mocks import create_preference_record  # noqa: PLC0415

    return create_preference_record()
