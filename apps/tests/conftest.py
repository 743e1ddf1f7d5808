# tests/conftest.py
"""
Pytest configuration for Django tests.

This file configures Django to use the development settings before any tests run.
"""

import os

import django
import pytest


def pytest_configure(config):
    """
    Configure Django settings for pytest.

    This function runs before any tests are collected.
    It tells Django to use our existing development settings.
    """
    os.environ.setdefault('DJANGO_SETTINGS_MODULE', 'config.settings.development')

    django.setup()

    # Allows the 'testserver' host used by the test client
    from django.test.utils import setup_test_environment
    setup_test_environment()


@pytest.fixture
def composition_config():
    """A composition config with the default pipeline constants."""
    from apps.compositions.config import CompositionConfig

    return CompositionConfig(
        foreground_path='static/videos/foreground.mp4',
        background_path='static/videos/background.mp4',
    )


@pytest.fixture
def composition_request(composition_config):
    return composition_config.to_request()
