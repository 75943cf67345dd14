from __future__ import annotations

import os

import django
import pytest
import requests_mock as requests_mock_lib
from django.test import override_settings


os.environ.setdefault("DJANGO_SECRET_KEY", "test-secret")
os.environ.setdefault("DJANGO_SETTINGS_MODULE", "weatherproxy.settings")

django.setup()


OPENWEATHER_TEST_URL = "https://openweather.test/data/2.5"


@pytest.fixture()
def requests_mock():
    with requests_mock_lib.Mocker() as mocker:
        yield mocker


@pytest.fixture()
def openweather_settings():
    """Point the lookup at a fake OpenWeather host with a known key, whatever the environment says."""
    with override_settings(
        OPENWEATHER_API_KEY="test-key",
        OPENWEATHER_BASE_URL=OPENWEATHER_TEST_URL,
        OPENWEATHER_TIMEOUT=5.0,
    ):
        yield OPENWEATHER_TEST_URL
