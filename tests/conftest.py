"""
Pytest configuration for rail-relay.

Configures a minimal Django project before test modules are imported,
since mutation classes read ``settings.RAIL_RELAY`` when they are defined.
"""

import django
from django.conf import settings


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without a database")

    if settings.configured:
        return
    settings.configure(
        DEBUG=False,
        ENVIRONMENT="testing",
        SECRET_KEY="rail-relay-tests",
        INSTALLED_APPS=[
            "django.contrib.contenttypes",
            "django.contrib.auth",
            "rail_relay",
        ],
        DATABASES={
            "default": {
                "ENGINE": "django.db.backends.sqlite3",
                "NAME": ":memory:",
            }
        },
        ALLOWED_HOSTS=["testserver"],
        USE_TZ=True,
        RAIL_RELAY={},
    )
    django.setup()
