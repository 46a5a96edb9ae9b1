"""Test settings."""

from .base import *  # noqa: F401,F403

DEBUG = False

SECRET_KEY = "test-secret-key-not-for-production"

ALLOWED_HOSTS = ["testserver", "localhost"]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.InMemoryStorage",
    },
    "staticfiles": {
        "BACKEND": "django.contrib.staticfiles.storage.StaticFilesStorage",
    },
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"

ADMIN_ORDER_EMAIL = "orders@megashop.test"

FACEBOOK_PIXEL = {
    "PIXEL_ID": "",
    "ACCESS_TOKEN": "",
    "DEBUG_MODE": False,
    "ENABLED": False,
}
GOOGLE_ANALYTICS = {
    "MEASUREMENT_ID": "",
    "API_SECRET": "",
    "DEBUG_MODE": False,
    "ENABLED": False,
}

TIME_ZONE = "UTC"

# Let pytest's caplog see application records
LOGGING["loggers"]["megashop"] = {"level": "DEBUG", "propagate": True}  # noqa: F405
