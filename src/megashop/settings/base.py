"""Base settings for MegaShop project."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Build paths inside the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent.parent
SRC_DIR = BASE_DIR / "src"

# Environment file, also edited from the admin settings pages
ENV_FILE = Path(os.environ.get("MEGASHOP_ENV_FILE", BASE_DIR / ".env"))

# Load environment variables
load_dotenv(ENV_FILE)


def env_bool(name, default=False):
    """Read a true/false flag from the environment."""
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


# SECURITY WARNING: keep the secret key used in production secret!
SECRET_KEY = os.environ.get("SECRET_KEY")

# Debug mode - override in dev.py
DEBUG = False

ALLOWED_HOSTS = []

# Application definition
DJANGO_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
]

# Local apps
LOCAL_APPS = [
    "megashop.core",
    "megashop.catalog",
    "megashop.store",
    "megashop.homepage",
    "megashop.integrations",
    "megashop.filemanager",
    "megashop.profile",
]

INSTALLED_APPS = DJANGO_APPS + LOCAL_APPS

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "whitenoise.middleware.WhiteNoiseMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "megashop.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [BASE_DIR / "templates"],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.debug",
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
                "megashop.core.context_processors.store_context",
                "megashop.integrations.context_processors.tracking_context",
            ],
        },
    },
]

WSGI_APPLICATION = "megashop.wsgi.application"

# Database - PostgreSQL
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.environ.get("POSTGRES_DB", "megashop"),
        "USER": os.environ.get("POSTGRES_USER", "postgres"),
        "PASSWORD": os.environ.get("POSTGRES_PASSWORD", "postgres"),
        "HOST": os.environ.get("POSTGRES_HOST", "localhost"),
        "PORT": os.environ.get("POSTGRES_PORT", "5432"),
        "OPTIONS": {
            "connect_timeout": 10,
        },
        "CONN_MAX_AGE": 60,
        "CONN_HEALTH_CHECKS": True,
    }
}

# Cache configuration
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.redis.RedisCache",
        "LOCATION": os.environ.get("REDIS_URL", "redis://localhost:6379/0"),
    }
}

# Custom user model
AUTH_USER_MODEL = "core.User"

AUTHENTICATION_BACKENDS = [
    "megashop.core.backends.EmailBackend",
]

# Password validation
AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

# Login redirects
LOGIN_REDIRECT_URL = "/dashboard/"
LOGOUT_REDIRECT_URL = "/"
LOGIN_URL = "/accounts/login/"

# Internationalization
LANGUAGE_CODE = "en-us"
TIME_ZONE = os.environ.get("STORE_TIMEZONE", "Asia/Dhaka")
USE_I18N = True
USE_TZ = True

# Static files
STATIC_URL = "static/"
STATIC_ROOT = BASE_DIR / "staticfiles"

# Media files (uploads)
MEDIA_URL = "/media/"
MEDIA_ROOT = BASE_DIR / "media"

STORAGES = {
    "default": {
        "BACKEND": "django.core.files.storage.FileSystemStorage",
    },
    "staticfiles": {
        "BACKEND": "whitenoise.storage.CompressedManifestStaticFilesStorage",
    },
}

# Default primary key field type
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Mail - the admin SMTP page writes MAIL_* keys to the .env file
EMAIL_BACKEND = {
    "smtp": "django.core.mail.backends.smtp.EmailBackend",
    "sendmail": "django.core.mail.backends.smtp.EmailBackend",
    "log": "django.core.mail.backends.console.EmailBackend",
    "array": "django.core.mail.backends.locmem.EmailBackend",
}.get(os.environ.get("MAIL_MAILER", "smtp"), "django.core.mail.backends.smtp.EmailBackend")
EMAIL_HOST = os.environ.get("MAIL_HOST", "localhost")
EMAIL_PORT = int(os.environ.get("MAIL_PORT", "587"))
EMAIL_HOST_USER = os.environ.get("MAIL_USERNAME", "")
EMAIL_HOST_PASSWORD = os.environ.get("MAIL_PASSWORD", "")
EMAIL_USE_TLS = os.environ.get("MAIL_ENCRYPTION", "tls") == "tls"
EMAIL_USE_SSL = os.environ.get("MAIL_ENCRYPTION", "tls") == "ssl"
DEFAULT_FROM_EMAIL = "{} <{}>".format(
    os.environ.get("MAIL_FROM_NAME", "MegaShop"),
    os.environ.get("MAIL_FROM_ADDRESS", "noreply@megashop.local"),
)

# Store configuration
STORE_NAME = os.environ.get("STORE_NAME", "MegaShop")
STORE_CURRENCY = os.environ.get("STORE_CURRENCY", "BDT")
ADMIN_ORDER_EMAIL = os.environ.get("ADMIN_ORDER_EMAIL", "")

# Analytics defaults - overridden at runtime from the admin settings pages
FACEBOOK_PIXEL = {
    "PIXEL_ID": os.environ.get("FACEBOOK_PIXEL_ID", ""),
    "ACCESS_TOKEN": os.environ.get("FACEBOOK_PIXEL_ACCESS_TOKEN", ""),
    "DEBUG_MODE": env_bool("FACEBOOK_PIXEL_DEBUG_MODE"),
    "ENABLED": env_bool("FACEBOOK_PIXEL_ENABLED"),
}
GOOGLE_ANALYTICS = {
    "MEASUREMENT_ID": os.environ.get("GOOGLE_ANALYTICS_MEASUREMENT_ID", ""),
    "API_SECRET": os.environ.get("GOOGLE_ANALYTICS_API_SECRET", ""),
    "DEBUG_MODE": env_bool("GOOGLE_ANALYTICS_DEBUG_MODE"),
    "ENABLED": env_bool("GOOGLE_ANALYTICS_ENABLED"),
}
ANALYTICS_HTTP_TIMEOUT = float(os.environ.get("ANALYTICS_HTTP_TIMEOUT", "5"))

# Logging configuration
LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {message}",
            "style": "{",
        },
        "json": {
            "()": "pythonjsonlogger.json.JsonFormatter",
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": "INFO",
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": os.environ.get("DJANGO_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
        "megashop": {
            "handlers": ["console"],
            "level": "DEBUG",
            "propagate": False,
        },
    },
}
