"""
Django settings for the marketplace project.

Deploy-specific values come from environment variables; without
POSTGRES_DB both stores fall back to local SQLite files for development.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "dev-insecure-marketplace-key")
DEBUG = os.environ.get("DJANGO_DEBUG", "1") == "1"
ALLOWED_HOSTS = [host for host in os.environ.get("DJANGO_ALLOWED_HOSTS", "*").split(",") if host]

INSTALLED_APPS = [
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",
    "main",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
]

ROOT_URLCONF = "marketplace.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    },
]

ASGI_APPLICATION = "marketplace.asgi.application"

# Two stores: "default" holds users, products and orders; "reviews" holds
# reviews only (see main.infra.routers.ReviewStoreRouter).
REVIEWS_DB_ALIAS = "reviews"

if os.environ.get("POSTGRES_DB"):
    _postgres = {
        "ENGINE": "django.db.backends.postgresql",
        "USER": os.environ.get("POSTGRES_USER", "postgres"),
        "PASSWORD": os.environ.get("POSTGRES_PASSWORD", ""),
        "HOST": os.environ.get("POSTGRES_HOST", "localhost"),
        "PORT": os.environ.get("POSTGRES_PORT", "5432"),
    }
    DATABASES = {
        "default": {**_postgres, "NAME": os.environ["POSTGRES_DB"]},
        REVIEWS_DB_ALIAS: {
            **_postgres,
            "NAME": os.environ.get("REVIEWS_DB", f"{os.environ['POSTGRES_DB']}_reviews"),
        },
    }
else:
    # SQLite has no row locks: IMMEDIATE makes every transaction take the
    # database write lock at BEGIN, so locked reads cannot go stale. Test
    # databases are files because in-memory shared-cache databases fail
    # fast on lock contention instead of waiting for "timeout" seconds.
    _sqlite_options = {"transaction_mode": "IMMEDIATE", "timeout": 20}
    DATABASES = {
        "default": {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "marketplace.sqlite3",
            "OPTIONS": _sqlite_options,
            "TEST": {"NAME": BASE_DIR / "test_marketplace.sqlite3"},
        },
        REVIEWS_DB_ALIAS: {
            "ENGINE": "django.db.backends.sqlite3",
            "NAME": BASE_DIR / "reviews.sqlite3",
            "OPTIONS": _sqlite_options,
            "TEST": {"NAME": BASE_DIR / "test_reviews.sqlite3"},
        },
    }

DATABASE_ROUTERS = ["main.infra.routers.ReviewStoreRouter"]

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"

# Order numbers look like "UF-7Q2K9XZA".
ORDER_NUMBER_PREFIX = os.environ.get("ORDER_NUMBER_PREFIX", "UF")
ORDER_NUMBER_LENGTH = int(os.environ.get("ORDER_NUMBER_LENGTH", "8"))
ORDER_NUMBER_ATTEMPTS = int(os.environ.get("ORDER_NUMBER_ATTEMPTS", "5"))

RATING_DECIMAL_PLACES = int(os.environ.get("RATING_DECIMAL_PLACES", "2"))

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "json": {
            "()": "main.utils.logging.JsonFormatter",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "json",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": os.environ.get("LOG_LEVEL", "INFO"),
    },
}
