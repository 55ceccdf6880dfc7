"""
Django settings for FolioProject.

Only the pieces the documentation engine needs are configured here: the
template engine used for component partials, logging, and the ``FOLIO``
site configuration consumed by ``engine.markdown.config.SiteConfig``.
"""

import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("FOLIO_SECRET_KEY", "folio-insecure-development-key")

DEBUG = os.environ.get("FOLIO_DEBUG", "false").lower() == "true"

ALLOWED_HOSTS = ["localhost", "127.0.0.1"]

INSTALLED_APPS = [
    "engine",
]

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [],
        },
    },
]

USE_TZ = True

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {
            "format": "{asctime} {levelname:<7} {name}: {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "simple",
        },
    },
    "loggers": {
        "engine": {
            "handlers": ["console"],
            "level": os.environ.get("FOLIO_LOG_LEVEL", "WARNING"),
            "propagate": True,
        },
    },
}

# Site configuration for the documentation engine
FOLIO = {
    "title": "Documentation",
    "branding": {
        "logo": None,
        "favicon": None,
    },
    "search": {
        "exclude": [],
    },
    "code": {
        "line_numbers": False,
    },
    "variables": {},
    "docs_root": str(BASE_DIR / "docs"),
}

# Extra command line arguments appended to every Pandoc invocation
FOLIO_PANDOC_EXTRA_ARGS = []
