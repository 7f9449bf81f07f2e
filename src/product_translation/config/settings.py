"""
Configuration settings for the product translation pipeline.

This module centralizes all configuration constants used by the pipeline.
Values are read from the environment, after loading a ``.env`` file from
the current working directory if one is present. Settings are grouped by
their functional area for easy maintenance.

Configuration includes:
    - Database connection parameters (PostgreSQL)
    - Table names of the flat product table and the attribute-value table
    - Locale settings (source locale and ordered target locales)
    - Attribute ids of the translatable product attributes
    - Translation service settings

Note:
    The values here are read once at import time. The pipeline itself never
    reads them directly; they are turned into an immutable PipelineConfig
    by the CLI scripts.

License: MIT
"""

import os

from dotenv import load_dotenv

# Loads variables from a .env file without overriding the real environment.
load_dotenv(override=False)


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("1", "true", "yes")


def _env_list(name: str, default: str) -> list:
    raw = os.getenv(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


# =============================================================================
# DATABASE CONFIGURATION
# =============================================================================
# Connection parameters for the PostgreSQL catalog database. The credential
# components are kept separate and assembled into a connection string by
# core.connections.
DATABASE_HOST = os.getenv("DATABASE_HOST", "localhost")
DATABASE_PORT = os.getenv("DATABASE_PORT", "5432")
DATABASE_USER = os.getenv("DATABASE_USER", "catalog")
DATABASE_PASS = os.getenv("DATABASE_PASS", "")
DATABASE_NAME = os.getenv("DATABASE_NAME", "catalog")

# Seconds the driver waits when opening a connection.
DATABASE_CONNECT_TIMEOUT = int(os.getenv("DATABASE_CONNECT_TIMEOUT", "10"))

# -----------------------------------------------------------------------------
# Table names
# -----------------------------------------------------------------------------
# Denormalized per-locale product table (one row per sku and locale).
PRODUCT_FLAT_TABLE = os.getenv("PRODUCT_FLAT_TABLE", "product_flat")

# Normalized table with one row per product, attribute and locale.
ATTRIBUTE_VALUES_TABLE = os.getenv("ATTRIBUTE_VALUES_TABLE", "product_attribute_values")

# =============================================================================
# LOCALE CONFIGURATION
# =============================================================================

# Locale the catalog is authored in. Rows in this locale are the source.
SOURCE_LOCALE = os.getenv("SOURCE_LOCALE", "nl")

# Locales to translate into, processed in this order.
TARGET_LOCALES = _env_list("TARGET_LOCALES", "en,fr,de")

# =============================================================================
# ATTRIBUTE CONFIGURATION
# =============================================================================

# Ids of the translatable attributes in the attribute-value table.
# The name attribute is listed for completeness; it is never translated.
ATTRIBUTE_ID_NAME = int(os.getenv("ATTRIBUTE_ID_NAME", "2"))
ATTRIBUTE_ID_SHORT_DESCRIPTION = int(os.getenv("ATTRIBUTE_ID_SHORT_DESCRIPTION", "9"))
ATTRIBUTE_ID_DESCRIPTION = int(os.getenv("ATTRIBUTE_ID_DESCRIPTION", "10"))

# How attribute rows are written: "on_conflict" (atomic upsert) or
# "check_then_update" (update existing rows only, single-threaded runs).
UPSERT_STRATEGY = os.getenv("UPSERT_STRATEGY", "on_conflict")

# =============================================================================
# TRANSLATION SERVICE CONFIGURATION
# =============================================================================

# URL of the LibreTranslate API instance.
LIBRETRANSLATE_URL = os.getenv("LIBRETRANSLATE_URL", "http://localhost:5000/translate")

# Optional API key for hosted LibreTranslate instances.
LIBRETRANSLATE_API_KEY = os.getenv("LIBRETRANSLATE_API_KEY") or None

# Timeout in seconds for a single translation request.
TRANSLATION_TIMEOUT_SECONDS = float(os.getenv("TRANSLATION_TIMEOUT_SECONDS", "30"))

# Attempts per translation before the field is given up on.
# A value of 1 disables retrying.
TRANSLATION_MAX_RETRIES = int(os.getenv("TRANSLATION_MAX_RETRIES", "3"))

# Delay in seconds between retry attempts.
TRANSLATION_RETRY_DELAY = float(os.getenv("TRANSLATION_RETRY_DELAY", "2"))

# Directory of the SQLite translation cache. Empty disables the cache.
TRANSLATION_CACHE_DIR = os.getenv("TRANSLATION_CACHE_DIR", ".cache")

# Warn when a source text does not look like it is in the source locale.
LANGUAGE_CHECK_ENABLED = _env_bool("LANGUAGE_CHECK_ENABLED", "false")

# =============================================================================
# RUN CONFIGURATION
# =============================================================================

# Show a progress bar over the products of a run.
SHOW_PROGRESS = _env_bool("SHOW_PROGRESS", "true")

# Maximum number of source products per run. Unset or 0 processes all of them.
_max_products = int(os.getenv("MAX_PRODUCTS_PER_RUN") or "0")
MAX_PRODUCTS_PER_RUN = _max_products if _max_products > 0 else None
