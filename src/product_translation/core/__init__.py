"""
Core utilities module for the product translation pipeline.

Submodules:
    errors: Exception hierarchy of the pipeline.
    models: Product, TranslatedField and run statistics.
    connections: PostgreSQL connection management.
"""

from .errors import (
    ProductTranslationError,
    ConfigurationError,
    DataAccessError,
    FetchError,
    TranslationError,
)
from .models import Product, TranslatedField, TranslationRunStats
from .connections import (
    get_postgres_connection_string,
    get_postgres_db_params,
    postgres_connection,
)
