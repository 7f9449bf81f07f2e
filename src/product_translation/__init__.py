"""
Product Translation Pipeline Package.

This package provides a batch pipeline that reads catalog products in their
source locale from PostgreSQL, machine-translates their descriptions into a
fixed set of target locales, and writes the results back to both the flat
product table and the normalized attribute-value table.

Modules:
    config: Configuration settings, pipeline configuration and logging setup.
    core: Shared models, error types and database connection utilities.
    translation: Translation clients (LibreTranslate), caching and language checks.
    storage: PostgreSQL repository, schema definitions and query helpers.
    pipeline: The translation orchestrator and the batch runner.

License: MIT
"""

__version__ = "1.0.0"
