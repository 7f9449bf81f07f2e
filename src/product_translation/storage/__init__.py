"""
Storage module for the product translation pipeline.

Submodules:
    product_repository: Reads source products and persists translations.
    postgres_utils: PostgreSQL helper utilities.
    schema: Table definitions used to provision development databases.

License: MIT
"""

import importlib

__all__ = [
    # Repository
    "ProductRepository",
    # Utilities
    "execute_query_silent",
    "execute_write",
    "validate_identifier",
    # Schema
    "create_schema",
    "drop_all_tables",
    "get_table_list",
    "get_schema_statements",
]

_ATTR_TO_MODULE = {
    # Repository
    "ProductRepository": ".product_repository",
    # Utilities
    "execute_query_silent": ".postgres_utils",
    "execute_write": ".postgres_utils",
    "validate_identifier": ".postgres_utils",
    # Schema
    "create_schema": ".schema",
    "drop_all_tables": ".schema",
    "get_table_list": ".schema",
    "get_schema_statements": ".schema",
}


def __getattr__(name: str):
    module_name = _ATTR_TO_MODULE.get(name)
    if not module_name:
        raise AttributeError(f"module '{__name__}' has no attribute '{name}'")
    module = importlib.import_module(module_name, __name__)
    return getattr(module, name)


def __dir__():
    return sorted(set(list(globals().keys()) + __all__))
