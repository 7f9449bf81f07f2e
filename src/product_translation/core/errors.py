"""
Exception types raised by the product translation pipeline.

Hierarchy:
    ProductTranslationError
    ├── DataAccessError      a database read or write failed
    │   └── FetchError       the source products could not be read (fatal)
    ├── TranslationError     the translation service gave no usable text
    └── ConfigurationError   the run configuration is invalid (fatal)

Recoverable errors carry the identifiers needed to reconcile the failed
unit of work by hand.

License: MIT
"""

from typing import Optional


class ProductTranslationError(Exception):
    """Base class for all pipeline errors."""


class ConfigurationError(ProductTranslationError):
    """Raised when the run configuration is invalid."""


class DataAccessError(ProductTranslationError):
    """
    Raised when a database statement fails.

    Attributes:
        sku: Sku of the affected product, when known.
        product_id: Surrogate id of the affected product, when known.
        attribute_id: Attribute id of the affected attribute row, when known.
        locale: Locale of the affected row, when known.
    """

    def __init__(
        self,
        message: str,
        sku: Optional[str] = None,
        product_id: Optional[int] = None,
        attribute_id: Optional[int] = None,
        locale: Optional[str] = None,
    ):
        super().__init__(message)
        self.sku = sku
        self.product_id = product_id
        self.attribute_id = attribute_id
        self.locale = locale


class FetchError(DataAccessError):
    """Raised when the source products cannot be fetched. Aborts the run."""


class TranslationError(ProductTranslationError):
    """
    Raised when a text could not be translated.

    Attributes:
        source_locale: Locale of the text that was sent.
        target_locale: Locale that was requested.
    """

    def __init__(
        self,
        message: str,
        source_locale: Optional[str] = None,
        target_locale: Optional[str] = None,
    ):
        super().__init__(message)
        self.source_locale = source_locale
        self.target_locale = target_locale
