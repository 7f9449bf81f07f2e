"""
Data models shared by the repository and the orchestrator.

License: MIT
"""

from dataclasses import asdict, dataclass
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class Product:
    """
    A catalog product in its source locale.

    Instances are read-only snapshots built from one row of the flat product
    table. The text fields may be None when the catalog has no value for them.
    """

    sku: str
    product_id: int
    name: Optional[str]
    description: Optional[str]
    short_description: Optional[str]
    channel: Optional[str]
    locale: str

    @classmethod
    def from_row(cls, row) -> "Product":
        """Build a product from a (sku, product_id, name, description,
        short_description, channel, locale) row tuple."""
        sku, product_id, name, description, short_description, channel, locale = row
        return cls(
            sku=sku,
            product_id=int(product_id),
            name=name,
            description=description,
            short_description=short_description,
            channel=channel,
            locale=locale,
        )


@dataclass(frozen=True)
class TranslatedField:
    """The outcome of translating one text field into one target locale."""

    field_name: str
    source_text: Optional[str]
    target_locale: str
    translated_text: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.translated_text and self.translated_text.strip())


@dataclass
class TranslationRunStats:
    """Counters collected while a run is in progress."""

    products: int = 0
    pairs_attempted: int = 0
    pairs_translated: int = 0
    pairs_skipped: int = 0
    flat_rows_updated: int = 0
    flat_rows_missing: int = 0
    attribute_rows_upserted: int = 0
    attribute_rows_missing: int = 0
    write_failures: int = 0

    def as_dict(self) -> Dict[str, Any]:
        return asdict(self)
