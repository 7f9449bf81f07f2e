"""
Translation orchestrator.

Drives one batch run: every source product is translated into every target
locale, one (product, locale) pair at a time, and the results are handed to
the repository.

Per pair, the description and the short description are both translated
before anything is written. If either one cannot be translated (missing
source text, translation failure, empty result) the whole pair is skipped,
so a half-translated locale is never written. The product name is carried
through untranslated.

Once both texts are available three independent writes follow: the flat
table row, then the description and short description attribute rows. A
failing write is logged and does not prevent the other two, nor any later
pair. Only an unexpected exception stops the run.

License: MIT
"""

from dataclasses import replace
from typing import Optional, Sequence

from tqdm import tqdm

from ..config.logging_config import get_logger
from ..config.pipeline_config import PipelineConfig
from ..core.errors import DataAccessError, TranslationError
from ..core.models import Product, TranslatedField, TranslationRunStats
from ..translation.client import TranslationClient
from ..translation.language_check import SourceLanguageChecker

logger = get_logger(__name__)

# Text fields that are machine-translated, in translation order.
TRANSLATED_FIELDS = ("description", "short_description")


class TranslationOrchestrator:
    """
    Translates source products and persists the results.

    Args:
        client: Translation backend.
        repository: Object with update_flat_translation() and
            upsert_attribute_value(), normally a ProductRepository.
        config: Immutable run configuration.
        language_checker: Optional checker warning about source texts that
            are not in the source locale.
    """

    def __init__(
        self,
        client: TranslationClient,
        repository,
        config: PipelineConfig,
        language_checker: Optional[SourceLanguageChecker] = None,
    ):
        self.client = client
        self.repository = repository
        self.config = config
        self.language_checker = language_checker

    def run(
        self,
        products: Sequence[Product],
        source_locale: Optional[str] = None,
        target_locales: Optional[Sequence[str]] = None,
    ) -> TranslationRunStats:
        """
        Translate every product into every target locale.

        Per-item failures are logged and counted, never raised.

        Args:
            products: Source products, as fetched by the repository.
            source_locale: Locale of the products. Defaults to the configured one.
            target_locales: Locales to produce, in order. Defaults to the
                configured ones.

        Returns:
            TranslationRunStats: Counters describing the run.

        Raises:
            ConfigurationError: If the overrides are invalid, for example a
                target locale equal to the source locale. Nothing is written.
        """
        run_config = replace(
            self.config,
            source_locale=source_locale or self.config.source_locale,
            target_locales=target_locales or self.config.target_locales,
        )
        source_locale = run_config.source_locale
        target_locales = run_config.target_locales
        stats = TranslationRunStats()

        logger.info(
            f"Translating {len(products)} products from '{source_locale}' "
            f"into {list(target_locales)}"
        )

        for product in tqdm(
            products,
            desc="Translating products",
            unit="product",
            disable=not self.config.show_progress,
        ):
            stats.products += 1
            for target_locale in target_locales:
                self.translate_pair(product, source_locale, target_locale, stats)

        logger.info(
            f"Translation run finished: {stats.pairs_translated}/{stats.pairs_attempted} "
            f"locale pairs translated, {stats.pairs_skipped} skipped, "
            f"{stats.flat_rows_updated} flat rows updated "
            f"({stats.flat_rows_missing} missing), "
            f"{stats.attribute_rows_upserted} attribute rows written, "
            f"{stats.write_failures} write failures"
        )
        return stats

    # =========================================================================
    # PER (PRODUCT, LOCALE) PAIR
    # =========================================================================

    def translate_pair(
        self,
        product: Product,
        source_locale: str,
        target_locale: str,
        stats: TranslationRunStats,
    ) -> bool:
        """
        Translate and persist one (product, locale) pair.

        Returns:
            True if both texts were translated and the writes were attempted,
            False if the pair was skipped.
        """
        stats.pairs_attempted += 1

        translations = {}
        for field_name in TRANSLATED_FIELDS:
            result = self.translate_field(product, field_name, source_locale, target_locale)
            if not result.ok:
                logger.warning(
                    f"Skipping sku '{product.sku}' (product {product.product_id}) "
                    f"locale '{target_locale}': {field_name} not translated ({result.error})"
                )
                stats.pairs_skipped += 1
                return False
            translations[field_name] = result.translated_text

        stats.pairs_translated += 1
        self._persist(product, target_locale, translations, stats)
        return True

    def translate_field(
        self,
        product: Product,
        field_name: str,
        source_locale: str,
        target_locale: str,
    ) -> TranslatedField:
        """
        Translate one text field of a product.

        A missing or blank source text is never sent to the client.
        """
        source_text = getattr(product, field_name)

        if source_text is None or not source_text.strip():
            return TranslatedField(
                field_name, source_text, target_locale, error="source text is missing"
            )

        if self.language_checker is not None:
            self.language_checker.check(
                source_text, source_locale, context=f"sku '{product.sku}' {field_name}"
            )

        try:
            translated = self.client.translate(source_text, source_locale, target_locale)
        except TranslationError as e:
            return TranslatedField(field_name, source_text, target_locale, error=str(e))

        result = TranslatedField(field_name, source_text, target_locale, translated_text=translated)
        if not result.ok:
            return TranslatedField(
                field_name, source_text, target_locale,
                error="translation service returned an empty result"
            )
        return result

    def _persist(
        self,
        product: Product,
        target_locale: str,
        translations: dict,
        stats: TranslationRunStats,
    ) -> None:
        description = translations["description"]
        short_description = translations["short_description"]

        try:
            updated = self.repository.update_flat_translation(
                product.sku, target_locale, product.name, description, short_description
            )
        except DataAccessError as e:
            stats.write_failures += 1
            logger.error(
                f"Flat table write failed for sku '{product.sku}' locale '{target_locale}': {e}"
            )
        else:
            if updated:
                stats.flat_rows_updated += 1
            else:
                stats.flat_rows_missing += 1

        attribute_values = (
            (self.config.attribute_ids.description, description),
            (self.config.attribute_ids.short_description, short_description),
        )
        for attribute_id, text_value in attribute_values:
            try:
                written = self.repository.upsert_attribute_value(
                    product.product_id, attribute_id, target_locale, product.channel, text_value
                )
            except DataAccessError as e:
                stats.write_failures += 1
                logger.error(
                    f"Attribute write failed for sku '{product.sku}' product "
                    f"{product.product_id} attribute {attribute_id} "
                    f"locale '{target_locale}': {e}"
                )
                continue

            if written:
                stats.attribute_rows_upserted += 1
            else:
                stats.attribute_rows_missing += 1
