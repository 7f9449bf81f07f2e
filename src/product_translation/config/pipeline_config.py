"""
Immutable configuration values for a translation run.

The settings module exposes loose constants read from the environment. A run
never reads those directly: the CLI turns them into a PipelineConfig, which
is validated once and handed to the orchestrator and the repository at
construction. Nothing in a PipelineConfig changes while a run is in progress.

License: MIT
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional, Tuple

from ..core.errors import ConfigurationError
from . import settings

UPSERT_ON_CONFLICT = "on_conflict"
UPSERT_CHECK_THEN_UPDATE = "check_then_update"
VALID_UPSERT_STRATEGIES = (UPSERT_ON_CONFLICT, UPSERT_CHECK_THEN_UPDATE)


@dataclass(frozen=True)
class AttributeIds:
    """Ids of the translatable attributes in the attribute-value table."""

    name: int = settings.ATTRIBUTE_ID_NAME
    description: int = settings.ATTRIBUTE_ID_DESCRIPTION
    short_description: int = settings.ATTRIBUTE_ID_SHORT_DESCRIPTION

    def __post_init__(self):
        ids = (self.name, self.description, self.short_description)
        if len(set(ids)) != len(ids):
            raise ConfigurationError(f"Attribute ids must be distinct, got {ids}")


@dataclass(frozen=True)
class PipelineConfig:
    """
    Configuration of one translation run.

    Attributes:
        source_locale: Locale of the authoritative product rows.
        target_locales: Locales to translate into, processed in this order.
        attribute_ids: Ids of the description and short description attributes.
        upsert_strategy: "on_conflict" or "check_then_update".
        show_progress: Whether to display a progress bar over the products.
    """

    source_locale: str = settings.SOURCE_LOCALE
    target_locales: Tuple[str, ...] = tuple(settings.TARGET_LOCALES)
    attribute_ids: AttributeIds = field(default_factory=AttributeIds)
    upsert_strategy: str = settings.UPSERT_STRATEGY
    show_progress: bool = settings.SHOW_PROGRESS

    def __post_init__(self):
        # Lists passed by callers are frozen into tuples.
        object.__setattr__(self, "target_locales", tuple(self.target_locales))

        if not self.source_locale:
            raise ConfigurationError("A source locale is required")
        if not self.target_locales:
            raise ConfigurationError("At least one target locale is required")
        if len(set(self.target_locales)) != len(self.target_locales):
            raise ConfigurationError(
                f"Target locales contain duplicates: {list(self.target_locales)}"
            )
        if self.source_locale in self.target_locales:
            raise ConfigurationError(
                f"Source locale '{self.source_locale}' cannot also be a target locale"
            )
        if self.upsert_strategy not in VALID_UPSERT_STRATEGIES:
            raise ConfigurationError(
                f"upsert_strategy must be one of {list(VALID_UPSERT_STRATEGIES)}, "
                f"got '{self.upsert_strategy}'"
            )

    @classmethod
    def from_settings(
        cls,
        source_locale: Optional[str] = None,
        target_locales: Optional[Iterable[str]] = None,
        upsert_strategy: Optional[str] = None,
        show_progress: Optional[bool] = None,
    ) -> "PipelineConfig":
        """
        Build a configuration from the settings module, with optional overrides.

        Any argument left as None falls back to the corresponding setting.
        """
        return cls(
            source_locale=source_locale or settings.SOURCE_LOCALE,
            target_locales=tuple(target_locales or settings.TARGET_LOCALES),
            attribute_ids=AttributeIds(),
            upsert_strategy=upsert_strategy or settings.UPSERT_STRATEGY,
            show_progress=settings.SHOW_PROGRESS if show_progress is None else show_progress,
        )
