"""
Pipeline module: the translation orchestrator and the batch runner.
"""

from .orchestrator import TranslationOrchestrator, TRANSLATED_FIELDS
from .runner import run_translation_batch, build_translation_client
