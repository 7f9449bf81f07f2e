"""
Configuration module for the product translation pipeline.

Submodules:
    settings: Environment-driven constants (database, locales, translation service).
    pipeline_config: Immutable configuration values passed into the pipeline.
    logging_config: Centralized logging configuration.
"""

from .settings import *
from .logging_config import setup_logging, get_logger
from .pipeline_config import AttributeIds, PipelineConfig
