#!/usr/bin/env python3
"""
CLI script for running the product translation pipeline.

This script reads the products of the source locale from PostgreSQL,
translates their descriptions into each target locale with LibreTranslate,
and writes the results to the flat product table and the attribute-value
table.

Usage:
    python run_translation.py
    python run_translation.py --target-locales en,fr --limit 50
    python run_translation.py --dry-run
    python run_translation.py --debug

Exit codes:
    0   run completed (individual failures are logged, not fatal)
    1   the database could not be reached or the products could not be read
    2   invalid configuration
    130 interrupted by the user

License: MIT
"""

import sys
from pathlib import Path

# Allow running without package installation
_script_dir = Path(__file__).parent
_project_root = _script_dir.parent
_src_dir = _project_root / "src"
if _src_dir.exists() and str(_src_dir) not in sys.path:
    sys.path.insert(0, str(_src_dir))

import argparse
import logging

import psycopg2


def positive_int(value: str) -> int:
    """argparse type accepting integers of at least 1."""
    number = int(value)
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


def parse_arguments(argv=None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        argparse.Namespace: The parsed arguments.
    """
    parser = argparse.ArgumentParser(
        description="Machine-translate product descriptions into the target locales",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
    # Translate all products with the configured locales
    python run_translation.py

    # Only French and German, first 50 products
    python run_translation.py --target-locales fr,de --limit 50

    # Show how much work a run would do
    python run_translation.py --dry-run

    # Log every SQL statement
    python run_translation.py --debug
        """
    )

    # Locale options
    parser.add_argument(
        "--source-locale",
        default=None,
        help="Locale of the source products (default: SOURCE_LOCALE setting)"
    )
    parser.add_argument(
        "--target-locales",
        default=None,
        help="Comma-separated target locales, in processing order "
             "(default: TARGET_LOCALES setting)"
    )

    # Persistence options
    parser.add_argument(
        "--upsert-strategy",
        choices=["on_conflict", "check_then_update"],
        default=None,
        help="How attribute rows are written (default: UPSERT_STRATEGY setting)"
    )
    parser.add_argument(
        "--limit",
        type=positive_int,
        default=None,
        help="Maximum number of source products to translate (default: all)"
    )

    # Translation options
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Do not use the SQLite translation cache"
    )
    parser.add_argument(
        "--check-language",
        action="store_true",
        help="Warn about source texts that are not in the source locale"
    )

    # Other options
    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="Disable the progress bar"
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Fetch the source products and show what would be done"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log every SQL statement sent to the database"
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    return parser.parse_args(argv)


def run_dry(config, limit, debug: bool, logger) -> int:
    """Fetch the source products and report the planned work."""
    from product_translation.core.connections import postgres_connection
    from product_translation.storage.product_repository import ProductRepository

    with postgres_connection(debug=debug) as conn:
        repository = ProductRepository(conn, config.attribute_ids, config.upsert_strategy)
        products = repository.fetch_source_products(config.source_locale, limit=limit)
        counts = repository.count_rows()

    pairs = len(products) * len(config.target_locales)
    logger.info("Dry run mode - nothing will be translated or written")
    logger.info(f"  Source products: {len(products):,}")
    logger.info(f"  Target locales: {', '.join(config.target_locales)}")
    logger.info(f"  Locale pairs: {pairs:,}")
    logger.info(f"  Translation requests (at most): {pairs * 2:,}")
    for table, count in counts.items():
        logger.info(f"  {table}: {count:,} rows")
    return 0


def main(argv=None) -> int:
    """
    Main entry point for the translation CLI.

    Returns:
        int: Exit code (0 for success, non-zero for failure).
    """
    args = parse_arguments(argv)

    from product_translation.config.logging_config import (
        SQL_LOGGER_NAME,
        get_logger,
        set_log_level,
        setup_logging,
    )

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)
    if args.debug:
        set_log_level(logging.DEBUG, SQL_LOGGER_NAME)

    logger = get_logger(__name__)

    from product_translation.config.pipeline_config import PipelineConfig
    from product_translation.config.settings import MAX_PRODUCTS_PER_RUN
    from product_translation.core.errors import (
        ConfigurationError,
        DataAccessError,
        FetchError,
    )
    from product_translation.pipeline.runner import run_translation_batch

    try:
        target_locales = None
        if args.target_locales:
            target_locales = [loc.strip() for loc in args.target_locales.split(",") if loc.strip()]

        config = PipelineConfig.from_settings(
            source_locale=args.source_locale,
            target_locales=target_locales,
            upsert_strategy=args.upsert_strategy,
            show_progress=False if args.no_progress else None,
        )
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        return 2

    logger.info("Starting product translation...")
    logger.info(f"  Source locale: {config.source_locale}")
    logger.info(f"  Target locales: {', '.join(config.target_locales)}")
    logger.info(f"  Upsert strategy: {config.upsert_strategy}")
    limit = args.limit if args.limit is not None else MAX_PRODUCTS_PER_RUN
    logger.info(f"  Limit: {limit or 'all'}")

    try:
        if args.dry_run:
            return run_dry(config, limit, args.debug, logger)

        run_translation_batch(
            config,
            limit=limit,
            debug_sql=args.debug,
            use_cache=not args.no_cache,
            check_language=True if args.check_language else None,
        )
        return 0

    except FetchError as e:
        logger.error(f"Could not read source products: {e}")
        return 1

    except DataAccessError as e:
        logger.error(f"Database error: {e}")
        return 1

    except psycopg2.OperationalError as e:
        logger.error(f"Could not connect to database: {e}")
        return 1

    except KeyboardInterrupt:
        logger.warning("Translation interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
