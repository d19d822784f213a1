#!/usr/bin/env python3
"""
SQL Dumper - CLI Entry Point
============================
Writes a replayable SQL script (schema and data for every table) for each
configured MySQL database.
"""

import argparse
import logging
import sys

import yaml

from .config import ConfigLoader
from .database_dumper import DatabaseDumper
from .utils import print_dry_run_info, setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='SQL Dumper - timestamped schema and data dumps'
    )
    parser.add_argument(
        '-c', '--config',
        default='config.yaml',
        help='Path to configuration file (default: config.yaml)'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--dry-run',
        action='store_true',
        help='Show what would be dumped without actually dumping'
    )
    parser.add_argument(
        '-d', '--database',
        help='Dump only the specified database (must be defined in config)'
    )
    parser.add_argument(
        '-i', '--instance',
        help='Dump only databases from the specified instance'
    )
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # Load configuration
    try:
        config = ConfigLoader(args.config)
        output_settings = config.get_output_settings()
    except FileNotFoundError:
        print(f"Error: Configuration file '{args.config}' not found")
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"Error: Invalid YAML in configuration file: {e}")
        sys.exit(1)
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    log_settings = config.get_logging_settings()
    if args.verbose:
        log_settings['level'] = 'DEBUG'
    setup_logging(log_settings)

    if args.dry_run:
        logging.info("DRY RUN MODE - No data will be dumped")
        dumper = DatabaseDumper(config)
        print_dry_run_info(dumper.filter_databases(args.database, args.instance), output_settings)
        sys.exit(0)

    try:
        dumper = DatabaseDumper(config)
        stats = dumper.run(
            database_filter=args.database,
            instance_filter=args.instance
        )
    except Exception as e:
        logging.error(f"Fatal error: {e}")
        sys.exit(1)

    logging.info("=" * 50)
    logging.info("DUMP COMPLETE")
    logging.info(f"Databases: {len(stats.databases)}")
    logging.info(f"Tables: {stats.total_tables}")
    logging.info(f"Total Rows: {stats.total_rows}")

    if stats.errors:
        logging.warning(f"Errors: {len(stats.errors)}")
        for err in stats.errors:
            logging.warning(f"  - {err.instance}/{err.name}: {err.error}")
        sys.exit(1)


if __name__ == '__main__':
    main()
