"""
Utility functions for SQL Dumper.
"""

import logging
import sys
from pathlib import Path
from typing import Any

from .models import OutputSettings


def setup_logging(log_settings: dict[str, Any]) -> None:
    """Setup logging configuration."""
    log_level = getattr(logging, log_settings.get('level', 'INFO').upper())
    log_file = log_settings.get('file')

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers,
        force=True
    )


def print_dry_run_info(databases: list[dict[str, Any]], output_settings: OutputSettings) -> None:
    """Log what would be dumped in dry-run mode."""
    for db in databases:
        target = Path(output_settings.directory) / db['name']
        logging.info(f"Would dump database: {db['name']} from instance: {db['instance']}")
        logging.info(f"  -> {target}/{output_settings.filename_format}.sql")
        logging.info(f"  Literal mode: {output_settings.literal_mode.value}")
