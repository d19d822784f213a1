"""
Multi-database dump runner for SQL Dumper.
"""

import logging
from pathlib import Path
from typing import Any, Optional

from .config import ConfigLoader
from .connection import DatabaseConnection
from .dumper import Dumper
from .models import DatabaseResult, DumpStats


class DatabaseDumper:
    """Dumps every configured database, one file per database."""

    def __init__(self, config: ConfigLoader):
        self.config = config
        self.output_settings = config.get_output_settings()
        self.stats = DumpStats()

    def run(
        self,
        database_filter: Optional[str] = None,
        instance_filter: Optional[str] = None
    ) -> DumpStats:
        """Run the dump process for all configured databases.

        Args:
            database_filter: If specified, only dump this database name
            instance_filter: If specified, only dump databases from this instance
        """
        output_dir = Path(self.output_settings.directory)
        output_dir.mkdir(parents=True, exist_ok=True)

        databases = self.filter_databases(database_filter, instance_filter)
        logging.info(f"Starting dump of {len(databases)} database(s)")

        for db_config in databases:
            self.stats.databases.append(self._dump_database(db_config, output_dir))

        return self.stats

    def filter_databases(
        self,
        database_filter: Optional[str],
        instance_filter: Optional[str]
    ) -> list[dict[str, Any]]:
        """Filter configured databases by name and instance."""
        databases = self.config.get_databases()

        if database_filter:
            databases = [db for db in databases if db['name'] == database_filter]
            if not databases:
                logging.warning(f"No database named '{database_filter}' found in configuration")

        if instance_filter:
            databases = [db for db in databases if db['instance'] == instance_filter]
            if not databases:
                logging.warning(f"No databases found for instance '{instance_filter}'")

        return databases

    def _dump_database(self, db_config: dict[str, Any], output_dir: Path) -> DatabaseResult:
        """Dump a single database into its own subdirectory."""
        db_name = db_config['name']
        result = DatabaseResult(name=db_name, instance=db_config['instance'])

        try:
            instance_config = self.config.get_instance(result.instance)
            db_output_dir = output_dir / db_name
            db_output_dir.mkdir(parents=True, exist_ok=True)

            with DatabaseConnection(
                host=instance_config['host'],
                port=instance_config.get('port', DatabaseConnection.DEFAULT_PORT),
                user=instance_config['user'],
                password=instance_config['password'],
                database=db_name
            ) as conn:
                dumper = Dumper(
                    conn,
                    db_output_dir,
                    filename_format=self.output_settings.filename_format,
                    literal_mode=self.output_settings.literal_mode
                )
                document_path = dumper.dump()

            document = dumper.last_document
            result.file_path = str(document_path)
            result.tables = len(document.tables)
            result.total_rows = document.total_rows
            result.success = True
        except Exception as e:
            result.error = str(e)
            logging.error(f"  ✗ {db_name}: {e}")
            return result

        logging.info(f"  ✓ {db_name}: {result.tables} table(s), {result.total_rows} rows -> {result.file_path}")
        return result
