"""
Dump orchestration for SQL Dumper.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Callable, Optional

from .errors import DumpExistsError, SourceError
from .models import DumpDocument, LiteralMode
from .renderer import DumpRenderer
from .table_dumper import TableDumper

DUMP_VERSION = "0.1.0"
DUMP_EXTENSION = ".sql"
COMPLETED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"


class Dumper:
    """Dumps every table of one database into a new timestamped file."""

    DEFAULT_FILENAME_FORMAT = "%Y%m%d_%H%M%S"

    def __init__(
        self,
        connection,
        directory: str | Path,
        filename_format: Optional[str] = None,
        literal_mode: LiteralMode = LiteralMode.RAW,
        clock: Callable[[], datetime] = datetime.now
    ):
        self.connection = connection
        self.directory = Path(directory)
        self.filename_format = filename_format or self.DEFAULT_FILENAME_FORMAT
        self.literal_mode = literal_mode
        self.clock = clock
        self.renderer = DumpRenderer()
        self.last_document: Optional[DumpDocument] = None

    def dump_path(self) -> Path:
        """Derive the output file path from the current time."""
        name = self.clock().strftime(self.filename_format)
        return self.directory / f"{name}{DUMP_EXTENSION}"

    def dump(self) -> Path:
        """
        Create a dump of all tables.

        Returns:
            Path of the written dump file.

        Raises:
            DumpExistsError: If the derived file already exists. Checked before
                any query is sent.
            SourceError: If the server version or table list can't be read.
            TableExportError: If any table fails; the dump stops there.
            RenderError: If the script can't be written.
        """
        path = self.dump_path()
        if path.exists():
            raise DumpExistsError(path)

        try:
            sink = open(path, 'x', encoding='utf-8')
        except FileExistsError as e:
            raise DumpExistsError(path) from e

        with sink:
            document = self.build_document()
            self.renderer.render(document, sink)

        self.last_document = document
        logging.info(
            f"Dump written to {path}: {len(document.tables)} table(s), "
            f"{document.total_rows} rows"
        )
        return path

    def build_document(self) -> DumpDocument:
        """Collect server metadata and every table into a finalized document."""
        document = DumpDocument(dump_version=DUMP_VERSION)

        try:
            document.server_version = self.connection.get_server_version()
        except Exception as e:
            raise SourceError("server version lookup", str(e)) from e

        try:
            tables = self.connection.get_tables()
        except Exception as e:
            raise SourceError("table enumeration", str(e)) from e

        logging.info(f"Dumping {len(tables)} table(s), server version {document.server_version}")

        table_dumper = TableDumper(self.connection, self.literal_mode)
        for table in tables:
            document.add_table(table_dumper.export_table(table))

        document.finalize(self.clock().strftime(COMPLETED_AT_FORMAT))
        return document
