"""
Rendering of dump documents into replayable SQL scripts.
"""

import io
from typing import TextIO

from .errors import RenderError
from .models import DumpDocument, TableRecord

HEADER_TEMPLATE = (
    "-- Go SQL Dump {dump_version}\n"
    "--\n"
    "-- ------------------------------------------------------\n"
    "-- Server version\t{server_version}\n"
    "\n"
    "\n"
)

TABLE_TEMPLATE = (
    "\n"
    "--\n"
    "-- Table structure for table {name}\n"
    "--\n"
    "\n"
    "DROP TABLE IF EXISTS {name};\n"
    "{create_statement};\n"
)

DATA_TEMPLATE = (
    "\n"
    "--\n"
    "-- Dumping data for table {name}\n"
    "--\n"
    "\n"
    "LOCK TABLES {name} WRITE;\n"
    "INSERT INTO {name} VALUES {values_clause};\n"
    "UNLOCK TABLES;\n"
)

FOOTER_TEMPLATE = (
    "\n"
    "-- Dump completed on {completed_at}\n"
)


class DumpRenderer:
    """Writes a finalized DumpDocument as an SQL script.

    Sections are written to the sink as they are rendered, so a failure
    part way through leaves a truncated script behind.
    """

    def render(self, document: DumpDocument, sink: TextIO) -> None:
        if not document.is_finalized:
            raise RenderError("Dump document has no completion time")

        try:
            sink.write(HEADER_TEMPLATE.format(
                dump_version=document.dump_version,
                server_version=document.server_version
            ))
            for table in document.tables:
                sink.write(self.render_table(table))
            sink.write(FOOTER_TEMPLATE.format(completed_at=document.completed_at))
        except (OSError, ValueError) as e:
            raise RenderError(f"Failed to write dump: {e}") from e

    def render_table(self, table: TableRecord) -> str:
        """Render the structure and, for non-empty tables, the data section."""
        section = TABLE_TEMPLATE.format(
            name=table.name,
            create_statement=table.create_statement
        )
        if table.has_data:
            section += DATA_TEMPLATE.format(
                name=table.name,
                values_clause=table.values_clause
            )
        return section

    def render_to_string(self, document: DumpDocument) -> str:
        buffer = io.StringIO()
        self.render(document, buffer)
        return buffer.getvalue()
