"""
Data models and enums for SQL Dumper.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class LiteralMode(Enum):
    """How column values are written as SQL literals."""
    RAW = "raw"
    ESCAPED = "escaped"


@dataclass(frozen=True)
class TableRecord:
    """DDL and serialized rows for one exported table."""
    name: str
    create_statement: str
    values_clause: str
    row_count: int = 0

    @property
    def has_data(self) -> bool:
        return bool(self.values_clause)


@dataclass
class DumpDocument:
    """Everything collected for one dump, consumed once by the renderer."""
    dump_version: str
    server_version: str = ""
    tables: list[TableRecord] = field(default_factory=list)
    completed_at: Optional[str] = None

    def add_table(self, record: TableRecord) -> None:
        """Append a table in enumeration order."""
        if self.completed_at is not None:
            raise ValueError("Cannot add tables to a finalized dump document")
        self.tables.append(record)

    def finalize(self, completed_at: str) -> None:
        """Stamp the completion time after the last table."""
        self.completed_at = completed_at

    @property
    def is_finalized(self) -> bool:
        return self.completed_at is not None

    @property
    def total_rows(self) -> int:
        return sum(t.row_count for t in self.tables)


@dataclass
class OutputSettings:
    """Where and how dump files are written."""
    directory: str = "./dumps"
    filename_format: str = "%Y%m%d_%H%M%S"
    literal_mode: LiteralMode = LiteralMode.RAW


@dataclass
class DatabaseResult:
    """Outcome of dumping a single database."""
    name: str
    instance: str
    file_path: str = ""
    tables: int = 0
    total_rows: int = 0
    success: bool = False
    error: Optional[str] = None


@dataclass
class DumpStats:
    """Overall run statistics."""
    databases: list[DatabaseResult] = field(default_factory=list)

    @property
    def total_tables(self) -> int:
        return sum(db.tables for db in self.databases)

    @property
    def total_rows(self) -> int:
        return sum(db.total_rows for db in self.databases)

    @property
    def errors(self) -> list[DatabaseResult]:
        return [db for db in self.databases if not db.success]
