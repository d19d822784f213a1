"""
Exception hierarchy for SQL Dumper.

Every failure aborts the whole dump; these types only tell the caller
which stage failed.
"""

from pathlib import Path
from typing import Optional


class DumpError(Exception):
    """Base class for all dump failures."""


class DumpExistsError(DumpError):
    """The derived dump file already exists."""

    def __init__(self, path: Path):
        super().__init__(f"Dump '{Path(path).name}' already exists.")
        self.path = Path(path)


class SourceError(DumpError):
    """Server version lookup or table enumeration failed."""

    def __init__(self, stage: str, message: str = ""):
        detail = f"Failed during {stage}"
        if message:
            detail += f": {message}"
        super().__init__(detail)
        self.stage = stage


class TableExportError(DumpError):
    """A single table could not be exported."""

    def __init__(self, table: str, message: str = ""):
        detail = f"Error exporting table '{table}'"
        if message:
            detail += f": {message}"
        super().__init__(detail)
        self.table = table


class TableMismatchError(TableExportError):
    """SHOW CREATE TABLE answered for a different table than requested."""

    def __init__(self, table: str, returned: Optional[str]):
        super().__init__(table, f"unexpected table '{returned}' returned")
        self.returned = returned


class NoColumnsError(TableExportError):
    """The source reported no columns for a table."""

    def __init__(self, table: str):
        super().__init__(table, f"no columns in table {table}")


class RenderError(DumpError):
    """The dump document could not be rendered to the sink."""
