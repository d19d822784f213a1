"""
SQL Dumper
==========
Point-in-time logical dumps of MySQL databases:
- Schema (DROP / CREATE TABLE) and data (bulk INSERT) for every table
- One timestamped, never-overwritten .sql file per dump
- All-or-nothing: the first failing table aborts the dump
- Multiple databases and instances from one YAML configuration
"""

from .config import ConfigLoader
from .connection import DatabaseConnection
from .database_dumper import DatabaseDumper
from .dumper import DUMP_VERSION, Dumper
from .encoder import ValueEncoder
from .errors import (
    DumpError,
    DumpExistsError,
    NoColumnsError,
    RenderError,
    SourceError,
    TableExportError,
    TableMismatchError,
)
from .main import main
from .models import (
    DatabaseResult,
    DumpDocument,
    DumpStats,
    LiteralMode,
    OutputSettings,
    TableRecord,
)
from .renderer import DumpRenderer
from .table_dumper import TableDumper
from .utils import print_dry_run_info, setup_logging

__version__ = DUMP_VERSION

__all__ = [
    # Main entry point
    "main",
    # Core classes
    "ConfigLoader",
    "DatabaseConnection",
    "DatabaseDumper",
    "Dumper",
    "DumpRenderer",
    "TableDumper",
    "ValueEncoder",
    # Models
    "DatabaseResult",
    "DumpDocument",
    "DumpStats",
    "LiteralMode",
    "OutputSettings",
    "TableRecord",
    # Errors
    "DumpError",
    "DumpExistsError",
    "NoColumnsError",
    "RenderError",
    "SourceError",
    "TableExportError",
    "TableMismatchError",
    # Utilities
    "print_dry_run_info",
    "setup_logging",
    "DUMP_VERSION",
]
