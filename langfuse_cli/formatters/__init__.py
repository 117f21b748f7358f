"""
Formatters - Render API results as table, JSON, CSV or markdown
"""

from langfuse_cli.formatters.rows import NO_DATA, normalize_rows, format_value
from langfuse_cli.formatters.table_formatter import format_table
from langfuse_cli.formatters.csv_formatter import format_csv
from langfuse_cli.formatters.markdown_formatter import format_markdown
from langfuse_cli.formatters.output import format_output, write_output

__all__ = [
    "format_output",
    "write_output",
    "NO_DATA",
    "normalize_rows",
    "format_value",
    "format_table",
    "format_csv",
    "format_markdown",
]
