"""Table formatter using rich"""

import io
from typing import Any

from rich.console import Console
from rich.table import Table

from langfuse_cli.formatters.rows import NO_DATA, format_value, normalize_rows

TABLE_WIDTH = 200


def format_table(data: Any) -> str:
    normalized = normalize_rows(data)
    if normalized is None:
        return NO_DATA
    headers, rows = normalized

    table = Table(show_header=True, header_style="bold")
    for header in headers:
        table.add_column(str(header), overflow="fold")
    for row in rows:
        table.add_row(*(format_value(row.get(header)) for header in headers))

    buffer = io.StringIO()
    console = Console(file=buffer, width=TABLE_WIDTH, color_system=None, force_terminal=False)
    console.print(table)
    return buffer.getvalue().rstrip("\n")
