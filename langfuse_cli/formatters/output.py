"""
Output dispatch - pick a formatter by name and write to stdout or a file
"""

import json
from pathlib import Path
from typing import Any, Union

from langfuse_cli.api.types import OutputFormat, parse_enum
from langfuse_cli.formatters.csv_formatter import format_csv
from langfuse_cli.formatters.markdown_formatter import format_markdown
from langfuse_cli.formatters.table_formatter import format_table


def format_output(data: Any, format_type: Union[str, OutputFormat] = OutputFormat.TABLE) -> str:
    """
    Render data in the requested format

    Raises:
        ValidationError: Unknown format name
    """
    fmt = parse_enum(OutputFormat, format_type or OutputFormat.TABLE, "format")
    if fmt == OutputFormat.JSON:
        return json.dumps(data, indent=2, ensure_ascii=False, default=str)
    if fmt == OutputFormat.CSV:
        return format_csv(data)
    if fmt == OutputFormat.MARKDOWN:
        return format_markdown(data)
    return format_table(data)


def write_output(path: Union[str, Path], data: Any, format_type: Union[str, OutputFormat]) -> Path:
    """Write formatted data to path and return the path"""
    file_path = Path(path).expanduser()
    content = format_output(data, format_type)
    if not content.endswith("\n"):
        content += "\n"
    file_path.write_text(content, encoding="utf-8")
    return file_path
