"""Markdown table formatter"""

from typing import Any

from langfuse_cli.formatters.rows import NO_DATA, format_value, normalize_rows


def escape_pipes(text: str) -> str:
    return text.replace("|", "\\|")


def format_markdown(data: Any) -> str:
    normalized = normalize_rows(data)
    if normalized is None:
        return NO_DATA
    headers, rows = normalized

    lines = [
        "| " + " | ".join(escape_pipes(str(header)) for header in headers) + " |",
        "| " + " | ".join("---" for _ in headers) + " |",
    ]
    for row in rows:
        values = [escape_pipes(format_value(row.get(header))) for header in headers]
        lines.append("| " + " | ".join(values) + " |")
    return "\n".join(lines)
