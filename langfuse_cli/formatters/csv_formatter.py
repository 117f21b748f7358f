"""CSV formatter"""

import csv
import io
from typing import Any

from langfuse_cli.formatters.rows import NO_DATA, format_value, normalize_rows


def format_csv(data: Any) -> str:
    normalized = normalize_rows(data)
    if normalized is None:
        return NO_DATA
    headers, rows = normalized

    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(headers)
    for row in rows:
        writer.writerow([format_value(row.get(header)) for header in headers])
    return buffer.getvalue()
