"""Row normalization shared by the tabular formatters"""

import json
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Tuple

NO_DATA = "No data to display"


def format_value(value: Any) -> str:
    """Render one cell: None empty, containers as JSON, dates as ISO 8601"""
    if value is None:
        return ""
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False, default=str)
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def normalize_rows(data: Any) -> Optional[Tuple[List[str], List[Dict[str, Any]]]]:
    """
    Turn a result into (headers, rows)

    A single mapping becomes one row; scalars become a 'value' column.
    Headers are the union of row keys in first-seen order.

    Returns:
        None when there is nothing to display
    """
    if data is None or data == [] or data == {}:
        return None
    if not isinstance(data, list):
        data = [data]

    rows = [row if isinstance(row, dict) else {"value": row} for row in data]

    headers: List[str] = []
    for row in rows:
        for key in row:
            if key not in headers:
                headers.append(key)
    return headers, rows
