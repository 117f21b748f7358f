"""
Paginator - Assemble a bounded record list across server-side pages
"""

from typing import Any, Dict, List, Mapping, Optional

from langfuse_cli.api.transport import Transport
from langfuse_cli.observability import mainLogger

DEFAULT_PAGE_LIMIT = 50


def extract_records(response: Any) -> Any:
    """Records of a page: the 'data' field of an envelope, else the response itself"""
    if isinstance(response, dict) and "data" in response:
        return response["data"]
    return response


def has_next_page(response: Any, page: int) -> bool:
    """True only when the envelope reports more pages after page"""
    if not isinstance(response, dict):
        return False
    meta = response.get("meta")
    if not isinstance(meta, dict):
        return False
    total_pages = meta.get("totalPages")
    if not isinstance(total_pages, int) or isinstance(total_pages, bool):
        return False
    return page < total_pages


class Paginator:
    """Drives sequential GET requests until the requested limit is reached"""

    def __init__(self, transport: Transport):
        self.transport = transport

    def collect(
        self,
        path: str,
        wire_query: Optional[Mapping[str, Any]] = None,
        requested_limit: Optional[int] = None,
        requested_page: Optional[int] = None,
    ) -> List[Any]:
        """
        Fetch pages in ascending order and concatenate their records

        Stops on an empty page, once requested_limit records are collected,
        or when meta.totalPages says there is nothing more. Errors from any
        page propagate; no partial result is returned.

        Args:
            path: List endpoint path
            wire_query: Filter parameters sent with every page
            requested_limit: Maximum records to return (default: 50); also
                used as the page size
            requested_page: First page to fetch (default: 1)

        Returns:
            At most requested_limit records in server order
        """
        limit = requested_limit or DEFAULT_PAGE_LIMIT
        page = requested_page or 1
        base_query: Dict[str, Any] = {
            key: value for key, value in (wire_query or {}).items()
            if key not in ("page", "limit")
        }

        results: List[Any] = []
        while True:
            response = self.transport.request(
                "GET", path, {**base_query, "page": page, "limit": limit}
            )

            records = extract_records(response)
            if not records:
                break
            if isinstance(records, list):
                results.extend(records)
            else:
                results.append(records)

            if len(results) >= limit:
                break
            if not has_next_page(response, page):
                break
            page += 1

        mainLogger.debug(
            "Pagination finished",
            path=path,
            pages_fetched=page - (requested_page or 1) + 1,
            records=min(len(results), limit),
        )
        return results[:limit]
