"""
API Client - Named read-only operations over the public API
"""

from typing import Any, Dict, List, Mapping, Optional, Union
from urllib.parse import quote

from langfuse_cli.api.exceptions import ValidationError
from langfuse_cli.api.paginator import Paginator, extract_records
from langfuse_cli.api.request_builder import (
    METRICS_PATH,
    Filters,
    ResourceFamily,
    build_metrics_body,
    build_query,
)
from langfuse_cli.api.retry import RetryPolicy
from langfuse_cli.api.transport import Credentials, Transport
from langfuse_cli.api.types import MetricsQuery
from langfuse_cli.observability import mainLogger

CONNECTION_TEST_TIMEOUT = (5, 5)

FilterInput = Union[Filters, Mapping[str, Any], None]


class ResourceGroup:
    """list() and get() for one resource family"""

    def __init__(self, transport: Transport, family: ResourceFamily):
        self.transport = transport
        self.family = family
        self.paginator = Paginator(transport)

    def list(self, filters: FilterInput = None) -> List[Dict[str, Any]]:
        """
        List records matching filters

        Args:
            filters: Family filter dataclass or mapping of logical names

        Returns:
            Records in server order, at most filters' limit (default 50)
        """
        query = build_query(self.family, filters)
        limit = query.pop("limit", None)
        page = query.pop("page", None)
        mainLogger.info(
            f"Listing {self.family.value}",
            filters=sorted(query),
            limit=limit,
            page=page,
        )
        return self.paginator.collect(self.family.path, query, limit, page)

    def get(self, resource_id: str) -> Dict[str, Any]:
        """
        Fetch a single record by id

        Raises:
            NotFoundError: The id does not exist (not retried)
        """
        if not resource_id:
            raise ValidationError(f"A {self.family.value} id is required", field="id")
        path = f"{self.family.path}/{quote(str(resource_id), safe='')}"
        return self.transport.request("GET", path)


class MetricsResource:
    """Aggregate metrics queries"""

    def __init__(self, transport: Transport):
        self.transport = transport

    def query(self, metrics_query: MetricsQuery) -> Any:
        """
        Run an aggregate query

        The body is validated before anything is sent. A {"data": ...}
        envelope in the response is unwrapped.

        Raises:
            ValidationError: Unknown view, measure, aggregation or granularity
        """
        body = build_metrics_body(metrics_query)
        mainLogger.info("Querying metrics", view=body["view"], metrics=body["metrics"])
        return extract_records(self.transport.request("POST", METRICS_PATH, body))


class Client:
    """
    Read-only client for traces, sessions, observations, scores and metrics

    Examples:
        >>> client = Client(Credentials(host, public_key, secret_key))
        >>> client.traces.list({"name": "chat", "limit": 5})
        >>> client.get_trace("trace-id")
    """

    def __init__(
        self,
        credentials: Credentials,
        retry_policy: Optional[RetryPolicy] = None,
        transport: Optional[Transport] = None,
        **transport_options,
    ):
        self.transport = transport or Transport(
            credentials, retry_policy=retry_policy, **transport_options
        )
        self.traces = ResourceGroup(self.transport, ResourceFamily.TRACES)
        self.sessions = ResourceGroup(self.transport, ResourceFamily.SESSIONS)
        self.observations = ResourceGroup(self.transport, ResourceFamily.OBSERVATIONS)
        self.scores = ResourceGroup(self.transport, ResourceFamily.SCORES)
        self.metrics = MetricsResource(self.transport)

    @property
    def host(self) -> str:
        return self.transport.base_url

    def test_connection(self) -> Any:
        """Fetch one trace with short timeouts and no retry to check credentials"""
        return self.transport.request(
            "GET",
            ResourceFamily.TRACES.path,
            {"limit": 1},
            timeout=CONNECTION_TEST_TIMEOUT,
            retry=False,
        )

    # Traces API
    def list_traces(self, filters: FilterInput = None) -> List[Dict[str, Any]]:
        return self.traces.list(filters)

    def get_trace(self, trace_id: str) -> Dict[str, Any]:
        return self.traces.get(trace_id)

    # Sessions API
    def list_sessions(self, filters: FilterInput = None) -> List[Dict[str, Any]]:
        return self.sessions.list(filters)

    def get_session(self, session_id: str) -> Dict[str, Any]:
        return self.sessions.get(session_id)

    # Observations API
    def list_observations(self, filters: FilterInput = None) -> List[Dict[str, Any]]:
        return self.observations.list(filters)

    def get_observation(self, observation_id: str) -> Dict[str, Any]:
        return self.observations.get(observation_id)

    # Scores API
    def list_scores(self, filters: FilterInput = None) -> List[Dict[str, Any]]:
        return self.scores.list(filters)

    def get_score(self, score_id: str) -> Dict[str, Any]:
        return self.scores.get(score_id)

    # Metrics API
    def query_metrics(self, metrics_query: MetricsQuery) -> Any:
        return self.metrics.query(metrics_query)

    def close(self) -> None:
        self.transport.close()
