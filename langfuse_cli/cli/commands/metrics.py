"""
Metrics commands - aggregate queries
"""

import click

from langfuse_cli.api.types import (
    Aggregation,
    Measure,
    MetricsQuery,
    MetricsView,
    TimeGranularity,
    enum_values,
)
from langfuse_cli.cli.common import (
    CLIContext,
    handle_api_errors,
    output_result,
    pass_cli_context,
)


def _split_dimensions(values):
    """Accept both repeated --dimensions and comma-separated lists"""
    dimensions = []
    for value in values:
        dimensions.extend(part.strip() for part in value.split(",") if part.strip())
    return dimensions or None


@click.group()
def metrics():
    """Query metrics"""


@metrics.command("query")
@click.option("--view", required=True, help=f"View type ({', '.join(enum_values(MetricsView))})")
@click.option("--measure", required=True, help=f"Measure ({', '.join(enum_values(Measure))})")
@click.option("--aggregation", required=True, help=f"Aggregation ({', '.join(enum_values(Aggregation))})")
@click.option("--dimensions", multiple=True, help="Dimension to group by, e.g. name, userId (repeatable or comma-separated)")
@click.option("--from", "from_", help="Start timestamp (ISO 8601 or relative)")
@click.option("--to", help="End timestamp (ISO 8601 or relative)")
@click.option("--granularity", help=f"Time granularity ({', '.join(enum_values(TimeGranularity))})")
@click.option("--limit", type=int, default=100, show_default=True, help="Limit number of results")
@pass_cli_context
@handle_api_errors()
def query(ctx: CLIContext, view, measure, aggregation, dimensions, from_, to, granularity, limit):
    """
    Query metrics with custom parameters

    \b
    Examples:
        # Trace count per name over the last day
        lf metrics query --view traces --measure count --aggregation count \\
            --dimensions name --from "1 day ago"

        # Daily p95 latency of observations
        lf metrics query --view observations --measure latency \\
            --aggregation p95 --granularity day
    """
    metrics_query = MetricsQuery(
        view=view,
        measure=measure,
        aggregation=aggregation,
        dimensions=_split_dimensions(dimensions),
        from_timestamp=from_,
        to_timestamp=to,
        granularity=granularity,
        limit=limit,
    )
    output_result(ctx, ctx.client().metrics.query(metrics_query))
