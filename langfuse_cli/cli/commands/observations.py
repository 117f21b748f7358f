"""
Observations commands - list and get observations
"""

import click

from langfuse_cli.api.types import ObservationType, enum_values
from langfuse_cli.cli.common import (
    CLIContext,
    build_filters,
    handle_api_errors,
    output_result,
    pass_cli_context,
    resolve_pagination,
)


@click.group()
def observations():
    """Manage observations"""


@observations.command("list")
@click.option("--trace-id", help="Filter by trace ID")
@click.option("--name", help="Filter by observation name")
@click.option("--type", "type_", type=click.Choice(enum_values(ObservationType)), help="Filter by type")
@click.option("--user-id", help="Filter by user ID")
@click.option("--from", "from_", help="Start timestamp (ISO 8601 or relative)")
@click.option("--to", help="End timestamp (ISO 8601 or relative)")
@click.option("--limit", type=click.IntRange(min=1), help="Limit number of results")
@click.option("--page", type=click.IntRange(min=1), help="Page number")
@pass_cli_context
@handle_api_errors()
def list_observations(ctx: CLIContext, trace_id, name, type_, user_id, from_, to, limit, page):
    """
    List observations with optional filtering

    Observations are the LLM calls, spans and events inside a trace.

    \b
    Examples:
        # List all generations
        lf observations list --type generation

        # List observations for a specific trace
        lf observations list --trace-id trace_123
    """
    filters = build_filters(
        trace_id=trace_id,
        name=name,
        type=type_,
        user_id=user_id,
        **{"from": from_},
        to=to,
    )
    filters.update(resolve_pagination(ctx, limit, page))
    output_result(ctx, ctx.client().observations.list(filters))


@observations.command("get")
@click.argument("observation_id")
@pass_cli_context
@handle_api_errors(not_found="Observation not found - {observation_id}")
def get_observation(ctx: CLIContext, observation_id):
    """Get a specific observation"""
    output_result(ctx, ctx.client().observations.get(observation_id))
