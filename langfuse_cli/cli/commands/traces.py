"""
Traces commands - list and get traces
"""

import click

from langfuse_cli.cli.common import (
    CLIContext,
    build_filters,
    handle_api_errors,
    output_result,
    pass_cli_context,
    resolve_pagination,
)


@click.group()
def traces():
    """Manage traces"""


@traces.command("list")
@click.option("--from", "from_", help='Start timestamp (ISO 8601 or relative like "1 hour ago")')
@click.option("--to", help="End timestamp (ISO 8601 or relative)")
@click.option("--name", help="Filter by trace name")
@click.option("--user-id", help="Filter by user ID")
@click.option("--session-id", help="Filter by session ID")
@click.option("--tags", multiple=True, help="Filter by tag (repeatable)")
@click.option("--limit", type=click.IntRange(min=1), help="Limit number of results")
@click.option("--page", type=click.IntRange(min=1), help="Page number")
@pass_cli_context
@handle_api_errors()
def list_traces(ctx: CLIContext, from_, to, name, user_id, session_id, tags, limit, page):
    """
    List traces with optional filtering

    Traces represent complete workflows or conversations.

    \b
    Examples:
        # List recent traces
        lf traces list --from "1 hour ago" --limit 20

        # Filter by user and session
        lf traces list --user-id user_123 --session-id sess_456

        # Export to CSV
        lf -f csv -o traces.csv traces list
    """
    filters = build_filters(
        **{"from": from_},
        to=to,
        name=name,
        user_id=user_id,
        session_id=session_id,
        tags=tags,
    )
    filters.update(resolve_pagination(ctx, limit, page))
    output_result(ctx, ctx.client().traces.list(filters))


@traces.command("get")
@click.argument("trace_id")
@pass_cli_context
@handle_api_errors(not_found="Trace not found - {trace_id}")
def get_trace(ctx: CLIContext, trace_id):
    """Get a specific trace"""
    output_result(ctx, ctx.client().traces.get(trace_id))
