"""
Sessions commands - list and get sessions
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
def sessions():
    """Manage sessions"""


@sessions.command("list")
@click.option("--from", "from_", help='Start timestamp (ISO 8601 or relative like "1 hour ago")')
@click.option("--to", help="End timestamp (ISO 8601 or relative)")
@click.option("--limit", type=click.IntRange(min=1), help="Limit number of results")
@click.option("--page", type=click.IntRange(min=1), help="Page number")
@pass_cli_context
@handle_api_errors()
def list_sessions(ctx: CLIContext, from_, to, limit, page):
    """List sessions, optionally within a time range"""
    filters = build_filters(**{"from": from_}, to=to)
    filters.update(resolve_pagination(ctx, limit, page))
    output_result(ctx, ctx.client().sessions.list(filters))


@sessions.command("get")
@click.argument("session_id")
@pass_cli_context
@handle_api_errors(not_found="Session not found - {session_id}")
def get_session(ctx: CLIContext, session_id):
    """Get a specific session"""
    output_result(ctx, ctx.client().sessions.get(session_id))
