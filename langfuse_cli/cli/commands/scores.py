"""
Scores commands - list and get scores
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
def scores():
    """Manage scores"""


@scores.command("list")
@click.option("--name", help="Filter by score name")
@click.option("--from", "from_", help="Start timestamp (ISO 8601 or relative)")
@click.option("--to", help="End timestamp (ISO 8601 or relative)")
@click.option("--limit", type=click.IntRange(min=1), help="Limit number of results")
@click.option("--page", type=click.IntRange(min=1), help="Page number")
@pass_cli_context
@handle_api_errors()
def list_scores(ctx: CLIContext, name, from_, to, limit, page):
    """List scores with optional filtering"""
    filters = build_filters(name=name, **{"from": from_}, to=to)
    filters.update(resolve_pagination(ctx, limit, page))
    output_result(ctx, ctx.client().scores.list(filters))


@scores.command("get")
@click.argument("score_id")
@pass_cli_context
@handle_api_errors(not_found="Score not found - {score_id}")
def get_score(ctx: CLIContext, score_id):
    """Get a specific score"""
    output_result(ctx, ctx.client().scores.get(score_id))
