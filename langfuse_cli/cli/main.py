"""
Main CLI Entry Point - Unified command-line interface
"""

import click

from langfuse_cli import __version__
from langfuse_cli.api.transport import debug_enabled
from langfuse_cli.api.types import OutputFormat, enum_values
from langfuse_cli.cli.commands import (
    config,
    metrics,
    observations,
    scores,
    sessions,
    traces,
)
from langfuse_cli.cli.common import CLIContext
from langfuse_cli.observability import setup_logging


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-P", "--profile", envvar="LANGFUSE_PROFILE", help="Config profile to use")
@click.option(
    "-f", "--format", "format_",
    type=click.Choice(enum_values(OutputFormat)),
    help="Output format (default: profile setting, else table)",
)
@click.option("-o", "--output", type=click.Path(dir_okay=False, writable=True), help="Output file path (defaults to stdout)")
@click.option("-l", "--limit", type=click.IntRange(min=1), help="Limit number of results")
@click.option("-p", "--page", type=click.IntRange(min=1), help="Page number for pagination")
@click.option("--host", help="Langfuse host URL")
@click.option("--public-key", help="Langfuse public key")
@click.option("--secret-key", help="Langfuse secret key")
@click.option("-v", "--verbose", is_flag=True, help="Verbose output (request and retry logs on stderr)")
@click.option("--log-file", type=click.Path(dir_okay=False), envvar="LANGFUSE_LOG_FILE", help="Append JSON debug logs to this file")
@click.pass_context
def main(ctx, profile, format_, output, limit, page, host, public_key, secret_key, verbose, log_file):
    """
    Langfuse CLI - query traces, sessions, observations, scores and metrics

    \b
    Examples:
        # Configure credentials
        lf config setup

        # List recent traces
        lf traces list --from "1 hour ago" --limit 20

        # Get a trace as JSON
        lf -f json traces get TRACE_ID

        # Trace counts per name
        lf metrics query --view traces --measure count --aggregation count --dimensions name
    """
    setup_logging(verbose=verbose, debug=debug_enabled(), log_file=log_file)
    ctx.obj = CLIContext(
        profile=profile,
        format=format_,
        output=output,
        limit=limit,
        page=page,
        host=host,
        public_key=public_key,
        secret_key=secret_key,
        verbose=verbose,
    )


@main.command()
def version():
    """Show version"""
    click.echo(f"lf-cli version {__version__}")


main.add_command(traces)
main.add_command(sessions)
main.add_command(observations)
main.add_command(scores)
main.add_command(metrics)
main.add_command(config)


if __name__ == "__main__":
    main()
