"""
Common utilities for CLI commands - config loading, client creation, output and errors
"""

import sys
from dataclasses import dataclass, field
from functools import wraps
from typing import Any, Callable, Dict, Optional

import click
from rich.console import Console
from rich.markup import escape

from langfuse_cli.api import (
    Client,
    AuthenticationError,
    LangfuseCLIError,
    NotFoundError,
)
from langfuse_cli.config import Config
from langfuse_cli.formatters import format_output, write_output
from langfuse_cli.observability import mainLogger

console = Console()
err_console = Console(stderr=True)


@dataclass
class CLIContext:
    """Global options shared by every subcommand"""
    profile: Optional[str] = None
    format: Optional[str] = None
    output: Optional[str] = None
    limit: Optional[int] = None
    page: Optional[int] = None
    host: Optional[str] = None
    public_key: Optional[str] = None
    secret_key: Optional[str] = None
    verbose: bool = False
    _config: Optional[Config] = field(default=None, repr=False)
    _client: Optional[Client] = field(default=None, repr=False)

    def load_config(self) -> Config:
        if self._config is None:
            self._config = Config.load(
                profile=self.profile,
                host=self.host,
                public_key=self.public_key,
                secret_key=self.secret_key,
                format=self.format,
                limit=self.limit,
            )
        return self._config

    def client(self) -> Client:
        """Build the API client once per invocation"""
        if self._client is None:
            cfg = self.load_config()
            self._client = Client(cfg.credentials())
            mainLogger.info("Client created", host=cfg.host, profile=cfg.profile)
        return self._client


pass_cli_context = click.make_pass_decorator(CLIContext, ensure=True)


def fail(message: str) -> None:
    """Print an error to stderr and exit with status 1"""
    err_console.print(f"[red]{escape(message)}[/red]", highlight=False, soft_wrap=True)
    sys.exit(1)


def handle_api_errors(not_found: Optional[str] = None) -> Callable:
    """
    Decorator turning API errors into CLI error messages

    Args:
        not_found: Message template for NotFoundError, formatted with the
            command's keyword arguments (e.g. "Trace not found - {trace_id}")
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            try:
                return func(*args, **kwargs)
            except NotFoundError as e:
                if not_found:
                    fail(not_found.format(**kwargs))
                fail(f"Error: {e.message}")
            except AuthenticationError as e:
                fail(f"Authentication Error: {e.message}")
            except LangfuseCLIError as e:
                fail(f"Error: {e.message}")
        return wrapper
    return decorator


def build_filters(**options) -> Dict[str, Any]:
    """Keep only the options the user actually set"""
    return {
        key: value for key, value in options.items()
        if value is not None and value != ()
    }


def resolve_pagination(ctx: CLIContext, limit: Optional[int], page: Optional[int]) -> Dict[str, Any]:
    """Subcommand --limit/--page win over the global ones, then the profile's page_limit"""
    resolved: Dict[str, Any] = {}
    limit = limit or ctx.limit
    if limit is None:
        limit = ctx.load_config().page_limit
    if limit is not None:
        resolved["limit"] = limit
    page = page or ctx.page
    if page is not None:
        resolved["page"] = page
    return resolved


def output_result(ctx: CLIContext, data: Any) -> None:
    """Render data in the selected format to stdout or --output"""
    format_type = ctx.format or ctx.load_config().output_format
    if ctx.output:
        path = write_output(ctx.output, data, format_type)
        if ctx.verbose:
            console.print(f"Output written to {path}")
        return
    click.echo(format_output(data, format_type))
