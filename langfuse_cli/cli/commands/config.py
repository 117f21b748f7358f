"""
Config commands - setup, set, show and list profiles
"""

import os

import click
from rich.panel import Panel
from rich.prompt import Prompt

from langfuse_cli.api import (
    APIError,
    AuthenticationError,
    Client,
    LangfuseCLIError,
    TimeoutError,
)
from langfuse_cli.cli.common import console, fail
from langfuse_cli.config import (
    DEFAULT_HOST,
    DEFAULT_PROFILE,
    Config,
    config_file_path,
    mask_key,
)


@click.group()
def config():
    """Manage configuration"""


@config.command()
def setup():
    """
    Interactive configuration setup

    Runs non-interactively when LANGFUSE_PUBLIC_KEY and LANGFUSE_SECRET_KEY
    are set (LANGFUSE_HOST and LANGFUSE_PROFILE are optional).

    \b
    Examples:
        # Interactive mode
        lf config setup

        # Non-interactive mode
        LANGFUSE_PUBLIC_KEY=pk-lf-xxx LANGFUSE_SECRET_KEY=sk-lf-xxx lf config setup
    """
    project_name = os.getenv("LANGFUSE_PROJECT_NAME")
    public_key = os.getenv("LANGFUSE_PUBLIC_KEY")
    secret_key = os.getenv("LANGFUSE_SECRET_KEY")
    host = os.getenv("LANGFUSE_HOST") or DEFAULT_HOST
    profile_name = os.getenv("LANGFUSE_PROFILE") or DEFAULT_PROFILE

    non_interactive = public_key is not None and secret_key is not None

    if non_interactive:
        console.print("🔑 Running in non-interactive mode (using environment variables)\n")
    else:
        console.print("\n[bold]🔑 Langfuse CLI Configuration Setup[/bold]\n")
        project_name = project_name or Prompt.ask("Enter your Langfuse project name", default="")
        if project_name:
            console.print(f"💡 Visit: {host}/project/{project_name}/settings")
            console.print("   (to get your API keys)\n")
        public_key = Prompt.ask("Enter your Langfuse public key")
        secret_key = Prompt.ask("Enter your Langfuse secret key", password=True)
        host = Prompt.ask("Enter host", default=host)
        profile_name = Prompt.ask("Save as profile name", default=profile_name)

    cfg = Config.merge_with_cli_args(
        Config.from_defaults(),
        public_key=public_key,
        secret_key=secret_key,
        host=host,
        profile=profile_name,
    )

    try:
        client = Client(cfg.credentials())
        console.print("Testing connection... ", end="")
        client.test_connection()
        console.print("[green]Success![/green]")
    except TimeoutError as e:
        fail(f"Connection test failed: {e.message}\nThe host '{host}' may be incorrect or unreachable.")
    except AuthenticationError as e:
        fail(f"Connection test failed: {e.message}\nPlease check your credentials and try again.")
    except APIError as e:
        fail(f"Connection test failed: {e.message}")
    except LangfuseCLIError as e:
        fail(f"Error: {e.message}")

    path = cfg.save(profile_name)
    console.print(f"[green]✓ Configuration saved to {path}[/green]")
    console.print("\nYou're all set! Try: lf traces list")


@config.command("set")
@click.argument("profile")
@click.option("--public-key", required=True, help="Langfuse public key")
@click.option("--secret-key", required=True, help="Langfuse secret key")
@click.option("--host", default=DEFAULT_HOST, show_default=True, help="Langfuse host URL")
def set_profile(profile, public_key, secret_key, host):
    """Set configuration for a profile"""
    cfg = Config.merge_with_cli_args(
        Config.from_defaults(),
        public_key=public_key,
        secret_key=secret_key,
        host=host,
        profile=profile,
    )
    cfg.save(profile)
    console.print(f"[green]✓ Configuration saved for profile: {profile}[/green]")


@config.command()
@click.argument("profile", default=DEFAULT_PROFILE)
def show(profile):
    """Show configuration for a profile (keys masked)"""
    cfg = Config.load(profile=profile)
    console.print(Panel(
        f"Host:          {cfg.host}\n"
        f"Public Key:    {mask_key(cfg.public_key)}\n"
        f"Secret Key:    {mask_key(cfg.secret_key)}\n"
        f"Output Format: {cfg.output_format}\n"
        f"Page Limit:    {cfg.page_limit}",
        title=f"Configuration for profile: {profile}",
        border_style="blue",
    ))


@config.command("list")
def list_profiles():
    """List all configuration profiles"""
    path = config_file_path()
    if not path.exists():
        console.print(f"No configuration file found at {path}")
        console.print("Run 'lf config setup' to create one.")
        return

    profiles = Config.list_profiles(path)
    if not profiles:
        console.print("No profiles configured.")
        console.print("Run 'lf config setup' to create one.")
        return

    console.print("\n[bold]Configured Profiles:[/bold]")
    for name, values in profiles.items():
        console.print(f"\n[cyan]{name}[/cyan]:")
        console.print(f"  Host:       {values.get('host', '')}")
        console.print(f"  Public Key: {mask_key(values.get('public_key'))}")
