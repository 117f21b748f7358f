"""
CLI subcommand groups
"""

from langfuse_cli.cli.commands.traces import traces
from langfuse_cli.cli.commands.sessions import sessions
from langfuse_cli.cli.commands.observations import observations
from langfuse_cli.cli.commands.scores import scores
from langfuse_cli.cli.commands.metrics import metrics
from langfuse_cli.cli.commands.config import config

__all__ = ["traces", "sessions", "observations", "scores", "metrics", "config"]
