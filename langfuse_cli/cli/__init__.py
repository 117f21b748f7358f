"""
CLI Module
"""

from langfuse_cli.cli.main import main

__all__ = ["main"]
