"""CLI command implementations for the slabcut application.

This package contains subcommands for the slabcut CLI, including:
- validate: Validate a job file
"""

from slabcut.cli.commands.validate import display_load_error, validate_command

__all__ = ["display_load_error", "validate_command"]
