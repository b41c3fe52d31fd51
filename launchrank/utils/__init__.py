# Launchrank Utilities Package
"""
Shared utility functions and helpers for the launcher.
"""

from .helpers import command_format, launch_app, launch_command, terminal_format

__all__ = ["command_format", "launch_app", "launch_command", "terminal_format"]
