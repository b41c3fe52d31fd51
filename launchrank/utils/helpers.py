"""
Helper utilities for the launcher.

Provides the default launch executor:
- Launching an application through its Ignis Application object
  (terminal and cgroup aware)
- Running a raw command typed in command mode
"""

import subprocess
from typing import Optional

from loguru import logger


SCOPE_COMMAND_FORMAT = "systemd-run --user --scope --quiet --slice=app.slice %command%"


def terminal_format(term_command: Optional[str]) -> Optional[str]:
    """
    Convert a term_command setting to an Ignis terminal format.

    "{}" marks where the command goes (e.g., "foot -e {}"); without it the
    command is appended.
    """
    if not term_command:
        return None
    if "{}" in term_command:
        return term_command.replace("{}", "%command%")
    return f"{term_command} %command%"


def command_format(cgroups: bool) -> Optional[str]:
    """Ignis command format that starts the app in its own systemd scope."""
    return SCOPE_COMMAND_FORMAT if cgroups else None


def launch_app(info, term_command: Optional[str] = None, cgroups: bool = False) -> bool:
    """
    Launch an application entry via its Ignis Application object.

    Args:
        info: AppInfo of the entry to launch
        term_command: Terminal wrapper for terminal apps (e.g., "foot -e {}")
        cgroups: Start the app in its own systemd scope

    Returns:
        True if the launch was handed to Ignis
    """
    if info.app is None:
        logger.warning(f"Nothing to launch for {info.id}: no application object")
        return False

    try:
        info.app.launch(
            command_format=command_format(cgroups),
            terminal_format=terminal_format(term_command),
        )
    except Exception:
        logger.exception(f"Failed to launch {info.id}")
        return False

    logger.debug(f"Launched {info.id}")
    return True


def launch_command(cmd_line: str) -> bool:
    """
    Run a raw shell command typed in command mode.

    Returns:
        True if the process was spawned
    """
    if not cmd_line:
        return False

    try:
        subprocess.Popen(
            cmd_line,
            shell=True,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
    except OSError:
        logger.exception(f"Failed to execute command: {cmd_line}")
        return False

    logger.debug(f"Executed command: {cmd_line}")
    return True
