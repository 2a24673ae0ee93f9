"""Utility modules for winprovision.

This module exports commonly used utility functions.
"""

from winprovision.utils.formatting import (
    console,
    err_console,
    print_error,
    print_info,
    print_success,
    print_warning,
)
from winprovision.utils.shell import (
    CommandResult,
    command_exists,
    resolve_executable,
    run_command,
    run_powershell,
)

__all__ = [
    "CommandResult",
    "command_exists",
    "console",
    "err_console",
    "print_error",
    "print_info",
    "print_success",
    "print_warning",
    "resolve_executable",
    "run_command",
    "run_powershell",
]
