"""Adapters — bindings to the host's external programs.

Public re-exports for convenient access.
"""

from peppemon_installer.adapters.base import CommandResult, CommandRunner, RecordedCall
from peppemon_installer.adapters.mock import RecordingRunner
from peppemon_installer.adapters.shell.command import SubprocessRunner

__all__ = [
    "CommandResult",
    "CommandRunner",
    "RecordedCall",
    "RecordingRunner",
    "SubprocessRunner",
]
