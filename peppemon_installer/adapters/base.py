"""
Command runner base — the contract between provisioning steps and the host.

Every external program the installer touches (apt-get, curl, rustup,
cargo, install) is invoked through a ``CommandRunner``. Steps never call
``subprocess`` directly, so tests can swap in a recording fake that
returns scripted exit codes and output without touching a real host.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping, Sequence
from pathlib import Path

from pydantic import BaseModel, Field


class CommandResult(BaseModel):
    """Outcome of one external command.

    Runners NEVER raise for a failing command — a non-zero exit, a
    missing binary or a timeout is captured here instead.
    """

    command: list[str]
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""
    error: str | None = None        # launch failure (not found, timeout)
    log_path: str | None = None     # kept stderr capture file, failures only
    duration_ms: int = 0

    @property
    def ok(self) -> bool:
        """Whether the command ran and exited zero."""
        return self.error is None and self.returncode == 0

    @property
    def output(self) -> str:
        """Best diagnostic text: stderr, else stdout, else the launch error."""
        return self.stderr.strip() or self.stdout.strip() or (self.error or "")

    def describe_exit(self) -> str:
        """Short human description of how the command ended."""
        if self.error:
            return self.error
        return f"exit code {self.returncode}"


class CommandRunner(ABC):
    """Abstract command-execution interface.

    To add a runner:
        1. Subclass CommandRunner
        2. Implement ``run``; map every failure into a CommandResult
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Runner identifier (e.g., 'subprocess', 'recording')."""

    @abstractmethod
    def run(
        self,
        command: Sequence[str],
        *,
        cwd: Path | str | None = None,
        env: Mapping[str, str] | None = None,
        env_overrides: Mapping[str, str] | None = None,
        elevated: bool = False,
        timeout: float | None = None,
        log_prefix: str | None = None,
    ) -> CommandResult:
        """Run ``command`` to completion and return its result.

        Args:
            command: Argument vector; never passed through a shell.
            cwd: Working directory.
            env: Full environment for the child process.
            env_overrides: Extra variables that must survive privilege
                escalation (e.g. ``DEBIAN_FRONTEND``).
            elevated: Run with root privileges.
            timeout: Seconds before giving up; ``None`` waits forever.
            log_prefix: When set, stderr is captured to a uniquely named
                file in the system temp directory, kept on failure.
        """

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"


class RecordedCall(BaseModel):
    """One invocation seen by a runner — used by the recording runner."""

    command: list[str]
    cwd: str | None = None
    elevated: bool = False
    env_overrides: dict[str, str] = Field(default_factory=dict)
    log_prefix: str | None = None
