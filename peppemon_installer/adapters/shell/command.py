"""
Subprocess runner — execute host commands and capture their output.

The SINGLE PLACE where ``subprocess.run`` is called for provisioning
work. Privilege escalation, stderr capture files and error mapping are
centralised here.
"""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
import time
from collections.abc import Mapping, Sequence
from pathlib import Path

from peppemon_installer.adapters.base import CommandResult, CommandRunner

logger = logging.getLogger(__name__)


def _elevate(
    command: list[str],
    env_overrides: Mapping[str, str] | None = None,
    privilege_tool: str = "sudo",
) -> list[str]:
    """Prefix a command for root execution.

    Already root → unchanged. Otherwise ``sudo`` is prepended; extra
    variables go through ``env`` because sudo resets the environment.
    """
    if os.geteuid() == 0:
        return command
    if env_overrides:
        assignments = [f"{key}={value}" for key, value in env_overrides.items()]
        return [privilege_tool, "env", *assignments, *command]
    return [privilege_tool, *command]


class SubprocessRunner(CommandRunner):
    """Run commands on the real host.

    stdin is inherited so ``sudo`` can prompt on the terminal when
    credentials are not cached. stdout is captured in memory; stderr
    goes to a temp file when ``log_prefix`` is given.
    """

    def __init__(self, privilege_tool: str = "sudo"):
        self._privilege_tool = privilege_tool

    @property
    def name(self) -> str:
        return "subprocess"

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
        argv = list(command)
        if elevated:
            argv = _elevate(argv, env_overrides, self._privilege_tool)

        child_env = dict(env if env is not None else os.environ)
        if env_overrides:
            child_env.update(env_overrides)

        logger.debug("Executing: %s (cwd=%s)", " ".join(argv), cwd or ".")
        start = time.monotonic()

        capture = None
        if log_prefix:
            # Unique per invocation — concurrent or repeated runs never collide
            try:
                capture = tempfile.NamedTemporaryFile(
                    mode="w+",
                    prefix=f"{log_prefix}-",
                    suffix=".log",
                    delete=False,
                    encoding="utf-8",
                    errors="replace",
                )
            except OSError as exc:
                logger.debug("Cannot create capture file for %s: %s", argv[0], exc)
                return CommandResult(
                    command=argv,
                    returncode=126,
                    error=(
                        f"cannot create log file in {tempfile.gettempdir()}: "
                        f"{exc.strerror or exc}"
                    ),
                )

        try:
            completed = subprocess.run(
                argv,
                cwd=cwd,
                env=child_env,
                stdout=subprocess.PIPE,
                stderr=capture if capture is not None else subprocess.PIPE,
                text=True,
                errors="replace",
                timeout=timeout,
            )
        except FileNotFoundError:
            result = CommandResult(
                command=argv, returncode=127, error=f"{argv[0]}: command not found",
            )
        except subprocess.TimeoutExpired:
            result = CommandResult(
                command=argv, returncode=124, error=f"timed out after {timeout}s",
            )
        except OSError as exc:
            result = CommandResult(
                command=argv, returncode=126, error=f"{argv[0]}: {exc.strerror or exc}",
            )
        else:
            result = CommandResult(
                command=argv,
                returncode=completed.returncode,
                stdout=completed.stdout or "",
                stderr=completed.stderr or "",
            )

        result.duration_ms = int((time.monotonic() - start) * 1000)

        if capture is not None:
            capture.seek(0)
            result.stderr = capture.read()
            capture.close()
            if result.ok:
                _discard(capture.name)
            else:
                result.log_path = capture.name

        logger.debug(
            "%s %s → %s (%dms)",
            "✓" if result.ok else "✗",
            argv[0],
            result.describe_exit(),
            result.duration_ms,
        )
        return result


def _discard(path: str) -> None:
    """Remove a capture file that is no longer needed."""
    try:
        os.unlink(path)
    except OSError as exc:
        logger.debug("Could not remove capture file %s: %s", path, exc)
