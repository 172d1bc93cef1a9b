"""
Recording runner — test double for the command-execution interface.

Returns scripted results without touching the host. Responses are keyed
by command prefix; the longest matching prefix wins, so
``("sh", "-c")`` and ``("sh",)`` can be scripted independently.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from pathlib import Path

from peppemon_installer.adapters.base import CommandResult, CommandRunner, RecordedCall

Effect = Callable[[RecordedCall], None]


class _Response:
    def __init__(self, returncode: int, stdout: str, stderr: str, effect: Effect | None):
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr
        self.effect = effect


class RecordingRunner(CommandRunner):
    """Universal fake runner.

    By default every command succeeds with empty output. ``effect``
    callbacks let a test simulate what the real program would leave
    behind (a built binary, an installed toolchain).
    """

    def __init__(self, default_returncode: int = 0, default_stdout: str = ""):
        self._default = _Response(default_returncode, default_stdout, "", None)
        self._responses: dict[tuple[str, ...], _Response] = {}
        self._calls: list[RecordedCall] = []

    @property
    def name(self) -> str:
        return "recording"

    @property
    def calls(self) -> list[RecordedCall]:
        """Every call this runner has received, in order."""
        return self._calls

    @property
    def call_count(self) -> int:
        return len(self._calls)

    @property
    def commands(self) -> list[list[str]]:
        return [call.command for call in self._calls]

    def set_response(
        self,
        prefix: Sequence[str],
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
        effect: Effect | None = None,
    ) -> None:
        """Script the result for commands starting with ``prefix``."""
        self._responses[tuple(prefix)] = _Response(returncode, stdout, stderr, effect)

    def set_failure(
        self,
        prefix: Sequence[str],
        stderr: str = "mock failure",
        returncode: int = 1,
    ) -> None:
        """Configure commands starting with ``prefix`` to fail."""
        self.set_response(prefix, returncode=returncode, stderr=stderr)

    def was_called(self, prefix: Sequence[str]) -> bool:
        """Whether any recorded command starts with ``prefix``."""
        wanted = list(prefix)
        return any(cmd[: len(wanted)] == wanted for cmd in self.commands)

    def calls_to(self, prefix: Sequence[str]) -> list[RecordedCall]:
        wanted = list(prefix)
        return [c for c in self._calls if c.command[: len(wanted)] == wanted]

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
        call = RecordedCall(
            command=list(command),
            cwd=str(cwd) if cwd is not None else None,
            elevated=elevated,
            env_overrides=dict(env_overrides or {}),
            log_prefix=log_prefix,
        )
        self._calls.append(call)

        response = self._match(call.command)
        if response.effect is not None:
            response.effect(call)

        result = CommandResult(
            command=call.command,
            returncode=response.returncode,
            stdout=response.stdout,
            stderr=response.stderr,
        )
        if log_prefix and not result.ok:
            result.log_path = f"/tmp/{log_prefix}-recorded.log"
        return result

    def _match(self, command: list[str]) -> _Response:
        best: _Response | None = None
        best_len = -1
        for prefix, response in self._responses.items():
            if len(prefix) > best_len and tuple(command[: len(prefix)]) == prefix:
                best, best_len = response, len(prefix)
        return best if best is not None else self._default

    def reset(self) -> None:
        """Clear call log and scripted responses."""
        self._calls.clear()
        self._responses.clear()
