"""
Execution context — the per-run state every provisioning step receives.

Built ONCE by the install use case and passed explicitly to each step.
Nothing here is read from hidden globals and nothing is persisted:

    - source_dir: the peppemon source tree, resolved from the installer's
      own location, never from the invoker's working directory
    - env:        a private copy of the process environment; the toolchain
      step updates PATH here after sourcing ~/.cargo/env
    - captures:   every CommandResult produced during the run
"""

from __future__ import annotations

import os
import shutil
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from peppemon_installer.adapters.base import CommandResult, CommandRunner
from peppemon_installer.core.models.check import ProbeReport
from peppemon_installer.core.models.settings import InstallerSettings


def resolve_source_dir() -> Path:
    """Directory holding the installer — the root of the source tree.

    The ``peppemon_installer`` package sits at the top of the peppemon
    checkout next to ``install.py`` and ``Cargo.toml``.
    """
    return Path(__file__).resolve().parent.parent.parent


class ExecutionContext(BaseModel):
    """Everything a step needs: where to work, what to run it with."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    source_dir: Path
    home: Path
    runner: CommandRunner
    settings: InstallerSettings = Field(default_factory=InstallerSettings)
    env: dict[str, str] = Field(default_factory=dict)
    captures: list[CommandResult] = Field(default_factory=list)
    probe: ProbeReport | None = None

    @property
    def path(self) -> str:
        return self.env.get("PATH", os.defpath)

    @property
    def toolchain_env_file(self) -> Path:
        return self.home / self.settings.toolchain_env_file

    @property
    def artifact(self) -> Path:
        return self.source_dir / self.settings.artifact_path

    @property
    def installed_binary(self) -> Path:
        return self.settings.installed_binary

    @property
    def desktop_file(self) -> Path:
        return self.home / self.settings.applications_dir / self.settings.desktop_file_name

    def which(self, program: str) -> str | None:
        """Resolve ``program`` against this run's PATH."""
        return shutil.which(program, path=self.path)

    def run(self, command: Sequence[str], **kwargs: Any) -> CommandResult:
        """Run a command with this context's environment and record it."""
        kwargs.setdefault("env", self.env)
        result = self.runner.run(command, **kwargs)
        self.captures.append(result)
        return result


def build_context(
    runner: CommandRunner,
    settings: InstallerSettings | None = None,
    source_dir: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> ExecutionContext:
    """Construct the context for one run."""
    run_env = dict(env if env is not None else os.environ)
    home = Path(run_env.get("HOME") or Path.home())
    return ExecutionContext(
        source_dir=(source_dir or resolve_source_dir()).resolve(),
        home=home,
        runner=runner,
        settings=settings or InstallerSettings(),
        env=run_env,
    )
