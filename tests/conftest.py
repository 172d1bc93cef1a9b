"""
Shared test fixtures and configuration.

Every test runs against a simulated host: a temp HOME, a temp source
tree, a PATH holding only fake tools, and a RecordingRunner standing in
for subprocesses. ``FakeHost`` scripts the runner so package installs,
rustup, cargo and install(1) leave behind what the real ones would.
"""

from __future__ import annotations

import contextlib
import logging
import os
import shutil
import socket
import stat
from pathlib import Path
from types import SimpleNamespace

import pytest

from peppemon_installer.adapters.base import RecordedCall
from peppemon_installer.adapters.mock import RecordingRunner
from peppemon_installer.core.context import ExecutionContext, build_context
from peppemon_installer.core.models.settings import InstallerSettings

GIB = 1024 * 1024 * 1024
CARGO_VERSION = "cargo 1.79.0 (ffa9cf99a 2024-06-03)"


def make_executable(path: Path, body: str = "#!/bin/sh\nexit 0\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body)
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


class FakeHost:
    """A Debian-like host simulated on top of a RecordingRunner."""

    def __init__(
        self,
        runner: RecordingRunner,
        home: Path,
        bin_dir: Path,
        source_dir: Path,
        settings: InstallerSettings,
    ):
        self.runner = runner
        self.home = home
        self.bin_dir = bin_dir
        self.source_dir = source_dir
        self.settings = settings
        self.binary_content = b"\x7fELF peppemon release build"

    @property
    def artifact(self) -> Path:
        return self.source_dir / self.settings.artifact_path

    @property
    def cargo_home(self) -> Path:
        return self.home / ".cargo"

    @property
    def env(self) -> dict[str, str]:
        return {"HOME": str(self.home), "PATH": str(self.bin_dir)}

    def add_tool(self, *names: str) -> None:
        for name in names:
            make_executable(self.bin_dir / name)

    def remove_tool(self, name: str) -> None:
        (self.bin_dir / name).unlink()

    def mark_installed(self, *packages: str) -> None:
        for pkg in packages:
            self.runner.set_response(
                [self.settings.package_query, "-W", "-f=${Status}", pkg],
                stdout="install ok installed",
            )

    def install_toolchain(self) -> None:
        """What a successful rustup-init leaves behind."""
        make_executable(self.cargo_home / "bin" / "cargo")
        (self.cargo_home / "env").write_text('export PATH="$HOME/.cargo/bin:$PATH"\n')

    # ── runner effects ──────────────────────────────────────────

    def _on_apt_install(self, call: RecordedCall) -> None:
        self.mark_installed(*[arg for arg in call.command[2:] if not arg.startswith("-")])

    def _on_rustup(self, call: RecordedCall) -> None:
        self.install_toolchain()

    def _on_build(self, call: RecordedCall) -> None:
        self.artifact.parent.mkdir(parents=True, exist_ok=True)
        self.artifact.write_bytes(self.binary_content)

    def _on_install(self, call: RecordedCall) -> None:
        src, dst = call.command[-2:]
        shutil.copyfile(src, dst)
        os.chmod(dst, 0o755)

    def script(self) -> FakeHost:
        """Script every command the pipeline issues to succeed."""
        pm = self.settings.package_manager
        self.runner.set_response([pm, "install"], effect=self._on_apt_install)
        self.runner.set_response(["sh"], effect=self._on_rustup)
        self.runner.set_response(
            ["sh", "-c"],
            stdout=f"{self.cargo_home / 'bin'}:{self.bin_dir}",
        )
        self.runner.set_response(["cargo", "--version"], stdout=CARGO_VERSION)
        self.runner.set_response(self.settings.build_command, effect=self._on_build)
        self.runner.set_response(["install", "-m"], effect=self._on_install)
        return self

    def calls_since(self, index: int) -> list[list[str]]:
        return self.runner.commands[index:]


# ── Fixtures ────────────────────────────────────────────────────


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def home(tmp_path: Path) -> Path:
    path = tmp_path / "home"
    path.mkdir()
    return path


@pytest.fixture
def bin_dir(tmp_path: Path) -> Path:
    path = tmp_path / "fake-bin"
    path.mkdir()
    return path


@pytest.fixture
def source_dir(tmp_path: Path) -> Path:
    """A peppemon checkout with just its manifest."""
    path = tmp_path / "peppemon"
    path.mkdir()
    (path / "Cargo.toml").write_text('[package]\nname = "peppemon"\nversion = "0.1.0"\n')
    return path


@pytest.fixture
def settings(tmp_path: Path) -> InstallerSettings:
    """Defaults, except the system bin dir lives under tmp_path."""
    install_dir = tmp_path / "usr-local-bin"
    install_dir.mkdir()
    return InstallerSettings(install_dir=str(install_dir))


@pytest.fixture
def host(runner, home, bin_dir, source_dir, settings) -> FakeHost:
    """A fully scripted host with apt-get, sudo, curl and git on PATH."""
    fake = FakeHost(runner, home, bin_dir, source_dir, settings)
    fake.add_tool("apt-get", "sudo", "curl", "git")
    return fake.script()


@pytest.fixture
def make_ctx(host: FakeHost):
    """Factory for a fresh ExecutionContext on the fake host."""

    def _make(**overrides) -> ExecutionContext:
        return build_context(
            overrides.pop("runner", host.runner),
            settings=overrides.pop("settings", host.settings),
            source_dir=overrides.pop("source_dir", host.source_dir),
            env=overrides.pop("env", host.env),
        )

    return _make


@pytest.fixture
def ctx(make_ctx) -> ExecutionContext:
    return make_ctx()


@pytest.fixture
def healthy_host(monkeypatch):
    """Linux, unprivileged user, plenty of disk, network reachable."""
    state = SimpleNamespace(free_bytes=10 * GIB, network_error=None, system="Linux")

    def _disk_usage(path):
        return SimpleNamespace(total=100 * GIB, used=100 * GIB - state.free_bytes, free=state.free_bytes)

    def _create_connection(address, timeout=None):
        if state.network_error is not None:
            raise state.network_error
        return contextlib.nullcontext()

    monkeypatch.setattr("platform.system", lambda: state.system)
    monkeypatch.setattr(shutil, "disk_usage", _disk_usage)
    monkeypatch.setattr(socket, "create_connection", _create_connection)
    monkeypatch.setattr(os, "geteuid", lambda: 1000)
    return state


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """Undo any logging setup a test (or the CLI) performed."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)
