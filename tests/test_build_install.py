"""
Tests for the release build and the system-wide binary install.
"""

import os

import pytest

from peppemon_installer.core.errors import BuildError, InstallError
from peppemon_installer.core.services.provision.execution import (
    artifact_installed,
    build_release,
    install_artifact,
)

# ── Build ────────────────────────────────────────────────────────────


class TestBuildRelease:
    def test_runs_cargo_in_source_dir(self, host, ctx):
        result = build_release(ctx)
        (call,) = host.runner.calls_to(["cargo", "build"])
        assert call.command == ["cargo", "build", "--release"]
        assert call.cwd == str(host.source_dir)
        assert call.log_prefix
        assert not call.elevated
        assert host.artifact.is_file()
        assert "target/release/peppemon" in result.message

    def test_missing_manifest(self, host, ctx):
        (host.source_dir / "Cargo.toml").unlink()
        with pytest.raises(BuildError, match="No Cargo.toml"):
            build_release(ctx)
        assert host.runner.call_count == 0

    def test_failure_carries_log_and_hint(self, host, ctx):
        host.runner.set_failure(
            ["cargo", "build"],
            stderr="   Compiling peppemon v0.1.0\nerror: linker `cc` not found\n",
            returncode=101,
        )
        with pytest.raises(BuildError) as exc_info:
            build_release(ctx)
        err = exc_info.value
        assert "exit code 101" in err.message
        assert err.log_path
        assert "linker `cc` not found" in err.output
        hints = err.remediation.splitlines()
        assert "build-essential" in hints[0]
        assert any("rustup update" in h for h in hints)
        assert any("cargo clean" in h for h in hints)

    def test_success_without_artifact(self, host, ctx):
        host.runner.set_response(["cargo", "build"])
        with pytest.raises(BuildError, match="was not produced"):
            build_release(ctx)


# ── Install ──────────────────────────────────────────────────────────


class TestInstallArtifact:
    def test_copies_with_mode(self, host, ctx):
        build_release(ctx)
        install_artifact(ctx)
        (call,) = host.runner.calls_to(["install"])
        assert call.command == ["install", "-m", "755", str(ctx.artifact), str(ctx.installed_binary)]
        assert call.elevated
        assert ctx.installed_binary.read_bytes() == host.binary_content
        assert artifact_installed(ctx)

    def test_missing_artifact(self, host, ctx):
        with pytest.raises(InstallError, match="not found"):
            install_artifact(ctx)
        assert not host.runner.was_called(["install"])

    def test_copy_failure_offers_user_install(self, host, ctx):
        build_release(ctx)
        host.runner.set_failure(["install"], stderr="install: cannot create regular file: Permission denied")
        with pytest.raises(InstallError) as exc_info:
            install_artifact(ctx)
        assert "~/.local/bin/peppemon" in exc_info.value.remediation
        assert "Permission denied" in exc_info.value.output


class TestArtifactInstalled:
    def test_nothing_installed(self, host, ctx):
        build_release(ctx)
        assert not artifact_installed(ctx)

    def test_stale_binary(self, host, ctx):
        build_release(ctx)
        ctx.installed_binary.write_bytes(b"old build")
        os.chmod(ctx.installed_binary, 0o755)
        assert not artifact_installed(ctx)

    def test_not_executable(self, host, ctx):
        build_release(ctx)
        ctx.installed_binary.write_bytes(host.binary_content)
        os.chmod(ctx.installed_binary, 0o644)
        assert not artifact_installed(ctx)

    def test_no_build_output(self, host, ctx):
        ctx.installed_binary.write_bytes(host.binary_content)
        os.chmod(ctx.installed_binary, 0o755)
        assert not artifact_installed(ctx)
