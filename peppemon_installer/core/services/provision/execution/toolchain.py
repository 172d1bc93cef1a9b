"""
L4 Execution — Rust toolchain provisioning through rustup.

The installer script is downloaded over HTTPS-only, TLS 1.2+ curl into
a uniquely named temp file, run non-interactively on the stable
channel, then removed whether or not anything failed.
"""

from __future__ import annotations

import logging
import os
import tempfile

from peppemon_installer.core.context import ExecutionContext
from peppemon_installer.core.errors import ToolchainInstallError
from peppemon_installer.core.models.step import StepResult
from peppemon_installer.core.services.provision.data.constants import (
    RUSTUP_DOWNLOAD_LOG_PREFIX,
    RUSTUP_HOME_PAGE,
    RUSTUP_INIT_LOG_PREFIX,
    RUSTUP_INIT_PREFIX,
    RUSTUP_INIT_SUFFIX,
)
from peppemon_installer.core.services.provision.detection.toolchain import (
    get_toolchain_version,
    resolve_toolchain,
)

logger = logging.getLogger(__name__)

_REMEDIATION = (
    f"Install Rust manually from {RUSTUP_HOME_PAGE}, then re-run the installer.\n"
    "Check network connectivity and proxy settings (https_proxy) if the download failed."
)


def toolchain_satisfied(ctx: ExecutionContext) -> bool:
    """cargo resolvable now, or after sourcing ~/.cargo/env."""
    return resolve_toolchain(ctx) is not None


def describe_toolchain_satisfied(ctx: ExecutionContext) -> str:
    version = get_toolchain_version(ctx) or "version unknown"
    return f"Rust already installed ({version}), skipping."


def download_command(tool: str, url: str, destination: str) -> list[str]:
    """curl invocation: HTTPS only, TLS >= 1.2, fail on HTTP errors."""
    return [tool, "--proto", "=https", "--tlsv1.2", "-sSf", url, "-o", destination]


def _remove_installer(path: str) -> None:
    try:
        os.unlink(path)
    except FileNotFoundError:
        pass


def install_toolchain(ctx: ExecutionContext) -> StepResult:
    """Download and run rustup-init, then adopt the new toolchain.

    Raises:
        ToolchainInstallError: On temp-file, download or installer failure,
            or if cargo is still not resolvable afterwards.
    """
    settings = ctx.settings
    url = settings.toolchain_installer_url

    try:
        fd, installer = tempfile.mkstemp(prefix=RUSTUP_INIT_PREFIX, suffix=RUSTUP_INIT_SUFFIX)
    except OSError as exc:
        tmp_dir = tempfile.gettempdir()
        raise ToolchainInstallError(
            f"Cannot create the Rust installer file in {tmp_dir}: {exc.strerror or exc}",
            remediation=(
                f"Free space in {tmp_dir} or point TMPDIR at a writable directory, "
                "then re-run the installer.\n" + _REMEDIATION
            ),
        ) from exc
    os.close(fd)

    try:
        download = ctx.run(
            download_command(settings.download_tool, url, installer),
            log_prefix=RUSTUP_DOWNLOAD_LOG_PREFIX,
        )
        if not download.ok:
            raise ToolchainInstallError(
                f"Downloading the Rust installer from {url} failed ({download.describe_exit()})",
                remediation=_REMEDIATION,
                output=download.output,
                log_path=download.log_path,
            )

        run = ctx.run(
            ["sh", installer, "-y", "--default-toolchain", settings.toolchain_channel],
            log_prefix=RUSTUP_INIT_LOG_PREFIX,
        )
        if not run.ok:
            raise ToolchainInstallError(
                f"The Rust installer failed ({run.describe_exit()})",
                remediation=_REMEDIATION,
                output=run.output,
                log_path=run.log_path,
            )
    finally:
        _remove_installer(installer)

    if resolve_toolchain(ctx) is None:
        raise ToolchainInstallError(
            f"rustup finished but {settings.toolchain_binary} is still not resolvable "
            f"(looked on PATH and in {ctx.toolchain_env_file})",
            remediation=_REMEDIATION,
        )

    version = get_toolchain_version(ctx) or "version unknown"
    logger.info("Installed Rust toolchain: %s", version)
    return StepResult(message=f"Installed Rust toolchain ({version})")
