"""
Peppemon installer — CLI entrypoint.

Usage:
    python install.py
    python -m peppemon_installer
    peppemon-install

Takes no arguments. Logging is configured from PEPPEMON_LOG_LEVEL,
PEPPEMON_LOG_FILE (a path, or "auto") and PEPPEMON_LOG_FILE_LEVEL.
"""

from __future__ import annotations

import os
import sys

import click

from peppemon_installer.core.observability.logging_config import setup_logging_from_env
from peppemon_installer.ui.cli.report import (
    echo_banner,
    echo_outcome,
    echo_step_header,
    echo_summary,
)

EXIT_INTERRUPTED = 130


@click.command()
def cli() -> None:
    """Install peppemon: system packages, Rust, release build, launcher."""
    # ── Logging setup (once, at process start) ──────────────────
    log_path = setup_logging_from_env(os.environ)

    from peppemon_installer.core.use_cases.install import run_install

    echo_banner("Peppemon Installer")

    try:
        result = run_install(on_step_start=echo_step_header, on_step_end=echo_outcome)
    except KeyboardInterrupt:
        click.echo()
        click.secho("Interrupted. Re-run the installer to resume.", fg="yellow", err=True)
        sys.exit(EXIT_INTERRUPTED)

    if result.error or result.report is None:
        click.secho(f"❌ {result.error or 'Installer did not run'}", fg="red", err=True)
        sys.exit(1)

    echo_summary(result.report, result.settings.app_name)
    if log_path is not None:
        click.secho(f"Installer log: {log_path}", dim=True)
    sys.exit(result.exit_code)


def main() -> None:
    """Entry point for the console script."""
    cli()


if __name__ == "__main__":
    main()
