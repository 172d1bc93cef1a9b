"""
L3 Detection — Rust toolchain resolution and version checking.

Read-only: finds cargo on PATH, or makes it resolvable by sourcing the
per-user ``~/.cargo/env`` descriptor in a subshell and adopting the
PATH it produces. Nothing is cached; every run looks again.
"""

from __future__ import annotations

import logging
import re
import shutil
from pathlib import Path

from peppemon_installer.core.context import ExecutionContext
from peppemon_installer.core.services.provision.data.constants import QUERY_TIMEOUT

logger = logging.getLogger(__name__)

_CARGO_VERSION_RE = re.compile(r"cargo\s+(\d+\.\d+\.\d+\S*)")

# Sources the file given as $1 and prints the PATH it leaves behind.
_SOURCE_AND_PRINT_PATH = '. "$1" >/dev/null 2>&1 && printf "%s" "$PATH"'


def source_env_file(ctx: ExecutionContext, env_file: Path) -> str | None:
    """PATH after sourcing ``env_file`` in ``sh``, or None on failure."""
    result = ctx.run(
        ["sh", "-c", _SOURCE_AND_PRINT_PATH, "sh", str(env_file)],
        timeout=QUERY_TIMEOUT,
    )
    path = result.stdout.strip()
    if not result.ok or not path:
        logger.debug("Sourcing %s failed: %s", env_file, result.describe_exit())
        return None
    return path


def resolve_toolchain(ctx: ExecutionContext) -> str | None:
    """Locate cargo, adopting ``~/.cargo/env`` into the run's PATH if needed.

    Returns:
        Absolute path to cargo, or None when it cannot be made resolvable.
    """
    binary = ctx.settings.toolchain_binary

    found = ctx.which(binary)
    if found:
        return found

    env_file = ctx.toolchain_env_file
    if not env_file.is_file():
        return None

    sourced_path = source_env_file(ctx, env_file)
    if not sourced_path:
        return None

    found = shutil.which(binary, path=sourced_path)
    if found:
        logger.info("Adopted PATH from %s", env_file)
        ctx.env["PATH"] = sourced_path
    return found


def get_toolchain_version(ctx: ExecutionContext) -> str | None:
    """Return ``cargo X.Y.Z`` for the resolvable cargo, or None."""
    binary = ctx.settings.toolchain_binary
    result = ctx.run([binary, "--version"], timeout=QUERY_TIMEOUT)
    if not result.ok:
        return None
    match = _CARGO_VERSION_RE.search(result.stdout)
    if match:
        return f"{binary} {match.group(1)}"
    first_line = result.stdout.strip().splitlines()
    return first_line[0] if first_line else None
