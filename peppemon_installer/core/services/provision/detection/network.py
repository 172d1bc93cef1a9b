"""
L3 Detection — Network reachability.

One TCP connect to the toolchain download host with a bounded
timeout. Unreachability is a warning only: downstream steps that need
the network report their own failures.
"""

from __future__ import annotations

import logging
import socket
from collections.abc import Mapping

from peppemon_installer.core.errors import NetworkWarning
from peppemon_installer.core.models.check import CheckResult
from peppemon_installer.core.services.provision.data.constants import NETWORK_CHECK

logger = logging.getLogger(__name__)


def detect_proxy(env: Mapping[str, str]) -> str | None:
    """Return the HTTPS proxy curl will use, if any."""
    return env.get("https_proxy") or env.get("HTTPS_PROXY") or None


def check_network(
    host: str,
    port: int = 443,
    timeout: float = 5.0,
    env: Mapping[str, str] | None = None,
) -> CheckResult:
    """Probe ``host:port`` with a plain TCP connect.

    Returns::

        ok       — "sh.rustup.rs:443 reachable"
        warning  — unreachable, with connectivity/proxy remediation
    """
    proxy = detect_proxy(env or {})
    proxy_note = f" (HTTPS proxy: {proxy})" if proxy else ""

    try:
        with socket.create_connection((host, port), timeout=timeout):
            pass
    except OSError as exc:
        logger.debug("TCP probe to %s:%d failed: %s", host, port, exc)
        reason = "timed out" if isinstance(exc, TimeoutError) else (exc.strerror or str(exc))
        return NetworkWarning(
            f"Cannot reach {host}:{port} ({reason}){proxy_note}",
            remediation=(
                "Check connectivity and proxy settings; downloading Rust and "
                "crates may fail later."
            ),
        ).to_check(NETWORK_CHECK)

    return CheckResult.ok(NETWORK_CHECK, f"{host}:{port} reachable{proxy_note}")
