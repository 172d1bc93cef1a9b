"""
L1 Domain — Error analysis (pure).

Parses captured output from failed cargo builds and apt-get runs for
known error patterns and suggests remediation. No I/O, no subprocess.
"""

from __future__ import annotations

import re


def _analyse_build_failure(output: str) -> dict | None:
    """Analyse a cargo build failure's output for common patterns.

    Returns a remediation dict with ``cause`` and ``suggestion``,
    or ``None`` if the error is unrecognized.

    Args:
        output: stderr from the failed ``cargo build``.

    Returns:
        ``{"cause": "...", "suggestion": "...", "confidence": "high|medium|low"}``
    """
    if not output:
        return None

    s = output.lower()

    # Linker missing — build-essential not installed
    if "linker `cc` not found" in s or "linker 'cc' not found" in s:
        return {
            "cause": "C linker (cc) not found",
            "suggestion": "Install the compiler toolchain: sudo apt-get install -y build-essential",
            "confidence": "high",
        }

    # -sys crates probing native libraries
    if "could not find system library" in s or ("pkg-config" in s and "not found" in s):
        m = re.search(r"could not find system library '([^']+)'", s)
        lib = m.group(1) if m else "a native library"
        return {
            "cause": f"Native dependency missing: {lib}",
            "suggestion": f"Install pkg-config and the -dev package for {lib}",
            "confidence": "medium",
        }

    # Disk full
    if "no space left on device" in s:
        return {
            "cause": "Disk full during build",
            "suggestion": "Free disk space (cargo clean removes old build output) and retry",
            "confidence": "high",
        }

    # Out of memory (rustc killed)
    if "sigkill" in s or "signal: 9" in s or ("memory allocation" in s and "failed" in s):
        return {
            "cause": "Out of memory during compilation",
            "suggestion": "Reduce parallel jobs: cargo build --release -j1",
            "confidence": "medium",
        }

    # Crate index / download failures
    if (
        "failed to download" in s
        or "failed to get" in s
        or "spurious network error" in s
        or "could not resolve host" in s
    ):
        return {
            "cause": "Could not download crates",
            "suggestion": "Check network connectivity and https_proxy, then retry",
            "confidence": "medium",
        }

    # Toolchain too old for a dependency
    m = re.search(r"requires rustc (\d+\.\d+(?:\.\d+)?)", s)
    if m or "is not supported by the following package" in s:
        needed = m.group(1) if m else "a newer release"
        return {
            "cause": f"Rust toolchain too old (needs {needed})",
            "suggestion": "Update the toolchain: rustup update stable",
            "confidence": "high",
        }

    return None


def _analyse_package_failure(output: str) -> dict | None:
    """Analyse apt-get stderr for common, fixable conditions."""
    if not output:
        return None

    s = output.lower()

    if "could not get lock" in s or "unable to acquire the dpkg frontend lock" in s:
        return {
            "cause": "Another package manager process holds the dpkg lock",
            "suggestion": "Wait for other updates to finish (or stop unattended-upgrades), then retry",
            "confidence": "high",
        }

    if "dpkg was interrupted" in s:
        return {
            "cause": "A previous package operation was interrupted",
            "suggestion": "Run: sudo dpkg --configure -a",
            "confidence": "high",
        }

    if "unable to locate package" in s:
        m = re.search(r"unable to locate package (\S+)", s)
        pkg = m.group(1) if m else "a package"
        return {
            "cause": f"Package not found in the configured repositories: {pkg}",
            "suggestion": "Check /etc/apt/sources.list and run: sudo apt-get update",
            "confidence": "medium",
        }

    if "temporary failure resolving" in s or "failed to fetch" in s:
        return {
            "cause": "Package mirrors unreachable",
            "suggestion": "Check network connectivity and proxy settings",
            "confidence": "medium",
        }

    return None
