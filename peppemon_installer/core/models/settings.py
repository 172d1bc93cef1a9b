"""
Installer settings — every tunable the pipeline reads.

All fields have defaults matching the stock peppemon install; a
``peppemon-install.yml`` beside the source tree may override any of
them. Unknown keys are rejected so typos surface as config errors.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class DesktopEntry(BaseModel):
    """Fields of the freedesktop launcher descriptor."""

    model_config = ConfigDict(extra="forbid")

    name: str = "Peppemon"
    comment: str = "Real-time system performance monitor"
    terminal: bool = True
    categories: list[str] = Field(default_factory=lambda: ["System", "Monitor"])


class InstallerSettings(BaseModel):
    """Validated installer configuration."""

    model_config = ConfigDict(extra="forbid")

    app_name: str = "peppemon"

    # Host tooling
    package_manager: str = "apt-get"
    package_query: str = "dpkg-query"
    privilege_tool: str = "sudo"
    build_packages: list[str] = Field(
        default_factory=lambda: ["build-essential", "pkg-config"],
    )
    # tool on PATH → package providing it; installed only when missing
    remediable_tools: dict[str, str] = Field(
        default_factory=lambda: {"curl": "curl", "git": "git"},
    )
    download_tool: str = "curl"

    # Pre-flight thresholds
    min_free_mb: int = Field(default=500, ge=0)
    network_probe_host: str = "sh.rustup.rs"
    network_probe_port: int = Field(default=443, gt=0, le=65535)
    network_timeout: float = Field(default=5.0, gt=0)

    # Toolchain
    toolchain_binary: str = "cargo"
    toolchain_installer_url: str = "https://sh.rustup.rs"
    toolchain_channel: str = "stable"
    toolchain_env_file: str = ".cargo/env"     # relative to $HOME

    # Build + install
    build_manifest: str = "Cargo.toml"
    build_command: list[str] = Field(
        default_factory=lambda: ["cargo", "build", "--release"],
    )
    artifact_path: str = "target/release/peppemon"
    install_dir: str = "/usr/local/bin"
    install_mode: str = "755"

    # Launcher
    applications_dir: str = ".local/share/applications"   # relative to $HOME
    desktop_entry: DesktopEntry = Field(default_factory=DesktopEntry)

    @property
    def installed_binary(self) -> Path:
        return Path(self.install_dir) / self.app_name

    @property
    def desktop_file_name(self) -> str:
        return f"{self.app_name}.desktop"
