"""Options shared by every project-level command."""

from __future__ import annotations

from pathlib import Path

import typer

ROOT_OPTION: Path | None = typer.Option(
    None, "--root", help="Project root (default: current directory)", show_default=False
)
CONFIG_OPTION: Path | None = typer.Option(
    None, "--config", help="Config file (default: <root>/release.toml)", show_default=False
)
APP_NAME_OPTION: str | None = typer.Option(
    None, "--app-name", help="Binary name (default: Cargo package name)", show_default=False
)
OUT_DIR_OPTION: Path | None = typer.Option(
    None,
    "--out-dir",
    help="Publish directory, relative to the current directory (default: project root)",
    show_default=False,
)
DRY_RUN_OPTION: bool = typer.Option(
    False, "--dry-run", help="Print commands without running them"
)
