"""Targets command - show what a release would build and publish."""

from __future__ import annotations

from pathlib import Path

from relpack.cli.commands._options import (
    APP_NAME_OPTION,
    CONFIG_OPTION,
    OUT_DIR_OPTION,
    ROOT_OPTION,
)
from relpack.cli.context import build_context
from relpack.output.console import Style, format_command
from relpack.services.archive import archive_command


def targets(
    root: Path | None = ROOT_OPTION,
    config: Path | None = CONFIG_OPTION,
    app_name: str | None = APP_NAME_OPTION,
    out_dir: Path | None = OUT_DIR_OPTION,
) -> None:
    """List configured release targets."""
    ctx = build_context(root=root, config_path=config, app_name=app_name, out_dir=out_dir)
    target_dir = ctx.config.target_dir(ctx.root)
    publish_dir = ctx.config.publish_dir(ctx.root)

    for target in ctx.targets():
        ctx.console.header(target.name)
        ctx.console.print(f"triple:  {target.triple or 'native'}")
        build = target.build_command(ctx.config.build.cargo)
        ctx.console.print(f"build:   {format_command(build)}")
        ctx.console.print(f"binary:  {target.binary_path(target_dir)}")
        archive = archive_command(target, ctx.config.archive)
        ctx.console.print(f"archive: {format_command(archive)}")
        ctx.console.print(f"publish: {publish_dir / target.archive_name}")
        if target.host is not None and target.host != ctx.host:
            ctx.console.print(f"needs a {target.host} host (running on {ctx.host})", Style.DIM)
