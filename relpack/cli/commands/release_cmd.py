"""Release commands - build, archive and publish per-platform archives."""

from __future__ import annotations

from collections.abc import Sequence
from enum import StrEnum
from pathlib import Path

import typer

from relpack.cli.commands._options import (
    APP_NAME_OPTION,
    CONFIG_OPTION,
    DRY_RUN_OPTION,
    OUT_DIR_OPTION,
    ROOT_OPTION,
)
from relpack.cli.context import CLIContext, build_context
from relpack.core.result import Err, Ok
from relpack.output.console import ConsoleProtocol, Style
from relpack.output.errors import print_release_error, release_error_exit_code
from relpack.services.release import ReleaseReport, ReleaseService
from relpack.services.targets import BuildTarget


class PlatformChoice(StrEnum):
    linux = "linux"
    windows = "windows"


def release(
    platform: list[PlatformChoice] | None = typer.Option(
        None,
        "--platform",
        "-p",
        help="Only release these platforms (repeatable)",
        show_default=False,
    ),
    parallel: bool = typer.Option(False, "--parallel", help="Run platforms concurrently"),
    root: Path | None = ROOT_OPTION,
    config: Path | None = CONFIG_OPTION,
    app_name: str | None = APP_NAME_OPTION,
    out_dir: Path | None = OUT_DIR_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Release every configured platform."""
    ctx = build_context(root=root, config_path=config, app_name=app_name, out_dir=out_dir)
    targets = ctx.targets()
    if platform:
        wanted = {str(p) for p in platform}
        targets = tuple(t for t in targets if t.name in wanted)
    _release(ctx, targets, parallel=parallel, dry_run=dry_run)


def release_linux(
    root: Path | None = ROOT_OPTION,
    config: Path | None = CONFIG_OPTION,
    app_name: str | None = APP_NAME_OPTION,
    out_dir: Path | None = OUT_DIR_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Build natively and publish <app>-linux.tar.xz."""
    ctx = build_context(root=root, config_path=config, app_name=app_name, out_dir=out_dir)
    _release(ctx, _only(ctx, PlatformChoice.linux), parallel=False, dry_run=dry_run)


def release_windows(
    root: Path | None = ROOT_OPTION,
    config: Path | None = CONFIG_OPTION,
    app_name: str | None = APP_NAME_OPTION,
    out_dir: Path | None = OUT_DIR_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Cross-build for Windows and publish <app>-windows.zip."""
    ctx = build_context(root=root, config_path=config, app_name=app_name, out_dir=out_dir)
    _release(ctx, _only(ctx, PlatformChoice.windows), parallel=False, dry_run=dry_run)


def _only(ctx: CLIContext, platform: PlatformChoice) -> tuple[BuildTarget, ...]:
    return tuple(t for t in ctx.targets() if t.name == str(platform))


def _release(
    ctx: CLIContext,
    targets: Sequence[BuildTarget],
    *,
    parallel: bool,
    dry_run: bool,
) -> None:
    service = ReleaseService(
        root=ctx.root,
        config=ctx.config,
        console=ctx.console,
        host=ctx.host,
    )
    report = service.release_all(targets, parallel=parallel, dry_run=dry_run)
    print_report(report, ctx.console)

    if not report.ok:
        raise typer.Exit(code=release_error_exit_code(report.errors[0]))


def print_report(report: ReleaseReport, console: ConsoleProtocol) -> None:
    console.header("Summary")
    for outcome in report.outcomes:
        match outcome.result:
            case Ok(published) if published.dry_run:
                console.info(f"{published.platform}: would publish {published.path}")
            case Ok(published):
                console.success(f"{published.platform}: {published.path}")
                console.print(
                    f"  {published.size} bytes, sha256 {published.sha256}", Style.DIM
                )
            case Err(error):
                print_release_error(error, console)
