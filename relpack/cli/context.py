from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path

import typer

from relpack.core.config import PublishConfig, ReleaseConfig, load_project_config, resolve_app_name
from relpack.core.errors import ErrorCode
from relpack.core.result import Err
from relpack.output.console import ConsoleProtocol, RichConsole
from relpack.output.errors import config_error_exit_code, print_config_error
from relpack.platform.detection import Platform, detect_platform
from relpack.services.targets import BuildTarget, default_targets


@dataclass(frozen=True, slots=True)
class CLIContext:
    root: Path
    config: ReleaseConfig
    app_name: str
    host: Platform
    console: ConsoleProtocol

    def targets(self) -> tuple[BuildTarget, ...]:
        return default_targets(self.app_name, self.config)


def build_context(
    *,
    root: Path | None = None,
    config_path: Path | None = None,
    app_name: str | None = None,
    out_dir: Path | None = None,
) -> CLIContext:
    console = RichConsole()

    try:
        project_root = (root or Path.cwd()).expanduser().resolve()
    except OSError as e:
        console.error(f"invalid --root: {e}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))
    if not project_root.is_dir():
        console.error(f"project root is not a directory: {project_root}")
        raise typer.Exit(code=int(ErrorCode.USER_ERROR))

    config_result = load_project_config(project_root, config_path)
    if isinstance(config_result, Err):
        print_config_error(config_result.error, console)
        raise typer.Exit(code=config_error_exit_code(config_result.error))
    config = config_result.value

    if out_dir is not None:
        # relative to where relpack runs, not to --root
        publish = PublishConfig(dir=str(Path.cwd() / out_dir.expanduser()))
        config = replace(config, publish=publish)

    name_result = resolve_app_name(config, project_root, app_name)
    if isinstance(name_result, Err):
        print_config_error(name_result.error, console)
        raise typer.Exit(code=config_error_exit_code(name_result.error))

    return CLIContext(
        root=project_root,
        config=config.with_app_name(name_result.value),
        app_name=name_result.value,
        host=detect_platform(),
        console=console,
    )
