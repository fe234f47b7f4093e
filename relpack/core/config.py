"""Typed configuration loading and access.

This module provides dataclasses for the `release.toml` structure and the
small part of `Cargo.toml` relpack cares about (the package name).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path

from .result import Err, Ok, Result
from .structured import StrDict, as_str_dict, get_number, get_str, get_table

__all__ = [
    "ReleaseConfig",
    "BuildConfig",
    "ArchiveConfig",
    "WindowsConfig",
    "PublishConfig",
    "ConfigError",
    "CONFIG_FILENAME",
    "DEFAULT_WINDOWS_TRIPLE",
    "load_config",
    "load_project_config",
    "read_cargo_package_name",
    "resolve_app_name",
]

CONFIG_FILENAME = "release.toml"

DEFAULT_WINDOWS_TRIPLE = "x86_64-pc-windows-gnu"
DEFAULT_BUILD_TIMEOUT_SECONDS = 30 * 60.0
DEFAULT_ARCHIVE_TIMEOUT_SECONDS = 10 * 60.0


@dataclass(frozen=True, slots=True)
class ConfigError:
    """Error when config cannot be loaded or parsed."""

    message: str
    path: Path | None = None
    hint: str | None = None


@dataclass(frozen=True, slots=True)
class BuildConfig:
    """Compiler toolchain settings."""

    cargo: str = "cargo"
    target_dir: str | None = None
    timeout: float = DEFAULT_BUILD_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class ArchiveConfig:
    """Archiver executables and their timeout."""

    tar: str = "tar"
    zip: str = "zip"
    timeout: float = DEFAULT_ARCHIVE_TIMEOUT_SECONDS


@dataclass(frozen=True, slots=True)
class WindowsConfig:
    triple: str = DEFAULT_WINDOWS_TRIPLE


@dataclass(frozen=True, slots=True)
class PublishConfig:
    """Where archives end up, relative to the project root."""

    dir: str = "."


@dataclass(frozen=True, slots=True)
class ReleaseConfig:
    """Main configuration container."""

    app_name: str | None = None
    build: BuildConfig = field(default_factory=BuildConfig)
    archive: ArchiveConfig = field(default_factory=ArchiveConfig)
    windows: WindowsConfig = field(default_factory=WindowsConfig)
    publish: PublishConfig = field(default_factory=PublishConfig)

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> ReleaseConfig:
        """Create ReleaseConfig from a mapping (parsed TOML)."""
        app: StrDict = get_table(data, "app") or {}
        build: StrDict = get_table(data, "build") or {}
        archive: StrDict = get_table(data, "archive") or {}
        windows: StrDict = get_table(data, "windows") or {}
        publish: StrDict = get_table(data, "publish") or {}

        return cls(
            app_name=get_str(app, "name"),
            build=BuildConfig(
                cargo=get_str(build, "cargo") or "cargo",
                target_dir=get_str(build, "target_dir"),
                timeout=get_number(build, "timeout") or DEFAULT_BUILD_TIMEOUT_SECONDS,
            ),
            archive=ArchiveConfig(
                tar=get_str(archive, "tar") or "tar",
                zip=get_str(archive, "zip") or "zip",
                timeout=get_number(archive, "timeout") or DEFAULT_ARCHIVE_TIMEOUT_SECONDS,
            ),
            windows=WindowsConfig(
                triple=get_str(windows, "triple") or DEFAULT_WINDOWS_TRIPLE,
            ),
            publish=PublishConfig(
                dir=get_str(publish, "dir") or ".",
            ),
        )

    def with_app_name(self, app_name: str) -> ReleaseConfig:
        return replace(self, app_name=app_name)

    def target_dir(self, root: Path, env: Mapping[str, str] | None = None) -> Path:
        """Resolve the cargo target directory.

        Order: `[build].target_dir`, then `$CARGO_TARGET_DIR`, then `target`.
        Relative values are taken relative to the project root.
        """
        env = os.environ if env is None else env
        raw = self.build.target_dir or env.get("CARGO_TARGET_DIR") or "target"
        p = Path(raw).expanduser()
        return p if p.is_absolute() else root / p

    def publish_dir(self, root: Path) -> Path:
        p = Path(self.publish.dir).expanduser()
        return p if p.is_absolute() else root / p


def _parse_toml(path: Path) -> Result[StrDict, ConfigError]:
    """Parse a TOML file, handling read and parse errors."""
    import tomllib

    try:
        content = path.read_bytes()
        data_obj: object = tomllib.loads(content.decode("utf-8"))
        data = as_str_dict(data_obj)
        if data is None:
            return Err(ConfigError("TOML root must be a table", path=path))
        return Ok(data)
    except FileNotFoundError:
        return Err(ConfigError(f"Config file not found: {path}", path=path))
    except PermissionError:
        return Err(ConfigError(f"Permission denied reading: {path}", path=path))
    except tomllib.TOMLDecodeError as e:
        return Err(ConfigError(f"Invalid TOML syntax: {e}", path=path))
    except UnicodeDecodeError as e:
        return Err(ConfigError(f"Error reading config: {e}", path=path))


def load_config(path: Path) -> Result[ReleaseConfig, ConfigError]:
    """Load and parse configuration from a TOML file.

    Args:
        path: Path to release.toml

    Returns:
        Ok(ReleaseConfig) on success, Err(ConfigError) on failure
    """
    result = _parse_toml(path)
    if isinstance(result, Err):
        return result

    try:
        return Ok(ReleaseConfig.from_dict(result.value))
    except (KeyError, TypeError, ValueError) as e:
        return Err(ConfigError(f"Invalid config structure: {e}", path=path))


def load_project_config(
    root: Path, config_path: Path | None = None
) -> Result[ReleaseConfig, ConfigError]:
    """Load the project's release config.

    The default `{root}/release.toml` is optional and missing means defaults.
    An explicitly given path must exist.
    """
    if config_path is not None:
        return load_config(config_path)

    default_path = root / CONFIG_FILENAME
    if not default_path.exists():
        return Ok(ReleaseConfig())
    return load_config(default_path)


def read_cargo_package_name(root: Path) -> str | None:
    """Return `[package].name` from `{root}/Cargo.toml`, if readable."""
    result = _parse_toml(root / "Cargo.toml")
    if isinstance(result, Err):
        return None
    package = get_table(result.value, "package") or {}
    return get_str(package, "name")


def resolve_app_name(
    config: ReleaseConfig, root: Path, override: str | None = None
) -> Result[str, ConfigError]:
    """Pick the application name used for binaries and archive names.

    Order: explicit override, `[app].name`, Cargo package name.
    """
    name = (override or "").strip() or config.app_name or read_cargo_package_name(root)
    if not name:
        return Err(
            ConfigError(
                "Could not determine app name",
                path=root / "Cargo.toml",
                hint=f"Pass --app-name or set [app].name in {CONFIG_FILENAME}",
            )
        )
    if "/" in name or "\\" in name:
        return Err(ConfigError(f"Invalid app name: {name!r}"))
    return Ok(name)
