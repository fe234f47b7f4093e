from __future__ import annotations

from pathlib import Path

import pytest

from relpack.core.config import ReleaseConfig, WindowsConfig
from relpack.platform.detection import Platform
from relpack.services.targets import (
    ArchiveFormat,
    default_targets,
    linux_target,
    windows_target,
)


class TestNaming:
    def test_demo_archive_names(self) -> None:
        assert linux_target("demo").archive_name == "demo-linux.tar.xz"
        assert windows_target("demo", "x86_64-pc-windows-gnu").archive_name == "demo-windows.zip"

    def test_binary_names(self) -> None:
        assert linux_target("demo").binary_name == "demo"
        assert windows_target("demo", "x86_64-pc-windows-gnu").binary_name == "demo.exe"

    def test_archive_names_never_collide(self) -> None:
        targets = default_targets("julia-fractal-renderer", ReleaseConfig())
        names = [t.archive_name for t in targets]
        assert len(set(names)) == len(names) == 2


class TestPaths:
    def test_native_release_dir(self) -> None:
        target = linux_target("demo")
        assert target.release_dir(Path("target")) == Path("target/release")
        assert target.binary_path(Path("target")) == Path("target/release/demo")

    def test_cross_release_dir_is_triple_qualified(self) -> None:
        target = windows_target("demo", "x86_64-pc-windows-gnu")
        assert target.binary_path(Path("target")) == Path(
            "target/x86_64-pc-windows-gnu/release/demo.exe"
        )


class TestBuildCommand:
    def test_native(self) -> None:
        assert linux_target("demo").build_command("cargo") == ["cargo", "build", "--release"]

    def test_cross(self) -> None:
        cmd = windows_target("demo", "x86_64-pc-windows-gnu").build_command("cross")
        assert cmd == ["cross", "build", "--release", "--target", "x86_64-pc-windows-gnu"]


class TestDefaults:
    def test_order_and_formats(self) -> None:
        linux, windows = default_targets("demo", ReleaseConfig())
        assert (linux.platform, linux.archive_format) == (Platform.LINUX, ArchiveFormat.TAR_XZ)
        assert (windows.platform, windows.archive_format) == (Platform.WINDOWS, ArchiveFormat.ZIP)

    def test_host_requirements(self) -> None:
        linux, windows = default_targets("demo", ReleaseConfig())
        assert linux.host == Platform.LINUX
        assert windows.host is None

    def test_triple_from_config(self) -> None:
        config = ReleaseConfig(windows=WindowsConfig(triple="x86_64-pc-windows-msvc"))
        _, windows = default_targets("demo", config)
        assert windows.triple == "x86_64-pc-windows-msvc"

    def test_frozen(self) -> None:
        target = linux_target("demo")
        with pytest.raises(AttributeError):
            target.app_name = "other"  # type: ignore[misc]
