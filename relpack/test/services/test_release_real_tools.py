"""Release runs against the real tar/zip binaries (skipped when absent)."""

from __future__ import annotations

import shutil
import tarfile
import zipfile
from pathlib import Path

import pytest

from relpack.core.config import ArchiveConfig, ReleaseConfig
from relpack.core.result import Err, Ok
from relpack.output.console import MockConsole
from relpack.platform.detection import Platform
from relpack.platform.process import run
from relpack.services.release import ReleaseService
from relpack.services.release_errors import ArchiveFailure
from relpack.services.targets import linux_target, windows_target
from relpack.test.services._fakes import FakeToolchain

WIN_TRIPLE = "x86_64-pc-windows-gnu"

needs_tar_xz = pytest.mark.skipif(
    shutil.which("tar") is None or shutil.which("xz") is None,
    reason="tar with xz support not available",
)
needs_zip = pytest.mark.skipif(shutil.which("zip") is None, reason="zip not available")


def _service(
    root: Path, fake: FakeToolchain, config: ReleaseConfig | None = None
) -> ReleaseService:
    return ReleaseService(
        root=root,
        config=config or ReleaseConfig(app_name="demo"),
        console=MockConsole(),
        host=Platform.LINUX,
        build_runner=fake,
        archive_runner=run,
        env={},
    )


@needs_tar_xz
def test_tar_xz_round_trip(tmp_path: Path) -> None:
    fake = FakeToolchain(target_dir=tmp_path / "target")

    result = _service(tmp_path, fake).release_platform(linux_target("demo"))

    assert isinstance(result, Ok)
    with tarfile.open(tmp_path / "demo-linux.tar.xz", "r:xz") as tf:
        assert tf.getnames() == ["demo"]


@needs_zip
def test_zip_round_trip_twice(tmp_path: Path) -> None:
    fake = FakeToolchain(target_dir=tmp_path / "target")
    service = _service(tmp_path, fake)
    target = windows_target("demo", WIN_TRIPLE)

    assert isinstance(service.release_platform(target), Ok)
    assert isinstance(service.release_platform(target), Ok)

    with zipfile.ZipFile(tmp_path / "demo-windows.zip") as zf:
        assert zf.namelist() == ["demo.exe"]


def test_missing_archiver_binary(tmp_path: Path) -> None:
    fake = FakeToolchain(target_dir=tmp_path / "target")
    config = ReleaseConfig(app_name="demo", archive=ArchiveConfig(tar="relpack-no-such-tar"))

    result = _service(tmp_path, fake, config).release_platform(linux_target("demo"))

    assert isinstance(result, Err)
    assert isinstance(result.error, ArchiveFailure)
    assert result.error.environment is True
    assert not (tmp_path / "demo-linux.tar.xz").exists()
