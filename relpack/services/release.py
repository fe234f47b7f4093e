"""Release orchestration: compile, locate, archive, relocate.

Each platform runs a strictly linear pipeline. Every stage returns a Result
and the first Err stops the pipeline, so a failed build or archive never
leaves anything in the publish directory. Platforms are independent: they
write disjoint files, and one platform failing never stops another.
"""

from __future__ import annotations

import errno
import hashlib
import os
import shutil
import tempfile
from collections.abc import Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from relpack.core.config import ReleaseConfig
from relpack.core.result import Err, Ok, Result
from relpack.output.console import ConsoleProtocol
from relpack.platform.detection import Platform, detect_platform
from relpack.platform.process import ProcessError, run, run_silent
from relpack.services.archive import archive_command, list_members
from relpack.services.release_errors import (
    ArchiveFailure,
    ArtifactNotFound,
    BuildFailure,
    ReleaseError,
    RelocationFailure,
)
from relpack.services.targets import BuildTarget

__all__ = [
    "CommandRunner",
    "PlatformOutcome",
    "PublishedArchive",
    "ReleaseReport",
    "ReleaseService",
]


class CommandRunner(Protocol):
    """Signature shared by `run` and `run_silent` (and test fakes)."""

    def __call__(
        self,
        cmd: list[str],
        cwd: Path,
        env: dict[str, str] | None = None,
        *,
        timeout: float | None = None,
    ) -> Result[object, ProcessError]: ...


@dataclass(frozen=True, slots=True)
class PublishedArchive:
    platform: str
    path: Path
    size: int
    sha256: str
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class PlatformOutcome:
    target: BuildTarget
    result: Result[PublishedArchive, ReleaseError]

    @property
    def ok(self) -> bool:
        return isinstance(self.result, Ok)


@dataclass(frozen=True, slots=True)
class ReleaseReport:
    """Per-platform outcomes of a release run, in target order."""

    outcomes: tuple[PlatformOutcome, ...]

    @property
    def ok(self) -> bool:
        return all(o.ok for o in self.outcomes)

    @property
    def published(self) -> list[PublishedArchive]:
        return [o.result.value for o in self.outcomes if isinstance(o.result, Ok)]

    @property
    def errors(self) -> list[ReleaseError]:
        return [o.result.error for o in self.outcomes if isinstance(o.result, Err)]


def _sha256_file(path: Path) -> str:
    h = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(1024 * 1024), b""):
            h.update(chunk)
    return h.hexdigest()


def _replace_file(source: Path, destination: Path) -> None:
    """Move source onto destination without ever leaving it half-written."""
    try:
        os.replace(source, destination)
        return
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise

    # other filesystem: copy next to the destination, then swap it in
    fd, tmp_name = tempfile.mkstemp(
        prefix=f".{destination.name}.",
        suffix=".tmp",
        dir=str(destination.parent),
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "wb") as handle, source.open("rb") as src:
            shutil.copyfileobj(src, handle)
            handle.flush()
            os.fsync(handle.fileno())
        shutil.copymode(source, tmp_path)
        os.replace(tmp_path, destination)
    finally:
        tmp_path.unlink(missing_ok=True)
    source.unlink()


class ReleaseService:
    """Runs release pipelines for build targets of one project.

    Args:
        root: Project root (where Cargo.toml lives and cargo runs).
        config: Release configuration.
        console: Output sink for progress and echoed commands.
        host: Host platform (detected if None).
        build_runner: Runs the compiler; output streams to the terminal.
        archive_runner: Runs archivers; output is captured.
        env: Base environment for child processes (current env if None).
    """

    def __init__(
        self,
        *,
        root: Path,
        config: ReleaseConfig,
        console: ConsoleProtocol,
        host: Platform | None = None,
        build_runner: CommandRunner = run_silent,
        archive_runner: CommandRunner = run,
        env: Mapping[str, str] | None = None,
    ) -> None:
        self._root = root
        self._config = config
        self._console = console
        self._host = host or detect_platform()
        self._build_runner = build_runner
        self._archive_runner = archive_runner
        self._env = dict(os.environ if env is None else env)

    @property
    def target_dir(self) -> Path:
        return self._config.target_dir(self._root, self._env)

    @property
    def publish_dir(self) -> Path:
        return self._config.publish_dir(self._root)

    # -------------------------------------------------------------------------
    # Public API
    # -------------------------------------------------------------------------

    def release_all(
        self,
        targets: Sequence[BuildTarget],
        *,
        parallel: bool = False,
        dry_run: bool = False,
    ) -> ReleaseReport:
        """Release every target; a failing platform does not stop the others."""
        if parallel and len(targets) > 1:
            with ThreadPoolExecutor(max_workers=len(targets)) as executor:
                futures = [
                    executor.submit(self.release_platform, t, dry_run=dry_run) for t in targets
                ]
                results = [f.result() for f in futures]
        else:
            results = [self.release_platform(t, dry_run=dry_run) for t in targets]

        return ReleaseReport(
            outcomes=tuple(
                PlatformOutcome(target=t, result=r) for t, r in zip(targets, results, strict=True)
            )
        )

    def release_platform(
        self, target: BuildTarget, *, dry_run: bool = False
    ) -> Result[PublishedArchive, ReleaseError]:
        """Compile, locate, archive and relocate one target.

        Returns:
            Ok(PublishedArchive) once the archive sits in the publish directory,
            Err(ReleaseError) from the first failing step otherwise.
        """
        self._console.header(f"Release {target.name} ({target.archive_name})")

        if dry_run:
            return self._dry_run(target)

        return (
            self._compile(target)
            .and_then(lambda _: self._locate(target))
            .and_then(lambda binary: self._archive(target, binary))
            .and_then(lambda archive: self._relocate(target, archive))
        )

    # -------------------------------------------------------------------------
    # Pipeline steps
    # -------------------------------------------------------------------------

    def _build_env(self) -> dict[str, str]:
        env = dict(self._env)
        if self._config.build.target_dir:
            # keep cargo and the locate step pointed at the same directory
            env["CARGO_TARGET_DIR"] = str(self.target_dir)
        return env

    def _compile(self, target: BuildTarget) -> Result[None, ReleaseError]:
        if target.host is not None and target.host != self._host:
            return Err(
                BuildFailure(
                    platform=target.name,
                    reason=f"native {target.name} build needs a {target.host} host "
                    f"(running on {self._host})",
                    environment=True,
                )
            )

        cmd = target.build_command(self._config.build.cargo)
        self._console.command(cmd)
        result = self._build_runner(
            cmd,
            self._root,
            self._build_env(),
            timeout=self._config.build.timeout,
        )
        if isinstance(result, Ok):
            return Ok(None)

        error = result.error
        if error.launch_failed:
            hint = f"hint: is {self._config.build.cargo} installed and on PATH?"
        else:
            hint = error.stderr_tail() or None
        return Err(
            BuildFailure(
                platform=target.name,
                reason=str(error),
                returncode=None if error.returncode < 0 else error.returncode,
                environment=error.launch_failed,
                hint=hint,
            )
        )

    def _locate(self, target: BuildTarget) -> Result[Path, ReleaseError]:
        binary = target.binary_path(self.target_dir)
        if not binary.is_file():
            return Err(ArtifactNotFound(platform=target.name, path=binary))
        return Ok(binary)

    def _archive(self, target: BuildTarget, binary: Path) -> Result[Path, ReleaseError]:
        release_dir = binary.parent
        staged = release_dir / target.archive_name

        # zip would merge into a leftover archive instead of replacing it
        try:
            staged.unlink(missing_ok=True)
        except OSError as e:
            return Err(
                ArchiveFailure(
                    platform=target.name,
                    reason=f"cannot remove stale {staged.name}: {e.strerror or e}",
                )
            )

        cmd = archive_command(target, self._config.archive)
        self._console.command(cmd)
        result = self._archive_runner(
            cmd,
            release_dir,
            None,
            timeout=self._config.archive.timeout,
        )
        if isinstance(result, Err):
            self._discard(staged)
            error = result.error
            return Err(
                ArchiveFailure(
                    platform=target.name,
                    reason=str(error),
                    returncode=None if error.returncode < 0 else error.returncode,
                    environment=error.launch_failed,
                    hint=(
                        f"hint: is {cmd[0]} installed and on PATH?"
                        if error.launch_failed
                        else error.stderr_tail() or None
                    ),
                )
            )

        if not staged.is_file():
            return Err(
                ArchiveFailure(
                    platform=target.name,
                    reason=f"{cmd[0]} reported success but {staged.name} was not created",
                )
            )

        members = list_members(staged, target.archive_format)
        if isinstance(members, Err):
            self._discard(staged)
            return Err(ArchiveFailure(platform=target.name, reason=members.error))
        if members.value != [target.binary_name]:
            self._discard(staged)
            return Err(
                ArchiveFailure(
                    platform=target.name,
                    reason=f"{staged.name} contains {members.value}, "
                    f"expected only {target.binary_name}",
                )
            )

        return Ok(staged)

    def _relocate(
        self, target: BuildTarget, archive: Path
    ) -> Result[PublishedArchive, ReleaseError]:
        destination = self.publish_dir / target.archive_name
        self._console.command(["mv", str(archive), str(destination)])

        def failure(reason: str) -> Err[ReleaseError]:
            return Err(
                RelocationFailure(
                    platform=target.name,
                    source=archive,
                    destination=destination,
                    reason=reason,
                )
            )

        if not archive.is_file():
            return failure("source archive missing")
        if destination.is_dir():
            return failure("destination is a directory")

        try:
            destination.parent.mkdir(parents=True, exist_ok=True)
            # overwrites a stale archive from a previous run
            _replace_file(archive, destination)
        except OSError as e:
            return failure(e.strerror or str(e))

        return Ok(
            PublishedArchive(
                platform=target.name,
                path=destination,
                size=destination.stat().st_size,
                sha256=_sha256_file(destination),
            )
        )

    def _discard(self, path: Path) -> None:
        """Remove a partial archive; it must never be relocated later."""
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            self._console.warning(f"could not remove partial archive {path}: {e.strerror or e}")

    def _dry_run(self, target: BuildTarget) -> Result[PublishedArchive, ReleaseError]:
        """Echo the commands of a release without running anything."""
        binary = target.binary_path(self.target_dir)
        destination = self.publish_dir / target.archive_name
        self._console.command(target.build_command(self._config.build.cargo))
        self._console.command(archive_command(target, self._config.archive))
        self._console.command(
            ["mv", str(binary.parent / target.archive_name), str(destination)]
        )
        return Ok(
            PublishedArchive(
                platform=target.name,
                path=destination,
                size=0,
                sha256="",
                dry_run=True,
            )
        )
