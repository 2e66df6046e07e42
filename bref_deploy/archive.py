"""Build the deployable `.bref/output` directory.

Build pipeline:
    read .bref.yml → copy project → download PHP → extract PHP → install handler.py
    → composer install → build hooks

Layout of the project root after a build:
    .bref/bin/php/php-<version>.tar.gz   cached runtime archive, reused across builds
    .bref/output/                        copy of the project, deployed as is
    .bref/output/.bref/bin/              extracted PHP binary
    .bref/output/handler.py              runtime bridge invoked by the function
"""

import os
import shlex
import shutil
import tarfile
import tempfile
from pathlib import Path

import httpx

from bref_deploy.config import CONFIG_FILE, ProjectConfig, load_project_config
from bref_deploy.exceptions import (
    ProjectCopyError,
    ProjectNotInitializedError,
    RuntimeArchiveError,
    RuntimeDownloadError,
)
from bref_deploy.logging import get_logger
from bref_deploy.process import run_locally
from bref_deploy.progress import Progress
from bref_deploy.settings import Settings
from bref_deploy.settings import settings as default_settings

logger = get_logger(__name__)

BUILD_DIRECTORY = ".bref"
REQUIRED_FILES = ("serverless.yml", "bref.php")
HANDLER_TEMPLATE = Path(__file__).resolve().parent / "template" / "handler.py"
COMPOSER_INSTALL_ARGS = ("install", "--no-dev", "--classmap-authoritative", "--no-scripts")

BUILD_STEPS = 7
"""Number of times ArchiveBuilder.build() advances the progress tracker."""


class ArchiveBuilder:
    """Recreate the deployable directory of a project from scratch.

    Every build destroys `.bref/output` and copies the project again; only the
    PHP runtime archive is cached between builds.
    """

    def __init__(
        self,
        project_root: Path | None = None,
        settings: Settings | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.project_root = (project_root or Path.cwd()).resolve()
        self.settings = settings or default_settings
        self._transport = transport

    @property
    def build_dir(self) -> Path:
        return self.project_root / BUILD_DIRECTORY

    @property
    def output_dir(self) -> Path:
        return self.build_dir / "output"

    @property
    def runtime_dir(self) -> Path:
        return self.output_dir / BUILD_DIRECTORY / "bin"

    @property
    def runtime_archive(self) -> Path:
        version = self.settings.php_version
        return self.build_dir / "bin" / "php" / f"php-{version}.tar.gz"

    def check_project(self) -> None:
        """Fail before any side effect if the project was not initialized."""
        missing = [name for name in REQUIRED_FILES if not (self.project_root / name).exists()]
        if missing:
            raise ProjectNotInitializedError(
                "The files `bref.php` and `serverless.yml` are required to deploy, "
                f"run `bref init` to create them (missing: {', '.join(missing)})"
            )

    def build(self, progress: Progress) -> None:
        """Run the build pipeline, advancing `progress` by BUILD_STEPS."""
        self.check_project()

        config = ProjectConfig()
        if (self.project_root / CONFIG_FILE).exists():
            progress.set_message(f"Reading `{CONFIG_FILE}`")
            config = load_project_config(self.project_root)
        progress.advance()

        progress.set_message("Building the project in the `.bref/output` directory")
        self._reset_output()
        self._copy_project()
        progress.advance()

        progress.set_message("Downloading PHP in the `.bref/bin/` directory")
        self._ensure_runtime(config.php or self.settings.runtime_url)
        progress.advance()

        progress.set_message("Installing the PHP binary")
        self._install_runtime()
        progress.advance()

        progress.set_message("Installing `handler.py`")
        shutil.copyfile(HANDLER_TEMPLATE, self.output_dir / "handler.py")
        progress.advance()

        progress.set_message("Installing composer dependencies")
        run_locally(shlex.join([self.settings.composer_binary, *COMPOSER_INSTALL_ARGS]), self.output_dir)
        progress.advance()

        progress.set_message("Running build hooks")
        for hook in config.build_hooks:
            progress.set_message(f"Running build hook: {hook}")
            run_locally(hook, self.output_dir)
        progress.advance()

    def _reset_output(self) -> None:
        # TODO: mirror changed files only instead of rebuilding the whole tree
        if self.output_dir.exists():
            shutil.rmtree(self.output_dir)
        self.output_dir.mkdir(parents=True)

    def _copy_project(self) -> None:
        for entry in sorted(self.project_root.iterdir()):
            if entry.name == BUILD_DIRECTORY:
                continue
            target = self.output_dir / entry.name
            try:
                if entry.is_file():
                    shutil.copy2(entry, target)
                else:
                    shutil.copytree(entry, target, symlinks=False)
            except (OSError, shutil.Error) as e:
                raise ProjectCopyError(f"Cannot copy `{entry.name}` into the build output: {e}") from e

    def _ensure_runtime(self, url: str) -> None:
        archive = self.runtime_archive
        if archive.exists():
            logger.debug("Using cached PHP runtime %s", archive)
            return

        archive.parent.mkdir(parents=True, exist_ok=True)
        logger.info("Downloading %s", url)
        fd, tmp_name = tempfile.mkstemp(dir=archive.parent, suffix=".part")
        try:
            with (
                os.fdopen(fd, "wb") as f,
                httpx.Client(transport=self._transport, timeout=None, follow_redirects=True) as client,
                client.stream("GET", url) as response,
            ):
                response.raise_for_status()
                for chunk in response.iter_bytes():
                    f.write(chunk)
            os.replace(tmp_name, archive)
        except httpx.HTTPError as e:
            raise RuntimeDownloadError(url, str(e)) from e
        finally:
            if os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def _install_runtime(self) -> None:
        self.runtime_dir.mkdir(parents=True, exist_ok=True)
        try:
            with tarfile.open(self.runtime_archive, "r:gz") as tar:
                tar.extractall(self.runtime_dir, filter="tar")
        except tarfile.TarError as e:
            raise RuntimeArchiveError(f"Cannot extract {self.runtime_archive}: {e}") from e
        self.runtime_dir.chmod(0o755)


__all__ = ["ArchiveBuilder", "BUILD_DIRECTORY", "BUILD_STEPS", "REQUIRED_FILES"]
