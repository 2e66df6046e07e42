"""Common test fixtures for bref-deploy."""

import io
import logging
import tarfile
from pathlib import Path

import pytest

from bref_deploy.settings import Settings

PHP_VERSION = "7.2.5"


def make_runtime_archive(path: Path, files: dict[str, bytes] | None = None) -> Path:
    """Write a gzipped tarball standing in for the PHP runtime archive."""
    files = files or {"php": b"#!/bin/sh\necho php\n"}
    path.parent.mkdir(parents=True, exist_ok=True)
    with tarfile.open(path, "w:gz") as tar:
        for name, content in files.items():
            info = tarfile.TarInfo(name)
            info.size = len(content)
            info.mode = 0o755
            tar.addfile(info, io.BytesIO(content))
    return path


@pytest.fixture
def test_settings() -> Settings:
    """Settings replacing composer and serverless with harmless commands."""
    return Settings(
        php_version=PHP_VERSION,
        php_download_url="https://runtime.test/php-{version}.tar.gz",
        composer_binary="true",
        serverless_binary="echo",
        notifications=False,
    )


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """An initialized project root with a few files, a directory and a dotfile."""
    root = tmp_path / "project"
    root.mkdir()
    (root / "serverless.yml").write_text("service: app\n")
    (root / "bref.php").write_text("<?php\n")
    (root / "composer.json").write_text("{}\n")
    (root / ".env.dist").write_text("APP_ENV=prod\n")
    (root / "src").mkdir()
    (root / "src" / "Handler.php").write_text("<?php\nclass Handler {}\n")
    return root


@pytest.fixture
def cached_runtime(project: Path) -> Path:
    """Pre-populate the runtime cache so no download happens."""
    return make_runtime_archive(project / ".bref" / "bin" / "php" / f"php-{PHP_VERSION}.tar.gz")


@pytest.fixture
def runtime_archive_factory():
    return make_runtime_archive


@pytest.fixture
def propagate_logs():
    """Let `bref_deploy` records reach caplog's root handler."""
    logger = logging.getLogger("bref_deploy")
    previous = logger.propagate
    logger.propagate = True
    yield
    logger.propagate = previous
