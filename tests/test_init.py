"""Tests for project scaffolding."""

from pathlib import Path

from bref_deploy.init import init_project


class TestInitProject:
    """Test init_project."""

    def test_creates_marker_files(self, tmp_path: Path) -> None:
        created = init_project(tmp_path)

        assert sorted(path.name for path in created) == ["bref.php", "serverless.yml"]
        assert "handler: handler.handle" in (tmp_path / "serverless.yml").read_text()
        assert (tmp_path / "bref.php").read_text().startswith("<?php")

    def test_existing_files_are_kept(self, tmp_path: Path) -> None:
        (tmp_path / "serverless.yml").write_text("service: mine\n")

        created = init_project(tmp_path)

        assert created == [tmp_path / "bref.php"]
        assert (tmp_path / "serverless.yml").read_text() == "service: mine\n"

    def test_second_run_creates_nothing(self, tmp_path: Path) -> None:
        init_project(tmp_path)
        assert init_project(tmp_path) == []
