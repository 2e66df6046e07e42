"""Tests for `.bref.yml` loading."""

import logging
from pathlib import Path

import pytest

from bref_deploy.config import ProjectConfig, load_project_config
from bref_deploy.exceptions import ConfigurationError


class TestLoadProjectConfig:
    """Test load_project_config."""

    def test_missing_file_is_empty_config(self, tmp_path: Path) -> None:
        config = load_project_config(tmp_path)
        assert config == ProjectConfig()
        assert config.php is None
        assert config.build_hooks == []

    def test_empty_file_is_empty_config(self, tmp_path: Path) -> None:
        (tmp_path / ".bref.yml").write_text("")
        assert load_project_config(tmp_path).build_hooks == []

    def test_reads_php_url_and_hooks(self, tmp_path: Path) -> None:
        (tmp_path / ".bref.yml").write_text(
            "php: https://example.com/php.tar.gz\nhooks:\n  build:\n    - echo a\n    - echo b\n"
        )
        config = load_project_config(tmp_path)
        assert config.php == "https://example.com/php.tar.gz"
        assert config.build_hooks == ["echo a", "echo b"]

    def test_null_hooks_default_to_empty(self, tmp_path: Path) -> None:
        (tmp_path / ".bref.yml").write_text("hooks:\n  build:\n")
        assert load_project_config(tmp_path).build_hooks == []

        (tmp_path / ".bref.yml").write_text("hooks:\n")
        assert load_project_config(tmp_path).build_hooks == []

    @pytest.mark.usefixtures("propagate_logs")
    def test_unknown_keys_are_ignored_with_warning(self, tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
        (tmp_path / ".bref.yml").write_text("region: eu-west-1\nhooks:\n  deploy: [echo x]\n  build: [echo a]\n")
        with caplog.at_level(logging.WARNING, logger="bref_deploy.config"):
            config = load_project_config(tmp_path)

        assert config.build_hooks == ["echo a"]
        assert config.unknown_keys() == ["region", "hooks.deploy"]
        assert "region" in caplog.text
        assert "hooks.deploy" in caplog.text

    def test_invalid_yaml_raises(self, tmp_path: Path) -> None:
        (tmp_path / ".bref.yml").write_text("hooks: [unclosed\n")
        with pytest.raises(ConfigurationError, match="Invalid YAML"):
            load_project_config(tmp_path)

    def test_non_mapping_raises(self, tmp_path: Path) -> None:
        (tmp_path / ".bref.yml").write_text("- a\n- b\n")
        with pytest.raises(ConfigurationError, match="must contain a mapping"):
            load_project_config(tmp_path)

    def test_wrong_type_raises(self, tmp_path: Path) -> None:
        (tmp_path / ".bref.yml").write_text("hooks:\n  build: echo a\n")
        with pytest.raises(ConfigurationError, match="Invalid configuration"):
            load_project_config(tmp_path)
