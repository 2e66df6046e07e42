"""Project configuration read from the optional `.bref.yml` file.

Example `.bref.yml`:
    php: https://example.com/php-7.2.5.tar.gz
    hooks:
        build:
            - 'npm install'
            - 'bin/console cache:warmup --env=prod'
"""

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from bref_deploy.exceptions import ConfigurationError
from bref_deploy.logging import get_logger

logger = get_logger(__name__)

CONFIG_FILE = ".bref.yml"


class HooksConfig(BaseModel):
    """Shell commands run at fixed points of the pipeline."""

    build: list[str] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator("build", mode="before")
    @classmethod
    def _empty_build(cls, value: Any) -> Any:
        return [] if value is None else value


class ProjectConfig(BaseModel):
    """Parsed `.bref.yml`. Every key is optional."""

    php: str | None = None
    hooks: HooksConfig = Field(default_factory=HooksConfig)

    model_config = ConfigDict(frozen=True, extra="allow")

    @field_validator("hooks", mode="before")
    @classmethod
    def _empty_hooks(cls, value: Any) -> Any:
        return {} if value is None else value

    @property
    def build_hooks(self) -> list[str]:
        return self.hooks.build

    def unknown_keys(self) -> list[str]:
        """Dotted names of keys that are not recognized, in file order."""
        keys = [name for name in self.model_extra or {}]
        keys.extend(f"hooks.{name}" for name in self.hooks.model_extra or {})
        return keys


def load_project_config(project_root: Path) -> ProjectConfig:
    """Read `.bref.yml` from the project root.

    A missing file yields an empty configuration. Unknown keys are kept out of
    the pipeline and reported as warnings.

    Raises:
        ConfigurationError: The file is not valid YAML, is not a mapping, or a
            recognized key has the wrong type.
    """
    path = project_root / CONFIG_FILE
    if not path.exists():
        return ProjectConfig()

    try:
        data: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {CONFIG_FILE}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigurationError(f"{CONFIG_FILE} must contain a mapping, got {type(data).__name__}")

    try:
        config = ProjectConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration in {CONFIG_FILE}:\n{e}") from e

    for key in config.unknown_keys():
        logger.warning("Ignoring unknown key `%s` in %s", key, CONFIG_FILE)

    return config


__all__ = ["CONFIG_FILE", "HooksConfig", "ProjectConfig", "load_project_config"]
