"""Create the files a project needs before its first deployment."""

import shutil
from pathlib import Path

from bref_deploy.archive import REQUIRED_FILES
from bref_deploy.logging import get_logger

logger = get_logger(__name__)

TEMPLATE_DIRECTORY = Path(__file__).resolve().parent / "template"


def init_project(project_root: Path | None = None) -> list[Path]:
    """Copy the `serverless.yml` and `bref.php` templates into the project.

    Existing files are never overwritten. Returns the files that were created.
    """
    project_root = project_root or Path.cwd()
    created: list[Path] = []
    for name in REQUIRED_FILES:
        target = project_root / name
        if target.exists():
            logger.info("`%s` already exists, leaving it untouched", name)
            continue
        shutil.copyfile(TEMPLATE_DIRECTORY / name, target)
        logger.info("Created `%s`", name)
        created.append(target)
    return created


__all__ = ["init_project"]
