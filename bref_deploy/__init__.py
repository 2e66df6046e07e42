"""Deploy PHP applications on serverless platforms.

Example:
    >>> from bref_deploy import Deployer
    >>>
    >>> deployer = Deployer()
    >>> deployer.deploy()
    >>> print(deployer.invoke("main", data='{"name": "world"}'))
"""

from .archive import ArchiveBuilder
from .config import ProjectConfig, load_project_config
from .deployer import Deployer, build_invoke_arguments
from .exceptions import (
    BrefError,
    ConfigurationError,
    ProcessFailedError,
    ProjectNotInitializedError,
    ProjectCopyError,
    RuntimeArchiveError,
    RuntimeDownloadError,
)
from .init import init_project
from .logging import get_logger, setup_logging
from .progress import Progress
from .settings import Settings

__version__ = "0.2.0"

__all__ = [
    "ArchiveBuilder",
    "BrefError",
    "ConfigurationError",
    "Deployer",
    "ProcessFailedError",
    "Progress",
    "ProjectConfig",
    "ProjectCopyError",
    "ProjectNotInitializedError",
    "RuntimeArchiveError",
    "RuntimeDownloadError",
    "Settings",
    "build_invoke_arguments",
    "get_logger",
    "init_project",
    "load_project_config",
    "setup_logging",
]
