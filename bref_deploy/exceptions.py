"""Exception hierarchy for bref-deploy.

All exceptions inherit from BrefError so the command line can report any
failure of the pipeline the same way.
"""


class BrefError(Exception):
    """Base exception for all bref-deploy errors."""


class ProjectNotInitializedError(BrefError):
    """Raised when the project root lacks the files required to deploy."""


class ConfigurationError(BrefError):
    """Raised when `.bref.yml` cannot be parsed or has invalid values."""


class ProcessFailedError(BrefError):
    """Raised when an external command exits with a non-zero code."""

    def __init__(self, command: str, returncode: int, output: str = "") -> None:
        self.command = command
        self.returncode = returncode
        self.output = output
        message = f"Command failed (exit code {returncode}): {command}"
        if output:
            message += f"\n{output}"
        super().__init__(message)


class RuntimeDownloadError(BrefError):
    """Raised when the PHP runtime archive cannot be downloaded."""

    def __init__(self, url: str, reason: str) -> None:
        self.url = url
        super().__init__(f"Failed to download the PHP runtime from {url}: {reason}")


class RuntimeArchiveError(BrefError):
    """Raised when the cached PHP runtime archive cannot be extracted."""


class ProjectCopyError(BrefError):
    """Raised when a project entry cannot be copied into the build output."""
