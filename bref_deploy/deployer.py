"""Deploy or locally invoke a project with the Serverless Framework.

Both operations first rebuild `.bref/output` with ArchiveBuilder, then hand the
output directory to the `serverless` command line.

Usage:
    >>> deployer = Deployer()
    >>> deployer.deploy()
    >>> print(deployer.invoke("main", data='{"name": "bref"}'))
"""

import shlex
from collections.abc import Iterable
from pathlib import Path

from bref_deploy.archive import BUILD_STEPS, ArchiveBuilder
from bref_deploy.logging import get_logger
from bref_deploy.notify import send_notification
from bref_deploy.process import run_locally, run_process
from bref_deploy.progress import Progress, ProgressListener
from bref_deploy.settings import Settings
from bref_deploy.settings import settings as default_settings

logger = get_logger(__name__)

NOTIFICATION_TITLE = "Deployment success"
NOTIFICATION_BODY = "Bref has deployed your application"


def build_invoke_arguments(function: str, data: str | None = None, raw: bool = False) -> list[str]:
    """Arguments following `serverless invoke local`.

    Options with an empty or false value are omitted; `-raw` is a bare flag.
    """
    options: dict[str, str | bool | None] = {"-f": function, "-d": data, "-raw": raw}
    arguments: list[str] = []
    for flag, value in options.items():
        if not value:
            continue
        arguments.append(flag)
        if value is not True:
            arguments.append(value)
    return arguments


class Deployer:
    """Build the project and run the Serverless Framework against the result."""

    def __init__(
        self,
        project_root: Path | None = None,
        settings: Settings | None = None,
        listeners: Iterable[ProgressListener] = (),
    ) -> None:
        self.settings = settings or default_settings
        self.builder = ArchiveBuilder(project_root, self.settings)
        self.listeners = list(listeners)

    def _progress(self, total: int) -> Progress:
        return Progress(total=total, listeners=list(self.listeners))

    def invoke(self, function: str, data: str | None = None, raw: bool = False) -> str:
        """Invoke `function` locally and return what it printed."""
        progress = self._progress(BUILD_STEPS)
        self.builder.build(progress)

        progress.set_message("Invoking the lambda")
        progress.finish()

        args = [self.settings.serverless_binary, "invoke", "local", *build_invoke_arguments(function, data, raw)]
        return run_process(args, self.builder.output_dir)

    def deploy(self) -> None:
        """Build the project, deploy it and notify the desktop."""
        progress = self._progress(BUILD_STEPS + 1)
        self.builder.build(progress)

        progress.set_message("Uploading the lambda")
        run_locally(shlex.join([self.settings.serverless_binary, "deploy"]), self.builder.output_dir)

        progress.set_message(NOTIFICATION_TITLE)
        progress.finish()

        if self.settings.notifications:
            send_notification(NOTIFICATION_TITLE, NOTIFICATION_BODY)


__all__ = ["Deployer", "build_invoke_arguments"]
