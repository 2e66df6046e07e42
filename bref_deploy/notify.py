"""Best-effort desktop notifications.

Delivery is handed to the notifier command of the platform (`osascript` on
macOS, `notify-send` on Linux). A notification that cannot be shown is logged
and otherwise ignored.
"""

import shutil
import subprocess
import sys

from bref_deploy.logging import get_logger

logger = get_logger(__name__)

NOTIFY_TIMEOUT = 10


def _applescript_string(value: str) -> str:
    return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'


def notifier_command(title: str, body: str, platform: str | None = None) -> list[str] | None:
    """Command line showing the notification, or None if the platform has no notifier."""
    platform = platform or sys.platform
    if platform == "darwin":
        script = f"display notification {_applescript_string(body)} with title {_applescript_string(title)}"
        return ["osascript", "-e", script]
    if platform.startswith("linux") and shutil.which("notify-send"):
        return ["notify-send", title, body]
    return None


def send_notification(title: str, body: str) -> bool:
    """Show a desktop notification. Returns whether it was delivered."""
    command = notifier_command(title, body)
    if command is None:
        logger.debug("No desktop notifier available, skipping notification `%s`", title)
        return False
    try:
        subprocess.run(command, check=True, capture_output=True, timeout=NOTIFY_TIMEOUT)
    except (OSError, subprocess.SubprocessError) as e:
        logger.warning("Desktop notification failed: %s", e)
        return False
    return True


__all__ = ["notifier_command", "send_notification"]
