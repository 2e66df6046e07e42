"""Step-based progress reporting for the build pipeline."""

from collections.abc import Callable
from dataclasses import dataclass, field

from bref_deploy.logging import get_logger

logger = get_logger(__name__)

ProgressListener = Callable[["Progress"], None]


@dataclass
class Progress:
    """Monotonic step counter with the message of the step in progress.

    The pipeline never reads the state back; listeners receive the tracker
    after every change so a front end can render it.
    """

    total: int
    current: int = 0
    message: str = ""
    listeners: list[ProgressListener] = field(default_factory=list)

    def set_message(self, message: str) -> None:
        self.message = message
        logger.info("[%d/%d] %s", self.current, self.total, message)
        self._notify()

    def advance(self, steps: int = 1) -> None:
        self.current = min(self.total, self.current + steps)
        self._notify()

    def finish(self) -> None:
        self.current = self.total
        self._notify()

    @property
    def fraction(self) -> float:
        return self.current / self.total if self.total else 1.0

    def _notify(self) -> None:
        for listener in self.listeners:
            listener(self)


__all__ = ["Progress", "ProgressListener"]
