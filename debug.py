# debug.py
from __future__ import annotations
import logging

COMPONENTS = ("config", "plugboard", "stepping", "encipher")
LOG_FORMAT = "[%(asctime)s] [%(levelname)s] [%(name)s]: %(message)s"


def configure_logging(log_to: str | None = None) -> None:
    """Send "enigma" records to stderr, and also to `log_to` when given.

    Calling again replaces the handlers installed by the previous call.
    """
    logger = logging.getLogger("enigma")
    for old in list(logger.handlers):
        logger.removeHandler(old)
        old.close()

    handlers: list[logging.Handler] = [logging.StreamHandler()]
    if log_to:
        handlers.append(logging.FileHandler(log_to, encoding="utf-8"))

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False


class Debug:
    """Trace switches for one run, handed to the calls that should trace.

    Each component in COMPONENTS is either on or off; `mute` silences all
    of them without forgetting which were on.
    """

    def __init__(self, *components: str) -> None:
        self.logger = logging.getLogger("enigma")
        self.muted = False
        self.on: set[str] = set()
        self.enable(*components)

    def active(self, component: str) -> bool:
        return not self.muted and component in self.on

    def log(self, component: str, message: str) -> None:
        if self.active(component):
            self.logger.debug("[%s] %s", component.upper(), message)

    def enable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.on.add(c)

    def disable(self, *components: str) -> None:
        for c in components:
            self._require(c)
            self.on.discard(c)

    def mute(self, state: bool = True) -> None:
        self.muted = state

    def _require(self, component: str) -> None:
        if component not in COMPONENTS:
            raise ValueError(f"No such component: {component!r}")

    def __repr__(self) -> str:
        on = [c for c in COMPONENTS if c in self.on]
        return f"<Debug muted={self.muted} on={on}>"
