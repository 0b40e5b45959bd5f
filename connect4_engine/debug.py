"""
debug.py - Levelled logging for the Connect Four engine

Engine modules log through the shared ``debug`` instance with a component
tag ("board", "rules", "ai", "session", "env", "cli"). Output goes to the
``connect4_engine`` logger from the standard logging module, so callers can
also attach their own handlers.
"""

import logging
import sys
import time
from enum import Enum
from typing import Dict, Iterable, Optional, Set

LOGGER_NAME = "connect4_engine"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class DebugLevel(Enum):
    NONE = 0
    ERROR = 1
    WARNING = 2
    INFO = 3
    DEBUG = 4
    TRACE = 5

    @property
    def logging_level(self) -> int:
        # TRACE shares DEBUG; the message carries a "TRACE:" prefix instead.
        return _LOGGING_LEVELS[self]


_LOGGING_LEVELS = {
    DebugLevel.NONE: logging.CRITICAL + 10,
    DebugLevel.ERROR: logging.ERROR,
    DebugLevel.WARNING: logging.WARNING,
    DebugLevel.INFO: logging.INFO,
    DebugLevel.DEBUG: logging.DEBUG,
    DebugLevel.TRACE: logging.DEBUG,
}


def _console_handler(logger: logging.Logger) -> None:
    """Attach one stdout handler to ``logger`` unless it already has it."""
    if any(getattr(h, "_connect4_console", False) for h in logger.handlers):
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S'))
    handler._connect4_console = True
    logger.addHandler(handler)


class DebugManager:
    """
    Filters engine log messages by level and component.

    Creating a manager does not touch the shared logger's level; only
    ``configure`` does.
    """

    def __init__(self, level: DebugLevel = DebugLevel.WARNING):
        self._level = level
        self._enabled = True
        self._components: Set[str] = set()  # empty means every component
        self._timers: Dict[str, float] = {}
        self._logger = logging.getLogger(LOGGER_NAME)
        _console_handler(self._logger)

    @property
    def level(self) -> DebugLevel:
        return self._level

    def configure(self, level: Optional[DebugLevel] = None,
                  enabled: Optional[bool] = None,
                  log_file: Optional[str] = None,
                  components: Optional[Iterable[str]] = None) -> None:
        """
        Change logging settings; arguments left as None are untouched.

        Args:
            level: Most verbose level that is still emitted
            enabled: Master switch
            log_file: Also write to this file; an empty string stops file logging
            components: Only emit messages tagged with these components
        """
        if level is not None:
            self._level = level
            self._logger.setLevel(level.logging_level)
        if enabled is not None:
            self._enabled = enabled
        if log_file is not None:
            self._set_log_file(log_file)
        if components is not None:
            self._components = set(components)

    def _set_log_file(self, path: str) -> None:
        for handler in [h for h in self._logger.handlers if isinstance(h, logging.FileHandler)]:
            self._logger.removeHandler(handler)
            handler.close()
        if path:
            handler = logging.FileHandler(path)
            handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt='%Y-%m-%d %H:%M:%S'))
            self._logger.addHandler(handler)

    def enabled_for(self, level: DebugLevel, component: Optional[str] = None) -> bool:
        if not self._enabled or self._level == DebugLevel.NONE or level.value > self._level.value:
            return False
        return not (component and self._components and component not in self._components)

    def log(self, level: DebugLevel, message: str, component: Optional[str] = None) -> None:
        """Emit ``message`` at ``level`` if the current settings allow it."""
        if level == DebugLevel.NONE or not self.enabled_for(level, component):
            return
        if component:
            message = f"[{component}] {message}"
        if level == DebugLevel.TRACE:
            message = f"TRACE: {message}"
        self._logger.log(level.logging_level, message)

    def error(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.ERROR, message, component)

    def warning(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.WARNING, message, component)

    def info(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.INFO, message, component)

    def debug(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.DEBUG, message, component)

    def trace(self, message: str, component: Optional[str] = None) -> None:
        self.log(DebugLevel.TRACE, message, component)

    def start_timer(self, name: str) -> None:
        self._timers[name] = time.perf_counter()

    def end_timer(self, name: str, component: Optional[str] = None) -> Optional[float]:
        """
        Stop the named timer.

        Returns:
            Seconds since ``start_timer``, or None for an unknown timer
        """
        started = self._timers.pop(name, None)
        if started is None:
            self.warning(f"Timer '{name}' was never started", "debug")
            return None
        elapsed = time.perf_counter() - started
        self.debug(f"{name} took {elapsed:.6f}s", component)
        return elapsed

    def set_from_string(self, name: str) -> bool:
        """Apply a level given by name, as passed on the command line."""
        level = DebugLevel.__members__.get(name.strip().upper())
        if level is None:
            self.warning(f"Unknown debug level: {name}")
            return False
        self.configure(level=level)
        self.info(f"Debug level set to {level.name}")
        return True


debug = DebugManager()
debug.configure(level=DebugLevel.WARNING)
