"""
Central Logging and Console Utilities.

This module unifies the package's output using the Python standard `logging`
library, backed by `rich` for formatting.

It serves two purposes:
1.  **Standard Logging Integration**: Provides adapter functions
    (`log_debug`, `log_error`) that route to standard logging channels.
2.  **Console Injection**: A proxy around the Rich Console whose backend can be
    swapped at runtime via `set_console`, so a host build tool can capture
    diagnostics in a buffer instead of stdout.

Attributes:
    console (_ConsoleProxy): A global, stable reference to the active Rich Console.
"""

import logging
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.theme import Theme

LOGGER_NAME = "enterprise_conventions"

_THEME = Theme(
  {
    "error": "bold red",
    "code": "bold magenta",
  }
)

logger = logging.getLogger(LOGGER_NAME)


class _ConsoleProxy:
  """
  A Proxy wrapper around `rich.console.Console`.

  All printing operations are forwarded to the active backend. When the
  backend changes, the package logger's handler is rebuilt so that log
  records follow the new destination.

  Attributes:
      _backend (Console): The active Rich Console instance.
  """

  def __init__(self) -> None:
    self._backend: Console = Console(theme=_THEME)
    self._configure_logging()

  def set_backend(self, new_console: Console) -> None:
    """
    Injects a new Console backend and updates logging handlers.

    Args:
        new_console (Console): The new Rich Console instance to use.
    """
    self._backend = new_console
    self._configure_logging()

  def reset(self) -> None:
    self._backend = Console(theme=_THEME)
    self._configure_logging()

  @property
  def backend(self) -> Console:
    return self._backend

  def _configure_logging(self) -> None:
    """
    Attaches a RichHandler bound to the current backend to the package logger.

    Only the package logger is touched. It does not propagate, so a host that
    configured the root logger sees each record once, and its level is left
    unset so the root logger's level decides what is shown.
    """
    for handler in list(logger.handlers):
      if isinstance(handler, RichHandler):
        logger.removeHandler(handler)

    rich_handler = RichHandler(
      console=self._backend,
      show_time=False,
      omit_repeated_times=False,
      show_path=False,
      markup=True,
      rich_tracebacks=True,
    )

    logger.propagate = False
    logger.addHandler(rich_handler)

  def __getattr__(self, name: str) -> Any:
    return getattr(self._backend, name)


# Modules import this 'console' object. The underlying implementation
# can be changed via 'set_console'.
console = _ConsoleProxy()


def set_console(new_console: Console) -> None:
  """
  Global helper to inject a specific console instance.

  Args:
      new_console (Console): The configured Rich console to use.
  """
  console.set_backend(new_console)


def reset_console() -> None:
  console.reset()


def log_debug(msg: str) -> None:
  """
  Logs a diagnostic detail, without markup parsing.

  Args:
      msg (str): The message content.
  """
  logger.debug(msg, extra={"markup": False})


def log_error(msg: str) -> None:
  """
  Logs an error message.

  Args:
      msg (str): The message content.
  """
  logger.error(f"❌ {msg}", extra={"markup": True})
