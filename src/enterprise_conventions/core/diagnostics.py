"""
Diagnostics Sinks.

The engine reports every policy violation as a message tied to the offending
declaration. Reporting is fire-and-forget: the engine never inspects the
sink's return value or how many reports it already holds.
"""

from dataclasses import dataclass
from typing import Iterator, List, Protocol

from rich.markup import escape

from enterprise_conventions.core.declarations import Declaration
from enterprise_conventions.utils.console import log_error


class Diagnostics(Protocol):
  """Accepts violation reports."""

  def report(self, message: str, decl: Declaration) -> None: ...


@dataclass(frozen=True)
class Report:
  message: str
  declaration: Declaration


class CollectingDiagnostics:
  """
  Stores reports in memory so a host can surface them after the pass.

  Attributes:
      reports (List[Report]): Reports in the order they were received.
  """

  def __init__(self):
    self.reports: List[Report] = []

  def report(self, message: str, decl: Declaration) -> None:
    self.reports.append(Report(message, decl))

  @property
  def messages(self) -> List[str]:
    return [r.message for r in self.reports]

  def clear(self) -> None:
    self.reports.clear()

  def __len__(self) -> int:
    return len(self.reports)

  def __iter__(self) -> Iterator[Report]:
    return iter(self.reports)


class LoggingDiagnostics:
  """
  Emits each report as an error line through the package logger.
  """

  def report(self, message: str, decl: Declaration) -> None:
    log_error(f"[code]{escape(decl.name)}[/code] ({decl.kind.value}): {escape(message)}")
