"""
Enforcement Trace Logger.

This module records the decisions the engine takes while processing units:
1. Configuration initialisation (once per engine).
2. Skipped units and classes (script units, whitelist, default package).
3. Directive injection.
4. Reported violations.

The output is a structured list of event dictionaries suitable for JSON
serialization. A logger belongs to one engine; there is no global instance.
A disabled logger hands out event IDs but keeps nothing, so an engine that
lives for a whole build does not accumulate history by default.
"""

import time
import uuid
from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TraceEventType(str, Enum):
  CONFIG_INIT = "config_init"
  UNIT_START = "unit_start"
  UNIT_SKIPPED = "unit_skipped"
  CLASS_SKIPPED = "class_skipped"
  DIRECTIVE_INJECTED = "directive_injected"
  VIOLATION = "violation"


@dataclass
class TraceEvent:
  id: str
  type: TraceEventType
  timestamp: float
  description: str
  parent_id: Optional[str] = None
  metadata: Dict[str, Any] = field(default_factory=dict)


class TraceLogger:
  """
  Records enforcement events. Events belonging to a unit carry the ID of
  that unit's start event as their parent.

  Attributes:
      enabled (bool): Whether events are stored.
  """

  def __init__(self, enabled: bool = True):
    self.enabled = enabled
    self._events: List[TraceEvent] = []

  def start_unit(self, name: str) -> str:
    """Starts recording a compilation unit. Returns the unit event ID."""
    return self._log(TraceEventType.UNIT_START, name, {})

  def log_config(self, config: Dict[str, Any], found: bool) -> None:
    self._log(TraceEventType.CONFIG_INIT, "Policy configuration initialised", {"found": found, "config": config})

  def log_unit_skipped(self, name: str) -> None:
    self._log(TraceEventType.UNIT_SKIPPED, f"Skipped unit '{name}'", {})

  def log_class_skipped(self, name: str, reason: str, parent_id: Optional[str] = None) -> None:
    self._log(TraceEventType.CLASS_SKIPPED, f"Skipped class '{name}'", {"reason": reason}, parent_id)

  def log_injection(self, name: str, extensions: Optional[List[str]], parent_id: Optional[str] = None) -> None:
    self._log(
      TraceEventType.DIRECTIVE_INJECTED,
      f"Injected static directive into '{name}'",
      {"extensions": extensions},
      parent_id,
    )

  def log_violation(self, name: str, kind: str, message: str, parent_id: Optional[str] = None) -> None:
    self._log(TraceEventType.VIOLATION, message, {"declaration": name, "kind": kind}, parent_id)

  def _log(self, evt_type: TraceEventType, desc: str, meta: Dict[str, Any], parent_id: Optional[str] = None) -> str:
    event_id = str(uuid.uuid4())
    if not self.enabled:
      return event_id
    self._events.append(
      TraceEvent(
        id=event_id,
        type=evt_type,
        timestamp=time.time(),
        description=desc,
        parent_id=parent_id,
        metadata=meta,
      )
    )
    return event_id

  def events_of(self, evt_type: TraceEventType) -> List[TraceEvent]:
    return [e for e in self._events if e.type == evt_type]

  def export(self) -> List[Dict[str, Any]]:
    """Returns list of dicts for JSON serialization."""
    return [asdict(e) for e in self._events]
