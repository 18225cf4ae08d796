"""
Orchestration Engine for Convention Enforcement.

This module provides the `Engine`, the entry point a host build pipeline
calls once per compilation unit. The pipeline for a unit is:

1.  **Exclusion**: Script units (embedded scripts, template scripts, units
    named like ``Script1``) are returned untouched. No configuration lookup
    happens for them.
2.  **Configuration**: On first use the engine asks its `ConfigSource` for the
    policy mapping and freezes the resulting `PolicyConfig`. Every later unit
    reuses that snapshot for the lifetime of the engine.
3.  **Walking**: A `DeclarationWalker` injects the static-typing directive and
    reports violations to the diagnostics sink.

Configuration lookup failures of any kind are swallowed and treated as "no
configuration": a broken conventions file never fails the build.
"""

import threading
from typing import Iterable, Optional, Tuple

from enterprise_conventions.config import ConfigSource, PolicyConfig, StaticConfigSource
from enterprise_conventions.core.declarations import CompilationUnit
from enterprise_conventions.core.diagnostics import Diagnostics, LoggingDiagnostics
from enterprise_conventions.core.tracer import TraceLogger
from enterprise_conventions.core.walker import DeclarationWalker, WalkResult
from enterprise_conventions.utils.console import log_debug

EXCLUDED_UNIT_NAMES: Tuple[str, ...] = ("embedded_script_in_groovy_Ant_task",)
EXCLUDED_UNIT_PREFIXES: Tuple[str, ...] = ("Script", "script", "GStringTemplateScript")


class Engine:
  """
  Holds the one-time policy configuration and drives the walker over units.

  The configuration is built at most once per engine, guarded by a lock so
  that hosts processing units on several threads still initialise it exactly
  once.
  """

  def __init__(
    self,
    config_source: Optional[ConfigSource] = None,
    diagnostics: Optional[Diagnostics] = None,
    tracer: Optional[TraceLogger] = None,
    excluded_unit_names: Iterable[str] = EXCLUDED_UNIT_NAMES,
    excluded_unit_prefixes: Iterable[str] = EXCLUDED_UNIT_PREFIXES,
  ):
    """
    Initializes the Engine.

    Args:
        config_source (ConfigSource, optional): Where the policy mapping comes from.
            Defaults to no configuration (permissive policy).
        diagnostics (Diagnostics, optional): Default sink for violation reports.
            Defaults to logging each report as an error.
        tracer (TraceLogger, optional): Decision recorder. Defaults to a disabled
            logger that records nothing.
        excluded_unit_names (Iterable[str]): Unit names skipped entirely.
        excluded_unit_prefixes (Iterable[str]): Unit name prefixes skipped entirely.
    """
    self.config_source = config_source if config_source is not None else StaticConfigSource()
    self.diagnostics = diagnostics if diagnostics is not None else LoggingDiagnostics()
    self.tracer = tracer if tracer is not None else TraceLogger(enabled=False)
    self.excluded_unit_names = frozenset(excluded_unit_names)
    self.excluded_unit_prefixes = tuple(excluded_unit_prefixes)

    self._config: Optional[PolicyConfig] = None
    self._lock = threading.Lock()

  @property
  def config(self) -> Optional[PolicyConfig]:
    """The frozen policy, or None before the first unit was processed."""
    return self._config

  @property
  def initialized(self) -> bool:
    return self._config is not None

  def ensure_initialized(self, source: Optional[ConfigSource] = None) -> PolicyConfig:
    """
    Builds the policy configuration on first call and returns it thereafter.

    Later calls are no-ops, even when given a different source.

    Args:
        source (ConfigSource, optional): Overrides the engine's source for the first call.

    Returns:
        PolicyConfig: The process-lifetime configuration.
    """
    config = self._config
    if config is not None:
      return config

    with self._lock:
      if self._config is None:
        raw = self._lookup(source if source is not None else self.config_source)
        self._config = PolicyConfig.from_raw(raw)
        self.tracer.log_config(self._config.model_dump(), found=raw is not None)
        log_debug(f"Policy configuration initialised (found={raw is not None}): {self._config!r}")
      return self._config

  def is_excluded_unit(self, name: str) -> bool:
    """
    Checks whether a unit is a script body or template wrapper.

    Args:
        name (str): The compilation unit name.

    Returns:
        bool: True if the unit must not be touched.
    """
    return name in self.excluded_unit_names or name.startswith(self.excluded_unit_prefixes)

  def visit(self, unit: CompilationUnit, diagnostics: Optional[Diagnostics] = None) -> WalkResult:
    """
    Applies injection and enforcement to one compilation unit.

    Args:
        unit (CompilationUnit): The unit to process. Classes are modified in place.
        diagnostics (Diagnostics, optional): Sink for this unit. Defaults to the engine's sink.

    Returns:
        WalkResult: Summary of what happened to the unit.
    """
    if self.is_excluded_unit(unit.name):
      self.tracer.log_unit_skipped(unit.name)
      return WalkResult(unit=unit.name, excluded=True)

    config = self.ensure_initialized()
    sink = diagnostics if diagnostics is not None else self.diagnostics
    walker = DeclarationWalker(config, sink, self.tracer)
    return walker.walk(unit)

  @staticmethod
  def _lookup(source: ConfigSource):
    try:
      return source.lookup()
    except Exception as e:
      log_debug(f"Conventions lookup failed, using defaults: {e}")
      return None
