"""
Tests for Diagnostics Sinks and the Trace Logger.
"""

import json
import logging

from rich.console import Console

from enterprise_conventions.core.declarations import ClassDeclaration, FieldDeclaration
from enterprise_conventions.core.diagnostics import CollectingDiagnostics, LoggingDiagnostics
from enterprise_conventions.core.tracer import TraceEventType, TraceLogger
from enterprise_conventions.utils.console import LOGGER_NAME, log_debug, reset_console, set_console


def test_collecting_sink_keeps_order():
  sink = CollectingDiagnostics()
  cls = ClassDeclaration("a.B")
  field_decl = FieldDeclaration("a.B.f")

  sink.report("first", cls)
  sink.report("second", field_decl)

  assert sink.messages == ["first", "second"]
  assert [r.declaration for r in sink] == [cls, field_decl]
  assert len(sink) == 2

  sink.clear()
  assert len(sink) == 0


def test_logging_sink_emits_error(caplog):
  # The package logger does not propagate, so capture on it directly.
  package_logger = logging.getLogger(LOGGER_NAME)
  package_logger.addHandler(caplog.handler)
  try:
    with caplog.at_level(logging.ERROR, logger=LOGGER_NAME):
      LoggingDiagnostics().report("Untyped fields are not allowed.", FieldDeclaration("a.B.count"))
  finally:
    package_logger.removeHandler(caplog.handler)

  assert len(caplog.records) == 1
  record = caplog.records[0]
  assert record.levelno == logging.ERROR
  assert "a.B.count" in record.getMessage()
  assert "Untyped fields are not allowed." in record.getMessage()


def test_logging_sink_escapes_markup():
  """
  Scenario: A message contains square brackets (extension lists).
  Expect: Rendered literally, not swallowed as Rich markup.
  """
  buffer_console = Console(record=True, width=200, force_terminal=False)
  set_console(buffer_console)
  try:
    LoggingDiagnostics().report("Compile static extensions are limited to: [A]", ClassDeclaration("a.B"))
    output = buffer_console.export_text()
  finally:
    reset_console()

  assert "limited to: [A]" in output
  assert "a.B" in output


def test_trace_export_is_json_serializable():
  tracer = TraceLogger()
  unit_id = tracer.start_unit("Service.groovy")
  tracer.log_injection("a.B", ["A"], unit_id)
  tracer.log_violation("a.B.f", "untyped_not_allowed", "Untyped fields are not allowed.", unit_id)

  exported = tracer.export()

  assert [e["type"] for e in exported] == [
    TraceEventType.UNIT_START,
    TraceEventType.DIRECTIVE_INJECTED,
    TraceEventType.VIOLATION,
  ]
  assert exported[1]["parent_id"] == unit_id
  assert exported[1]["metadata"] == {"extensions": ["A"]}
  json.dumps(exported)


def test_disabled_trace_keeps_nothing():
  tracer = TraceLogger(enabled=False)
  unit_id = tracer.start_unit("Service.groovy")
  tracer.log_injection("a.B", None, unit_id)

  assert unit_id
  assert tracer.export() == []


def test_package_logger_follows_root_level():
  """
  Scenario: The host lowers the root logger to DEBUG.
  Expect: Debug details reach the package console once, without propagating to root handlers.
  """
  package_logger = logging.getLogger(LOGGER_NAME)
  root = logging.getLogger()
  previous = root.level
  buffer_console = Console(record=True, width=200, force_terminal=False)
  set_console(buffer_console)
  root.setLevel(logging.DEBUG)
  try:
    log_debug("Conventions lookup failed, using defaults: boom")
    output = buffer_console.export_text()
  finally:
    root.setLevel(previous)
    reset_console()

  assert package_logger.level == logging.NOTSET
  assert package_logger.propagate is False
  assert output.count("using defaults: boom") == 1


def test_reports_are_hashable():
  sink = CollectingDiagnostics()
  field_decl = FieldDeclaration("a.B.f")
  sink.report("Untyped fields are not allowed.", field_decl)
  sink.report("Untyped fields are not allowed.", field_decl)
  sink.report("Untyped fields are not allowed.", FieldDeclaration("a.B.f"))

  assert len(set(sink)) == 2
