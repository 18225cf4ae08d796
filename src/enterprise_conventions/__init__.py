"""
enterprise-conventions Package.

A project-wide static-typing policy engine. It walks a tree of class, field,
method and parameter declarations, injects a "compile statically" directive
into every class that has not opted out, and reports policy violations
(dynamic compilation, unapproved extensions, untyped declarations).

Usage
-----

One-shot Enforcement
^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    import enterprise_conventions as ec
    from enterprise_conventions.core.declarations import ClassDeclaration, CompilationUnit

    unit = CompilationUnit("Service.groovy", [ClassDeclaration("com.acme.Service", package="com.acme")])
    sink = ec.CollectingDiagnostics()
    ec.enforce(unit, config={"defAllowed": False}, diagnostics=sink)

Build Integration (Engine)
^^^^^^^^^^^^^^^^^^^^^^^^^^

.. code-block:: python

    from enterprise_conventions import ConventionsFileSource, Engine

    engine = Engine(config_source=ConventionsFileSource("/work/project/build/classes"))
    for unit in units:
      engine.visit(unit)
"""

from typing import Any, Mapping, Optional

from enterprise_conventions.config import (
  ConventionsFileSource,
  PolicyConfig,
  PyprojectConfigSource,
  StaticConfigSource,
)
from enterprise_conventions.core.diagnostics import CollectingDiagnostics, Diagnostics, LoggingDiagnostics
from enterprise_conventions.core.declarations import CompilationUnit
from enterprise_conventions.core.engine import Engine
from enterprise_conventions.core.walker import WalkResult

__version__ = "0.0.1"


def enforce(
  unit: CompilationUnit,
  config: Optional[Mapping[str, Any]] = None,
  diagnostics: Optional[Diagnostics] = None,
) -> WalkResult:
  """
  Runs injection and enforcement over a single unit with a throwaway engine.

  For build integration, keep one `Engine` for the whole build so the
  configuration is resolved only once.

  Args:
      unit (CompilationUnit): The unit to process. Classes are modified in place.
      config (Mapping, optional): Raw conventions mapping (camelCase keys). None means defaults.
      diagnostics (Diagnostics, optional): Sink for violation reports. Defaults to logging.

  Returns:
      WalkResult: Summary of the pass.
  """
  engine = Engine(config_source=StaticConfigSource(config), diagnostics=diagnostics)
  return engine.visit(unit)


__all__ = [
  "enforce",
  "Engine",
  "PolicyConfig",
  "StaticConfigSource",
  "ConventionsFileSource",
  "PyprojectConfigSource",
  "CollectingDiagnostics",
  "LoggingDiagnostics",
  "WalkResult",
  "__version__",
]
