"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- A collecting diagnostics sink.
- Factories for small declaration trees and policy configurations.
"""

import sys
import pytest
from pathlib import Path
from typing import Any, List, Optional

# Add src to path so we can import 'enterprise_conventions' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from enterprise_conventions.config import PolicyConfig
from enterprise_conventions.core.declarations import (
  ClassDeclaration,
  CompilationUnit,
  Directive,
  FieldDeclaration,
  MethodDeclaration,
  ParameterDeclaration,
)
from enterprise_conventions.core.diagnostics import CollectingDiagnostics


@pytest.fixture
def sink() -> CollectingDiagnostics:
  return CollectingDiagnostics()


@pytest.fixture
def policy():
  """
  Factory building a PolicyConfig from camelCase keys, as a conventions file would.
  """

  def _build(**raw: Any) -> PolicyConfig:
    return PolicyConfig.from_raw(raw)

  return _build


def build_service_class(
  name: str = "com.acme.Service",
  package: Optional[str] = "com.acme",
  directives: Optional[List[Directive]] = None,
  untyped: bool = False,
) -> ClassDeclaration:
  """
  Builds a class with one field, one method and one parameter.

  Args:
      name: Qualified class name.
      package: Package name (None for the default package).
      directives: Class directives.
      untyped: Marks the field, method return and parameter as untyped.
  """
  return ClassDeclaration(
    name=name,
    package=package,
    directives=list(directives or []),
    fields=[FieldDeclaration(f"{name}.count", untyped=untyped)],
    methods=[
      MethodDeclaration(
        f"{name}.handle",
        untyped=untyped,
        parameters=[ParameterDeclaration("request", untyped=untyped)],
      )
    ],
  )


@pytest.fixture
def service_class():
  return build_service_class


@pytest.fixture
def unit_of():
  def _unit(*classes: ClassDeclaration, name: str = "Service.groovy") -> CompilationUnit:
    return CompilationUnit(name=name, classes=list(classes))

  return _unit
