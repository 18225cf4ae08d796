"""
Tests for the Extension Inspector.
"""

from enterprise_conventions.core.declarations import ClassDeclaration, Directive, MethodDeclaration
from enterprise_conventions.core.extensions import disallowed_extensions, has_disallowed_extensions
from enterprise_conventions.enums import DirectiveKind


def test_no_static_directive_never_fails():
  decl = ClassDeclaration("a.B", directives=[Directive.named("Deprecated", extensions=["X"])])
  assert not has_disallowed_extensions(decl, {"A"})


def test_extension_outside_allowed_set():
  decl = ClassDeclaration("a.B", directives=[Directive.compile_static(["A", "B"])])
  assert has_disallowed_extensions(decl, {"A"})
  assert disallowed_extensions(decl, {"A"}) == ["B"]


def test_all_extensions_allowed():
  decl = ClassDeclaration("a.B", directives=[Directive.compile_static(["A"])])
  assert not has_disallowed_extensions(decl, {"A"})
  assert disallowed_extensions(decl, {"A"}) == []


def test_directive_without_extensions_passes_empty_allowed_set():
  decl = MethodDeclaration("a.B.m", directives=[Directive.compile_static([])])
  assert not has_disallowed_extensions(decl, set())


def test_malformed_argument_counts_as_no_extensions():
  decl = ClassDeclaration("a.B", directives=[Directive("CompileStatic", DirectiveKind.STATIC, extensions=42)])
  assert not has_disallowed_extensions(decl, set())


def test_each_static_directive_is_inspected():
  """
  Scenario: Two static directives, only the second uses an unapproved extension.
  Expect: The declaration fails.
  """
  decl = MethodDeclaration(
    "a.B.m",
    directives=[Directive.compile_static(["A"]), Directive.named("CompileStatic", extensions=["C", "C"])],
  )
  assert has_disallowed_extensions(decl, ("A",))
  assert disallowed_extensions(decl, ("A",)) == ["C"]


def test_dynamic_directive_extensions_are_ignored():
  decl = ClassDeclaration("a.B", directives=[Directive("CompileDynamic", DirectiveKind.DYNAMIC, ["Z"])])
  assert not has_disallowed_extensions(decl, set())
