"""
Declaration Walker.

Traverses the classes of one compilation unit and, for each class that is
neither whitelisted nor skipped by the default-package rule:

1.  **Injection**: adds the static-typing directive unless the class already
    carries the static or the explicitly-dynamic directive.
2.  **Enforcement**: runs the rules on the class, then its fields, then its
    methods and each method's parameters, all in declaration order.

Traversal covers exactly these four declaration kinds. Nested or anonymous
types are only visited if the tree already lists them as top-level classes.
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from enterprise_conventions.config import PolicyConfig
from enterprise_conventions.core.declarations import ClassDeclaration, CompilationUnit, Declaration
from enterprise_conventions.core.diagnostics import Diagnostics
from enterprise_conventions.core.rules import Violation, check_declaration
from enterprise_conventions.core.tracer import TraceLogger
from enterprise_conventions.core.whitelist import is_whitelisted
from enterprise_conventions.enums import DirectiveKind


class WalkResult(BaseModel):
  """
  Summary of one pass over a compilation unit.
  """

  unit: str = Field(default="", description="Name of the processed unit.")
  excluded: bool = Field(default=False, description="True if the unit was excluded before walking.")
  skipped_classes: List[str] = Field(default_factory=list, description="Classes left untouched.")
  injected_classes: List[str] = Field(default_factory=list, description="Classes that gained the static directive.")
  reported: int = Field(default=0, description="Number of violations sent to the diagnostics sink.")


class DeclarationWalker:
  """
  Applies injection and enforcement to the classes of a unit.

  Attributes:
      config (PolicyConfig): The active policy.
      diagnostics (Diagnostics): Sink receiving violation reports.
      tracer (TraceLogger): Decision recorder. Disabled unless one is passed in.
  """

  def __init__(self, config: PolicyConfig, diagnostics: Diagnostics, tracer: Optional[TraceLogger] = None):
    self.config = config
    self.diagnostics = diagnostics
    self.tracer = tracer if tracer is not None else TraceLogger(enabled=False)
    self._reported = 0
    self._unit_id: Optional[str] = None

  def skip_reason(self, cls: ClassDeclaration) -> Optional[str]:
    """
    Determines why a class is exempt from the walk, if it is.

    Args:
        cls (ClassDeclaration): The class to check.

    Returns:
        Optional[str]: 'whitelist', 'default_package', or None if the class is walked.
    """
    if is_whitelisted(cls, self.config.dynamic_compile_whitelist):
      return "whitelist"
    if self.config.skip_default_package and cls.in_default_package:
      return "default_package"
    return None

  def should_skip(self, cls: ClassDeclaration) -> bool:
    return self.skip_reason(cls) is not None

  def inject(self, cls: ClassDeclaration) -> bool:
    """
    Adds the static-typing directive unless the class opted out.

    Both the static and the dynamic directive count as an opt-out, so running
    the walker again over an injected class adds nothing.

    Args:
        cls (ClassDeclaration): The class to modify.

    Returns:
        bool: True if a directive was added.
    """
    if cls.has_directive(DirectiveKind.STATIC, DirectiveKind.DYNAMIC):
      return False

    directive = self.config.static_directive()
    cls.add_directive(directive)
    self.tracer.log_injection(cls.name, directive.extensions, self._unit_id)
    return True

  def enforce(self, cls: ClassDeclaration) -> None:
    """
    Runs the enforcement rules over the class and its members.

    Skipped entirely when no rule is in its restrictive state.

    Args:
        cls (ClassDeclaration): The class to check.
    """
    if not self.config.enforcement_enabled:
      return

    whitelisted = is_whitelisted(cls, self.config.dynamic_compile_whitelist)

    self._check(cls, whitelisted)
    for field_decl in cls.fields:
      self._check(field_decl, whitelisted)
    for method in cls.methods:
      self._check(method, whitelisted)
      for parameter in method.parameters:
        self._check(parameter, whitelisted)

  def walk(self, unit: CompilationUnit) -> WalkResult:
    """
    Processes every class of the unit in source order.

    Args:
        unit (CompilationUnit): The unit to process.

    Returns:
        WalkResult: Names of skipped and injected classes, and the report count.
    """
    result = WalkResult(unit=unit.name)
    self._reported = 0
    self._unit_id = self.tracer.start_unit(unit.name)

    for cls in unit.classes:
      reason = self.skip_reason(cls)
      if reason:
        self.tracer.log_class_skipped(cls.name, reason, self._unit_id)
        result.skipped_classes.append(cls.name)
        continue

      if self.inject(cls):
        result.injected_classes.append(cls.name)

      self.enforce(cls)

    result.reported = self._reported
    return result

  def _check(self, decl: Declaration, whitelisted: bool) -> None:
    for violation in check_declaration(decl, self.config, whitelisted):
      self._report(violation)

  def _report(self, violation: Violation) -> None:
    self.diagnostics.report(violation.message, violation.declaration)
    self.tracer.log_violation(violation.declaration.name, violation.kind.value, violation.message, self._unit_id)
    self._reported += 1
