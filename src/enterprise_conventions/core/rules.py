"""
Enforcement Rules.

The four independently togglable checks, evaluated per declaration kind:

1.  **Dynamic-compile ban** (class, method): reports declarations carrying the
    explicitly-dynamic directive when dynamic compilation is disabled.
2.  **Extension limiting** (class, method): reports static directives that use
    extensions outside the allowed set.
3.  **Untyped ban** (field, method return, parameter): reports declarations
    without an explicit type when untyped declarations are not allowed.
4.  **Default-package skip**: applied by the walker before any rule runs.

Rules are independent: one declaration may produce several violations in a
single pass. A violation is a report, never a control-flow signal.
"""

from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Tuple

from enterprise_conventions.config import PolicyConfig
from enterprise_conventions.core.declarations import Declaration
from enterprise_conventions.core.extensions import disallowed_extensions, has_disallowed_extensions
from enterprise_conventions.enums import DeclarationKind, DirectiveKind, ViolationKind

_UNTYPED_MESSAGES: Dict[DeclarationKind, str] = {
  DeclarationKind.FIELD: "Untyped fields are not allowed.",
  DeclarationKind.METHOD: "Untyped method return types are not allowed.",
  DeclarationKind.PARAMETER: "Untyped parameters are not allowed.",
}


@dataclass(frozen=True)
class Violation:
  """
  A single policy violation tied to the offending declaration.

  Attributes:
      kind (ViolationKind): Which rule fired.
      declaration (Declaration): The offending node.
      allowed (Tuple[str, ...]): Allowed extensions (EXTENSIONS_LIMITED only).
      offending (Tuple[str, ...]): Extensions outside the allowed set (EXTENSIONS_LIMITED only).
      untyped_kind (Optional[DeclarationKind]): Field, method or parameter (UNTYPED_NOT_ALLOWED only).
          Defaults to the kind of the declaration.
  """

  kind: ViolationKind
  declaration: Declaration
  allowed: Tuple[str, ...] = ()
  offending: Tuple[str, ...] = ()
  untyped_kind: Optional[DeclarationKind] = None

  @property
  def message(self) -> str:
    if self.kind == ViolationKind.DYNAMIC_COMPILE_DISALLOWED:
      return f"Dynamic compilation is not allowed for this {self.declaration.kind.value}."
    if self.kind == ViolationKind.EXTENSIONS_LIMITED:
      return f"Compile static extensions are limited to: [{', '.join(self.allowed)}]"
    untyped_kind = self.untyped_kind or self.declaration.kind
    return _UNTYPED_MESSAGES.get(untyped_kind, f"Untyped {untyped_kind.value}s are not allowed.")


def _check_directives(decl: Declaration, config: PolicyConfig, whitelisted: bool) -> List[Violation]:
  violations = []

  if config.disable_dynamic_compile and not whitelisted and decl.has_directive(DirectiveKind.DYNAMIC):
    violations.append(Violation(ViolationKind.DYNAMIC_COMPILE_DISALLOWED, decl))

  if config.limit_extensions and has_disallowed_extensions(decl, config.allowed_extensions):
    violations.append(
      Violation(
        ViolationKind.EXTENSIONS_LIMITED,
        decl,
        allowed=config.allowed_extensions,
        offending=tuple(disallowed_extensions(decl, config.allowed_extensions)),
      )
    )

  return violations


def _check_untyped(decl: Declaration, config: PolicyConfig) -> List[Violation]:
  if not config.untyped_allowed and getattr(decl, "untyped", False):
    return [Violation(ViolationKind.UNTYPED_NOT_ALLOWED, decl, untyped_kind=decl.kind)]
  return []


def _class_rules(decl: Declaration, config: PolicyConfig, whitelisted: bool) -> List[Violation]:
  return _check_directives(decl, config, whitelisted)


def _method_rules(decl: Declaration, config: PolicyConfig, whitelisted: bool) -> List[Violation]:
  # Untyped return is reported before the directive checks.
  return _check_untyped(decl, config) + _check_directives(decl, config, whitelisted)


def _member_rules(decl: Declaration, config: PolicyConfig, whitelisted: bool) -> List[Violation]:
  return _check_untyped(decl, config)


_RULES: Dict[DeclarationKind, Callable[[Declaration, PolicyConfig, bool], List[Violation]]] = {
  DeclarationKind.CLASS: _class_rules,
  DeclarationKind.METHOD: _method_rules,
  DeclarationKind.FIELD: _member_rules,
  DeclarationKind.PARAMETER: _member_rules,
}


def check_declaration(decl: Declaration, config: PolicyConfig, whitelisted: bool = False) -> List[Violation]:
  """
  Evaluates every rule that applies to the declaration's kind.

  Args:
      decl (Declaration): The node to check.
      config (PolicyConfig): The active policy.
      whitelisted (bool): Whitelist status of the owning class. Exempts the
          node from the dynamic-compile ban.

  Returns:
      List[Violation]: One entry per rule that fired, in rule order.
  """
  return _RULES[decl.kind](decl, config, whitelisted)
