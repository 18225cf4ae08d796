"""
Extension inspection for static-typing directives.

A static-typing directive may name extensions that widen what the static
checker is allowed to assume. When extension limiting is configured, any
extension outside the allowed set is a violation.
"""

from typing import Collection, List

from enterprise_conventions.core.declarations import Declaration
from enterprise_conventions.enums import DirectiveKind


def disallowed_extensions(decl: Declaration, allowed: Collection[str]) -> List[str]:
  """
  Collects extensions used by the declaration's static directives that are not allowed.

  Args:
      decl (Declaration): The class or method to inspect.
      allowed (Collection[str]): The configured allowed extensions.

  Returns:
      List[str]: Offending extension names, in order of appearance.
  """
  found = []
  for directive in decl.directives_of(DirectiveKind.STATIC):
    for ext in directive.extension_names():
      if ext not in allowed and ext not in found:
        found.append(ext)
  return found


def has_disallowed_extensions(decl: Declaration, allowed: Collection[str]) -> bool:
  """
  Checks whether any static directive on the declaration uses an extension outside ``allowed``.

  Declarations without a static directive, or whose directives carry no
  extensions, never fail. Every static directive is inspected independently.

  Args:
      decl (Declaration): The class or method to inspect.
      allowed (Collection[str]): The configured allowed extensions.

  Returns:
      bool: True if at least one extension is not allowed.
  """
  return any(
    ext not in allowed for directive in decl.directives_of(DirectiveKind.STATIC) for ext in directive.extension_names()
  )
