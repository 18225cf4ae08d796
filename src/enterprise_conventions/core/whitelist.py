"""
Whitelist matching for enforcement exemptions.
"""

from typing import Iterable

from enterprise_conventions.core.declarations import Declaration


def is_whitelisted(decl: Declaration, whitelist: Iterable[str]) -> bool:
  """
  Checks whether a declaration is exempt from enforcement.

  Matching is by substring against the qualified name, not exact or prefix
  match: the entry 'acme' exempts 'com.acme.Foo', and 'Foo' also exempts
  'FooBar' and 'NotFoo'. An empty entry matches every name.

  Args:
      decl (Declaration): The declaration to check.
      whitelist (Iterable[str]): Configured name fragments.

  Returns:
      bool: True if any entry occurs in the qualified name.
  """
  return any(entry in decl.name for entry in whitelist)
