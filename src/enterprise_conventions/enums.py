"""
Enumerations for enterprise-conventions.

This module defines the standard enumerations used across the codebase for
declaration categorization, directive recognition and violation reporting.
"""

from enum import Enum


class DeclarationKind(str, Enum):
  """
  The four node kinds the walker visits.
  """

  CLASS = "class"
  FIELD = "field"
  METHOD = "method"
  PARAMETER = "parameter"


class DirectiveKind(str, Enum):
  """
  Categorization of directive annotations attached to a declaration.

  Only the first two members take part in policy decisions; every other
  annotation is carried along as ``OTHER``.
  """

  STATIC = "compile_static"  # Already statically typed, do nothing
  DYNAMIC = "compile_dynamic"  # Explicitly dynamic, must not be overridden
  OTHER = "other"


class ViolationKind(str, Enum):
  """
  Policy violations reported through the diagnostics sink.
  """

  DYNAMIC_COMPILE_DISALLOWED = "dynamic_compile_disallowed"
  EXTENSIONS_LIMITED = "extensions_limited"
  UNTYPED_NOT_ALLOWED = "untyped_not_allowed"
