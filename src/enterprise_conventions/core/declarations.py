"""
Declaration Tree Model.

This module defines the in-memory tree the engine walks. A compilation unit
holds top-level classes; a class owns its fields and methods; a method owns
its parameters. Every node carries an ordered list of directive annotations.

The engine never deletes or renames nodes. The only mutation it performs is
appending a directive to a class (see ``Declaration.add_directive``).
"""

from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, List, Optional

from enterprise_conventions.enums import DeclarationKind, DirectiveKind

# Names recognised as the two compilation-mode markers.
_DIRECTIVE_NAMES: Dict[str, DirectiveKind] = {
  "CompileStatic": DirectiveKind.STATIC,
  "groovy.transform.CompileStatic": DirectiveKind.STATIC,
  "compile_static": DirectiveKind.STATIC,
  "CompileDynamic": DirectiveKind.DYNAMIC,
  "groovy.transform.CompileDynamic": DirectiveKind.DYNAMIC,
  "compile_dynamic": DirectiveKind.DYNAMIC,
}


@dataclass
class Directive:
  """
  A directive annotation attached to a declaration.

  Attributes:
      name (str): The annotation name as written in the tree.
      kind (DirectiveKind): The marker category this annotation belongs to.
      extensions (Any): The raw extension argument. Expected to be a list of
          strings, but may be missing or malformed in hand-built trees.
  """

  name: str
  kind: DirectiveKind = DirectiveKind.OTHER
  extensions: Any = None

  @classmethod
  def named(cls, name: str, extensions: Any = None) -> "Directive":
    """
    Builds a directive, resolving its kind from the annotation name.

    Args:
        name (str): Annotation name (e.g. 'CompileStatic', 'compile_dynamic').
        extensions (Any): Optional extension argument list.

    Returns:
        Directive: The directive with its kind resolved.
    """
    return cls(name=name, kind=_DIRECTIVE_NAMES.get(name, DirectiveKind.OTHER), extensions=extensions)

  @classmethod
  def compile_static(cls, extensions: Optional[List[str]] = None) -> "Directive":
    return cls(name="compile_static", kind=DirectiveKind.STATIC, extensions=extensions)

  @classmethod
  def compile_dynamic(cls) -> "Directive":
    return cls(name="compile_dynamic", kind=DirectiveKind.DYNAMIC)

  def extension_names(self) -> List[str]:
    """
    Returns the extension strings carried by this directive.

    A missing argument, or one that is not a list/tuple, counts as no
    extensions. Non-string entries are ignored.

    Returns:
        List[str]: Extension names in declaration order.
    """
    if not isinstance(self.extensions, (list, tuple)):
      return []
    return [ext for ext in self.extensions if isinstance(ext, str)]


@dataclass(eq=False)
class Declaration:
  """
  Base node for every declaration in the tree.
  Nodes compare and hash by identity: two declarations with the same name
  are still different nodes of the tree.

  Attributes:
      name (str): Qualified name of the declaration.
      directives (List[Directive]): Ordered directive annotations.
  """

  kind: ClassVar[DeclarationKind]

  name: str
  directives: List[Directive] = field(default_factory=list)

  def has_directive(self, *kinds: DirectiveKind) -> bool:
    """
    Checks whether any attached directive belongs to one of ``kinds``.

    Args:
        *kinds: The directive kinds to look for.

    Returns:
        bool: True if at least one directive matches.
    """
    return any(d.kind in kinds for d in self.directives)

  def directives_of(self, kind: DirectiveKind) -> List[Directive]:
    return [d for d in self.directives if d.kind == kind]

  def add_directive(self, directive: Directive) -> None:
    self.directives.append(directive)


@dataclass(eq=False)
class ParameterDeclaration(Declaration):
  """A method parameter. ``untyped`` is set when it has no explicit type."""

  kind: ClassVar[DeclarationKind] = DeclarationKind.PARAMETER

  untyped: bool = False


@dataclass(eq=False)
class FieldDeclaration(Declaration):
  """A class field. ``untyped`` is set when it has no explicit type."""

  kind: ClassVar[DeclarationKind] = DeclarationKind.FIELD

  untyped: bool = False


@dataclass(eq=False)
class MethodDeclaration(Declaration):
  """
  A method owned by a class.

  Attributes:
      untyped (bool): True if the return type is untyped.
      parameters (List[ParameterDeclaration]): Parameters in declaration order.
  """

  kind: ClassVar[DeclarationKind] = DeclarationKind.METHOD

  untyped: bool = False
  parameters: List[ParameterDeclaration] = field(default_factory=list)


@dataclass(eq=False)
class ClassDeclaration(Declaration):
  """
  A top-level class.

  Attributes:
      package (Optional[str]): Package name, None or empty for the default package.
      fields (List[FieldDeclaration]): Fields in declaration order.
      methods (List[MethodDeclaration]): Methods in declaration order.
  """

  kind: ClassVar[DeclarationKind] = DeclarationKind.CLASS

  package: Optional[str] = None
  fields: List[FieldDeclaration] = field(default_factory=list)
  methods: List[MethodDeclaration] = field(default_factory=list)

  @property
  def in_default_package(self) -> bool:
    return not self.package


@dataclass
class CompilationUnit:
  """
  A single unit handed to the engine by the host pipeline.

  Attributes:
      name (str): Unit name, used to recognise script units.
      classes (List[ClassDeclaration]): Top-level classes in source order.
  """

  name: str
  classes: List[ClassDeclaration] = field(default_factory=list)
