"""
Policy Configuration Store.

This module turns an optional external configuration mapping into the
immutable `PolicyConfig` snapshot consulted by the walker, and provides the
`ConfigSource` implementations used to locate that mapping.

Missing keys take permissive defaults. A mapping that cannot be found, read,
or validated is treated exactly like "no configuration": enforcement must
never break a build because of configuration I/O problems.
"""

import sys
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional, Protocol, Sequence, Tuple, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from enterprise_conventions.core.declarations import Directive
from enterprise_conventions.utils.console import log_debug

if sys.version_info >= (3, 11):
  import tomllib
else:
  import tomli as tomllib

RawMapping = Mapping[str, Any]

CONVENTIONS_FILE = "conventions.toml"
CONVENTIONS_TABLE = "conventions"
PYPROJECT_TABLE = "enterprise_conventions"

# Output directory names used to derive the project root from a target directory.
BUILD_DIRECTORIES: Tuple[str, ...] = ("build", "target", "output")


class RawConfig(BaseModel):
  """
  Validated view of the external configuration mapping.

  Keys follow the camelCase names used in conventions files; the snake_case
  field names are accepted as well. Unknown keys are ignored.
  """

  model_config = ConfigDict(extra="ignore")

  disable_dynamic_compile: Optional[bool] = Field(
    None, validation_alias=AliasChoices("disableDynamicCompile", "disable_dynamic_compile")
  )
  dynamic_compile_whitelist: Optional[List[str]] = Field(
    None,
    validation_alias=AliasChoices("dynamicCompileWhiteList", "dynamicCompileWhitelist", "dynamic_compile_whitelist"),
  )
  compile_static_extensions: Optional[List[str]] = Field(
    None, validation_alias=AliasChoices("compileStaticExtensions", "compile_static_extensions")
  )
  limit_compile_static_extensions: Optional[bool] = Field(
    None, validation_alias=AliasChoices("limitCompileStaticExtensions", "limit_compile_static_extensions")
  )
  def_allowed: Optional[bool] = Field(None, validation_alias=AliasChoices("defAllowed", "def_allowed"))
  skip_default_package: Optional[bool] = Field(
    None, validation_alias=AliasChoices("skipDefaultPackage", "skip_default_package")
  )


def _unique(items: Optional[Sequence[str]]) -> Tuple[str, ...]:
  return tuple(dict.fromkeys(items or ()))


class PolicyConfig(BaseModel):
  """
  Immutable snapshot of every enforcement option.

  All defaults are permissive: with no external configuration nothing is
  enforced and only directive injection takes place.
  """

  model_config = ConfigDict(frozen=True)

  disable_dynamic_compile: bool = Field(False, description="Report classes/methods marked explicitly dynamic.")
  dynamic_compile_whitelist: Tuple[str, ...] = Field(
    (), description="Name fragments exempting matching classes from all enforcement."
  )
  limit_extensions: bool = Field(False, description="Report static directives using extensions not allowed.")
  allowed_extensions: Tuple[str, ...] = Field(
    (), description="Extensions allowed on, and injected with, the static directive."
  )
  untyped_allowed: bool = Field(True, description="If False, untyped fields, returns and parameters are reported.")
  skip_default_package: bool = Field(False, description="If True, classes without a package are left alone.")

  @classmethod
  def from_raw(cls, raw: Optional[RawMapping]) -> "PolicyConfig":
    """
    Builds the snapshot from an external mapping.

    Args:
        raw (Optional[Mapping]): The mapping produced by a ConfigSource, or None.

    Returns:
        PolicyConfig: The resolved configuration. Defaults if `raw` is None or invalid.
    """
    if raw is None:
      return cls()

    try:
      parsed = RawConfig.model_validate(dict(raw))
    except (ValidationError, TypeError, ValueError) as e:
      log_debug(f"Ignoring invalid conventions configuration: {e}")
      return cls()

    return cls(
      disable_dynamic_compile=bool(parsed.disable_dynamic_compile),
      dynamic_compile_whitelist=_unique(parsed.dynamic_compile_whitelist),
      limit_extensions=bool(parsed.limit_compile_static_extensions),
      allowed_extensions=_unique(parsed.compile_static_extensions),
      untyped_allowed=parsed.def_allowed if parsed.def_allowed is not None else True,
      skip_default_package=bool(parsed.skip_default_package),
    )

  @property
  def enforcement_enabled(self) -> bool:
    """
    True if at least one enforcement rule is in its restrictive state.

    Returns:
        bool: False when every rule is permissive and the enforcement pass can be skipped.
    """
    return self.disable_dynamic_compile or self.limit_extensions or not self.untyped_allowed

  def static_directive(self) -> Directive:
    """
    Builds the static-typing directive injected into classes.

    The extension argument is attached only when extensions are configured.

    Returns:
        Directive: A fresh directive instance.
    """
    extensions = list(self.allowed_extensions) if self.allowed_extensions else None
    return Directive.compile_static(extensions)


class ConfigSource(Protocol):
  """
  Supplies the external configuration mapping, or None when there is none.
  """

  def lookup(self) -> Optional[RawMapping]: ...


class StaticConfigSource:
  """
  A source returning a fixed mapping (or None).
  """

  def __init__(self, mapping: Optional[RawMapping] = None):
    self._mapping = mapping

  def lookup(self) -> Optional[RawMapping]:
    return self._mapping


def _read_toml_table(path: Path, table: Sequence[str]) -> Optional[Dict[str, Any]]:
  """
  Reads a nested table from a TOML file.

  Args:
      path (Path): The TOML file.
      table (Sequence[str]): Keys leading to the table, e.g. ('tool', 'x').

  Returns:
      Optional[Dict]: The table, or None if the file or table is missing or unreadable.
  """
  try:
    with open(path, "rb") as f:
      data: Any = tomllib.load(f)
  except (OSError, tomllib.TOMLDecodeError) as e:
    log_debug(f"Unable to read {path}: {e}")
    return None

  for key in table:
    if not isinstance(data, dict) or key not in data:
      return None
    data = data[key]

  return data if isinstance(data, dict) else None


def _project_root(target_path: Path, segment: str) -> Path:
  parts = target_path.parts
  for index in range(len(parts) - 1, 0, -1):
    if parts[index] == segment:
      return Path(*parts[:index])
  return target_path


class ConventionsFileSource:
  """
  Locates `conventions.toml` relative to a build output directory.

  For each of 'build', 'target' and 'output', the target directory path is cut
  before the last path part with exactly that name and the remainder is
  checked for the conventions file. A path without such a part is checked
  as is. The first existing file wins; its `[conventions]` table is the
  configuration.
  """

  def __init__(
    self,
    target_directory: Union[str, Path, None],
    file_name: str = CONVENTIONS_FILE,
    table: str = CONVENTIONS_TABLE,
  ):
    self.target_directory = target_directory
    self.file_name = file_name
    self.table = table

  def find_file(self) -> Optional[Path]:
    """
    Searches the candidate project roots for the conventions file.

    Returns:
        Optional[Path]: The file, or None if not found (or the target directory is unusable).
    """
    if self.target_directory is None:
      return None

    try:
      target_path = Path(self.target_directory).absolute()
      for segment in BUILD_DIRECTORIES:
        candidate = _project_root(target_path, segment) / self.file_name
        if candidate.is_file():
          return candidate
    except (OSError, ValueError) as e:
      log_debug(f"Conventions lookup failed for {self.target_directory}: {e}")

    return None

  def lookup(self) -> Optional[RawMapping]:
    config_file = self.find_file()
    if config_file is None:
      return None
    return _read_toml_table(config_file, (self.table,))


class PyprojectConfigSource:
  """
  Reads `[tool.enterprise_conventions]` from the nearest `pyproject.toml`.
  """

  def __init__(self, search_path: Optional[Path] = None):
    self.search_path = search_path

  def lookup(self) -> Optional[RawMapping]:
    """
    Recursively searches parents for 'pyproject.toml' and extracts the table.

    Returns:
        Optional[Mapping]: The tool table, or None if absent or unreadable.
    """
    start_dir = self.search_path or Path.cwd()
    current = start_dir.resolve()

    for parent in [current, *current.parents]:
      toml_path = parent / "pyproject.toml"
      if toml_path.is_file():
        return _read_toml_table(toml_path, ("tool", PYPROJECT_TABLE))

    return None
