"""
Tests for PolicyConfig resolution.

Verifies that:
1. Missing configuration yields permissive defaults.
2. camelCase (conventions file) and snake_case keys are accepted.
3. Invalid mappings are treated as absent.
4. The snapshot is immutable.
"""

import pytest
from pydantic import ValidationError

from enterprise_conventions.config import PolicyConfig
from enterprise_conventions.enums import DirectiveKind


def test_defaults_are_permissive():
  config = PolicyConfig.from_raw(None)

  assert config.disable_dynamic_compile is False
  assert config.dynamic_compile_whitelist == ()
  assert config.limit_extensions is False
  assert config.allowed_extensions == ()
  assert config.untyped_allowed is True
  assert config.skip_default_package is False
  assert config.enforcement_enabled is False


def test_empty_mapping_matches_defaults():
  assert PolicyConfig.from_raw({}) == PolicyConfig()


def test_full_camel_case_mapping():
  config = PolicyConfig.from_raw(
    {
      "disableDynamicCompile": True,
      "dynamicCompileWhiteList": ["legacy", "generated"],
      "compileStaticExtensions": ["A", "B", "A"],
      "limitCompileStaticExtensions": True,
      "defAllowed": False,
      "skipDefaultPackage": True,
    }
  )

  assert config.disable_dynamic_compile is True
  assert config.dynamic_compile_whitelist == ("legacy", "generated")
  assert config.allowed_extensions == ("A", "B")
  assert config.limit_extensions is True
  assert config.untyped_allowed is False
  assert config.skip_default_package is True


def test_snake_case_keys_accepted():
  config = PolicyConfig.from_raw({"def_allowed": False, "dynamic_compile_whitelist": ["x"]})
  assert config.untyped_allowed is False
  assert config.dynamic_compile_whitelist == ("x",)


def test_unknown_keys_ignored():
  config = PolicyConfig.from_raw({"defAllowed": False, "somethingElse": 1})
  assert config.untyped_allowed is False


def test_null_values_take_defaults():
  config = PolicyConfig.from_raw({"defAllowed": None, "dynamicCompileWhiteList": None})
  assert config.untyped_allowed is True
  assert config.dynamic_compile_whitelist == ()


@pytest.mark.parametrize(
  "raw",
  [
    {"defAllowed": "not-a-bool"},
    {"dynamicCompileWhiteList": "legacy"},
    {"compileStaticExtensions": [1, 2]},
    ["defAllowed", False],
  ],
)
def test_invalid_mapping_is_treated_as_absent(raw):
  assert PolicyConfig.from_raw(raw) == PolicyConfig()


@pytest.mark.parametrize(
  "raw",
  [
    {"disableDynamicCompile": True},
    {"limitCompileStaticExtensions": True},
    {"defAllowed": False},
  ],
)
def test_enforcement_enabled_by_any_rule(raw):
  assert PolicyConfig.from_raw(raw).enforcement_enabled


def test_skip_default_package_alone_does_not_enable_rules():
  assert not PolicyConfig.from_raw({"skipDefaultPackage": True}).enforcement_enabled


def test_static_directive_with_extensions():
  directive = PolicyConfig.from_raw({"compileStaticExtensions": ["A"]}).static_directive()
  assert directive.kind == DirectiveKind.STATIC
  assert directive.extensions == ["A"]


def test_static_directive_without_extensions():
  assert PolicyConfig().static_directive().extensions is None


def test_static_directive_is_fresh_each_time():
  config = PolicyConfig.from_raw({"compileStaticExtensions": ["A"]})
  first = config.static_directive()
  first.extensions.append("B")
  assert config.static_directive().extensions == ["A"]


def test_config_is_frozen():
  config = PolicyConfig()
  with pytest.raises(ValidationError):
    config.untyped_allowed = False
