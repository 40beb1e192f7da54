"""Suite target resolution tests."""

from __future__ import annotations

import textwrap
import uuid
from pathlib import Path

import pytest
from simple_spec_runner.suite_discovery import SuiteDiscoveryError, load_suite_target
from simple_spec_runner.suite_dsl import Suite

_SUITE_MODULE = """
from simple_spec_runner.suite_dsl import Suite


def _definition(spec):
    spec.test("works", lambda: None)


suite = Suite("ModuleSuite", _definition)


def build_suite():
    return Suite("FactorySuite", _definition)


def not_a_suite():
    return 42


def broken_suite():
    return Suite("Broken", lambda spec: spec.test(None, lambda: None))


class Holder:
    inner = suite
"""


def _write_module(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    module_name = f"spec_module_{uuid.uuid4().hex}"
    (tmp_path / f"{module_name}.py").write_text(textwrap.dedent(_SUITE_MODULE), encoding="utf-8")
    monkeypatch.syspath_prepend(str(tmp_path))
    return module_name


def test_loads_a_suite_instance(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    module_name = _write_module(tmp_path, monkeypatch)

    suite = load_suite_target(f"{module_name}:suite")

    assert isinstance(suite, Suite)
    assert suite.name == "ModuleSuite"


def test_module_without_attribute_defaults_to_suite(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    module_name = _write_module(tmp_path, monkeypatch)

    assert load_suite_target(module_name).name == "ModuleSuite"


def test_factory_builds_a_fresh_suite_per_load(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    module_name = _write_module(tmp_path, monkeypatch)

    first = load_suite_target(f"{module_name}:build_suite")
    second = load_suite_target(f"{module_name}:build_suite")

    assert first.name == "FactorySuite"
    assert first is not second


def test_dotted_attribute_path_is_followed(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    module_name = _write_module(tmp_path, monkeypatch)

    assert load_suite_target(f"{module_name}:Holder.inner").name == "ModuleSuite"


@pytest.mark.parametrize(
    ("attribute", "message"),
    [
        ("missing", "has no attribute"),
        ("not_a_suite", "not a Suite"),
        ("Holder", "neither a Suite nor a factory"),
        ("broken_suite", "failed to register"),
    ],
)
def test_bad_targets_are_reported(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, attribute: str, message: str
) -> None:
    module_name = _write_module(tmp_path, monkeypatch)

    with pytest.raises(SuiteDiscoveryError, match=message):
        load_suite_target(f"{module_name}:{attribute}")


def test_unknown_module_is_reported() -> None:
    with pytest.raises(SuiteDiscoveryError, match="Cannot import module"):
        load_suite_target("no_such_module_for_specs:suite")
