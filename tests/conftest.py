"""Pytest configuration and shared fixtures for the astwalk test suite."""

import os

import pytest
from hypothesis import Phase, Verbosity, settings

from utils import Arg, Echo, FuncCall, Name, Print, String

# Register custom Hypothesis profiles
settings.register_profile("ci", max_examples=200, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "fuzzing: Property-based fuzzing tests driven by Hypothesis")


@pytest.fixture
def call_log() -> list:
    """Provide an empty shared call log for scripted visitors."""
    return []


@pytest.fixture
def echo_forest():
    """Provide ``[Echo([String('Foo'), String('Bar')])]`` and its nodes.

    Returns
    -------
    tuple
        ``(forest, echo, foo, bar)``

    """
    foo = String("Foo")
    bar = String("Bar")
    echo = Echo(exprs=[foo, bar])
    return [echo], echo, foo, bar


@pytest.fixture
def call_forest():
    """Provide ``[Print(s), FuncCall(Name, [Arg(s)])]`` sharing one String node.

    Returns
    -------
    tuple
        ``(forest, print_node, call_node, arg_node, string_node, name_node)``

    """
    string_node = String("str")
    print_node = Print(expr=string_node)
    arg_node = Arg(value=string_node)
    name_node = Name(parts=["test"])
    call_node = FuncCall(name=name_node, args=[arg_node])
    return [print_node, call_node], print_node, call_node, arg_node, string_node, name_node


@pytest.fixture
def config_dir(tmp_path, monkeypatch):
    """Provide an isolated working directory with no ambient config."""
    monkeypatch.delenv("ASTWALK_CONFIG", raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    (tmp_path / "home").mkdir()
    work = tmp_path / "work"
    work.mkdir()
    monkeypatch.chdir(work)
    return work
