"""Shared test fixtures for code-smells tests."""

import os

import pytest


@pytest.fixture(autouse=True)
def isolated_config(tmp_path_factory, monkeypatch):
    """Keep the user's ~/.code-smells.toml and CODE_SMELLS_* variables out of tests."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setenv("HOME", str(home))
    for key in list(os.environ):
        if key.startswith("CODE_SMELLS_"):
            monkeypatch.delenv(key)
    return home


@pytest.fixture
def python_project(tmp_path):
    """A small Python project with one long function and one long file."""
    (tmp_path / "pyproject.toml").write_text("[project]\nname = 'sample'\n", encoding="utf-8")
    src = tmp_path / "src" / "sample"
    src.mkdir(parents=True)
    (src / "__init__.py").write_text("", encoding="utf-8")
    (src / "long_function.py").write_text(
        "def long_one():\n" + "    x = 1\n" * 54, encoding="utf-8"
    )
    (src / "long_file.py").write_text("y = 2\n" * 320, encoding="utf-8")
    return tmp_path
