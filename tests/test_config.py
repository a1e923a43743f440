"""Tests for config.py — .javadecl.toml and [tool.javadecl]."""

import textwrap

import pytest

from javadecl.config import Config, load_config
from javadecl.errors import ConfigError


def _write(path, content):
    path.write_text(textwrap.dedent(content), encoding="utf-8")


def test_defaults(tmp_path):
    assert load_config(tmp_path) == Config()


def test_javadecl_toml(tmp_path):
    _write(
        tmp_path / ".javadecl.toml",
        """\
        [javadecl]
        classpath = ["lib/a.jar", "lib/b.jar"]
        sourcepath = "src/main/java"
        javap = "/opt/jdk/bin/javap"
        """,
    )
    config = load_config(tmp_path)
    assert config.classpath == ["lib/a.jar", "lib/b.jar"]
    assert config.sourcepath == ["src/main/java"]
    assert config.javap == "/opt/jdk/bin/javap"


def test_pyproject_tool_table(tmp_path):
    _write(
        tmp_path / "pyproject.toml",
        """\
        [project]
        name = "demo"

        [tool.javadecl]
        classpath = ["build/classes"]
        """,
    )
    assert load_config(tmp_path).classpath == ["build/classes"]


def test_javadecl_toml_wins(tmp_path):
    _write(tmp_path / ".javadecl.toml", '[javadecl]\nclasspath = ["first"]\n')
    _write(tmp_path / "pyproject.toml", '[tool.javadecl]\nclasspath = ["second"]\n')
    assert load_config(tmp_path).classpath == ["first"]


def test_invalid_toml_is_ignored(tmp_path):
    _write(tmp_path / ".javadecl.toml", "[javadecl\n")
    assert load_config(tmp_path) == Config()


def test_wrong_value_type(tmp_path):
    _write(tmp_path / ".javadecl.toml", "[javadecl]\nclasspath = 3\n")
    with pytest.raises(ConfigError, match="classpath"):
        load_config(tmp_path)
