"""Shared fixtures for the javadecl test suite."""

import textwrap
from pathlib import Path

import pytest

from javadecl import modifiers
from javadecl.errors import ClassNotFound
from javadecl.model import (
    ClassMetadata,
    ConstructorMetadata,
    FieldMetadata,
    MethodMetadata,
)

PUBLIC = modifiers.PUBLIC
PUBLIC_STATIC = modifiers.PUBLIC | modifiers.STATIC
PUBLIC_STATIC_FINAL = modifiers.PUBLIC | modifiers.STATIC | modifiers.FINAL


class FakeReflectionClient:
    """In-memory reflection client that records every lookup."""

    def __init__(self, *classes: ClassMetadata) -> None:
        self.classes = {c.name: c for c in classes}
        self.loaded: list[str] = []

    def add(self, metadata: ClassMetadata) -> None:
        self.classes[metadata.name] = metadata

    def load_class(self, class_name: str) -> ClassMetadata:
        self.loaded.append(class_name)
        try:
            return self.classes[class_name]
        except KeyError:
            raise ClassNotFound(class_name) from None


def method(name, params=(), returns="void", mask=PUBLIC):
    return MethodMetadata(name, tuple(params), returns, mask)


def field(name, type_name, mask=PUBLIC):
    return FieldMetadata(name, type_name, mask)


def constructor(params=(), mask=PUBLIC):
    return ConstructorMetadata(tuple(params), mask)


def java_class(name, *, fields=(), methods=(), constructors=(), mask=PUBLIC, interface=False):
    if interface:
        mask |= modifiers.INTERFACE | modifiers.ABSTRACT
    return ClassMetadata(
        name=name,
        modifiers=mask,
        is_interface=interface,
        fields=tuple(fields),
        methods=tuple(methods),
        constructors=tuple(constructors),
    )


@pytest.fixture
def boxed_classes():
    """Empty wrapper classes pulled in by primitive parameters."""
    return [
        java_class(f"java.lang.{n}", mask=PUBLIC | modifiers.FINAL)
        for n in ("Integer", "Long", "Boolean", "Double", "Short", "Byte", "Float")
    ]


@pytest.fixture
def client(boxed_classes):
    return FakeReflectionClient(*boxed_classes)


@pytest.fixture
def java_source(tmp_path):
    """Factory fixture that writes a Java source file below a source root."""
    root = tmp_path / "src"

    def _write(relative: str, content: str) -> Path:
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return root

    return _write
