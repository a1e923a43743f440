"""Tests for reflection/source.py — metadata from Java sources."""

import pytest
from conftest import FakeReflectionClient, java_class

from javadecl import modifiers
from javadecl.errors import ClassNotFound
from javadecl.generator import DefinitionGenerator
from javadecl.reflection.source import SourceReflectionClient

SHAPE = """\
    package com.example;

    import java.util.List;

    public abstract class Shape implements Comparable<Shape> {
        public static final int SIDES = 0;
        public String label;
        protected int hidden;

        public Shape(String label) {
            this.label = label;
        }

        public abstract double area();

        public List<String> tags() {
            return null;
        }

        public <T extends Number> T scale(T factor, int... amounts) {
            return factor;
        }

        private void secret() {
        }

        public static class Builder {
            public Shape build() {
                return null;
            }
        }
    }
    """

COLOR = """\
    package com.example;

    public enum Color {
        RED, GREEN;

        public String lower() {
            return name().toLowerCase();
        }
    }
    """

NAMED = """\
    package com.example;

    public interface Named {
        String PREFIX = "n";

        String name();

        default String display() {
            return PREFIX + name();
        }

        static Named of(String n) {
            return null;
        }
    }
    """

CIRCLE = """\
    package com.example;

    public class Circle extends Shape implements Named {
        public Circle() {
            super("circle");
        }

        public double area() {
            return 0;
        }

        public String name() {
            return "circle";
        }

        public Shape.Builder builder() {
            return null;
        }
    }
    """


@pytest.fixture
def source_root(java_source):
    java_source("com/example/Shape.java", SHAPE)
    java_source("com/example/Color.java", COLOR)
    java_source("com/example/Named.java", NAMED)
    return java_source("com/example/Circle.java", CIRCLE)


class TestClasses:
    def test_abstract_class(self, source_root):
        shape = SourceReflectionClient([source_root]).load_class("com.example.Shape")
        assert modifiers.is_abstract(shape.modifiers)
        assert not shape.is_interface
        assert [(f.name, f.type_name) for f in shape.fields] == [
            ("SIDES", "int"),
            ("label", "java.lang.String"),
        ]
        assert modifiers.is_final(shape.fields[0].modifiers)
        assert [(m.name, m.parameter_types, m.return_type) for m in shape.methods] == [
            ("area", (), "double"),
            ("tags", (), "java.util.List"),
            ("scale", ("java.lang.Number", "int[]"), "java.lang.Number"),
        ]
        assert [c.parameter_types for c in shape.constructors] == [("java.lang.String",)]

    def test_nested_class(self, source_root):
        builder = SourceReflectionClient([source_root]).load_class("com.example.Shape$Builder")
        assert [(m.name, m.return_type) for m in builder.methods] == [
            ("build", "com.example.Shape")
        ]
        (default,) = builder.constructors
        assert default.parameter_types == ()
        assert modifiers.is_public(default.modifiers)

    def test_enum(self, source_root):
        color = SourceReflectionClient([source_root]).load_class("com.example.Color")
        assert [(f.name, f.type_name) for f in color.fields] == [
            ("RED", "com.example.Color"),
            ("GREEN", "com.example.Color"),
        ]
        assert [(m.name, m.parameter_types, m.return_type) for m in color.methods] == [
            ("lower", (), "java.lang.String"),
            ("values", (), "com.example.Color[]"),
            ("valueOf", ("java.lang.String",), "com.example.Color"),
        ]
        assert not any(modifiers.is_public(c.modifiers) for c in color.constructors)

    def test_interface(self, source_root):
        named = SourceReflectionClient([source_root]).load_class("com.example.Named")
        assert named.is_interface
        assert named.constructors == ()
        (prefix,) = named.fields
        assert modifiers.is_static(prefix.modifiers) and modifiers.is_final(prefix.modifiers)
        by_name = {m.name: m for m in named.methods}
        assert modifiers.is_abstract(by_name["name"].modifiers)
        assert not modifiers.is_abstract(by_name["display"].modifiers)
        assert modifiers.is_static(by_name["of"].modifiers)
        assert all(modifiers.is_public(m.modifiers) for m in named.methods)

    def test_inherited_members(self, source_root):
        circle = SourceReflectionClient([source_root]).load_class("com.example.Circle")
        assert [m.name for m in circle.methods] == [
            "area",
            "name",
            "builder",
            "tags",
            "scale",
            "display",
        ]
        assert [f.name for f in circle.fields] == ["SIDES", "label", "PREFIX"]
        assert circle.methods[2].return_type == "com.example.Shape$Builder"


class TestFallback:
    def test_unknown_class_without_fallback(self, source_root):
        with pytest.raises(ClassNotFound):
            SourceReflectionClient([source_root]).load_class("java.lang.Integer")

    def test_unknown_class_is_delegated(self, source_root):
        fallback = FakeReflectionClient(java_class("java.lang.Integer"))
        client = SourceReflectionClient([source_root], fallback=fallback)
        assert client.load_class("java.lang.Integer").name == "java.lang.Integer"
        assert fallback.loaded == ["java.lang.Integer"]

    def test_unparsable_file_is_skipped(self, java_source, caplog):
        root = java_source("broken/Broken.java", "package broken; public class {")
        java_source("ok/Fine.java", "package ok; public class Fine {}")
        client = SourceReflectionClient([root])
        assert client.load_class("ok.Fine").name == "ok.Fine"
        assert "Broken.java" in caplog.text


REPO = """\
    package com.example;

    import java.util.*;
    import java.util.Map.*;

    public class Repo {
        public List<String> items() {
            return null;
        }

        public String label() {
            return null;
        }

        public Entry<String, Integer> entry() {
            return null;
        }

        public java.util.Map.Entry<String, String> first() {
            return null;
        }

        public Shape shape() {
            return null;
        }
    }
    """


class TestNameResolution:
    def test_wildcard_import_resolved_through_fallback(self, source_root, java_source):
        root = java_source("com/example/Repo.java", REPO)
        fallback = FakeReflectionClient(
            java_class("java.lang.Object"),
            java_class("java.util.List", interface=True),
            java_class("java.util.Map$Entry", interface=True),
        )
        client = SourceReflectionClient([root], fallback=fallback)
        repo = client.load_class("com.example.Repo")
        returns = {m.name: m.return_type for m in repo.methods}
        assert returns["items"] == "java.util.List"
        assert returns["label"] == "java.lang.String"
        assert returns["entry"] == "java.util.Map$Entry"
        assert returns["shape"] == "com.example.Shape"
        assert "java.util.String" not in fallback.loaded
        assert "java.util.Shape" not in fallback.loaded

    def test_wildcard_candidates_tried_in_order(self, java_source):
        root = java_source("com/example/Repo.java", REPO)
        fallback = FakeReflectionClient(
            java_class("java.lang.Object"), java_class("java.util.List", interface=True)
        )
        client = SourceReflectionClient([root], fallback=fallback)
        repo = client.load_class("com.example.Repo")
        returns = {m.name: m.return_type for m in repo.methods}
        assert returns["items"] == "java.util.List"
        # Neither wildcard package has Entry, so it stays a same-package guess.
        assert returns["entry"] == "com.example.Entry"
        assert fallback.loaded[:3] == ["java.util.List", "java.util.Entry", "java.util.Map$Entry"]

    def test_qualified_nested_type_uses_binary_name(self, java_source):
        root = java_source("com/example/Repo.java", REPO)
        repo = SourceReflectionClient([root]).load_class("com.example.Repo")
        returns = {m.name: m.return_type for m in repo.methods}
        assert returns["first"] == "java.util.Map$Entry"


def test_generate_from_sources(source_root, boxed_classes):
    fallback = FakeReflectionClient(
        *boxed_classes,
        java_class("java.lang.Object"),
        java_class("java.lang.Comparable", interface=True),
        java_class("java.lang.Number", mask=modifiers.PUBLIC | modifiers.ABSTRACT),
        java_class("java.util.List", interface=True),
    )
    client = SourceReflectionClient([source_root], fallback=fallback)
    modules = DefinitionGenerator(client).generate("com.example.Circle")

    assert {m.name for m in modules} == {
        "com.example.Circle",
        "com.example.Shape$Builder",
        "com.example.Shape",
        "java.util.List",
        "java.lang.Number",
        "java.lang.Integer",
    }
    assert modules[-1].name == "com.example.Circle"
