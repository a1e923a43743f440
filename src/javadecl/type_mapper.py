"""Map JVM type names to TypeScript type expressions."""

from __future__ import annotations

import re

from javadecl import tsast
from javadecl.errors import UnsupportedType
from javadecl.imports import ImportResolver
from javadecl.model import identifier, simple_name

PRIMITIVES = frozenset(
    {"boolean", "byte", "char", "short", "int", "long", "float", "double"}
)

BOXED = {
    "boolean": "java.lang.Boolean",
    "byte": "java.lang.Byte",
    "char": "java.lang.Character",
    "short": "java.lang.Short",
    "int": "java.lang.Integer",
    "long": "java.lang.Long",
    "float": "java.lang.Float",
    "double": "java.lang.Double",
}

_BUFFER_TYPES = frozenset({"byte[]", "java.lang.Byte[]"})
_NUMERIC_TYPES = frozenset(
    {
        "int", "java.lang.Integer",
        "float", "java.lang.Float",
        "double", "java.lang.Double",
        "byte", "java.lang.Byte",
        "short", "java.lang.Short",
    }
)
_WIDE_TYPES = frozenset({"long", "java.lang.Long"})
_TEXT_TYPES = frozenset({"char", "java.lang.Character", "java.lang.String"})
_BOOLEAN_TYPES = frozenset({"boolean", "java.lang.Boolean"})
_VOID_TYPES = frozenset({"void", "java.lang.Void"})
OBJECT_TYPE = "java.lang.Object"
BASIC_OR_JAVA_TYPE = "BasicOrJavaType"

# Binary class names: dotted identifiers, '$' allowed for nested classes.
_CLASS_NAME_RE = re.compile(r"[A-Za-z_$][\w$]*(?:\.[A-Za-z_$][\w$]*)*")


def boxed_type(java_type: str) -> str:
    """Return the wrapper class for a primitive, or *java_type* unchanged."""
    return BOXED.get(java_type, java_type)


class TypeMapper:
    """Converts type names for the members of one class.

    Every class reference produced goes through *resolver*, so after
    mapping a class's members the resolver knows what to import and what
    to generate next.  ``uses_basic_or_java_type`` records whether the
    ``BasicOrJavaType`` helper from the runtime package is needed.
    """

    def __init__(self, class_name: str, resolver: ImportResolver) -> None:
        self.class_name = class_name
        self.resolver = resolver
        self.uses_basic_or_java_type = False

    def map_type(
        self, java_type: str, is_param: bool, allow_null: bool = True
    ) -> tsast.TypeNode:
        def nullable(node: tsast.TypeNode) -> tsast.TypeNode:
            return tsast.union(node, tsast.NULL) if allow_null else node

        if java_type in _BUFFER_TYPES:
            return nullable(tsast.TypeReference("Buffer"))

        if java_type.endswith("[]"):
            element = self.map_type(java_type[:-2], is_param)
            return nullable(tsast.ArrayType(element))

        if java_type in _NUMERIC_TYPES:
            return self._primitive_union(java_type, is_param, allow_null, tsast.NUMBER)
        if java_type in _WIDE_TYPES:
            return self._primitive_union(
                java_type, is_param, allow_null, tsast.NUMBER, tsast.BIGINT
            )
        if java_type in _TEXT_TYPES:
            return nullable(tsast.STRING)
        if java_type in _BOOLEAN_TYPES:
            return self._primitive_union(java_type, is_param, allow_null, tsast.BOOLEAN)
        if java_type in _VOID_TYPES:
            return tsast.VOID
        if java_type == OBJECT_TYPE:
            self.uses_basic_or_java_type = True
            return nullable(tsast.TypeReference(BASIC_OR_JAVA_TYPE))

        if not _CLASS_NAME_RE.fullmatch(java_type) or java_type in PRIMITIVES:
            raise UnsupportedType(java_type)
        return nullable(self.reference(java_type, is_param))

    def _primitive_union(
        self,
        java_type: str,
        is_param: bool,
        allow_null: bool,
        *keywords: tsast.KeywordType,
    ) -> tsast.TypeNode:
        types: list[tsast.TypeNode] = list(keywords)
        # Primitives are never null, their wrappers may be.
        if allow_null and java_type not in PRIMITIVES:
            types.append(tsast.NULL)
        if is_param:
            # Callers may hand over the wrapper instance as well.
            types.insert(0, self.reference(boxed_type(java_type), is_param))
        return tsast.union(*types)

    def reference(self, name: str, is_param: bool) -> tsast.TypeReference:
        """Reference a foreign class, registering it with the resolver."""
        self.resolver.reference(name)
        if name == self.class_name:
            # The declared class is <Simple>Class, the exported one <Simple>.
            suffix = "Class" if is_param else ""
            return tsast.TypeReference(simple_name(name) + suffix)
        return tsast.TypeReference(identifier(name))
