"""Read class metadata from Java sources via javalang."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from pathlib import Path

import javalang

from javadecl import modifiers
from javadecl.errors import ClassNotFound, ResolutionFailure
from javadecl.model import (
    ClassMetadata,
    ConstructorMetadata,
    FieldMetadata,
    MethodMetadata,
)
from javadecl.reflection._inherit import merge_fields, merge_methods
from javadecl.reflection.base import ReflectionClient

logger = logging.getLogger(__name__)

OBJECT_CLASS = "java.lang.Object"
ENUM_CLASS = "java.lang.Enum"

# Files to skip when walking Java sources.
_SKIP_FILES = {"package-info.java", "module-info.java"}

# Simple names visible without an import.
_JAVA_LANG = frozenset(
    {
        "Appendable", "ArithmeticException", "ArrayIndexOutOfBoundsException",
        "AutoCloseable", "Boolean", "Byte", "CharSequence", "Character", "Class",
        "ClassCastException", "ClassLoader", "ClassNotFoundException",
        "CloneNotSupportedException", "Cloneable", "Comparable", "Deprecated",
        "Double", "Enum", "Error", "Exception", "Float", "FunctionalInterface",
        "IllegalArgumentException", "IllegalStateException",
        "IndexOutOfBoundsException", "Integer", "InterruptedException",
        "Iterable", "Long", "Math", "Module", "NullPointerException", "Number",
        "NumberFormatException", "Object", "Override", "Package", "Process",
        "ProcessBuilder", "Readable", "Record", "Runnable", "Runtime",
        "RuntimeException", "SafeVarargs", "SecurityException", "Short",
        "StackTraceElement", "String", "StringBuffer", "StringBuilder",
        "SuppressWarnings", "System", "Thread", "ThreadLocal", "Throwable",
        "UnsupportedOperationException", "Void",
    }
)

_TYPE_DECLARATIONS = (
    javalang.tree.ClassDeclaration,
    javalang.tree.InterfaceDeclaration,
    javalang.tree.EnumDeclaration,
)


@dataclass
class _CompilationUnit:
    package: str
    single_imports: dict[str, str] = field(default_factory=dict)  # simple -> canonical
    wildcard_imports: list[str] = field(default_factory=list)


@dataclass
class _SourceType:
    name: str  # binary name
    node: object
    unit: _CompilationUnit
    enclosing: _SourceType | None = None


def _kind_keywords(source_type: _SourceType) -> list[str]:
    node = source_type.node
    keywords = list(node.modifiers or ())
    outer = source_type.enclosing
    if outer is not None and isinstance(outer.node, javalang.tree.InterfaceDeclaration):
        keywords += ["public", "static"]
    if isinstance(node, javalang.tree.InterfaceDeclaration):
        keywords += ["interface", "abstract"]
    elif isinstance(node, javalang.tree.EnumDeclaration):
        keywords.append("final")
    return keywords


def _dimensions(type_node) -> int:
    return len(getattr(type_node, "dimensions", None) or [])


def nested_binary_name(canonical: str) -> str:
    """Turn a canonical name into a binary name by package convention.

    The first capitalised segment is the top-level class; every segment
    after it names a nested class:

        java.util.Map.Entry -> java.util.Map$Entry
    """
    parts = canonical.split(".")
    for i, part in enumerate(parts):
        if part[:1].isupper():
            return ".".join(parts[: i + 1]) + "".join("$" + p for p in parts[i + 1 :])
    return canonical


class SourceReflectionClient:
    """Reflection client that reads ``.java`` files instead of bytecode.

    Classes missing from *source_roots* are delegated to *fallback*, which
    is normally a :class:`~javadecl.reflection.javap.JavapReflectionClient`
    for the JDK itself.
    """

    def __init__(
        self,
        source_roots: Sequence[Path],
        fallback: ReflectionClient | None = None,
    ) -> None:
        self.source_roots = [Path(r) for r in source_roots]
        self.fallback = fallback
        self._types: dict[str, _SourceType] | None = None
        self._cache: dict[str, ClassMetadata] = {}

    # -- indexing ------------------------------------------------------------

    @property
    def types(self) -> dict[str, _SourceType]:
        if self._types is None:
            self._types = self._index()
        return self._types

    def _index(self) -> dict[str, _SourceType]:
        types: dict[str, _SourceType] = {}
        file_count = 0
        for root in self.source_roots:
            for java_file in sorted(root.rglob("*.java")):
                if java_file.name in _SKIP_FILES:
                    continue
                tree = _parse_file(java_file)
                if tree is None:
                    continue
                file_count += 1
                unit = _CompilationUnit(tree.package.name if tree.package else "")
                for imp in tree.imports or ():
                    if imp.static:
                        continue
                    if imp.wildcard:
                        unit.wildcard_imports.append(imp.path)
                    else:
                        unit.single_imports[imp.path.rsplit(".", 1)[-1]] = imp.path
                for type_decl in tree.types or ():
                    if isinstance(type_decl, _TYPE_DECLARATIONS):
                        prefix = f"{unit.package}." if unit.package else ""
                        _index_type(types, type_decl, prefix + type_decl.name, unit, None)

        logger.debug("Java sources: %d files, %d types", file_count, len(types))
        return types

    # -- name resolution -----------------------------------------------------

    def _binary_name(self, canonical: str) -> str | None:
        """Find the indexed type whose canonical name is *canonical*."""
        parts = canonical.split(".")
        for split in range(len(parts), 0, -1):
            candidate = ".".join(parts[:split])
            if split < len(parts):
                candidate += "$" + "$".join(parts[split:])
            if candidate in self.types:
                return candidate
        return None

    def _resolve_simple(self, name: str, scope: _SourceType) -> str:
        outer: _SourceType | None = scope
        while outer is not None:
            nested = f"{outer.name}${name}"
            if nested in self.types:
                return nested
            outer = outer.enclosing

        unit = scope.unit
        if name in unit.single_imports:
            canonical = unit.single_imports[name]
            return self._binary_name(canonical) or nested_binary_name(canonical)

        same_package = f"{unit.package}.{name}" if unit.package else name
        if same_package in self.types:
            return same_package

        for wildcard in unit.wildcard_imports:
            resolved = self._binary_name(f"{wildcard}.{name}")
            if resolved is not None:
                return resolved

        if name in _JAVA_LANG:
            return f"java.lang.{name}"

        for wildcard in unit.wildcard_imports:
            candidate = nested_binary_name(f"{wildcard}.{name}")
            if self._fallback_knows(candidate):
                return candidate
        return same_package

    def _fallback_knows(self, class_name: str) -> bool:
        if self.fallback is None:
            return False
        try:
            self.fallback.load_class(class_name)
        except ResolutionFailure:
            logger.debug("%s not known to the fallback client", class_name)
            return False
        return True

    def type_name(
        self,
        type_node,
        scope: _SourceType,
        type_variables: dict[str, object] | None = None,
    ) -> str:
        """Resolve a javalang type node to an erased JVM type name."""
        if type_node is None:
            return "void"
        suffix = "[]" * _dimensions(type_node)

        if isinstance(type_node, javalang.tree.BasicType):
            return type_node.name + suffix

        parts = [type_node.name]
        sub = getattr(type_node, "sub_type", None)
        while sub is not None:
            parts.append(sub.name)
            sub = getattr(sub, "sub_type", None)

        variables = type_variables or {}
        if len(parts) == 1 and parts[0] in variables:
            bounds = variables[parts[0]]
            if not bounds:
                return OBJECT_CLASS + suffix
            # Erase to the first bound, without the variable itself in scope.
            narrowed = {k: v for k, v in variables.items() if k != parts[0]}
            return self.type_name(bounds[0], scope, narrowed) + suffix

        first = parts[0]
        if first[:1].islower():
            canonical = ".".join(parts)
            return (self._binary_name(canonical) or nested_binary_name(canonical)) + suffix

        resolved = self._resolve_simple(first, scope)
        if len(parts) > 1:
            resolved += "$" + "$".join(parts[1:])
        return resolved + suffix

    def _class_type_variables(self, source_type: _SourceType) -> dict[str, object]:
        chain: list[_SourceType] = []
        outer: _SourceType | None = source_type
        while outer is not None:
            chain.append(outer)
            outer = outer.enclosing
        variables: dict[str, object] = {}
        for entry in reversed(chain):
            for param in getattr(entry.node, "type_parameters", None) or ():
                variables[param.name] = param.extends or []
        return variables

    # -- metadata ------------------------------------------------------------

    def load_class(self, class_name: str) -> ClassMetadata:
        cached = self._cache.get(class_name)
        if cached is not None:
            return cached

        source_type = self.types.get(class_name)
        if source_type is None:
            if self.fallback is None:
                raise ClassNotFound(class_name)
            return self.fallback.load_class(class_name)

        metadata = self._convert(source_type)
        self._cache[class_name] = metadata
        return metadata

    def _supertype_names(self, source_type: _SourceType, variables) -> list[str]:
        node = source_type.node
        names: list[str] = []
        if isinstance(node, javalang.tree.InterfaceDeclaration):
            extends = node.extends or []
            return [self.type_name(t, source_type, variables) for t in extends]

        if isinstance(node, javalang.tree.EnumDeclaration):
            names.append(ENUM_CLASS)
        elif node.extends is not None:
            names.append(self.type_name(node.extends, source_type, variables))
        elif source_type.name != OBJECT_CLASS:
            names.append(OBJECT_CLASS)
        for implemented in node.implements or ():
            names.append(self.type_name(implemented, source_type, variables))
        return names

    def _load_supertype(self, name: str) -> ClassMetadata | None:
        if name not in self.types and self.fallback is None:
            logger.debug("Supertype %s not on the source path, skipped", name)
            return None
        return self.load_class(name)

    def _convert(self, source_type: _SourceType) -> ClassMetadata:
        node = source_type.node
        is_interface = isinstance(node, javalang.tree.InterfaceDeclaration)
        is_enum = isinstance(node, javalang.tree.EnumDeclaration)
        variables = self._class_type_variables(source_type)

        if is_enum:
            body = node.body.declarations if node.body is not None else []
        else:
            body = node.body or []

        fields: list[FieldMetadata] = []
        methods: list[MethodMetadata] = []
        constructors: list[ConstructorMetadata] = []

        if is_enum and node.body is not None:
            constant_mask = modifiers.PUBLIC | modifiers.STATIC | modifiers.FINAL
            for constant in node.body.constants or ():
                fields.append(FieldMetadata(constant.name, source_type.name, constant_mask))

        for member in body:
            if isinstance(member, javalang.tree.FieldDeclaration):
                keywords = list(member.modifiers or ())
                if is_interface:
                    keywords += ["public", "static", "final"]
                mask = modifiers.encode(keywords)
                base = self.type_name(member.type, source_type, variables)
                for declarator in member.declarators:
                    type_name = base + "[]" * _dimensions(declarator)
                    fields.append(FieldMetadata(declarator.name, type_name, mask))
            elif isinstance(member, javalang.tree.MethodDeclaration):
                methods.append(self._method(member, source_type, variables, is_interface))
            elif isinstance(member, javalang.tree.ConstructorDeclaration):
                params = self._parameters(member, source_type, variables)
                mask = modifiers.encode(member.modifiers or ())
                constructors.append(ConstructorMetadata(params, mask))

        class_keywords = _kind_keywords(source_type)
        if is_enum:
            static_mask = modifiers.PUBLIC | modifiers.STATIC
            methods.append(
                MethodMetadata("values", (), source_type.name + "[]", static_mask)
            )
            methods.append(
                MethodMetadata(
                    "valueOf", ("java.lang.String",), source_type.name, static_mask
                )
            )
            if not constructors:
                constructors.append(ConstructorMetadata((), modifiers.PRIVATE))
        elif not is_interface and not constructors:
            access = [k for k in class_keywords if k in ("public", "protected", "private")]
            constructors.append(ConstructorMetadata((), modifiers.encode(access)))

        supertypes = []
        for name in self._supertype_names(source_type, variables):
            loaded = self._load_supertype(name)
            if loaded is not None:
                supertypes.append(loaded)

        logger.debug(
            "Source %s: %d fields, %d methods, %d constructors",
            source_type.name,
            len(fields),
            len(methods),
            len(constructors),
        )
        return ClassMetadata(
            name=source_type.name,
            modifiers=modifiers.encode(class_keywords),
            is_interface=is_interface,
            fields=merge_fields(fields, supertypes),
            methods=merge_methods(methods, supertypes),
            constructors=tuple(constructors),
        )

    def _parameters(self, member, source_type, variables) -> tuple[str, ...]:
        params: list[str] = []
        for param in member.parameters or ():
            type_name = self.type_name(param.type, source_type, variables)
            if param.varargs:
                type_name += "[]"
            params.append(type_name)
        return tuple(params)

    def _method(self, member, source_type, class_variables, is_interface) -> MethodMetadata:
        variables = dict(class_variables)
        for param in member.type_parameters or ():
            variables[param.name] = param.extends or []

        keywords = list(member.modifiers or ())
        if is_interface and "private" not in keywords:
            keywords.append("public")
            if not {"default", "static"} & set(keywords):
                keywords.append("abstract")

        return MethodMetadata(
            name=member.name,
            parameter_types=self._parameters(member, source_type, variables),
            return_type=self.type_name(member.return_type, source_type, variables),
            modifiers=modifiers.encode(keywords),
        )


def _parse_file(java_file: Path):
    try:
        source = java_file.read_text(encoding="utf-8", errors="replace")
    except OSError as e:
        logger.warning("Could not read %s: %s", java_file, e)
        return None

    try:
        return javalang.parse.parse(source)
    except (javalang.parser.JavaSyntaxError, javalang.tokenizer.LexerError) as e:
        logger.warning("Skipping %s, javalang cannot parse it: %s", java_file, e)
        return None


def _index_type(
    types: dict[str, _SourceType],
    node,
    name: str,
    unit: _CompilationUnit,
    enclosing: _SourceType | None,
) -> None:
    source_type = _SourceType(name, node, unit, enclosing)
    types[name] = source_type

    if isinstance(node, javalang.tree.EnumDeclaration):
        body = node.body.declarations if node.body is not None else []
    else:
        body = node.body or []
    for member in body:
        if isinstance(member, _TYPE_DECLARATIONS):
            _index_type(types, member, f"{name}${member.name}", unit, source_type)
