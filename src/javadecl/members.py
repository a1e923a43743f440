"""Convert reflected members into TypeScript class members."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from javadecl import modifiers, tsast
from javadecl.model import (
    ConstructorMetadata,
    FieldMetadata,
    MethodDeclaration,
    MethodMetadata,
)
from javadecl.type_mapper import TypeMapper

logger = logging.getLogger(__name__)

# Methods which conventionally never return null.
NON_NULL_RETURN_METHODS = frozenset(
    {"toString", "wait", "getClass", "hashCode", "notify", "notifyAll", "equals"}
)

FACTORY_METHOD = "newInstance"
SYNC_SUFFIX = "Sync"


def _section(title: str) -> tsast.LineComment:
    return tsast.LineComment(f" ================== {title} ==================")


def _parameter_docs(parameters: Iterable[str]) -> list[str]:
    return [f"@param var{i} original type: '{p}'" for i, p in enumerate(parameters)]


def unique_fields(fields: Iterable[FieldMetadata]) -> list[FieldMetadata]:
    """Drop fields whose name was already seen, keeping the first."""
    seen: set[str] = set()
    result: list[FieldMetadata] = []
    for f in fields:
        if f.name not in seen:
            seen.add(f.name)
            result.append(f)
    return result


def group_methods(
    methods: Iterable[MethodMetadata],
) -> dict[str, list[MethodDeclaration]]:
    """Group the public methods by name, in discovery order."""
    result: dict[str, list[MethodDeclaration]] = {}
    for method in methods:
        if not modifiers.is_public(method.modifiers):
            continue
        declaration = MethodDeclaration(
            return_type=method.return_type,
            parameters=list(method.parameter_types),
            is_static=modifiers.is_static(method.modifiers),
        )
        result.setdefault(method.name, []).append(declaration)
    return result


class MemberConverter:
    """Builds the members of the ``<Simple>Class`` declaration."""

    def __init__(self, class_name: str, mapper: TypeMapper) -> None:
        self.class_name = class_name
        self.mapper = mapper

    def convert_fields(self, fields: Iterable[FieldMetadata]) -> list[tsast.Property]:
        result: list[tsast.Property] = []
        for f in unique_fields(fields):
            if not modifiers.is_public(f.modifiers):
                continue
            ts_modifiers = ["public"]
            if modifiers.is_static(f.modifiers):
                ts_modifiers.append("static")
            if modifiers.is_final(f.modifiers):
                ts_modifiers.append("readonly")
            result.append(
                tsast.Property(
                    modifiers=tuple(ts_modifiers),
                    name=f.name,
                    type=self.mapper.map_type(f.type_name, False),
                    comments=(
                        _section(f"Field {f.name}"),
                        tsast.DocComment((f"Original type: '{f.type_name}'",)),
                    ),
                )
            )
        return result

    def convert_parameters(self, parameters: Iterable[str]) -> tuple[tsast.Parameter, ...]:
        return tuple(
            tsast.Parameter(f"var{i}", self.mapper.map_type(p, True))
            for i, p in enumerate(parameters)
        )

    def create_method(
        self,
        declaration: MethodDeclaration,
        name: str,
        index: int,
        is_sync: bool,
        non_null_return: bool,
    ) -> tsast.Method:
        ts_modifiers = ["public"]
        if declaration.is_static:
            ts_modifiers.append("static")

        return_type = self.mapper.map_type(
            declaration.return_type, False, not non_null_return
        )
        if not is_sync:
            return_type = tsast.promise(return_type)

        comments: list[tsast.Comment] = []
        if index == 0:
            comments.append(_section(f"Method {name}"))
        comments.append(
            tsast.DocComment(
                (
                    *_parameter_docs(declaration.parameters),
                    f"@return original return type: '{declaration.return_type}'",
                )
            )
        )

        return tsast.Method(
            modifiers=tuple(ts_modifiers),
            name=name + SYNC_SUFFIX if is_sync else name,
            parameters=self.convert_parameters(declaration.parameters),
            return_type=return_type,
            comments=tuple(comments),
        )

    def convert_method(
        self, name: str, overloads: list[MethodDeclaration]
    ) -> list[tsast.Method]:
        """Emit an async and a sync declaration for every overload."""
        non_null_return = name in NON_NULL_RETURN_METHODS
        result: list[tsast.Method] = []
        for i, declaration in enumerate(overloads):
            result.append(self.create_method(declaration, name, i, False, non_null_return))
            result.append(self.create_method(declaration, name, i, True, non_null_return))
        return result

    def convert_methods(self, methods: Iterable[MethodMetadata]) -> list[tsast.Method]:
        result: list[tsast.Method] = []
        for name, overloads in group_methods(methods).items():
            result.extend(self.convert_method(name, overloads))
        return result

    def convert_constructors(
        self, constructors: Iterable[ConstructorMetadata]
    ) -> list[tsast.ClassMember]:
        """Emit ``newInstance`` factories followed by the constructors.

        Only public constructors are considered.
        """
        signatures = [
            list(c.parameter_types)
            for c in constructors
            if modifiers.is_public(c.modifiers)
        ]

        factories = [
            self.create_method(
                MethodDeclaration(
                    return_type=self.class_name, parameters=params, is_static=True
                ),
                FACTORY_METHOD,
                i,
                False,
                True,
            )
            for i, params in enumerate(signatures)
        ]

        declared: list[tsast.Constructor] = []
        for i, params in enumerate(signatures):
            comments: list[tsast.Comment] = []
            if i == 0:
                comments.append(_section("Constructors"))
            if params:
                comments.append(tsast.DocComment(tuple(_parameter_docs(params))))
            declared.append(
                tsast.Constructor(
                    modifiers=("public",),
                    parameters=self.convert_parameters(params),
                    comments=tuple(comments),
                )
            )

        logger.debug("%s: %d public constructors", self.class_name, len(signatures))
        return [*factories, *declared]


def private_constructor() -> tsast.Constructor:
    """The stub that keeps abstract classes and interfaces uninstantiable."""
    return tsast.Constructor(
        modifiers=("private",),
        body=(tsast.SuperCall(),),
        comments=(
            tsast.DocComment(
                (
                    "Private constructor to prevent instantiation",
                    "as this is either an abstract class or an interface",
                )
            ),
        ),
    )
