"""Merge inherited public members the way ``Class.getMethods()`` does."""

from __future__ import annotations

from collections.abc import Iterable

from javadecl import modifiers
from javadecl.model import ClassMetadata, FieldMetadata, MethodMetadata


def merge_fields(
    own: Iterable[FieldMetadata], supertypes: Iterable[ClassMetadata]
) -> tuple[FieldMetadata, ...]:
    fields = [f for f in own if modifiers.is_public(f.modifiers)]
    for supertype in supertypes:
        fields.extend(supertype.fields)
    return tuple(fields)


def merge_methods(
    own: Iterable[MethodMetadata], supertypes: Iterable[ClassMetadata]
) -> tuple[MethodMetadata, ...]:
    """Own public methods first, then inherited ones not overridden.

    Static methods of interfaces are not inherited.
    """
    methods = [m for m in own if modifiers.is_public(m.modifiers)]
    seen = {(m.name, m.parameter_types) for m in methods}
    for supertype in supertypes:
        for method in supertype.methods:
            if supertype.is_interface and modifiers.is_static(method.modifiers):
                continue
            key = (method.name, method.parameter_types)
            if key in seen:
                continue
            seen.add(key)
            methods.append(method)
    return tuple(methods)
