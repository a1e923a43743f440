"""A small TypeScript syntax tree covering what declaration modules need.

Nodes are immutable; :mod:`javadecl.printer` renders them to text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


# -- type expressions --------------------------------------------------------


@dataclass(frozen=True)
class KeywordType:
    keyword: str  # "number", "string", "boolean", "bigint", "void"


@dataclass(frozen=True)
class NullType:
    pass


@dataclass(frozen=True)
class TypeReference:
    name: str
    type_arguments: tuple[TypeNode, ...] = ()


@dataclass(frozen=True)
class ArrayType:
    element: TypeNode


@dataclass(frozen=True)
class UnionType:
    types: tuple[TypeNode, ...]


TypeNode = Union[KeywordType, NullType, TypeReference, ArrayType, UnionType]

NUMBER = KeywordType("number")
BIGINT = KeywordType("bigint")
STRING = KeywordType("string")
BOOLEAN = KeywordType("boolean")
VOID = KeywordType("void")
NULL = NullType()


def union(*types: TypeNode) -> TypeNode:
    """Build a union, collapsing the single-member case."""
    if len(types) == 1:
        return types[0]
    return UnionType(tuple(types))


def promise(inner: TypeNode) -> TypeReference:
    return TypeReference("Promise", (inner,))


# -- comments ----------------------------------------------------------------


@dataclass(frozen=True)
class LineComment:
    text: str


@dataclass(frozen=True)
class DocComment:
    lines: tuple[str, ...]


Comment = Union[LineComment, DocComment]


# -- declarations ------------------------------------------------------------


@dataclass(frozen=True)
class Parameter:
    name: str
    type: TypeNode


@dataclass(frozen=True)
class Property:
    modifiers: tuple[str, ...]
    name: str
    type: TypeNode
    comments: tuple[Comment, ...] = ()


@dataclass(frozen=True)
class Method:
    modifiers: tuple[str, ...]
    name: str
    parameters: tuple[Parameter, ...]
    return_type: TypeNode
    comments: tuple[Comment, ...] = ()


@dataclass(frozen=True)
class SuperCall:
    pass


@dataclass(frozen=True)
class Constructor:
    modifiers: tuple[str, ...]
    parameters: tuple[Parameter, ...] = ()
    body: tuple[SuperCall, ...] | None = None  # None: signature only
    comments: tuple[Comment, ...] = ()


ClassMember = Union[Property, Method, Constructor]


@dataclass(frozen=True)
class Identifier:
    text: str


@dataclass(frozen=True)
class ImportClassCall:
    """``importClass<typeof TypeName>("java.class.Name")``"""

    type_name: str
    class_name: str


@dataclass(frozen=True)
class ClassDeclaration:
    modifiers: tuple[str, ...]
    name: str
    extends: Identifier | ImportClassCall
    members: tuple[ClassMember, ...] = ()
    comments: tuple[Comment, ...] = ()


@dataclass(frozen=True)
class ImportSpecifier:
    name: str
    alias: str | None = None


@dataclass(frozen=True)
class ImportDeclaration:
    specifiers: tuple[ImportSpecifier, ...]
    module: str


@dataclass(frozen=True)
class ExportDefault:
    name: str


@dataclass(frozen=True)
class BlankLine:
    pass


Statement = Union[ImportDeclaration, ClassDeclaration, ExportDefault, BlankLine]


@dataclass(frozen=True)
class SourceFile:
    statements: tuple[Statement, ...] = field(default_factory=tuple)
