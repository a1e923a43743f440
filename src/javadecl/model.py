"""Data model shared by the reflection adapters and the generator."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field


@dataclass(frozen=True)
class FieldMetadata:
    """A field as reported by the reflection client."""

    name: str
    type_name: str
    modifiers: int


@dataclass(frozen=True)
class MethodMetadata:
    """A method as reported by the reflection client."""

    name: str
    parameter_types: tuple[str, ...]
    return_type: str
    modifiers: int


@dataclass(frozen=True)
class ConstructorMetadata:
    parameter_types: tuple[str, ...]
    modifiers: int


@dataclass(frozen=True)
class ClassMetadata:
    """Everything the generator needs to know about one foreign class.

    ``fields`` and ``methods`` follow ``Class.getFields()`` /
    ``Class.getMethods()`` (inherited public members included), while
    ``constructors`` follows ``Class.getDeclaredConstructors()``.
    """

    name: str
    modifiers: int
    is_interface: bool = False
    fields: tuple[FieldMetadata, ...] = ()
    methods: tuple[MethodMetadata, ...] = ()
    constructors: tuple[ConstructorMetadata, ...] = ()


@dataclass
class MethodDeclaration:
    """One public overload of a method, reduced to its type names."""

    return_type: str
    parameters: list[str]
    is_static: bool


@dataclass(frozen=True)
class ModuleDeclaration:
    """A generated TypeScript module for one foreign class."""

    name: str  # fully-qualified class name
    contents: str


@dataclass
class PendingModule:
    """A generated module still waiting on some of its references."""

    module: ModuleDeclaration
    imports: deque[str]


@dataclass
class TraversalContext:
    """State shared by every class generated in one run.

    A class enters ``visited`` as soon as its processing starts, which is
    what terminates self- and mutually-referencing classes.  ``pending``
    is the depth-first stack of modules whose references are still being
    generated, innermost last.
    """

    visited: set[str] = field(default_factory=set)
    pending: list[PendingModule] = field(default_factory=list)

    @property
    def pending_imports(self) -> list[str]:
        """References not yet generated, in the order they will be tried."""
        return [name for frame in reversed(self.pending) for name in frame.imports]

    def enter(self, class_name: str) -> bool:
        """Mark *class_name* visited; return False if it already was."""
        if class_name in self.visited:
            return False
        self.visited.add(class_name)
        return True


def simple_name(class_name: str) -> str:
    return class_name.rsplit(".", 1)[-1]


def identifier(class_name: str) -> str:
    """Flatten a dotted class name into a TypeScript identifier."""
    return class_name.replace(".", "_")
