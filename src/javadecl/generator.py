"""Orchestrator: walk the reference graph and emit one module per class."""

from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable, Iterable

from javadecl import modifiers, tsast
from javadecl.imports import ImportResolver
from javadecl.members import MemberConverter, private_constructor
from javadecl.model import (
    ClassMetadata,
    ModuleDeclaration,
    PendingModule,
    TraversalContext,
    simple_name,
)
from javadecl.printer import print_source
from javadecl.reflection.base import ReflectionClient
from javadecl.type_mapper import BASIC_OR_JAVA_TYPE, TypeMapper

logger = logging.getLogger(__name__)

RUNTIME_MODULE = "java-bridge"

ProgressCallback = Callable[[str], None]


def is_abstract_or_interface(metadata: ClassMetadata) -> bool:
    return metadata.is_interface or modifiers.is_abstract(metadata.modifiers)


def _runtime_import(uses_basic_or_java_type: bool) -> tsast.ImportDeclaration:
    names = ["importClass", "JavaClass"]
    if uses_basic_or_java_type:
        names.append(BASIC_OR_JAVA_TYPE)
    return tsast.ImportDeclaration(
        tuple(tsast.ImportSpecifier(n) for n in names), RUNTIME_MODULE
    )


def _export_statements(
    class_name: str, abstract_or_interface: bool
) -> list[tsast.Statement]:
    simple = simple_name(class_name)
    export_class = tsast.ClassDeclaration(
        modifiers=("export",),
        name=simple,
        extends=tsast.ImportClassCall(simple + "Class", class_name),
        members=(private_constructor(),) if abstract_or_interface else (),
        comments=(
            tsast.DocComment(
                (
                    f"Class {class_name}.",
                    "",
                    "This actually imports the java class for further use.",
                    f"The class {simple}Class only defines types, "
                    "this is the class you should actually import.",
                    "Please note that this statement imports the underlying "
                    "java class at runtime, which may take a while.",
                    "This was generated by javadecl.",
                    "You should probably not edit this.",
                )
            ),
        ),
    )
    return [export_class, tsast.ExportDefault(simple)]


def build_module(
    metadata: ClassMetadata, resolved: Iterable[str] = ()
) -> tuple[ModuleDeclaration, list[str]]:
    """Convert one class.

    Returns its module and the referenced classes that were not in
    *resolved*, in first-reference order.
    """
    class_name = metadata.name
    simple = simple_name(class_name)
    resolver = ImportResolver(class_name, resolved)
    mapper = TypeMapper(class_name, resolver)
    converter = MemberConverter(class_name, mapper)

    members: list[tsast.ClassMember] = []
    members.extend(converter.convert_fields(metadata.fields))
    members.extend(converter.convert_methods(metadata.methods))

    abstract_or_interface = is_abstract_or_interface(metadata)
    if not abstract_or_interface:
        members.extend(converter.convert_constructors(metadata.constructors))

    declaration = tsast.ClassDeclaration(
        modifiers=("export", "declare"),
        name=simple + "Class",
        extends=tsast.Identifier("JavaClass"),
        members=tuple(members),
        comments=(
            tsast.DocComment(
                (
                    f"This class just defines types, you should import {simple} "
                    "instead of this.",
                    "This was generated by javadecl.",
                    "You should probably not edit this.",
                )
            ),
        ),
    )

    source = tsast.SourceFile(
        (
            _runtime_import(mapper.uses_basic_or_java_type),
            *resolver.import_declarations(),
            tsast.BlankLine(),
            declaration,
            tsast.BlankLine(),
            *_export_statements(class_name, abstract_or_interface),
        )
    )
    logger.debug(
        "%s: %d members, %d new references",
        class_name,
        len(members),
        len(resolver.additional_imports),
    )
    return ModuleDeclaration(class_name, print_source(source)), resolver.additional_imports


class DefinitionGenerator:
    """Generates declarations for a class and everything it references.

    Example::

        generator = DefinitionGenerator(JavapReflectionClient())
        modules = generator.generate("java.lang.String")
        save(modules, Path("./project"))

    *progress* is called with each class name as its processing starts.
    """

    def __init__(
        self,
        client: ReflectionClient,
        progress: ProgressCallback | None = None,
    ) -> None:
        self.client = client
        self.progress = progress

    def _open(self, class_name: str, context: TraversalContext) -> None:
        context.enter(class_name)
        if self.progress is not None:
            self.progress(class_name)

        metadata = self.client.load_class(class_name)
        module, additional = build_module(metadata, context.visited)
        context.pending.append(PendingModule(module, deque(additional)))

    def generate(
        self, class_name: str, context: TraversalContext | None = None
    ) -> list[ModuleDeclaration]:
        """Generate *class_name* and every class it transitively references.

        Dependencies come before the classes referencing them.  Classes
        already in ``context.visited`` produce nothing.
        """
        if context is None:
            context = TraversalContext()
        if class_name in context.visited:
            return []

        depth = len(context.pending)
        self._open(class_name, context)
        results: list[ModuleDeclaration] = []
        while len(context.pending) > depth:
            frame = context.pending[-1]
            while frame.imports and frame.imports[0] in context.visited:
                frame.imports.popleft()
            if frame.imports:
                self._open(frame.imports.popleft(), context)
            else:
                context.pending.pop()
                results.append(frame.module)

        logger.debug("%s: generated %d modules", class_name, len(results))
        return results

    def generate_all(
        self, class_names: Iterable[str], context: TraversalContext | None = None
    ) -> list[ModuleDeclaration]:
        if context is None:
            context = TraversalContext()
        results: list[ModuleDeclaration] = []
        for class_name in class_names:
            results.extend(self.generate(class_name, context))
        return results
