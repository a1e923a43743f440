"""Read class metadata from compiled classes with the JDK's ``javap`` tool."""

from __future__ import annotations

import logging
import os
import re
import shutil
import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field

from javadecl import modifiers
from javadecl.errors import AccessDenied, ClassNotFound, ResolutionFailure
from javadecl.model import (
    ClassMetadata,
    ConstructorMetadata,
    FieldMetadata,
    MethodMetadata,
)
from javadecl.reflection._inherit import merge_fields, merge_methods

logger = logging.getLogger(__name__)

OBJECT_CLASS = "java.lang.Object"

_PRIMITIVE_CODES = {
    "B": "byte",
    "C": "char",
    "D": "double",
    "F": "float",
    "I": "int",
    "J": "long",
    "S": "short",
    "Z": "boolean",
    "V": "void",
}

# javap -public -s output:
#   Compiled from "Foo.java"
#   public class pkg.Foo extends pkg.Base implements pkg.Iface {
#     public int count;
#       descriptor: I
#     public pkg.Foo(java.lang.String);
#       descriptor: (Ljava/lang/String;)V
#   }
_CLASS_RE = re.compile(
    r"^(?P<modifiers>(?:[\w-]+\s+)*?)(?P<kind>class|interface|enum|record|@interface)\s+"
    r"(?P<name>[^\s<{]+)(?P<rest>.*?)\s*\{\s*$"
)
_DESCRIPTOR_RE = re.compile(r"^\s+descriptor:\s+(\S+)\s*$")
_NOT_FOUND_RE = re.compile(r"class not found", re.IGNORECASE)


def strip_generics(text: str) -> str:
    """Remove every ``<...>`` group, nested ones included."""
    result: list[str] = []
    depth = 0
    for ch in text:
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth = max(depth - 1, 0)
        elif depth == 0:
            result.append(ch)
    return "".join(result)


def _parse_field_type(descriptor: str, i: int) -> tuple[str, int]:
    dimensions = 0
    while descriptor[i] == "[":
        dimensions += 1
        i += 1

    code = descriptor[i]
    if code == "L":
        end = descriptor.index(";", i)
        name = descriptor[i + 1 : end].replace("/", ".")
        i = end + 1
    elif code in _PRIMITIVE_CODES:
        name = _PRIMITIVE_CODES[code]
        i += 1
    else:
        raise ValueError(f"Bad descriptor {descriptor!r} at {i}")
    return name + "[]" * dimensions, i


def parse_descriptor(descriptor: str) -> tuple[list[str] | None, str]:
    """Convert a JVM descriptor to type names.

    Examples:
        (I[Ljava/lang/String;)V -> (["int", "java.lang.String[]"], "void")
        Ljava/util/Map$Entry;   -> (None, "java.util.Map$Entry")
    """
    if not descriptor.startswith("("):
        type_name, _ = _parse_field_type(descriptor, 0)
        return None, type_name

    parameters: list[str] = []
    i = 1
    while descriptor[i] != ")":
        type_name, i = _parse_field_type(descriptor, i)
        parameters.append(type_name)
    return_type, _ = _parse_field_type(descriptor, i + 1)
    return parameters, return_type


def _split_types(text: str) -> list[str]:
    return [t.strip() for t in text.split(",") if t.strip()]


def _parse_heritage(rest: str) -> tuple[str | None, list[str]]:
    """Return (superclass, interfaces) from the text after the class name."""
    rest = strip_generics(rest)
    clauses = re.split(r"\b(extends|implements|permits)\b", rest)
    extends: list[str] = []
    implements: list[str] = []
    for keyword, value in zip(clauses[1::2], clauses[2::2]):
        if keyword == "extends":
            extends = _split_types(value)
        elif keyword == "implements":
            implements = _split_types(value)
    return (extends[0] if extends else None), implements + extends[1:]


@dataclass
class JavapClass:
    """A class as printed by one ``javap`` run, inherited members excluded."""

    name: str
    modifiers: int
    is_interface: bool
    superclass: str | None = None
    interfaces: list[str] = field(default_factory=list)
    fields: list[FieldMetadata] = field(default_factory=list)
    methods: list[MethodMetadata] = field(default_factory=list)
    constructors: list[ConstructorMetadata] = field(default_factory=list)


def parse_javap_output(output: str) -> JavapClass | None:
    """Parse the output of ``javap -public -s`` for a single class."""
    parsed: JavapClass | None = None
    member: str | None = None

    for line in output.splitlines():
        if parsed is None:
            m = _CLASS_RE.match(line.strip())
            if m is None:
                continue
            keywords = m.group("modifiers").split()
            is_interface = m.group("kind") in ("interface", "@interface")
            if is_interface:
                keywords += ["interface", "abstract"]
            superclass, interfaces = _parse_heritage(m.group("rest"))
            if is_interface:
                interfaces = ([superclass] if superclass else []) + interfaces
                superclass = None
            parsed = JavapClass(
                name=m.group("name"),
                modifiers=modifiers.encode(keywords),
                is_interface=is_interface,
                superclass=superclass,
                interfaces=interfaces,
            )
            continue

        dm = _DESCRIPTOR_RE.match(line)
        if dm is not None:
            if member is not None:
                _add_member(parsed, member, dm.group(1))
            member = None
            continue

        stripped = line.strip()
        if stripped.endswith(";") and "{" not in stripped:
            member = stripped[:-1]
        else:
            member = None

    return parsed


def _add_member(parsed: JavapClass, declaration: str, descriptor: str) -> None:
    declaration = strip_generics(declaration)
    parameters, type_name = parse_descriptor(descriptor)
    head = declaration.split("(", 1)[0] if parameters is not None else declaration
    tokens = head.split()
    if not tokens:
        return
    name = tokens[-1]
    mask = modifiers.encode(tokens[:-1])
    if parsed.is_interface and "private" not in tokens:
        mask |= modifiers.PUBLIC

    if parameters is None:
        parsed.fields.append(FieldMetadata(name, type_name, mask))
    elif name == parsed.name:
        parsed.constructors.append(ConstructorMetadata(tuple(parameters), mask))
    else:
        parsed.methods.append(MethodMetadata(name, tuple(parameters), type_name, mask))


class JavapReflectionClient:
    """Reflection client backed by ``javap`` on a classpath.

    Inherited public fields and methods are merged in from the superclass
    and superinterfaces, which are loaded (and cached) the same way.
    """

    def __init__(
        self,
        classpath: Sequence[str] = (),
        javap: str | None = None,
    ) -> None:
        self.classpath = list(classpath)
        self.javap = javap
        self._cache: dict[str, ClassMetadata] = {}

    def _javap_path(self, class_name: str) -> str:
        path = self.javap or shutil.which("javap")
        if not path:
            raise ResolutionFailure(
                class_name, "javap not found on PATH, ensure a JDK is installed"
            )
        return path

    def describe(self, class_name: str) -> JavapClass:
        """Run ``javap`` for *class_name* and parse its declared members."""
        cmd = [self._javap_path(class_name), "-public", "-s"]
        if self.classpath:
            cmd += ["-cp", os.pathsep.join(self.classpath)]
        cmd.append(class_name)

        logger.debug("Running %s", " ".join(cmd))
        try:
            result = subprocess.run(cmd, capture_output=True, text=True)
        except OSError as e:
            raise ResolutionFailure(class_name, f"could not run javap: {e}") from e

        output = result.stdout + result.stderr
        if _NOT_FOUND_RE.search(output):
            raise ClassNotFound(class_name)
        if result.returncode != 0:
            raise ResolutionFailure(class_name, output.strip() or "javap failed")

        parsed = parse_javap_output(result.stdout)
        if parsed is None:
            # -public prints nothing but the source line for non-public classes.
            raise AccessDenied(class_name)
        logger.debug(
            "javap %s: %d fields, %d methods, %d constructors",
            class_name,
            len(parsed.fields),
            len(parsed.methods),
            len(parsed.constructors),
        )
        return parsed

    def load_class(self, class_name: str) -> ClassMetadata:
        cached = self._cache.get(class_name)
        if cached is not None:
            return cached

        parsed = self.describe(class_name)
        superclass = parsed.superclass
        if superclass is None and not parsed.is_interface and class_name != OBJECT_CLASS:
            superclass = OBJECT_CLASS

        supertypes = [self.load_class(s) for s in ([superclass] if superclass else [])]
        supertypes += [self.load_class(i) for i in parsed.interfaces]

        metadata = ClassMetadata(
            name=class_name,
            modifiers=parsed.modifiers,
            is_interface=parsed.is_interface,
            fields=merge_fields(parsed.fields, supertypes),
            methods=merge_methods(parsed.methods, supertypes),
            constructors=tuple(parsed.constructors),
        )
        self._cache[class_name] = metadata
        return metadata
