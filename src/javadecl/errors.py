"""Exception hierarchy for declaration generation."""

from __future__ import annotations


class DeclarationError(Exception):
    """Base class for every failure raised by javadecl."""


class ResolutionFailure(DeclarationError):
    """A foreign class could not be resolved or its metadata read."""

    def __init__(self, class_name: str, reason: str) -> None:
        super().__init__(f"{class_name}: {reason}")
        self.class_name = class_name
        self.reason = reason


class ClassNotFound(ResolutionFailure):
    def __init__(self, class_name: str) -> None:
        super().__init__(class_name, "class not found")


class AccessDenied(ResolutionFailure):
    def __init__(self, class_name: str) -> None:
        super().__init__(class_name, "class is not accessible")


class UnsupportedType(DeclarationError):
    """A foreign type name matched no mapping rule."""

    def __init__(self, type_name: str) -> None:
        super().__init__(f"Unsupported type name: {type_name!r}")
        self.type_name = type_name


class PersistenceFailure(DeclarationError):
    """A generated module could not be written."""


class ConfigError(DeclarationError):
    """The configuration file holds invalid values."""
