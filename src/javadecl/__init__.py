"""Generate TypeScript declarations for Java classes via reflection metadata."""

from javadecl.errors import (
    AccessDenied,
    ClassNotFound,
    ConfigError,
    DeclarationError,
    PersistenceFailure,
    ResolutionFailure,
    UnsupportedType,
)
from javadecl.generator import DefinitionGenerator
from javadecl.model import ModuleDeclaration, TraversalContext
from javadecl.persistence import save

__all__ = [
    "AccessDenied",
    "ClassNotFound",
    "ConfigError",
    "DeclarationError",
    "DefinitionGenerator",
    "ModuleDeclaration",
    "PersistenceFailure",
    "ResolutionFailure",
    "TraversalContext",
    "UnsupportedType",
    "save",
]
