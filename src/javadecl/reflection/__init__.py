"""Reflection clients supplying class metadata to the generator."""

from javadecl.reflection.base import ReflectionClient
from javadecl.reflection.javap import JavapReflectionClient
from javadecl.reflection.source import SourceReflectionClient

__all__ = [
    "JavapReflectionClient",
    "ReflectionClient",
    "SourceReflectionClient",
]
