"""Reflection client protocol — all metadata sources conform to this interface."""

from __future__ import annotations

from typing import Protocol

from javadecl.model import ClassMetadata


class ReflectionClient(Protocol):
    """Protocol for foreign class metadata sources."""

    def load_class(self, class_name: str) -> ClassMetadata:
        """Return the metadata for *class_name*.

        Raises :class:`~javadecl.errors.ResolutionFailure` (usually
        ``ClassNotFound`` or ``AccessDenied``) when it cannot be resolved.
        """
        ...
