"""Import bookkeeping and relative module paths between classes."""

from __future__ import annotations

import logging
from collections.abc import Collection

from javadecl import tsast
from javadecl.model import identifier, simple_name

logger = logging.getLogger(__name__)


def relative_import_path(importer: str, imported: str) -> str:
    """Return the module specifier *importer* uses to reach *imported*.

    Both names are dotted class names; packages become directories and the
    simple name becomes the file name::

        >>> relative_import_path("a.b.C", "a.b.d.E")
        './d/E'
        >>> relative_import_path("a.b.C", "x.y.Z")
        './../../x/y/Z'
    """
    importer_parts = importer.split(".")
    imported_parts = imported.split(".")

    common = 0
    for left, right in zip(importer_parts, imported_parts):
        if left != right:
            break
        common += 1

    # The importer's own simple name is a file, not a directory.
    ups = max(len(importer_parts) - common - 1, 0)
    return "./" + "../" * ups + "/".join(imported_parts[common:])


class ImportResolver:
    """Tracks the classes referenced while one class is being generated.

    ``imports_to_resolve`` lists every referenced class in first-reference
    order; ``additional_imports`` is the subset that was not yet known to be
    resolved when first referenced and is what the generator recurses into.
    """

    def __init__(self, class_name: str, resolved: Collection[str] = ()) -> None:
        self.class_name = class_name
        self.resolved = resolved
        self.imports_to_resolve: list[str] = []
        self.additional_imports: list[str] = []

    def reference(self, name: str) -> None:
        if name not in self.imports_to_resolve:
            self.imports_to_resolve.append(name)
        if name not in self.resolved and name not in self.additional_imports:
            self.additional_imports.append(name)

    def import_declarations(self) -> list[tsast.ImportDeclaration]:
        declarations = [
            tsast.ImportDeclaration(
                (tsast.ImportSpecifier(simple_name(name), identifier(name)),),
                relative_import_path(self.class_name, name),
            )
            for name in self.imports_to_resolve
            if name != self.class_name
        ]
        logger.debug("%s: %d imports", self.class_name, len(declarations))
        return declarations
