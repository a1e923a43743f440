"""Write generated modules to disk."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path

from javadecl.errors import PersistenceFailure
from javadecl.model import ModuleDeclaration

logger = logging.getLogger(__name__)

EXTENSION = ".ts"


def module_path(output_dir: Path, class_name: str) -> Path:
    """``a.b.C`` is stored as ``<output_dir>/a/b/C.ts``."""
    *packages, simple = class_name.split(".")
    return output_dir.joinpath(*packages, simple + EXTENSION)


def save(declarations: Iterable[ModuleDeclaration], output_dir: Path) -> list[Path]:
    """Write every declaration below *output_dir*, overwriting existing files."""
    written: list[Path] = []
    for declaration in declarations:
        path = module_path(Path(output_dir), declaration.name)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(declaration.contents, encoding="utf-8")
        except OSError as e:
            raise PersistenceFailure(f"Could not write {path}: {e}") from e
        written.append(path)

    logger.debug("Wrote %d modules to %s", len(written), output_dir)
    return written
