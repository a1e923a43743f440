"""Orchestrator: configure → generate → save."""

from __future__ import annotations

import logging
import os
import time
from collections.abc import Sequence
from pathlib import Path

from javadecl.config import Config
from javadecl.generator import DefinitionGenerator, ProgressCallback
from javadecl.model import TraversalContext
from javadecl.persistence import save
from javadecl.reflection.base import ReflectionClient
from javadecl.reflection.javap import JavapReflectionClient
from javadecl.reflection.source import SourceReflectionClient

logger = logging.getLogger(__name__)


def split_path_list(values: Sequence[str]) -> list[str]:
    """Flatten ``os.pathsep``-separated entries, dropping empty ones."""
    entries: list[str] = []
    for value in values:
        entries.extend(e for e in value.split(os.pathsep) if e)
    return entries


def create_client(config: Config) -> ReflectionClient:
    """Build the reflection client described by *config*."""
    client: ReflectionClient = JavapReflectionClient(
        classpath=split_path_list(config.classpath), javap=config.javap
    )
    if config.sourcepath:
        client = SourceReflectionClient(
            [Path(p) for p in split_path_list(config.sourcepath)], fallback=client
        )
    return client


def run(
    class_names: Sequence[str],
    output_dir: Path,
    config: Config,
    *,
    client: ReflectionClient | None = None,
    progress: ProgressCallback | None = None,
) -> int:
    """Generate and save declarations for *class_names*.

    Every root shares one traversal, and each root's modules are written as
    soon as it completes.  Returns the number of modules written.
    """
    start = time.perf_counter()
    if client is None:
        client = create_client(config)

    generator = DefinitionGenerator(client, progress)
    context = TraversalContext()
    count = 0
    for class_name in class_names:
        modules = generator.generate(class_name, context)
        save(modules, output_dir)
        count += len(modules)
        logger.debug("%s: saved %d modules", class_name, len(modules))

    logger.info(
        "Converted %d classes in %.1f seconds", count, time.perf_counter() - start
    )
    return count
