"""Library for preparing disposable copies of a kustomization for editing.

Applying a `KustomizeSource` rewrites the kustomization file, so the edits are
made against a copy of the directory tree in a temporary directory that is
removed when the build finishes.
"""

import asyncio
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
import logging
from pathlib import Path
import shutil
import tempfile
from typing import Any

import aiofiles
from aiofiles.ospath import isfile
import yaml

from .exceptions import GeneratorSourceException, InputException, WorkspaceException
from .source import ConfigMapGenerator

__all__ = [
    "scratch_copy",
    "add_generators",
    "check_generator_sources",
]

_LOGGER = logging.getLogger(__name__)

CONFIG_MAP_GENERATOR = "configMapGenerator"


@asynccontextmanager
async def scratch_copy(path: Path, root: Path | None = None) -> AsyncIterator[Path]:
    """Copy the tree at root into a temporary directory and yield the copy of path.

    The root defaults to the path itself. It should be set to a parent
    directory when the kustomization references resources outside of path
    (e.g. `../base`) so they are copied too.
    """
    path = path.resolve()
    root = root.resolve() if root is not None else path
    if not path.is_relative_to(root):
        raise InputException(f"Path {path} is not within root directory {root}")
    tmp_dir = Path(tempfile.mkdtemp(prefix="kustomize-"))
    try:
        dest = tmp_dir / root.name
        _LOGGER.debug("Copying %s to %s", root, dest)
        try:
            await asyncio.to_thread(shutil.copytree, root, dest, symlinks=True)
        except (OSError, shutil.Error) as err:
            raise WorkspaceException(
                f"Unable to copy {root} to a temporary directory: {err}"
            ) from err
        yield dest / path.relative_to(root)
    finally:
        await asyncio.to_thread(shutil.rmtree, tmp_dir, ignore_errors=True)


async def check_generator_sources(
    directory: Path, generators: list[ConfigMapGenerator]
) -> None:
    """Verify the files read by the generators exist relative to directory."""
    for generator in generators:
        for source_path in generator.source_paths():
            if not await isfile(directory / source_path):
                raise GeneratorSourceException(
                    f"ConfigMap generator '{generator.name}' source file "
                    f"'{source_path}' not found in {directory}"
                )


async def add_generators(
    kustomization_file: Path, entries: list[dict[str, Any]]
) -> None:
    """Append the generator entries to the kustomization file."""
    try:
        async with aiofiles.open(kustomization_file, mode="r") as ks_file:
            content = await ks_file.read()
    except OSError as err:
        raise GeneratorSourceException(
            f"Unable to read kustomization file {kustomization_file}: {err}"
        ) from err
    try:
        doc = yaml.safe_load(content) or {}
    except yaml.YAMLError as err:
        raise InputException(
            f"Unable to parse kustomization file {kustomization_file}: {err}"
        ) from err
    if not isinstance(doc, dict):
        raise InputException(f"Invalid kustomization file {kustomization_file}")
    generators = doc.setdefault(CONFIG_MAP_GENERATOR, [])
    if not isinstance(generators, list):
        raise InputException(
            f"Invalid {CONFIG_MAP_GENERATOR} in kustomization file {kustomization_file}"
        )
    generators.extend(entries)
    async with aiofiles.open(kustomization_file, mode="w") as ks_file:
        await ks_file.write(yaml.dump(doc, sort_keys=False))
