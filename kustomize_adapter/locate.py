"""Library for finding the kustomization file in a directory."""

import logging
from pathlib import Path

from aiofiles.ospath import isdir, isfile

from .exceptions import KustomizationNotFoundError

__all__ = [
    "KUSTOMIZATION_FILENAMES",
    "is_kustomization",
    "find_kustomization",
]

_LOGGER = logging.getLogger(__name__)

# Recognized kustomization file names in priority order.
KUSTOMIZATION_FILENAMES = (
    "kustomization.yaml",
    "kustomization.yml",
    "Kustomization",
)


def is_kustomization(filename: str) -> bool:
    """Return true if the bare filename is a recognized kustomization file."""
    return filename in KUSTOMIZATION_FILENAMES


async def find_kustomization(path: Path) -> Path:
    """Return the path of the kustomization file within the directory."""
    if not await isdir(path):
        raise KustomizationNotFoundError(
            f"Kustomization path is not a directory: {path}"
        )
    for filename in KUSTOMIZATION_FILENAMES:
        candidate = path / filename
        if await isfile(candidate):
            _LOGGER.debug("Found kustomization %s", candidate)
            return candidate
    raise KustomizationNotFoundError(
        f"Unable to find one of {list(KUSTOMIZATION_FILENAMES)} in {path}"
    )
