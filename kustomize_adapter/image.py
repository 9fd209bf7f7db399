"""Helper functions for extracting container images from manifest objects."""

from collections.abc import Generator
from typing import Any

from .exceptions import KustomizeParseException

__all__ = [
    "extract_images",
]

# Default image key for containers.
IMAGE_KEY = "image"

# Container lists within a pod spec, in the order images are reported.
CONTAINER_KEYS = ["containers", "initContainers"]

# Paths from the object root to a pod spec.
POD_SPEC_PATHS = [
    ["spec"],  # Pod
    ["spec", "template", "spec"],  # Deployment, StatefulSet, DaemonSet, Job, ...
    ["spec", "jobTemplate", "spec", "template", "spec"],  # CronJob
]


def _lookup(doc: dict[str, Any], path: list[str]) -> Any:
    """Return the value at the nested path, or None if absent."""
    value: Any = doc
    for key in path:
        if not isinstance(value, dict):
            return None
        value = value.get(key)
    return value


def _pod_specs(doc: dict[str, Any]) -> Generator[dict[str, Any], None, None]:
    for path in POD_SPEC_PATHS:
        if isinstance(spec := _lookup(doc, path), dict):
            yield spec


def extract_images(doc: dict[str, Any]) -> list[str]:
    """Extract the container images from a Kubernetes object.

    Images are returned in the order they appear, including duplicates.
    """
    images: list[str] = []
    for spec in _pod_specs(doc):
        for container_key in CONTAINER_KEYS:
            containers = spec.get(container_key)
            if not isinstance(containers, list):
                continue
            for container in containers:
                if not isinstance(container, dict) or IMAGE_KEY not in container:
                    continue
                value = container[IMAGE_KEY]
                if not isinstance(value, str):
                    raise KustomizeParseException(
                        f"Expected string for image key '{IMAGE_KEY}' in "
                        f"{doc.get('kind')} "
                        f"'{_lookup(doc, ['metadata', 'name'])}', got type "
                        f"{type(value).__name__}: {value}"
                    )
                images.append(value)
    return images
