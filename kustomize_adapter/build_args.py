"""Library for assembling kustomize command line arguments.

A kustomize build with modifications is a sequence of invocations against a
working copy of the kustomization: `kustomize edit` calls that set name
prefix/suffix, images and labels, followed by `kustomize build`. ConfigMap
generators can only be declared inside the kustomization file, so they are
rendered as `configMapGenerator` entries rather than flags.

```python
from kustomize_adapter.build_args import build_args
from kustomize_adapter.source import KustomizeSource

args = build_args("guestbook", KustomizeSource(name_prefix="dev-"))
# args.edits == [["edit", "set", "nameprefix", "--", "dev-"]]
# args.build == ["build", "guestbook"]
```
"""

from dataclasses import dataclass, field
from typing import Any

from .exceptions import InputException
from .source import KustomizeSource

__all__ = [
    "BuildArgs",
    "build_args",
    "edit_args",
    "generator_entries",
    "parse_build_options",
]


@dataclass(frozen=True)
class BuildArgs:
    """Arguments for each kustomize invocation of a build."""

    edits: list[list[str]] = field(default_factory=list)
    """Arguments of each `kustomize edit` call, run in order before building."""

    generators: list[dict[str, Any]] = field(default_factory=list)
    """Entries appended to `configMapGenerator` in the kustomization file."""

    build: list[str] = field(default_factory=list)
    """Arguments of the `kustomize build` call."""


def parse_build_options(path: str, options: str | None) -> list[str]:
    """Return `kustomize build` arguments for the path and free-form options."""
    args = ["build", path]
    if options:
        args.extend(options.split())
    return args


def _label_arg(labels: dict[str, str]) -> str:
    """Render labels in the `key:value,...` form of `kustomize edit add label`."""
    pairs = []
    for key in sorted(labels):
        value = str(labels[key])
        if not key or ":" in key or "," in key:
            raise InputException(f"Invalid common label key '{key}'")
        if "," in value:
            raise InputException(f"Invalid common label value for '{key}': '{value}'")
        pairs.append(f"{key}:{value}")
    return ",".join(pairs)


def edit_args(source: KustomizeSource) -> list[list[str]]:
    """Return the `kustomize edit` calls that apply the source modifications."""
    edits: list[list[str]] = []
    if source.name_prefix:
        # `--` keeps a prefix starting with a dash from being read as a flag
        edits.append(["edit", "set", "nameprefix", "--", source.name_prefix])
    if source.name_suffix:
        edits.append(["edit", "set", "namesuffix", "--", source.name_suffix])
    for image in source.images:
        edits.append(["edit", "set", "image", image])
    if source.common_labels:
        edits.append(
            ["edit", "add", "label", "--force", _label_arg(source.common_labels)]
        )
    return edits


def generator_entries(source: KustomizeSource) -> list[dict[str, Any]]:
    """Return the `configMapGenerator` entries declared by the source."""
    return [gen.kustomization_entry() for gen in source.config_map_generators]


def build_args(path: str, source: KustomizeSource | None = None) -> BuildArgs:
    """Assemble the arguments for building the kustomization at path."""
    if source is None:
        return BuildArgs(build=parse_build_options(path, None))
    return BuildArgs(
        edits=edit_args(source),
        generators=generator_entries(source),
        build=parse_build_options(path, source.build_options),
    )
