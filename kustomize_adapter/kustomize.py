"""Library for building kustomizations with the kustomize command line tool.

Kustomize build applies overlays and generators and outputs a stream of
resources for the cluster. This library locates the kustomization file,
optionally applies modifications from a `KustomizeSource` to a disposable copy
of the directory, runs `kustomize build` and parses the output.

This example returns the objects and images of a kustomization:
```python
from pathlib import Path

from kustomize_adapter import kustomize
from kustomize_adapter.source import KustomizeSource

result = await kustomize.build(
    Path("/path/to/overlay"),
    KustomizeSource(name_prefix="dev-", images=["nginx:1.15.5"]),
)
for obj in result.objects:
    print(f"Found object {obj['kind']} {obj['metadata']['name']}")
print(result.images)
```

The version of the kustomize binary is available with:
```python
print(await kustomize.version(short=True))
```
"""

from dataclasses import replace
import logging
from pathlib import Path
from typing import Any

import yaml

from .build_args import build_args, parse_build_options
from .command import CommandRunner, Runner
from .config import KustomizeConfig
from .context import trace_context
from .exceptions import KustomizeException, KustomizeParseException
from .image import extract_images
from .locate import find_kustomization
from .source import BuildResult, KustomizeSource
from .workspace import add_generators, check_generator_sources, scratch_copy

_LOGGER = logging.getLogger(__name__)

__all__ = [
    "Kustomize",
    "build",
    "version",
    "parse_objects",
    "parse_output",
]


def parse_objects(out: bytes) -> list[dict[str, Any]]:
    """Decode each document of the kustomize build output."""
    try:
        docs = list(yaml.safe_load_all(out.decode("utf-8")))
    except (yaml.YAMLError, UnicodeDecodeError) as err:
        raise KustomizeParseException(
            f"Unable to parse kustomize build output: {err}"
        ) from err
    objects: list[dict[str, Any]] = []
    for doc in docs:
        if doc is None:
            continue
        if not isinstance(doc, dict):
            raise KustomizeParseException(
                f"Unexpected document in kustomize build output: {doc!r}"
            )
        objects.append(doc)
    return objects


def parse_output(out: bytes) -> BuildResult:
    """Parse the kustomize build output into objects and their images."""
    objects = parse_objects(out)
    images: list[str] = []
    for obj in objects:
        images.extend(extract_images(obj))
    return BuildResult(objects=objects, images=images)


class Kustomize:
    """Library for issuing kustomize commands."""

    def __init__(
        self, config: KustomizeConfig | None = None, runner: Runner | None = None
    ) -> None:
        """Initialize Kustomize."""
        self._config = config or KustomizeConfig()
        self._runner = runner or CommandRunner(
            self._config.binary,
            exc=KustomizeException,
            timeout=self._config.timeout,
            env=self._config.env,
        )

    async def build(
        self,
        path: Path,
        source: KustomizeSource | None = None,
        repo_root: Path | None = None,
    ) -> BuildResult:
        """Build the kustomization in path, applying the source modifications.

        The directory tree at `repo_root` (or just `path`) is copied before
        any modification is made, so files of the caller are never changed.
        """
        with trace_context("build", str(path)):
            await find_kustomization(path)
            args = build_args(str(path), source)
            if source is None or not source.needs_edit:
                out = await self._runner.run(args.build)
                return parse_output(out)

            async with scratch_copy(path, repo_root) as work_dir:
                build = parse_build_options(str(work_dir), source.build_options)
                args = replace(args, build=build)
                await check_generator_sources(work_dir, source.config_map_generators)
                for edit in args.edits:
                    with trace_context("edit", " ".join(edit[1:3])):
                        await self._runner.run(edit, cwd=work_dir)
                if args.generators:
                    kustomization = await find_kustomization(work_dir)
                    await add_generators(kustomization, args.generators)
                _LOGGER.debug("Building modified copy %s of %s", work_dir, path)
                out = await self._runner.run(args.build)
                return parse_output(out)

    async def version(self, short: bool = False) -> str:
        """Return the version reported by the kustomize binary."""
        args = ["version"]
        if short:
            args.append("--short")
        out = await self._runner.run(args)
        if not (result := out.decode("utf-8").strip()):
            raise KustomizeException("kustomize version returned empty output")
        return result


async def build(
    path: Path,
    source: KustomizeSource | None = None,
    repo_root: Path | None = None,
) -> BuildResult:
    """Build the kustomization in path using the default configuration."""
    return await Kustomize(KustomizeConfig.from_env()).build(path, source, repo_root)


async def version(short: bool = False) -> str:
    """Return the version of the kustomize binary."""
    return await Kustomize(KustomizeConfig.from_env()).version(short)
