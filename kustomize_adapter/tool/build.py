"""Kustomize-adapter build action."""

import logging
from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
from typing import cast
import pathlib

from kustomize_adapter import kustomize
from kustomize_adapter.config import KustomizeConfig

from . import flags
from .format import LineFormatter, StructFormatter, YamlFormatter


_LOGGER = logging.getLogger(__name__)

OUTPUT_YAML = "yaml"
OUTPUT_IMAGES = "images"


class BuildAction:
    """Build a kustomization with optional modifications."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "build",
                help="Build a kustomization and print the objects",
                description="""Build a kustomization similar to kustomize build,
                    applying name prefix/suffix, image overrides, common labels
                    and ConfigMap generators to a temporary copy of the directory.""",
            ),
        )
        args.add_argument(
            "path", type=pathlib.Path, help="Directory containing the kustomization"
        )
        args.add_argument(
            "--repo-root",
            type=pathlib.Path,
            default=None,
            help="Parent directory copied along with path when making modifications",
        )
        args.add_argument(
            "--output",
            "-o",
            choices=[OUTPUT_YAML, OUTPUT_IMAGES],
            default=OUTPUT_YAML,
            help="Output format of the command",
        )
        flags.add_source_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        path: pathlib.Path,
        repo_root: pathlib.Path | None,
        output: str,
        **kwargs,
    ) -> None:
        """Async Action implementation."""
        source = flags.build_source(**kwargs)
        app = kustomize.Kustomize(KustomizeConfig.from_env())
        result = await app.build(path, source, repo_root=repo_root)
        _LOGGER.debug(
            "Built %d objects with %d images", len(result.objects), len(result.images)
        )
        formatter: StructFormatter
        if output == OUTPUT_IMAGES:
            formatter = LineFormatter()
            formatter.print(result.images)
        else:
            formatter = YamlFormatter()
            formatter.print(result.objects)
