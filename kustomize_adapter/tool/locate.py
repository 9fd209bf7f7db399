"""Kustomize-adapter locate action."""

import logging
from argparse import ArgumentParser, _SubParsersAction as SubParsersAction
from typing import cast
import pathlib

from kustomize_adapter.locate import find_kustomization


_LOGGER = logging.getLogger(__name__)


class LocateAction:
    """Print the kustomization file within a directory."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "locate",
                help="Print the kustomization file in a directory",
                description="""Find the kustomization.yaml, kustomization.yml or
                    Kustomization file in a directory, in that order.""",
            ),
        )
        args.add_argument(
            "path", type=pathlib.Path, help="Directory containing the kustomization"
        )
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        path: pathlib.Path,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        print(await find_kustomization(path))
