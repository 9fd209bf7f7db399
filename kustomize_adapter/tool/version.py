"""Kustomize-adapter version action."""

from argparse import (
    ArgumentParser,
    BooleanOptionalAction,
    _SubParsersAction as SubParsersAction,
)
from typing import cast

from kustomize_adapter import kustomize
from kustomize_adapter.config import KustomizeConfig


class VersionAction:
    """Print the version of the kustomize binary."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "version",
                help="Print the version of the kustomize binary",
            ),
        )
        args.add_argument(
            "--short",
            action=BooleanOptionalAction,
            default=False,
            help="Print only the version number",
        )
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        short: bool,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        app = kustomize.Kustomize(KustomizeConfig.from_env())
        print(await app.version(short=short))
