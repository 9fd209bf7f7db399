"""Library for common command line flags."""

from argparse import (
    ArgumentParser,
    Action,
    ArgumentError,
    Namespace,
)
import pathlib
from typing import Any

from kustomize_adapter.exceptions import InputException
from kustomize_adapter.source import ConfigMapGenerator, KustomizeSource


class LabelAppendAction(Action):
    """Append key=value pairs to the argument dict."""

    def __call__(
        self,
        parser: ArgumentParser,
        namespace: Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        values = values.split(",")
        if not values[0]:
            return
        result = dict(getattr(namespace, self.dest) or {})
        for value in values:
            if "=" not in value:
                raise ArgumentError(
                    self, f"Expected key=value format but got '{value}'"
                )
            k, v = value.split("=", 1)
            result[k] = v
        setattr(namespace, self.dest, result)


def add_source_flags(args: ArgumentParser) -> None:
    """Add flags describing the kustomize source modifications."""
    args.add_argument(
        "--source-file",
        type=pathlib.Path,
        default=None,
        help="YAML file with the kustomize source (namePrefix, images, ...)",
    )
    args.add_argument(
        "--name-prefix",
        type=str,
        default=None,
        help="Prefix added to the name of all resources",
    )
    args.add_argument(
        "--name-suffix",
        type=str,
        default=None,
        help="Suffix added to the name of all resources",
    )
    args.add_argument(
        "--image",
        dest="images",
        action="append",
        default=[],
        help="Image override e.g. nginx:1.15.5 (may be repeated)",
    )
    args.add_argument(
        "--label",
        dest="common_labels",
        action=LabelAppendAction,
        default={},
        help="Common labels in key=value format, comma separated (may be repeated)",
    )
    args.add_argument(
        "--configmap",
        type=str,
        default=None,
        help="Name of a ConfigMap to generate from the --from-* flags",
    )
    args.add_argument(
        "--from-literal",
        dest="literals",
        action="append",
        default=[],
        help="ConfigMap literal in key=value format (may be repeated)",
    )
    args.add_argument(
        "--from-file",
        dest="files",
        action="append",
        default=[],
        help="ConfigMap file in key=path or path format (may be repeated)",
    )
    args.add_argument(
        "--from-env-file",
        dest="envs",
        action="append",
        default=[],
        help="ConfigMap env file path (may be repeated)",
    )
    args.add_argument(
        "--build-options",
        type=str,
        default=None,
        help="Additional arguments for kustomize build e.g. '--enable-helm'",
    )


def build_source(  # type: ignore[no-untyped-def]
    source_file: pathlib.Path | None,
    name_prefix: str | None,
    name_suffix: str | None,
    images: list[str],
    common_labels: dict[str, str],
    configmap: str | None,
    literals: list[str],
    files: list[str],
    envs: list[str],
    build_options: str | None,
    **kwargs,  # pylint: disable=unused-argument
) -> KustomizeSource:
    """Build a KustomizeSource from a source file overridden by flags."""
    base = KustomizeSource()
    if source_file:
        try:
            content = source_file.read_text()
        except OSError as err:
            raise InputException(f"Unable to read source file: {err}") from err
        base = KustomizeSource.parse_yaml(content)
    generators = list(base.config_map_generators)
    if configmap:
        generators.append(
            ConfigMapGenerator(
                name=configmap, literals=literals, files=files, envs=envs
            )
        )
    elif literals or files or envs:
        raise InputException("The --from-* flags require --configmap")
    return KustomizeSource(
        name_prefix=name_prefix or base.name_prefix,
        name_suffix=name_suffix or base.name_suffix,
        images=base.images + images,
        common_labels={**base.common_labels, **common_labels},
        config_map_generators=generators,
        build_options=build_options or base.build_options,
    )
