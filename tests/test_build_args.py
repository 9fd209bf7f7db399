"""Tests for assembling kustomize arguments."""

import pytest
from syrupy.assertion import SnapshotAssertion

from kustomize_adapter.build_args import (
    build_args,
    edit_args,
    generator_entries,
    parse_build_options,
)
from kustomize_adapter.exceptions import InputException
from kustomize_adapter.source import ConfigMapGenerator, KustomizeSource


@pytest.mark.parametrize(
    ("options", "expected"),
    [
        (None, ["build", "guestbook"]),
        ("", ["build", "guestbook"]),
        ("-v 6 --logtostderr", ["build", "guestbook", "-v", "6", "--logtostderr"]),
        (
            "  --enable-helm   --load-restrictor LoadRestrictionsNone ",
            [
                "build",
                "guestbook",
                "--enable-helm",
                "--load-restrictor",
                "LoadRestrictionsNone",
            ],
        ),
        (
            "--label owner=o'brien",
            ["build", "guestbook", "--label", "owner=o'brien"],
        ),
        (
            "-v 'x",
            ["build", "guestbook", "-v", "'x"],
        ),
        (
            r"--helm-command C:\tools\helm.exe",
            ["build", "guestbook", "--helm-command", r"C:\tools\helm.exe"],
        ),
    ],
)
def test_parse_build_options(options: str | None, expected: list[str]) -> None:
    """Test free-form build options are split into arguments."""
    assert parse_build_options("guestbook", options) == expected


def test_edit_args(snapshot: SnapshotAssertion) -> None:
    """Test the order of edits for every kind of modification."""
    source = KustomizeSource(
        name_prefix="namePrefix-",
        name_suffix="-nameSuffix",
        images=["nginx:1.15.5", "busybox=registry.example.com/busybox:1.36"],
        common_labels={
            "app.kubernetes.io/part-of": "kustomize-adapter-tests",
            "app.kubernetes.io/managed-by": "kustomize-adapter",
        },
    )
    assert edit_args(source) == snapshot


def test_edit_args_empty() -> None:
    """Test no edits are needed for an empty source."""
    assert edit_args(KustomizeSource()) == []


def test_edit_args_suffix_with_dash() -> None:
    """Test a suffix that looks like a flag is passed after the separator."""
    assert edit_args(KustomizeSource(name_suffix="-dev")) == [
        ["edit", "set", "namesuffix", "--", "-dev"]
    ]


def test_common_labels_sorted() -> None:
    """Test labels are joined in a single argument sorted by key."""
    source = KustomizeSource(common_labels={"b": "y", "a": "x"})
    assert edit_args(source) == [["edit", "add", "label", "--force", "a:x,b:y"]]


@pytest.mark.parametrize(
    "labels",
    [
        {"a:b": "x"},
        {"a,b": "x"},
        {"a": "x,y"},
        {"": "x"},
    ],
)
def test_invalid_common_labels(labels: dict[str, str]) -> None:
    """Test labels that can't be expressed as kustomize edit arguments."""
    with pytest.raises(InputException, match="Invalid common label"):
        edit_args(KustomizeSource(common_labels=labels))


def test_generator_entries() -> None:
    """Test ConfigMap generators are rendered as kustomization entries."""
    source = KustomizeSource(
        config_map_generators=[
            ConfigMapGenerator(
                name="app-config",
                literals=["keyA=value1", "keyB=value2"],
                files=["config.properties"],
            ),
            ConfigMapGenerator(name="env-config", envs=["app.env"]),
        ]
    )
    assert generator_entries(source) == [
        {
            "name": "app-config",
            "literals": ["keyA=value1", "keyB=value2"],
            "files": ["config.properties"],
        },
        {
            "name": "env-config",
            "envs": ["app.env"],
        },
    ]


def test_build_args() -> None:
    """Test assembling the arguments of all invocations."""
    source = KustomizeSource(
        name_prefix="dev-",
        config_map_generators=[ConfigMapGenerator(name="settings", literals=["a=b"])],
        build_options="--enable-helm",
    )
    args = build_args("/tmp/app", source)
    assert args.edits == [["edit", "set", "nameprefix", "--", "dev-"]]
    assert args.generators == [{"name": "settings", "literals": ["a=b"]}]
    assert args.build == ["build", "/tmp/app", "--enable-helm"]


def test_build_args_without_source() -> None:
    """Test a plain build."""
    args = build_args("guestbook")
    assert args.edits == []
    assert args.generators == []
    assert args.build == ["build", "guestbook"]
