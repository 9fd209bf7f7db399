"""Tests for the kustomize source model."""

import pytest

from kustomize_adapter.exceptions import InputException
from kustomize_adapter.source import ConfigMapGenerator, KustomizeSource

SOURCE = """---
namePrefix: namePrefix-
nameSuffix: -nameSuffix
images:
- nginx:1.15.5
commonLabels:
  b: y
  a: x
configMapGenerators:
- name: app-config
  literals:
  - keyA=value1
  - keyB=value2
  files:
  - props=config.properties
  envs:
  - app.env
buildOptions: -v 6 --logtostderr
"""


def test_parse_yaml() -> None:
    """Test parsing a source with camelCase keys."""
    source = KustomizeSource.parse_yaml(SOURCE)
    assert source == KustomizeSource(
        name_prefix="namePrefix-",
        name_suffix="-nameSuffix",
        images=["nginx:1.15.5"],
        common_labels={"b": "y", "a": "x"},
        config_map_generators=[
            ConfigMapGenerator(
                name="app-config",
                literals=["keyA=value1", "keyB=value2"],
                files=["props=config.properties"],
                envs=["app.env"],
            )
        ],
        build_options="-v 6 --logtostderr",
    )
    # Mapping order from the input is preserved
    assert list(source.common_labels) == ["b", "a"]


def test_parse_yaml_field_names() -> None:
    """Test parsing a source using the python field names."""
    source = KustomizeSource.parse_yaml("name_prefix: dev-\nbuild_options: --foo\n")
    assert source.name_prefix == "dev-"
    assert source.build_options == "--foo"


def test_yaml_uses_aliases() -> None:
    """Test serialization omits unset values and uses camelCase keys."""
    content = KustomizeSource(name_prefix="dev-", images=["nginx"]).yaml()
    assert "namePrefix: dev-" in content
    assert "nameSuffix" not in content
    assert "buildOptions" not in content


@pytest.mark.parametrize(
    "content",
    [
        "configMapGenerators:\n- literals: [a=b]\n",
        "configMapGenerators:\n- name: x\n  literals: [novalue]\n",
        "images: 5\n",
        "namePrefix: [\n",
    ],
)
def test_parse_yaml_invalid(content: str) -> None:
    """Test invalid sources are reported as input errors."""
    with pytest.raises(InputException):
        KustomizeSource.parse_yaml(content)


def test_needs_edit() -> None:
    """Test detecting whether the kustomization must be modified."""
    assert not KustomizeSource().needs_edit
    assert not KustomizeSource(build_options="--enable-helm").needs_edit
    assert KustomizeSource(name_prefix="p-").needs_edit
    assert KustomizeSource(common_labels={"a": "b"}).needs_edit
    assert KustomizeSource(
        config_map_generators=[ConfigMapGenerator(name="x", literals=["a=b"])]
    ).needs_edit


def test_generator_validation() -> None:
    """Test ConfigMap generators are validated on construction."""
    with pytest.raises(InputException, match="missing a name"):
        ConfigMapGenerator(name="")
    with pytest.raises(InputException, match="key=value"):
        ConfigMapGenerator(name="settings", literals=["keyA"])


def test_generator_source_paths() -> None:
    """Test the files read by a generator."""
    generator = ConfigMapGenerator(
        name="settings",
        literals=["a=b"],
        files=["config.properties", "props=conf/app.properties"],
        envs=["app.env"],
    )
    assert list(generator.source_paths()) == [
        "config.properties",
        "conf/app.properties",
        "app.env",
    ]
