"""Representation of the inputs and outputs of a kustomize build.

A `KustomizeSource` describes the modifications applied to a kustomization
before it is built, similar to the `kustomize` block of an application source
in a gitops tool. It may be constructed directly or parsed from YAML:

```yaml
namePrefix: staging-
images:
- nginx:1.15.5
commonLabels:
  app.kubernetes.io/managed-by: kustomize-adapter
configMapGenerators:
- name: settings
  literals:
  - LOG_LEVEL=debug
  files:
  - config.json
buildOptions: --load-restrictor LoadRestrictionsNone
```
"""

from collections.abc import Generator
from dataclasses import dataclass, field
from typing import Any

from mashumaro import DataClassDictMixin, field_options
from mashumaro.codecs.yaml import yaml_decode, yaml_encode
from mashumaro.config import BaseConfig
from mashumaro.exceptions import InvalidFieldValue, MissingField
import yaml

from .exceptions import InputException

__all__ = [
    "ConfigMapGenerator",
    "KustomizeSource",
    "BuildResult",
]


class _Config(BaseConfig):
    omit_none = True
    serialize_by_alias = True
    allow_deserialization_not_by_alias = True


@dataclass(frozen=True)
class ConfigMapGenerator(DataClassDictMixin):
    """A ConfigMap generator declared in the kustomization file."""

    name: str
    """Name of the generated ConfigMap, before the content hash suffix."""

    literals: list[str] = field(default_factory=list)
    """Literal entries in the form `key=value`."""

    files: list[str] = field(default_factory=list)
    """File entries in the form `key=path` or `path`."""

    envs: list[str] = field(default_factory=list)
    """Paths of env files with `key=value` lines."""

    def __post_init__(self) -> None:
        """Validate the generator."""
        if not self.name:
            raise InputException("ConfigMap generator is missing a name")
        for literal in self.literals:
            if "=" not in literal:
                raise InputException(
                    f"ConfigMap generator '{self.name}' literal '{literal}' "
                    "must be in the form key=value"
                )

    def source_paths(self) -> Generator[str, None, None]:
        """Return the paths of files read by this generator."""
        for entry in self.files:
            _, _, path = entry.rpartition("=")
            yield path
        yield from self.envs

    def kustomization_entry(self) -> dict[str, Any]:
        """Return the `configMapGenerator` entry for a kustomization file."""
        entry: dict[str, Any] = {"name": self.name}
        if self.literals:
            entry["literals"] = list(self.literals)
        if self.files:
            entry["files"] = list(self.files)
        if self.envs:
            entry["envs"] = list(self.envs)
        return entry

    class Config(_Config):
        pass


@dataclass(frozen=True)
class KustomizeSource(DataClassDictMixin):
    """Modifications applied to a kustomization before it is built."""

    name_prefix: str | None = field(
        default=None, metadata=field_options(alias="namePrefix")
    )
    """Prefix added to the name of every resource."""

    name_suffix: str | None = field(
        default=None, metadata=field_options(alias="nameSuffix")
    )
    """Suffix added to the name of every resource."""

    images: list[str] = field(default_factory=list)
    """Image overrides e.g. `nginx:1.15.5` or `nginx=registry/nginx:1.2`."""

    common_labels: dict[str, str] = field(
        default_factory=dict, metadata=field_options(alias="commonLabels")
    )
    """Labels added to every resource and selector."""

    config_map_generators: list[ConfigMapGenerator] = field(
        default_factory=list, metadata=field_options(alias="configMapGenerators")
    )
    """ConfigMap generators added to the kustomization."""

    build_options: str | None = field(
        default=None, metadata=field_options(alias="buildOptions")
    )
    """Additional free-form arguments for `kustomize build`."""

    @property
    def needs_edit(self) -> bool:
        """Return true if building requires changing the kustomization file."""
        return bool(
            self.name_prefix
            or self.name_suffix
            or self.images
            or self.common_labels
            or self.config_map_generators
        )

    @classmethod
    def parse_yaml(cls, content: str) -> "KustomizeSource":
        """Parse a serialized source."""
        try:
            return yaml_decode(content, cls)
        except (MissingField, InvalidFieldValue, TypeError, ValueError) as err:
            raise InputException(f"Invalid kustomize source: {err}") from err
        except yaml.YAMLError as err:
            raise InputException(f"Unable to parse kustomize source: {err}") from err

    def yaml(self) -> str:
        """Return a YAML string representation of the source."""
        return yaml_encode(self, self.__class__)  # type: ignore[return-value]

    class Config(_Config):
        pass


@dataclass
class BuildResult:
    """The output of a kustomize build."""

    objects: list[dict[str, Any]] = field(default_factory=list)
    """Decoded manifest objects in output order."""

    images: list[str] = field(default_factory=list)
    """Container images referenced by the objects, in first seen order."""
