"""
Library for building kustomizations with the kustomize command line tool.

The `kustomize` module locates a kustomization file, applies modifications
such as a name prefix, image overrides, common labels and ConfigMap
generators to a temporary copy, runs `kustomize build` and returns the
parsed objects along with the container images they reference.
"""

__all__ = [
    "build_args",
    "exceptions",
    "image",
    "kustomize",
    "locate",
    "source",
    # Note this is exposed for CLI documentation, not to be used as a library
    "tool",
]
