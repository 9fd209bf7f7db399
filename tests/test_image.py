"""Tests for image."""

from typing import Any

import pytest

from kustomize_adapter.exceptions import KustomizeParseException
from kustomize_adapter.image import extract_images


def _pod_spec(*images: str, init: list[str] | None = None) -> dict[str, Any]:
    spec: dict[str, Any] = {
        "containers": [
            {"name": f"c{i}", "image": image} for i, image in enumerate(images)
        ]
    }
    if init:
        spec["initContainers"] = [
            {"name": f"i{i}", "image": image} for i, image in enumerate(init)
        ]
    return spec


@pytest.mark.parametrize(
    ("doc", "expected"),
    [
        (
            {"kind": "Pod", "spec": _pod_spec("busybox")},
            ["busybox"],
        ),
        (
            {
                "kind": "Deployment",
                "spec": {
                    "template": {"spec": _pod_spec("nginx:1.15.5", init=["alpine"])}
                },
            },
            ["nginx:1.15.5", "alpine"],
        ),
        (
            {
                "kind": "CronJob",
                "spec": {
                    "jobTemplate": {
                        "spec": {"template": {"spec": _pod_spec("curlimages/curl")}}
                    }
                },
            },
            ["curlimages/curl"],
        ),
        (
            {
                "kind": "StatefulSet",
                "spec": {"template": {"spec": _pod_spec("redis", "redis", "exporter")}},
            },
            ["redis", "redis", "exporter"],
        ),
        (
            {"kind": "ConfigMap", "data": {"image": "not-a-container"}},
            [],
        ),
        (
            {"kind": "Service", "spec": {"ports": [{"port": 80}]}},
            [],
        ),
        (
            {"kind": "Deployment", "spec": {"template": {"spec": {"containers": None}}}},
            [],
        ),
    ],
    ids=[
        "pod",
        "deployment-init",
        "cronjob",
        "duplicates",
        "configmap",
        "service",
        "null-containers",
    ],
)
def test_extract_images(doc: dict[str, Any], expected: list[str]) -> None:
    """Test extracting images from container specs."""
    assert extract_images(doc) == expected


def test_extract_images_invalid() -> None:
    """Test an image that is not a string."""
    doc = {
        "kind": "Pod",
        "metadata": {"name": "busybox"},
        "spec": {
            "containers": [
                {"name": "busybox", "image": {"repository": "busybox", "tag": 16}}
            ]
        },
    }
    with pytest.raises(
        KustomizeParseException,
        match="Expected string for image key 'image' in Pod 'busybox', got type dict",
    ):
        extract_images(doc)
