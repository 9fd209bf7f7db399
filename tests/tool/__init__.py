"""Test helpers for kustomize-adapter tools."""
