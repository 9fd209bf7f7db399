"""Command line tool for kustomize-adapter."""
