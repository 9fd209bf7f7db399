"""Test fixtures for kustomize-adapter."""

from pathlib import Path

import pytest

from kustomize_adapter.command import Runner

TESTDATA_DIR = Path(__file__).parent / "testdata"


class FakeRunner(Runner):
    """A Runner that records invocations and returns canned output."""

    def __init__(self, outputs: dict[str, bytes | Exception] | None = None) -> None:
        """Initialize FakeRunner with output keyed by the kustomize subcommand."""
        self.outputs = outputs or {}
        self.calls: list[tuple[list[str], Path | None]] = []
        self.kustomizations: dict[str, str] = {}

    async def run(self, args: list[str], cwd: Path | None = None) -> bytes:
        """Record the call and return the output for the subcommand."""
        self.calls.append((args, cwd))
        if args[0] == "build":
            # Capture the kustomization as it was at build time
            path = Path(args[1])
            for ks_file in path.glob("*ustomization*"):
                self.kustomizations[ks_file.name] = ks_file.read_text()
        out = self.outputs.get(args[0], b"")
        if isinstance(out, Exception):
            raise out
        return out


@pytest.fixture
def testdata_dir() -> Path:
    """Directory holding the kustomization fixtures."""
    return TESTDATA_DIR


@pytest.fixture
def fake_runner() -> FakeRunner:
    """A Runner that does not spawn kustomize."""
    return FakeRunner()
