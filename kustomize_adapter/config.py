"""Configuration objects for kustomize-adapter."""

from dataclasses import dataclass
import os

from .exceptions import InputException

KUSTOMIZE_BIN = "kustomize"

# Environment variables that override the defaults
BIN_ENV = "KUSTOMIZE_BIN"
TIMEOUT_ENV = "KUSTOMIZE_TIMEOUT"


@dataclass
class KustomizeConfig:
    """Configuration for invoking the kustomize binary."""

    binary: str = KUSTOMIZE_BIN
    """Name or path of the kustomize executable."""

    timeout: float | None = None
    """Seconds to wait for each kustomize invocation, unbounded when unset."""

    env: dict[str, str] | None = None
    """Additional environment variables for the subprocess."""

    @classmethod
    def from_env(cls) -> "KustomizeConfig":
        """Build a config using overrides from the environment."""
        timeout: float | None = None
        if value := os.environ.get(TIMEOUT_ENV):
            try:
                timeout = float(value)
            except ValueError as err:
                raise InputException(
                    f"Invalid {TIMEOUT_ENV} value '{value}': {err}"
                ) from err
        return cls(
            binary=os.environ.get(BIN_ENV) or KUSTOMIZE_BIN,
            timeout=timeout,
        )
