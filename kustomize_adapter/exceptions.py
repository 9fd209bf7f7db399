"""Exceptions related to kustomize-adapter."""

__all__ = [
    "KustomizeAdapterException",
    "InputException",
    "KustomizationNotFoundError",
    "CommandException",
    "KustomizeException",
    "KustomizeParseException",
    "GeneratorSourceException",
    "WorkspaceException",
]


class KustomizeAdapterException(Exception):
    """Generic base exception used for this library."""


class InputException(KustomizeAdapterException):
    """Raised when the input files or values are not formatted as expected."""


class KustomizationNotFoundError(KustomizeAdapterException):
    """Raised when a directory does not contain a kustomization file."""


class CommandException(KustomizeAdapterException):
    """Raised when there is a failure running a subcommand."""

    def __init__(
        self,
        message: str,
        returncode: int | None = None,
        stderr: str | None = None,
    ) -> None:
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class KustomizeException(CommandException):
    """Raised when there is a failure running a kustomize command."""


class KustomizeParseException(KustomizeException):
    """Raised when the output of kustomize build cannot be parsed."""


class GeneratorSourceException(InputException):
    """Raised when a file referenced by a ConfigMap generator can't be read."""


class WorkspaceException(InputException):
    """Raised when the kustomization can't be copied to a temporary directory."""
