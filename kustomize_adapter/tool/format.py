"""Library for formatting output."""

from abc import ABC, abstractmethod
from typing import Any, Generator, TextIO
import sys

import yaml


class StructFormatter(ABC):
    """A formatter that prints objects."""

    @abstractmethod
    def format(self, data: Any) -> Generator[str, None, None]:
        """Format the data objects."""

    def print(self, data: Any, file: TextIO = sys.stdout) -> None:
        """Print the data objects."""
        for line in self.format(data):
            print(line, file=file)


class YamlFormatter(StructFormatter):
    """A formatter that prints a stream of yaml documents."""

    def format(self, data: Any) -> Generator[str, None, None]:
        """Format the data objects."""
        if not data:
            return
        content = yaml.dump_all(data, sort_keys=False, explicit_start=True)
        yield from content.rstrip("\n").split("\n")


class LineFormatter(StructFormatter):
    """A formatter that prints each value on its own line."""

    def format(self, data: Any) -> Generator[str, None, None]:
        """Format the data objects."""
        for value in data:
            yield str(value)
