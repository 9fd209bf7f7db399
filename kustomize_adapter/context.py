"""Utilities for tracing the stages of a kustomize build."""

import contextvars
from contextlib import contextmanager
import logging
from time import perf_counter
from typing import Generator


_LOGGER = logging.getLogger(__name__)

# No public API
__all__: list[str] = []


_stages: contextvars.ContextVar[tuple[str, ...]] = contextvars.ContextVar(
    "stages", default=()
)


def current_stage() -> str:
    """Return the label of the stage currently executing, if any."""
    return " > ".join(_stages.get())


@contextmanager
def trace_context(name: str, detail: str | None = None) -> Generator[None, None, None]:
    """Log entry, exit and duration of a named build stage.

    Stages nest, so a `kustomize edit` run during a build is logged as
    `build > edit`.
    """
    token = _stages.set(_stages.get() + (name,))
    label = current_stage()
    if detail:
        label = f"{label} [{detail}]"
    start = perf_counter()
    _LOGGER.debug("[Trace] > %s", label)
    try:
        yield
    finally:
        _stages.reset(token)
        _LOGGER.debug("[Trace] < %s (%0.2fs)", label, perf_counter() - start)
