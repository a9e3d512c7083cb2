"""
Request tracing primitives shared by every backend variant.

Each inbound request owns exactly one ``TraceContext``.  Every layer the
request passes through (controller, service, repository, remote client)
times its own unit of work and records a ``TraceStep`` on that context.
The accumulated steps are returned to the caller inside the response
envelope so the frontend can draw a latency diagram.

Key Concepts Demonstrated:
- Request-scoped mutable state with no cross-request sharing
- Context-manager instrumentation (``TraceContext.timed``)
- High-resolution timing via ``time.perf_counter``
"""

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Any


class Layer(str, Enum):
    """Architectural layer names used as the prefix of a step name."""

    HANDLER = "Handler"
    CONTROLLER = "Controller"
    SERVICE = "Service"
    REPOSITORY = "Repository"
    CLIENT = "Client"


def step_name(layer: Layer | str, operation: str) -> str:
    """Build a ``"<Layer>: <operation>"`` step name."""
    prefix = layer.value if isinstance(layer, Layer) else layer
    return f"{prefix}: {operation}"


@dataclass(frozen=True)
class TraceStep:
    """
    A single timed unit of work.

    Attributes:
        name: ``"<Layer>: <operation>"``, e.g. ``"Repository: createTask"``.
        latency: Elapsed time in milliseconds.
    """

    name: str
    latency: float

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "latency": self.latency}


class TraceContext:
    """
    Ordered log of the steps recorded while handling one request.

    Steps are always inserted at the *front*.  A layer only finishes timing
    itself after its nested calls have returned, so outer layers record
    later than inner ones; front insertion puts the outermost (controller)
    step at index 0 and the innermost step last.  Clients rely on this
    caller-first order, so it must not be changed to an append.
    """

    def __init__(self) -> None:
        self.request_trace: list[TraceStep] = []

    def add_step(self, name: str, latency: float) -> TraceStep:
        """Record a step at the front of the trace and return it."""
        step = TraceStep(name=name, latency=float(latency))
        self.request_trace.insert(0, step)
        return step

    @contextmanager
    def timed(self, name: str) -> Iterator[None]:
        """
        Time the enclosed block and record it as one step.

        The step is recorded only when the block completes normally.  If the
        block raises, the exception propagates and nothing is recorded, so
        failed sub-operations never show up in the trace.

        Args:
            name: Step name, usually built with ``step_name``.
        """
        start = time.perf_counter()
        yield
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        self.add_step(name, elapsed_ms)

    def names(self) -> list[str]:
        return [step.name for step in self.request_trace]

    def to_list(self) -> list[dict[str, Any]]:
        """Return the wire form: ``[{"name": ..., "latency": ...}, ...]``."""
        return [step.to_dict() for step in self.request_trace]

    def __len__(self) -> int:
        return len(self.request_trace)

    def __iter__(self) -> Iterator[TraceStep]:
        return iter(self.request_trace)
