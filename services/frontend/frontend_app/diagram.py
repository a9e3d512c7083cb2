"""
Trace diagram builder.

Turns the ``trace`` array of a backend response into a left-to-right chain
of nodes, one per step, that the ``_trace_diagram.html`` macro renders as
inline SVG.  Steps arrive caller-first (the outermost layer at index 0),
so the chain reads from the controller down to the data store.

Node colour encodes latency:

    latency < 10 ms         -> ok       (green)
    10 ms <= latency < 50   -> warn     (yellow)
    latency >= 50 ms        -> critical (red)

Key Concepts Demonstrated:
- Immutable value objects (frozen dataclasses) with ``to_dict``
- Pure layout logic kept separate from the Jinja rendering
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

DEFAULT_NODE_SPACING = 180
NODE_Y = 100
NODE_WIDTH = 150
NODE_HEIGHT = 64

WARN_THRESHOLD_MS = 10.0
CRITICAL_THRESHOLD_MS = 50.0


class LatencyStatus(str, Enum):
    """Latency band of a single step."""

    OK = "ok"
    WARN = "warn"
    CRITICAL = "critical"

    @property
    def colour(self) -> str:
        return LATENCY_COLOURS[self]


LATENCY_COLOURS: dict[LatencyStatus, str] = {
    LatencyStatus.OK: "#22c55e",
    LatencyStatus.WARN: "#eab308",
    LatencyStatus.CRITICAL: "#ef4444",
}


def latency_status(latency: float) -> LatencyStatus:
    """Classify a latency in milliseconds into its band."""
    if latency < WARN_THRESHOLD_MS:
        return LatencyStatus.OK
    if latency < CRITICAL_THRESHOLD_MS:
        return LatencyStatus.WARN
    return LatencyStatus.CRITICAL


def parse_step_name(name: str) -> tuple[str, str]:
    """
    Split ``"<Layer>: <operation>"`` on the first colon.

    Both parts are trimmed.  A name without a colon is all layer, with an
    empty operation.

    Args:
        name: Step name, e.g. ``"Repository: getTasks"``.

    Returns:
        A ``(layer, operation)`` tuple.
    """
    layer, _, operation = name.partition(":")
    return layer.strip(), operation.strip()


def format_latency(latency: float) -> str:
    return f"{latency:.1f} ms"


@dataclass(frozen=True)
class DiagramNode:
    """
    One step drawn as a box.

    Attributes:
        id: Position of the step in the trace, as a string.
        layer: Layer part of the step name (drawn in bold).
        operation: Operation part of the step name.
        latency: Step latency in milliseconds.
        x: Horizontal position (``index * spacing``).
        y: Vertical position (fixed).
    """

    id: str
    layer: str
    operation: str
    latency: float
    x: float
    y: float
    draggable: bool = True
    connectable: bool = False
    selectable: bool = False

    width = NODE_WIDTH
    height = NODE_HEIGHT

    @property
    def status(self) -> LatencyStatus:
        return latency_status(self.latency)

    @property
    def colour(self) -> str:
        return self.status.colour

    @property
    def latency_label(self) -> str:
        return format_latency(self.latency)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "position": {"x": self.x, "y": self.y},
            "data": {
                "layer": self.layer,
                "operation": self.operation,
                "latency": self.latency,
                "label": self.latency_label,
                "status": self.status.value,
                "colour": self.colour,
            },
            "draggable": self.draggable,
            "connectable": self.connectable,
            "selectable": self.selectable,
        }


@dataclass(frozen=True)
class DiagramEdge:
    """Arrow from ``source`` to ``target`` (node ids)."""

    id: str
    source: str
    target: str
    selectable: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "source": self.source,
            "target": self.target,
            "selectable": self.selectable,
        }


@dataclass(frozen=True)
class TraceDiagram:
    """
    Renderable diagram of one trace.

    Attributes:
        nodes: One node per trace step, in trace order.
        edges: ``len(nodes) - 1`` edges chaining consecutive nodes.
        title: Optional caption drawn above the diagram.
        pan_enabled: Whether the canvas can be panned (always off).
        zoom_enabled: Whether the canvas can be zoomed (always off).
    """

    nodes: tuple[DiagramNode, ...] = ()
    edges: tuple[DiagramEdge, ...] = ()
    title: str | None = None
    pan_enabled: bool = False
    zoom_enabled: bool = False

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    @property
    def width(self) -> float:
        if not self.nodes:
            return 0
        return max(node.x for node in self.nodes) + NODE_WIDTH

    @property
    def view_box(self) -> str:
        return f"-10 {NODE_Y - 20} {self.width + 20} {NODE_HEIGHT + 40}"

    @property
    def total_latency(self) -> float:
        """Latency of the outermost step, which encloses the others."""
        return self.nodes[0].latency if self.nodes else 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "title": self.title,
            "nodes": [node.to_dict() for node in self.nodes],
            "edges": [edge.to_dict() for edge in self.edges],
            "panOnDrag": self.pan_enabled,
            "zoomOnScroll": self.zoom_enabled,
            "nodesDraggable": True,
            "nodesConnectable": False,
            "elementsSelectable": False,
        }


def build_trace_diagram(
    trace: Iterable[Mapping[str, Any]] | None,
    *,
    title: str | None = None,
    spacing: int = DEFAULT_NODE_SPACING,
) -> TraceDiagram:
    """
    Lay out a trace as a horizontal chain.

    Args:
        trace: Steps as ``{"name": str, "latency": float}`` mappings, in
            the order the backend returned them.  ``None`` is treated as
            an empty trace.
        title: Optional caption.
        spacing: Horizontal distance between consecutive nodes.

    Returns:
        A :class:`TraceDiagram` with N nodes and N-1 edges.
    """
    nodes = []
    for index, step in enumerate(trace or ()):
        layer, operation = parse_step_name(str(step.get("name", "")))
        nodes.append(
            DiagramNode(
                id=str(index),
                layer=layer,
                operation=operation,
                latency=float(step.get("latency", 0.0)),
                x=index * spacing,
                y=NODE_Y,
            )
        )

    edges = tuple(
        DiagramEdge(id=f"e{index}-{index + 1}", source=str(index), target=str(index + 1))
        for index in range(len(nodes) - 1)
    )
    return TraceDiagram(nodes=tuple(nodes), edges=edges, title=title)
