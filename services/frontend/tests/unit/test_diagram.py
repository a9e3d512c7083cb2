"""
Unit tests for the trace diagram builder.

Key Concepts Demonstrated:
- Boundary testing of the latency colour bands
- Testing pure layout logic without templates or an app
"""

from __future__ import annotations

import pytest

from services.frontend.frontend_app.diagram import (
    LATENCY_COLOURS,
    NODE_Y,
    LatencyStatus,
    build_trace_diagram,
    format_latency,
    latency_status,
    parse_step_name,
)

pytestmark = pytest.mark.unit

CREATE_TRACE = [
    {"name": "Controller: createTask", "latency": 12.5},
    {"name": "Service: createTask", "latency": 9.0},
    {"name": "Repository: createTask", "latency": 3.25},
    {"name": "Client: getUserById", "latency": 4.0},
]


@pytest.mark.parametrize(
    "latency, expected",
    [
        (0.0, LatencyStatus.OK),
        (9.9, LatencyStatus.OK),
        (10.0, LatencyStatus.WARN),
        (49.9, LatencyStatus.WARN),
        (50.0, LatencyStatus.CRITICAL),
        (1200.0, LatencyStatus.CRITICAL),
    ],
)
def test_latency_bands(latency, expected):
    assert latency_status(latency) is expected


def test_colours():
    assert LatencyStatus.OK.colour == "#22c55e"
    assert LatencyStatus.WARN.colour == "#eab308"
    assert LatencyStatus.CRITICAL.colour == "#ef4444"
    assert set(LATENCY_COLOURS) == set(LatencyStatus)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Repository: getTasks", ("Repository", "getTasks")),
        ("Handler:deleteTask", ("Handler", "deleteTask")),
        ("Client: a: b", ("Client", "a: b")),
        ("NoColon", ("NoColon", "")),
    ],
)
def test_parse_step_name(name, expected):
    assert parse_step_name(name) == expected


def test_format_latency():
    assert format_latency(3.04) == "3.0 ms"
    assert format_latency(12) == "12.0 ms"


class TestBuildTraceDiagram:
    """Tests for ``build_trace_diagram``."""

    def test_one_node_per_step_and_chained_edges(self):
        diagram = build_trace_diagram(CREATE_TRACE)

        assert len(diagram.nodes) == 4
        assert [(edge.source, edge.target) for edge in diagram.edges] == [
            ("0", "1"),
            ("1", "2"),
            ("2", "3"),
        ]
        assert [edge.id for edge in diagram.edges] == ["e0-1", "e1-2", "e2-3"]

    def test_nodes_keep_trace_order_and_split_names(self):
        diagram = build_trace_diagram(CREATE_TRACE)

        assert [(node.layer, node.operation) for node in diagram.nodes] == [
            ("Controller", "createTask"),
            ("Service", "createTask"),
            ("Repository", "createTask"),
            ("Client", "getUserById"),
        ]

    def test_horizontal_layout_uses_spacing(self):
        diagram = build_trace_diagram(CREATE_TRACE, spacing=200)

        assert [node.x for node in diagram.nodes] == [0, 200, 400, 600]
        assert {node.y for node in diagram.nodes} == {NODE_Y}

    def test_node_status_follows_latency(self):
        diagram = build_trace_diagram(CREATE_TRACE)

        assert [node.status for node in diagram.nodes] == [
            LatencyStatus.WARN,
            LatencyStatus.OK,
            LatencyStatus.OK,
            LatencyStatus.OK,
        ]
        assert diagram.total_latency == 12.5

    def test_single_step_has_no_edges(self):
        diagram = build_trace_diagram([{"name": "Handler: getTasks", "latency": 55}])

        assert len(diagram.nodes) == 1
        assert diagram.edges == ()
        assert diagram.nodes[0].status is LatencyStatus.CRITICAL

    @pytest.mark.parametrize("trace", [None, []])
    def test_empty_trace(self, trace):
        diagram = build_trace_diagram(trace, title="Nothing yet")

        assert diagram.is_empty
        assert diagram.edges == ()
        assert diagram.width == 0
        assert diagram.total_latency == 0.0

    def test_interaction_flags(self):
        data = build_trace_diagram(CREATE_TRACE, title="Microservices: create task").to_dict()

        assert data["title"] == "Microservices: create task"
        assert data["panOnDrag"] is False
        assert data["zoomOnScroll"] is False
        assert data["nodesDraggable"] is True
        assert data["nodesConnectable"] is False
        assert data["elementsSelectable"] is False
        assert all(node["draggable"] for node in data["nodes"])
        assert not any(edge["selectable"] for edge in data["edges"])

    def test_node_wire_form(self):
        node = build_trace_diagram(CREATE_TRACE).to_dict()["nodes"][1]

        assert node == {
            "id": "1",
            "position": {"x": 180, "y": NODE_Y},
            "data": {
                "layer": "Service",
                "operation": "createTask",
                "latency": 9.0,
                "label": "9.0 ms",
                "status": "ok",
                "colour": "#22c55e",
            },
            "draggable": True,
            "connectable": False,
            "selectable": False,
        }
