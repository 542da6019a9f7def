"""
Tests for the workflow graph value objects and id generation.

Covers:
- Edge identity derivation and the initial start/end skeleton
- WorkflowGraph lookups
- Immutability of snapshots
- Sequential and timestamp node id generators
"""

import dataclasses
from datetime import datetime, timezone

import pytest

from workflow_kernel.domain.clock import DeterministicClock
from workflow_kernel.domain.graph import (
    DERIVED_TASK_FIELDS,
    EDITABLE_TASK_FIELDS,
    Edge,
    EdgePresentation,
    Node,
    NodeKind,
    Position,
    TaskData,
    TaskType,
    TerminalData,
    WorkflowGraph,
    edge_id_for,
    initial_graph,
)
from workflow_kernel.domain.identifiers import SequentialIdGenerator, TimestampIdGenerator


def _task(node_id: str, task_type: TaskType = TaskType.APPROVAL, y: float = 0) -> Node:
    return Node(node_id, NodeKind.TASK, Position(0, y), TaskData(task_type, label=node_id))


class TestEdgeIdentity:

    def test_edge_id_for(self):
        assert edge_id_for("task-1", "end") == "e-task-1-end"

    def test_between_derives_id(self):
        edge = Edge.between("start", "task-1")
        assert edge.id == "e-start-task-1"
        assert edge.source == "start"
        assert edge.target == "task-1"
        assert edge.presentation == EdgePresentation()

    def test_between_keeps_presentation(self):
        presentation = EdgePresentation(stroke="#000000", animated=False)
        edge = Edge.between("a", "b", presentation)
        assert edge.presentation is presentation


class TestInitialGraph:

    def test_two_terminals_and_one_edge(self):
        graph = initial_graph()
        assert [n.id for n in graph.nodes] == ["start", "end"]
        assert [n.kind for n in graph.nodes] == [NodeKind.START, NodeKind.END]
        assert len(graph.edges) == 1
        assert graph.edges[0].id == "e-start-end"

    def test_no_task_nodes(self):
        assert initial_graph().task_nodes == ()

    def test_terminal_labels(self):
        graph = initial_graph()
        assert graph.start_node.label == "Start"
        assert graph.end_node.label == "End"


class TestWorkflowGraphLookups:

    @pytest.fixture
    def graph(self) -> WorkflowGraph:
        start = Node("start", NodeKind.START, Position(0, 0), TerminalData("Start"))
        end = Node("end", NodeKind.END, Position(0, 500), TerminalData("End"))
        task = _task("task-1", TaskType.CREATE, y=250)
        return WorkflowGraph(
            nodes=(start, task, end),
            edges=(Edge.between("start", "task-1"), Edge.between("task-1", "end")),
        )

    def test_node_by_id(self, graph):
        assert graph.node_by_id("task-1").task_type == TaskType.CREATE
        assert graph.node_by_id("missing") is None

    def test_edge_by_id(self, graph):
        assert graph.edge_by_id("e-task-1-end").target == "end"
        assert graph.edge_by_id("e-start-end") is None

    def test_node_ids(self, graph):
        assert graph.node_ids == frozenset({"start", "task-1", "end"})

    def test_reserved_ids_include_retired(self, graph):
        retired = WorkflowGraph(graph.nodes, graph.edges, retired_ids=frozenset({"task-2"}))
        assert graph.reserved_ids == graph.node_ids
        assert retired.reserved_ids == frozenset({"start", "task-1", "task-2", "end"})

    def test_has_task_of_type(self, graph):
        assert graph.has_task_of_type(TaskType.CREATE)
        assert not graph.has_task_of_type(TaskType.INTEGRATION)

    def test_incident_edges(self, graph):
        assert {e.id for e in graph.incident_edges("task-1")} == {
            "e-start-task-1",
            "e-task-1-end",
        }

    def test_terminal_has_no_task_type(self, graph):
        assert graph.start_node.task_type is None
        assert not graph.start_node.is_task


class TestImmutability:

    def test_node_is_frozen(self):
        node = _task("task-1")
        with pytest.raises(dataclasses.FrozenInstanceError):
            node.position = Position(1, 1)  # type: ignore[misc]

    def test_task_data_is_frozen(self):
        data = TaskData(TaskType.CREATE, label="x")
        with pytest.raises(dataclasses.FrozenInstanceError):
            data.sequence_number = 3  # type: ignore[misc]

    def test_is_valid_tracks_validation_errors(self):
        assert TaskData(TaskType.CREATE, label="x").is_valid
        assert not TaskData(TaskType.CREATE, label="", validation_errors=("e",)).is_valid

    def test_derived_and_editable_fields_are_disjoint(self):
        assert not DERIVED_TASK_FIELDS & EDITABLE_TASK_FIELDS
        all_fields = {f.name for f in dataclasses.fields(TaskData)}
        assert DERIVED_TASK_FIELDS | EDITABLE_TASK_FIELDS | {"task_type"} == all_fields


class TestSequentialIdGenerator:

    def test_counts_from_one(self):
        gen = SequentialIdGenerator()
        assert gen.next_id(()) == "task-1"
        assert gen.next_id(()) == "task-2"

    def test_skips_existing_ids(self):
        gen = SequentialIdGenerator()
        assert gen.next_id({"task-1", "task-2"}) == "task-3"

    def test_custom_prefix_and_start(self):
        gen = SequentialIdGenerator(start=10, prefix="step")
        assert gen.next_id(()) == "step-10"


class TestTimestampIdGenerator:

    def test_uses_clock_milliseconds(self):
        clock = DeterministicClock(datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc))
        gen = TimestampIdGenerator(clock)
        assert gen.next_id(()) == "task-1704110400000"

    def test_same_millisecond_is_monotonic(self):
        gen = TimestampIdGenerator(DeterministicClock())
        first = gen.next_id(())
        second = gen.next_id(())
        assert first != second
        assert int(second.split("-")[1]) == int(first.split("-")[1]) + 1

    def test_skips_existing(self):
        clock = DeterministicClock(datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc))
        gen = TimestampIdGenerator(clock)
        assert gen.next_id({"task-1704110400000"}) == "task-1704110400001"

    def test_advancing_clock(self):
        clock = DeterministicClock()
        gen = TimestampIdGenerator(clock)
        first = int(gen.next_id(()).split("-")[1])
        clock.advance(50)
        second = int(gen.next_id(()).split("-")[1])
        assert second == first + 50
