"""
Tests for graph integrity verification.

A graph produced by the mutation engine must always verify clean; each
test below breaks one invariant by hand and expects it to be reported.
"""

import dataclasses

from workflow_engines.integrity import verify_graph
from workflow_kernel.domain.graph import (
    Edge,
    Node,
    NodeKind,
    Position,
    PreviousStep,
    TerminalData,
    TaskType,
    WorkflowGraph,
)
from workflow_kernel.invariants import GraphInvariant


def _invariants(graph: WorkflowGraph) -> set[GraphInvariant]:
    return {v.invariant for v in verify_graph(graph).violations}


def _with_task_data(graph: WorkflowGraph, node_id: str, **changes) -> WorkflowGraph:
    nodes = tuple(
        dataclasses.replace(n, data=dataclasses.replace(n.data, **changes)) if n.id == node_id else n
        for n in graph.nodes
    )
    return WorkflowGraph(nodes=nodes, edges=graph.edges)


class TestConsistentGraphs:

    def test_empty_graph(self, empty_graph):
        report = verify_graph(empty_graph)
        assert report.is_consistent
        assert report
        assert report.messages == ()

    def test_built_chain(self, build_chain):
        graph = build_chain(TaskType.CREATE, TaskType.APPROVAL, TaskType.INTEGRATION)
        assert verify_graph(graph).is_consistent


class TestTerminals:

    def test_missing_end(self, empty_graph):
        graph = WorkflowGraph(nodes=(empty_graph.start_node,), edges=())
        assert GraphInvariant.SINGLE_TERMINALS in _invariants(graph)

    def test_two_starts(self, empty_graph):
        extra = Node("start-2", NodeKind.START, Position(0, 0), TerminalData("Start"))
        graph = WorkflowGraph(nodes=empty_graph.nodes + (extra,), edges=empty_graph.edges)
        assert GraphInvariant.SINGLE_TERMINALS in _invariants(graph)


class TestEdges:

    def test_non_derived_edge_id(self, empty_graph):
        graph = WorkflowGraph(
            nodes=empty_graph.nodes,
            edges=(Edge("start-end", "start", "end"),),
        )
        assert _invariants(graph) == {GraphInvariant.DERIVED_EDGE_IDENTITY}

    def test_duplicate_edge(self, empty_graph):
        graph = WorkflowGraph(nodes=empty_graph.nodes, edges=empty_graph.edges * 2)
        assert GraphInvariant.DERIVED_EDGE_IDENTITY in _invariants(graph)

    def test_dangling_endpoint(self, empty_graph):
        graph = WorkflowGraph(
            nodes=empty_graph.nodes,
            edges=empty_graph.edges + (Edge.between("start", "ghost"),),
        )
        report = verify_graph(graph)
        assert "Edge e-start-ghost references missing node ghost" in report.messages


class TestConnectivity:

    def test_task_without_outbound(self, build_chain):
        graph = build_chain(TaskType.CREATE)
        graph = WorkflowGraph(
            nodes=graph.nodes,
            edges=tuple(e for e in graph.edges if e.source != "task-1"),
        )
        report = verify_graph(graph)
        assert "Task task-1 has no outbound edge" in report.messages
        assert "End is not reachable from start" in report.messages


class TestSequence:

    def test_stale_sequence_number(self, build_chain):
        graph = _with_task_data(build_chain(TaskType.CREATE, TaskType.APPROVAL), "task-2", sequence_number=5)
        assert _invariants(graph) == {GraphInvariant.CONTIGUOUS_SEQUENCE}

    def test_stale_previous_steps(self, build_chain):
        graph = _with_task_data(
            build_chain(TaskType.CREATE, TaskType.APPROVAL),
            "task-2",
            previous_steps=(PreviousStep("gone", "Gone", 1),),
        )
        assert _invariants(graph) == {GraphInvariant.PREVIOUS_STEPS_ACCURACY}
