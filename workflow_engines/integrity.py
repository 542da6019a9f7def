"""
workflow_engines.integrity -- Graph invariant verification.

Responsibility:
    Check a ``WorkflowGraph`` against the declared ``GraphInvariant`` set
    and report every violation found.  Used by the mutation engine after
    each mutation (violations are logged, not raised) and by the tests.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field

from workflow_engines.sequencer import order_nodes
from workflow_kernel.domain.graph import NodeKind, TaskData, WorkflowGraph, edge_id_for
from workflow_kernel.invariants import GraphInvariant


@dataclass(frozen=True)
class IntegrityViolation:
    invariant: GraphInvariant
    message: str


@dataclass(frozen=True)
class GraphIntegrityReport:
    violations: tuple[IntegrityViolation, ...] = field(default_factory=tuple)

    @property
    def is_consistent(self) -> bool:
        return not self.violations

    @property
    def messages(self) -> tuple[str, ...]:
        return tuple(v.message for v in self.violations)

    def __bool__(self) -> bool:
        return self.is_consistent


def verify_graph(graph: WorkflowGraph) -> GraphIntegrityReport:
    violations: list[IntegrityViolation] = []
    _check_terminals(graph, violations)
    _check_edges(graph, violations)
    _check_connectivity(graph, violations)
    _check_sequence(graph, violations)
    return GraphIntegrityReport(tuple(violations))


def _check_terminals(graph: WorkflowGraph, out: list[IntegrityViolation]) -> None:
    for kind in (NodeKind.START, NodeKind.END):
        count = sum(1 for n in graph.nodes if n.kind == kind)
        if count != 1:
            out.append(IntegrityViolation(
                GraphInvariant.SINGLE_TERMINALS,
                f"Expected exactly one {kind.value} node, found {count}",
            ))
    seen: set[str] = set()
    for node in graph.nodes:
        if node.id in seen:
            out.append(IntegrityViolation(
                GraphInvariant.SINGLE_TERMINALS, f"Duplicate node id {node.id}"
            ))
        seen.add(node.id)


def _check_edges(graph: WorkflowGraph, out: list[IntegrityViolation]) -> None:
    node_ids = graph.node_ids
    seen: set[str] = set()
    for edge in graph.edges:
        if edge.id in seen:
            out.append(IntegrityViolation(
                GraphInvariant.DERIVED_EDGE_IDENTITY, f"Duplicate edge id {edge.id}"
            ))
        seen.add(edge.id)
        if edge.id != edge_id_for(edge.source, edge.target):
            out.append(IntegrityViolation(
                GraphInvariant.DERIVED_EDGE_IDENTITY,
                f"Edge {edge.id} does not match its endpoints {edge.source}->{edge.target}",
            ))
        for endpoint in (edge.source, edge.target):
            if endpoint not in node_ids:
                out.append(IntegrityViolation(
                    GraphInvariant.CONNECTED_CHAIN,
                    f"Edge {edge.id} references missing node {endpoint}",
                ))


def _check_connectivity(graph: WorkflowGraph, out: list[IntegrityViolation]) -> None:
    for node in graph.task_nodes:
        if not any(e.target == node.id for e in graph.edges):
            out.append(IntegrityViolation(
                GraphInvariant.CONNECTED_CHAIN, f"Task {node.id} has no inbound edge"
            ))
        if not any(e.source == node.id for e in graph.edges):
            out.append(IntegrityViolation(
                GraphInvariant.CONNECTED_CHAIN, f"Task {node.id} has no outbound edge"
            ))

    start, end = graph.start_node, graph.end_node
    if start is None or end is None:
        return
    forward: dict[str, list[str]] = {}
    for edge in graph.edges:
        forward.setdefault(edge.source, []).append(edge.target)
    reached = {start.id}
    queue = deque([start.id])
    while queue:
        for nxt in forward.get(queue.popleft(), ()):
            if nxt not in reached:
                reached.add(nxt)
                queue.append(nxt)
    if end.id not in reached:
        out.append(IntegrityViolation(
            GraphInvariant.CONNECTED_CHAIN, "End is not reachable from start"
        ))


def _check_sequence(graph: WorkflowGraph, out: list[IntegrityViolation]) -> None:
    tasks = [n for n in order_nodes(graph.nodes) if n.is_task]
    for index, node in enumerate(tasks):
        data = node.data
        assert isinstance(data, TaskData)
        if data.sequence_number != index + 1:
            out.append(IntegrityViolation(
                GraphInvariant.CONTIGUOUS_SEQUENCE,
                f"Task {node.id} has sequence {data.sequence_number}, expected {index + 1}",
            ))
        expected = tuple(t.id for t in reversed(tasks[:index]))
        if tuple(step.id for step in data.previous_steps) != expected:
            out.append(IntegrityViolation(
                GraphInvariant.PREVIOUS_STEPS_ACCURACY,
                f"Task {node.id} previous steps are stale",
            ))
