"""
workflow_engines.summary -- Workflow-level validation summary.

Responsibility:
    Gather the per-node configuration errors into the list the header
    shows and the publish button is gated on.  Publishing is allowed
    iff the summary is empty.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
"""

from __future__ import annotations

from dataclasses import dataclass

from workflow_engines.tracer import traced_engine
from workflow_kernel.domain.graph import Node, PreviousStep, TaskData, WorkflowGraph
from workflow_kernel.exceptions import NotATaskNodeError


@dataclass(frozen=True)
class NodeErrorSummary:
    node_id: str
    sequence_number: int
    label: str
    errors: tuple[str, ...]


@traced_engine("summary", "1.0", fingerprint_fields=("graph",))
def collect_errors(graph: WorkflowGraph) -> tuple[NodeErrorSummary, ...]:
    """Nodes that have validation errors, ascending by sequence number."""
    summaries = [
        NodeErrorSummary(
            node_id=node.id,
            sequence_number=node.data.sequence_number or 0,
            label=node.data.label or "Unnamed Task",
            errors=node.data.validation_errors,
        )
        for node in graph.nodes
        if isinstance(node.data, TaskData) and node.data.validation_errors
    ]
    return tuple(sorted(summaries, key=lambda s: s.sequence_number))


def can_publish(graph: WorkflowGraph) -> bool:
    return not collect_errors(graph)


def send_back_targets(node: Node) -> tuple[PreviousStep, ...]:
    """Steps a task can send work back to: its previous steps, nearest first."""
    if not isinstance(node.data, TaskData):
        raise NotATaskNodeError(node.id, node.kind.value)
    return node.data.previous_steps
