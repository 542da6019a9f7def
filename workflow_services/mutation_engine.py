"""
workflow_services.mutation_engine -- Structural mutations of the workflow graph.

Responsibility:
    The only code path that adds or removes nodes and edges.  Each
    operation takes a ``WorkflowGraph`` snapshot and returns a new one
    with every derived field recomputed: positions (layout engine),
    sequence numbers and previous steps (sequencer), validation errors
    (validator).  Thin coordinator -- the calculations live in the
    engines.

Architecture position:
    Services layer.  May import workflow_engines, workflow_kernel and
    workflow_config.

Invariants enforced:
    - DERIVED_STATE_FRESHNESS: ``recompute`` runs after every structural
      change and after every configuration update, over all task nodes.
    - Rejected inserts return the input graph object unchanged.
    - Ids of deleted tasks are retired on the graph and never reissued;
      send-back and failure-recourse targets pointing at them are cleared.
    - CONNECTED_CHAIN and friends are verified after each mutation; a
      violation is logged as ``graph_integrity_violation`` (upstream
      breach), never raised.

Failure modes:
    - Rejection (business rule): ``InsertTaskResult.rejected``.
    - ``EdgeNotFoundError`` / ``NodeNotFoundError``: unknown ids.
    - ``DuplicateNodeError``: the id generator returned an id in use.
    - ``TerminalNodeError``: delete or update of start/end.
    - ``DerivedFieldUpdateError``: update of a derived or unknown field.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from workflow_config import DesignerConfig, default_config
from workflow_config.bridges import build_edge_presentation, build_task_data
from workflow_engines.edge_router import bridge, is_bridgeable, link, split
from workflow_engines.integrity import verify_graph
from workflow_engines.layout import apply_layout, half_width, shift_down_from
from workflow_engines.sequencer import order_nodes, resequence_nodes
from workflow_engines.validator import validate_nodes
from workflow_kernel.domain.graph import (
    EDITABLE_TASK_FIELDS,
    Edge,
    Node,
    NodeKind,
    Position,
    TaskData,
    TaskType,
    WorkflowGraph,
    initial_graph,
)
from workflow_kernel.domain.identifiers import NodeIdGenerator, SequentialIdGenerator
from workflow_kernel.domain.results import (
    CREATE_TASK_MUST_FOLLOW_START,
    FIRST_STEP_RESERVED_FOR_CREATE,
    ONLY_ONE_CREATE_TASK,
    InsertRejection,
    InsertTaskResult,
)
from workflow_kernel.exceptions import (
    DerivedFieldUpdateError,
    DuplicateNodeError,
    EdgeNotFoundError,
    NodeNotFoundError,
    TerminalNodeError,
)
from workflow_kernel.logging_config import get_logger

logger = get_logger("services.mutation_engine")

# Collection-valued fields are stored as tuples whatever the caller passes.
_TUPLE_FIELDS = frozenset({"tags", "actions", "notifications", "workflows"})


# ---------------------------------------------------------------------------
# Derived-state projection
# ---------------------------------------------------------------------------


def recompute(graph: WorkflowGraph, *, config: DesignerConfig | None = None) -> WorkflowGraph:
    """Order, lay out, resequence and validate every node. Idempotent."""
    layout = (config or default_config()).layout
    ordered = order_nodes(graph.nodes)
    positioned = apply_layout(
        ordered,
        layout.vertical_spacing,
        layout.start_y,
        layout.center_x,
        task_width=layout.task_width,
        terminal_width=layout.terminal_width,
    )
    nodes = validate_nodes(resequence_nodes(positioned))
    return dataclasses.replace(graph, nodes=nodes)


def new_graph(config: DesignerConfig | None = None) -> WorkflowGraph:
    """A laid-out start -> end skeleton."""
    config = config or default_config()
    return recompute(initial_graph(build_edge_presentation(config)), config=config)


def _verify(graph: WorkflowGraph, operation: str) -> None:
    report = verify_graph(graph)
    if not report.is_consistent:
        logger.warning(
            "graph_integrity_violation",
            extra={"operation": operation, "violations": list(report.messages)},
        )


def _require_node(graph: WorkflowGraph, node_id: str) -> Node:
    node = graph.node_by_id(node_id)
    if node is None:
        raise NodeNotFoundError(node_id)
    return node


def _as_tuple(value: Any) -> tuple:
    return () if value is None else tuple(value)


def _drop_step_references(node: Node, step_id: str) -> Node:
    """Clear send-back and failure-recourse targets that point at ``step_id``."""
    data = node.data
    if not isinstance(data, TaskData):
        return node
    changes: dict[str, Any] = {}

    if any(a.send_back_step == step_id for a in data.actions):
        changes["actions"] = tuple(
            dataclasses.replace(a, send_back_step=None) if a.send_back_step == step_id else a
            for a in data.actions
        )

    recourse = data.api_config.failure_recourse if data.api_config else None
    if recourse is not None and recourse.step_id == step_id:
        changes["api_config"] = dataclasses.replace(
            data.api_config,
            failure_recourse=dataclasses.replace(recourse, step_id=None),
        )

    if not changes:
        return node
    return dataclasses.replace(node, data=dataclasses.replace(data, **changes))


# ---------------------------------------------------------------------------
# Insert
# ---------------------------------------------------------------------------


def check_insert_rules(
    graph: WorkflowGraph, anchor: Edge, task_type: TaskType
) -> InsertRejection | None:
    """Business rules for inserting ``task_type`` on ``anchor``; first failure wins."""
    has_create = graph.has_task_of_type(TaskType.CREATE)
    source = graph.node_by_id(anchor.source)
    after_start = source is not None and source.kind == NodeKind.START

    if task_type == TaskType.CREATE and has_create:
        return ONLY_ONE_CREATE_TASK
    if task_type == TaskType.CREATE and not after_start:
        return CREATE_TASK_MUST_FOLLOW_START
    if after_start and has_create and task_type != TaskType.CREATE:
        return FIRST_STEP_RESERVED_FOR_CREATE
    return None


def available_task_types(graph: WorkflowGraph, anchor_edge_id: str) -> tuple[TaskType, ...]:
    """Task types the insert dialog may offer for this anchor edge."""
    anchor = graph.edge_by_id(anchor_edge_id)
    if anchor is None:
        raise EdgeNotFoundError(anchor_edge_id)
    return tuple(t for t in TaskType if check_insert_rules(graph, anchor, t) is None)


def insert_task(
    graph: WorkflowGraph,
    anchor_edge_id: str,
    task_type: TaskType,
    *,
    config: DesignerConfig | None = None,
    id_generator: NodeIdGenerator | None = None,
) -> InsertTaskResult:
    """Insert a new task on ``anchor_edge_id`` (S->T becomes S->N->T)."""
    config = config or default_config()
    anchor = graph.edge_by_id(anchor_edge_id)
    if anchor is None:
        raise EdgeNotFoundError(anchor_edge_id)
    source = _require_node(graph, anchor.source)
    target = _require_node(graph, anchor.target)

    rejection = check_insert_rules(graph, anchor, task_type)
    if rejection is not None:
        logger.info(
            "task_insert_rejected",
            extra={
                "anchor_edge_id": anchor_edge_id,
                "task_type": task_type.value,
                "rejection_code": rejection.code,
            },
        )
        return InsertTaskResult.rejected(graph, rejection)

    generator = id_generator or SequentialIdGenerator()
    node_id = generator.next_id(graph.reserved_ids)
    if node_id in graph.reserved_ids:
        raise DuplicateNodeError(node_id)
    layout = config.layout
    new_node = Node(
        id=node_id,
        kind=NodeKind.TASK,
        position=Position(
            layout.center_x - half_width(
                NodeKind.TASK,
                task_width=layout.task_width,
                terminal_width=layout.terminal_width,
            ),
            source.position.y + layout.vertical_spacing,
        ),
        data=build_task_data(config, task_type, node_id),
    )

    shifted = shift_down_from(graph.nodes, target.position.y, layout.vertical_spacing)
    # N sits right after S so equal-y ties still sort it into place
    index = next(i for i, n in enumerate(shifted) if n.id == source.id)
    nodes = shifted[: index + 1] + (new_node,) + shifted[index + 1:]

    updated = recompute(
        dataclasses.replace(graph, nodes=nodes, edges=split(anchor.id, node_id, graph.edges)),
        config=config,
    )
    logger.info(
        "task_inserted",
        extra={
            "node_id": node_id,
            "task_type": task_type.value,
            "anchor_edge_id": anchor_edge_id,
            "task_count": len(updated.task_nodes),
        },
    )
    _verify(updated, "insert_task")
    return InsertTaskResult.success(updated, node_id)


# ---------------------------------------------------------------------------
# Delete
# ---------------------------------------------------------------------------


def delete_task(
    graph: WorkflowGraph, node_id: str, *, config: DesignerConfig | None = None
) -> WorkflowGraph:
    """Remove a task and join its predecessor directly to its successor."""
    node = _require_node(graph, node_id)
    if not node.is_task:
        logger.warning(
            "terminal_delete_refused",
            extra={"node_id": node_id, "kind": node.kind.value},
        )
        raise TerminalNodeError(node_id, "delete")

    if not is_bridgeable(node_id, graph.edges):
        logger.warning(
            "delete_fallback_dropped_edges",
            extra={
                "node_id": node_id,
                "incident_edge_ids": [e.id for e in graph.incident_edges(node_id)],
            },
        )

    nodes: list[Node] = []
    detached: list[str] = []
    for other in graph.nodes:
        if other.id == node_id:
            continue
        cleared = _drop_step_references(other, node_id)
        if cleared is not other:
            detached.append(other.id)
        nodes.append(cleared)

    remaining = WorkflowGraph(
        nodes=tuple(nodes),
        edges=bridge(node_id, graph.edges),
        retired_ids=graph.retired_ids | {node_id},
    )
    updated = recompute(remaining, config=config)
    logger.info(
        "task_deleted",
        extra={
            "node_id": node_id,
            "task_count": len(updated.task_nodes),
            "detached_node_ids": detached,
        },
    )
    _verify(updated, "delete_task")
    return updated


# ---------------------------------------------------------------------------
# Connect
# ---------------------------------------------------------------------------


def connect(
    graph: WorkflowGraph,
    source_id: str,
    target_id: str,
    *,
    config: DesignerConfig | None = None,
) -> WorkflowGraph:
    """Add ``source->target`` without touching other edges or derived state."""
    _require_node(graph, source_id)
    _require_node(graph, target_id)
    edges = link(
        source_id,
        target_id,
        graph.edges,
        build_edge_presentation(config or default_config()),
    )
    if edges is graph.edges:
        return graph
    logger.info(
        "edge_connected",
        extra={"source_id": source_id, "target_id": target_id},
    )
    return dataclasses.replace(graph, edges=edges)


# ---------------------------------------------------------------------------
# Configuration updates
# ---------------------------------------------------------------------------


def update_task(
    graph: WorkflowGraph,
    node_id: str,
    changes: Mapping[str, Any],
    *,
    config: DesignerConfig | None = None,
) -> WorkflowGraph:
    """Apply a configuration delta to one task and recompute derived state.

    Labels appear in later tasks' previous steps, so every task is
    recomputed, not just this one.
    """
    node = _require_node(graph, node_id)
    if not isinstance(node.data, TaskData):
        raise TerminalNodeError(node_id, "update")

    rejected_fields = tuple(sorted(set(changes) - EDITABLE_TASK_FIELDS))
    if rejected_fields:
        raise DerivedFieldUpdateError(node_id, rejected_fields)

    normalized = {
        key: _as_tuple(value) if key in _TUPLE_FIELDS else value
        for key, value in changes.items()
    }
    updated_node = dataclasses.replace(
        node, data=dataclasses.replace(node.data, **normalized)
    )
    nodes = tuple(updated_node if n.id == node_id else n for n in graph.nodes)
    updated = recompute(dataclasses.replace(graph, nodes=nodes), config=config)

    logger.info(
        "task_updated",
        extra={"node_id": node_id, "fields": sorted(normalized)},
    )
    return updated
