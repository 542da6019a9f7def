"""
workflow_engines.layout -- Deterministic vertical-stack layout.

Responsibility:
    Place every node of an ordered chain on one vertical line:
    ``y = start_y + index * vertical_spacing`` and ``x`` so each node is
    horizontally centered on ``center_x`` using its own width.  Cosmetic,
    but run after every structural change so no node keeps coordinates
    from before an insert or delete shifted the chain.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Non-goals:
    No global layout optimization; branch placement is not attempted.
"""

from __future__ import annotations

import dataclasses

from workflow_engines.tracer import traced_engine
from workflow_kernel.domain.graph import Node, NodeKind, Position


def half_width(kind: NodeKind, *, task_width: float, terminal_width: float) -> float:
    if kind == NodeKind.TASK:
        return task_width / 2
    return terminal_width / 2


@traced_engine(
    "layout",
    "1.0",
    fingerprint_fields=("ordered_nodes", "vertical_spacing", "start_y", "center_x"),
)
def compute_positions(
    ordered_nodes: tuple[Node, ...],
    vertical_spacing: float,
    start_y: float,
    center_x: float,
    *,
    task_width: float,
    terminal_width: float,
) -> tuple[Position, ...]:
    """Positions for ``ordered_nodes``, index-aligned."""
    return tuple(
        Position(
            x=center_x
            - half_width(node.kind, task_width=task_width, terminal_width=terminal_width),
            y=start_y + index * vertical_spacing,
        )
        for index, node in enumerate(ordered_nodes)
    )


def apply_layout(
    ordered_nodes: tuple[Node, ...],
    vertical_spacing: float,
    start_y: float,
    center_x: float,
    *,
    task_width: float,
    terminal_width: float,
) -> tuple[Node, ...]:
    """Return the nodes with their computed positions."""
    positions = compute_positions(
        ordered_nodes,
        vertical_spacing,
        start_y,
        center_x,
        task_width=task_width,
        terminal_width=terminal_width,
    )
    return tuple(
        node if node.position == position else dataclasses.replace(node, position=position)
        for node, position in zip(ordered_nodes, positions)
    )


def shift_down_from(
    nodes: tuple[Node, ...], threshold_y: float, vertical_spacing: float
) -> tuple[Node, ...]:
    """Move every node at or below ``threshold_y`` down by one spacing unit."""
    return tuple(
        dataclasses.replace(
            node,
            position=Position(node.position.x, node.position.y + vertical_spacing),
        )
        if node.position.y >= threshold_y
        else node
        for node in nodes
    )
