"""
workflow_engines.edge_router -- Edge stitching around inserted and removed nodes.

Responsibility:
    Compute the new edge tuple when a node is removed (bridge its two
    neighbors) or inserted (split one edge into two).  Strictly
    topological: rendering metadata is copied forward untouched.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - DERIVED_EDGE_IDENTITY: every edge produced is ``e-{source}-{target}``.
      An existing edge with the same id is replaced, never duplicated.

Failure modes:
    - ``split`` raises ``EdgeNotFoundError`` for an unknown edge id.
    - ``bridge`` on a node without exactly one inbound and one outbound
      edge drops every edge touching it and adds no bridge.  Callers
      check ``is_bridgeable`` first to report that case.
"""

from __future__ import annotations

from workflow_engines.tracer import traced_engine
from workflow_kernel.domain.graph import Edge, EdgePresentation
from workflow_kernel.exceptions import EdgeNotFoundError


def incident_edges(node_id: str, edges: tuple[Edge, ...]) -> tuple[Edge, ...]:
    return tuple(e for e in edges if e.source == node_id or e.target == node_id)


def _inbound_outbound(
    node_id: str, edges: tuple[Edge, ...]
) -> tuple[Edge, Edge] | None:
    touching = incident_edges(node_id, edges)
    if len(touching) != 2:
        return None
    inbound = next((e for e in touching if e.target == node_id), None)
    outbound = next((e for e in touching if e.source == node_id), None)
    if inbound is None or outbound is None or inbound is outbound:
        return None
    return inbound, outbound


def is_bridgeable(node_id: str, edges: tuple[Edge, ...]) -> bool:
    """True when the node has exactly one inbound and one outbound edge."""
    return _inbound_outbound(node_id, edges) is not None


def _with_replaced(edges: tuple[Edge, ...], *added: Edge) -> tuple[Edge, ...]:
    new_ids = {e.id for e in added}
    return tuple(e for e in edges if e.id not in new_ids) + added


@traced_engine("edge_router.bridge", "1.0", fingerprint_fields=("removed_node_id", "edges"))
def bridge(removed_node_id: str, edges: tuple[Edge, ...]) -> tuple[Edge, ...]:
    """Drop the edges touching ``removed_node_id`` and join its neighbors.

    The bridging edge takes the presentation of the removed inbound edge.
    """
    pair = _inbound_outbound(removed_node_id, edges)
    remaining = tuple(
        e for e in edges if e.source != removed_node_id and e.target != removed_node_id
    )
    if pair is None:
        return remaining
    inbound, outbound = pair
    return _with_replaced(
        remaining,
        Edge.between(inbound.source, outbound.target, inbound.presentation),
    )


@traced_engine("edge_router.split", "1.0", fingerprint_fields=("edge_id", "new_node_id", "edges"))
def split(edge_id: str, new_node_id: str, edges: tuple[Edge, ...]) -> tuple[Edge, ...]:
    """Replace ``S->T`` with ``S->N`` and ``N->T``, both carrying the anchor's presentation."""
    anchor = next((e for e in edges if e.id == edge_id), None)
    if anchor is None:
        raise EdgeNotFoundError(edge_id)
    remaining = tuple(e for e in edges if e.id != edge_id)
    return _with_replaced(
        remaining,
        Edge.between(anchor.source, new_node_id, anchor.presentation),
        Edge.between(new_node_id, anchor.target, anchor.presentation),
    )


def link(
    source_id: str,
    target_id: str,
    edges: tuple[Edge, ...],
    presentation: EdgePresentation | None = None,
) -> tuple[Edge, ...]:
    """Append ``source->target`` unless an edge with that id already exists."""
    edge = Edge.between(source_id, target_id, presentation)
    if any(e.id == edge.id for e in edges):
        return edges
    return edges + (edge,)
