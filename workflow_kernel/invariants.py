"""
Graph Invariants Contract.

These invariants are structural law for every ``WorkflowGraph`` that
leaves the mutation engine. No configuration may switch them off.

This module only declares them. Enforcement is distributed across the
mutation engine (insert/delete/connect), the sequencer and layout
engines (derived state), and ``workflow_engines.integrity`` which
verifies them after each mutation.
"""

from enum import Enum, unique


@unique
class GraphInvariant(str, Enum):
    """Non-configurable invariants of the workflow graph."""

    SINGLE_TERMINALS = "single_terminals"
    """Exactly one start and one end node exist. Neither is ever deleted."""

    CONNECTED_CHAIN = "connected_chain"
    """End is reachable from start and no task node is left without an
    inbound or an outbound edge after a mutation completes."""

    DERIVED_EDGE_IDENTITY = "derived_edge_identity"
    """Edge ids are ``e-{source}-{target}``. Stitching replaces stale edges
    by id."""

    CONTIGUOUS_SEQUENCE = "contiguous_sequence"
    """Task sequence numbers form 1..n in vertical order, no gaps, no
    duplicates."""

    PREVIOUS_STEPS_ACCURACY = "previous_steps_accuracy"
    """The task at index i lists exactly i previous steps, nearest first."""

    DERIVED_STATE_FRESHNESS = "derived_state_freshness"
    """Positions, sequence numbers, previous steps and validation errors
    are recomputed after every structural change, never patched."""


ALL_GRAPH_INVARIANTS: frozenset[GraphInvariant] = frozenset(GraphInvariant)

# The kernel package may not import from these packages.
# Enforced by tests/architecture/test_layer_boundaries.py.
FORBIDDEN_KERNEL_IMPORTS: tuple[str, ...] = (
    "workflow_engines",
    "workflow_services",
    "workflow_config",
)
