"""
Module: workflow_engines
Responsibility:
    Package entrypoint re-exporting the pure engines used by the
    mutation engine: validation, sequencing, layout, edge stitching,
    summaries and integrity checks.

Architecture position:
    Engines -- pure calculation layer, zero I/O.
    May only import workflow_kernel (and sibling engine modules).
    MUST NOT import workflow_services or workflow_config.

Invariants enforced:
    - Purity: engines never read clocks, randomness or configuration.
      Layout constants are passed in by the caller.
    - Determinism: identical inputs always produce identical outputs.
"""

from workflow_engines.edge_router import bridge, is_bridgeable, link, split
from workflow_engines.integrity import (
    GraphIntegrityReport,
    IntegrityViolation,
    verify_graph,
)
from workflow_engines.layout import apply_layout, compute_positions, shift_down_from
from workflow_engines.notifications import (
    enabled_actions,
    notifications_for_action,
    recipient_options,
)
from workflow_engines.sequencer import order_nodes, resequence, resequence_nodes
from workflow_engines.summary import (
    NodeErrorSummary,
    can_publish,
    collect_errors,
    send_back_targets,
)
from workflow_engines.validator import validate_node, validate_nodes, validate_task

__all__ = [
    # Edge router
    "bridge",
    "is_bridgeable",
    "link",
    "split",
    # Integrity
    "GraphIntegrityReport",
    "IntegrityViolation",
    "verify_graph",
    # Layout
    "apply_layout",
    "compute_positions",
    "shift_down_from",
    # Notifications
    "enabled_actions",
    "notifications_for_action",
    "recipient_options",
    # Sequencer
    "order_nodes",
    "resequence",
    "resequence_nodes",
    # Summary
    "NodeErrorSummary",
    "can_publish",
    "collect_errors",
    "send_back_targets",
    # Validator
    "validate_node",
    "validate_nodes",
    "validate_task",
]
