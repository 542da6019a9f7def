"""
workflow_engines.validator -- Per-task configuration validation.

Responsibility:
    Produce the human-readable configuration errors of a task from its
    type and data.  The result is attached to the node as derived state
    and gates publishing; it never blocks insert or delete.

Architecture position:
    Engines -- pure calculation layer, zero I/O.

Invariants enforced:
    - Deterministic: same (task_type, data) always yields the same errors
      in the same order (label first, then the type's own checks).
    - Never raises: an absent field (None, missing attribute, empty
      string) is reported as missing, not as an exception.

Rules:
    all          label trimmed non-empty
    create       assignment type set
    approval     assignment type set; every action label non-empty
    integration  an API selected
"""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import Any

from workflow_engines.tracer import traced_engine
from workflow_kernel.domain.graph import Node, TaskData, TaskType

LABEL_REQUIRED = "Task label is required"
ASSIGNMENT_REQUIRED = "Role/User/Supplier selection is required"
APPROVAL_ASSIGNMENT_REQUIRED = "Role/User/Supplier/Manager selection is required"
ACTION_LABELS_REQUIRED = "Accept/Reject labels cannot be empty"
API_REQUIRED = "API selection is required"


def _is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def _has_assignment(data: Any) -> bool:
    assignment = getattr(data, "assignment", None)
    return getattr(assignment, "type", None) is not None


def _create_rules(data: Any) -> list[str]:
    if not _has_assignment(data):
        return [ASSIGNMENT_REQUIRED]
    return []


def _approval_rules(data: Any) -> list[str]:
    errors: list[str] = []
    if not _has_assignment(data):
        errors.append(APPROVAL_ASSIGNMENT_REQUIRED)
    actions = getattr(data, "actions", None) or ()
    if any(_is_blank(getattr(action, "label", None)) for action in actions):
        errors.append(ACTION_LABELS_REQUIRED)
    return errors


def _integration_rules(data: Any) -> list[str]:
    api_config = getattr(data, "api_config", None)
    if getattr(api_config, "selected_api", None) is None:
        return [API_REQUIRED]
    return []


_RULES: dict[TaskType, Callable[[Any], list[str]]] = {
    TaskType.CREATE: _create_rules,
    TaskType.APPROVAL: _approval_rules,
    TaskType.INTEGRATION: _integration_rules,
}


def validate_task(task_type: TaskType | None, data: TaskData | None) -> tuple[str, ...]:
    """Return the configuration errors of one task, in check order."""
    errors: list[str] = []
    if _is_blank(getattr(data, "label", None)):
        errors.append(LABEL_REQUIRED)
    rules = _RULES.get(task_type) if task_type is not None else None
    if rules is not None:
        errors.extend(rules(data))
    return tuple(errors)


def validate_node(node: Node) -> Node:
    """Return ``node`` with ``validation_errors`` recomputed. Non-task nodes pass through."""
    if not isinstance(node.data, TaskData):
        return node
    errors = validate_task(node.data.task_type, node.data)
    if errors == node.data.validation_errors:
        return node
    return dataclasses.replace(
        node, data=dataclasses.replace(node.data, validation_errors=errors)
    )


@traced_engine("task_validator", "1.0", fingerprint_fields=("nodes",))
def validate_nodes(nodes: tuple[Node, ...]) -> tuple[Node, ...]:
    """Validate every task node; order and non-task nodes are preserved."""
    return tuple(validate_node(node) for node in nodes)
