"""
workflow_services -- Orchestration over the pure engines.

``mutation_engine`` holds the stateless graph operations; ``editor``
wraps them in a session with undo/redo.
"""

from workflow_services.editor import WorkflowEditor
from workflow_services.mutation_engine import (
    available_task_types,
    check_insert_rules,
    connect,
    delete_task,
    insert_task,
    new_graph,
    recompute,
    update_task,
)

__all__ = [
    "WorkflowEditor",
    "available_task_types",
    "check_insert_rules",
    "connect",
    "delete_task",
    "insert_task",
    "new_graph",
    "recompute",
    "update_task",
]
