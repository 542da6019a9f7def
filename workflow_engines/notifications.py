"""
workflow_engines.notifications -- Notification options of a task.

Recipients offered for a new notification depend on how the task is
assigned: the chosen users, dynamic users, or roles.  Other assignment
types (supplier, manager) offer no fixed recipients.
"""

from __future__ import annotations

from workflow_kernel.domain.graph import TaskData
from workflow_kernel.domain.task_config import (
    AssignmentConfig,
    AssignmentType,
    Notification,
    TaskAction,
)


def recipient_options(assignment: AssignmentConfig | None) -> tuple[str, ...]:
    if assignment is None:
        return ()
    if assignment.type == AssignmentType.USERS:
        return assignment.users
    if assignment.type == AssignmentType.DYNAMIC_USERS:
        return assignment.dynamic_users
    if assignment.type == AssignmentType.ROLES:
        return assignment.roles
    return ()


def enabled_actions(data: TaskData) -> tuple[TaskAction, ...]:
    return tuple(a for a in data.actions if a.enabled)


def notifications_for_action(data: TaskData, action: str) -> tuple[Notification, ...]:
    """Notifications configured for ``action``, the action's default first."""
    configured = tuple(n for n in data.notifications if n.action_type == action)
    default = next(
        (a.default_notification for a in data.actions
         if a.action == action and a.default_notification is not None),
        None,
    )
    if default is None or any(n.id == default.id for n in configured):
        return configured
    return (default,) + configured
