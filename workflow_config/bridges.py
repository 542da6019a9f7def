"""
Config -> Kernel Bridges.

Functions that turn ``DesignerConfig`` values into kernel objects.  They
live here because the kernel must never import ``workflow_config``.

Usage:
    from workflow_config.bridges import build_edge_presentation, build_task_data

    config = get_active_config()
    presentation = build_edge_presentation(config)
    data = build_task_data(config, TaskType.APPROVAL, node_id="task-3")
"""

from __future__ import annotations

from workflow_config.schema import ActionDefaultDef, DesignerConfig
from workflow_kernel.domain.graph import EdgePresentation, TaskData, TaskType
from workflow_kernel.domain.task_config import Notification, TaskAction


def build_edge_presentation(config: DesignerConfig) -> EdgePresentation:
    defn = config.edge_presentation
    return EdgePresentation(
        edge_type=defn.edge_type,
        animated=defn.animated,
        stroke=defn.stroke,
        label=defn.label,
        class_name=defn.class_name,
    )


def _build_action(defn: ActionDefaultDef, node_id: str) -> TaskAction:
    notification = None
    if defn.notification is not None:
        notification = Notification(
            id=f"{node_id}-{defn.action}-default",
            title=defn.notification.title,
            recipients=defn.notification.recipients,
            action_type=defn.action,
        )
    return TaskAction(
        action=defn.action,
        label=defn.label,
        enabled=defn.enabled,
        default_notification=notification,
    )


def build_task_data(config: DesignerConfig, task_type: TaskType, node_id: str) -> TaskData:
    """Initial data of a newly inserted task. Derived fields start empty."""
    defaults = config.task_defaults
    actions: tuple[TaskAction, ...] = ()
    if task_type == TaskType.APPROVAL:
        actions = tuple(_build_action(a, node_id) for a in defaults.approval_actions)
    return TaskData(
        task_type=task_type,
        label=defaults.label_template.format(task_type=task_type.value),
        tags=defaults.tags_for(task_type.value),
        actions=actions,
    )
