"""
DesignerConfig schema.

The human-authored configuration of the workflow designer: layout
constants, the rendering metadata new edges carry, and the defaults a
freshly inserted task starts with.  YAML is parsed into these types by
the loader; the defaults below are the built-in set that
``sets/default.yaml`` mirrors.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LayoutConfig:
    """Vertical-stack layout constants (canvas units)."""

    vertical_spacing: float = 250
    start_y: float = 150
    center_x: float = 250
    task_width: float = 250
    terminal_width: float = 100


# ---------------------------------------------------------------------------
# Edges
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class EdgePresentationDef:
    edge_type: str = "smoothstep"
    animated: bool = True
    stroke: str = "#2563EB"
    label: str = "+"
    class_name: str = "workflow-edge"


# ---------------------------------------------------------------------------
# Task defaults
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class NotificationDef:
    title: str
    recipients: tuple[str, ...] = ()


@dataclass(frozen=True)
class ActionDefaultDef:
    """A default action of a new approval task."""

    action: str
    label: str
    enabled: bool = True
    notification: NotificationDef | None = None


DEFAULT_APPROVAL_ACTIONS: tuple[ActionDefaultDef, ...] = (
    ActionDefaultDef(
        "approve", "Accept", True,
        NotificationDef("Approval Notification", ("Approvers", "Creator")),
    ),
    ActionDefaultDef(
        "reject", "Reject", True,
        NotificationDef("Rejection Notification", ("Creator", "Next Assignee(s)")),
    ),
    ActionDefaultDef(
        "cancel", "Close", True,
        NotificationDef("Cancellation Notification", ("Creator", "Approvers")),
    ),
    ActionDefaultDef(
        "edit", "Modify", False,
        NotificationDef("Modification Notification", ("Approvers",)),
    ),
    ActionDefaultDef(
        "delegate", "Assign to", False,
        NotificationDef("Delegation Notification", ("Next Assignee(s)",)),
    ),
    ActionDefaultDef(
        "sendBack", "Send Back", True,
        NotificationDef("Send Back Notification", ("Creator", "Approvers")),
    ),
)

DEFAULT_TAGS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("create", ("Role 1", "Role 2")),
    ("approval", ("Role 1", "Role 2")),
    ("integration", ("API Name",)),
)


@dataclass(frozen=True)
class TaskDefaultsDef:
    """Defaults applied to a task when it is inserted.

    ``label_template`` is formatted with ``task_type``.  ``tags`` maps a
    task type value to its default tags.
    """

    label_template: str = "New {task_type} task"
    tags: tuple[tuple[str, tuple[str, ...]], ...] = DEFAULT_TAGS
    approval_actions: tuple[ActionDefaultDef, ...] = DEFAULT_APPROVAL_ACTIONS

    def tags_for(self, task_type: str) -> tuple[str, ...]:
        for name, tags in self.tags:
            if name == task_type:
                return tags
        return ()


# ---------------------------------------------------------------------------
# History
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class HistoryConfig:
    max_depth: int = 100


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DesignerConfig:
    """Root configuration artifact.

    ``checksum`` is set by the loader from the source YAML; the built-in
    defaults carry None.
    """

    name: str = "default"
    version: int = 1
    layout: LayoutConfig = field(default_factory=LayoutConfig)
    edge_presentation: EdgePresentationDef = field(default_factory=EdgePresentationDef)
    task_defaults: TaskDefaultsDef = field(default_factory=TaskDefaultsDef)
    history: HistoryConfig = field(default_factory=HistoryConfig)
    checksum: str | None = None
