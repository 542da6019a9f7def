"""
Task configuration value objects (``workflow_kernel.domain.task_config``).

Responsibility
--------------
The configuration a designer attaches to a task: who it is assigned to,
which actions it offers, which API an integration step calls, and the
notifications and auxiliary workflows hanging off it.  The form widgets
that edit these are outside the engine; the engine only consumes the
resulting objects.

Architecture position
---------------------
**Kernel domain layer** -- pure value objects.  ZERO I/O.

Invariants enforced
-------------------
* All collections are tuples; every object is frozen.
* Absent configuration is ``None`` (or an empty tuple), never a sentinel
  string -- the validator treats absence as "missing".
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class AssignmentType(str, Enum):
    """How the assignees of a task are chosen."""

    ROLES = "roles"
    USERS = "users"
    DYNAMIC_USERS = "dynamic_users"
    SUPPLIER = "supplier"
    MANAGER = "manager"
    MANAGER_HIERARCHY = "manager_hierarchy"


@dataclass(frozen=True)
class AssignmentConfig:
    """Assignment of a create or approval task.

    ``value`` is the hierarchy depth for ``MANAGER_HIERARCHY``.
    """

    type: AssignmentType | None = None
    roles: tuple[str, ...] = ()
    filters: tuple[str, ...] = ()
    users: tuple[str, ...] = ()
    dynamic_users: tuple[str, ...] = ()
    value: int | None = None


@dataclass(frozen=True)
class Notification:
    """A notification sent when a task action fires."""

    id: str
    title: str
    recipients: tuple[str, ...] = ()
    action_type: str | None = None
    status: str = "success"


@dataclass(frozen=True)
class TaskAction:
    """An action button offered by an approval task.

    ``send_back_step`` holds the id of a previous step when the action is
    a send-back.
    """

    action: str
    label: str
    enabled: bool = True
    send_back_step: str | None = None
    default_notification: Notification | None = None


class ApiDirection(str, Enum):
    INBOUND = "inbound"
    OUTBOUND = "outbound"


@dataclass(frozen=True)
class ApiDefinition:
    """An API an integration task can call."""

    id: str
    name: str
    direction: ApiDirection
    endpoint: str
    view_url: str | None = None


class FailureRecourseType(str, Enum):
    SEND_BACK = "send_back"
    ASSIGN = "assign"


@dataclass(frozen=True)
class Assignee:
    type: str  # "user" or "role"
    value: str


@dataclass(frozen=True)
class FailureRecourse:
    """What happens when an integration call fails."""

    type: FailureRecourseType
    step_id: str | None = None
    assignee: Assignee | None = None


@dataclass(frozen=True)
class ApiConfig:
    selected_api: ApiDefinition | None = None
    failure_recourse: FailureRecourse | None = None


class AuxiliaryWorkflow(str, Enum):
    """Secondary workflows a task can open."""

    AMEND = "amend"
    SHORT_CLOSE = "short-close"
    CANCEL = "cancel"
