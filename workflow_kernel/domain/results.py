"""
Mutation outcome types (``workflow_kernel.domain.results``).

A rejected insert is a normal, reported outcome: the caller shows the
message and the graph stays as it was.  It is a value, not an exception.
"""

from __future__ import annotations

from dataclasses import dataclass

from workflow_kernel.domain.graph import WorkflowGraph


class RejectionCode:
    """Machine-readable codes for insert rejections."""

    CREATE_TASK_ALREADY_EXISTS = "CREATE_TASK_ALREADY_EXISTS"
    CREATE_TASK_NOT_FIRST = "CREATE_TASK_NOT_FIRST"
    FIRST_STEP_RESERVED = "FIRST_STEP_RESERVED"


@dataclass(frozen=True)
class InsertRejection:
    """A business rule refused the insert. ``message`` is user-facing."""

    code: str
    message: str


ONLY_ONE_CREATE_TASK = InsertRejection(
    code=RejectionCode.CREATE_TASK_ALREADY_EXISTS,
    message="Only one Create task is allowed in the workflow",
)
CREATE_TASK_MUST_FOLLOW_START = InsertRejection(
    code=RejectionCode.CREATE_TASK_NOT_FIRST,
    message="Create task can only be added as the first step",
)
FIRST_STEP_RESERVED_FOR_CREATE = InsertRejection(
    code=RejectionCode.FIRST_STEP_RESERVED,
    message="A Create task must be the first step",
)


@dataclass(frozen=True)
class InsertTaskResult:
    """
    Result of inserting a task.

    On rejection ``graph`` is the unchanged input graph and ``node_id`` is
    None.
    """

    graph: WorkflowGraph
    node_id: str | None = None
    rejection: InsertRejection | None = None

    @property
    def is_success(self) -> bool:
        return self.rejection is None

    @classmethod
    def success(cls, graph: WorkflowGraph, node_id: str) -> InsertTaskResult:
        return cls(graph=graph, node_id=node_id)

    @classmethod
    def rejected(
        cls, graph: WorkflowGraph, rejection: InsertRejection
    ) -> InsertTaskResult:
        return cls(graph=graph, rejection=rejection)
