"""
Workflow graph value objects (``workflow_kernel.domain.graph``).

Responsibility
--------------
Nodes, edges and the ``WorkflowGraph`` aggregate.  Nodes and edges refer
to each other by string id only; the aggregate is a pair of tuples that
can be copied, compared and hashed without cyclic references.

Architecture position
---------------------
**Kernel domain layer** -- pure value objects.  ZERO I/O.  Every
structural change produces a new ``WorkflowGraph``; nothing here
mutates in place.

Invariants enforced
-------------------
* Edge ids are derived from their endpoints (``edge_id_for``).
* ``TaskData`` derived fields (``sequence_number``, ``previous_steps``,
  ``validation_errors``) are written only by the engines.
* ``initial_graph`` is the sole constructor of the start/end skeleton.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from workflow_kernel.domain.task_config import (
    ApiConfig,
    AssignmentConfig,
    AuxiliaryWorkflow,
    Notification,
    TaskAction,
)

START_NODE_ID = "start"
END_NODE_ID = "end"


class NodeKind(str, Enum):
    START = "start"
    END = "end"
    TASK = "task"


class TaskType(str, Enum):
    """Closed set of task variants. Each has its own validation rule-set."""

    CREATE = "create"
    APPROVAL = "approval"
    INTEGRATION = "integration"


@dataclass(frozen=True)
class Position:
    x: float
    y: float


@dataclass(frozen=True)
class PreviousStep:
    """Reference to an earlier task, as listed on a later one."""

    id: str
    label: str
    sequence_number: int


@dataclass(frozen=True)
class TaskData:
    """Configuration and derived state of a task node.

    The last three fields are derived: the sequencer owns
    ``sequence_number`` and ``previous_steps``, the validator owns
    ``validation_errors``.
    """

    task_type: TaskType
    label: str
    tags: tuple[str, ...] = ()
    assignment: AssignmentConfig | None = None
    actions: tuple[TaskAction, ...] = ()
    api_config: ApiConfig | None = None
    notifications: tuple[Notification, ...] = ()
    workflows: tuple[AuxiliaryWorkflow, ...] = ()
    sequence_number: int | None = None
    previous_steps: tuple[PreviousStep, ...] = ()
    validation_errors: tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.validation_errors


@dataclass(frozen=True)
class TerminalData:
    label: str


NodeData = Union[TaskData, TerminalData]

# Fields of TaskData that only the engines may write.
DERIVED_TASK_FIELDS: frozenset[str] = frozenset({
    "sequence_number",
    "previous_steps",
    "validation_errors",
})

# Fields a configuration update may touch.
EDITABLE_TASK_FIELDS: frozenset[str] = frozenset({
    "label",
    "tags",
    "assignment",
    "actions",
    "api_config",
    "notifications",
    "workflows",
})


@dataclass(frozen=True)
class Node:
    """A vertex of the workflow graph.

    ``position`` is derived from graph order and recomputed after every
    structural change.
    """

    id: str
    kind: NodeKind
    position: Position
    data: NodeData

    @property
    def is_task(self) -> bool:
        return self.kind == NodeKind.TASK

    @property
    def label(self) -> str:
        return self.data.label

    @property
    def task_type(self) -> TaskType | None:
        if isinstance(self.data, TaskData):
            return self.data.task_type
        return None


@dataclass(frozen=True)
class EdgePresentation:
    """Rendering metadata shared by workflow edges.

    Opaque to the engine: the edge router copies it forward unchanged.
    """

    edge_type: str = "smoothstep"
    animated: bool = True
    stroke: str = "#2563EB"
    label: str = "+"
    class_name: str = "workflow-edge"


def edge_id_for(source: str, target: str) -> str:
    """Derived edge identity: ``e-{source}-{target}``."""
    return f"e-{source}-{target}"


@dataclass(frozen=True)
class Edge:
    id: str
    source: str
    target: str
    presentation: EdgePresentation = field(default_factory=EdgePresentation)

    @classmethod
    def between(
        cls,
        source: str,
        target: str,
        presentation: EdgePresentation | None = None,
    ) -> Edge:
        return cls(
            id=edge_id_for(source, target),
            source=source,
            target=target,
            presentation=presentation or EdgePresentation(),
        )


@dataclass(frozen=True)
class WorkflowGraph:
    """The aggregate: nodes and edges, owned by the mutation engine.

    ``retired_ids`` remembers the ids of deleted tasks so that no id is
    handed out twice over the life of the graph.
    """

    nodes: tuple[Node, ...]
    edges: tuple[Edge, ...]
    retired_ids: frozenset[str] = frozenset()

    def node_by_id(self, node_id: str) -> Node | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def edge_by_id(self, edge_id: str) -> Edge | None:
        for edge in self.edges:
            if edge.id == edge_id:
                return edge
        return None

    @property
    def node_ids(self) -> frozenset[str]:
        return frozenset(n.id for n in self.nodes)

    @property
    def reserved_ids(self) -> frozenset[str]:
        """Ids a new node may not take: live nodes and retired ones."""
        return self.node_ids | self.retired_ids

    @property
    def task_nodes(self) -> tuple[Node, ...]:
        return tuple(n for n in self.nodes if n.is_task)

    @property
    def start_node(self) -> Node | None:
        return next((n for n in self.nodes if n.kind == NodeKind.START), None)

    @property
    def end_node(self) -> Node | None:
        return next((n for n in self.nodes if n.kind == NodeKind.END), None)

    def has_task_of_type(self, task_type: TaskType) -> bool:
        return any(n.task_type == task_type for n in self.nodes)

    def incident_edges(self, node_id: str) -> tuple[Edge, ...]:
        return tuple(
            e for e in self.edges if e.source == node_id or e.target == node_id
        )


def initial_graph(presentation: EdgePresentation | None = None) -> WorkflowGraph:
    """The two-node start/end skeleton joined by one edge.

    Positions are placeholders; run the layout engine before rendering.
    """
    origin = Position(0, 0)
    start = Node(START_NODE_ID, NodeKind.START, origin, TerminalData("Start"))
    end = Node(END_NODE_ID, NodeKind.END, origin, TerminalData("End"))
    return WorkflowGraph(
        nodes=(start, end),
        edges=(Edge.between(START_NODE_ID, END_NODE_ID, presentation),),
    )
