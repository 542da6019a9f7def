"""
Typed exception hierarchy for the workflow kernel.

Every exception carries a class-level ``code`` (machine-readable) and the
structured values that caused it, so callers catch by type and log by
attribute instead of parsing messages.

Two things are deliberately NOT exceptions:

* Insert rejections (business rules such as "only one Create task") are
  ordinary result values -- see ``InsertRejection`` in
  ``workflow_kernel.domain.results``.
* Configuration findings ("Task label is required") are derived node
  data -- see ``TaskData.validation_errors``.

What remains here are contract violations: a caller asked for something
the engine can never do (unknown ids, deleting the start node, writing a
derived field).

::

    WorkflowKernelError
    |
    +-- GraphError
    |   +-- NodeNotFoundError
    |   +-- EdgeNotFoundError
    |   +-- TerminalNodeError
    |   +-- DuplicateNodeError
    |
    +-- TaskConfigError
        +-- DerivedFieldUpdateError
        +-- NotATaskNodeError
"""


class WorkflowKernelError(Exception):
    """
    Base exception for all workflow kernel errors.

    All subclasses must have a ``code`` class attribute.
    """

    code: str = "WORKFLOW_KERNEL_ERROR"


# Graph structure exceptions


class GraphError(WorkflowKernelError):
    """Base exception for graph structure errors."""

    code: str = "GRAPH_ERROR"


class NodeNotFoundError(GraphError):
    """Node with given id is not part of the graph."""

    code: str = "NODE_NOT_FOUND"

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Node not found: {node_id}")


class EdgeNotFoundError(GraphError):
    """Edge with given id is not part of the graph."""

    code: str = "EDGE_NOT_FOUND"

    def __init__(self, edge_id: str):
        self.edge_id = edge_id
        super().__init__(f"Edge not found: {edge_id}")


class TerminalNodeError(GraphError):
    """The start and end nodes cannot be deleted or reconfigured."""

    code: str = "TERMINAL_NODE_IMMUTABLE"

    def __init__(self, node_id: str, operation: str):
        self.node_id = node_id
        self.operation = operation
        super().__init__(
            f"Cannot {operation} terminal node '{node_id}'"
        )


class DuplicateNodeError(GraphError):
    """A node id appears more than once."""

    code: str = "DUPLICATE_NODE"

    def __init__(self, node_id: str):
        self.node_id = node_id
        super().__init__(f"Duplicate node id: {node_id}")


# Task configuration exceptions


class TaskConfigError(WorkflowKernelError):
    """Base exception for task configuration updates."""

    code: str = "TASK_CONFIG_ERROR"


class DerivedFieldUpdateError(TaskConfigError):
    """An update tried to write a derived or unknown task field."""

    code: str = "DERIVED_FIELD_UPDATE"

    def __init__(self, node_id: str, fields: tuple[str, ...]):
        self.node_id = node_id
        self.fields = fields
        super().__init__(
            f"Fields {', '.join(fields)} of node '{node_id}' are not editable"
        )


class NotATaskNodeError(TaskConfigError):
    """Operation requires a task node."""

    code: str = "NOT_A_TASK_NODE"

    def __init__(self, node_id: str, kind: str):
        self.node_id = node_id
        self.kind = kind
        super().__init__(f"Node '{node_id}' is a {kind} node, not a task")
