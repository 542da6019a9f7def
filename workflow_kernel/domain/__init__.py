"""
Pure domain layer.

Value objects for the workflow graph with NO dependencies on:
- Configuration
- Engines or services
- I/O (other than SystemClock)

All domain objects are immutable.
"""

from workflow_kernel.domain.clock import Clock, DeterministicClock, SystemClock
from workflow_kernel.domain.graph import (
    DERIVED_TASK_FIELDS,
    EDITABLE_TASK_FIELDS,
    END_NODE_ID,
    START_NODE_ID,
    Edge,
    EdgePresentation,
    Node,
    NodeKind,
    Position,
    PreviousStep,
    TaskData,
    TaskType,
    TerminalData,
    WorkflowGraph,
    edge_id_for,
    initial_graph,
)
from workflow_kernel.domain.identifiers import (
    NodeIdGenerator,
    SequentialIdGenerator,
    TimestampIdGenerator,
)
from workflow_kernel.domain.results import (
    InsertRejection,
    InsertTaskResult,
    RejectionCode,
)
from workflow_kernel.domain.task_config import (
    ApiConfig,
    ApiDefinition,
    ApiDirection,
    Assignee,
    AssignmentConfig,
    AssignmentType,
    AuxiliaryWorkflow,
    FailureRecourse,
    FailureRecourseType,
    Notification,
    TaskAction,
)

__all__ = [
    # Clock / ids
    "Clock",
    "DeterministicClock",
    "SystemClock",
    "NodeIdGenerator",
    "SequentialIdGenerator",
    "TimestampIdGenerator",
    # Graph
    "DERIVED_TASK_FIELDS",
    "EDITABLE_TASK_FIELDS",
    "END_NODE_ID",
    "START_NODE_ID",
    "Edge",
    "EdgePresentation",
    "Node",
    "NodeKind",
    "Position",
    "PreviousStep",
    "TaskData",
    "TaskType",
    "TerminalData",
    "WorkflowGraph",
    "edge_id_for",
    "initial_graph",
    # Results
    "InsertRejection",
    "InsertTaskResult",
    "RejectionCode",
    # Task configuration
    "ApiConfig",
    "ApiDefinition",
    "ApiDirection",
    "Assignee",
    "AssignmentConfig",
    "AssignmentType",
    "AuxiliaryWorkflow",
    "FailureRecourse",
    "FailureRecourseType",
    "Notification",
    "TaskAction",
]
