"""
workflow_services.editor -- Stateful editing session over immutable graphs.

Responsibility:
    Holds the current ``WorkflowGraph`` for one designer session and
    routes every user action through ``mutation_engine``.  Because each
    mutation returns a new snapshot, undo/redo is a pair of bounded
    snapshot stacks; nothing is ever patched in place.

Architecture position:
    Services layer.  The only stateful object in the package.

Invariants enforced:
    - Only successful changes are recorded: rejected inserts and
      no-op connects leave both history stacks untouched.
    - A new change clears the redo stack.
    - History depth never exceeds ``config.history.max_depth``; the
      oldest snapshot is dropped first.
    - ``version`` increases by one on every change, undo and redo.

Failure modes:
    Contract violations from ``mutation_engine`` propagate unchanged
    and leave the session as it was.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Mapping
from typing import Any
from uuid import uuid4

from workflow_config import DesignerConfig, default_config
from workflow_engines.summary import NodeErrorSummary, can_publish, collect_errors
from workflow_kernel.domain.graph import TaskType, WorkflowGraph
from workflow_kernel.domain.identifiers import NodeIdGenerator, SequentialIdGenerator
from workflow_kernel.domain.results import InsertTaskResult
from workflow_kernel.logging_config import LogContext, get_logger
from workflow_services import mutation_engine

logger = get_logger("services.editor")


class WorkflowEditor:
    """One designer session: current graph, history and change counter."""

    def __init__(
        self,
        config: DesignerConfig | None = None,
        id_generator: NodeIdGenerator | None = None,
        graph: WorkflowGraph | None = None,
        session_id: str | None = None,
    ):
        self._config = config or default_config()
        self._id_generator = id_generator or SequentialIdGenerator()
        self._session_id = session_id or str(uuid4())
        self._graph = (
            mutation_engine.recompute(graph, config=self._config)
            if graph is not None
            else mutation_engine.new_graph(self._config)
        )
        depth = self._config.history.max_depth
        self._past: deque[WorkflowGraph] = deque(maxlen=depth)
        self._future: deque[WorkflowGraph] = deque(maxlen=depth)
        self._version = 0

    # -- state ---------------------------------------------------------------

    @property
    def graph(self) -> WorkflowGraph:
        return self._graph

    @property
    def config(self) -> DesignerConfig:
        return self._config

    @property
    def session_id(self) -> str:
        return self._session_id

    @property
    def version(self) -> int:
        return self._version

    @property
    def can_undo(self) -> bool:
        return bool(self._past)

    @property
    def can_redo(self) -> bool:
        return bool(self._future)

    def _bind(self, **extra: str | None):
        return LogContext.bind(
            session_id=self._session_id,
            graph_version=str(self._version),
            **extra,
        )

    def _commit(self, graph: WorkflowGraph) -> None:
        if graph is self._graph:
            return
        self._past.append(self._graph)
        self._future.clear()
        self._graph = graph
        self._version += 1

    # -- mutations -----------------------------------------------------------

    def insert_task(self, anchor_edge_id: str, task_type: TaskType) -> InsertTaskResult:
        with self._bind():
            result = mutation_engine.insert_task(
                self._graph,
                anchor_edge_id,
                task_type,
                config=self._config,
                id_generator=self._id_generator,
            )
        if result.is_success:
            self._commit(result.graph)
        return result

    def available_task_types(self, anchor_edge_id: str) -> tuple[TaskType, ...]:
        return mutation_engine.available_task_types(self._graph, anchor_edge_id)

    def delete_task(self, node_id: str) -> WorkflowGraph:
        with self._bind(node_id=node_id):
            graph = mutation_engine.delete_task(self._graph, node_id, config=self._config)
        self._commit(graph)
        return self._graph

    def connect(self, source_id: str, target_id: str) -> WorkflowGraph:
        with self._bind():
            graph = mutation_engine.connect(
                self._graph, source_id, target_id, config=self._config
            )
        self._commit(graph)
        return self._graph

    def update_task(self, node_id: str, changes: Mapping[str, Any]) -> WorkflowGraph:
        with self._bind(node_id=node_id):
            graph = mutation_engine.update_task(
                self._graph, node_id, changes, config=self._config
            )
        self._commit(graph)
        return self._graph

    # -- history -------------------------------------------------------------

    def undo(self) -> bool:
        """Restore the previous snapshot. False when there is nothing to undo."""
        if not self._past:
            return False
        self._future.append(self._graph)
        self._graph = self._past.pop()
        self._version += 1
        with self._bind():
            logger.info(
                "editor_undo",
                extra={"undo_depth": len(self._past), "redo_depth": len(self._future)},
            )
        return True

    def redo(self) -> bool:
        """Re-apply the last undone snapshot. False when there is nothing to redo."""
        if not self._future:
            return False
        self._past.append(self._graph)
        self._graph = self._future.pop()
        self._version += 1
        with self._bind():
            logger.info(
                "editor_redo",
                extra={"undo_depth": len(self._past), "redo_depth": len(self._future)},
            )
        return True

    # -- summary -------------------------------------------------------------

    def collect_errors(self) -> tuple[NodeErrorSummary, ...]:
        return collect_errors(self._graph)

    def can_publish(self) -> bool:
        return can_publish(self._graph)
