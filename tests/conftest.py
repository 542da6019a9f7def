"""
Pytest fixtures for the workflow designer test suite.

Provides:
- Structured logging configured for the whole session
- ``captured_logs`` for asserting on emitted events
- Default designer config and a deterministic node id generator
- Chain builders that produce graphs through the real mutation engine
"""

import json
import logging
from collections.abc import Callable
from io import StringIO

import pytest

from workflow_config import DesignerConfig, default_config
from workflow_kernel.domain.graph import TaskType, WorkflowGraph
from workflow_kernel.domain.identifiers import SequentialIdGenerator
from workflow_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from workflow_services.mutation_engine import insert_task, new_graph


# =============================================================================
# Logging fixtures
# =============================================================================


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture workflow_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, designer_config):
            delete_task(graph, "task-1", config=designer_config)
            logs = captured_logs()
            assert any(r["message"] == "task_deleted" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("workflow_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# =============================================================================
# Domain fixtures
# =============================================================================


@pytest.fixture
def designer_config() -> DesignerConfig:
    return default_config()


@pytest.fixture
def id_generator() -> SequentialIdGenerator:
    return SequentialIdGenerator()


@pytest.fixture
def empty_graph(designer_config) -> WorkflowGraph:
    """start -> end, laid out."""
    return new_graph(designer_config)


def last_edge_into_end(graph: WorkflowGraph) -> str:
    """Id of the edge that currently enters ``end``."""
    return next(e.id for e in graph.edges if e.target == "end")


@pytest.fixture
def build_chain(designer_config, id_generator) -> Callable[..., WorkflowGraph]:
    """
    Build start -> t1 -> ... -> tn -> end by appending before ``end``.

    Usage::

        graph = build_chain(TaskType.CREATE, TaskType.APPROVAL)
    """

    def _build(*task_types: TaskType) -> WorkflowGraph:
        graph = new_graph(designer_config)
        for task_type in task_types:
            result = insert_task(
                graph,
                last_edge_into_end(graph),
                task_type,
                config=designer_config,
                id_generator=id_generator,
            )
            assert result.is_success, result.rejection
            graph = result.graph
        return graph

    return _build
