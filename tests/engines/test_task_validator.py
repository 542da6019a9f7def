"""
Tests for the task configuration validator.

The validator never raises: missing configuration shows up as an error
string on the node and only gates publishing.
"""

import pytest

from workflow_engines.validator import (
    ACTION_LABELS_REQUIRED,
    API_REQUIRED,
    APPROVAL_ASSIGNMENT_REQUIRED,
    ASSIGNMENT_REQUIRED,
    LABEL_REQUIRED,
    validate_node,
    validate_nodes,
    validate_task,
)
from workflow_kernel.domain.graph import (
    Node,
    NodeKind,
    Position,
    TaskData,
    TaskType,
    TerminalData,
)
from workflow_kernel.domain.task_config import (
    ApiConfig,
    ApiDefinition,
    ApiDirection,
    AssignmentConfig,
    AssignmentType,
    TaskAction,
)

ROLES = AssignmentConfig(type=AssignmentType.ROLES, roles=("Buyer",))
PO_API = ApiDefinition(
    id="api-1",
    name="Create PO",
    direction=ApiDirection.OUTBOUND,
    endpoint="https://erp.example.com/po",
)


def _data(task_type: TaskType, **overrides) -> TaskData:
    return TaskData(task_type=task_type, label=overrides.pop("label", "Step"), **overrides)


class TestLabelRule:

    @pytest.mark.parametrize("label", ["", "   ", "\t\n"])
    def test_blank_label_reported(self, label):
        errors = validate_task(TaskType.CREATE, _data(TaskType.CREATE, label=label, assignment=ROLES))
        assert errors == (LABEL_REQUIRED,)

    def test_label_error_comes_first(self):
        errors = validate_task(TaskType.CREATE, _data(TaskType.CREATE, label=""))
        assert errors == (LABEL_REQUIRED, ASSIGNMENT_REQUIRED)


class TestCreateRules:

    def test_missing_assignment(self):
        assert validate_task(TaskType.CREATE, _data(TaskType.CREATE)) == (ASSIGNMENT_REQUIRED,)

    def test_assignment_without_type_is_missing(self):
        data = _data(TaskType.CREATE, assignment=AssignmentConfig(roles=("Buyer",)))
        assert validate_task(TaskType.CREATE, data) == (ASSIGNMENT_REQUIRED,)

    def test_configured(self):
        assert validate_task(TaskType.CREATE, _data(TaskType.CREATE, assignment=ROLES)) == ()


class TestApprovalRules:

    def test_missing_assignment_and_empty_action_label_in_order(self):
        data = _data(TaskType.APPROVAL, actions=(TaskAction(action="approve", label=""),))
        assert validate_task(TaskType.APPROVAL, data) == (
            APPROVAL_ASSIGNMENT_REQUIRED,
            ACTION_LABELS_REQUIRED,
        )

    def test_empty_label_reported_once_for_many_actions(self):
        data = _data(
            TaskType.APPROVAL,
            assignment=AssignmentConfig(type=AssignmentType.MANAGER),
            actions=(
                TaskAction(action="approve", label=""),
                TaskAction(action="reject", label="  "),
            ),
        )
        assert validate_task(TaskType.APPROVAL, data) == (ACTION_LABELS_REQUIRED,)

    def test_disabled_actions_still_checked(self):
        data = _data(
            TaskType.APPROVAL,
            assignment=ROLES,
            actions=(TaskAction(action="edit", label="", enabled=False),),
        )
        assert validate_task(TaskType.APPROVAL, data) == (ACTION_LABELS_REQUIRED,)

    def test_no_actions_is_fine(self):
        assert validate_task(TaskType.APPROVAL, _data(TaskType.APPROVAL, assignment=ROLES)) == ()


class TestIntegrationRules:

    def test_missing_api(self):
        assert validate_task(TaskType.INTEGRATION, _data(TaskType.INTEGRATION)) == (API_REQUIRED,)

    def test_api_config_without_selection(self):
        data = _data(TaskType.INTEGRATION, api_config=ApiConfig())
        assert validate_task(TaskType.INTEGRATION, data) == (API_REQUIRED,)

    def test_configured(self):
        data = _data(TaskType.INTEGRATION, api_config=ApiConfig(selected_api=PO_API))
        assert validate_task(TaskType.INTEGRATION, data) == ()

    def test_integration_does_not_require_assignment(self):
        data = _data(TaskType.INTEGRATION, api_config=ApiConfig(selected_api=PO_API))
        assert ASSIGNMENT_REQUIRED not in validate_task(TaskType.INTEGRATION, data)


class TestNeverRaises:

    def test_none_data(self):
        assert validate_task(TaskType.CREATE, None) == (LABEL_REQUIRED, ASSIGNMENT_REQUIRED)

    def test_none_task_type_checks_label_only(self):
        assert validate_task(None, _data(TaskType.CREATE, label="")) == (LABEL_REQUIRED,)

    def test_deterministic(self):
        data = _data(TaskType.APPROVAL, label="", actions=(TaskAction("approve", ""),))
        assert validate_task(TaskType.APPROVAL, data) == validate_task(TaskType.APPROVAL, data)


class TestValidateNodes:

    def test_attaches_errors_to_task_nodes(self):
        node = Node("task-1", NodeKind.TASK, Position(0, 0), _data(TaskType.CREATE))
        validated = validate_node(node)
        assert validated.data.validation_errors == (ASSIGNMENT_REQUIRED,)
        assert node.data.validation_errors == ()

    def test_terminal_nodes_pass_through(self):
        start = Node("start", NodeKind.START, Position(0, 0), TerminalData("Start"))
        assert validate_node(start) is start

    def test_unchanged_node_returned_as_is(self):
        node = Node(
            "task-1",
            NodeKind.TASK,
            Position(0, 0),
            _data(TaskType.CREATE, validation_errors=(ASSIGNMENT_REQUIRED,)),
        )
        assert validate_node(node) is node

    def test_stale_errors_cleared(self):
        node = Node(
            "task-1",
            NodeKind.TASK,
            Position(0, 0),
            _data(TaskType.CREATE, assignment=ROLES, validation_errors=(ASSIGNMENT_REQUIRED,)),
        )
        assert validate_node(node).data.validation_errors == ()

    def test_validate_nodes_preserves_order(self):
        nodes = (
            Node("start", NodeKind.START, Position(0, 0), TerminalData("Start")),
            Node("task-1", NodeKind.TASK, Position(0, 1), _data(TaskType.CREATE)),
            Node("end", NodeKind.END, Position(0, 2), TerminalData("End")),
        )
        assert [n.id for n in validate_nodes(nodes)] == ["start", "task-1", "end"]
