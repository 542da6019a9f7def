"""
Configuration Validator (``workflow_config.validator``).

Responsibility
--------------
Validates a ``DesignerConfig`` before it is handed to the editor, so a
bad YAML edit fails at load time instead of producing a broken canvas.

Invariants enforced
-------------------
* Layout spacing and node widths are positive.
* Every task type has a tags entry; no unknown task types are listed.
* Default approval action names are unique and labels non-empty.
* The label template formats with ``task_type`` only.
* History depth is at least 1.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from workflow_config.schema import DesignerConfig
from workflow_kernel.domain.graph import TaskType


class ConfigValidationError(Exception):
    """A configuration failed validation and must not be used."""

    code: str = "CONFIG_VALIDATION_FAILED"

    def __init__(self, errors: tuple[str, ...]):
        self.errors = errors
        super().__init__(
            f"Configuration validation failed: {'; '.join(errors)}"
        )


@dataclass
class ConfigValidationResult:
    """
    Result of configuration validation.

    ``is_valid`` is True only when ``errors`` is empty.  Warnings do not
    block loading.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)


def validate_configuration(config: DesignerConfig) -> ConfigValidationResult:
    result = ConfigValidationResult()

    _validate_layout(config, result)
    _validate_tags(config, result)
    _validate_actions(config, result)
    _validate_label_template(config, result)
    _validate_history(config, result)

    return result


def _validate_layout(config: DesignerConfig, result: ConfigValidationResult) -> None:
    layout = config.layout
    for name in ("vertical_spacing", "task_width", "terminal_width"):
        if getattr(layout, name) <= 0:
            result.add_error(f"layout.{name} must be positive")


def _validate_tags(config: DesignerConfig, result: ConfigValidationResult) -> None:
    known = {t.value for t in TaskType}
    listed = [name for name, _ in config.task_defaults.tags]
    for name in listed:
        if name not in known:
            result.add_error(f"task_defaults.tags lists unknown task type '{name}'")
    for name in sorted(known - set(listed)):
        result.add_warning(f"task_defaults.tags has no entry for '{name}'")


def _validate_actions(config: DesignerConfig, result: ConfigValidationResult) -> None:
    seen: set[str] = set()
    for action in config.task_defaults.approval_actions:
        if action.action in seen:
            result.add_error(f"Duplicate default action '{action.action}'")
        seen.add(action.action)
        if not action.label.strip():
            result.add_error(f"Default action '{action.action}' has an empty label")


def _validate_label_template(
    config: DesignerConfig, result: ConfigValidationResult
) -> None:
    try:
        config.task_defaults.label_template.format(task_type="create")
    except (KeyError, IndexError, ValueError) as exc:
        result.add_error(f"task_defaults.label_template is not formattable: {exc}")


def _validate_history(config: DesignerConfig, result: ConfigValidationResult) -> None:
    if config.history.max_depth < 1:
        result.add_error("history.max_depth must be at least 1")
