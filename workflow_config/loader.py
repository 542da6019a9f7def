"""
Configuration Loader (``workflow_config.loader``).

Responsibility
--------------
Loads a designer configuration YAML file and parses it into the typed,
frozen ``workflow_config.schema`` dataclasses.  Runtime callers go
through ``workflow_config.get_active_config()`` instead of calling this
directly.

Invariants enforced
-------------------
* Required keys (``name``, ``version``, every ``layout`` constant) raise
  ``KeyError`` when absent; no silent defaults for them.
* Optional sections (``edge_presentation``, ``task_defaults``,
  ``history``) fall back to the schema defaults.
* ``compute_checksum`` is a deterministic SHA-256 of the parsed source.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Missing required keys  -> ``KeyError`` propagates.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from workflow_config.schema import (
    ActionDefaultDef,
    DesignerConfig,
    EdgePresentationDef,
    HistoryConfig,
    LayoutConfig,
    NotificationDef,
    TaskDefaultsDef,
)
from workflow_kernel.utils.hashing import hash_payload


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def parse_layout(data: dict[str, Any]) -> LayoutConfig:
    return LayoutConfig(
        vertical_spacing=data["vertical_spacing"],
        start_y=data["start_y"],
        center_x=data["center_x"],
        task_width=data["task_width"],
        terminal_width=data["terminal_width"],
    )


def parse_edge_presentation(data: dict[str, Any]) -> EdgePresentationDef:
    defaults = EdgePresentationDef()
    return EdgePresentationDef(
        edge_type=data.get("edge_type", defaults.edge_type),
        animated=bool(data.get("animated", defaults.animated)),
        stroke=str(data.get("stroke", defaults.stroke)),
        label=str(data.get("label", defaults.label)),
        class_name=data.get("class_name", defaults.class_name),
    )


def parse_action_default(data: dict[str, Any]) -> ActionDefaultDef:
    """Parse one default action; ``action`` and ``label`` are required."""
    notification = data.get("notification")
    return ActionDefaultDef(
        action=data["action"],
        label=data["label"],
        enabled=bool(data.get("enabled", True)),
        notification=NotificationDef(
            title=notification["title"],
            recipients=tuple(notification.get("recipients", ())),
        ) if notification else None,
    )


def parse_task_defaults(data: dict[str, Any]) -> TaskDefaultsDef:
    defaults = TaskDefaultsDef()
    tags = data.get("tags")
    actions = data.get("approval_actions")
    return TaskDefaultsDef(
        label_template=data.get("label_template", defaults.label_template),
        tags=tuple(
            (str(task_type), tuple(values or ()))
            for task_type, values in tags.items()
        ) if tags is not None else defaults.tags,
        approval_actions=tuple(
            parse_action_default(a) for a in actions
        ) if actions is not None else defaults.approval_actions,
    )


def parse_history(data: dict[str, Any]) -> HistoryConfig:
    return HistoryConfig(max_depth=int(data.get("max_depth", HistoryConfig().max_depth)))


def compute_checksum(data: dict[str, Any]) -> str:
    """Deterministic SHA-256 of the raw configuration mapping."""
    return hash_payload(data)


def parse_designer_config(data: dict[str, Any]) -> DesignerConfig:
    """Parse a full designer configuration mapping."""
    return DesignerConfig(
        name=data["name"],
        version=int(data["version"]),
        layout=parse_layout(data["layout"]),
        edge_presentation=parse_edge_presentation(data.get("edge_presentation") or {}),
        task_defaults=parse_task_defaults(data.get("task_defaults") or {}),
        history=parse_history(data.get("history") or {}),
        checksum=compute_checksum(data),
    )


def load_designer_config(path: Path) -> DesignerConfig:
    return parse_designer_config(load_yaml_file(path))
