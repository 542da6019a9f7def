"""
workflow_config -- single public entrypoint for designer configuration.

Responsibility:
    ``get_active_config()`` is the way to obtain a validated
    ``DesignerConfig`` at runtime.  ``default_config()`` returns the
    built-in defaults without touching the filesystem.

Architecture position:
    Configuration -- sits above ``workflow_kernel`` and beside the
    services.  The kernel and the engines never import from here; the
    services translate config values into plain engine arguments.

Failure modes:
    - ``FileNotFoundError`` -- the requested YAML file does not exist.
    - ``KeyError`` -- a required key is missing.
    - ``ConfigValidationError`` -- structural validation failed.

Audit relevance:
    Every successful ``get_active_config()`` emits a
    ``designer_config_loaded`` log entry with name, version and checksum.
"""

from __future__ import annotations

from pathlib import Path

from workflow_config.loader import load_designer_config
from workflow_config.schema import DesignerConfig
from workflow_config.validator import ConfigValidationError, validate_configuration
from workflow_kernel.logging_config import get_logger

_logger = get_logger("config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "sets" / "default.yaml"


def get_active_config(config_path: Path | None = None) -> DesignerConfig:
    """Load, validate and return the designer configuration.

    Raises:
        ConfigValidationError: if validation reports errors.
    """
    path = config_path or DEFAULT_CONFIG_PATH
    config = load_designer_config(path)

    result = validate_configuration(config)
    for warning in result.warnings:
        _logger.warning("designer_config_warning", extra={"warning": warning})
    if not result.is_valid:
        raise ConfigValidationError(tuple(result.errors))

    _logger.info(
        "designer_config_loaded",
        extra={
            "config_name": config.name,
            "config_version": config.version,
            "checksum": config.checksum,
            "path": str(path),
        },
    )
    return config


def default_config() -> DesignerConfig:
    """The built-in configuration; no I/O."""
    return DesignerConfig()


__all__ = [
    "ConfigValidationError",
    "DEFAULT_CONFIG_PATH",
    "DesignerConfig",
    "default_config",
    "get_active_config",
]
