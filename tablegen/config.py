# File: tablegen/config.py
"""
TableGen - Process-Wide Settings
=================================
Loads the static generator configuration (defaults for author / package /
module, the DB-type -> attribute-type table, hidden columns and named
datasources) from YAML.

The packaged ``generator.yaml`` is used when no path is given.  Any failure
to read or validate the file is fatal for the calling generation run and is
reported as ``ConfigurationError``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from tablegen.datasource import DatasourceConf

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("tablegen.config")

DEFAULT_SETTINGS_PATH: Path = Path(__file__).resolve().parent / "generator.yaml"


class ConfigurationError(RuntimeError):
    """Raised when the generator settings cannot be loaded."""


class GeneratorSettings(BaseModel):
    """Static configuration shared by every generation call."""

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    package: Optional[str] = Field(default=None, description="Default base package.")
    main_path: Optional[str] = Field(default=None, alias="mainPath")
    module_name: Optional[str] = Field(default=None, alias="moduleName")
    author: Optional[str] = Field(default=None)
    table_prefix: Optional[str] = Field(default=None, alias="tablePrefix")
    backend_project: str = Field(default="backend", min_length=1)
    frontend_project: str = Field(default="frontend", min_length=1)
    hidden_columns: List[str] = Field(default_factory=list, alias="hiddenColumns")
    type_mapping: Dict[str, str] = Field(default_factory=dict, alias="typeMapping")
    datasources: List[DatasourceConf] = Field(default_factory=list)

    def attr_type_for(self, data_type: str, default: str) -> str:
        """Look up the attribute type for a (length-stripped) DB type."""
        return self.type_mapping.get(data_type, default)

    def is_hidden(self, column_name: str) -> bool:
        return column_name in self.hidden_columns


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        text: str = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(
            f"Failed to read generator settings from {path}: {exc}"
        ) from exc

    try:
        data: Any = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigurationError(
            f"Invalid YAML in generator settings {path}: {exc}"
        ) from exc

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            f"Expected a YAML mapping at top level of {path}, "
            f"got {type(data).__name__}."
        )
    return data


def load_settings(path: Optional[Path] = None) -> GeneratorSettings:
    """
    Load and validate generator settings.

    Args:
        path: YAML file to load; the packaged defaults when omitted.

    Raises:
        ConfigurationError: If the file is missing, unreadable or invalid.
    """
    settings_path: Path = Path(path) if path is not None else DEFAULT_SETTINGS_PATH
    raw: Dict[str, Any] = _read_yaml(settings_path)

    try:
        settings: GeneratorSettings = GeneratorSettings.model_validate(raw)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Generator settings in {settings_path} failed validation: {exc}"
        ) from exc

    logger.debug(
        "Loaded settings from %s: %d type mappings, %d hidden columns, %d datasources.",
        settings_path,
        len(settings.type_mapping),
        len(settings.hidden_columns),
        len(settings.datasources),
    )
    return settings


__all__: List[str] = [
    "DEFAULT_SETTINGS_PATH",
    "ConfigurationError",
    "GeneratorSettings",
    "load_settings",
]
