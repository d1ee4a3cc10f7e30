# File: tablegen/models.py
"""
TableGen - Core Data Models
============================
Pydantic V2 models for the generation pipeline:

    Raw metadata (RawTable / RawColumn)
        -> SchemaModelBuilder
        -> TableModel (with nested ColumnModel)
        -> TemplateRenderer / resolve_path

Raw models accept the camelCase keys produced by the metadata queries
(``tableName``, ``columnKey``, ...).  Generation models are frozen: they are
built once per call and only read afterwards.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("tablegen.models")

# ---------------------------------------------------------------------------
# Constants
# ---------------------------------------------------------------------------

UNKNOWN_ATTR_TYPE: str = "unknowType"
DECIMAL_ATTR_TYPE: str = "BigDecimal"
PRIMARY_KEY_MARKER: str = "PRI"
NOT_NULL_MARKER: str = "NO"


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class Style(str, Enum):
    """Frontend styles.  Anything other than ELEMENT renders as AVUE."""

    AVUE = "avue"
    ELEMENT = "element"


# ---------------------------------------------------------------------------
# Shared model configuration
# ---------------------------------------------------------------------------

_RAW_CONFIG: ConfigDict = ConfigDict(
    populate_by_name=True,
    extra="ignore",
    str_strip_whitespace=False,
)

_FROZEN_CONFIG: ConfigDict = ConfigDict(
    populate_by_name=True,
    extra="forbid",
    frozen=True,
)


# ---------------------------------------------------------------------------
# Raw metadata (input side)
# ---------------------------------------------------------------------------


class RawTable(BaseModel):
    """Table metadata row as returned by a metadata backend."""

    model_config = _RAW_CONFIG

    table_name: str = Field(..., alias="tableName", min_length=1)
    table_comment: Optional[str] = Field(default=None, alias="tableComment")
    db_type: Optional[str] = Field(default=None, alias="dbType")


class RawColumn(BaseModel):
    """Column metadata row as returned by a metadata backend."""

    model_config = _RAW_CONFIG

    column_name: str = Field(..., alias="columnName", min_length=1)
    data_type: str = Field(default="", alias="dataType")
    column_type: Optional[str] = Field(default=None, alias="columnType")
    is_nullable: Optional[str] = Field(default=None, alias="isNullable")
    extra: Optional[str] = Field(default=None)
    column_key: Optional[str] = Field(default=None, alias="columnKey")
    comments: Optional[str] = Field(default=None)


# ---------------------------------------------------------------------------
# Generation models
# ---------------------------------------------------------------------------


class ColumnModel(BaseModel):
    """
    Normalised column exposed to templates.

    ``nullable`` is True when the source column is declared ``NOT NULL``
    (``isNullable == "NO"``): it carries *required-ness* under the historical
    field name.  ``required`` exposes the same value under an honest name.
    """

    model_config = _FROZEN_CONFIG

    column_name: str
    data_type: str
    column_type: Optional[str] = None
    attr_type: str = UNKNOWN_ATTR_TYPE
    nullable: bool = False
    extra: Optional[str] = None
    comments: str = ""
    case_attr_name: str
    lower_attr_name: str
    hidden: bool = False

    @computed_field  # type: ignore[misc]
    @property
    def required(self) -> bool:
        return self.nullable

    @computed_field  # type: ignore[misc]
    @property
    def auto_increment(self) -> bool:
        return "auto_increment" in (self.extra or "").lower()

    def __repr__(self) -> str:
        return f"<Column {self.column_name}: {self.attr_type}>"


class TableModel(BaseModel):
    """Normalised table exposed to templates.  ``pk`` is never None."""

    model_config = _FROZEN_CONFIG

    table_name: str
    db_type: Optional[str] = None
    comments: Optional[str] = None
    case_class_name: str
    lower_class_name: str
    columns: List[ColumnModel] = Field(..., min_length=1)
    pk: ColumnModel

    @computed_field  # type: ignore[misc]
    @property
    def path_name(self) -> str:
        return self.lower_class_name.lower()

    @computed_field  # type: ignore[misc]
    @property
    def has_big_decimal(self) -> bool:
        return any(c.attr_type == DECIMAL_ATTR_TYPE for c in self.columns)

    def get_column(self, column_name: str) -> Optional[ColumnModel]:
        for column in self.columns:
            if column.column_name == column_name:
                return column
        return None

    def __repr__(self) -> str:
        return (
            f"<Table {self.table_name} -> {self.case_class_name} "
            f"({len(self.columns)} cols, pk={self.pk.column_name})>"
        )


# ---------------------------------------------------------------------------
# Generation request options
# ---------------------------------------------------------------------------


class GenerationConfig(BaseModel):
    """
    Per-request overrides.  Every blank field falls back to the
    process-wide ``GeneratorSettings`` value.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    comments: Optional[str] = Field(default=None, description="Table comment override.")
    table_prefix: Optional[str] = Field(default=None, alias="tablePrefix")
    author: Optional[str] = Field(default=None)
    module_name: Optional[str] = Field(default=None, alias="moduleName")
    package_name: Optional[str] = Field(default=None, alias="packageName")
    style: Optional[str] = Field(
        default=None,
        description="Frontend style; 'element' or anything else for avue.",
    )

    @property
    def is_element_style(self) -> bool:
        return self.style == Style.ELEMENT.value


# ---------------------------------------------------------------------------
# Output records
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class GeneratedArtifact:
    """One rendered artifact: template identifier, output path, text."""

    template: str
    path: Optional[str]
    content: str

    @property
    def size_bytes(self) -> int:
        return len(self.content.encode("utf-8"))


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "DECIMAL_ATTR_TYPE",
    "NOT_NULL_MARKER",
    "PRIMARY_KEY_MARKER",
    "UNKNOWN_ATTR_TYPE",
    "Style",
    "RawTable",
    "RawColumn",
    "ColumnModel",
    "TableModel",
    "GenerationConfig",
    "GeneratedArtifact",
]
