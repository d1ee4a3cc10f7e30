# File: tablegen/builder.py
"""
TableGen - Schema Model Builder
================================
Turns raw table / column metadata into the frozen ``TableModel`` consumed
by the templates, and resolves the per-request options against the
process-wide settings.

Column rules, applied in input order:
    - ``attr_type``: DB type with its ``(...)`` suffix removed, looked up in
      the settings' type table; ``"unknowType"`` when unmapped.
    - ``nullable``: ``isNullable == "NO"`` (required-ness, see ColumnModel).
    - ``hidden``: exact, case-sensitive membership in ``hidden_columns``.
    - ``comments``: line breaks removed; the lower attribute name if blank.
    - primary key: first column whose key marker is ``PRI`` (any case);
      the first column when none is marked.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from pydantic import ValidationError

from tablegen.config import GeneratorSettings
from tablegen.models import (
    NOT_NULL_MARKER,
    PRIMARY_KEY_MARKER,
    UNKNOWN_ATTR_TYPE,
    ColumnModel,
    GenerationConfig,
    RawColumn,
    RawTable,
    TableModel,
)
from tablegen.utils import (
    column_to_attr_name,
    first_not_blank,
    is_blank,
    remove_line_breaks,
    strip_type_length,
    table_to_class_name,
    uncapitalize,
)

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("tablegen.builder")

DATETIME_FORMAT: str = "%Y-%m-%d %H:%M:%S"


@dataclass(frozen=True, slots=True)
class ResolvedOptions:
    """Request options after falling back to the settings defaults."""

    comments: Optional[str]
    table_prefix: Optional[str]
    author: Optional[str]
    module_name: Optional[str]
    package: Optional[str]
    main_path: Optional[str]


class SchemaModelBuilder:
    """
    Build ``TableModel`` instances and template contexts.

    The settings (type table, hidden columns, defaults) are injected; the
    builder holds no other state and can be reused across calls.
    """

    def __init__(self, settings: GeneratorSettings) -> None:
        self._settings: GeneratorSettings = settings

    @property
    def settings(self) -> GeneratorSettings:
        return self._settings

    # -----------------------------------------------------------------
    # Options
    # -----------------------------------------------------------------

    def resolve_options(
        self,
        config: GenerationConfig,
        table_comment: Optional[str] = None,
    ) -> ResolvedOptions:
        """Apply the blank-falls-back-to-default rule field by field."""
        s: GeneratorSettings = self._settings

        if not is_blank(config.package_name):
            package: Optional[str] = config.package_name
            main_path: Optional[str] = config.package_name
        else:
            package = s.package
            main_path = s.main_path

        return ResolvedOptions(
            comments=first_not_blank(config.comments, table_comment),
            table_prefix=first_not_blank(config.table_prefix, s.table_prefix),
            author=first_not_blank(config.author, s.author),
            module_name=first_not_blank(config.module_name, s.module_name),
            package=package,
            main_path=main_path,
        )

    # -----------------------------------------------------------------
    # Models
    # -----------------------------------------------------------------

    def build_column(self, raw: RawColumn) -> ColumnModel:
        """
        Build one column model.

        Raises:
            ValueError: If the column name converts to an empty attribute name.
        """
        attr_name: str = column_to_attr_name(raw.column_name)
        if not attr_name:
            raise ValueError(
                f"Column '{raw.column_name}' does not yield an attribute name."
            )
        lower_attr_name: str = uncapitalize(attr_name)

        data_type: str = strip_type_length(raw.data_type)
        attr_type: str = self._settings.attr_type_for(data_type, UNKNOWN_ATTR_TYPE)
        if attr_type == UNKNOWN_ATTR_TYPE:
            logger.warning(
                "Column '%s' has unmapped data type '%s'; using %s.",
                raw.column_name,
                raw.data_type,
                UNKNOWN_ATTR_TYPE,
            )

        if is_blank(raw.comments):
            comments: str = lower_attr_name
        else:
            comments = remove_line_breaks(raw.comments or "")

        return ColumnModel(
            column_name=raw.column_name,
            data_type=raw.data_type,
            column_type=raw.column_type,
            attr_type=attr_type,
            nullable=raw.is_nullable == NOT_NULL_MARKER,
            extra=raw.extra,
            comments=comments,
            case_attr_name=attr_name,
            lower_attr_name=lower_attr_name,
            hidden=self._settings.is_hidden(raw.column_name),
        )

    def build(
        self,
        table_raw: Mapping[str, Any],
        columns_raw: Sequence[Mapping[str, Any]],
        config: Optional[GenerationConfig] = None,
    ) -> TableModel:
        """
        Build the table model for one generation call.

        Raises:
            ValueError: If the metadata is malformed, has no columns, or a
                table or column name converts to an empty identifier.
        """
        return self.build_with_options(table_raw, columns_raw, config)[0]

    def build_with_options(
        self,
        table_raw: Mapping[str, Any],
        columns_raw: Sequence[Mapping[str, Any]],
        config: Optional[GenerationConfig] = None,
    ) -> Tuple[TableModel, ResolvedOptions]:
        """Like ``build``, also returning the options the model was built with."""
        config = config if config is not None else GenerationConfig()
        try:
            table: RawTable = RawTable.model_validate(table_raw)
            raw_columns: List[RawColumn] = [
                RawColumn.model_validate(c) for c in columns_raw
            ]
        except ValidationError as exc:
            raise ValueError(f"Invalid table metadata: {exc}") from exc

        if not raw_columns:
            raise ValueError(f"Table '{table.table_name}' has no columns.")

        options: ResolvedOptions = self.resolve_options(config, table.table_comment)
        class_name: str = table_to_class_name(table.table_name, options.table_prefix)
        if not class_name:
            raise ValueError(
                f"Table '{table.table_name}' does not yield a class name "
                f"(prefix '{options.table_prefix}')."
            )

        columns: List[ColumnModel] = []
        pk: Optional[ColumnModel] = None
        for raw in raw_columns:
            column: ColumnModel = self.build_column(raw)
            if (
                pk is None
                and raw.column_key is not None
                and raw.column_key.upper() == PRIMARY_KEY_MARKER
            ):
                pk = column
            columns.append(column)

        if pk is None:
            pk = columns[0]
            logger.debug(
                "Table '%s' has no primary key; using first column '%s'.",
                table.table_name,
                pk.column_name,
            )

        model: TableModel = TableModel(
            table_name=table.table_name,
            db_type=table.db_type,
            comments=options.comments,
            case_class_name=class_name,
            lower_class_name=uncapitalize(class_name),
            columns=columns,
            pk=pk,
        )
        return model, options

    # -----------------------------------------------------------------
    # Template context
    # -----------------------------------------------------------------

    def build_context(
        self,
        table: TableModel,
        options: ResolvedOptions,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """Return the variable set every template is rendered against."""
        timestamp: datetime = now if now is not None else datetime.now()
        return {
            "dbType": table.db_type,
            "tableName": table.table_name,
            "pk": table.pk,
            "className": table.case_class_name,
            "classname": table.lower_class_name,
            "pathName": table.path_name,
            "columns": table.columns,
            "hasBigDecimal": table.has_big_decimal,
            "datetime": timestamp.strftime(DATETIME_FORMAT),
            "comments": options.comments,
            "author": options.author,
            "moduleName": options.module_name,
            "package": options.package,
            "mainPath": options.main_path,
        }


__all__: List[str] = [
    "DATETIME_FORMAT",
    "ResolvedOptions",
    "SchemaModelBuilder",
]
