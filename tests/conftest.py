"""
tests/conftest.py
Shared fixtures for the tablegen test suite.

Real Jinja rendering and real zip files inside pytest's tmp_path are used
throughout; nothing in the generation pipeline is mocked.
"""

from __future__ import annotations

import copy
import pathlib
from datetime import datetime
from typing import Any, Dict, List

import pytest
import yaml

from tablegen.config import GeneratorSettings, load_settings
from tablegen.generator import CodeGenerator

FIXED_NOW: datetime = datetime(2024, 5, 17, 9, 30, 0)


# ---------------------------------------------------------------------------
# Raw metadata fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def sys_user_table() -> Dict[str, Any]:
    """Table metadata row for ``sys_user``."""
    return {
        "tableName": "sys_user",
        "tableComment": "System user",
        "dbType": "mysql",
    }


@pytest.fixture()
def sys_user_columns() -> List[Dict[str, Any]]:
    """Three columns: a primary key, a required varchar and a nullable datetime."""
    return [
        {
            "columnName": "id",
            "dataType": "bigint",
            "columnType": "bigint(20)",
            "isNullable": "NO",
            "extra": "auto_increment",
            "columnKey": "PRI",
            "comments": "Primary key",
        },
        {
            "columnName": "user_name",
            "dataType": "varchar(64)",
            "columnType": "varchar(64)",
            "isNullable": "NO",
            "extra": "",
            "columnKey": "",
            "comments": "User\r\nname",
        },
        {
            "columnName": "create_time",
            "dataType": "datetime",
            "columnType": "datetime",
            "isNullable": "YES",
            "extra": "",
            "columnKey": "",
            "comments": "",
        },
    ]


@pytest.fixture()
def order_columns() -> List[Dict[str, Any]]:
    """Columns without a primary-key marker, including a decimal and a hidden column."""
    return [
        {
            "columnName": "order_no",
            "dataType": "varchar(32)",
            "columnType": "varchar(32)",
            "isNullable": "NO",
            "extra": "",
            "columnKey": "",
            "comments": "Order number",
        },
        {
            "columnName": "amount",
            "dataType": "decimal(10,2)",
            "columnType": "decimal(10,2)",
            "isNullable": "YES",
            "extra": "",
            "columnKey": "",
            "comments": "Amount",
        },
        {
            "columnName": "tenant_id",
            "dataType": "bigint",
            "columnType": "bigint(20)",
            "isNullable": "YES",
            "extra": "",
            "columnKey": "",
            "comments": "Tenant",
        },
        {
            "columnName": "geo",
            "dataType": "geometry",
            "columnType": "geometry",
            "isNullable": "YES",
            "extra": "",
            "columnKey": "",
            "comments": None,
        },
    ]


# ---------------------------------------------------------------------------
# Settings & generator fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def packaged_settings() -> GeneratorSettings:
    """The packaged generator.yaml, loaded once per session."""
    return load_settings()


@pytest.fixture()
def settings(packaged_settings: GeneratorSettings) -> GeneratorSettings:
    """Deterministic settings independent of edits to the packaged defaults."""
    return packaged_settings.model_copy(
        update={
            "package": "com.example.platform",
            "main_path": "com.example.platform",
            "module_name": "admin",
            "author": "tablegen",
            "table_prefix": "tb_",
            "backend_project": "backend",
            "frontend_project": "frontend",
            "hidden_columns": ["tenant_id"],
        }
    )


@pytest.fixture()
def generator(settings: GeneratorSettings) -> CodeGenerator:
    """Generator with a fixed clock so rendered timestamps are stable."""
    return CodeGenerator(settings=settings, clock=lambda: FIXED_NOW)


# ---------------------------------------------------------------------------
# File fixtures
# ---------------------------------------------------------------------------


@pytest.fixture()
def metadata_dict(
    sys_user_table: Dict[str, Any], sys_user_columns: List[Dict[str, Any]]
) -> Dict[str, Any]:
    return {
        "table": copy.deepcopy(sys_user_table),
        "columns": copy.deepcopy(sys_user_columns),
        "config": {"tablePrefix": "sys_"},
    }


@pytest.fixture()
def metadata_yaml_path(metadata_dict: Dict[str, Any], tmp_path: pathlib.Path) -> pathlib.Path:
    """Write the sys_user metadata to a temporary YAML file and return its path."""
    path = tmp_path / "sys_user.yaml"
    with open(path, "w", encoding="utf-8") as fh:
        yaml.dump(metadata_dict, fh, default_flow_style=False, allow_unicode=True)
    return path


@pytest.fixture()
def settings_yaml_path(tmp_path: pathlib.Path) -> pathlib.Path:
    """A minimal settings file with one configured datasource."""
    path = tmp_path / "generator.yaml"
    data = {
        "package": "com.acme.crm",
        "module_name": "crm",
        "author": "acme",
        "hidden_columns": ["del_flag"],
        "type_mapping": {"bigint": "Long", "varchar": "String"},
        "datasources": [{"name": "reportDb", "ds_type": "PG"}],
    }
    with open(path, "w", encoding="utf-8") as fh:
        yaml.dump(data, fh, default_flow_style=False)
    return path
