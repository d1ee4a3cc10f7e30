"""
tests/test_datasource.py
Unit tests for tablegen.datasource (registry and dispatcher).
"""

from __future__ import annotations

from typing import Dict, List

import pytest

from tablegen.config import GeneratorSettings, load_settings
from tablegen.datasource import (
    BackendRegistry,
    DatasourceConf,
    DatasourceDispatcher,
    DatasourceType,
    InvalidDatasourceError,
    MetadataBackend,
    RegistryError,
)


class StaticBackend(MetadataBackend):
    """In-memory backend returning canned metadata."""

    def __init__(self, label: str) -> None:
        self.label = label

    def query_table(self, table_name: str, ds_name: str) -> Dict[str, str]:
        return {"tableName": table_name, "tableComment": "", "dbType": self.label}

    def query_columns(self, table_name: str, ds_name: str) -> List[Dict[str, str]]:
        return [{"columnName": "id", "dataType": "bigint", "columnKey": "PRI"}]


@pytest.fixture()
def registry() -> BackendRegistry:
    reg = BackendRegistry()
    reg.register(DatasourceType.MYSQL, StaticBackend("mysql"))
    reg.register(DatasourceType.PG, StaticBackend("pg"))
    reg.freeze()
    return reg


class TestBackendRegistry:
    def test_duplicate_registration_rejected(self) -> None:
        reg = BackendRegistry()
        reg.register(DatasourceType.MYSQL, StaticBackend("a"))
        with pytest.raises(RegistryError, match="already registered"):
            reg.register(DatasourceType.MYSQL, StaticBackend("b"))

    def test_replace(self) -> None:
        reg = BackendRegistry()
        reg.register(DatasourceType.MYSQL, StaticBackend("a"))
        replacement = StaticBackend("b")
        reg.register(DatasourceType.MYSQL, replacement, replace=True)
        assert reg.get(DatasourceType.MYSQL) is replacement

    def test_frozen_registry(self, registry: BackendRegistry) -> None:
        assert registry.frozen
        with pytest.raises(RegistryError, match="frozen"):
            registry.register(DatasourceType.ORACLE, StaticBackend("oracle"))

    def test_rejects_non_backend(self) -> None:
        with pytest.raises(RegistryError, match="MetadataBackend"):
            BackendRegistry().register(DatasourceType.MYSQL, object())  # type: ignore[arg-type]

    def test_membership(self, registry: BackendRegistry) -> None:
        assert DatasourceType.PG in registry
        assert DatasourceType.ORACLE not in registry
        assert len(registry) == 2
        assert list(registry) == [DatasourceType.MYSQL, DatasourceType.PG]


class TestDatasourceDispatcher:
    def test_configured_type(self, registry: BackendRegistry) -> None:
        dispatcher = DatasourceDispatcher(
            registry, {"reportDb": DatasourceConf(name="reportDb", ds_type="PG")}
        )
        backend = dispatcher.resolve("reportDb")
        assert isinstance(backend, StaticBackend)
        assert backend.label == "pg"

    def test_unknown_name_defaults_to_mysql(self, registry: BackendRegistry) -> None:
        dispatcher = DatasourceDispatcher(registry)
        assert dispatcher.resolve_type("reportDb") is DatasourceType.MYSQL
        assert dispatcher.resolve("reportDb").label == "mysql"

    def test_default_type_without_backend_fails(self) -> None:
        reg = BackendRegistry()
        reg.register(DatasourceType.PG, StaticBackend("pg"))
        dispatcher = DatasourceDispatcher(reg)
        with pytest.raises(InvalidDatasourceError, match="reportDb"):
            dispatcher.resolve("reportDb")

    def test_invalid_datasource_is_value_error(self) -> None:
        dispatcher = DatasourceDispatcher(BackendRegistry())
        with pytest.raises(ValueError):
            dispatcher.resolve("anything")

    def test_unsupported_declared_type(self, registry: BackendRegistry) -> None:
        dispatcher = DatasourceDispatcher(
            registry, {"legacy": DatasourceConf(name="legacy", dsType="sybase")}
        )
        with pytest.raises(InvalidDatasourceError, match="sybase"):
            dispatcher.resolve("legacy")

    def test_from_settings(self, registry: BackendRegistry, settings_yaml_path) -> None:
        settings: GeneratorSettings = load_settings(settings_yaml_path)
        dispatcher = DatasourceDispatcher.from_settings(settings, registry)
        assert dispatcher.resolve_type("reportDb") is DatasourceType.PG
        backend = dispatcher.resolve("reportDb")
        assert backend.query_table("t_report", "reportDb")["dbType"] == "pg"

    def test_custom_default_type(self, registry: BackendRegistry) -> None:
        dispatcher = DatasourceDispatcher(registry, default_type=DatasourceType.PG)
        assert dispatcher.resolve("missing").label == "pg"
