# File: tablegen/datasource.py
"""
TableGen - Datasource Dispatch
===============================
Selects the metadata backend (the component that reads table / column
metadata from a live database) for a named datasource.

    datasource name --(configured datasources)--> DatasourceType
    DatasourceType  --(BackendRegistry)---------> MetadataBackend

Unknown datasource names fall back to MySQL.  The registry is filled once at
start-up and is read-only while dispatching, so ``resolve`` is safe to call
from several threads.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Dict, Iterator, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

if TYPE_CHECKING:
    from tablegen.config import GeneratorSettings

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("tablegen.datasource")


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class InvalidDatasourceError(ValueError):
    """No backend can serve the requested datasource."""


class RegistryError(Exception):
    """Invalid registration against a ``BackendRegistry``."""


# ---------------------------------------------------------------------------
# Datasource types & configuration
# ---------------------------------------------------------------------------


class DatasourceType(str, Enum):
    """Database families with a metadata backend."""

    MYSQL = "mysql"
    PG = "pg"
    ORACLE = "oracle"
    MSSQL = "mssql"
    DB2 = "db2"

    @classmethod
    def parse(cls, value: str) -> "DatasourceType":
        """Case-insensitive lookup; raises ValueError for unknown names."""
        return cls(value.strip().lower())


DEFAULT_DATASOURCE_TYPE: DatasourceType = DatasourceType.MYSQL


class DatasourceConf(BaseModel):
    """A named, configured datasource."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    name: str = Field(..., min_length=1)
    ds_type: str = Field(..., alias="dsType", min_length=1)
    url: Optional[str] = Field(default=None)
    username: Optional[str] = Field(default=None)


# ---------------------------------------------------------------------------
# Backend contract
# ---------------------------------------------------------------------------


class MetadataBackend(ABC):
    """
    Data-access contract for reading table metadata.

    Implementations return the raw shapes consumed by ``SchemaModelBuilder``:
    ``query_table`` a mapping with ``tableName`` / ``tableComment`` /
    ``dbType``; ``query_columns`` an ordered list of column mappings.
    """

    @abstractmethod
    def query_table(self, table_name: str, ds_name: str) -> Dict[str, str]:
        ...

    @abstractmethod
    def query_columns(self, table_name: str, ds_name: str) -> List[Dict[str, str]]:
        ...


class BackendRegistry:
    """Registry of metadata backends keyed by ``DatasourceType``."""

    def __init__(self) -> None:
        self._backends: Dict[DatasourceType, MetadataBackend] = {}
        self._frozen: bool = False

    def register(
        self,
        ds_type: DatasourceType,
        backend: MetadataBackend,
        replace: bool = False,
    ) -> None:
        """
        Register *backend* for *ds_type*.

        Raises:
            RegistryError: If the registry is frozen, the backend does not
                implement ``MetadataBackend``, or the type is already
                registered and *replace* is False.
        """
        if self._frozen:
            raise RegistryError("Backend registry is frozen; register at start-up.")
        if not isinstance(backend, MetadataBackend):
            raise RegistryError(
                f"Backend for '{ds_type.value}' must implement MetadataBackend, "
                f"got {type(backend).__name__}."
            )
        if ds_type in self._backends and not replace:
            raise RegistryError(f"A backend for '{ds_type.value}' is already registered.")

        self._backends[ds_type] = backend
        logger.debug("Registered %s backend: %s", ds_type.value, type(backend).__name__)

    def freeze(self) -> None:
        self._frozen = True

    @property
    def frozen(self) -> bool:
        return self._frozen

    def get(self, ds_type: DatasourceType) -> Optional[MetadataBackend]:
        return self._backends.get(ds_type)

    def __contains__(self, ds_type: object) -> bool:
        return ds_type in self._backends

    def __iter__(self) -> Iterator[DatasourceType]:
        return iter(self._backends)

    def __len__(self) -> int:
        return len(self._backends)


# ---------------------------------------------------------------------------
# Dispatcher
# ---------------------------------------------------------------------------


class DatasourceDispatcher:
    """
    Resolve a datasource name to its metadata backend.

    Usage::

        registry = BackendRegistry()
        registry.register(DatasourceType.MYSQL, MySqlBackend(pool))
        registry.freeze()
        dispatcher = DatasourceDispatcher(registry, {"main": conf})
        backend = dispatcher.resolve("main")
    """

    def __init__(
        self,
        registry: BackendRegistry,
        datasources: Optional[Mapping[str, DatasourceConf]] = None,
        default_type: DatasourceType = DEFAULT_DATASOURCE_TYPE,
    ) -> None:
        self._registry: BackendRegistry = registry
        self._datasources: Mapping[str, DatasourceConf] = dict(datasources or {})
        self._default_type: DatasourceType = default_type

    @classmethod
    def from_settings(
        cls,
        settings: "GeneratorSettings",
        registry: BackendRegistry,
    ) -> "DatasourceDispatcher":
        """Build a dispatcher over the datasources declared in *settings*."""
        return cls(registry, {ds.name: ds for ds in settings.datasources})

    def resolve_type(self, ds_name: str) -> DatasourceType:
        """
        Return the datasource type for *ds_name*, or the default type when no
        datasource of that name is configured.

        Raises:
            InvalidDatasourceError: If the configured type is not supported.
        """
        conf: Optional[DatasourceConf] = self._datasources.get(ds_name)
        if conf is None:
            logger.debug(
                "No datasource named '%s'; assuming %s.",
                ds_name,
                self._default_type.value,
            )
            return self._default_type

        try:
            return DatasourceType.parse(conf.ds_type)
        except ValueError as exc:
            raise InvalidDatasourceError(
                f"Datasource '{ds_name}' declares unsupported type '{conf.ds_type}'."
            ) from exc

    def resolve(self, ds_name: str) -> MetadataBackend:
        """
        Return the metadata backend serving *ds_name*.

        Raises:
            InvalidDatasourceError: If no backend is registered for the
                datasource's type.
        """
        ds_type: DatasourceType = self.resolve_type(ds_name)
        backend: Optional[MetadataBackend] = self._registry.get(ds_type)
        if backend is None:
            raise InvalidDatasourceError(
                f"Invalid datasource '{ds_name}': no backend registered "
                f"for type '{ds_type.value}'."
            )
        return backend


__all__: List[str] = [
    "DEFAULT_DATASOURCE_TYPE",
    "BackendRegistry",
    "DatasourceConf",
    "DatasourceDispatcher",
    "DatasourceType",
    "InvalidDatasourceError",
    "MetadataBackend",
    "RegistryError",
]
