# File: tablegen/__init__.py
"""
TableGen - Table-Driven Code Generator
=======================================

Turns one database table's metadata into a fixed family of artifacts:
entity, mapper interface, mapper XML, service, service implementation,
controller, menu SQL script, and the frontend API client, views and CRUD
config.

Architecture overview::

    ┌──────────────┐     ┌───────────────┐     ┌──────────────────┐
    │  CLI / Entry │────▶│ CodeGenerator │────▶│ TemplateRenderer │
    │   (cli.py)   │     │ (generator.py)│     │  (templates.py)  │
    └──────────────┘     └───────┬───────┘     └──────────────────┘
                                 │
                    ┌────────────┼────────────┬────────────┐
                    ▼            ▼            ▼            ▼
             ┌──────────┐ ┌───────────┐ ┌───────────┐ ┌───────────┐
             │ builder  │ │  models   │ │   paths   │ │ exporters │
             └──────────┘ └───────────┘ └───────────┘ └───────────┘

    DatasourceDispatcher (datasource.py) is independent of the pipeline: it
    picks the metadata backend for a named datasource.

Usage::

    from tablegen import CodeGenerator, GenerationConfig
    files = CodeGenerator().generate(GenerationConfig(), table, columns)
"""

from __future__ import annotations

__version__: str = "0.1.0"
__license__: str = "MIT"

from tablegen.builder import ResolvedOptions, SchemaModelBuilder
from tablegen.config import ConfigurationError, GeneratorSettings, load_settings
from tablegen.datasource import (
    BackendRegistry,
    DatasourceConf,
    DatasourceDispatcher,
    DatasourceType,
    InvalidDatasourceError,
    MetadataBackend,
    RegistryError,
)
from tablegen.exporters import ArchiveSink, ZipArchiveSink
from tablegen.generator import CodeGenerator, load_metadata_file, parse_metadata
from tablegen.models import (
    ColumnModel,
    GeneratedArtifact,
    GenerationConfig,
    Style,
    TableModel,
)
from tablegen.paths import resolve_path
from tablegen.templates import (
    CRUD_PREFIX,
    TemplateName,
    TemplateRenderError,
    TemplateRenderer,
    select_templates,
)
from tablegen.utils import table_to_class_name, to_upper_camel

__all__: list[str] = [
    "__version__",
    "__license__",
    # Orchestrator
    "CodeGenerator",
    "load_metadata_file",
    "parse_metadata",
    # Models
    "ColumnModel",
    "GeneratedArtifact",
    "GenerationConfig",
    "Style",
    "TableModel",
    # Settings
    "ConfigurationError",
    "GeneratorSettings",
    "load_settings",
    # Building / rendering
    "ResolvedOptions",
    "SchemaModelBuilder",
    "CRUD_PREFIX",
    "TemplateName",
    "TemplateRenderError",
    "TemplateRenderer",
    "select_templates",
    "resolve_path",
    # Export
    "ArchiveSink",
    "ZipArchiveSink",
    # Datasources
    "BackendRegistry",
    "DatasourceConf",
    "DatasourceDispatcher",
    "DatasourceType",
    "InvalidDatasourceError",
    "MetadataBackend",
    "RegistryError",
    # Naming
    "table_to_class_name",
    "to_upper_camel",
]
