# File: tablegen/generator.py
"""
TableGen - Generation Pipeline (Orchestrator)
==============================================

    table + columns + GenerationConfig
        -> SchemaModelBuilder   (TableModel, template context)
        -> select_templates     (ordered template list for the style)
        -> TemplateRenderer     (text per template)
        -> resolve_path         (output path per template)
        -> ArchiveSink          (optional, one entry per template, in order)
        -> read-only mapping    template identifier -> rendered text

The call is synchronous and all-or-nothing: any failure propagates before
a result is returned.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path
from types import MappingProxyType
from typing import (
    IO,
    Any,
    Callable,
    Dict,
    List,
    Mapping,
    Optional,
    Sequence,
    Tuple,
    Union,
)

import yaml
from pydantic import ValidationError

from tablegen.builder import ResolvedOptions, SchemaModelBuilder
from tablegen.config import GeneratorSettings, load_settings
from tablegen.exporters import ArchiveSink, ZipArchiveSink
from tablegen.models import GeneratedArtifact, GenerationConfig, TableModel
from tablegen.paths import resolve_path
from tablegen.templates import TemplateName, TemplateRenderer, select_templates
from tablegen.utils import Timer

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("tablegen.generator")

TableRequest = Tuple[Mapping[str, Any], Sequence[Mapping[str, Any]]]


# ---------------------------------------------------------------------------
# Metadata file loading
# ---------------------------------------------------------------------------


def _load_json_file(path: Path) -> Dict[str, Any]:
    """Load and parse a JSON file. Raises ValueError on parse errors."""
    try:
        data: Any = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(
            f"Expected a JSON object at top level, got {type(data).__name__}."
        )
    return data


def _load_yaml_file(path: Path) -> Dict[str, Any]:
    """Load and parse a YAML file. Raises ValueError on parse errors."""
    try:
        data: Any = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ValueError(
            f"Expected a YAML mapping at top level, got {type(data).__name__}."
        )
    return data


def load_metadata_file(path: Path) -> Dict[str, Any]:
    """
    Load a table metadata file (JSON or YAML), dispatching on extension.

    Raises:
        FileNotFoundError: If the file doesn't exist.
        ValueError: If the file can't be parsed.
    """
    if not path.exists():
        raise FileNotFoundError(f"Metadata file not found: {path}")
    if not path.is_file():
        raise ValueError(f"Metadata path is not a file: {path}")

    suffix: str = path.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _load_yaml_file(path)
    if suffix == ".json":
        return _load_json_file(path)

    logger.info("Unknown extension '%s'; trying JSON then YAML.", suffix)
    try:
        return _load_json_file(path)
    except ValueError:
        return _load_yaml_file(path)


def parse_metadata(raw: Mapping[str, Any]) -> Tuple[List[TableRequest], GenerationConfig]:
    """
    Split a metadata document into table requests and a GenerationConfig.

    Accepted shapes::

        {table: {...}, columns: [...], config: {...}}
        {tables: [{table: {...}, columns: [...]}, ...], config: {...}}

    Raises:
        ValueError: If no table entry is found or an entry is malformed.
    """
    if "tables" in raw:
        entries: Any = raw["tables"]
    elif "table" in raw:
        entries = [raw]
    else:
        raise ValueError(
            "Cannot find table metadata. Expected top-level key 'table' or 'tables'."
        )

    if not isinstance(entries, list) or not entries:
        raise ValueError("'tables' must be a non-empty list.")

    requests: List[TableRequest] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, dict):
            raise ValueError(f"Table entry #{index} must be a mapping.")
        table: Any = entry.get("table")
        columns: Any = entry.get("columns")
        if not isinstance(table, dict) or not isinstance(columns, list):
            raise ValueError(
                f"Table entry #{index} needs a 'table' mapping and a 'columns' list."
            )
        requests.append((table, columns))

    try:
        config: GenerationConfig = GenerationConfig.model_validate(raw.get("config") or {})
    except ValidationError as exc:
        raise ValueError(f"Config validation failed: {exc}") from exc

    return requests, config


# ---------------------------------------------------------------------------
# CodeGenerator (orchestrator)
# ---------------------------------------------------------------------------


class CodeGenerator:
    """
    Render the artifact family for one table.

    Usage::

        generator = CodeGenerator()
        files = generator.generate(GenerationConfig(), table, columns)
        print(files["Entity.java.j2"])

    Settings are loaded once (the packaged defaults unless given); a
    ``ConfigurationError`` at that point aborts before any generation.
    """

    def __init__(
        self,
        settings: Optional[GeneratorSettings] = None,
        renderer: Optional[TemplateRenderer] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._settings: GeneratorSettings = (
            settings if settings is not None else load_settings()
        )
        self._builder: SchemaModelBuilder = SchemaModelBuilder(self._settings)
        self._renderer: TemplateRenderer = renderer or TemplateRenderer()
        self._clock: Callable[[], datetime] = clock

    @property
    def settings(self) -> GeneratorSettings:
        return self._settings

    @property
    def builder(self) -> SchemaModelBuilder:
        return self._builder

    def build_model(
        self,
        config: GenerationConfig,
        table: Mapping[str, Any],
        columns: Sequence[Mapping[str, Any]],
    ) -> TableModel:
        return self._builder.build(table, columns, config)

    def generate_artifacts(
        self,
        config: GenerationConfig,
        table: Mapping[str, Any],
        columns: Sequence[Mapping[str, Any]],
        sink: Optional[ArchiveSink] = None,
        crud_payload: Optional[str] = None,
    ) -> Tuple[GeneratedArtifact, ...]:
        """
        Render every selected template, writing each to *sink* (if any) as
        soon as it is rendered.

        Raises:
            ValueError: Malformed metadata, or a sink rejecting an entry.
            TemplateRenderError: A template failed to render.
        """
        model: TableModel
        options: ResolvedOptions
        model, options = self._builder.build_with_options(table, columns, config)
        context: Dict[str, Any] = self._builder.build_context(
            model, options, now=self._clock()
        )
        templates: Tuple[TemplateName, ...] = select_templates(config.style)

        logger.info(
            "Generating %d artifacts for table '%s' as %s.",
            len(templates),
            model.table_name,
            model.case_class_name,
        )

        artifacts: List[GeneratedArtifact] = []
        with Timer(f"generate {model.table_name}"):
            for template in templates:
                content: str = self._renderer.render(template, context, crud_payload)
                path: Optional[str] = resolve_path(
                    template,
                    model.case_class_name,
                    options.package,
                    options.module_name,
                    backend_project=self._settings.backend_project,
                    frontend_project=self._settings.frontend_project,
                )
                if sink is not None:
                    sink.write_entry(path, content.encode("utf-8"))
                logger.debug("Rendered %s -> %s", template.value, path)
                artifacts.append(
                    GeneratedArtifact(template=template.value, path=path, content=content)
                )

        return tuple(artifacts)

    def generate(
        self,
        config: GenerationConfig,
        table: Mapping[str, Any],
        columns: Sequence[Mapping[str, Any]],
        sink: Optional[ArchiveSink] = None,
        crud_payload: Optional[str] = None,
    ) -> Mapping[str, str]:
        """Return a read-only mapping of template identifier -> rendered text."""
        artifacts: Tuple[GeneratedArtifact, ...] = self.generate_artifacts(
            config, table, columns, sink=sink, crud_payload=crud_payload
        )
        return MappingProxyType({a.template: a.content for a in artifacts})

    def write_archive(
        self,
        output: Union[str, Path, IO[bytes]],
        requests: Sequence[TableRequest],
        config: GenerationConfig,
        crud_payload: Optional[str] = None,
    ) -> List[Tuple[GeneratedArtifact, ...]]:
        """Generate several tables into one zip archive, in request order."""
        results: List[Tuple[GeneratedArtifact, ...]] = []
        with ZipArchiveSink(output) as sink:
            for table, columns in requests:
                results.append(
                    self.generate_artifacts(
                        config, table, columns, sink=sink, crud_payload=crud_payload
                    )
                )
        return results


__all__: List[str] = [
    "CodeGenerator",
    "TableRequest",
    "load_metadata_file",
    "parse_metadata",
]
