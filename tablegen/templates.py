# File: tablegen/templates.py
"""
TableGen - Template Selection & Rendering
==========================================
``select_templates`` picks the ordered artifact list for a style;
``TemplateRenderer`` renders one artifact with Jinja2.

The avue CRUD config is the one artifact with a second source: when the
caller supplies a pre-serialised form payload, the output is
``CRUD_PREFIX + payload`` and the template is not rendered at all.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, List, Mapping, Optional, Tuple, Union

from jinja2 import (
    Environment,
    FileSystemLoader,
    StrictUndefined,
    TemplateError,
)

from tablegen.models import Style

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("tablegen.templates")

DEFAULT_TEMPLATE_DIR: Path = Path(__file__).resolve().parent / "template"

CRUD_PREFIX: str = "export const tableOption ="


class TemplateRenderError(Exception):
    """Raised when a template cannot be loaded or rendered."""


class TemplateName(str, Enum):
    """Artifact templates, named by their path under the template directory."""

    ENTITY = "Entity.java.j2"
    MAPPER = "Mapper.java.j2"
    MAPPER_XML = "Mapper.xml.j2"
    SERVICE = "Service.java.j2"
    SERVICE_IMPL = "ServiceImpl.java.j2"
    CONTROLLER = "Controller.java.j2"
    MENU_SQL = "menu.sql.j2"
    AVUE_API = "avue/api.js.j2"
    AVUE_INDEX = "avue/index.vue.j2"
    AVUE_CRUD = "avue/crud.js.j2"
    ELEMENT_INDEX = "element/index.vue.j2"
    ELEMENT_FORM = "element/form.vue.j2"


# ---------------------------------------------------------------------------
# Selection
# ---------------------------------------------------------------------------

BASE_TEMPLATES: Tuple[TemplateName, ...] = (
    TemplateName.ENTITY,
    TemplateName.MAPPER,
    TemplateName.MAPPER_XML,
    TemplateName.SERVICE,
    TemplateName.SERVICE_IMPL,
    TemplateName.CONTROLLER,
    TemplateName.MENU_SQL,
    TemplateName.AVUE_API,
)

ELEMENT_TEMPLATES: Tuple[TemplateName, ...] = (
    TemplateName.ELEMENT_INDEX,
    TemplateName.ELEMENT_FORM,
)

AVUE_TEMPLATES: Tuple[TemplateName, ...] = (
    TemplateName.AVUE_INDEX,
    TemplateName.AVUE_CRUD,
)


def select_templates(style: Optional[str]) -> Tuple[TemplateName, ...]:
    """Return the ordered templates for *style* (element or anything else)."""
    if style == Style.ELEMENT.value:
        return BASE_TEMPLATES + ELEMENT_TEMPLATES
    return BASE_TEMPLATES + AVUE_TEMPLATES


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Jinja2 environment over a directory of artifact templates."""

    def __init__(self, template_dir: Optional[Path] = None) -> None:
        self.template_dir: Path = Path(template_dir or DEFAULT_TEMPLATE_DIR)
        self._env: Environment = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=False,
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        logger.debug("TemplateRenderer using %s", self.template_dir)

    def render(
        self,
        template: Union[TemplateName, str],
        context: Mapping[str, Any],
        crud_payload: Optional[str] = None,
    ) -> str:
        """
        Render *template* against *context*.

        Args:
            template: Template identifier.
            context: Variables from ``SchemaModelBuilder.build_context``.
            crud_payload: Literal form configuration; when given, the avue
                CRUD config is ``CRUD_PREFIX + crud_payload`` verbatim.

        Raises:
            TemplateRenderError: If the template is missing or fails.
        """
        name: str = template.value if isinstance(template, TemplateName) else template

        if name == TemplateName.AVUE_CRUD.value and crud_payload is not None:
            logger.debug("Using literal CRUD payload for %s", name)
            return CRUD_PREFIX + crud_payload

        try:
            return self._env.get_template(name).render(**dict(context))
        except TemplateError as exc:
            raise TemplateRenderError(f"Failed to render template {name}: {exc}") from exc


__all__: List[str] = [
    "AVUE_TEMPLATES",
    "BASE_TEMPLATES",
    "CRUD_PREFIX",
    "DEFAULT_TEMPLATE_DIR",
    "ELEMENT_TEMPLATES",
    "TemplateName",
    "TemplateRenderError",
    "TemplateRenderer",
    "select_templates",
]
