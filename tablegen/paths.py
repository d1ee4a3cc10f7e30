# File: tablegen/paths.py
"""
TableGen - Artifact Output Paths
=================================
Maps a template identifier to the path its artifact is written under.
Paths use ``/`` whatever the host OS, since they double as archive entry
names.

Layout (``<pkg>`` is the package with dots as separators)::

    <backend>/src/main/java/<pkg>/<module>/entity/User.java
    <backend>/src/main/java/<pkg>/<module>/mapper/UserMapper.java
    <backend>/src/main/java/<pkg>/<module>/service/UserService.java
    <backend>/src/main/java/<pkg>/<module>/service/impl/UserServiceImpl.java
    <backend>/src/main/java/<pkg>/<module>/controller/UserController.java
    <backend>/src/main/resources/mapper/UserMapper.xml
    user_menu.sql
    <frontend>/src/views/<module>/user/index.vue
    <frontend>/src/views/<module>/user/user-form.vue
    <frontend>/src/api/user.js
    <frontend>/src/const/crud/user.js
"""

from __future__ import annotations

import logging
from typing import List, Optional, Union

from tablegen.templates import TemplateName
from tablegen.utils import is_blank

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("tablegen.paths")

DEFAULT_BACKEND_PROJECT: str = "backend"
DEFAULT_FRONTEND_PROJECT: str = "frontend"


def _join(*segments: Optional[str]) -> str:
    return "/".join(s for s in segments if s)


def resolve_path(
    template: Union[TemplateName, str],
    class_name: str,
    package_name: Optional[str],
    module_name: Optional[str],
    backend_project: str = DEFAULT_BACKEND_PROJECT,
    frontend_project: str = DEFAULT_FRONTEND_PROJECT,
) -> Optional[str]:
    """
    Return the output path for *template*, or ``None`` if the identifier is
    not a known template.
    """
    try:
        kind: TemplateName = TemplateName(template)
    except ValueError:
        logger.error("No output path for unknown template '%s'.", template)
        return None

    java_root: str = _join(backend_project, "src", "main", "java")
    if not is_blank(package_name):
        java_root = _join(java_root, *package_name.split("."), module_name)

    lower_name: str = class_name.lower()
    views_dir: str = _join(frontend_project, "src", "views", module_name, lower_name)

    if kind is TemplateName.ENTITY:
        return _join(java_root, "entity", f"{class_name}.java")
    if kind is TemplateName.MAPPER:
        return _join(java_root, "mapper", f"{class_name}Mapper.java")
    if kind is TemplateName.SERVICE:
        return _join(java_root, "service", f"{class_name}Service.java")
    if kind is TemplateName.SERVICE_IMPL:
        return _join(java_root, "service", "impl", f"{class_name}ServiceImpl.java")
    if kind is TemplateName.CONTROLLER:
        return _join(java_root, "controller", f"{class_name}Controller.java")
    if kind is TemplateName.MAPPER_XML:
        return _join(
            backend_project, "src", "main", "resources", "mapper", f"{class_name}Mapper.xml"
        )
    if kind is TemplateName.MENU_SQL:
        return f"{lower_name}_menu.sql"
    if kind in (TemplateName.AVUE_INDEX, TemplateName.ELEMENT_INDEX):
        return _join(views_dir, "index.vue")
    if kind is TemplateName.AVUE_API:
        return _join(frontend_project, "src", "api", f"{lower_name}.js")
    if kind is TemplateName.AVUE_CRUD:
        return _join(frontend_project, "src", "const", "crud", f"{lower_name}.js")
    if kind is TemplateName.ELEMENT_FORM:
        return _join(views_dir, f"{lower_name}-form.vue")

    return None


__all__: List[str] = [
    "DEFAULT_BACKEND_PROJECT",
    "DEFAULT_FRONTEND_PROJECT",
    "resolve_path",
]
