# File: tablegen/utils.py
"""
TableGen - Naming & Text Helpers
=================================
String transformations shared by the model builder, the renderer and the
path resolver.

Naming rules:
- ``to_upper_camel("user_order_item")`` -> ``"UserOrderItem"``: split on
  underscores, upper-case the first letter of every segment, join with no
  separator.  The rest of each segment is left as-is, so the function is
  idempotent on its own output.  Upper-case metadata (as Oracle and DB2
  report it) therefore keeps its case: ``"SYS_USER"`` -> ``"SYSUSER"`` and
  the attribute form of ``"USER_NAME"`` is ``"uSERNAME"``.  Lower-case the
  names before building the model if ``SysUser`` / ``userName`` is wanted.
- ``table_to_class_name("sys_user", "sys_")`` removes the *first*
  occurrence of the prefix (wherever it matches) before converting.

All conversion functions are pure and cached with ``@lru_cache``; the same
column names come through once per template render.
"""

from __future__ import annotations

import functools
import logging
import re
import time
from typing import List, Optional

# ---------------------------------------------------------------------------
# Logger
# ---------------------------------------------------------------------------
logger: logging.Logger = logging.getLogger("tablegen.utils")

# ---------------------------------------------------------------------------
# Pre-compiled regex patterns (compiled once at module load)
# ---------------------------------------------------------------------------

_LINE_BREAK_RE: re.Pattern[str] = re.compile(r"[\r\n]+")


# ---------------------------------------------------------------------------
# Blank checks
# ---------------------------------------------------------------------------


def is_blank(value: Optional[str]) -> bool:
    """True for ``None``, the empty string and whitespace-only strings."""
    return value is None or not value.strip()


def first_not_blank(value: Optional[str], fallback: Optional[str]) -> Optional[str]:
    """Return *value* unless it is blank, else *fallback*."""
    return fallback if is_blank(value) else value


# ---------------------------------------------------------------------------
# Cached naming conversions
# ---------------------------------------------------------------------------


@functools.lru_cache(maxsize=None)
def capitalize(name: str) -> str:
    """Upper-case the first character only (``"userName"`` -> ``"UserName"``)."""
    if not name:
        return ""
    return name[0].upper() + name[1:]


@functools.lru_cache(maxsize=None)
def uncapitalize(name: str) -> str:
    """Lower-case the first character only (``"UserName"`` -> ``"userName"``)."""
    if not name:
        return ""
    return name[0].lower() + name[1:]


@functools.lru_cache(maxsize=None)
def to_upper_camel(name: str, prefix: Optional[str] = None) -> str:
    """
    Convert an underscore-delimited identifier to UpperCamel form.

    Examples:
        >>> to_upper_camel("user_order_item")
        'UserOrderItem'
        >>> to_upper_camel("UserOrderItem")
        'UserOrderItem'
        >>> to_upper_camel("sys_user", "sys_")
        'User'

    Empty input yields empty output.
    """
    if not is_blank(prefix):
        name = name.replace(prefix, "", 1)
    if not name:
        return ""
    segments: List[str] = name.split("_")
    return "".join(capitalize(segment) for segment in segments)


def column_to_attr_name(column_name: str) -> str:
    """Convert a column name to its UpperCamel attribute form."""
    return to_upper_camel(column_name)


def table_to_class_name(table_name: str, table_prefix: Optional[str] = None) -> str:
    """Convert a table name to a class name, stripping *table_prefix* first."""
    return to_upper_camel(table_name, table_prefix)


# ---------------------------------------------------------------------------
# Metadata text helpers
# ---------------------------------------------------------------------------


def remove_line_breaks(text: str) -> str:
    """Drop every ``\\r`` / ``\\n`` from *text*."""
    return _LINE_BREAK_RE.sub("", text)


def strip_type_length(data_type: str) -> str:
    """
    Remove the parenthesised length / precision suffix of a DB type.

    ``"varchar(255)"`` -> ``"varchar"``, ``"decimal(10,2)"`` -> ``"decimal"``.
    """
    return data_type.split("(", 1)[0]


# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------


class Timer:
    """
    Context-manager timer for the generation steps.

    Usage:
        with Timer("render") as t:
            ...
        print(t.elapsed)
    """

    __slots__ = ("label", "start_time", "elapsed")

    def __init__(self, label: str = "operation") -> None:
        self.label: str = label
        self.start_time: float = 0.0
        self.elapsed: float = 0.0

    def __enter__(self) -> "Timer":
        self.start_time = time.perf_counter()
        return self

    def __exit__(
        self,
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[object],
    ) -> None:
        self.elapsed = time.perf_counter() - self.start_time
        logger.debug("Timer [%s]: %.4f seconds", self.label, self.elapsed)

    def __repr__(self) -> str:
        return f"<Timer {self.label}: {self.elapsed:.4f}s>"


# ---------------------------------------------------------------------------
# Module-level exports
# ---------------------------------------------------------------------------

__all__: List[str] = [
    "Timer",
    "capitalize",
    "column_to_attr_name",
    "first_not_blank",
    "is_blank",
    "remove_line_breaks",
    "strip_type_length",
    "table_to_class_name",
    "to_upper_camel",
    "uncapitalize",
]
