"""
tests/test_utils.py
Unit tests for the naming helpers in tablegen.utils.
"""

from __future__ import annotations

import pytest

from tablegen.utils import (
    Timer,
    first_not_blank,
    is_blank,
    remove_line_breaks,
    strip_type_length,
    table_to_class_name,
    to_upper_camel,
    uncapitalize,
)


class TestToUpperCamel:
    """Underscore identifiers -> UpperCamel."""

    @pytest.mark.parametrize(
        "name, expected",
        [
            ("user_order_item", "UserOrderItem"),
            ("user", "User"),
            ("create_time", "CreateTime"),
            ("a_b_c", "ABC"),
            ("id", "Id"),
        ],
    )
    def test_converts_segments(self, name: str, expected: str) -> None:
        assert to_upper_camel(name) == expected

    def test_idempotent_on_own_output(self) -> None:
        once = to_upper_camel("user_order_item")
        assert once == "UserOrderItem"
        assert to_upper_camel(once) == once

    def test_output_has_no_underscores(self) -> None:
        assert "_" not in to_upper_camel("__leading__and_trailing_")

    def test_empty_input(self) -> None:
        assert to_upper_camel("") == ""

    def test_rest_of_segment_kept(self) -> None:
        assert to_upper_camel("userName_id") == "UserNameId"

    def test_upper_case_metadata_keeps_case(self) -> None:
        assert to_upper_camel("SYS_USER") == "SYSUSER"
        assert uncapitalize(to_upper_camel("USER_NAME")) == "uSERNAME"
        assert to_upper_camel("SYS_USER".lower()) == "SysUser"


class TestPrefixStripping:
    """Table-name conversion with a prefix."""

    def test_prefix_removed(self) -> None:
        assert table_to_class_name("sys_user", "sys_") == "User"

    def test_prefix_absent_matches_plain_conversion(self) -> None:
        assert table_to_class_name("order_item", "sys_") == to_upper_camel("order_item")

    def test_blank_prefix_ignored(self) -> None:
        assert table_to_class_name("sys_user", "  ") == "SysUser"
        assert table_to_class_name("sys_user", None) == "SysUser"

    def test_only_first_occurrence_removed(self) -> None:
        assert table_to_class_name("tb_order_tb_log", "tb_") == "OrderTbLog"

    def test_prefix_matched_anywhere(self) -> None:
        assert table_to_class_name("app_sys_user", "sys_") == "AppUser"


class TestTextHelpers:
    def test_uncapitalize(self) -> None:
        assert uncapitalize("UserName") == "userName"
        assert uncapitalize("") == ""

    def test_remove_line_breaks(self) -> None:
        assert remove_line_breaks("User\r\nname\n") == "Username"

    @pytest.mark.parametrize(
        "data_type, expected",
        [("varchar(255)", "varchar"), ("decimal(10,2)", "decimal"), ("datetime", "datetime")],
    )
    def test_strip_type_length(self, data_type: str, expected: str) -> None:
        assert strip_type_length(data_type) == expected

    def test_blank_checks(self) -> None:
        assert is_blank(None)
        assert is_blank("   ")
        assert not is_blank("x")
        assert first_not_blank("", "fallback") == "fallback"
        assert first_not_blank("value", "fallback") == "value"


class TestTimer:
    def test_elapsed_recorded(self) -> None:
        with Timer("noop") as t:
            pass
        assert t.elapsed >= 0.0
        assert "noop" in repr(t)
