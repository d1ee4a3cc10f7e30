"""
tests/test_cli.py
Tests for the tablegen command-line interface.
"""

from __future__ import annotations

import logging
import pathlib
import zipfile
from typing import Iterator, List

import pytest

from tablegen.cli import (
    EXIT_CONFIG_ERROR,
    EXIT_INPUT_ERROR,
    EXIT_SUCCESS,
    cli_main,
)


@pytest.fixture(autouse=True)
def restore_logger() -> Iterator[None]:
    """Undo the handler setup performed by cli_main."""
    pkg_logger = logging.getLogger("tablegen")
    handlers = list(pkg_logger.handlers)
    level = pkg_logger.level
    propagate = pkg_logger.propagate
    yield
    pkg_logger.handlers[:] = handlers
    pkg_logger.setLevel(level)
    pkg_logger.propagate = propagate


def run_cli(argv: List[str]) -> int:
    with pytest.raises(SystemExit) as excinfo:
        cli_main(argv)
    return int(excinfo.value.code)


class TestCli:
    def test_preview(
        self, metadata_yaml_path: pathlib.Path, capsys: pytest.CaptureFixture[str]
    ) -> None:
        code = run_cli(["-m", str(metadata_yaml_path), "--preview"])
        out = capsys.readouterr().out

        assert code == EXIT_SUCCESS
        assert "user_menu.sql" in out
        assert out.count("\n") == 10

    def test_writes_archive(
        self,
        metadata_yaml_path: pathlib.Path,
        tmp_path: pathlib.Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        output = tmp_path / "code.zip"
        code = run_cli(
            [
                "-m",
                str(metadata_yaml_path),
                "-o",
                str(output),
                "--style",
                "element",
                "--package",
                "com.acme",
                "--module",
                "crm",
            ]
        )

        assert code == EXIT_SUCCESS
        assert "Wrote 10 artifacts for 1 table(s)" in capsys.readouterr().out
        with zipfile.ZipFile(output) as zf:
            names = zf.namelist()
        assert "backend/src/main/java/com/acme/crm/entity/User.java" in names
        assert "frontend/src/views/crm/user/user-form.vue" in names

    def test_crud_payload_file(
        self, metadata_yaml_path: pathlib.Path, tmp_path: pathlib.Path
    ) -> None:
        payload = tmp_path / "crud.txt"
        payload.write_text("{column: []}", encoding="utf-8")
        output = tmp_path / "code.zip"

        code = run_cli(
            ["-m", str(metadata_yaml_path), "-o", str(output), "--crud-payload", str(payload)]
        )

        assert code == EXIT_SUCCESS
        with zipfile.ZipFile(output) as zf:
            crud = zf.read("frontend/src/const/crud/user.js").decode("utf-8")
        assert crud == "export const tableOption ={column: []}"

    def test_output_required_without_preview(self, metadata_yaml_path: pathlib.Path) -> None:
        assert run_cli(["-m", str(metadata_yaml_path)]) == EXIT_INPUT_ERROR

    def test_missing_metadata(self, tmp_path: pathlib.Path) -> None:
        code = run_cli(["-m", str(tmp_path / "absent.yaml"), "--preview"])
        assert code == EXIT_INPUT_ERROR

    def test_bad_settings_file(
        self, metadata_yaml_path: pathlib.Path, tmp_path: pathlib.Path
    ) -> None:
        bad = tmp_path / "settings.yaml"
        bad.write_text("unknown_key: 1\n", encoding="utf-8")
        code = run_cli(["-m", str(metadata_yaml_path), "--preview", "--config", str(bad)])
        assert code == EXIT_CONFIG_ERROR

    def test_custom_settings_file(
        self,
        metadata_yaml_path: pathlib.Path,
        settings_yaml_path: pathlib.Path,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        code = run_cli(
            ["-m", str(metadata_yaml_path), "--preview", "--config", str(settings_yaml_path)]
        )
        assert code == EXIT_SUCCESS
        assert "com/acme/crm/crm/entity/User.java" in capsys.readouterr().out

    def test_invalid_style_rejected_by_parser(self, metadata_yaml_path: pathlib.Path) -> None:
        assert run_cli(["-m", str(metadata_yaml_path), "--preview", "--style", "bootstrap"]) == 2
