"""Tests for the tableedit command-line interface."""

import json
from pathlib import Path

import pytest
import typer
from typer.testing import CliRunner

import tableedit as te
from tableedit._cli.main import _parse_assignment, _parse_move, app

runner = CliRunner()

RECOGNIZED = {
    "rows": [
        [{"text": "Item"}, {"text": "Qty"}, {"text": "Note"}],
        [{"text": "Apple"}, {"text": "3"}, {"text": "red"}],
        [{"text": "Pear"}, {"text": "5"}, {"text": "green"}],
        [{"text": "Plum"}, {"text": "1"}, {"text": ""}],
    ],
}


@pytest.fixture
def scan(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Recognizer output in an isolated working directory."""
    monkeypatch.chdir(tmp_path)
    path = tmp_path / "scan.json"
    path.write_text(json.dumps(RECOGNIZED))
    return path


class TestParsers:
    """Tests for option value parsers."""

    def test_parse_move(self) -> None:
        assert _parse_move("0:2") == (0, 2)

    @pytest.mark.parametrize("value", ["02", "a:b", "1:", ":1"])
    def test_parse_move_invalid(self, value: str) -> None:
        with pytest.raises(typer.BadParameter, match="SOURCE:DESTINATION"):
            _parse_move(value)

    def test_parse_assignment(self) -> None:
        assert _parse_assignment("1,2=a=b") == (1, 2, "a=b")
        assert _parse_assignment("0,0=") == (0, 0, "")

    @pytest.mark.parametrize("value", ["1,2", "12=x", "a,1=x"])
    def test_parse_assignment_invalid(self, value: str) -> None:
        with pytest.raises(typer.BadParameter, match="ROW,COLUMN=TEXT"):
            _parse_assignment(value)


class TestExportCommand:
    """Tests for `tableedit export`."""

    def test_tsv_to_stdout(self, scan: Path) -> None:
        result = runner.invoke(app, ["export", str(scan)])

        assert result.exit_code == 0, result.output
        assert "Item\tQty\tNote\nApple\t3\tred" in result.stdout

    def test_csv_to_file(self, scan: Path, tmp_path: Path) -> None:
        output = tmp_path / "table.csv"

        result = runner.invoke(app, ["export", str(scan), "--format", "csv", "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert output.read_text().splitlines()[0] == '"Item","Qty","Note"'

    def test_format_from_config(self, scan: Path, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[tool.tableedit]\nformat = "csv"\noutput = "out/table.csv"\n')

        result = runner.invoke(app, ["export", str(scan)])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "out" / "table.csv").read_text().startswith('"Item"')

    def test_invalid_config(self, scan: Path, tmp_path: Path) -> None:
        (tmp_path / "pyproject.toml").write_text('[tool.tableedit]\nformat = "xlsx"\n')

        result = runner.invoke(app, ["export", str(scan)])

        assert result.exit_code == 1

    def test_missing_input(self, scan: Path) -> None:
        result = runner.invoke(app, ["export", str(scan.with_name("missing.json"))])

        assert result.exit_code == 1

    def test_invalid_input(self, scan: Path) -> None:
        scan.write_text(json.dumps({"rows": [[{"text": "a"}], []]}))

        result = runner.invoke(app, ["export", str(scan)])

        assert result.exit_code == 1


class TestEditCommand:
    """Tests for `tableedit edit`."""

    def test_applies_edits_in_order(self, scan: Path, tmp_path: Path) -> None:
        output = tmp_path / "edited.toml"

        result = runner.invoke(
            app,
            [
                "edit",
                str(scan),
                "-o",
                str(output),
                "--set",
                "0,0=Fruit",
                "--move-column",
                "2:0",
                "--delete-row",
                "1",
                "--delete-row",
                "3",
            ],
        )

        assert result.exit_code == 0, result.output
        table = te.load_table(output)
        assert table.contents() == [["Note", "Fruit", "Qty"], ["green", "Pear", "5"]]

    def test_delete_columns_and_out_of_range(self, scan: Path, tmp_path: Path) -> None:
        output = tmp_path / "edited.json"

        result = runner.invoke(
            app,
            ["edit", str(scan), "-o", str(output), "--delete-column", "2", "--delete-column", "9", "--move-row", "9:0"],
        )

        assert result.exit_code == 0, result.output
        assert te.load_table(output).contents() == [["Item", "Qty"], ["Apple", "3"], ["Pear", "5"], ["Plum", "1"]]

    def test_bad_move_value(self, scan: Path, tmp_path: Path) -> None:
        result = runner.invoke(app, ["edit", str(scan), "-o", str(tmp_path / "x.json"), "--move-row", "oops"])

        assert result.exit_code != 0

    def test_unsupported_output(self, scan: Path, tmp_path: Path) -> None:
        result = runner.invoke(app, ["edit", str(scan), "-o", str(tmp_path / "x.txt")])

        assert result.exit_code == 1


class TestOtherCommands:
    """Tests for `tableedit show` and `tableedit blank`."""

    def test_show(self, scan: Path) -> None:
        result = runner.invoke(app, ["show", str(scan)])

        assert result.exit_code == 0, result.output
        assert "Apple" in result.stdout
        assert "4 × 3" in result.stdout

    def test_blank(self, tmp_path: Path) -> None:
        output = tmp_path / "blank.toml"

        result = runner.invoke(app, ["blank", "2", "3", "-o", str(output)])

        assert result.exit_code == 0, result.output
        table = te.load_table(output)
        assert (table.row_count, table.column_count) == (2, 3)
        assert table.export_to_tsv() == "\t\t\n\t\t"

    def test_blank_rejects_negative(self, tmp_path: Path) -> None:
        result = runner.invoke(app, ["blank", "--", "-1", "3", "-o", str(tmp_path / "blank.toml")])

        assert result.exit_code != 0
