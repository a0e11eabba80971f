"""Tests for utils/output.py — JSON/CSV/table output routing."""
import json

from agentcost_admin.utils.output import (
    OutputFormat,
    _cell,
    print_csv,
    print_json,
    print_output,
    unwrap_page,
)

PAGE = {
    "items": [{"id": "u-1", "email": "a@b.com"}, {"id": "u-2", "email": "c@d.com"}],
    "total": 12,
    "limit": 2,
    "offset": 4,
}


# ── print_json ───────────────────────────────────────────────────────

def test_print_json_list(capsys):
    print_json([{"id": "1"}, {"id": "2"}])
    data = json.loads(capsys.readouterr().out)
    assert len(data) == 2


def test_print_json_dict(capsys):
    print_json({"key": "value"})
    assert json.loads(capsys.readouterr().out) == {"key": "value"}


# ── print_csv ────────────────────────────────────────────────────────

def test_print_csv_basic(capsys):
    print_csv([{"name": "a", "val": "1"}, {"name": "b", "val": "2"}])
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == ["name,val", "a,1", "b,2"]


def test_print_csv_columns_filter(capsys):
    print_csv([{"name": "a", "val": "1", "extra": "x"}], columns=["name", "val"])
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0] == "name,val"
    assert "extra" not in lines[0]


def test_print_csv_single_object(capsys):
    print_csv({"status": "healthy", "database": "ok"})
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == ["status,database", "healthy,ok"]


def test_print_csv_empty(capsys):
    print_csv([])
    assert capsys.readouterr().out == ""


# ── cells / envelopes ────────────────────────────────────────────────

def test_cell_values():
    assert _cell(None) == ""
    assert _cell(3) == "3"
    assert _cell({"a": 1}) == '{"a":1}'
    assert _cell(["x", "y"]) == '["x","y"]'


def test_unwrap_page():
    rows, note = unwrap_page(PAGE)
    assert rows == PAGE["items"]
    assert note == "5-6 of 12"


def test_unwrap_empty_page():
    rows, note = unwrap_page({"items": [], "total": 0, "offset": 0})
    assert rows == []
    assert note == "0 of 0"


def test_unwrap_plain_object():
    data = {"status": "healthy"}
    assert unwrap_page(data) == (data, None)


# ── print_output ─────────────────────────────────────────────────────

def test_print_output_json_keeps_envelope(capsys):
    print_output(PAGE, OutputFormat.JSON)
    assert json.loads(capsys.readouterr().out)["total"] == 12


def test_print_output_csv_unwraps(capsys):
    print_output(PAGE, OutputFormat.CSV, columns=["id", "email"])
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == ["id,email", "u-1,a@b.com", "u-2,c@d.com"]


def test_print_output_table_goes_to_stderr(capsys):
    print_output(PAGE, OutputFormat.TABLE, title="Users")
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "u-1" in captured.err
    assert "Showing 5-6 of 12" in captured.err


def test_print_output_table_no_rows(capsys):
    print_output([], OutputFormat.TABLE)
    assert "No results." in capsys.readouterr().err
