import json
from pathlib import Path

import pytest

from sheetui.collaborators import InMemoryWorkbook, validate_color
from sheetui.errors import CollaboratorFailure, IOFailure
from sheetui.model import Address, CellStyle, ContentKind, SheetExtent


def make_workbook(**kwargs: object) -> InMemoryWorkbook:
    kwargs.setdefault("rows", 5)
    kwargs.setdefault("cols", 4)
    return InMemoryWorkbook(**kwargs)  # type: ignore[arg-type]


def test_new_workbook_shape() -> None:
    workbook = make_workbook(sheet_names=("A", "B"))

    assert workbook.sheet_count() == 2
    assert workbook.sheet_name(1) == "B"
    assert workbook.sheet_index("B") == 1
    assert workbook.extent(0) == SheetExtent(5, 4)


def test_unknown_sheet_lookups() -> None:
    workbook = make_workbook()

    with pytest.raises(KeyError):
        workbook.sheet_index("missing")
    with pytest.raises(IndexError):
        workbook.extent(3)


def test_literals_are_stored_verbatim() -> None:
    workbook = make_workbook()

    workbook.set_literal(Address(0, 1, 1), "=A1+B2", ContentKind.FORMULA)
    workbook.set_literal(Address(0, 0, 0), "")

    assert workbook.get_literal(Address(0, 1, 1)) == "=A1+B2"
    assert workbook.display_value(Address(0, 1, 1)) == "=A1+B2"
    assert workbook.get_literal(Address(0, 0, 0)) == ""


@pytest.mark.parametrize("formula", ["=", "=SUM(A1", "=A1)"])
def test_malformed_formulas_rejected(formula: str) -> None:
    workbook = make_workbook()

    with pytest.raises(CollaboratorFailure):
        workbook.set_literal(Address(), formula)


def test_text_kind_skips_formula_check() -> None:
    workbook = make_workbook()

    workbook.set_literal(Address(), "=(", ContentKind.TEXT)

    assert workbook.get_literal(Address()) == "=("


def test_insert_rows_shifts_cells_and_styles() -> None:
    workbook = make_workbook()
    workbook.set_literal(Address(0, 0, 0), "top")
    workbook.set_literal(Address(0, 2, 0), "low")
    workbook.set_style(Address(0, 2, 0), CellStyle(bold=True))

    workbook.insert_rows(0, 1, 2)

    assert workbook.get_literal(Address(0, 0, 0)) == "top"
    assert workbook.get_literal(Address(0, 4, 0)) == "low"
    assert workbook.get_style(Address(0, 4, 0)).bold is True
    assert workbook.extent(0).rows == 7


def test_insert_columns_shifts_colors() -> None:
    workbook = make_workbook()
    workbook.set_column_color(0, 1, "green")

    workbook.insert_columns(0, 0, 1)

    assert workbook.get_style(Address(0, 0, 2)).background == "green"
    assert workbook.get_style(Address(0, 0, 1)).background is None
    assert workbook.extent(0).cols == 5


def test_cell_style_wins_over_row_color() -> None:
    workbook = make_workbook()
    workbook.set_row_color(0, 0, "Red")
    workbook.set_style(Address(0, 0, 1), CellStyle(background="blue"))

    assert workbook.get_style(Address(0, 0, 0)).background == "red"
    assert workbook.get_style(Address(0, 0, 1)).background == "blue"


def test_clear_cell_optionally_keeps_style() -> None:
    workbook = make_workbook()
    address = Address(0, 1, 1)
    workbook.set_literal(address, "x")
    workbook.set_style(address, CellStyle(foreground="white"))

    workbook.clear_cell(address, include_style=False)
    assert workbook.get_style(address).foreground == "white"

    workbook.clear_cell(address, include_style=True)
    assert workbook.get_style(address) == CellStyle()


@pytest.mark.parametrize("color,expected", [("RED", "red"), ("#ABC", "#abc"), ("#a0b1c2", "#a0b1c2")])
def test_validate_color(color: str, expected: str) -> None:
    assert validate_color(color) == expected


@pytest.mark.parametrize("color", ["mauve", "#12", "#gggggg", ""])
def test_validate_color_rejects(color: str) -> None:
    with pytest.raises(ValueError):
        validate_color(color)


def test_sheet_management() -> None:
    workbook = make_workbook()

    assert workbook.new_sheet() == 1
    assert workbook.sheet_name(1) == "Sheet2"
    workbook.rename_sheet(1, " Budget ")
    assert workbook.sheet_name(1) == "Budget"

    with pytest.raises(ValueError):
        workbook.rename_sheet(0, "Budget")
    with pytest.raises(ValueError):
        workbook.new_sheet("Budget")


def test_save_and_load(tmp_path: Path) -> None:
    target = tmp_path / "book.json"
    workbook = make_workbook()
    workbook.set_literal(Address(0, 1, 2), "$4.50")
    workbook.set_style(Address(0, 1, 2), CellStyle(background="yellow", bold=True))
    workbook.set_row_color(0, 3, "gray")

    assert workbook.save(str(target)) == str(target)

    reloaded = InMemoryWorkbook.open(str(target))
    assert reloaded.path == str(target)
    assert reloaded.get_literal(Address(0, 1, 2)) == "$4.50"
    assert reloaded.get_style(Address(0, 1, 2)) == CellStyle(background="yellow", bold=True)
    assert reloaded.get_style(Address(0, 3, 0)).background == "gray"
    assert reloaded.extent(0) == SheetExtent(5, 4)


def test_save_needs_a_path() -> None:
    with pytest.raises(IOFailure):
        make_workbook().save()


def test_load_rejects_foreign_json(tmp_path: Path) -> None:
    target = tmp_path / "other.json"
    target.write_text(json.dumps({"hello": "world"}), encoding="utf-8")

    with pytest.raises(IOFailure):
        make_workbook().load(str(target))


def test_load_missing_file_raises_oserror(tmp_path: Path) -> None:
    with pytest.raises(OSError):
        make_workbook().load(str(tmp_path / "absent.json"))


def test_export_csv_empty_sheet(tmp_path: Path) -> None:
    target = tmp_path / "empty.csv"

    make_workbook().export_csv(0, str(target))

    assert target.read_text(encoding="utf-8") == ""
