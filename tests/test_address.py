import pytest

from sheetui.errors import OutOfBounds
from sheetui.model import MAX_COLS, MAX_ROWS, Address, Range, SheetExtent, column_name


def make_range(start: tuple[int, int], end: tuple[int, int], sheet: int = 0) -> Range:
    return Range(Address(sheet, *start), Address(sheet, *end))


def test_column_names_continue_past_z() -> None:
    assert column_name(0) == "A"
    assert column_name(25) == "Z"
    assert column_name(26) == "AA"
    assert column_name(27) == "AB"
    assert column_name(701) == "ZZ"
    assert column_name(702) == "AAA"


def test_address_to_a1() -> None:
    assert Address(0, 2, 1).to_a1() == "B3"
    assert Address(3, 0, 26).to_a1() == "AA1"


@pytest.mark.parametrize(
    "sheet,row,col",
    [(-1, 0, 0), (0, -1, 0), (0, 0, -1), (0, MAX_ROWS, 0), (0, 0, MAX_COLS)],
)
def test_address_outside_grid_rejected(sheet: int, row: int, col: int) -> None:
    with pytest.raises(OutOfBounds):
        Address(sheet, row, col)


def test_address_clamp_pulls_back_inside_extent() -> None:
    extent = SheetExtent(rows=5, cols=3)

    assert Address(0, 9, 9).clamp(extent) == Address(0, 4, 2)
    assert Address(0, 2, 1).clamp(extent) == Address(0, 2, 1)


def test_sheet_extent_never_smaller_than_one_cell() -> None:
    extent = SheetExtent(rows=0, cols=-4)

    assert (extent.rows, extent.cols) == (1, 1)
    assert extent.contains(Address(0, 0, 0))
    assert not extent.contains(Address(0, 1, 0))


def test_range_normalizes_corners() -> None:
    selection = make_range((3, 2), (1, 0))

    assert selection.top_left == Address(0, 1, 0)
    assert selection.bottom_right == Address(0, 3, 2)
    assert (selection.height, selection.width) == (3, 3)
    assert selection.anchor == Address(0, 3, 2)


def test_range_rows_are_row_major() -> None:
    selection = make_range((0, 1), (1, 2))

    assert selection.rows() == (
        (Address(0, 0, 1), Address(0, 0, 2)),
        (Address(0, 1, 1), Address(0, 1, 2)),
    )
    assert list(selection.addresses())[-1] == Address(0, 1, 2)


def test_range_contains_only_its_sheet() -> None:
    selection = make_range((0, 0), (2, 2), sheet=1)

    assert selection.contains(Address(1, 1, 1))
    assert not selection.contains(Address(0, 1, 1))
    assert not selection.contains(Address(1, 3, 1))


def test_range_reference_text() -> None:
    assert make_range((0, 1), (2, 1)).to_reference() == "B1:B3"
    assert make_range((2, 1), (0, 1)).to_reference() == "B1:B3"
    assert Range.single(Address(0, 0, 1)).to_reference() == "B1"
    assert make_range((0, 1), (2, 1), sheet=1).to_reference("Sheet2") == "Sheet2!B1:B3"


def test_cross_sheet_range_rejected() -> None:
    with pytest.raises(OutOfBounds):
        Range(Address(0, 0, 0), Address(1, 0, 0))
