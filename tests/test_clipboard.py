import pytest

from sheetui.collaborators import MemoryClipboard
from sheetui.model import CellStyle, ClipboardPayload, ClipboardRegister, ClipEntry


def make_payload(*rows: tuple[str, ...], include_style: bool = False) -> ClipboardPayload:
    return ClipboardPayload(
        rows=tuple(tuple(ClipEntry(value) for value in row) for row in rows),
        include_style=include_style,
    )


def test_payload_text_is_tab_separated() -> None:
    payload = make_payload(("a", "b"), ("c", "d"))

    assert payload.text == "a\tb\nc\td"
    assert (payload.height, payload.width) == (2, 2)


def test_payload_entries_carry_offsets() -> None:
    payload = make_payload(("a", "b"), ("c", "d"))

    assert [(dr, dc, e.content) for dr, dc, e in payload.entries()] == [
        (0, 0, "a"),
        (0, 1, "b"),
        (1, 0, "c"),
        (1, 1, "d"),
    ]


def test_from_text_pads_ragged_rows() -> None:
    payload = ClipboardPayload.from_text("1\t2\n3\n")

    assert payload.width == 2
    assert payload.rows[1][1].content == ""
    assert payload.include_style is False


@pytest.mark.parametrize("rows", [(), ((),), ((ClipEntry("a"),), (ClipEntry("b"), ClipEntry("c")))])
def test_payload_must_be_rectangular(rows: tuple) -> None:
    with pytest.raises(ValueError):
        ClipboardPayload(rows=rows)


def test_register_keeps_latest_payload() -> None:
    register = ClipboardRegister()
    assert register.empty is True
    assert register.text() == ""

    register.store(make_payload(("x",)))
    styled = ClipboardPayload(
        rows=((ClipEntry("y", CellStyle(background="red")),),), include_style=True
    )
    register.store(styled)

    assert register.payload is styled
    assert register.text() == "y"


def test_memory_clipboard_round_trip() -> None:
    clipboard = MemoryClipboard()

    clipboard.write_text("hello")

    assert clipboard.read_text() == "hello"
