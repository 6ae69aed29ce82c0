import pytest

from sheetui.keymaps import (
    ActionRef,
    Binding,
    KeySequence,
    KeyStroke,
    KeymapConflictError,
    KeymapRegistry,
    WhenClause,
    load_default_keymaps,
)
from sheetui.keymaps.defaults import DEFAULT_ACTIONS, DEFAULT_BINDINGS


def make_action(action_id: str = "core.test") -> ActionRef:
    return ActionRef(id=action_id, handler=lambda *args, **kwargs: None)


def make_sequence(*keys: str) -> KeySequence:
    return KeySequence.from_strings(*keys)


def make_binding(
    *,
    binding_id: str,
    mode: str = "navigation",
    sequence: KeySequence | None = None,
    action_id: str = "core.test",
    when: tuple[WhenClause, ...] = (),
) -> Binding:
    return Binding(
        id=binding_id,
        mode=mode,
        sequence=sequence or make_sequence("g", "g"),
        action_id=action_id,
        when=when,
    )


def test_keystroke_parse_and_token() -> None:
    assert KeyStroke.parse("ctrl+n").token == "ctrl+n"
    assert KeyStroke.parse("shift+TAB").token == "shift+TAB"
    assert KeyStroke.parse("+").token == "+"
    assert KeyStroke("V", ("shift",)).token == "V"
    assert KeyStroke("s", ("shift", "ctrl")).modifiers == ("ctrl",)


def test_register_binding_success() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="navigation.gg")

    registry.register_binding(binding)

    assert registry.stats().binding_count == 1
    assert list(registry.iter_bindings(mode="navigation")) == [binding]


def test_register_binding_requires_known_action() -> None:
    registry = KeymapRegistry()

    with pytest.raises(KeyError):
        registry.register_binding(make_binding(binding_id="navigation.gg"))


def test_register_binding_conflict_detection() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    registry.register_binding(make_binding(binding_id="navigation.gg"))

    with pytest.raises(KeymapConflictError):
        registry.register_binding(make_binding(binding_id="navigation.gg.duplicate"))


def test_same_keys_in_other_mode_do_not_conflict() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="navigation.gg"))
    registry.register_binding(make_binding(binding_id="range.gg", mode="range_select"))

    assert registry.stats().modes == ("navigation", "range_select")


def test_register_binding_non_overlapping_when() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())

    registry.register_binding(make_binding(binding_id="default"))
    registry.register_binding(
        make_binding(binding_id="anchored", when=(WhenClause("range_anchored"),))
    )
    registry.register_binding(
        make_binding(binding_id="unanchored", when=(WhenClause.parse("!range_anchored"),))
    )

    assert registry.stats().binding_count == 3


def test_register_binding_with_replace() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    first = make_binding(binding_id="binding")
    second = make_binding(binding_id="binding", sequence=make_sequence("x"))

    registry.register_binding(first)
    registry.register_binding(second, replace=True)

    assert list(registry.iter_bindings()) == [second]


def test_unregister_binding() -> None:
    registry = KeymapRegistry()
    registry.register_action(make_action())
    binding = make_binding(binding_id="binding")
    registry.register_binding(binding)
    before = registry.revision()

    removed = registry.unregister_binding("binding")

    assert removed == binding
    assert registry.stats().binding_count == 0
    assert registry.revision() == before + 1
    assert registry.unregister_binding("binding") is None


def test_load_default_keymaps_registers_everything() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry)

    stats = registry.stats()
    assert stats.action_count == len(DEFAULT_ACTIONS)
    assert stats.binding_count == len(DEFAULT_BINDINGS)
    assert stats.modes == ("cell_edit", "command_line", "navigation", "range_select")
    assert registry.get_binding("navigation.enter_cell_edit.i").action_id == "core.enter_cell_edit"
    assert registry.get_binding("navigation.column_top.g_g").sequence.tokens == ("g", "g")
    assert registry.get_action("nav.move_left").repeatable is True
    assert registry.get_action("nav.copy").repeatable is False


def test_default_range_mark_is_gated_on_anchor() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)

    mark = registry.get_binding("range_select.mark.m")
    finish = registry.get_binding("range_select.finish.m")

    assert mark.when_map == {"range_anchored": False}
    assert finish.when_map == {"range_anchored": True}


def test_load_default_keymaps_include_filters() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(
        registry,
        include_actions=("core.enter_cell_edit",),
        include_bindings=("navigation.enter_cell_edit.i",),
    )

    assert registry.stats().binding_count == 1
    assert registry.stats().action_count == 1


def test_load_default_keymaps_exclude_filters() -> None:
    registry = KeymapRegistry()

    load_default_keymaps(registry, exclude_bindings=("navigation.quit.q",))

    assert registry.stats().binding_count == len(DEFAULT_BINDINGS) - 1
    with pytest.raises(KeyError):
        registry.get_binding("navigation.quit.q")


def test_load_default_keymaps_per_mode_override() -> None:
    registry = KeymapRegistry()
    custom_binding = Binding(
        id="navigation.enter_cell_edit.i",
        mode="navigation",
        sequence=KeySequence.from_strings("a"),
        action_id="core.enter_cell_edit",
    )

    load_default_keymaps(registry, per_mode_overrides={"navigation": (custom_binding,)})

    binding = registry.get_binding("navigation.enter_cell_edit.i")
    assert binding.sequence.tokens == ("a",)


def test_per_mode_override_must_match_mode() -> None:
    registry = KeymapRegistry()
    stray = Binding(
        id="cell_edit.stray",
        mode="cell_edit",
        sequence=KeySequence.from_strings("F2"),
        action_id="edit.commit",
    )

    with pytest.raises(ValueError):
        load_default_keymaps(registry, per_mode_overrides={"navigation": (stray,)})


def test_bindings_for_action() -> None:
    registry = KeymapRegistry()
    load_default_keymaps(registry)

    ids = {binding.id for binding in registry.bindings_for_action("nav.move_left")}

    assert "navigation.move_left.h" in ids
    assert "range_select.move_left.shift+TAB" in ids
