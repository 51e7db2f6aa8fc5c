"""Tests for tree mutations."""

from tree_select.components import Choice, Group, Separator
from tree_select.mutations import collapse, expand, invert, select_all, toggle
from tree_select.tree import Aggregate, aggregate, flatten_checked, normalize


def _checked_names(items):
    return [c.name for c in flatten_checked(items)]


def _all_checked_flags(items):
    flags = []
    for item in items:
        if isinstance(item, Group):
            flags.extend(_all_checked_flags(item.choices))
        elif isinstance(item, Choice):
            flags.append(item.checked)
    return flags


def _mixed_tree():
    return normalize([
        Group("A", choices=(Choice("a1"), Choice("a2", checked=True))),
        Separator(),
        Choice("b"),
        Choice("c", checked=True, disabled="pinned"),
        Group("D", expanded=True, choices=(Choice("d1", checked=True), Choice("d2", disabled=True))),
    ])


class TestToggle:
    def test_choice_flips(self):
        items = normalize([Choice("a"), Choice("b")])
        toggled = toggle(items, (1,))
        assert toggled[1].checked is True
        assert toggle(toggled, (1,))[1].checked is False

    def test_choice_inside_group(self):
        items = normalize([Group("g", expanded=True, choices=(Choice("x"), Choice("y")))])
        toggled = toggle(items, (0, 1))
        assert [c.checked for c in toggled[0].choices] == [False, True]

    def test_partial_group_becomes_all(self):
        items = _mixed_tree()
        assert aggregate(items[0]) == Aggregate.PARTIAL
        assert aggregate(toggle(items, (0,))[0]) == Aggregate.ALL

    def test_none_group_becomes_all(self):
        items = normalize([Group("g", choices=(Choice("x"), Choice("y")))])
        assert aggregate(toggle(items, (0,))[0]) == Aggregate.ALL

    def test_all_group_becomes_none(self):
        items = normalize([Group("g", choices=(Choice("x", checked=True), Choice("y", checked=True)))])
        assert aggregate(toggle(items, (0,))[0]) == Aggregate.NONE

    def test_group_toggle_keeps_expanded_state(self):
        items = normalize([Group("g", choices=(Choice("x"),))])
        assert toggle(items, (0,))[0].expanded is False

    def test_group_toggle_leaves_disabled_children(self):
        items = _mixed_tree()
        toggled = toggle(items, (4,))
        assert [c.checked for c in toggled[4].choices] == [False, False]

    def test_previous_snapshot_unchanged(self):
        items = normalize([Choice("a")])
        toggle(items, (0,))
        assert items[0].checked is False

    def test_untouched_items_are_shared(self):
        items = _mixed_tree()
        toggled = toggle(items, (2,))
        assert toggled[0] is items[0]
        assert toggled[4] is items[4]


class TestSelectAll:
    def test_checks_every_selectable_choice(self):
        selected = select_all(_mixed_tree())
        assert _checked_names(selected) == ["a1", "a2", "b", "d1"]

    def test_second_call_clears(self):
        items = _mixed_tree()
        assert _checked_names(select_all(select_all(items))) == []

    def test_disabled_items_untouched(self):
        twice = select_all(select_all(_mixed_tree()))
        assert twice[3].checked is True
        assert twice[4].choices[1].checked is False

    def test_separator_does_not_block_deselect(self):
        items = normalize([Choice("a", checked=True), Separator(), Choice("b", checked=True)])
        assert _checked_names(select_all(items)) == []


class TestInvert:
    def test_flips_selectable_choices(self):
        inverted = invert(_mixed_tree())
        assert _checked_names(inverted) == ["a1", "b"]
        assert inverted[3].checked is True

    def test_involution(self):
        items = _mixed_tree()
        assert _all_checked_flags(invert(invert(items))) == _all_checked_flags(items)


class TestExpandCollapse:
    def test_expand_group(self):
        items = normalize([Group("g", choices=(Choice("x"),)), Choice("b")])
        assert expand(items, (0,))[0].expanded is True

    def test_expand_choice_is_noop(self):
        items = normalize([Choice("a")])
        assert expand(items, (0,)) == items

    def test_collapse_focused_group(self):
        items = normalize([Group("g", expanded=True, choices=(Choice("x"),))])
        assert collapse(items, (0,))[0].expanded is False

    def test_collapse_from_child_closes_parent(self):
        items = normalize([
            Group("g", expanded=True, choices=(Choice("x"),)),
            Group("h", expanded=True, choices=(Choice("y"),)),
        ])
        collapsed = collapse(items, (1, 0))
        assert collapsed[0].expanded is True
        assert collapsed[1].expanded is False

    def test_collapse_never_changes_checked(self):
        items = _mixed_tree()
        for path in [(0,), (2,), (4,), (4, 0)]:
            assert _all_checked_flags(collapse(items, path)) == _all_checked_flags(items)
