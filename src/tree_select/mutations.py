"""Tree mutations.

Each operation returns a new tree tuple; untouched items are shared with
the previous snapshot and modified ones are rebuilt with
``dataclasses.replace``. Disabled items are never changed.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable, Sequence

from .components import Choice, Group, Item
from .tree import Aggregate, Path, aggregate, flatten_checked, is_selectable


def _update_at(items: Sequence[Item], path: Path, fn: Callable[[Item], Item]) -> tuple[Item, ...]:
    """Rebuild the tree with ``fn`` applied to the item at ``path``."""
    head, rest = path[0], path[1:]
    updated = list(items)
    node = items[head]
    if rest:
        updated[head] = replace(node, choices=_update_at(node.choices, rest, fn))
    else:
        updated[head] = fn(node)
    return tuple(updated)


def _set_checked(items: Sequence[Item], checked: bool | Callable[[bool], bool]) -> tuple[Item, ...]:
    """Set (or transform) ``checked`` on every selectable Choice below ``items``."""
    result: list[Item] = []
    for item in items:
        if not is_selectable(item):
            result.append(item)
        elif isinstance(item, Group):
            result.append(replace(item, choices=_set_checked(item.choices, checked)))
        else:
            value = checked(item.checked) if callable(checked) else checked
            result.append(replace(item, checked=value))
    return tuple(result)


def _selectable_choices(items: Sequence[Item]) -> list[Choice]:
    found: list[Choice] = []
    for item in items:
        if not is_selectable(item):
            continue
        if isinstance(item, Group):
            found.extend(_selectable_choices(item.choices))
        else:
            found.append(item)
    return found


def toggle(items: Sequence[Item], path: Path) -> tuple[Item, ...]:
    """Space: flip a Choice, or fully check/uncheck a Group's children."""

    def _toggle(node: Item) -> Item:
        if not is_selectable(node):
            return node
        if isinstance(node, Group):
            check = aggregate(node) != Aggregate.ALL
            return replace(node, choices=_set_checked(node.choices, check))
        return replace(node, checked=not node.checked)

    return _update_at(items, path, _toggle)


def select_all(items: Sequence[Item]) -> tuple[Item, ...]:
    """Check every selectable Choice, or uncheck them all if they already are."""
    everything_checked = len(flatten_checked(items)) == len(_selectable_choices(items))
    return _set_checked(items, not everything_checked)


def invert(items: Sequence[Item]) -> tuple[Item, ...]:
    """Flip every selectable Choice."""
    return _set_checked(items, lambda checked: not checked)


def expand(items: Sequence[Item], path: Path) -> tuple[Item, ...]:
    """Right: show the children of the focused Group."""

    def _expand(node: Item) -> Item:
        if isinstance(node, Group) and not node.expanded:
            return replace(node, expanded=True)
        return node

    return _update_at(items, path, _expand)


def _collapse_all(items: Sequence[Item]) -> tuple[Item, ...]:
    return tuple(
        replace(item, expanded=False, choices=_collapse_all(item.choices))
        if isinstance(item, Group)
        else item
        for item in items
    )


def collapse(items: Sequence[Item], path: Path) -> tuple[Item, ...]:
    """Left: collapse every Group on the focus path and everything under it."""
    head, rest = path[0], path[1:]
    updated = list(items)
    node = items[head]
    if isinstance(node, Group):
        choices = collapse(node.choices, rest) if rest else _collapse_all(node.choices)
        updated[head] = replace(node, expanded=False, choices=choices)
    return tuple(updated)
