"""Focus path transitions for directional keys.

Every function here is pure: it takes the current tree and focus path and
returns the next focus path. Checked state is never read or written.
Separators, disabled items and the inside of disabled groups are never
focused.
"""

from __future__ import annotations

from typing import Sequence

from .components import Item
from .tree import Bounds, Path, can_descend, is_selectable, resolve, siblings


def _next_focusable(level: Sequence[Item], after: int) -> int | None:
    for index in range(after + 1, len(level)):
        if is_selectable(level[index]):
            return index
    return None


def _prev_focusable(level: Sequence[Item], before: int) -> int | None:
    for index in range(before - 1, -1, -1):
        if is_selectable(level[index]):
            return index
    return None


def _deepest_trailing(items: Sequence[Item], path: Path) -> Path:
    """Follow expanded groups down to the last visible row under ``path``."""
    node = resolve(items, path)
    while can_descend(node):
        index = _prev_focusable(node.choices, len(node.choices))
        path = path + (index,)
        node = node.choices[index]
    return path


def move_down(items: Sequence[Item], path: Path, bounds: Bounds, loop: bool = True) -> Path:
    """Focus the next visible row.

    Enters an expanded group first; at the end of a group, ripples up
    through every exhausted ancestor. Past the last root row the focus
    wraps to ``bounds.first`` when ``loop`` is set, otherwise it stays.
    """
    node = resolve(items, path)
    if can_descend(node):
        return path + (_next_focusable(node.choices, -1),)

    for depth in range(len(path) - 1, -1, -1):
        index = _next_focusable(siblings(items, path[:depth]), path[depth])
        if index is not None:
            return path[:depth] + (index,)

    return (bounds.first,) if loop else path


def move_up(items: Sequence[Item], path: Path, bounds: Bounds, loop: bool = True) -> Path:
    """Focus the previous visible row.

    The first child of a group moves focus to the group itself. From the
    first root row the focus wraps to ``bounds.last`` when ``loop`` is set.
    """
    prefix = path[:-1]
    index = _prev_focusable(siblings(items, prefix), path[-1])
    if index is not None:
        return _deepest_trailing(items, prefix + (index,))
    if prefix:
        return prefix
    return (bounds.last,) if loop else path


def move_left(path: Path) -> Path:
    """Leave the current group; a root-level path is unchanged."""
    return path[:-1] if len(path) > 1 else path
