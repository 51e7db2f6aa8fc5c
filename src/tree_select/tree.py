"""Tree model: normalization and read-only derivations over a tree of items.

Paths are tuples of indices from the root; ``path[0]`` indexes the root
items and each further element indexes into the children of an expanded
Group.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Mapping, Sequence

from .components import Choice, Group, Item, Separator

Path = tuple[int, ...]


class NoSelectableChoicesError(ValueError):
    """Raised when a tree has no selectable root item."""


class Aggregate(str, Enum):
    """Derived checked status of a Group."""

    ALL = "all"
    NONE = "none"
    PARTIAL = "partial"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Bounds:
    """First and last selectable root-level index."""

    first: int
    last: int


@dataclass(frozen=True)
class VisibleRow:
    """One rendered row of the flattened, expanded tree."""

    item: Item
    path: Path
    depth: int = 0
    last: bool = False


def _coerce_choice(raw: Any) -> Choice:
    if isinstance(raw, Choice):
        return raw
    if isinstance(raw, Mapping) and "choices" not in raw and "separator" not in raw:
        return Choice(**raw)
    raise TypeError(f"Group children must be choices, got {raw!r}")


def _coerce_item(raw: Any) -> Item:
    if isinstance(raw, (Separator, Choice)):
        return raw
    if isinstance(raw, Group):
        return Group(
            name=raw.name,
            choices=tuple(_coerce_choice(c) for c in raw.choices),
            expanded=raw.expanded,
            short=raw.short,
            disabled=raw.disabled,
            help=raw.help,
        )
    if isinstance(raw, Mapping):
        data = dict(raw)
        if "separator" in data:
            return Separator(**data)
        if "choices" in data:
            data["choices"] = tuple(_coerce_choice(c) for c in data["choices"])
            return Group(**data)
        return Choice(**data)
    raise TypeError(f"Unsupported item: {raw!r}")


def normalize(choices: Iterable[Any]) -> tuple[Item, ...]:
    """Build a fresh tree from caller-supplied items.

    Accepts Separator/Choice/Group instances or mappings with the same
    keys. The caller's objects are never modified.
    """
    return tuple(_coerce_item(raw) for raw in choices)


def is_selectable(item: Item) -> bool:
    """True for enabled Choices and Groups; Separators are never selectable."""
    return not isinstance(item, Separator) and not item.disabled


def can_descend(item: Item) -> bool:
    """True when focus may enter the item's children."""
    return (
        isinstance(item, Group)
        and item.expanded
        and not item.disabled
        and any(is_selectable(c) for c in item.choices)
    )


def compute_bounds(items: Sequence[Item]) -> Bounds:
    """Return the first/last selectable root index.

    Raises:
        NoSelectableChoicesError: If no root item is selectable.
    """
    selectable = [i for i, item in enumerate(items) if is_selectable(item)]
    if not selectable:
        raise NoSelectableChoicesError(
            "[tree checkbox] No selectable choices. All choices are disabled."
        )
    return Bounds(first=selectable[0], last=selectable[-1])


def aggregate(group: Group) -> Aggregate:
    """Tri-state checked status over the group's selectable children."""
    states = [c.checked for c in group.choices if is_selectable(c)]
    if not any(states):
        return Aggregate.NONE
    if all(states):
        return Aggregate.ALL
    return Aggregate.PARTIAL


def flatten_checked(items: Sequence[Item]) -> list[Choice]:
    """Every checked, enabled Choice in pre-order tree order."""
    selected: list[Choice] = []
    for item in items:
        if not is_selectable(item):
            continue
        if isinstance(item, Group):
            selected.extend(flatten_checked(item.choices))
        elif item.checked:
            selected.append(item)
    return selected


def any_checked(items: Sequence[Item]) -> bool:
    return bool(flatten_checked(items))


def siblings(items: Sequence[Item], prefix: Path) -> Sequence[Item]:
    """Children list addressed by a path prefix (the root for an empty prefix)."""
    level: Sequence[Item] = items
    for index in prefix:
        node = level[index]
        if not isinstance(node, Group):
            raise IndexError(f"Path {prefix} descends into a non-group item")
        level = node.choices
    return level


def resolve(items: Sequence[Item], path: Path) -> Item:
    """Return the item a focus path points at."""
    return siblings(items, path[:-1])[path[-1]]


def visible_rows(items: Sequence[Item], prefix: Path = (), depth: int = 0) -> list[VisibleRow]:
    """Flatten the tree into display rows, descending only into expanded groups."""
    rows: list[VisibleRow] = []
    last_index = len(items) - 1
    for index, item in enumerate(items):
        path = prefix + (index,)
        rows.append(VisibleRow(item=item, path=path, depth=depth, last=index == last_index))
        if isinstance(item, Group) and item.expanded:
            rows.extend(visible_rows(item.choices, path, depth + 1))
    return rows


def row_index(rows: Sequence[VisibleRow], path: Path) -> int:
    """Index of the row at ``path``; ValueError when it is not visible."""
    for index, row in enumerate(rows):
        if row.path == path:
            return index
    raise ValueError(f"Path {path} is not visible")
