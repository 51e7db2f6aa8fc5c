"""Item variants for tree_select prompts.

A tree is a tuple of these items:
- Separator: display-only divider, never focusable
- Choice: a checkable leaf carrying an opaque caller value
- Group: a named, expandable run of Choices (one nesting level)

Items are frozen dataclasses. Every change to the tree goes through
``dataclasses.replace`` so earlier snapshots stay valid.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Union

HelpAction = Callable[[], Union[None, Awaitable[None]]]

DEFAULT_SEPARATOR = "[dim]" + "─" * 14 + "[/dim]"


@dataclass(frozen=True)
class Separator:
    """Visual separator/divider.

    Non-interactive item used for grouping or spacing. Navigation skips over it.
    """

    separator: str = DEFAULT_SEPARATOR


@dataclass(frozen=True)
class Choice:
    """Checkable leaf.

    Attributes:
        name: Display text (Rich markup allowed).
        value: Returned to the caller when checked at confirmation.
        short: Optional short form used in the final summary.
        checked: Whether the checkbox is checked.
        disabled: True, or a reason string, to make the choice unselectable.
        help: Optional zero-argument action run by the '?' key.
    """

    name: str
    value: Any = None
    short: str | None = None
    checked: bool = False
    disabled: bool | str = False
    help: HelpAction | None = field(default=None, compare=False)


@dataclass(frozen=True)
class Group:
    """Named container of Choices with derived tri-state checked status.

    Attributes:
        name: Display text (Rich markup allowed).
        choices: Child choices, in display order.
        expanded: Whether the children are currently visible.
        short: Optional short form.
        disabled: True, or a reason string, to make the whole group unselectable.
        help: Optional zero-argument action run by the '?' key.
    """

    name: str
    choices: tuple[Choice, ...] = ()
    expanded: bool = False
    short: str | None = None
    disabled: bool | str = False
    help: HelpAction | None = field(default=None, compare=False)


Item = Union[Separator, Choice, Group]
