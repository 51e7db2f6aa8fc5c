"""Rendering helpers that turn tree rows into Rich markup lines."""

from __future__ import annotations

from typing import Sequence

from .components import Group, Separator
from .themes import Theme
from .tree import Aggregate, VisibleRow, aggregate

MORE_CHOICES_HINT = "(Use arrow keys to reveal more choices)"
DEFAULT_DISABLED_LABEL = "(disabled)"
DEFAULT_KEYS = (
    ("space", "to select"),
    ("?", "to open info"),
    ("a", "to toggle all"),
    ("i", "to invert selection"),
)


def nest_prefix(row: VisibleRow) -> str:
    """Tree guide drawn before nested rows."""
    if not row.depth:
        return ""
    return "|" * (row.depth - 1) + ("└─" if row.last else "├─")


def checkbox_icon(row: VisibleRow, theme: Theme) -> str:
    item = row.item
    if isinstance(item, Group):
        state = aggregate(item)
        if state == Aggregate.ALL:
            checked = True
        elif state == Aggregate.PARTIAL:
            return theme.partial_icon
        else:
            checked = False
    else:
        checked = item.checked
    if checked:
        return f"[{theme.checked_color}]{theme.checked_icon}[/{theme.checked_color}]"
    return theme.unchecked_icon


def render_row(row: VisibleRow, is_active: bool, theme: Theme) -> str:
    """Render one row as a Rich markup string."""
    item = row.item
    if isinstance(item, Separator):
        return f" {item.separator}"

    line = item.name
    if item.disabled:
        label = item.disabled if isinstance(item.disabled, str) else DEFAULT_DISABLED_LABEL
        return theme.disabled_choice(f"{line} {label}")

    cursor = theme.cursor_icon if is_active else " "
    text = f"{cursor}{nest_prefix(row)}{checkbox_icon(row, theme)} {line}"
    if is_active:
        return f"[{theme.highlight_color}]{text}[/{theme.highlight_color}]"
    return text


def help_banner(theme: Theme, instructions: str | bool | None) -> str:
    """Inline key help shown after the message."""
    if isinstance(instructions, str):
        return instructions
    keys = [f"{theme.key(name)} {action}" for name, action in DEFAULT_KEYS]
    keys.append(f"and {theme.key('enter')} to proceed")
    return f" (Press {', '.join(keys)})"


def more_choices_hint(theme: Theme) -> str:
    return f"[{theme.help_color}]{MORE_CHOICES_HINT}[/{theme.help_color}]"


def error_line(theme: Theme, message: str) -> str:
    return f"[{theme.error_color}]> {message}[/{theme.error_color}]"


def summary_line(theme: Theme, message: str, selected: Sequence, items: Sequence) -> str:
    """Single line that replaces the prompt once it is answered."""
    answer = theme.render_selected_choices(selected, items)
    prefix = f"[{theme.done_color}]{theme.done_icon}[/{theme.done_color}]"
    return f"{prefix} [bold]{message}[/bold] [{theme.answer_color}]{answer}[/{theme.answer_color}]"


def prompt_line(theme: Theme, message: str) -> str:
    prefix = f"[{theme.prefix_color}]{theme.prefix_icon}[/{theme.prefix_color}]"
    return f"{prefix} [bold]{message}[/bold]"
