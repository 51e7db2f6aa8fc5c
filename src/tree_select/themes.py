"""Configurable themes for tree_select prompts.

This module provides theming support for the tree checkbox. The Theme
dataclass holds all configurable visual elements (colors, icons, the
disabled-row decorator, the final summary renderer and the help mode).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Sequence

HELP_MODES = ("always", "never", "auto")


def dim_disabled(text: str) -> str:
    """Default decorator for disabled rows."""
    return f"[dim]- {text}[/dim]"


def join_short_names(selected: Sequence, all_items: Sequence) -> str:
    """Default summary: comma-joined short names of the selected choices."""
    return ", ".join(choice.short or choice.name for choice in selected)


@dataclass
class Theme:
    """Visual theme for the tree checkbox.

    All colors use Rich markup format (e.g., "green", "bold cyan", "dim").

    Attributes:
        prefix_color: Color for the pending "?" prefix.
        done_color: Color for the prefix once the prompt is answered.
        highlight_color: Color for the focused row.
        checked_color: Color for the checked icon.
        answer_color: Color for the final summary line.
        key_color: Color for key names in the help banner.
        help_color: Color for help hints.
        error_color: Color for validation errors.

        prefix_icon: Prefix shown while pending.
        done_icon: Prefix shown once done.
        cursor_icon: Character shown next to the focused row.
        checked_icon: Character for checked choices and fully checked groups.
        unchecked_icon: Character for unchecked choices and empty groups.
        partial_icon: Character for partially checked groups.

        disabled_choice: Decorates "<name> <reason>" for disabled rows.
        render_selected_choices: Builds the summary from (selected, all_items).
        help_mode: "always", "never" or "auto" (show hints until first toggle).
    """

    # Colors
    prefix_color: str = "blue"
    done_color: str = "green"
    highlight_color: str = "cyan"
    checked_color: str = "green"
    answer_color: str = "cyan"
    key_color: str = "bold cyan"
    help_color: str = "dim"
    error_color: str = "red"

    # Icons
    prefix_icon: str = "?"
    done_icon: str = "✔"
    cursor_icon: str = "❯"
    checked_icon: str = "◉"
    unchecked_icon: str = "◯"
    partial_icon: str = "⊘"

    # Behaviour
    disabled_choice: Callable[[str], str] = field(default=dim_disabled)
    render_selected_choices: Callable[[Sequence, Sequence], str] = field(
        default=join_short_names
    )
    help_mode: str = "auto"

    def __post_init__(self):
        if self.help_mode not in HELP_MODES:
            raise ValueError(
                f"help_mode must be one of {', '.join(HELP_MODES)}, got {self.help_mode!r}"
            )

    def key(self, name: str) -> str:
        return f"[{self.key_color}]{name}[/{self.key_color}]"


# Default theme used when none is specified
DEFAULT_THEME = Theme()
