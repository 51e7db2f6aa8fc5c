"""Rich.Live-based tree checkbox prompt.

A multi-select prompt over a tree of items nested one level into groups,
with tri-state group selection, expand/collapse and a paginated viewport.

Example:
    from tree_select import Choice, Group, Separator, tree_checkbox

    result = tree_checkbox(
        "Select packages to update",
        [
            Group("*:react@17.0.2 -> 18.3.1", choices=(
                Choice("web:react@17.0.2 -> 18.3.1", value="web"),
                Choice("docs:react@17.0.2 -> 18.3.1", value="docs"),
            )),
            Separator(),
            Choice("lodash@4.17.20 -> 4.17.21", value="lodash"),
        ],
        page_size=10,
    )
    if not result.aborted:
        print(result.values)
"""

from .components import Choice, Group, Item, Separator
from .keys import (
    is_down,
    is_enter,
    is_help,
    is_invert,
    is_left,
    is_number,
    is_right,
    is_select_all,
    is_space,
    is_up,
)
from .pagination import Paginator
from .prompt import SelectionResult, TreeCheckbox, tree_checkbox
from .themes import DEFAULT_THEME, Theme
from .tree import (
    Aggregate,
    Bounds,
    NoSelectableChoicesError,
    aggregate,
    compute_bounds,
    flatten_checked,
    is_selectable,
)

__all__ = [
    # Prompt
    "TreeCheckbox",
    "SelectionResult",
    "tree_checkbox",
    # Items
    "Item",
    "Choice",
    "Group",
    "Separator",
    # Tree model
    "Aggregate",
    "Bounds",
    "NoSelectableChoicesError",
    "aggregate",
    "compute_bounds",
    "flatten_checked",
    "is_selectable",
    "Paginator",
    # Theming
    "Theme",
    "DEFAULT_THEME",
    # Key helpers
    "is_enter",
    "is_space",
    "is_up",
    "is_down",
    "is_left",
    "is_right",
    "is_select_all",
    "is_invert",
    "is_help",
    "is_number",
]
