"""Interactive tree checkbox prompt using Rich.Live.

This module provides the TreeCheckbox session: it owns the tree, the focus
path and the prompt status, dispatches one key at a time to the navigation
and mutation functions, and redraws the whole frame after every key.

Example:
    from tree_select import Choice, Group, TreeCheckbox

    prompt = TreeCheckbox(
        "Select packages",
        [
            Group("frontend", choices=(Choice("react", value="react"),)),
            Choice("lodash", value="lodash"),
        ],
    )
    result = prompt.show()  # SelectionResult(values=[...], aborted=False)
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Iterable, Sequence, Union

import readchar
from rich.console import Console
from rich.live import Live
from rich.text import Text

from . import mutations, navigation, render
from .components import Choice, Separator
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
from .themes import DEFAULT_THEME, Theme
from .tree import (
    any_checked,
    compute_bounds,
    flatten_checked,
    normalize,
    resolve,
    row_index,
    visible_rows,
)

logger = logging.getLogger(__name__)

Validator = Callable[[list[Choice]], Union[bool, str, Awaitable[Union[bool, str]]]]

STATUS_PENDING = "pending"
STATUS_DONE = "done"
REQUIRED_MESSAGE = "At least one choice must be selected"
INVALID_MESSAGE = "You must select a valid value"


@dataclass(frozen=True)
class SelectionResult:
    """Outcome of a prompt session.

    Attributes:
        values: Values of the checked choices in tree order.
        aborted: True when the user cancelled (Ctrl+C); values is then empty.
    """

    values: list[Any] = field(default_factory=list)
    aborted: bool = False


def _run_to_completion(result: Any) -> Any:
    """Drive an awaitable returned by a callback; plain values pass through."""
    if not inspect.isawaitable(result):
        return result

    async def _wait():
        return await result

    return asyncio.run(_wait())


class TreeCheckbox:
    """Tree-structured multi-select prompt.

    Keyboard controls:
        - Up/Down, j/k, Ctrl+P/Ctrl+N: Navigate visible rows
        - Right/l/Ctrl+F: Expand the focused group
        - Left/h/Ctrl+B: Collapse the current group
        - Space: Toggle the focused choice, or the whole focused group
        - a: Select all / deselect all
        - i: Invert the selection
        - ?: Run the focused item's help action
        - Enter: Validate and confirm
        - Ctrl+C: Abort

    Args:
        message: Question shown on the first line.
        choices: Separators, Choices and Groups (or equivalent mappings).
        page_size: Maximum number of rows shown at once.
        loop: Wrap around at the ends of the list.
        required: Refuse to confirm an empty selection.
        validate: Called with the selected choices on Enter. Returns True,
            an error string, or an awaitable of either.
        instructions: Replaces the default key help (str), or hides it (False).
        theme: Visual theme.
        console: Rich Console (creates a new one if None).

    Raises:
        NoSelectableChoicesError: If no root item can be selected.
        ValueError: If page_size is not positive.
    """

    def __init__(
        self,
        message: str,
        choices: Iterable[Any],
        *,
        page_size: int = 7,
        loop: bool = True,
        required: bool = False,
        validate: Validator | None = None,
        instructions: str | bool | None = None,
        theme: Theme | None = None,
        console: Console | None = None,
    ):
        self.message = message
        self.items = normalize(choices)
        self.bounds = compute_bounds(self.items)
        self.loop = loop
        self.required = required
        self.validate = validate
        self.instructions = instructions
        self.theme = theme or DEFAULT_THEME
        self.console = console or Console(highlight=False)

        self.active = (self.bounds.first,)
        self.status = STATUS_PENDING
        self.error: str | None = None
        self.values: list[Any] = []
        self.show_help_tip = True
        self.first_render = True
        self._paginator = Paginator(page_size, loop)

    @property
    def page_size(self) -> int:
        return self._paginator.page_size

    @property
    def focused(self):
        return resolve(self.items, self.active)

    def handle_key(self, key: str) -> None:
        """Apply a single key press to the session state."""
        if self.status == STATUS_DONE:
            return

        if is_enter(key):
            self.confirm()
        elif is_down(key):
            self.active = navigation.move_down(self.items, self.active, self.bounds, self.loop)
        elif is_up(key):
            self.active = navigation.move_up(self.items, self.active, self.bounds, self.loop)
        elif is_right(key):
            self.items = mutations.expand(self.items, self.active)
        elif is_left(key):
            self.items = mutations.collapse(self.items, self.active)
            self.active = navigation.move_left(self.active)
        elif is_space(key):
            self.error = None
            self.show_help_tip = False
            self.items = mutations.toggle(self.items, self.active)
        elif is_select_all(key):
            self.items = mutations.select_all(self.items)
        elif is_invert(key):
            self.items = mutations.invert(self.items)
        elif is_help(key):
            self.help()
        elif is_number(key):
            pass  # digits are ignored

    def help(self) -> None:
        """Run the focused item's help action, blocking until it finishes."""
        item = self.focused
        if isinstance(item, Separator) or item.help is None:
            return
        logger.debug("Running help action for %s", item.name)
        _run_to_completion(item.help())

    def confirm(self) -> bool:
        """Validate the selection; on success mark the prompt done."""
        selection = flatten_checked(self.items)
        if self.required and not any_checked(self.items):
            self.error = REQUIRED_MESSAGE
            return False

        verdict = True
        if self.validate is not None:
            verdict = _run_to_completion(self.validate(list(selection)))

        if verdict is True:
            self.status = STATUS_DONE
            self.error = None
            self.values = [choice.value for choice in selection]
            logger.debug("Confirmed %d choice(s)", len(self.values))
            return True

        self.error = verdict if isinstance(verdict, str) and verdict else INVALID_MESSAGE
        logger.debug("Selection rejected: %s", self.error)
        return False

    def _page(self) -> tuple[list[str], int]:
        """Visible page of rendered rows, plus the total row count."""
        rows = visible_rows(self.items)
        active_index = row_index(rows, self.active)
        lines = [
            render.render_row(row, index == active_index, self.theme)
            for index, row in enumerate(rows)
        ]
        return self._paginator.paginate(lines, active_index), len(rows)

    def render(self) -> str:
        """Render the current frame as a Rich markup string."""
        theme = self.theme
        if self.status == STATUS_DONE:
            return render.summary_line(
                theme, self.message, flatten_checked(self.items), self.items
            )

        header = render.prompt_line(theme, self.message)
        lines, total_rows = self._page()
        footer: list[str] = []

        mode = theme.help_mode
        if mode == "always" or (
            mode == "auto"
            and self.show_help_tip
            and (self.instructions is None or self.instructions)
        ):
            header += render.help_banner(theme, self.instructions)

        if total_rows > self.page_size and (
            mode == "always" or (mode == "auto" and self.first_render)
        ):
            footer.append(render.more_choices_hint(theme))
        self.first_render = False

        if self.error:
            footer.append(render.error_line(theme, self.error))

        return "\n".join([header, *lines, *footer])

    def show(self) -> SelectionResult:
        """Display the prompt and block until it is confirmed or aborted."""
        with Live(
            Text.from_markup(self.render()), console=self.console, refresh_per_second=20
        ) as live:
            try:
                while self.status == STATUS_PENDING:
                    self.handle_key(readchar.readkey())
                    live.update(Text.from_markup(self.render()))
            except (KeyboardInterrupt, EOFError):
                # help actions and validation run inside the loop too
                logger.debug("Prompt aborted by user")
                return SelectionResult(aborted=True)

        return SelectionResult(values=list(self.values))


def tree_checkbox(message: str, choices: Sequence[Any], **options: Any) -> SelectionResult:
    """Build a TreeCheckbox and run it."""
    return TreeCheckbox(message, choices, **options).show()
