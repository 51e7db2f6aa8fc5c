from __future__ import annotations

import pytest

from tree_select.components import Choice
from tree_select.themes import DEFAULT_THEME, Theme, dim_disabled, join_short_names


def test_default_help_mode_is_auto():
    assert DEFAULT_THEME.help_mode == "auto"


def test_rejects_unknown_help_mode():
    with pytest.raises(ValueError):
        Theme(help_mode="sometimes")


def test_join_short_names_prefers_short():
    selected = [Choice("react@18", short="react"), Choice("lodash")]
    assert join_short_names(selected, selected) == "react, lodash"


def test_dim_disabled():
    assert dim_disabled("x (disabled)") == "[dim]- x (disabled)[/dim]"


def test_custom_summary_renderer():
    theme = Theme(render_selected_choices=lambda selected, items: f"{len(selected)} selected")
    assert theme.render_selected_choices([Choice("a")], []) == "1 selected"


def test_key_markup():
    assert Theme(key_color="magenta").key("space") == "[magenta]space[/magenta]"
