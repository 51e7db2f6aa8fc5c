"""Keyboard input helpers for tree_select.

This module provides helper functions for detecting key presses,
replacing repeated inline conditionals with readable function calls.
Each directional helper accepts the arrow key, its vim letter and its
emacs control chord.
"""

from __future__ import annotations

import readchar

CTRL_B = "\x02"
CTRL_F = "\x06"
CTRL_N = "\x0e"
CTRL_P = "\x10"


def is_enter(key: str) -> bool:
    """Check if key is Enter/Return."""
    return key in (readchar.key.ENTER, "\r", "\n")


def is_space(key: str) -> bool:
    """Check if key is space."""
    return key == " "


def is_up(key: str) -> bool:
    """Check if key is up arrow, vim 'k' or Ctrl+P."""
    return key.lower() == "k" or key in (readchar.key.UP, CTRL_P)


def is_down(key: str) -> bool:
    """Check if key is down arrow, vim 'j' or Ctrl+N."""
    return key.lower() == "j" or key in (readchar.key.DOWN, CTRL_N)


def is_left(key: str) -> bool:
    """Check if key is left arrow, vim 'h' or Ctrl+B."""
    return key.lower() == "h" or key in (readchar.key.LEFT, CTRL_B)


def is_right(key: str) -> bool:
    """Check if key is right arrow, vim 'l' or Ctrl+F."""
    return key.lower() == "l" or key in (readchar.key.RIGHT, CTRL_F)


def is_select_all(key: str) -> bool:
    return key == "a"


def is_invert(key: str) -> bool:
    return key == "i"


def is_help(key: str) -> bool:
    return key == "?"


def is_number(key: str) -> bool:
    """Check if key is a single digit (digits are ignored by the prompt)."""
    return len(key) == 1 and key.isdigit()
