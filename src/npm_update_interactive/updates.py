"""Turn ``npm outdated`` data into prompt choices and install commands."""

from __future__ import annotations

import logging
import re
import webbrowser
from typing import Callable, Sequence

from rich.markup import escape

from tree_select import Choice, Group

from .npm import Outdated, Workspace

logger = logging.getLogger(__name__)

NPM_PACKAGE_URL = "https://www.npmjs.com/package/{package}"

_SEMVER_RE = re.compile(
    r"^v?(\d+)\.(\d+)\.(\d+)(?:-([0-9A-Za-z.-]+))?(?:\+[0-9A-Za-z.-]+)?$"
)

DIFF_STYLES = {
    "major": "bright_red",
    "minor": "bright_yellow",
    "patch": "bright_green",
    "premajor": "on red",
    "preminor": "on red",
    "prepatch": "on red",
    "prerelease": "on red",
}


def _parse_version(version: str) -> tuple[tuple[int, int, int], tuple[str, ...]] | None:
    match = _SEMVER_RE.match(version.strip())
    if not match:
        return None
    major, minor, patch, pre = match.groups()
    return (int(major), int(minor), int(patch)), tuple(pre.split(".")) if pre else ()


def _pre_key(pre: tuple[str, ...]) -> tuple:
    # A release sorts after any of its prereleases; numeric identifiers sort before text
    if not pre:
        return (1,)
    return (0, *[(0, int(p), "") if p.isdigit() else (1, 0, p) for p in pre])


def version_diff(current: str, target: str) -> str | None:
    """Name the kind of change between two versions, like ``semver.diff``.

    Returns None when the versions are equal or either cannot be parsed.
    """
    a, b = _parse_version(current), _parse_version(target)
    if a is None or b is None or a == b:
        return None

    low, high = sorted((a, b), key=lambda v: (v[0], _pre_key(v[1])))
    (low_main, low_pre), (high_main, high_pre) = low, high

    if low_pre and not high_pre:
        if low_main[1] == 0 and low_main[2] == 0:
            return "major"
        if low_main == high_main:
            return "minor" if low_main[1] and not low_main[2] else "patch"

    prefix = "pre" if high_pre else ""
    if low_main[0] != high_main[0]:
        return prefix + "major"
    if low_main[1] != high_main[1]:
        return prefix + "minor"
    if low_main[2] != high_main[2]:
        return prefix + "patch"
    return "prerelease"


def choice_name(package: str, current: str, target: str, label: str | None = None) -> str:
    """``label:pkg@current -> target`` with the target colored by change size."""
    style = DIFF_STYLES.get(version_diff(current, target) or "")
    shown = f"[{style}]{escape(target)}[/{style}]" if style else escape(target)
    prefix = f"{escape(label)}:" if label else ""
    return f"{prefix}{escape(package)}@{escape(current)} -> {shown}"


def open_package_page(package: str) -> Callable[[], None]:
    """Help action that opens the package's npm page in a browser."""

    def _open() -> None:
        webbrowser.open(NPM_PACKAGE_URL.format(package=package))

    return _open


def _label_for(info: Outdated, workspaces: dict[str, Workspace]) -> str | None:
    workspace = workspaces.get(info.dependent)
    return workspace.package_name if workspace else None


def _make_choice(info: Outdated, workspaces: dict[str, Workspace], latest: bool) -> Choice:
    target = info.target(latest)
    return Choice(
        name=choice_name(info.package, info.current, target, _label_for(info, workspaces)),
        value=info,
        short=f"{info.package}@{target}",
        help=open_package_page(info.package),
    )


def build_choices(
    outdated: dict[str, list[Outdated]],
    workspaces: dict[str, Workspace],
    latest: bool = False,
) -> list[Choice | Group]:
    """Build prompt items: a Choice per outdated dependency.

    A package outdated in several workspaces becomes a Group named
    ``*:pkg@current -> target`` ("various" where members disagree). The
    group starts expanded when its members disagree. Entries already at
    their target version are dropped.
    """
    items: list[Choice | Group] = []
    for package, entries in outdated.items():
        pending = [e for e in entries if e.current != e.target(latest)]
        if not pending:
            continue
        if len(pending) == 1:
            items.append(_make_choice(pending[0], workspaces, latest))
            continue

        first = pending[0]
        all_target_match = all(e.target(latest) == first.target(latest) for e in pending)
        all_current_match = all(e.current == first.current for e in pending)
        all_match = all_target_match and all_current_match
        if all_match:
            name = choice_name(package, first.current, first.target(latest), "*")
        else:
            current = first.current if all_current_match else "various"
            target = first.target(latest) if all_target_match else "various"
            name = f"*:{escape(package)}@{escape(current)} -> {escape(target)}"

        items.append(
            Group(
                name=name,
                choices=tuple(_make_choice(e, workspaces, latest) for e in pending),
                expanded=not all_match,
                short=package,
                help=open_package_page(package),
            )
        )
    return items


def plan_installs(
    selected: Sequence[Outdated],
    workspaces: dict[str, Workspace],
    latest: bool = False,
) -> list[list[str]]:
    """One ``npm install`` command per workspace with selections, root first."""
    by_workspace: dict[str, list[Outdated]] = {key: [] for key in workspaces}
    for info in selected:
        if info.dependent not in by_workspace:
            logger.warning("Skipping %s: unknown dependent %s", info.package, info.dependent)
            continue
        by_workspace[info.dependent].append(info)

    commands: list[list[str]] = []
    for position, (key, deps) in enumerate(by_workspace.items()):
        if not deps:
            continue
        args = ["npm", "install"]
        if position > 0:
            args += ["-w", workspaces[key].path]
        args += [f"{dep.package}@{dep.target(latest)}" for dep in deps]
        commands.append(args)
    return commands
