"""Tests for turning outdated packages into choices and install commands."""

import pytest

from tree_select import Choice, Group

from npm_update_interactive import updates
from npm_update_interactive.npm import Outdated, Workspace

WORKSPACES = {
    "repo": Workspace(path="/work/repo", package_name="my-app"),
    "web": Workspace(path="packages/web", package_name="@my/web"),
    "docs": Workspace(path="packages/docs", package_name="@my/docs"),
}


def _outdated(package, current, wanted, latest=None, dependent="repo"):
    return Outdated(
        package=package,
        current=current,
        wanted=wanted,
        latest=latest or wanted,
        dependent=dependent,
    )


class TestVersionDiff:
    @pytest.mark.parametrize(
        "current,target,expected",
        [
            ("1.2.3", "2.0.0", "major"),
            ("1.2.3", "1.3.0", "minor"),
            ("1.2.3", "1.2.4", "patch"),
            ("1.2.3", "1.2.3", None),
            ("1.2.3", "2.0.0-rc.1", "premajor"),
            ("1.2.3", "1.3.0-beta", "preminor"),
            ("1.0.0-alpha", "1.0.0-beta", "prerelease"),
            ("2.0.0-rc.1", "2.0.0", "major"),
            ("1.2.3", "not-a-version", None),
        ],
    )
    def test_kinds(self, current, target, expected):
        assert updates.version_diff(current, target) == expected

    def test_symmetric(self):
        assert updates.version_diff("2.0.0", "1.0.0") == "major"


class TestChoiceName:
    def test_colors_target_by_change(self):
        name = updates.choice_name("react", "17.0.2", "18.3.1", "web")
        assert name == "web:react@17.0.2 -> [bright_red]18.3.1[/bright_red]"

    def test_without_label(self):
        assert updates.choice_name("lodash", "4.17.20", "4.17.21").startswith("lodash@4.17.20 -> ")

    def test_escapes_markup(self):
        assert "\\[" in updates.choice_name("[odd]", "1.0.0", "1.0.1")


class TestBuildChoices:
    def test_single_entry_becomes_choice(self):
        info = _outdated("lodash", "4.17.20", "4.17.21")
        items = updates.build_choices({"lodash": [info]}, WORKSPACES)
        assert len(items) == 1
        assert isinstance(items[0], Choice)
        assert items[0].value is info
        assert items[0].name.startswith("my-app:lodash@4.17.20")
        assert items[0].short == "lodash@4.17.21"

    def test_up_to_date_entries_dropped(self):
        info = _outdated("semver", "7.6.3", "7.6.3", latest="8.0.0")
        assert updates.build_choices({"semver": [info]}, WORKSPACES) == []
        assert len(updates.build_choices({"semver": [info]}, WORKSPACES, latest=True)) == 1

    def test_matching_workspaces_grouped_collapsed(self):
        entries = [
            _outdated("react", "17.0.2", "18.3.1", dependent="web"),
            _outdated("react", "17.0.2", "18.3.1", dependent="docs"),
        ]
        [group] = updates.build_choices({"react": entries}, WORKSPACES)
        assert isinstance(group, Group)
        assert group.expanded is False
        assert group.name.startswith("*:react@17.0.2 -> ")
        assert [c.value.dependent for c in group.choices] == ["web", "docs"]
        assert group.choices[0].name.startswith("@my/web:")

    def test_differing_workspaces_grouped_expanded(self):
        entries = [
            _outdated("react", "17.0.2", "18.3.1", dependent="web"),
            _outdated("react", "16.14.0", "18.3.1", dependent="docs"),
        ]
        [group] = updates.build_choices({"react": entries}, WORKSPACES)
        assert group.expanded is True
        assert group.name == "*:react@various -> 18.3.1"

    def test_help_opens_npm_page(self, monkeypatch):
        opened = []
        monkeypatch.setattr(updates.webbrowser, "open", opened.append)
        [choice] = updates.build_choices({"lodash": [_outdated("lodash", "1.0.0", "1.0.1")]}, WORKSPACES)
        choice.help()
        assert opened == ["https://www.npmjs.com/package/lodash"]


class TestPlanInstalls:
    def test_root_first_then_workspaces(self):
        selected = [
            _outdated("react", "17.0.2", "18.3.1", dependent="web"),
            _outdated("lodash", "4.17.20", "4.17.21", dependent="repo"),
            _outdated("vite", "4.0.0", "4.5.0", latest="5.0.0", dependent="web"),
        ]
        assert updates.plan_installs(selected, WORKSPACES) == [
            ["npm", "install", "lodash@4.17.21"],
            ["npm", "install", "-w", "packages/web", "react@18.3.1", "vite@4.5.0"],
        ]

    def test_latest_targets(self):
        selected = [_outdated("vite", "4.0.0", "4.5.0", latest="5.0.0", dependent="docs")]
        assert updates.plan_installs(selected, WORKSPACES, latest=True) == [
            ["npm", "install", "-w", "packages/docs", "vite@5.0.0"],
        ]

    def test_unknown_dependent_skipped(self):
        selected = [_outdated("x", "1.0.0", "1.0.1", dependent="elsewhere")]
        assert updates.plan_installs(selected, WORKSPACES) == []

    def test_nothing_selected(self):
        assert updates.plan_installs([], WORKSPACES) == []
