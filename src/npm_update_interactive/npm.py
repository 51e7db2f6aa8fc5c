"""Thin wrappers around the npm commands the tool depends on."""

from __future__ import annotations

import json
import logging
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

DUPLICATE_WORKSPACES_URL = "https://github.com/npm/cli/issues/7736"


class NpmError(RuntimeError):
    """Raised when an npm query fails or returns unusable output."""


@dataclass(frozen=True)
class Workspace:
    """A package in the project: the root or one of its workspaces."""

    path: str
    package_name: str


@dataclass(frozen=True)
class Outdated:
    """One entry of ``npm outdated --json`` for a single dependent."""

    package: str
    current: str
    wanted: str
    latest: str
    dependent: str
    location: str = ""

    def target(self, latest: bool = False) -> str:
        """Version to install: ``latest`` or the semver-``wanted`` one."""
        return self.latest if latest else self.wanted


def _run_json(args: list[str], cwd: Path | None = None, check: bool = True) -> Any:
    """Run an npm command and parse its stdout as JSON."""
    logger.debug("Running %s", " ".join(args))
    try:
        proc = subprocess.run(args, cwd=cwd, capture_output=True, text=True)
    except FileNotFoundError as e:
        raise NpmError("npm executable not found on PATH") from e

    if proc.stderr.strip():
        logger.warning("%s: %s", " ".join(args), proc.stderr.strip())
    if check and proc.returncode != 0:
        raise NpmError(f"{' '.join(args)} exited with status {proc.returncode}")

    try:
        return json.loads(proc.stdout or "null")
    except json.JSONDecodeError as e:
        raise NpmError(f"{' '.join(args)} returned invalid JSON: {e}") from e


def get_workspace_map(cwd: Path | None = None) -> dict[str, Workspace]:
    """Map workspace directory basenames to workspaces, root project first."""
    cwd = cwd or Path.cwd()
    root_name = _run_json(["npm", "pkg", "get", "name"], cwd=cwd)
    workspaces = {cwd.name: Workspace(path=str(cwd), package_name=str(root_name))}

    declared = _run_json(["npm", "pkg", "get", "workspaces", "--json"], cwd=cwd)
    if not isinstance(declared, list):
        return workspaces

    for workspace in declared:
        key = Path(workspace).name
        if key in workspaces:
            raise NpmError(f"duplicate workspaces, see {DUPLICATE_WORKSPACES_URL}")
        named = _run_json(["npm", "pkg", "get", "name", "-w", workspace], cwd=cwd)
        if not isinstance(named, dict) or not named:
            raise NpmError(f"Cannot read package name of workspace {workspace}")
        workspaces[key] = Workspace(path=workspace, package_name=next(iter(named)))

    return workspaces


def parse_outdated(data: Any) -> dict[str, list[Outdated]]:
    """Normalize ``npm outdated --json`` output to lists per package."""
    if not isinstance(data, dict):
        return {}

    outdated: dict[str, list[Outdated]] = {}
    for package, raw in data.items():
        entries = raw if isinstance(raw, list) else [raw]
        outdated[package] = [
            Outdated(
                package=package,
                current=str(entry.get("current", "")),
                wanted=str(entry.get("wanted", "")),
                latest=str(entry.get("latest", "")),
                dependent=str(entry.get("dependent", "")),
                location=str(entry.get("location", "")),
            )
            for entry in entries
        ]
    return outdated


def get_outdated(cwd: Path | None = None) -> dict[str, list[Outdated]]:
    """Run ``npm outdated``; its non-zero exit status is expected when anything is outdated."""
    return parse_outdated(_run_json(["npm", "outdated", "--json"], cwd=cwd, check=False))


def run_install(args: list[str], cwd: Path | None = None) -> None:
    """Run an install command, streaming its output to the terminal."""
    logger.debug("Running %s", " ".join(args))
    subprocess.run(args, cwd=cwd, check=True)
