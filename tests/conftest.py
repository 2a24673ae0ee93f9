"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import json
import zipfile
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

from winprovision.core.tracker import OutcomeTracker
from winprovision.models.item import Item, Provider


@pytest.fixture
def tracker() -> OutcomeTracker:
    """Fresh outcome tracker."""
    return OutcomeTracker()


@pytest.fixture
def vscode_item() -> Item:
    """Winget item for Visual Studio Code."""
    return Item(key="VSCode", provider=Provider.WINGET, identifier="Microsoft.VisualStudioCode")


@pytest.fixture
def sample_config_data() -> dict[str, Any]:
    """Configuration touching every section."""
    return {
        "phases": {"debloat": True, "fonts": True, "apps": True, "cleanup": False},
        "apps": {
            "VSCode": {"install": True, "package_id": "Microsoft.VisualStudioCode"},
            "Spotify": {"install": True, "provider": "msstore", "package_id": "9NCBCSZSJRSB"},
            "7zip": {"install": True, "provider": "choco", "location": "auto"},
            "Teams": {"remove": True, "package_id": "Microsoft.Teams"},
            "Skipped": {},
        },
        "debloat": {
            "BingNews": {"package_id": "Microsoft.BingNews"},
            "Kept": {"remove": False},
        },
        "fonts": {"nerd_fonts": {"install": True, "fonts": ["FiraCode", "JetBrainsMono"]}},
    }


@pytest.fixture
def config_file(tmp_path: Path, sample_config_data: dict[str, Any]) -> Path:
    """Sample configuration written to disk."""
    path = tmp_path / "config.json"
    path.write_text(json.dumps(sample_config_data), encoding="utf-8")
    return path


@pytest.fixture
def make_zip(tmp_path: Path) -> Callable[[str, dict[str, bytes]], Path]:
    """Factory writing a zip archive with the given members."""

    def _make(name: str, members: dict[str, bytes]) -> Path:
        path = tmp_path / name
        with zipfile.ZipFile(path, "w") as zf:
            for member, data in members.items():
                zf.writestr(member, data)
        return path

    return _make
