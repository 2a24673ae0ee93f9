"""Unit tests for configuration models.

Tests for the Pydantic models describing config.json.
"""

from typing import Any

import pytest
from pydantic import ValidationError

from winprovision.models.config import AppEntry, DebloatEntry, ProvisionConfig
from winprovision.models.item import DesiredState, LocationPolicy, Provider


class TestAppEntry:
    """Tests for AppEntry model."""

    def test_defaults(self) -> None:
        """An empty entry uses winget and does nothing."""
        entry = AppEntry()
        assert entry.provider == "winget"
        assert entry.install is False
        assert entry.remove is False

    def test_install_and_remove_rejected(self) -> None:
        """Setting both flags fails validation."""
        with pytest.raises(ValidationError, match="both install and remove"):
            AppEntry(install=True, remove=True)

    def test_unknown_provider_fails_item_build(self) -> None:
        """An unknown provider parses but cannot become an item."""
        entry = AppEntry.model_validate({"install": True, "provider": "apt"})
        with pytest.raises(ValueError, match="unknown provider 'apt'"):
            entry.to_item("Git")

    def test_provider_case_insensitive(self) -> None:
        """Provider names are matched case-insensitively."""
        item = AppEntry(install=True, provider="Choco").to_item("7zip")
        assert item.provider == Provider.CHOCO

    def test_extra_fields_forbidden(self) -> None:
        """Unknown keys are rejected."""
        with pytest.raises(ValidationError):
            AppEntry.model_validate({"install": True, "version": "1.0"})

    @pytest.mark.parametrize(
        ("location", "policy", "path"),
        [
            (None, LocationPolicy.SUPPRESSED, None),
            ("none", LocationPolicy.SUPPRESSED, None),
            ("NONE", LocationPolicy.SUPPRESSED, None),
            ("auto", LocationPolicy.AUTO, None),
            ("Auto", LocationPolicy.AUTO, None),
            (r"D:\Tools\Git", LocationPolicy.EXPLICIT, r"D:\Tools\Git"),
        ],
    )
    def test_location_parsing(
        self, location: str | None, policy: LocationPolicy, path: str | None
    ) -> None:
        """Location values map to a policy and optional path."""
        item = AppEntry(install=True, location=location).to_item("Git")
        assert item.location_policy == policy
        assert item.install_location == path

    def test_to_item_carries_aux(self) -> None:
        """Provider extras are copied onto the item."""
        entry = AppEntry(
            install=True,
            provider="github",
            repo="owner/tool",
            asset_pattern="latest-exe",
            install_args="/quiet",
        )
        item = entry.to_item("Tool")

        assert item.provider == Provider.GITHUB
        assert item.desired_state == DesiredState.INSTALL
        assert item.aux.repo == "owner/tool"
        assert item.aux.asset_pattern == "latest-exe"
        assert item.aux.install_args == "/quiet"


class TestDebloatEntry:
    """Tests for DebloatEntry model."""

    def test_defaults_to_removal(self) -> None:
        """Debloat entries are removals unless disabled."""
        item = DebloatEntry(package_id="Microsoft.BingNews").to_item("BingNews")
        assert item.desired_state == DesiredState.REMOVE
        assert item.resolved_identifier == "Microsoft.BingNews"

    def test_disabled_entry_is_ignored(self) -> None:
        """remove=False produces an ignored item."""
        item = DebloatEntry(remove=False).to_item("Kept")
        assert item.desired_state == DesiredState.IGNORE


class TestProvisionConfig:
    """Tests for ProvisionConfig model."""

    def test_empty_config(self) -> None:
        """An empty document is valid and does nothing."""
        config = ProvisionConfig.model_validate({})
        assert config.install_items() == []
        assert config.removal_items() == []
        assert config.nerd_fonts is None
        assert config.phases.apps is True

    def test_install_items_preserve_order(self, sample_config_data: dict[str, Any]) -> None:
        """Install items keep declaration order and skip other entries."""
        config = ProvisionConfig.model_validate(sample_config_data)
        assert [item.key for item in config.install_items()] == ["VSCode", "Spotify", "7zip"]

    def test_removal_items_include_flagged_apps(self, sample_config_data: dict[str, Any]) -> None:
        """Removal items come from debloat entries and apps flagged for removal."""
        config = ProvisionConfig.model_validate(sample_config_data)
        assert [item.key for item in config.removal_items()] == ["BingNews", "Teams"]

    def test_nerd_fonts(self, sample_config_data: dict[str, Any]) -> None:
        """The Nerd Fonts section is exposed when it requests fonts."""
        config = ProvisionConfig.model_validate(sample_config_data)
        assert config.nerd_fonts is not None
        assert config.nerd_fonts.fonts == ["FiraCode", "JetBrainsMono"]
        assert config.nerd_fonts.repo == "ryanoasis/nerd-fonts"

    def test_nerd_fonts_disabled(self) -> None:
        """install=False or an empty list hides the section."""
        disabled = ProvisionConfig.model_validate(
            {"fonts": {"nerd_fonts": {"install": False, "fonts": ["FiraCode"]}}}
        )
        empty = ProvisionConfig.model_validate({"fonts": {"nerd_fonts": {"fonts": []}}})
        assert disabled.nerd_fonts is None
        assert empty.nerd_fonts is None

    def test_unknown_phase_rejected(self) -> None:
        """Phase toggles only accept known phases."""
        with pytest.raises(ValidationError):
            ProvisionConfig.model_validate({"phases": {"drivers": True}})

    def test_bad_provider_rejected_per_entry(self) -> None:
        """An entry with an unknown provider is reported, the rest still build."""
        config = ProvisionConfig.model_validate(
            {
                "apps": {
                    "Git": {"install": True, "provider": "wingte"},
                    "VSCode": {"install": True},
                    "Teams": {"remove": True, "provider": "nope"},
                    "Idle": {"provider": "nope"},
                },
                "debloat": {"BingNews": {}},
            }
        )

        assert [item.key for item in config.install_items()] == ["VSCode"]
        assert config.install_errors() == [
            "Git: unknown provider 'wingte' (expected one of winget, choco, scoop, msstore, manual, github)"
        ]
        assert [item.key for item in config.removal_items()] == ["BingNews"]
        assert len(config.removal_errors()) == 1
        assert config.removal_errors()[0].startswith("Teams: unknown provider 'nope'")
