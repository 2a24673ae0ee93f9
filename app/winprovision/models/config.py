"""Configuration models for declarative provisioning.

This module defines the Pydantic models representing the config.json
structure that describes the desired state of a Windows machine.
"""

from collections.abc import Callable, Mapping
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from winprovision.models.item import (
    Auxiliary,
    DesiredState,
    Item,
    LocationPolicy,
    Provider,
)

# Provider names are checked per entry when items are built
PROVIDER_NAMES: tuple[str, ...] = tuple(p.value for p in Provider)

# Location values with a special meaning; anything else is a path
_LOCATION_AUTO = "auto"
_LOCATION_NONE = "none"


class PhaseToggles(BaseModel):
    """Phase enable flags.

    Attributes:
        debloat: Remove unwanted applications.
        fonts: Install requested fonts.
        apps: Install declared applications.
        cleanup: Remove leftovers from previous runs.
    """

    model_config = ConfigDict(extra="forbid")

    debloat: bool = True
    fonts: bool = True
    apps: bool = True
    cleanup: bool = True


class AppEntry(BaseModel):
    """Entry for a single application in the configuration.

    Attributes:
        install: Install the application.
        remove: Remove the application.
        provider: Provider that resolves the application.
        package_id: Provider-specific identifier (defaults to the entry key).
        location: "auto", "none", or an explicit install path.
        bucket: Scoop bucket to add before installing.
        install_args: Extra installer arguments.
        archive_path: Installer path inside a downloaded archive.
        download_url: Download URL for manual installs.
        local_path: Local installer file for manual installs.
        repo: GitHub repository (owner/name) for release assets.
        asset_pattern: Release asset wildcard or latest-exe/latest-msi alias.
    """

    model_config = ConfigDict(extra="forbid")

    install: bool = False
    remove: bool = False
    provider: Annotated[str, Field(description="Provider used for this app")] = "winget"
    package_id: Annotated[str | None, Field(description="Provider identifier")] = None
    location: Annotated[str | None, Field(description="auto, none, or a path")] = None
    bucket: str | None = None
    install_args: str | None = None
    archive_path: str | None = None
    download_url: str | None = None
    local_path: str | None = None
    repo: str | None = None
    asset_pattern: str | None = None

    @model_validator(mode="after")
    def validate_flags(self) -> "AppEntry":
        """Validate that install and remove are not both set."""
        if self.install and self.remove:
            msg = "An entry cannot set both install and remove"
            raise ValueError(msg)
        return self

    def to_item(self, key: str) -> Item:
        """Build an immutable Item from this entry.

        Args:
            key: The entry's key in its configuration section.

        Returns:
            Item carrying this entry's state and provider details.
        """
        policy, path = _parse_location(self.location)
        return Item(
            key=key,
            provider=_parse_provider(key, self.provider),
            desired_state=DesiredState.from_flags(self.install, self.remove),
            identifier=self.package_id,
            location_policy=policy,
            install_location=path,
            aux=Auxiliary(
                bucket=self.bucket,
                install_args=self.install_args,
                archive_path=self.archive_path,
                download_url=self.download_url,
                local_path=self.local_path,
                repo=self.repo,
                asset_pattern=self.asset_pattern,
            ),
        )


class DebloatEntry(BaseModel):
    """Entry for an application targeted by the debloat phase.

    Attributes:
        remove: Remove the application (entries with False are ignored).
        provider: Provider whose uninstall is tried first.
        package_id: Identifier or AppX name (defaults to the entry key).
    """

    model_config = ConfigDict(extra="forbid")

    remove: bool = True
    provider: str = "winget"
    package_id: str | None = None

    def to_item(self, key: str) -> Item:
        """Build an immutable removal Item from this entry."""
        return Item(
            key=key,
            provider=_parse_provider(key, self.provider),
            desired_state=DesiredState.from_flags(False, self.remove),
            identifier=self.package_id,
        )


class NerdFontsConfig(BaseModel):
    """Nerd Fonts section of the configuration.

    Attributes:
        install: Install the listed fonts.
        fonts: Font names as published by the Nerd Fonts project.
        repo: GitHub repository used for direct downloads.
    """

    model_config = ConfigDict(extra="forbid")

    install: bool = True
    fonts: Annotated[list[str], Field(default_factory=list, description="Font names")]
    repo: str = "ryanoasis/nerd-fonts"


class FontsConfig(BaseModel):
    """Fonts section of the configuration."""

    model_config = ConfigDict(extra="forbid")

    nerd_fonts: NerdFontsConfig | None = None


class ProvisionConfig(BaseModel):
    """Complete configuration describing desired system state.

    Attributes:
        phases: Phase enable flags.
        apps: Applications keyed by name.
        debloat: Applications to remove, keyed by name.
        fonts: Font configuration.
    """

    model_config = ConfigDict(extra="forbid")

    phases: Annotated[PhaseToggles, Field(default_factory=PhaseToggles)]
    apps: Annotated[dict[str, AppEntry], Field(default_factory=dict)]
    debloat: Annotated[dict[str, DebloatEntry], Field(default_factory=dict)]
    fonts: Annotated[FontsConfig, Field(default_factory=FontsConfig)]

    def install_items(self) -> list[Item]:
        """Return app items flagged for installation, in declaration order."""
        return self._install_plan()[0]

    def install_errors(self) -> list[str]:
        """Return why app entries flagged for installation were rejected."""
        return self._install_plan()[1]

    def removal_items(self) -> list[Item]:
        """Return debloat items and app items flagged for removal."""
        return self._removal_plan()[0]

    def removal_errors(self) -> list[str]:
        """Return why entries flagged for removal were rejected."""
        return self._removal_plan()[1]

    def _install_plan(self) -> tuple[list[Item], list[str]]:
        return _build_items(self.apps, lambda entry: entry.install)

    def _removal_plan(self) -> tuple[list[Item], list[str]]:
        items, errors = _build_items(self.debloat, lambda entry: entry.remove)
        app_items, app_errors = _build_items(self.apps, lambda entry: entry.remove)
        return items + app_items, errors + app_errors

    @property
    def nerd_fonts(self) -> NerdFontsConfig | None:
        """Return the Nerd Fonts section when it requests an install."""
        section = self.fonts.nerd_fonts
        if section is None or not section.install or not section.fonts:
            return None
        return section


def _parse_location(value: str | None) -> tuple[LocationPolicy, str | None]:
    """Map a configured location value to a policy and optional path."""
    if value is None or value.strip().lower() in ("", _LOCATION_NONE):
        return LocationPolicy.SUPPRESSED, None
    if value.strip().lower() == _LOCATION_AUTO:
        return LocationPolicy.AUTO, None
    return LocationPolicy.EXPLICIT, value


def _parse_provider(key: str, value: str) -> Provider:
    """Map a configured provider name to a Provider.

    Raises:
        ValueError: If the name is not a supported provider.
    """
    try:
        return Provider(value.strip().lower())
    except ValueError:
        msg = f"{key}: unknown provider '{value}' (expected one of {', '.join(PROVIDER_NAMES)})"
        raise ValueError(msg) from None


def _build_items(
    entries: Mapping[str, AppEntry] | Mapping[str, DebloatEntry],
    selected: Callable[[Any], bool],
) -> tuple[list[Item], list[str]]:
    """Build items for the selected entries, collecting rejected ones.

    Args:
        entries: Configuration entries keyed by name.
        selected: Predicate choosing which entries are actionable.

    Returns:
        Items in declaration order, and one message per rejected entry.
    """
    items: list[Item] = []
    errors: list[str] = []
    for key, entry in entries.items():
        if not selected(entry):
            continue
        try:
            items.append(entry.to_item(key))
        except ValueError as e:
            errors.append(str(e))
    return items, errors
