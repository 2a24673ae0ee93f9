"""Item models for provisioning.

This module defines the core data structures describing a single
manageable unit (an application or a font) and how it is resolved.
"""

from dataclasses import dataclass, field
from enum import Enum


class Provider(Enum):
    """Enumeration of supported providers.

    Each provider identifies a resolution strategy for installing,
    detecting, or removing an item.
    """

    WINGET = "winget"
    CHOCO = "choco"
    SCOOP = "scoop"
    MSSTORE = "msstore"
    MANUAL = "manual"
    GITHUB = "github"

    @property
    def supports_uninstall(self) -> bool:
        """Check if the provider's CLI can uninstall packages."""
        return self in (Provider.WINGET, Provider.CHOCO)


class DesiredState(Enum):
    """Desired state of an item after a run."""

    INSTALL = "install"
    REMOVE = "remove"
    IGNORE = "ignore"

    @classmethod
    def from_flags(cls, install: bool, remove: bool) -> "DesiredState":
        """Derive the desired state from configuration flags.

        Args:
            install: The item's ``install`` flag.
            remove: The item's ``remove`` flag.

        Returns:
            INSTALL, REMOVE, or IGNORE when neither flag is set.

        Raises:
            ValueError: If both flags are set.
        """
        if install and remove:
            msg = "An item cannot be flagged for both install and remove"
            raise ValueError(msg)
        if install:
            return cls.INSTALL
        if remove:
            return cls.REMOVE
        return cls.IGNORE


class LocationPolicy(Enum):
    """Whether an install-location argument is passed to the provider.

    Attributes:
        AUTO: Look the location up, falling back to a generic default.
        EXPLICIT: Use the configured path.
        SUPPRESSED: Never pass a location argument.
    """

    AUTO = "auto"
    EXPLICIT = "explicit"
    SUPPRESSED = "suppressed"


@dataclass(frozen=True, slots=True)
class Auxiliary:
    """Provider-specific extras for an item.

    Attributes:
        bucket: Scoop bucket to register before installing.
        install_args: Extra arguments passed to the installer.
        archive_path: Path of the installer inside a downloaded archive.
        download_url: URL of a manually downloaded installer.
        local_path: Local installer file, used instead of downloading.
        repo: GitHub repository in ``owner/name`` form.
        asset_pattern: Release asset wildcard or a ``latest-exe``/``latest-msi`` alias.
    """

    bucket: str | None = None
    install_args: str | None = None
    archive_path: str | None = None
    download_url: str | None = None
    local_path: str | None = None
    repo: str | None = None
    asset_pattern: str | None = None


@dataclass(frozen=True, slots=True)
class Item:
    """A single application or font declared in the configuration.

    Items are built once per run and are never mutated.

    Attributes:
        key: Unique identifier within its list (e.g., 'VSCode').
        provider: Strategy used to resolve the item.
        desired_state: What the run should achieve for this item.
        identifier: Provider-specific lookup key; ``key`` is used when absent.
        location_policy: Governs the install-location argument.
        install_location: Path for EXPLICIT locations and filesystem probes.
        aux: Provider-specific extras.
    """

    key: str
    provider: Provider
    desired_state: DesiredState = DesiredState.INSTALL
    identifier: str | None = None
    location_policy: LocationPolicy = LocationPolicy.SUPPRESSED
    install_location: str | None = None
    aux: Auxiliary = field(default_factory=Auxiliary)

    def __post_init__(self) -> None:
        """Validate item data after initialization."""
        if not self.key:
            msg = "Item key cannot be empty"
            raise ValueError(msg)
        if self.location_policy == LocationPolicy.EXPLICIT and not self.install_location:
            msg = f"Item '{self.key}' has an explicit location policy but no location"
            raise ValueError(msg)

    @property
    def resolved_identifier(self) -> str:
        """Return the provider identifier, falling back to the key."""
        return self.identifier or self.key

    @property
    def wants_install(self) -> bool:
        """Check if the item is flagged for installation."""
        return self.desired_state == DesiredState.INSTALL

    @property
    def wants_removal(self) -> bool:
        """Check if the item is flagged for removal."""
        return self.desired_state == DesiredState.REMOVE

    def describe(self) -> str:
        """Return a short label naming key, identifier and provider."""
        return f"{self.key} ({self.resolved_identifier}) via {self.provider.value}"
