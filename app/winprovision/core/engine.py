"""Provider resolution engine.

Resolves a single item: probes whether it is already present and, if
not, runs the provider's ordered install methods. Exactly one outcome
is recorded per item and no exception escapes ``resolve``.
"""

import logging
from collections.abc import Callable
from pathlib import Path

from winprovision.core.cascade import run_cascade
from winprovision.core.tracker import OutcomeTracker
from winprovision.installers import Installer, get_installer
from winprovision.models.item import Item, Provider
from winprovision.models.outcome import OutcomeKind
from winprovision.probes import Probe, get_probe

logger = logging.getLogger(__name__)

APPS_PHASE = "apps"

ProbeFactory = Callable[[Provider], Probe]
InstallerFactory = Callable[[Provider], Installer]


class ResolutionEngine:
    """Installs items through their provider, once per run.

    Attributes:
        tracker: Tracker receiving one outcome per resolved item.
        dry_run: If True, installers only simulate mutating commands.
    """

    def __init__(
        self,
        tracker: OutcomeTracker,
        *,
        dry_run: bool = False,
        temp_root: Path | None = None,
        probe_factory: ProbeFactory | None = None,
        installer_factory: InstallerFactory | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            tracker: Tracker receiving outcomes.
            dry_run: Whether installers run in dry-run mode.
            temp_root: Parent directory for temporary downloads.
            probe_factory: Returns the probe for a provider.
            installer_factory: Returns the installer for a provider.
        """
        self.tracker = tracker
        self.dry_run = dry_run
        self._probe_factory = probe_factory or get_probe
        self._installer_factory = installer_factory or (
            lambda provider: get_installer(provider, dry_run=dry_run, temp_root=temp_root)
        )

    def is_installed(self, item: Item) -> bool:
        """Probe whether the item is already present."""
        return self._probe_factory(item.provider).is_installed(item)

    def resolve(self, item: Item, phase: str = APPS_PHASE) -> OutcomeKind:
        """Bring an item to the installed state.

        Args:
            item: Item to install.
            phase: Phase receiving the outcome.

        Returns:
            The outcome kind recorded for the item.
        """
        label = item.describe()
        try:
            if self.is_installed(item):
                logger.info("%s is already installed", label)
                self.tracker.success(phase, f"{label}: already installed")
                return OutcomeKind.SUCCESS

            installer = self._installer_factory(item.provider)
            result = run_cascade(installer.methods(), item)
        except Exception as e:  # noqa: BLE001 - one item must never abort its siblings
            logger.exception("Unexpected error while installing %s", label)
            self.tracker.error(phase, f"{label}: unexpected error: {e}")
            return OutcomeKind.ERROR

        message = result.message or result.kind.value
        if result.kind == OutcomeKind.SUCCESS:
            logger.info("Installed %s: %s", label, message)
        elif result.kind == OutcomeKind.WARNING:
            logger.warning("%s: %s", label, message)
        else:
            logger.error("Failed to install %s: %s", label, message)

        self.tracker.record(phase, result.kind, detail=f"{label}: {message}")
        return result.kind
