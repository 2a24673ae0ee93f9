"""Removal engine for the debloat phase.

Removes an item through an ordered strategy that stops at the first
success:

1. the item's package manager, when it supports uninstall and lists it;
2. the installed AppX package;
3. the provisioned AppX package in the system image.

An item that no strategy finds counts as a success: absent satisfies
the goal.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import cast

from winprovision.core.tracker import OutcomeTracker
from winprovision.installers import ChocoInstaller, WingetInstaller, get_installer
from winprovision.models.item import Item, Provider
from winprovision.models.outcome import MethodResult, OutcomeKind
from winprovision.probes import Probe, get_probe
from winprovision.utils import appx

logger = logging.getLogger(__name__)

DEBLOAT_PHASE = "debloat"


class StepStatus(Enum):
    """Result of one removal step."""

    REMOVED = "removed"
    NOT_FOUND = "not_found"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True, slots=True)
class StepResult:
    """Outcome of one removal step.

    Attributes:
        step: Name of the strategy.
        status: What the step achieved.
        message: Diagnostic text.
    """

    step: str
    status: StepStatus
    message: str = ""


class RemovalEngine:
    """Removes items flagged for removal.

    Attributes:
        tracker: Tracker receiving one outcome per item.
        dry_run: If True, only simulate removals.
    """

    def __init__(
        self,
        tracker: OutcomeTracker,
        *,
        dry_run: bool = False,
        probe_factory: Callable[[Provider], Probe] | None = None,
    ) -> None:
        """Initialize the engine.

        Args:
            tracker: Tracker receiving outcomes.
            dry_run: Whether removals are simulated.
            probe_factory: Returns the probe for a provider.
        """
        self.tracker = tracker
        self.dry_run = dry_run
        self._probe_factory = probe_factory or get_probe
        self._uninstallers: dict[Provider, WingetInstaller | ChocoInstaller] = {
            provider: cast(WingetInstaller | ChocoInstaller, get_installer(provider, dry_run=dry_run))
            for provider in Provider
            if provider.supports_uninstall
        }

    def remove(
        self,
        item: Item,
        phase: str = DEBLOAT_PHASE,
        *,
        provider_available: bool = True,
    ) -> OutcomeKind:
        """Remove an item, trying each strategy in order.

        Args:
            item: Item to remove.
            phase: Phase receiving the outcome.
            provider_available: False skips the package manager step.

        Returns:
            The outcome kind recorded for the item.
        """
        label = item.describe()
        steps: list[StepResult] = []
        try:
            for step in (
                lambda: self._remove_with_provider(item, provider_available),
                lambda: self._remove_appx(item),
                lambda: self._remove_provisioned(item),
            ):
                result = step()
                steps.append(result)
                logger.debug("%s %s: %s %s", label, result.step, result.status.value, result.message)
                if result.status == StepStatus.REMOVED:
                    logger.info("Removed %s via %s", label, result.step)
                    self.tracker.success(phase, f"{label}: removed via {result.step}")
                    return OutcomeKind.SUCCESS
        except Exception as e:  # noqa: BLE001 - one item must never abort its siblings
            logger.exception("Unexpected error while removing %s", label)
            self.tracker.error(phase, f"{label}: unexpected error: {e}")
            return OutcomeKind.ERROR

        failures = [s for s in steps if s.status == StepStatus.FAILED]
        if failures:
            reasons = "; ".join(f"{s.step}: {s.message}" for s in failures)
            logger.error("Could not remove %s: %s", label, reasons)
            self.tracker.error(phase, f"{label}: removal failed ({reasons})")
            return OutcomeKind.ERROR

        logger.info("%s not found or already removed", label)
        self.tracker.success(phase, f"{label}: not found or already removed")
        return OutcomeKind.SUCCESS

    def _remove_with_provider(self, item: Item, provider_available: bool) -> StepResult:
        step = item.provider.value
        uninstaller = self._uninstallers.get(item.provider)
        if uninstaller is None or not provider_available:
            return StepResult(step, StepStatus.SKIPPED)

        if not self._probe_factory(item.provider).is_installed(item):
            return StepResult(step, StepStatus.NOT_FOUND)

        return _step_from_method(step, uninstaller.uninstall(item))

    def _remove_appx(self, item: Item) -> StepResult:
        step = "appx"
        package = appx.find_appx_package(item.resolved_identifier)
        if package is None:
            return StepResult(step, StepStatus.NOT_FOUND)

        full_name = str(package.get("PackageFullName") or package.get("Name") or "")
        if self.dry_run:
            return StepResult(step, StepStatus.REMOVED, f"Dry-run: would remove {full_name}")

        result = appx.remove_appx_package(full_name)
        if result.success:
            return StepResult(step, StepStatus.REMOVED)
        logger.warning("AppX removal of %s failed: %s", full_name, result.output)
        return StepResult(step, StepStatus.FAILED, result.output or "Remove-AppxPackage failed")

    def _remove_provisioned(self, item: Item) -> StepResult:
        step = "provisioned appx"
        package = appx.find_provisioned_package(item.resolved_identifier)
        if package is None:
            return StepResult(step, StepStatus.NOT_FOUND)

        package_name = str(package.get("PackageName") or "")
        if self.dry_run:
            return StepResult(step, StepStatus.REMOVED, f"Dry-run: would deprovision {package_name}")

        result = appx.remove_provisioned_package(package_name)
        if result.success:
            return StepResult(step, StepStatus.REMOVED)
        return StepResult(
            step, StepStatus.FAILED, result.output or "Remove-AppxProvisionedPackage failed"
        )


def _step_from_method(step: str, result: MethodResult) -> StepResult:
    if result.success:
        return StepResult(step, StepStatus.REMOVED, result.message)
    return StepResult(step, StepStatus.FAILED, result.message)
