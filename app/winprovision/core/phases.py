"""Phase orchestration.

Groups items by provider, makes each provider available once, and feeds
the items to the resolution and removal engines. These functions are
shared by the ``run`` CLI command and by tests.
"""

import logging
import shutil
from collections.abc import Iterable
from pathlib import Path

from winprovision.core.engine import APPS_PHASE, ResolutionEngine
from winprovision.core.ensure import ProviderEnsurer
from winprovision.core.fonts import FONTS_PHASE, FontInstaller
from winprovision.core.paths import get_temp_root
from winprovision.core.removal import DEBLOAT_PHASE, RemovalEngine
from winprovision.core.tracker import OutcomeTracker
from winprovision.installers.scoop import ScoopInstaller
from winprovision.models.config import NerdFontsConfig, ProvisionConfig
from winprovision.models.item import Item, Provider

logger = logging.getLogger(__name__)

CLEANUP_PHASE = "cleanup"

# Order in which enabled phases run
PHASE_ORDER: tuple[str, ...] = (DEBLOAT_PHASE, FONTS_PHASE, APPS_PHASE, CLEANUP_PHASE)


def group_by_provider(items: Iterable[Item]) -> dict[Provider, list[Item]]:
    """Partition items by provider, preserving declaration order.

    Args:
        items: Items to group.

    Returns:
        Mapping of provider to its items, in order of first appearance.
    """
    groups: dict[Provider, list[Item]] = {}
    for item in items:
        groups.setdefault(item.provider, []).append(item)
    return groups


def _record_rejected(rejected: Iterable[str], tracker: OutcomeTracker, phase: str) -> None:
    for message in rejected:
        logger.error("Invalid entry: %s", message)
        tracker.error(phase, message)


def run_install_phase(
    items: Iterable[Item],
    tracker: OutcomeTracker,
    *,
    rejected: Iterable[str] = (),
    engine: ResolutionEngine | None = None,
    ensurer: ProviderEnsurer | None = None,
    phase: str = APPS_PHASE,
) -> None:
    """Install every item flagged for installation.

    Each provider is ensured once; if that fails, its items are recorded
    as skipped and none are attempted.

    Args:
        items: Declared items; items not flagged for install are ignored.
        tracker: Tracker receiving the outcomes.
        rejected: Messages for entries that could not be built into items.
        engine: Resolution engine. Created from the tracker if omitted.
        ensurer: Provider ensurer.
        phase: Phase name.
    """
    tracker.initialize_phase(phase)
    _record_rejected(rejected, tracker, phase)
    engine = engine or ResolutionEngine(tracker)
    ensurer = ensurer or ProviderEnsurer(dry_run=engine.dry_run)

    for provider, group in group_by_provider(i for i in items if i.wants_install).items():
        logger.info("Processing %d %s item(s)", len(group), provider.value)
        if not ensurer.ensure(provider):
            for item in group:
                logger.warning("Skipping %s: %s unavailable", item.key, provider.value)
                tracker.warning(phase, f"{item.describe()}: skipped - provider unavailable")
            continue

        for item in group:
            engine.resolve(item, phase)


def run_removal_phase(
    items: Iterable[Item],
    tracker: OutcomeTracker,
    *,
    rejected: Iterable[str] = (),
    engine: RemovalEngine | None = None,
    ensurer: ProviderEnsurer | None = None,
    phase: str = DEBLOAT_PHASE,
) -> None:
    """Remove every item flagged for removal.

    A missing package manager is never installed just to uninstall; its
    items go straight to the AppX strategies.

    Args:
        items: Declared items; items not flagged for removal are ignored.
        tracker: Tracker receiving the outcomes.
        rejected: Messages for entries that could not be built into items.
        engine: Removal engine. Created from the tracker if omitted.
        ensurer: Provider ensurer, used for availability checks only.
        phase: Phase name.
    """
    tracker.initialize_phase(phase)
    _record_rejected(rejected, tracker, phase)
    engine = engine or RemovalEngine(tracker)
    ensurer = ensurer or ProviderEnsurer(dry_run=engine.dry_run)

    for provider, group in group_by_provider(i for i in items if i.wants_removal).items():
        available = ensurer.is_available(provider)
        if not available:
            logger.info("%s unavailable; removing %d item(s) via AppX only", provider.value, len(group))
        for item in group:
            engine.remove(item, phase, provider_available=available)


def run_font_phase(
    font_config: NerdFontsConfig | None,
    tracker: OutcomeTracker,
    *,
    installer: FontInstaller | None = None,
    phase: str = FONTS_PHASE,
) -> None:
    """Install the requested Nerd Fonts.

    Args:
        font_config: Nerd Fonts section; None or an empty list does nothing.
        tracker: Tracker receiving the outcomes.
        installer: Font installer. Created from the tracker if omitted.
        phase: Phase name.
    """
    tracker.initialize_phase(phase)
    if font_config is None or not font_config.install or not font_config.fonts:
        logger.info("No fonts requested")
        return

    installer = installer or FontInstaller(tracker, repo=font_config.repo)
    try:
        installer.install(font_config.fonts, phase)
    except Exception as e:  # noqa: BLE001 - a phase failure must not abort the run
        logger.exception("Font phase failed")
        tracker.error(phase, f"Font installation failed: {e}")


def run_cleanup_phase(
    tracker: OutcomeTracker,
    *,
    temp_root: Path | None = None,
    scoop: ScoopInstaller | None = None,
    ensurer: ProviderEnsurer | None = None,
    dry_run: bool = False,
    phase: str = CLEANUP_PHASE,
) -> None:
    """Remove leftovers of earlier runs.

    Deletes stale work directories under the temp root and clears the
    Scoop download cache when Scoop is installed.

    Args:
        tracker: Tracker receiving the outcomes.
        temp_root: Root of per-item work directories.
        scoop: Scoop installer used to clear its cache.
        ensurer: Provider ensurer, used for availability checks only.
        dry_run: If True, only report what would be removed.
        phase: Phase name.
    """
    tracker.initialize_phase(phase)
    root = temp_root or get_temp_root()
    ensurer = ensurer or ProviderEnsurer(dry_run=dry_run)

    if root.is_dir():
        for path in sorted(root.iterdir()):
            if dry_run:
                tracker.success(phase, f"Dry-run: would remove {path}")
                continue
            try:
                if path.is_dir():
                    shutil.rmtree(path)
                else:
                    path.unlink()
            except OSError as e:
                logger.warning("Cannot remove %s: %s", path, e)
                tracker.warning(phase, f"Could not remove {path}: {e}")
            else:
                tracker.success(phase, f"Removed {path}")

    if ensurer.is_available(Provider.SCOOP):
        result = (scoop or ScoopInstaller(dry_run=dry_run)).clear_cache()
        tracker.record(phase, result.kind, detail=f"scoop cache: {result.message}")


def run_provisioning(
    config: ProvisionConfig,
    tracker: OutcomeTracker,
    *,
    dry_run: bool = False,
    skip: Iterable[str] = (),
    temp_root: Path | None = None,
) -> None:
    """Run every enabled phase in order: debloat, fonts, apps, cleanup.

    Args:
        config: Validated configuration.
        tracker: Tracker receiving all outcomes.
        dry_run: If True, simulate mutating commands.
        skip: Phase names to skip in addition to disabled ones.
        temp_root: Root of per-item work directories.
    """
    skipped = set(skip)
    root = temp_root or get_temp_root()
    ensurer = ProviderEnsurer(dry_run=dry_run)
    enabled = {
        DEBLOAT_PHASE: config.phases.debloat,
        FONTS_PHASE: config.phases.fonts,
        APPS_PHASE: config.phases.apps,
        CLEANUP_PHASE: config.phases.cleanup,
    }

    for phase in PHASE_ORDER:
        if not enabled[phase] or phase in skipped:
            logger.info("Phase %s skipped", phase)
            continue

        logger.info("Starting phase %s", phase)
        try:
            if phase == DEBLOAT_PHASE:
                run_removal_phase(
                    config.removal_items(),
                    tracker,
                    rejected=config.removal_errors(),
                    engine=RemovalEngine(tracker, dry_run=dry_run),
                    ensurer=ensurer,
                )
            elif phase == FONTS_PHASE:
                fonts = config.nerd_fonts
                run_font_phase(
                    fonts,
                    tracker,
                    installer=FontInstaller(
                        tracker,
                        ensurer=ensurer,
                        repo=fonts.repo if fonts else NerdFontsConfig().repo,
                        dry_run=dry_run,
                        temp_root=root,
                    ),
                )
            elif phase == APPS_PHASE:
                run_install_phase(
                    config.install_items(),
                    tracker,
                    rejected=config.install_errors(),
                    engine=ResolutionEngine(tracker, dry_run=dry_run, temp_root=root),
                    ensurer=ensurer,
                )
            else:
                run_cleanup_phase(tracker, temp_root=root, ensurer=ensurer, dry_run=dry_run)
        except Exception as e:  # noqa: BLE001 - later phases still run
            logger.exception("Phase %s failed", phase)
            tracker.error(phase, f"Phase failed: {e}")
