"""Nerd Fonts installation cascade.

Tries, in order: a Chocolatey batch install, a Scoop batch install from
the nerd-fonts bucket, and a direct download of each font's zip from the
latest GitHub release. The cascade stops as soon as every requested font
is present; a final reconciliation records one outcome per font.
"""

import logging
import re
import shutil
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from winprovision.core.ensure import ProviderEnsurer
from winprovision.core.paths import get_fonts_dir
from winprovision.core.tracker import OutcomeTracker
from winprovision.installers.choco import ChocoInstaller
from winprovision.installers.manual import ManualInstaller
from winprovision.installers.scoop import ScoopInstaller
from winprovision.models.item import Provider
from winprovision.models.outcome import MethodResult
from winprovision.utils.archive import ArchiveError, extract_zip
from winprovision.utils.download import DownloadError, download_file
from winprovision.utils.shell import run_command

logger = logging.getLogger(__name__)

FONTS_PHASE = "fonts"

FONT_REGISTRY_KEY = r"HKLM\SOFTWARE\Microsoft\Windows NT\CurrentVersion\Fonts"
FONT_EXTENSIONS = (".ttf", ".otf")
NERD_FONTS_BUCKET = "nerd-fonts"
NERD_FONTS_REPO = "ryanoasis/nerd-fonts"

# "    Name    REG_SZ    value" lines printed by reg query
_REG_VALUE_LINE = re.compile(r"^\s+(.+?)\s{2,}REG_\w+\s{2,}(.*?)\s*$")


def normalize_font_name(name: str) -> str:
    """Strip all whitespace and case-fold a font name for fuzzy matching."""
    return "".join(name.split()).casefold()


def choco_font_package(font: str) -> str:
    """Return the Chocolatey package id of a Nerd Font."""
    return f"nerd-fonts-{font.lower()}"


def scoop_font_app(font: str) -> str:
    """Return the Scoop app name of a Nerd Font."""
    return f"{NERD_FONTS_BUCKET}/{font}-NF"


def release_font_url(font: str, repo: str = NERD_FONTS_REPO) -> str:
    """Return the download URL of a font zip in the latest release."""
    return f"https://github.com/{repo}/releases/latest/download/{font}.zip"


class FontDetector:
    """Fuzzy detection of installed fonts.

    A font counts as installed when its whitespace-stripped name is a
    substring of a file in the fonts directory, or of a font registry
    entry's name or value.
    """

    def __init__(self, fonts_dir: Path | None = None) -> None:
        """Initialize the detector.

        Args:
            fonts_dir: Font directory to inspect. Defaults to %WINDIR%/Fonts.
        """
        self.fonts_dir = fonts_dir or get_fonts_dir()

    def font_files(self) -> list[str]:
        """Return normalized names of files in the fonts directory."""
        try:
            return [normalize_font_name(p.name) for p in self.fonts_dir.iterdir() if p.is_file()]
        except OSError as e:
            logger.debug("Cannot list fonts directory %s: %s", self.fonts_dir, e)
            return []

    def registry_entries(self) -> list[tuple[str, str]]:
        """Return (name, value) pairs from the font registry."""
        try:
            result = run_command(["reg", "query", FONT_REGISTRY_KEY], timeout=30.0)
        except (OSError, subprocess.TimeoutExpired) as e:
            logger.debug("Cannot query font registry: %s", e)
            return []
        if not result.success:
            return []
        return parse_registry_values(result.stdout)

    def is_installed(self, font: str) -> bool:
        """Check whether a font is installed.

        Args:
            font: Requested font name.

        Returns:
            True if a file or registry entry matches.
        """
        wanted = normalize_font_name(font)
        if any(wanted in name for name in self.font_files()):
            return True
        return any(
            wanted in normalize_font_name(name) or wanted in normalize_font_name(value)
            for name, value in self.registry_entries()
        )


def parse_registry_values(output: str) -> list[tuple[str, str]]:
    """Parse ``reg query`` output into (name, value) pairs."""
    entries: list[tuple[str, str]] = []
    for line in output.splitlines():
        match = _REG_VALUE_LINE.match(line)
        if match:
            entries.append((match.group(1), match.group(2)))
    return entries


@dataclass(frozen=True, slots=True)
class FontMethod:
    """One step of the font cascade.

    Attributes:
        name: Label used in logs.
        available: Returns True when the method can run.
        run: Installs the given fonts.
    """

    name: str
    available: Callable[[], bool]
    run: Callable[[list[str]], MethodResult]


class FontInstaller:
    """Installs Nerd Fonts through the font cascade."""

    def __init__(
        self,
        tracker: OutcomeTracker,
        *,
        ensurer: ProviderEnsurer | None = None,
        detector: FontDetector | None = None,
        repo: str = NERD_FONTS_REPO,
        dry_run: bool = False,
        temp_root: Path | None = None,
    ) -> None:
        """Initialize the font installer.

        Args:
            tracker: Tracker receiving one outcome per font.
            ensurer: Provider ensurer for Chocolatey and Scoop.
            detector: Font detector.
            repo: GitHub repository publishing the font zips.
            dry_run: If True, only simulate installation.
            temp_root: Parent directory for temporary downloads.
        """
        self.tracker = tracker
        self.dry_run = dry_run
        self.repo = repo
        self.ensurer = ensurer or ProviderEnsurer(dry_run=dry_run)
        self.detector = detector or FontDetector()
        self._choco = ChocoInstaller(dry_run=dry_run)
        self._scoop = ScoopInstaller(dry_run=dry_run)
        self._manual = ManualInstaller(dry_run=dry_run, temp_root=temp_root)

    def methods(self) -> list[FontMethod]:
        """Return the ordered font installation methods."""
        return [
            FontMethod("choco", lambda: self.ensurer.ensure(Provider.CHOCO), self.install_with_choco),
            FontMethod("scoop", lambda: self.ensurer.ensure(Provider.SCOOP), self.install_with_scoop),
            FontMethod("github", lambda: True, self.install_from_github),
        ]

    def missing(self, fonts: list[str]) -> list[str]:
        """Return the fonts that are not installed."""
        return [font for font in fonts if not self.detector.is_installed(font)]

    def install(self, fonts: list[str], phase: str = FONTS_PHASE) -> None:
        """Install fonts and record one outcome per font.

        Args:
            fonts: Requested font names.
            phase: Phase receiving the outcomes.
        """
        pending = self.missing(fonts)
        for font in fonts:
            if font not in pending:
                self.tracker.success(phase, f"{font}: already installed")
        if not pending:
            return

        if self.dry_run:
            for font in pending:
                self.tracker.success(phase, f"{font}: Dry-run: would install")
            return

        targets = list(pending)
        for method in self.methods():
            if not pending:
                break
            if not method.available():
                logger.info("Skipping %s font install: provider unavailable", method.name)
                continue

            logger.info("Installing fonts with %s: %s", method.name, ", ".join(pending))
            try:
                result = method.run(pending)
            except Exception as e:  # noqa: BLE001 - fall through to the next method
                logger.exception("%s font install raised", method.name)
                result = MethodResult.error(str(e))
            if result.failed:
                logger.warning("%s font install failed: %s", method.name, result.message)

            pending = self.missing(pending)

        for font in targets:
            if font in pending:
                logger.error("Font %s is still missing after all methods", font)
                self.tracker.error(phase, f"{font}: not installed by any method")
            else:
                self.tracker.success(phase, f"{font}: installed")

    def install_with_choco(self, fonts: list[str]) -> MethodResult:
        """Install fonts as one Chocolatey batch."""
        return self._choco.install_many([choco_font_package(font) for font in fonts])

    def install_with_scoop(self, fonts: list[str]) -> MethodResult:
        """Install fonts as one Scoop batch from the nerd-fonts bucket."""
        self._scoop.add_bucket(NERD_FONTS_BUCKET)
        return self._scoop.install_many([scoop_font_app(font) for font in fonts])

    def install_from_github(self, fonts: list[str]) -> MethodResult:
        """Download each font's zip and copy its font files."""
        failures: list[str] = []
        for font in fonts:
            result = self._install_font_zip(font)
            if result.failed:
                logger.warning("GitHub install of %s failed: %s", font, result.message)
                failures.append(font)
        if failures:
            return MethodResult.error(f"Failed to install {', '.join(failures)}")
        return MethodResult.ok("Fonts copied")

    def _install_font_zip(self, font: str) -> MethodResult:
        with self._manual.work_dir("font-") as work:
            work_dir = Path(work)
            archive = work_dir / f"{font}.zip"
            try:
                download_file(release_font_url(font, self.repo), archive)
                extract_zip(archive, work_dir / "extracted")
            except (DownloadError, ArchiveError) as e:
                return MethodResult.error(str(e))
            return self.copy_fonts(work_dir / "extracted")

    def copy_fonts(self, source_dir: Path) -> MethodResult:
        """Copy and register every font file under a directory.

        Files already present in the fonts directory are skipped.

        Args:
            source_dir: Directory containing extracted font files.

        Returns:
            MethodResult for the copy.
        """
        fonts_dir = self.detector.fonts_dir
        files = sorted(p for p in source_dir.rglob("*") if p.suffix.lower() in FONT_EXTENSIONS)
        if not files:
            return MethodResult.error(f"No font files found in {source_dir.name}")

        copied = 0
        for path in files:
            target = fonts_dir / path.name
            if target.exists():
                logger.debug("Font file %s already installed", path.name)
                continue
            try:
                shutil.copy2(path, target)
            except OSError as e:
                return MethodResult.error(f"Cannot copy {path.name}: {e}")
            self._register_font(path)
            copied += 1
        return MethodResult.ok(f"Copied {copied} font file(s)")

    def _register_font(self, path: Path) -> None:
        kind = "OpenType" if path.suffix.lower() == ".otf" else "TrueType"
        result = run_command(
            [
                "reg",
                "add",
                FONT_REGISTRY_KEY,
                "/v",
                f"{path.stem} ({kind})",
                "/t",
                "REG_SZ",
                "/d",
                path.name,
                "/f",
            ],
            timeout=30.0,
        )
        if not result.success:
            logger.warning("Could not register font %s: %s", path.name, result.output)
