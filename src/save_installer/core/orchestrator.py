"""
Sweep Orchestrator

Coordinates save discovery and relocation for every supported game and
exposes the three lifecycle entry points a host calls: startup, mod
installed and deployment completed.

Sweeps hold no state between invocations and may overlap; the destination
policy is "last write wins".

Author: Save Game Installer Project
License: MIT
"""

import asyncio
import os
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Dict, List, Optional, Union

from .. import __app_name__, __version__
from ..config.schema import Config, NotificationLevel
from ..exceptions import DestinationUnavailableError
from ..notifications.notifier import LoggingNotifier, Notifier
from ..relocation.relocator import Relocator
from ..utils.diagnostics import DiagnosticsLog
from ..utils.file_ops import ensure_directory, list_entries, path_exists
from ..utils.logger import get_logger
from .discovery import SaveDiscovery
from .paths import PathResolver
from .registry import GAME_IDS, display_label, is_supported
from .report import SweepReport

logger = get_logger(__name__)

INSTALL_PATH_KEYS = ("installationPath", "installPath")


@dataclass
class SweepSummary:
    """Moved counts per game for a multi-game sweep."""
    moved: Dict[str, int] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return sum(self.moved.values())

    def add_report_errors(self, game_id: str, report: SweepReport):
        for line in report.errors:
            self.errors.append(f"{game_id}: {line.strip()}")


@dataclass
class TriggerOutcome:
    """What happened when a lifecycle entry point ran."""
    trigger: str
    moved: int = 0
    per_game: Dict[str, int] = field(default_factory=dict)
    errors: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and not self.errors


def install_path_from_info(info: Any) -> Optional[str]:
    """
    Extract the installation folder from a mod-installed event payload.

    Accepts mappings or objects carrying ``installationPath`` or
    ``installPath``; anything that is not a non-empty string is ignored.
    """
    if info is None:
        return None

    for key in INSTALL_PATH_KEYS:
        if isinstance(info, dict):
            value = info.get(key)
        else:
            value = getattr(info, key, None)
        if isinstance(value, str) and value:
            return value
    return None


class SweepOrchestrator:
    """
    Runs save sweeps for the supported games.

    All behaviour switches (cut vs copy, diagnostics, delays) come from the
    configuration object passed in; nothing is read from the environment.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        resolver: Optional[PathResolver] = None,
        discovery: Optional[SaveDiscovery] = None,
        relocator: Optional[Relocator] = None,
        notifier: Optional[Notifier] = None,
        diagnostics: Optional[DiagnosticsLog] = None
    ):
        """
        Initialize orchestrator.

        Args:
            config: Application configuration
            resolver: Staging/destination path resolver
            discovery: Save discovery engine
            relocator: File relocation engine
            notifier: User-visible notification sink
            diagnostics: Run-log sink
        """
        self.config = config or Config()
        self.resolver = resolver or PathResolver(config=self.config.paths)
        self.discovery = discovery or SaveDiscovery()
        self.relocator = relocator or Relocator()
        self.notifier = notifier or LoggingNotifier(self.config.notifications)
        self.diagnostics = diagnostics or DiagnosticsLog(
            self.config.diagnostics,
            self.resolver.documents_root
        )

        logger.debug("SweepOrchestrator initialized")

    @property
    def cut(self) -> bool:
        return self.config.relocation.move_instead_of_copy

    @property
    def debug(self) -> bool:
        return self.config.diagnostics.enabled

    # ---- sinks ---------------------------------------------------------------

    def _notify(self, kind: NotificationLevel, message: str, display_ms: Optional[int] = None):
        try:
            self.notifier.notify(kind.value, message, display_ms)
        except Exception as e:
            logger.debug(f"Notifier raised: {e}")

    def _toast(self, message: str):
        """Diagnostic notification, only while diagnosing."""
        if self.debug:
            self._notify(NotificationLevel.INFO, message, self.config.notifications.debug_display_ms)

    async def _write_report(self, lines) -> Optional[str]:
        if not self.debug:
            return None
        try:
            return await asyncio.to_thread(self.diagnostics.write, list(lines))
        except Exception as e:
            logger.debug(f"Run-log write failed: {e}")
            return None

    def announce(self):
        """Tell the user the installer is active (diagnostics only)."""
        self._toast(f"{__app_name__} v{__version__} loaded ({len(GAME_IDS)} games)")

    # ---- per mod / per game --------------------------------------------------

    async def process_mod_folder(self, game_id: str, mod_root: str, report: SweepReport) -> int:
        """
        Discover and relocate the saves of one mod folder.

        Args:
            game_id: Game identifier
            mod_root: Extracted mod folder
            report: Sweep report to append to

        Returns:
            Number of files placed in the save directory

        Raises:
            DestinationUnavailableError: If the save directory cannot be created
        """
        report.append(f"Scanning mod: {mod_root}")
        files = await asyncio.to_thread(self.discovery.discover, game_id, mod_root, report)
        report.append(f"  -> Found {len(files)} candidate file(s)")
        if not files:
            return 0

        destination = self.resolver.save_destination(game_id)
        if not destination:
            report.append(f"  !! No saves folder for gid={game_id}")
            return 0

        try:
            await asyncio.to_thread(ensure_directory, destination)
        except OSError as e:
            raise DestinationUnavailableError(game_id, destination, e) from e

        result = await self.relocator.relocate_async(files, destination, self.cut)

        verb = "MOVE" if self.cut else "COPY"
        for source, target in result.relocated:
            report.append(f"  {verb} \"{source}\" -> \"{target}\"")
        for source in result.skipped:
            report.append(f"  = Already in place: \"{source}\"")
        for failure in result.errors:
            report.error(f"  !! Failed {os.path.basename(failure.source)} ({failure.stage}): {failure.message}")

        report.moved += result.moved

        if result.moved > 0:
            self._notify(
                NotificationLevel.SUCCESS,
                f"Moved {result.moved} save file(s) from {os.path.basename(mod_root)} "
                f"→ {display_label(game_id)} Saves"
            )
            logger.info(f"{display_label(game_id)}: {result.moved} save file(s) from {mod_root}")

        return result.moved

    def _destination_failed(self, error: DestinationUnavailableError, report: SweepReport):
        report.error(f"  !! {error}")
        logger.error(str(error))
        self._notify(NotificationLevel.ERROR, f"Cannot access Saves for {display_label(error.game_id)}")

    async def sweep_game(self, game_id: str, reason: str = "manual") -> int:
        """
        Sweep every mod folder in every staging root of one game.

        Missing staging roots are skipped. If the save directory cannot be
        created, the user is told once and the rest of this game's sweep is
        abandoned.

        Args:
            game_id: Game identifier
            reason: Trigger name, for the report

        Returns:
            Number of files moved
        """
        return (await self._sweep_game(game_id, reason)).moved

    async def _sweep_game(self, game_id: str, reason: str) -> SweepReport:
        if not is_supported(game_id):
            return SweepReport()

        report = SweepReport(f"==== Sweep gid={game_id} [{reason}] ====")
        report.append("Candidates base(s):")
        stages = self.resolver.staging_roots(game_id)
        for stage in stages:
            report.append(f"  * {stage}")

        total = 0
        try:
            for stage in stages:
                if not await asyncio.to_thread(path_exists, stage):
                    report.append(f"  - Missing stage: {stage}")
                    continue

                entries = await asyncio.to_thread(list_entries, stage)
                report.append(f" Stage {stage} -> {len(entries)} entries")
                for entry in entries:
                    if not entry.is_dir(follow_symlinks=False):
                        continue
                    total += await self.process_mod_folder(game_id, entry.path, report)
        except DestinationUnavailableError as e:
            self._destination_failed(e, report)

        report.append(f"Total moved (gid={game_id}): {total}")
        await self._write_report(report)

        if total == 0:
            self._toast(f"Scan[{game_id}]: no saves detected (Data or root)")
        return report

    async def sweep_all(self, reason: str = "manual") -> SweepSummary:
        """
        Sweep every supported game.

        Games are swept one after another; a failure in one is recorded and
        the remaining games still run. Per-file failures end up in
        ``errors`` as well.
        """
        summary = SweepSummary()
        for game_id in GAME_IDS:
            try:
                report = await self._sweep_game(game_id, reason)
                summary.moved[game_id] = report.moved
                summary.add_report_errors(game_id, report)
            except Exception as e:
                logger.exception(f"Sweep failed for {game_id} [{reason}]")
                summary.moved[game_id] = 0
                summary.errors.append(f"{game_id}: {e}")
                await self._write_report([f"!! {reason} sweep error (gid={game_id}): {e}"])
        return summary

    async def handle_install_event(self, game_id: str, install_path: Optional[str] = None) -> int:
        """
        React to a freshly installed mod.

        With an existing install path the mod folder is processed directly,
        and once more after ``sweep.install_retry_delay`` if nothing was
        moved, since the host may still be placing files. Without one, the
        whole game is swept.

        Args:
            game_id: Game identifier
            install_path: Folder the mod was installed to, if known

        Returns:
            Number of files moved
        """
        return (await self._handle_install_event(game_id, install_path)).moved

    async def _handle_install_event(self, game_id: str, install_path: Optional[str]) -> SweepReport:
        if not is_supported(game_id):
            return SweepReport()

        report = SweepReport(f"==== did-install-mod gid={game_id} ====")

        mod_root = install_path
        if mod_root and not await asyncio.to_thread(path_exists, mod_root):
            report.append(f"Install path does not exist: {mod_root}")
            mod_root = None

        if not mod_root:
            report.append(f"No install path; fallback sweep {game_id}")
            await self._write_report(report)
            return await self._sweep_game(game_id, "install-fallback")

        report.append(f"Using install path: {mod_root}")
        moved = 0
        try:
            moved = await self.process_mod_folder(game_id, mod_root, report)
            report.append(f"Moved via install path: {moved}")

            if moved == 0:
                await asyncio.sleep(self.config.sweep.install_retry_delay)
                moved = await self.process_mod_folder(game_id, mod_root, report)
                report.append(f"Retry moved: {moved}")
        except DestinationUnavailableError as e:
            self._destination_failed(e, report)

        await self._write_report(report)
        return report

    # ---- host entry points ---------------------------------------------------

    async def _run_trigger(
        self,
        trigger: str,
        handler: Callable[[], Awaitable[Union[int, SweepSummary]]]
    ) -> TriggerOutcome:
        outcome = TriggerOutcome(trigger=trigger)
        try:
            result = await handler()
        except Exception as e:
            logger.exception(f"{trigger} handler failed")
            outcome.error = str(e)
            await self._write_report([f"!! {trigger} handler error: {e}"])
            return outcome

        if isinstance(result, SweepSummary):
            outcome.moved = result.total
            outcome.per_game = dict(result.moved)
            outcome.errors = list(result.errors)
        else:
            outcome.moved = result
        return outcome

    async def run_startup_sweep(self) -> TriggerOutcome:
        """Sweep all games shortly after start-up."""
        async def startup():
            await asyncio.sleep(self.config.sweep.startup_delay)
            return await self.sweep_all("startup")

        return await self._run_trigger("startup", startup)

    async def on_mod_installed(self, game_id: str, info: Any = None) -> TriggerOutcome:
        """Handle a mod-installed event; other games are ignored."""
        if not is_supported(game_id):
            return TriggerOutcome(trigger="did-install-mod")

        async def installed():
            report = await self._handle_install_event(game_id, install_path_from_info(info))
            summary = SweepSummary(moved={game_id: report.moved})
            summary.add_report_errors(game_id, report)
            return summary

        return await self._run_trigger("did-install-mod", installed)

    async def on_deploy_completed(self) -> TriggerOutcome:
        """Sweep all games after a deployment."""
        return await self._run_trigger("did-deploy", lambda: self.sweep_all("deploy"))
