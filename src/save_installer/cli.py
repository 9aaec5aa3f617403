"""
Command Line Interface

Runs the lifecycle entry points by hand, or keeps running and produces them
from the filesystem (``watch``).

Author: Save Game Installer Project
License: MIT
"""

import argparse
import asyncio
import sys
import time
from typing import List, Optional

from . import __version__
from .config.config_loader import ConfigLoader
from .config.schema import Config
from .core.orchestrator import SweepOrchestrator, TriggerOutcome
from .core.registry import GAMES, GAME_IDS
from .monitoring.watcher import StagingWatcher
from .scheduler.task_scheduler import TaskScheduler
from .utils.logger import get_logger, setup_logging_from_config

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="save-installer",
        description="Move game saves shipped inside mods into the game's save folder."
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("-c", "--config", help="Path to config.yaml")
    parser.add_argument("--debug", action="store_true", help="Write the diagnostics run-log")
    parser.add_argument("--copy", action="store_true", help="Copy saves instead of moving them")
    parser.add_argument("--log-level", help="Override the logging level")

    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("games", help="List supported games")

    sweep = sub.add_parser("sweep", help="Sweep staging folders now")
    sweep.add_argument("--game", choices=GAME_IDS, help="Only sweep this game")

    install = sub.add_parser("install", help="Handle a freshly installed mod")
    install.add_argument("game", help="Game identifier")
    install.add_argument("path", nargs="?", help="Folder the mod was installed to")

    sub.add_parser("deploy", help="Sweep all games as after a deployment")
    sub.add_parser("watch", help="Watch staging folders and sweep as mods appear")

    return parser


def load_settings(args: argparse.Namespace) -> Config:
    config = ConfigLoader(args.config).load()
    if args.debug:
        config.diagnostics.enabled = True
    if args.copy:
        config.relocation.move_instead_of_copy = False
    if args.log_level:
        config.app.log_level = args.log_level.upper()
    return config


def print_outcome(outcome: TriggerOutcome) -> int:
    for game_id, moved in outcome.per_game.items():
        if moved:
            print(f"{GAMES[game_id].label}: {moved} file(s)")
    print(f"{outcome.trigger}: moved {outcome.moved} file(s)")
    for error in outcome.errors:
        print(f"error: {error}", file=sys.stderr)
    if outcome.error:
        print(f"error: {outcome.error}", file=sys.stderr)
    return 0 if outcome.ok else 1


def list_games(orchestrator: SweepOrchestrator) -> int:
    for game_id in GAME_IDS:
        profile = GAMES[game_id]
        cosaves = ", ".join(profile.cosave_extensions) or "-"
        print(f"{game_id:<10} {profile.label:<28} saves: {', '.join(profile.save_extensions)}  co-saves: {cosaves}")
        print(f"{'':<10} -> {orchestrator.resolver.save_destination(game_id)}")
    return 0


def watch(config: Config, orchestrator: SweepOrchestrator) -> int:
    """Run until interrupted, sweeping on start-up, new mods and schedule."""

    def on_mod_ready(game_id: str, mod_folder: str):
        outcome = asyncio.run(orchestrator.on_mod_installed(game_id, {"installationPath": mod_folder}))
        logger.info(f"Install sweep for {mod_folder}: moved {outcome.moved}")

    def periodic_sweep():
        outcome = asyncio.run(orchestrator.on_deploy_completed())
        logger.info(f"Periodic sweep: moved {outcome.moved}")

    def startup_sweep():
        outcome = asyncio.run(orchestrator.run_startup_sweep())
        logger.info(f"Startup sweep: moved {outcome.moved}")

    scheduler = TaskScheduler(config)
    scheduler.add_startup_job(startup_sweep)
    scheduler.add_periodic_sweep_job(periodic_sweep)

    watcher = StagingWatcher(on_mod_ready, debounce_seconds=config.watch.debounce_seconds)
    if config.watch.enabled:
        for game_id in GAME_IDS:
            for stage in orchestrator.resolver.staging_roots(game_id):
                watcher.add_staging_root(game_id, stage)

    orchestrator.announce()
    scheduler.start()
    watcher.start()
    try:
        while True:
            watcher.process_pending()
            time.sleep(config.watch.poll_interval)
    except KeyboardInterrupt:
        logger.info("Interrupted, shutting down")
    finally:
        watcher.stop()
        scheduler.stop()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_settings(args)
        setup_logging_from_config(config.app)
    except ValueError as e:
        print(f"error: invalid configuration: {e}", file=sys.stderr)
        return 2

    orchestrator = SweepOrchestrator(config)

    if args.command == "games":
        return list_games(orchestrator)

    if args.command == "sweep":
        if args.game:
            moved = asyncio.run(orchestrator.sweep_game(args.game, "manual"))
            print(f"{GAMES[args.game].label}: moved {moved} file(s)")
            return 0
        return print_outcome(asyncio.run(orchestrator.run_startup_sweep()))

    if args.command == "install":
        info = {"installationPath": args.path} if args.path else None
        return print_outcome(asyncio.run(orchestrator.on_mod_installed(args.game, info)))

    if args.command == "deploy":
        return print_outcome(asyncio.run(orchestrator.on_deploy_completed()))

    if args.command == "watch":
        return watch(config, orchestrator)

    return 1
