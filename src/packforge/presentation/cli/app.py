"""Command-line front end for loading data and spawning packs."""
from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import List, Sequence

from packforge.config import LOG_LEVEL_ENV, PackforgeConfig, load_config
from packforge.core.rng import RNGError
from packforge.data import DataError, DataSources, DocumentCache, FileFetcher, GameDataLoader
from packforge.domain.formulas import FormulaError
from packforge.services import SpawnDiagnostic, SpawnError, SpawnService

from .render import render_catalog, render_diagnostic, render_pack, render_pack_json

LOG = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="packforge", description="Seeded monster pack generator.")
    parser.add_argument("--data-dir", type=Path, help="directory holding the definition JSON files")
    parser.add_argument("--config", type=Path, help="path to a JSON config file")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    spawn = commands.add_parser("spawn", help="generate one pack")
    spawn.add_argument("--zone", required=True, help="zone id")
    spawn.add_argument("--difficulty", default="normal", help="difficulty id")
    spawn.add_argument("--seed", help="string or integer seed")
    spawn.add_argument("--debug", action="store_true", help="print the spawn diagnostic record")
    spawn.add_argument("--json", action="store_true", help="print the pack as JSON")

    commands.add_parser("validate", help="load and validate every definition file")
    commands.add_parser("list", help="list zones and difficulties")
    return parser


def configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    level = getattr(logging, level_name, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def build_spawn_service(config: PackforgeConfig, diagnostics: List[SpawnDiagnostic]) -> SpawnService:
    """Construct the SpawnService with a file-backed loader."""
    loader = GameDataLoader(
        FileFetcher(),
        cache=DocumentCache(),
        sources=DataSources.from_directory(config.definitions_dir),
    )
    return SpawnService(
        loader,
        diagnostics=diagnostics.append,
        default_tier_probs=config.default_tier_probs,
    )


def parse_seed(raw: str | None, default: str) -> str | int:
    """Integers typed on the command line seed numerically, anything else as a string."""
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return raw


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    configure_logging(args.verbose)
    config = load_config(args.config)
    if args.data_dir is not None:
        config = replace(config, definitions_dir=args.data_dir)

    diagnostics: List[SpawnDiagnostic] = []
    service = build_spawn_service(config, diagnostics)
    try:
        if args.command == "validate":
            data = asyncio.run(service.load_data())
            print(
                f"OK: {len(data.zones)} zones, {len(data.monsters)} monsters, {len(data.tiers)} tiers, "
                f"{len(data.affixes)} affixes, {len(data.difficulties)} difficulties, "
                f"{len(data.loot_tables)} loot tables"
            )
        elif args.command == "list":
            data = asyncio.run(service.load_data())
            print("\n".join(render_catalog(data)))
        else:
            seed = parse_seed(args.seed, config.default_seed)
            pack = asyncio.run(
                service.spawn_pack(args.zone, args.difficulty, seed, debug=args.debug or config.debug)
            )
            print(render_pack_json(pack) if args.json else "\n".join(render_pack(pack)))
            for record in diagnostics:
                print(render_diagnostic(record), file=sys.stderr)
    except (DataError, SpawnError, RNGError, FormulaError) as exc:
        LOG.debug("command %s failed", args.command, exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    return 0
