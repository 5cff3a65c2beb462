"""Loads, validates and cross-checks the six definition documents."""
from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Dict, Tuple

from packforge.data import paths
from packforge.data.cache import DocumentCache
from packforge.data.errors import DataReferenceError
from packforge.data.fetchers import DocumentFetcher, FileFetcher
from packforge.data.json_loader import parse_json
from packforge.data.repositories import (
    AffixesRepository,
    DifficultiesRepository,
    LootTablesRepository,
    MonstersRepository,
    TiersRepository,
    ZonesRepository,
)
from packforge.data.repositories.base import RepositoryBase
from packforge.domain.game_data import GameData

LOG = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class DataSources:
    """Locations of the six definition documents."""

    difficulties: str
    zones: str
    monsters: str
    tiers: str
    affixes: str
    loot_tables: str

    @classmethod
    def from_directory(cls, base_path: Path | str | None = None) -> "DataSources":
        """Point every document at ``<table>.json`` inside the definitions directory."""
        definitions_dir = paths.get_definitions_path(base_path)
        return cls(
            **{table: str(definitions_dir / f"{table}.json") for table in _REPOSITORIES}
        )

    def items(self) -> Tuple[Tuple[str, str], ...]:
        return tuple((field.name, getattr(self, field.name)) for field in fields(self))


_REPOSITORIES: Dict[str, type[RepositoryBase]] = {
    "difficulties": DifficultiesRepository,
    "zones": ZonesRepository,
    "monsters": MonstersRepository,
    "tiers": TiersRepository,
    "affixes": AffixesRepository,
    "loot_tables": LootTablesRepository,
}


class GameDataLoader:
    """Fetches all documents concurrently and returns one immutable snapshot.

    Nothing is retried: the first transport, parse or validation failure is
    raised to the caller and nothing from that attempt is cached.
    """

    def __init__(
        self,
        fetcher: DocumentFetcher | None = None,
        *,
        cache: DocumentCache | None = None,
        sources: DataSources | None = None,
    ) -> None:
        self._fetcher = fetcher or FileFetcher()
        self._cache = cache if cache is not None else DocumentCache()
        self._sources = sources or DataSources.from_directory()

    @property
    def cache(self) -> DocumentCache:
        return self._cache

    @property
    def sources(self) -> DataSources:
        return self._sources

    async def load(self) -> GameData:
        return await self._cache.get_or_build_snapshot(self._sources, self._build_snapshot)

    async def _build_snapshot(self) -> GameData:
        items = self._sources.items()
        documents = await asyncio.gather(
            *(self._cache.get_or_fetch(location, self._fetch_callable(location)) for _table, location in items)
        )
        raw_by_table = {table: raw for (table, _location), raw in zip(items, documents)}
        tables = {table: _REPOSITORIES[table]().build(raw_by_table[table]) for table in _REPOSITORIES}
        data = GameData(**tables)
        check_references(data)

        for (_table, location), raw in zip(items, documents):
            self._cache.put_document(location, raw)
        self._cache.put_snapshot(self._sources, data)
        LOG.info(
            "loaded game data: %d zones, %d monsters, %d tiers, %d affixes, %d difficulties, %d loot tables",
            len(data.zones),
            len(data.monsters),
            len(data.tiers),
            len(data.affixes),
            len(data.difficulties),
            len(data.loot_tables),
        )
        return data

    def _fetch_callable(self, location: str):
        async def _fetch() -> object:
            LOG.debug("fetching definition document %s", location)
            text = await self._fetcher.fetch(location)
            return parse_json(text, location)

        return _fetch


def check_references(data: GameData) -> None:
    """Raise DataReferenceError when a zone or difficulty points at an unknown id."""
    monster_ids = {monster.id for monster in data.monsters}
    for index, zone in enumerate(data.zones):
        for position, entry in enumerate(zone.spawn_table):
            if entry.monster_id not in monster_ids:
                raise DataReferenceError(
                    f"'{entry.monster_id}' not found in monsters",
                    document=ZonesRepository.document,
                    record_kind=ZonesRepository.record_kind,
                    index=index,
                    field_path=("spawn_table", position, "monster_id"),
                    value=entry.monster_id,
                )

    affix_ids = {affix.id for affix in data.affixes}
    for index, difficulty in enumerate(data.difficulties):
        for position, affix_id in enumerate(difficulty.affix_pool):
            if affix_id not in affix_ids:
                raise DataReferenceError(
                    f"unknown affix '{affix_id}'",
                    document=DifficultiesRepository.document,
                    record_kind=DifficultiesRepository.record_kind,
                    index=index,
                    field_path=("affix_pool", position),
                    value=affix_id,
                )


def load_game_data(
    base_path: Path | str | None = None,
    *,
    cache: DocumentCache | None = None,
) -> GameData:
    """Synchronously load the definitions directory through a file fetcher."""
    loader = GameDataLoader(FileFetcher(), cache=cache, sources=DataSources.from_directory(base_path))
    return asyncio.run(loader.load())
