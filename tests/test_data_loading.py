import asyncio
import dataclasses
import io
import json
import urllib.error
import urllib.request
from pathlib import Path

import pytest

from packforge.data import (
    DataLoadError,
    DataReferenceError,
    DataSources,
    DataValidationError,
    DocumentCache,
    FileFetcher,
    GameDataLoader,
    MappingFetcher,
    UrlFetcher,
    load_game_data,
)
from packforge.data.repositories import (
    DifficultiesRepository,
    LootTablesRepository,
    TiersRepository,
    ZonesRepository,
)
from tests.helpers.definitions import (
    build_game_data,
    mapping_fetcher,
    mapping_sources,
    minimal_documents,
    tier,
    write_definitions,
)


def test_minimal_documents_load_from_directory(tmp_path: Path) -> None:
    definitions_dir = write_definitions(tmp_path / "definitions", minimal_documents())

    data = load_game_data(definitions_dir)

    assert [zone.id for zone in data.zones] == ["z1"]
    zone = data.zone_by_id("z1")
    assert zone is not None
    assert zone.level_range["normal"] == (5, 5)
    assert zone.spawn_table[0].monster_id == "m1"
    assert data.monster_by_id("m1").base_hp == 10
    assert data.loot_table_by_id("elite_creep").rolls == 2


def test_lookups_return_none_for_unknown_ids() -> None:
    data = build_game_data()

    assert data.zone_by_id("nope") is None
    assert data.monster_by_id("nope") is None
    assert data.tier_by_id("nope") is None
    assert data.affix_by_id("nope") is None
    assert data.difficulty_by_id("nope") is None
    assert data.loot_table_by_id("nope") is None


def test_snapshot_is_immutable() -> None:
    data = build_game_data()

    with pytest.raises(dataclasses.FrozenInstanceError):
        data.zones = ()  # type: ignore[misc]
    with pytest.raises(TypeError):
        data.zones[0].level_range["normal"] = (1, 1)  # type: ignore[index]


def test_unknown_monster_reference_reports_exact_path() -> None:
    documents = minimal_documents()
    documents["zones"][0]["spawn_table"].append({"monster_id": "ghost", "weight": 1})

    with pytest.raises(DataReferenceError) as excinfo:
        build_game_data(documents)

    error = excinfo.value
    assert error.path == "[zones.json] zones[0].spawn_table[1].monster_id"
    assert error.document == "zones.json"
    assert error.record_kind == "zones"
    assert error.index == 0
    assert error.field_path == ("spawn_table", 1, "monster_id")
    assert "'ghost' not found in monsters" in str(error)
    assert error.has_value is True
    assert error.value == "ghost"


def test_unknown_affix_in_difficulty_pool() -> None:
    documents = minimal_documents()
    documents["difficulties"][0]["affix_pool"] = ["missing_affix"]

    with pytest.raises(DataReferenceError) as excinfo:
        build_game_data(documents)

    assert excinfo.value.path == "[difficulties.json] difficulties[0].affix_pool[0]"
    assert "unknown affix 'missing_affix'" in str(excinfo.value)
    assert excinfo.value.value == "missing_affix"


def test_missing_field_reports_path() -> None:
    documents = minimal_documents()
    del documents["difficulties"][0]["hp_mult"]

    with pytest.raises(DataValidationError) as excinfo:
        build_game_data(documents)

    assert excinfo.value.path == "[difficulties.json] difficulties[0].hp_mult"
    assert "missing key 'hp_mult'" in str(excinfo.value)


def test_level_range_min_greater_than_max() -> None:
    documents = minimal_documents()
    documents["zones"][0]["level_range"]["hell"] = [9, 3]

    with pytest.raises(DataValidationError) as excinfo:
        build_game_data(documents)

    assert excinfo.value.path == "[zones.json] zones[0].level_range.hell"
    assert "invalid: 9 > 3" in str(excinfo.value)


def test_level_range_must_be_integer_pair() -> None:
    documents = minimal_documents()
    documents["zones"][0]["level_range"]["normal"] = [1]

    with pytest.raises(DataValidationError) as excinfo:
        build_game_data(documents)

    assert excinfo.value.field_path == ("level_range", "normal")
    assert excinfo.value.value == [1]
    assert "got: [1]" in str(excinfo.value)


def test_empty_spawn_table_rejected() -> None:
    documents = minimal_documents()
    documents["zones"][0]["spawn_table"] = []

    with pytest.raises(DataValidationError) as excinfo:
        build_game_data(documents)

    assert excinfo.value.path == "[zones.json] zones[0].spawn_table"


def test_negative_spawn_weight_rejected() -> None:
    documents = minimal_documents()
    documents["zones"][0]["spawn_table"][0]["weight"] = -1

    with pytest.raises(DataValidationError) as excinfo:
        build_game_data(documents)

    assert excinfo.value.path == "[zones.json] zones[0].spawn_table[0].weight"


def test_boolean_is_not_a_number() -> None:
    documents = minimal_documents()
    documents["monsters"][0]["base_hp"] = True

    with pytest.raises(DataValidationError) as excinfo:
        build_game_data(documents)

    assert excinfo.value.path == "[monsters.json] monsters[0].base_hp"
    assert "must be a number" in str(excinfo.value)


def test_top_level_document_must_be_array() -> None:
    with pytest.raises(DataValidationError) as excinfo:
        TiersRepository().build({"normal": {}})

    assert excinfo.value.path == "[tiers.json] tiers"


def test_duplicate_ids_rejected() -> None:
    with pytest.raises(DataValidationError) as excinfo:
        TiersRepository().build([tier("normal"), tier("normal")])

    assert excinfo.value.path == "[tiers.json] tiers[1].id"
    assert "duplicate id 'normal'" in str(excinfo.value)


def test_blank_id_rejected() -> None:
    with pytest.raises(DataValidationError) as excinfo:
        TiersRepository().build([tier("  ")])

    assert excinfo.value.path == "[tiers.json] tiers[0].id"


def test_padded_reference_id_rejected_not_trimmed() -> None:
    documents = minimal_documents()
    documents["zones"][0]["spawn_table"][0]["monster_id"] = " m1 "

    with pytest.raises(DataValidationError) as excinfo:
        build_game_data(documents)

    assert excinfo.value.path == "[zones.json] zones[0].spawn_table[0].monster_id"
    assert excinfo.value.value == " m1 "
    assert "surrounding whitespace" in str(excinfo.value)


def test_tier_minions_are_parsed() -> None:
    tiers = TiersRepository().build(
        [
            tier(
                "unique",
                minions={"count_range": [2, 4], "level_bonus": -1, "hp_mult": 0.5, "dps_mult": 1, "def_mult": 1},
            )
        ]
    )

    minions = tiers[0].minions
    assert minions is not None
    assert minions.count_range == (2, 4)
    assert minions.hp_mult == 0.5


def test_tier_minions_missing_count_range() -> None:
    with pytest.raises(DataValidationError) as excinfo:
        TiersRepository().build([tier("unique", minions={"level_bonus": 0})])

    assert excinfo.value.path == "[tiers.json] tiers[0].minions.count_range"


def test_scalar_res_bonus_expands_to_every_damage_type() -> None:
    difficulties = DifficultiesRepository().build(
        [{"id": "hell", "hp_mult": 2, "dmg_mult": 2, "def_mult": 2, "res_bonus": 25, "affix_pool": []}]
    )

    assert dict(difficulties[0].res_bonus) == {"laser": 25, "plasma": 25, "ion": 25, "kinetic": 25}


def test_zone_overrides_are_optional() -> None:
    documents = minimal_documents()
    zone_payload = documents["zones"][0]
    zone_payload.pop("tier_probs")
    zone = ZonesRepository().build([zone_payload])[0]

    assert zone.tier_probs is None
    assert zone.difficulty_multipliers is None
    assert zone.has_overrides is False


def test_zone_difficulty_multipliers_parsed() -> None:
    zone_payload = minimal_documents()["zones"][0]
    zone_payload["difficulty_multipliers"] = {"hp_mult": 1.5, "res_bonus": {"ion": 10}}
    zone = ZonesRepository().build([zone_payload])[0]

    assert zone.difficulty_multipliers.hp_mult == 1.5
    assert zone.difficulty_multipliers.dmg_mult is None
    assert dict(zone.difficulty_multipliers.res_bonus) == {"ion": 10}
    assert zone.has_overrides is True


def test_loot_table_rolls_must_be_integer() -> None:
    with pytest.raises(DataValidationError) as excinfo:
        LootTablesRepository().build([{"id": "common_creep", "rolls": 1.5, "entries": []}])

    assert excinfo.value.path == "[loot_tables.json] tables[0].rolls"


def test_missing_document_file_raises_load_error(tmp_path: Path) -> None:
    documents = minimal_documents()
    del documents["tiers"]
    definitions_dir = write_definitions(tmp_path / "definitions", documents)

    with pytest.raises(DataLoadError) as excinfo:
        load_game_data(definitions_dir)

    assert excinfo.value.location.endswith("tiers.json")
    assert "not found" in excinfo.value.reason


def test_malformed_json_raises_load_error(tmp_path: Path) -> None:
    definitions_dir = write_definitions(tmp_path / "definitions", minimal_documents())
    (definitions_dir / "zones.json").write_text("{not json", encoding="utf-8")

    with pytest.raises(DataLoadError) as excinfo:
        load_game_data(definitions_dir)

    assert excinfo.value.location.endswith("zones.json")
    assert "parse error" in excinfo.value.reason


def test_loader_reuses_cached_snapshot() -> None:
    documents = minimal_documents()
    fetcher = mapping_fetcher(documents)
    cache = DocumentCache()
    loader = GameDataLoader(fetcher, cache=cache, sources=mapping_sources(documents))

    first = asyncio.run(loader.load())
    second = asyncio.run(loader.load())

    assert first is second
    assert fetcher.fetch_count == 6
    assert len(cache) == 6


def test_loaders_sharing_a_cache_share_documents() -> None:
    documents = minimal_documents()
    fetcher = mapping_fetcher(documents)
    cache = DocumentCache()
    sources = mapping_sources(documents)

    first = asyncio.run(GameDataLoader(fetcher, cache=cache, sources=sources).load())
    second = asyncio.run(GameDataLoader(fetcher, cache=cache, sources=sources).load())

    assert first is second
    assert fetcher.fetch_count == 6


def test_concurrent_loads_share_one_snapshot() -> None:
    documents = minimal_documents()
    fetcher = mapping_fetcher(documents)
    loader = GameDataLoader(fetcher, cache=DocumentCache(), sources=mapping_sources(documents))

    async def run() -> list:
        return await asyncio.gather(loader.load(), loader.load(), loader.load())

    first, second, third = asyncio.run(run())
    later = asyncio.run(loader.load())

    assert first is second
    assert second is third
    assert later is first
    assert fetcher.fetch_count == 6


def test_concurrent_failed_loads_share_the_error() -> None:
    documents = minimal_documents()
    documents["zones"][0]["spawn_table"][0]["monster_id"] = "ghost"
    cache = DocumentCache()
    loader = GameDataLoader(mapping_fetcher(documents), cache=cache, sources=mapping_sources(documents))

    async def run() -> list:
        return await asyncio.gather(loader.load(), loader.load(), return_exceptions=True)

    results = asyncio.run(run())

    assert all(isinstance(result, DataReferenceError) for result in results)
    assert results[0] is results[1]
    assert cache.get_snapshot(loader.sources) is None


def test_cache_clear_forces_refetch() -> None:
    documents = minimal_documents()
    fetcher = mapping_fetcher(documents)
    cache = DocumentCache()
    loader = GameDataLoader(fetcher, cache=cache, sources=mapping_sources(documents))

    first = asyncio.run(loader.load())
    cache.clear()
    second = asyncio.run(loader.load())

    assert first is not second
    assert first == second
    assert fetcher.fetch_count == 12


def test_failed_load_caches_nothing() -> None:
    documents = minimal_documents()
    documents["zones"][0]["spawn_table"][0]["monster_id"] = "ghost"
    cache = DocumentCache()
    loader = GameDataLoader(mapping_fetcher(documents), cache=cache, sources=mapping_sources(documents))

    with pytest.raises(DataReferenceError):
        asyncio.run(loader.load())

    assert len(cache) == 0
    assert cache.get_snapshot(loader.sources) is None


def test_concurrent_fetches_of_same_location_are_shared() -> None:
    cache = DocumentCache()
    calls = []

    async def fetch() -> object:
        calls.append(1)
        await asyncio.sleep(0)
        return [1, 2, 3]

    async def run() -> list:
        return await asyncio.gather(*(cache.get_or_fetch("doc", fetch) for _ in range(3)))

    results = asyncio.run(run())

    assert results == [[1, 2, 3]] * 3
    assert len(calls) == 1


def test_mapping_fetcher_missing_location() -> None:
    with pytest.raises(DataLoadError) as excinfo:
        asyncio.run(MappingFetcher({}).fetch("zones"))

    assert excinfo.value.location == "zones"


def test_file_fetcher_resolves_relative_locations(tmp_path: Path) -> None:
    (tmp_path / "zones.json").write_text(json.dumps([]), encoding="utf-8")

    text = asyncio.run(FileFetcher(tmp_path).fetch("zones.json"))

    assert json.loads(text) == []


def test_sources_from_directory(tmp_path: Path) -> None:
    sources = DataSources.from_directory(tmp_path)

    assert sources.zones == str(tmp_path / "zones.json")
    assert [table for table, _location in sources.items()] == [
        "difficulties",
        "zones",
        "monsters",
        "tiers",
        "affixes",
        "loot_tables",
    ]


def test_url_fetcher_joins_base_url(monkeypatch) -> None:
    requested = []

    def fake_urlopen(url, timeout=None):
        requested.append(url)
        return io.BytesIO(b"[]")

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    text = asyncio.run(UrlFetcher("https://defs.example/v1/").fetch("zones.json"))

    assert text == "[]"
    assert requested == ["https://defs.example/v1/zones.json"]


def test_url_fetcher_http_error_becomes_load_error(monkeypatch) -> None:
    def fake_urlopen(url, timeout=None):
        raise urllib.error.HTTPError(url, 404, "Not Found", None, None)

    monkeypatch.setattr(urllib.request, "urlopen", fake_urlopen)

    with pytest.raises(DataLoadError) as excinfo:
        asyncio.run(UrlFetcher("https://defs.example").fetch("zones.json"))

    assert excinfo.value.location == "zones.json"
    assert excinfo.value.reason == "HTTP 404 Not Found"
