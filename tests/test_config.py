import json
from pathlib import Path

from packforge.config import PackforgeConfig, load_config
from packforge.data import paths
from packforge.domain.formulas import DEFAULT_TIER_PROBS


def _write_json(path: Path, payload: object) -> None:
    path.write_text(json.dumps(payload), encoding="utf-8")


def test_defaults_without_config_file(tmp_path: Path) -> None:
    config = load_config(tmp_path / "missing.json", environ={})

    assert config.definitions_dir == paths.get_bundled_definitions_path()
    assert config.default_seed == "default"
    assert config.default_tier_probs == DEFAULT_TIER_PROBS
    assert config.debug is False
    assert config.config_path == tmp_path / "missing.json"


def test_file_overrides(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    _write_json(
        config_path,
        {"data_dir": "defs", "default_seed": "xyz", "debug": True, "tier_probs": {"normal": 1}},
    )

    config = load_config(config_path, environ={})

    assert config.definitions_dir == (tmp_path / "defs").resolve()
    assert config.default_seed == "xyz"
    assert config.debug is True
    assert dict(config.default_tier_probs) == {"normal": 1}


def test_environment_wins_over_file(tmp_path: Path) -> None:
    config_path = tmp_path / "config.json"
    _write_json(config_path, {"default_seed": "from-file", "debug": True})

    config = load_config(
        config_path,
        environ={
            "PACKFORGE_DEFAULT_SEED": "from-env",
            "PACKFORGE_DEBUG": "0",
            "PACKFORGE_DATA_DIR": str(tmp_path / "env-defs"),
        },
    )

    assert config.default_seed == "from-env"
    assert config.debug is False
    assert config.definitions_dir == tmp_path / "env-defs"


def test_config_path_from_environment(tmp_path: Path) -> None:
    config_path = tmp_path / "elsewhere.json"
    _write_json(config_path, {"default_seed": "env-path"})

    config = load_config(environ={"PACKFORGE_CONFIG": str(config_path)})

    assert config.config_path == config_path
    assert config.default_seed == "env-path"


def test_malformed_file_keeps_defaults(tmp_path: Path, caplog) -> None:
    config_path = tmp_path / "config.json"
    config_path.write_text("{broken", encoding="utf-8")

    config = load_config(config_path, environ={})

    assert config.default_seed == PackforgeConfig().default_seed
    assert "unreadable" in caplog.text


def test_malformed_values_are_ignored(tmp_path: Path, caplog) -> None:
    config_path = tmp_path / "config.json"
    _write_json(
        config_path,
        {"debug": "yes", "default_seed": 5, "tier_probs": {"normal": 0, "boss": "many"}},
    )

    config = load_config(config_path, environ={})

    assert config.debug is False
    assert config.default_seed == "default"
    assert config.default_tier_probs == DEFAULT_TIER_PROBS
    assert "debug must be a boolean" in caplog.text
