from __future__ import annotations

from pathlib import Path

import pytest

from marketing_analytics.config import ensure_output_root, load_config
from marketing_analytics.exceptions import InvalidConfigError


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for key in [
        "MKT_OUTPUT_ROOT",
        "MKT_HISTORY_FILE",
        "MKT_HISTORY_LIMIT",
        "MKT_CURRENCY_SYMBOL",
        "MKT_REPORT_FILENAME",
    ]:
        # setenv first so values written by load_dotenv are rolled back on teardown.
        monkeypatch.setenv(key, "")
        monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


def test_load_config_defaults() -> None:
    config = load_config()

    assert config.output_root == "outputs"
    assert config.history_limit == 10
    assert config.currency_symbol == "$"


def test_load_config_with_yaml_and_overrides(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "output_root: alt_outputs\nhistory_limit: 4\ncurrency_symbol: EUR\n",
        encoding="utf-8",
    )

    config = load_config(
        config_path=config_path,
        overrides={"currency_symbol": "GBP", "output_root": None},
    )

    assert config.output_root == "alt_outputs"
    assert config.history_limit == 4
    assert config.currency_symbol == "GBP"


def test_env_overrides_yaml(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("history_limit: 4\n", encoding="utf-8")
    monkeypatch.setenv("MKT_HISTORY_LIMIT", "7")

    assert load_config(config_path=config_path).history_limit == 7


def test_load_config_reads_dotenv(tmp_path: Path) -> None:
    dotenv_path = tmp_path / ".env"
    dotenv_path.write_text("MKT_HISTORY_FILE=custom/history.json\n", encoding="utf-8")

    config = load_config(dotenv_path=dotenv_path)

    assert config.history_file == "custom/history.json"


def test_load_config_missing_file(tmp_path: Path) -> None:
    with pytest.raises(InvalidConfigError, match="does not exist"):
        load_config(config_path=tmp_path / "nope.yaml")


def test_load_config_rejects_malformed_yaml(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("history_limit: [1,\n", encoding="utf-8")

    with pytest.raises(InvalidConfigError, match="not valid YAML"):
        load_config(config_path=config_path)


def test_load_config_requires_mapping(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("- a\n- b\n", encoding="utf-8")

    with pytest.raises(InvalidConfigError, match="top-level mapping"):
        load_config(config_path=config_path)


def test_load_config_rejects_invalid_limit(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("history_limit: 0\n", encoding="utf-8")

    with pytest.raises(InvalidConfigError, match="Invalid configuration"):
        load_config(config_path=config_path)

    monkeypatch.setenv("MKT_HISTORY_LIMIT", "many")
    with pytest.raises(InvalidConfigError, match="must be an integer"):
        load_config()


def test_ensure_output_root_creates_directory(tmp_path: Path) -> None:
    target = tmp_path / "a" / "b"

    assert ensure_output_root(str(target)) == target
    assert target.is_dir()
