"""Tests for configuration loading and the command-line entry point."""

import json

from quest_extractor.cli import apply_args, build_parser, main, make_fetcher
from quest_extractor.config import QUEST_HELPER_RAW_BASE, ExtractorConfig, load_config
from quest_extractor.fetcher import LocalSourceFetcher, QuestSourceFetcher


def test_defaults(monkeypatch):
    for key in ("BASE_URL", "OUTPUT_DIR", "INDEX_PATH", "TIMEOUT", "RETRIES", "WORKERS", "SOURCE_DIR", "APPROVED_PATH"):
        monkeypatch.delenv("QUEST_EXTRACTOR_" + key, raising=False)
    config = load_config()
    assert config.base_url == QUEST_HELPER_RAW_BASE
    assert config.index_path == ""
    assert config.retries == 3
    assert config.workers == 1
    assert config.source_dir == ""


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("QUEST_EXTRACTOR_OUTPUT_DIR", "/tmp/quests")
    monkeypatch.setenv("QUEST_EXTRACTOR_WORKERS", "4")
    monkeypatch.setenv("QUEST_EXTRACTOR_TIMEOUT", "2.5")
    monkeypatch.setenv("QUEST_EXTRACTOR_RETRIES", "not-a-number")
    config = load_config()
    assert config.output_dir == "/tmp/quests"
    assert config.workers == 4
    assert config.timeout == 2.5
    assert config.retries == 3


def test_flags_override_environment(monkeypatch):
    monkeypatch.setenv("QUEST_EXTRACTOR_WORKERS", "4")
    args = build_parser().parse_args(["--workers", "2", "--output-dir", "out", "--retries", "0"])
    config = apply_args(load_config(), args)
    assert config.workers == 2
    assert config.output_dir == "out"
    assert config.retries == 1


def test_make_fetcher_picks_source():
    assert isinstance(make_fetcher(ExtractorConfig()), QuestSourceFetcher)
    assert isinstance(make_fetcher(ExtractorConfig(source_dir="quests")), LocalSourceFetcher)


def test_main_with_local_sources(tmp_path, quests_dir):
    approved = tmp_path / "approved.json"
    approved.write_text(json.dumps({"Cook's Assistant": True, "Waterfall Quest": True, "Dragon Slayer": False}))
    out = tmp_path / "out"

    code = main(["--approved", str(approved), "--output-dir", str(out), "--source-dir", str(quests_dir)])

    assert code == 0
    assert sorted(p.name for p in out.iterdir()) == ["cooksassistant.json"]
    assert "steps" in json.loads((out / "cooksassistant.json").read_text(encoding="utf-8"))


def test_main_index_flag_writes_outside_output_dir(tmp_path, quests_dir):
    approved = tmp_path / "approved.json"
    approved.write_text(json.dumps({"Cook's Assistant": True}))
    out = tmp_path / "out"
    index_path = tmp_path / "quest-index.json"

    code = main([
        "--approved", str(approved),
        "--output-dir", str(out),
        "--source-dir", str(quests_dir),
        "--index", str(index_path),
    ])

    assert code == 0
    assert sorted(p.name for p in out.iterdir()) == ["cooksassistant.json"]
    assert json.loads(index_path.read_text(encoding="utf-8"))[0]["slug"] == "cooksassistant"


def test_main_unreadable_approved_list(tmp_path):
    code = main(["--approved", str(tmp_path / "missing.json"), "--output-dir", str(tmp_path / "out")])
    assert code == 1
    assert not (tmp_path / "out").exists()


def test_main_nothing_approved(tmp_path):
    approved = tmp_path / "approved.json"
    approved.write_text(json.dumps({"Cook's Assistant": False}))
    assert main(["--approved", str(approved), "--output-dir", str(tmp_path / "out")]) == 0
