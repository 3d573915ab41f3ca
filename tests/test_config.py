import json

import pytest

from cyber_feed.config import DEFAULT_MAX_ITEMS, FeedConfig, load_config
from cyber_feed.exceptions import ConfigError
from cyber_feed.summarizers import SummarizeOptions


def test_defaults():
    cfg = FeedConfig.from_dict({"feeds": ["https://a"]})
    assert cfg.max_items == DEFAULT_MAX_ITEMS == 150
    assert cfg.title == "Cybersecurity Feed"
    assert cfg.timezone == "UTC"
    assert cfg.include_keywords == ()
    assert cfg.exclude_keywords == ()
    assert cfg.summarize is None


def test_keywords_are_lowercased_and_feeds_trimmed():
    cfg = FeedConfig.from_dict({
        "feeds": [" https://a ", ""],
        "include_keywords": ["CVE", " Zero-Day "],
        "exclude_keywords": ["Webinar"],
    })
    assert cfg.feeds == ["https://a"]
    assert cfg.include_keywords == ("cve", "zero-day")
    assert cfg.exclude_keywords == ("webinar",)


def test_summarize_block_is_parsed():
    cfg = FeedConfig.from_dict({"feeds": [], "summarize": {"provider": "gemini", "max_workers": 2, "bogus": 1}})
    assert cfg.summarize == SummarizeOptions(provider="gemini", max_workers=2)


@pytest.mark.parametrize("raw", [
    {},
    {"feeds": "https://a"},
    {"feeds": [1, 2]},
    {"feeds": [], "max_items": -1},
    {"feeds": [], "max_items": "ten"},
    {"feeds": [], "timezone": "Mars/Olympus"},
    {"feeds": [], "include_keywords": "cve"},
    {"feeds": [], "timeout_sec": "soon"},
    {"feeds": [], "summarize": "openai"},
])
def test_invalid_config(raw):
    with pytest.raises(ConfigError):
        FeedConfig.from_dict(raw)


def test_load_config_reads_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"feeds": ["https://a"], "max_items": 5, "title": "T"}), encoding="utf-8")
    cfg = load_config(path)
    assert cfg.feeds == ["https://a"]
    assert cfg.max_items == 5
    assert cfg.title == "T"


def test_load_config_missing_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.json")


def test_load_config_bad_json(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)
