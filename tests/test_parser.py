import time
from datetime import datetime, timezone

import pytest

from cyber_feed.exceptions import ParseError
from cyber_feed.parser import parse_entry


def test_parse_entry_trims_and_lowercases_haystack():
    out = parse_entry({
        "title": "  Critical Flaw in FooServer  ",
        "link": " https://example.com/foo \n",
        "summary": "Remote Code Execution",
    })
    assert out["title"] == "Critical Flaw in FooServer"
    assert out["link"] == "https://example.com/foo"
    assert out["text"] == "Critical Flaw in FooServer Remote Code Execution"
    assert out["haystack"] == "critical flaw in fooserver remote code execution"


def test_parse_entry_joins_every_body_field_once():
    out = parse_entry({
        "title": "T",
        "link": "https://x",
        "summary": "short snippet",
        "description": "short snippet",
        "content": [{"value": "<p>full body</p>"}, {"value": ""}],
    })
    assert out["text"] == "T short snippet <p>full body</p>"


@pytest.mark.parametrize("raw", [
    {"title": "   ", "link": "https://x"},
    {"title": "Has title", "link": ""},
    {"link": "https://x"},
    {"title": "Has title"},
])
def test_parse_entry_rejects_missing_title_or_link(raw):
    with pytest.raises(ParseError):
        parse_entry(raw)


def test_parse_entry_prefers_parsed_struct_time():
    st = time.struct_time((2024, 3, 5, 8, 30, 0, 1, 65, 0))
    out = parse_entry({
        "title": "T", "link": "https://x",
        "published_parsed": st,
        "published": "garbage",
    })
    assert out["published_at"] == datetime(2024, 3, 5, 8, 30, tzinfo=timezone.utc)


def test_parse_entry_falls_back_to_date_strings():
    out = parse_entry({"title": "T", "link": "https://x", "updated": "Tue, 05 Mar 2024 10:30:00 +0200"})
    assert out["published_at"] == datetime(2024, 3, 5, 8, 30, tzinfo=timezone.utc)


def test_parse_entry_naive_date_is_utc():
    out = parse_entry({"title": "T", "link": "https://x", "published": "2024-03-05 08:30:00"})
    assert out["published_at"] == datetime(2024, 3, 5, 8, 30, tzinfo=timezone.utc)


def test_parse_entry_unparseable_date_is_unknown():
    out = parse_entry({"title": "T", "link": "https://x", "published": "garbage"})
    assert out["published_at"] is None
