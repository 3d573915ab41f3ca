from datetime import datetime, timezone

from cyber_feed.models import Candidate
from cyber_feed.summarizers import (
    NullSummarizer,
    SummarizeOptions,
    build_summarizer,
    summarize_candidates,
)


def _items(n):
    return [
        Candidate(title=f"t{i}", link=f"https://x/{i}", source="s",
                  published_at=datetime(2024, 1, 1, tzinfo=timezone.utc), excerpt=f"ex{i}")
        for i in range(n)
    ]


class Echo:
    def summarize(self, *, title, text, link):
        return f"{title}:{text}"


class Flaky:
    def summarize(self, *, title, text, link):
        if title == "t1":
            raise RuntimeError("provider down")
        return "" if title == "t2" else "ok"


def test_summaries_keep_order_with_threads():
    items = _items(6)
    out = summarize_candidates(items, texts={"https://x/0": "full text"}, options=SummarizeOptions(max_workers=3), summarizer=Echo())
    assert [c.link for c in out] == [c.link for c in items]
    assert out[0].summary == "t0:full text"
    assert out[1].summary == "t1:ex1"


def test_input_is_truncated():
    out = summarize_candidates(_items(1), texts={"https://x/0": "abcdef"},
                               options=SummarizeOptions(max_workers=1, max_input_chars=3), summarizer=Echo())
    assert out[0].summary == "t0:abc"


def test_failures_leave_summary_unset():
    out = summarize_candidates(_items(3), texts={}, options=SummarizeOptions(max_workers=1), summarizer=Flaky())
    assert [c.summary for c in out] == ["ok", None, None]


def test_build_summarizer_fallbacks():
    assert isinstance(build_summarizer(None), NullSummarizer)
    assert isinstance(build_summarizer(SummarizeOptions(provider="nope")), NullSummarizer)


def test_provider_setup_failure_returns_items_unchanged(monkeypatch):
    from cyber_feed import summarizers

    def no_provider(options):
        raise RuntimeError("OPENAI_API_KEY not set.")

    monkeypatch.setattr(summarizers, "build_summarizer", no_provider)
    items = _items(2)
    out = summarize_candidates(items, texts={}, options=SummarizeOptions(provider="openai"))
    assert out == items
