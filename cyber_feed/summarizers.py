from __future__ import annotations

import concurrent.futures as _fut
import dataclasses
import logging
import os
from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Optional, Protocol

from .models import Candidate

logger = logging.getLogger(__name__)

_SYSTEM_PROMPT = (
    "You are a concise security news summarizer. Return a single short paragraph "
    "(max ~2 sentences) naming the affected product, the issue and whether it is "
    "exploited or patched when the text says so. No preface, no title, no bullets."
)


class Summarizer(Protocol):
    def summarize(self, *, title: str, text: str, link: str) -> str:  # pragma: no cover - interface
        ...


@dataclass
class SummarizeOptions:
    provider: str = "openai"  # "openai" | "gemini"
    model: Optional[str] = None
    max_input_chars: int = 4000
    max_workers: int = 4
    timeout_sec: float = 15.0

    @classmethod
    def from_dict(cls, raw: Mapping[str, Any]) -> "SummarizeOptions":
        known = {f.name for f in dataclasses.fields(cls)}
        return cls(**{k: v for k, v in raw.items() if k in known})


class NullSummarizer:
    def summarize(self, *, title: str, text: str, link: str) -> str:
        return ""


class OpenAISummarizer:
    def __init__(self, *, api_key: Optional[str], model: Optional[str], timeout_sec: float) -> None:
        try:
            from openai import OpenAI  # type: ignore
        except Exception as e:  # pragma: no cover - optional dep
            raise RuntimeError("openai package is required for OpenAI summarization. Install with `pip install cyber-feed[ai]`.") from e
        key = api_key or os.getenv("OPENAI_API_KEY")
        if not key:
            raise RuntimeError("OPENAI_API_KEY not set.")
        self._client = OpenAI(api_key=key)
        self._model = model or os.getenv("OPENAI_MODEL", "gpt-4o-mini")
        self._timeout = timeout_sec

    def summarize(self, *, title: str, text: str, link: str) -> str:
        user = (
            f"Title: {title}\n"
            f"Text: {text}\n"
            f"Link: {link}\n\n"
            "Task: Summarize the security relevance of this item (objective, no opinions)."
        )
        resp = self._client.chat.completions.create(
            model=self._model,
            messages=[
                {"role": "system", "content": _SYSTEM_PROMPT},
                {"role": "user", "content": user},
            ],
            timeout=self._timeout,
        )
        content = resp.choices[0].message.content if resp and resp.choices else None
        return (content or "").strip()


class GeminiSummarizer:
    def __init__(self, *, api_key: Optional[str], model: Optional[str], timeout_sec: float) -> None:
        try:
            import google.generativeai as genai  # type: ignore
        except Exception as e:  # pragma: no cover - optional dep
            raise RuntimeError("google-generativeai package is required for Gemini summarization. Install with `pip install cyber-feed[ai]`.") from e
        key = api_key or os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY")
        if not key:
            raise RuntimeError("GOOGLE_API_KEY (or GEMINI_API_KEY) not set.")
        genai.configure(api_key=key)
        self._model_name = model or os.getenv("GEMINI_MODEL", "gemini-1.5-flash")
        self._timeout = timeout_sec
        self._genai = genai

    def summarize(self, *, title: str, text: str, link: str) -> str:
        prompt = (
            f"{_SYSTEM_PROMPT}\n\n"
            f"Title: {title}\n"
            f"Text: {text}\n"
            f"Link: {link}"
        )
        model = self._genai.GenerativeModel(self._model_name)
        resp = model.generate_content(prompt, request_options={"timeout": self._timeout})
        return str(getattr(resp, "text", None) or "").strip()


def _truncate(s: str, limit: int) -> str:
    if limit <= 0 or len(s) <= limit:
        return s
    return s[:limit]


def build_summarizer(options: Optional[SummarizeOptions]) -> Summarizer:
    if not options:
        return NullSummarizer()
    provider = (options.provider or "").lower()
    if provider == "openai":
        return OpenAISummarizer(api_key=os.getenv("OPENAI_API_KEY"), model=options.model, timeout_sec=options.timeout_sec)
    if provider in {"gemini", "google", "googleai"}:
        return GeminiSummarizer(api_key=os.getenv("GOOGLE_API_KEY") or os.getenv("GEMINI_API_KEY"), model=options.model, timeout_sec=options.timeout_sec)
    logger.warning("Unknown summarize provider %r, skipping summaries", options.provider)
    return NullSummarizer()


def summarize_candidates(
    items: Iterable[Candidate],
    *,
    texts: Mapping[str, str],
    options: SummarizeOptions,
    summarizer: Optional[Summarizer] = None,
) -> List[Candidate]:
    """Attach a short AI summary to each candidate.

    `texts` maps link -> full entry text for this run. Order and length are
    preserved; a provider failure leaves that candidate's summary unset.
    """
    items = list(items)
    if summarizer is None:
        try:
            summarizer = build_summarizer(options)
        except Exception as e:
            logger.warning("Summaries disabled for this run: %s", e)
            return items

    def _one(item: Candidate) -> Candidate:
        text = _truncate(texts.get(item.link) or item.excerpt or "", options.max_input_chars)
        try:
            s = summarizer.summarize(title=item.title, text=text, link=item.link)
        except Exception as e:
            logger.warning("Summary failed for %s: %s", item.link, e)
            return item
        if not s:
            return item
        return dataclasses.replace(item, summary=s)

    max_workers = max(1, int(options.max_workers or 1))
    if max_workers == 1 or len(items) <= 1:
        return [_one(it) for it in items]

    with _fut.ThreadPoolExecutor(max_workers=max_workers) as ex:
        return list(ex.map(_one, items))
