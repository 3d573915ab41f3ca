from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path
from typing import Union
from zoneinfo import ZoneInfo

from jinja2 import Environment, PackageLoader, select_autoescape

from .models import Digest

TEMPLATE_NAME = "index.html"


def format_time(dt: datetime, tz_name: str) -> str:
    """`DD/MM/YYYY, HH:MM:SS` in the given zone, 24h clock."""
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(ZoneInfo(tz_name)).strftime("%d/%m/%Y, %H:%M:%S")


def _environment() -> Environment:
    return Environment(
        loader=PackageLoader("cyber_feed", "templates"),
        autoescape=select_autoescape(["html"]),
    )


def render_html(digest: Digest) -> str:
    cards = []
    for item in digest.items:
        # Undated entries show the build time.
        when = item.published_at or digest.generated_at
        cards.append({
            "item": item,
            "when": format_time(when, digest.timezone),
            "severity": item.severity.value if item.severity else None,
        })

    template = _environment().get_template(TEMPLATE_NAME)
    return template.render(
        title=digest.title,
        updated=format_time(digest.generated_at, digest.timezone),
        count=digest.count,
        source_count=digest.source_count,
        keywords=digest.include_keywords,
        cards=cards,
    )


def write_site(digest: Digest, out_dir: Union[str, Path]) -> Path:
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / TEMPLATE_NAME
    path.write_text(render_html(digest), encoding="utf-8")
    return path
