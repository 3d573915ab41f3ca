"""
Command-line entry point: ``cyber-feed build``.

Loads ``.env`` (provider API keys for optional summaries), reads the JSON
config, builds the digest and writes ``<out>/index.html``.
"""
from __future__ import annotations

import logging
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler

from .config import load_config
from .core import DigestBuilder
from .exceptions import ConfigError
from .renderer import write_site

app = typer.Typer(add_completion=False)
console = Console()


def _setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(message)s",
        handlers=[RichHandler(rich_tracebacks=True, show_time=False, show_level=True)],
        force=True,
    )


@app.callback()
def main() -> None:
    """Build a ranked cybersecurity digest from RSS/Atom feeds."""


@app.command()
def build(
    config: Path = typer.Option(Path("config.json"), "--config", "-c", help="JSON config file."),
    out: Path = typer.Option(Path("dist"), "--out", "-o", help="Output directory."),
    log_level: str = typer.Option("INFO", "--log-level", help="Logging level."),
) -> None:
    """Fetch every configured feed and write the digest page."""
    load_dotenv()
    _setup_logging(log_level)

    try:
        cfg = load_config(config)
    except ConfigError as e:
        console.print(f"[red]Config error:[/red] {e}")
        raise typer.Exit(code=2)

    digest = DigestBuilder(cfg).build()
    path = write_site(digest, out)
    console.print(f"Built {digest.count} items from {len(cfg.feeds)} feeds -> {path}")


if __name__ == "__main__":
    app()
