# tests/conftest.py
from __future__ import annotations

import pytest


def make_entry(title="Patch released", link="https://example.com/a", published=None, **extra):
    e = {"title": title, "link": link}
    if published is not None:
        e["published"] = published
    e.update(extra)
    return e


@pytest.fixture
def entry():
    return make_entry

