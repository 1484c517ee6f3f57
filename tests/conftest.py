import asyncio
import json

import pytest

from mdblog.app import AppContext, Renderer
from mdblog.browser import History, Page
from mdblog.config import SiteConfig
from mdblog.fetch import FetchError


class FakeFetcher:
    """
    In-memory static host.
    Paths missing from `files` fail like a 404; `gates` hold a fetch until
    the matching asyncio.Event is set.
    """

    def __init__(self, files: dict, gates: dict | None = None):
        self.files = files
        self.gates = gates or {}
        self.calls = []

    async def fetch_text(self, path: str) -> str:
        self.calls.append(path)
        gate = self.gates.get(path)
        if gate is not None:
            await gate.wait()
        if path not in self.files:
            raise FetchError(f"GET {path} returned 404")
        return self.files[path]


def make_index(*posts: dict) -> str:
    return json.dumps(list(posts))


@pytest.fixture
def site():
    return SiteConfig(site_name="Test Blog", site_url="https://example.com/blog")


@pytest.fixture
def make_renderer(site):
    def factory(files: dict, url: str = "/", gates: dict | None = None):
        fetcher = FakeFetcher(files, gates)
        context = AppContext(
            config=site,
            page=Page(title=site.site_name),
            history=History(url),
            fetcher=fetcher,
        )
        return Renderer(context), fetcher

    return factory


def run(coro):
    return asyncio.run(coro)
