"""Client-side navigation for the blog.

The renderer owns a four-state machine (list, article, article not found,
article load error). The state is always derived from the current URL's
``post`` query parameter, both on direct navigation and on history pops,
so the browser may jump any number of entries without the renderer keeping
track of where it came from.

Every transition takes a fresh navigation token. An article fetch that
resolves after the token has moved on is dropped instead of overwriting the
newer view.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union
from urllib.parse import parse_qs, urlsplit

from .browser import Event, History, Page
from .config import SiteConfig
from .content import Post, find_post, parse_index, sort_posts
from .fetch import FetchError, Fetcher
from .render import highlight_code_blocks, render_markdown
from .views import (
    build_article,
    build_article_skeleton,
    build_list_skeleton,
    build_load_error,
    build_not_found,
    build_post_cards,
    post_query,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ListState:
    pass


@dataclass(frozen=True)
class ArticleState:
    slug: str


@dataclass(frozen=True)
class ArticleNotFound:
    slug: str


@dataclass(frozen=True)
class ArticleLoadError:
    slug: str


State = Union[ListState, ArticleState, ArticleNotFound, ArticleLoadError]


def derive_state(url: str) -> State:
    query = parse_qs(urlsplit(url).query)
    for slug in query.get("post", []):
        if slug:
            return ArticleState(slug)
    return ListState()


async def load_posts(fetcher: Fetcher, config: SiteConfig) -> list[Post]:
    """Fetch and sort the post index. Any failure yields an empty index."""
    try:
        text = await fetcher.fetch_text(config.index_path)
        posts = parse_index(text)
    except (FetchError, ValueError) as exc:
        logger.warning("Posts index not available, starting with no posts: %s", exc)
        return []
    return sort_posts(posts)


@dataclass
class AppContext:
    config: SiteConfig
    page: Page
    history: History
    fetcher: Fetcher
    posts: tuple[Post, ...] = ()
    initialized: bool = False

    def initialize(self, posts: list[Post]) -> None:
        if self.initialized:
            raise RuntimeError("application context is already initialized")
        self.posts = tuple(posts)
        self.initialized = True

    def find_post(self, slug: str) -> Optional[Post]:
        return find_post(list(self.posts), slug)


class Renderer:
    def __init__(self, context: AppContext):
        self.context = context
        self.state: State = ListState()
        self._token = 0

    @property
    def page(self) -> Page:
        return self.context.page

    @property
    def history(self) -> History:
        return self.context.history

    async def start(self) -> State:
        if self.context.initialized:
            raise RuntimeError("renderer has already been started")
        self.page.list_html = build_list_skeleton()
        posts = await load_posts(self.context.fetcher, self.context.config)
        self.context.initialize(posts)
        return await self.render(derive_state(self.history.location))

    async def open_post(self, slug: str, event: Optional[Event] = None) -> State:
        if event is not None:
            event.prevent_default()
        self.history.push_state({"post": slug}, post_query(slug))
        return await self.render(ArticleState(slug))

    async def go_back(self, event: Optional[Event] = None) -> State:
        if event is not None:
            event.prevent_default()
        self.history.push_state({}, self.history.pathname)
        return await self.render(ListState())

    async def on_popstate(self) -> State:
        return await self.render(derive_state(self.history.location))

    async def render(self, state: State) -> State:
        self._token += 1
        if isinstance(state, ArticleState):
            return await self.render_article(state.slug, self._token)
        return self.render_list()

    def render_list(self) -> State:
        self.page.show_list()
        self.page.title = self.context.config.site_name
        self.page.list_html = build_post_cards(list(self.context.posts))
        self.state = ListState()
        return self.state

    async def render_article(self, slug: str, token: int) -> State:
        post = self.context.find_post(slug)
        self.page.show_article()
        if post is None:
            self.page.article_html = build_not_found()
            self.state = ArticleNotFound(slug)
            return self.state

        self.page.article_html = build_article_skeleton()
        self.state = ArticleState(slug)
        config = self.context.config
        try:
            text = await self.context.fetcher.fetch_text(config.content_path(slug))
        except FetchError as exc:
            if token != self._token:
                logger.debug("Dropping failed fetch for %s, navigation moved on", slug)
                return self.state
            logger.warning("Failed to load post %s: %s", slug, exc)
            self.page.article_html = build_load_error()
            self.state = ArticleLoadError(slug)
            return self.state

        if token != self._token:
            logger.debug("Dropping stale content for %s, navigation moved on", slug)
            return self.state

        try:
            body_html = highlight_code_blocks(render_markdown(text))
        except Exception:
            logger.exception("Failed to render post %s", slug)
            self.page.article_html = build_load_error()
            self.state = ArticleLoadError(slug)
            return self.state

        self.page.article_html = build_article(post, body_html)
        self.page.title = f"{post.title} — {config.site_name}"
        self.page.scroll_to(top=0, behavior="smooth")
        return self.state
