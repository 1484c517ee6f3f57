"""Create a new post and rebuild the files derived from the post index.

A run writes, in order: the markdown stub, the updated index, the RSS feed
and the sitemap. Every precondition is checked and every document is
rendered before the first write, so a refused run leaves the site untouched.
A failing write after the first one is not rolled back.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .config import SiteConfig
from .content import Post, dump_records, find_post, is_safe_slug, load_records, posts_from_records
from .feeds import build_rss, build_sitemap
from .render import write_text

PLACEHOLDER_BODY = "在这里开始撰写你的文章..."


class ScaffoldError(Exception):
    pass


@dataclass
class ScaffoldResult:
    post: Post
    post_count: int
    written: list[Path] = field(default_factory=list)


def post_stub(title: str) -> str:
    return f"# {title}\n\n{PLACEHOLDER_BODY}\n"


def read_index(path: Path) -> tuple[list, list[Post]]:
    if not path.exists():
        return [], []
    try:
        records = load_records(path.read_text(encoding="utf-8"))
        return records, posts_from_records(records, strict=True)
    except ValueError as exc:
        raise ScaffoldError(f"Malformed index {path}: {exc}") from exc


def scaffold_post(
    root: Path,
    title: str,
    slug: str,
    tags: Optional[list[str]] = None,
    excerpt: str = "",
    config: Optional[SiteConfig] = None,
    today: Optional[dt.date] = None,
    now: Optional[dt.datetime] = None,
) -> ScaffoldResult:
    config = config or SiteConfig()
    if not title.strip():
        raise ScaffoldError("Title must not be empty.")
    if not is_safe_slug(slug):
        raise ScaffoldError(f"Slug is not URL-safe: {slug!r}")

    root = Path(root)
    posts_dir = root / config.posts_dir
    md_path = root / config.content_path(slug)
    index_path = root / config.index_path
    feed_path = root / config.feed_file
    sitemap_path = root / config.sitemap_file

    if md_path.exists():
        raise ScaffoldError(f"{md_path} already exists!")
    records, posts = read_index(index_path)
    if find_post(posts, slug) is not None:
        raise ScaffoldError(f"Slug {slug!r} is already listed in {index_path}")

    today = today or dt.date.today()
    post = Post(slug=slug, title=title, date=today.isoformat(), excerpt=excerpt, tags=list(tags or []))
    posts.insert(0, post)

    outputs = [
        (md_path, post_stub(title)),
        (index_path, dump_records([post.to_dict(), *records])),
        (feed_path, build_rss(posts, config, now=now)),
        (sitemap_path, build_sitemap(posts, config, today)),
    ]
    posts_dir.mkdir(parents=True, exist_ok=True)
    result = ScaffoldResult(post=post, post_count=len(posts))
    for path, text in outputs:
        write_text(path, text)
        result.written.append(path)
    return result
