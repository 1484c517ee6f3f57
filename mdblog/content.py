from __future__ import annotations

import datetime as dt
import json
import logging
import re
from dataclasses import dataclass, field
from typing import Optional

from .utils import parse_post_date

logger = logging.getLogger(__name__)

UNSAFE_SLUG_RE = re.compile(r"[/\\?#&%\s]")


def parse_list(value: str) -> list[str]:
    items = [item.strip() for item in value.split(",")]
    return [item for item in items if item]


def is_safe_slug(slug: str) -> bool:
    if not slug or slug in {".", ".."}:
        return False
    return UNSAFE_SLUG_RE.search(slug) is None


@dataclass
class Post:
    slug: str
    title: str
    date: str
    excerpt: str = ""
    tags: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: object) -> "Post":
        if not isinstance(data, dict):
            raise ValueError(f"post record must be an object, got {type(data).__name__}")
        slug = data.get("slug")
        if not isinstance(slug, str) or not slug.strip():
            raise ValueError("post record has no slug")
        tags = data.get("tags")
        if tags is None:
            tags = []
        elif isinstance(tags, str):
            tags = parse_list(tags)
        elif not isinstance(tags, list):
            raise ValueError(f"post tags must be a list or string, got {type(tags).__name__}")
        return cls(
            slug=slug,
            title=str(data.get("title") or ""),
            date=str(data.get("date") or ""),
            excerpt=str(data.get("excerpt") or ""),
            tags=[str(tag) for tag in tags],
        )

    def to_dict(self) -> dict:
        return {
            "slug": self.slug,
            "title": self.title,
            "date": self.date,
            "excerpt": self.excerpt,
            "tags": list(self.tags),
        }

    @property
    def date_dt(self) -> Optional[dt.datetime]:
        return parse_post_date(self.date)


def load_records(text: str) -> list:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise ValueError(f"post index is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise ValueError("post index must be a JSON array")
    return data


def posts_from_records(records: list, strict: bool = False) -> list[Post]:
    """Build posts from raw index records.

    Invalid records and repeated slugs are skipped with a warning, or raise
    ValueError when ``strict`` is set.
    """
    posts = []
    seen = set()
    for position, item in enumerate(records):
        try:
            post = Post.from_dict(item)
            if post.slug in seen:
                raise ValueError(f"duplicate slug {post.slug!r}")
        except ValueError as exc:
            if strict:
                raise ValueError(f"post record {position}: {exc}") from exc
            logger.warning("Skipping post record %d: %s", position, exc)
            continue
        seen.add(post.slug)
        posts.append(post)
    return posts


def parse_index(text: str) -> list[Post]:
    return posts_from_records(load_records(text))


def dump_records(records: list) -> str:
    return json.dumps(records, indent=4, ensure_ascii=False) + "\n"


def sort_posts(posts: list[Post]) -> list[Post]:
    # Undated records go last; sorted() keeps ties in their original order.
    def key(post: Post) -> tuple[bool, dt.datetime]:
        date_dt = post.date_dt
        if date_dt is None:
            return False, dt.datetime.min
        return True, date_dt

    return sorted(posts, key=key, reverse=True)


def find_post(posts: list[Post], slug: str) -> Optional[Post]:
    for post in posts:
        if post.slug == slug:
            return post
    return None
