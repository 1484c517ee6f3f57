from __future__ import annotations

import html
from urllib.parse import urlencode

from .content import Post
from .utils import format_date

EMPTY_TEXT = "暂无文章，敬请期待"
NOT_FOUND_TEXT = "文章未找到"
LOAD_ERROR_TEXT = "加载文章失败，请稍后再试"
SKELETON_CARDS = 3


def post_query(slug: str) -> str:
    return "?" + urlencode({"post": slug})


def build_tag_chips(tags: list[str]) -> str:
    return "".join(f'<span class="post-tag">{html.escape(tag)}</span>' for tag in tags)


def build_placeholder(kind: str, icon: str, text: str) -> str:
    return (
        f'<div class="placeholder placeholder-{kind}">'
        f'<p class="placeholder-icon">{icon}</p>'
        f'<p class="placeholder-text">{html.escape(text)}</p>'
        "</div>"
    )


def build_list_skeleton(count: int = SKELETON_CARDS) -> str:
    return "".join('<div class="skeleton-card loading-skeleton"></div>' for _ in range(count))


def build_post_cards(posts: list[Post]) -> str:
    if not posts:
        return build_placeholder("empty", "📝", EMPTY_TEXT)
    cards = []
    for post in posts:
        slug = html.escape(post.slug)
        href = html.escape(post_query(post.slug))
        cards.append(
            f'<a class="post-card" href="{href}" data-slug="{slug}">'
            '<div class="post-card-meta">'
            f'<span class="post-date">{format_date(post.date)}</span>'
            f"{build_tag_chips(post.tags)}"
            "</div>"
            f'<h3 class="post-card-title">{html.escape(post.title)}</h3>'
            f'<p class="post-card-excerpt">{html.escape(post.excerpt)}</p>'
            '<span class="post-card-arrow">→</span>'
            "</a>"
        )
    return "\n".join(cards)


def build_article_skeleton() -> str:
    return (
        '<div class="post-header">'
        '<span class="post-date loading-skeleton">&nbsp;</span>'
        '<div class="post-title loading-skeleton">&nbsp;</div>'
        "</div>"
    )


def build_article(post: Post, body_html: str) -> str:
    tags_html = build_tag_chips(post.tags)
    tags_block = f'<div class="post-tags">{tags_html}</div>' if tags_html else ""
    return (
        '<div class="post-header">'
        f'<span class="post-date">{format_date(post.date)}</span>'
        f'<h1 class="post-title">{html.escape(post.title)}</h1>'
        f"{tags_block}"
        "</div>"
        f'<div class="post-body">{body_html}</div>'
    )


def build_not_found() -> str:
    return build_placeholder("not-found", "😕", NOT_FOUND_TEXT)


def build_load_error() -> str:
    return build_placeholder("load-error", "⚠️", LOAD_ERROR_TEXT)
