from __future__ import annotations

import datetime as dt
from typing import Optional
from urllib.parse import urlencode

from .config import SiteConfig
from .content import Post
from .utils import escape_xml, join_url, parse_post_date, rfc822_date


def post_url(site_url: str, slug: str) -> str:
    return f"{site_url.rstrip('/')}/?{urlencode({'post': slug})}"


def post_pub_date(post: Post) -> str:
    date_dt = parse_post_date(post.date)
    if date_dt is None:
        return ""
    return rfc822_date(date_dt.replace(hour=0, minute=0, second=0, microsecond=0))


def build_rss(posts: list[Post], config: SiteConfig, now: Optional[dt.datetime] = None) -> str:
    site_url = config.site_url.rstrip("/")
    now = now or dt.datetime.now(dt.timezone.utc)
    items = []
    for post in posts:
        link = escape_xml(post_url(site_url, post.slug))
        pub_date = post_pub_date(post)
        item = [
            "    <item>",
            f"      <title>{escape_xml(post.title)}</title>",
            f"      <link>{link}</link>",
            f'      <guid isPermaLink="true">{link}</guid>',
        ]
        if pub_date:
            item.append(f"      <pubDate>{pub_date}</pubDate>")
        item.extend(
            [
                f"      <description>{escape_xml(post.excerpt or '')}</description>",
                f"      <dc:creator>{escape_xml(config.author)}</dc:creator>",
                "    </item>",
            ]
        )
        items.append("\n".join(item))
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom" '
        'xmlns:dc="http://purl.org/dc/elements/1.1/">',
        "  <channel>",
        f"    <title>{escape_xml(config.site_name)}</title>",
        f"    <link>{escape_xml(site_url)}</link>",
        f"    <description>{escape_xml(config.description)}</description>",
        f"    <language>{escape_xml(config.language)}</language>",
        f"    <lastBuildDate>{rfc822_date(now)}</lastBuildDate>",
        f'    <atom:link href="{escape_xml(join_url(site_url, config.feed_file))}" '
        'rel="self" type="application/rss+xml"/>',
    ]
    lines.extend(items)
    lines.extend(["  </channel>", "</rss>"])
    return "\n".join(lines) + "\n"


def build_sitemap(posts: list[Post], config: SiteConfig, today: dt.date) -> str:
    site_url = config.site_url.rstrip("/")
    today_str = today.isoformat()
    urls = [
        (site_url + "/", today_str, "weekly", "1.0"),
        (join_url(site_url, config.about_page), today_str, "monthly", "0.5"),
    ]
    for post in posts:
        urls.append((post_url(site_url, post.slug), post.date, "monthly", "0.8"))
    items = []
    for loc, lastmod, changefreq, priority in urls:
        items.append(
            "\n".join(
                [
                    "  <url>",
                    f"    <loc>{escape_xml(loc)}</loc>",
                    f"    <lastmod>{escape_xml(lastmod)}</lastmod>",
                    f"    <changefreq>{changefreq}</changefreq>",
                    f"    <priority>{priority}</priority>",
                    "  </url>",
                ]
            )
        )
    sitemap = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">',
        "\n".join(items),
        "</urlset>",
    ]
    return "\n".join(line for line in sitemap if line) + "\n"
