from __future__ import annotations

import argparse
import asyncio
import html
import logging
import sys
from pathlib import Path
from typing import Optional

from .app import AppContext, Renderer
from .browser import History, Page
from .config import SiteConfig, load_config
from .content import parse_list
from .fetch import FileFetcher, HttpFetcher
from .scaffold import ScaffoldError, scaffold_post
from .views import post_query

CONFIG_HELP = "Path to site config file (TOML/YAML/JSON)."


class UsageParser(argparse.ArgumentParser):
    """Argument parser that reports usage errors with exit status 1."""

    def error(self, message: str) -> None:
        self.print_usage(sys.stderr)
        print(f"{self.prog}: error: {message}", file=sys.stderr)
        sys.exit(1)


def load_site_config(argv: Optional[list[str]]) -> tuple[str, dict]:
    pre_parser = UsageParser(add_help=False)
    pre_parser.add_argument("--config", default="site.toml", help=CONFIG_HELP)
    pre_args, _ = pre_parser.parse_known_args(argv)
    return pre_args.config, load_config(Path(pre_args.config))


def site_config_from_args(config: dict, args: argparse.Namespace) -> SiteConfig:
    values = dict(config)
    for key in ("site_name", "site_url", "site_description", "language", "creator"):
        value = getattr(args, key, None)
        if value is not None:
            values[key] = value
    return SiteConfig.from_mapping(values)


def add_site_arguments(parser: argparse.ArgumentParser, config_path: str, config: dict) -> None:
    defaults = SiteConfig.from_mapping(config)

    def cfg_str(key: str) -> str:
        return str(getattr(defaults, key))

    parser.add_argument("--config", default=config_path, help=CONFIG_HELP)
    parser.add_argument("--site-name", default=cfg_str("site_name"), help="Site title.")
    parser.add_argument("--site-url", default=cfg_str("site_url"), help="Public site URL used for feed and sitemap.")
    parser.add_argument("--site-description", default=cfg_str("site_description"), help="Feed description.")
    parser.add_argument("--language", default=cfg_str("language"), help="Feed language code.")
    parser.add_argument("--creator", default=cfg_str("creator"), help="Author written into dc:creator.")


def main(argv: Optional[list[str]] = None) -> None:
    config_path, config = load_site_config(argv)
    parser = UsageParser(
        prog="new-post",
        description="Create a new post and regenerate posts.json, feed.xml and sitemap.xml.",
    )
    parser.add_argument("title", nargs="?", help="Post title.")
    parser.add_argument("slug", nargs="?", help="URL-safe post identifier.")
    parser.add_argument("tags", nargs="?", default="", help="Comma-separated tags.")
    parser.add_argument("excerpt", nargs="?", default="", help="Short summary shown in lists and feeds.")
    parser.add_argument("--root", default=".", help="Site directory containing posts/.")
    add_site_arguments(parser, config_path, config)
    args = parser.parse_args(argv)

    if not args.title or not args.slug:
        parser.print_usage(sys.stderr)
        print('Example: new-post "Post title" "post-slug" "tag1,tag2" "Short excerpt"', file=sys.stderr)
        sys.exit(1)

    site = site_config_from_args(config, args)
    try:
        result = scaffold_post(
            Path(args.root),
            args.title,
            args.slug,
            tags=parse_list(args.tags or ""),
            excerpt=args.excerpt or "",
            config=site,
        )
    except ScaffoldError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        sys.exit(1)

    md_path, index_path, feed_path, sitemap_path = result.written
    print(f"Created {md_path}")
    print(f"Updated {index_path.name} ({result.post_count} posts)")
    print(f"Updated {feed_path.name}")
    print(f"Updated {sitemap_path.name}")
    print(f"Done! Now edit {md_path} and publish the site.")


async def preview(site: SiteConfig, fetcher, slug: str) -> Page:
    url = "/" + post_query(slug) if slug else "/"
    page = Page(title=site.site_name)
    context = AppContext(config=site, page=page, history=History(url), fetcher=fetcher)
    await Renderer(context).start()
    return page


def view_main(argv: Optional[list[str]] = None) -> None:
    config_path, config = load_site_config(argv)
    parser = argparse.ArgumentParser(prog="mdblog-view", description="Render the blog page for a URL state.")
    source = parser.add_mutually_exclusive_group()
    source.add_argument("--root", default=".", help="Local site directory to read posts from.")
    source.add_argument("--base-url", default="", help="Deployed site URL to fetch posts from.")
    parser.add_argument("--post", default="", help="Slug to open; omit for the post list.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")
    add_site_arguments(parser, config_path, config)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    site = site_config_from_args(config, args)

    async def run() -> Page:
        if args.base_url:
            fetcher = HttpFetcher(args.base_url)
            try:
                return await preview(site, fetcher, args.post)
            finally:
                await fetcher.aclose()
        return await preview(site, FileFetcher(Path(args.root)), args.post)

    page = asyncio.run(run())
    print(f"<title>{html.escape(page.title)}</title>")
    print(page.visible_html)
