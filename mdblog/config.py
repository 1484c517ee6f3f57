from __future__ import annotations

import json
import sys
import tomllib
from dataclasses import dataclass, fields
from pathlib import Path

import yaml

DEFAULT_SITE_NAME = "微观算力经济学"
DEFAULT_SITE_URL = "https://fungtion.github.io/webio"


@dataclass(frozen=True)
class SiteConfig:
    site_name: str = DEFAULT_SITE_NAME
    site_url: str = DEFAULT_SITE_URL
    site_description: str = ""
    language: str = "zh-CN"
    creator: str = ""
    posts_dir: str = "posts"
    index_file: str = "posts.json"
    feed_file: str = "feed.xml"
    sitemap_file: str = "sitemap.xml"
    about_page: str = "about.html"
    content_ext: str = "md"

    @classmethod
    def from_mapping(cls, data: dict) -> "SiteConfig":
        known = {field.name for field in fields(cls)}
        values = {key: str(value) for key, value in data.items() if key in known and value is not None}
        return cls(**values)

    @property
    def description(self) -> str:
        return self.site_description or self.site_name

    @property
    def author(self) -> str:
        return self.creator or self.site_name

    @property
    def index_path(self) -> str:
        return f"{self.posts_dir}/{self.index_file}"

    def content_path(self, slug: str) -> str:
        return f"{self.posts_dir}/{slug}.{self.content_ext}"


def load_config(path: Path) -> dict:
    if not path.exists():
        return {}
    suffix = path.suffix.lower()
    text = path.read_text(encoding="utf-8")
    if suffix == ".toml":
        try:
            data = tomllib.loads(text)
        except tomllib.TOMLDecodeError as exc:
            print(f"Invalid TOML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
    elif suffix in {".yml", ".yaml"}:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            print(f"Invalid YAML in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
        if data is None:
            return {}
    else:
        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            print(f"Invalid JSON in config file {path}: {exc}", file=sys.stderr)
            sys.exit(1)
    if not isinstance(data, dict):
        print(f"Config file must be a mapping: {path}", file=sys.stderr)
        sys.exit(1)
    return data
