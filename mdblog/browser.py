"""In-memory stand-ins for the browser surfaces the renderer drives.

``Page`` holds the two content slots and the document title, ``History``
is the session history stack addressed by URL, and ``Event`` is a user
activation whose default action can be suppressed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional
from urllib.parse import urljoin, urlsplit


@dataclass
class Event:
    default_prevented: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True


@dataclass
class Page:
    title: str = ""
    list_html: str = ""
    article_html: str = ""
    list_visible: bool = True
    article_visible: bool = False
    scrolls: list[tuple[int, str]] = field(default_factory=list)

    def show_list(self) -> None:
        self.list_visible = True
        self.article_visible = False

    def show_article(self) -> None:
        self.list_visible = False
        self.article_visible = True

    def scroll_to(self, top: int = 0, behavior: str = "auto") -> None:
        self.scrolls.append((top, behavior))

    @property
    def visible_html(self) -> str:
        return self.article_html if self.article_visible else self.list_html


@dataclass
class HistoryEntry:
    url: str
    state: Optional[dict[str, Any]] = None


class History:
    def __init__(self, url: str = "/"):
        self.entries = [HistoryEntry(url)]
        self.index = 0

    @property
    def location(self) -> str:
        return self.entries[self.index].url

    @property
    def state(self) -> Optional[dict[str, Any]]:
        return self.entries[self.index].state

    @property
    def pathname(self) -> str:
        return urlsplit(self.location).path or "/"

    def __len__(self) -> int:
        return len(self.entries)

    def push_state(self, state: Optional[dict[str, Any]], url: str) -> None:
        resolved = urljoin(self.location, url)
        del self.entries[self.index + 1 :]
        self.entries.append(HistoryEntry(resolved, state))
        self.index += 1

    def go(self, delta: int) -> bool:
        target = self.index + delta
        if delta == 0 or not 0 <= target < len(self.entries):
            return False
        self.index = target
        return True

    def back(self) -> bool:
        return self.go(-1)

    def forward(self) -> bool:
        return self.go(1)
