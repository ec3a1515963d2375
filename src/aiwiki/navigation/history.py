"""Browser-style history stack."""

from typing import Protocol
from urllib.parse import parse_qs, quote, urlsplit

from aiwiki.data import HistoryEntry, View


def url_for(entry: HistoryEntry) -> str:
    """URL shown for ``entry``: ``?q=<query>`` on results, ``/`` otherwise."""
    if entry.view is View.RESULTS and entry.query:
        return f"?q={quote(entry.query, safe='')}"
    return "/"


def parse_query(url: str) -> str:
    """Read the trimmed ``q`` parameter from a URL or query string."""
    query_string = urlsplit(url).query if "?" in url else url.lstrip("?")
    values = parse_qs(query_string).get("q", [])
    return values[0].strip() if values else ""


class History(Protocol):
    """The subset of the browser history API the session needs."""

    @property
    def current(self) -> HistoryEntry | None: ...

    def push(self, entry: HistoryEntry) -> None: ...

    def replace(self, entry: HistoryEntry) -> None: ...

    def back(self) -> HistoryEntry | None: ...

    def forward(self) -> HistoryEntry | None: ...


class InMemoryHistory:
    """History stack with a cursor, behaving like ``window.history``.

    ``push`` discards any forward entries. ``back`` and ``forward`` move the
    cursor and return the entry now current; the host is expected to feed
    that entry to the session as a popstate event.
    """

    def __init__(self) -> None:
        self._entries: list[HistoryEntry] = []
        self._index = -1

    @property
    def current(self) -> HistoryEntry | None:
        if self._index < 0:
            return None
        return self._entries[self._index]

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    @property
    def url(self) -> str:
        return url_for(self.current) if self.current else "/"

    def __len__(self) -> int:
        return len(self._entries)

    def push(self, entry: HistoryEntry) -> None:
        del self._entries[self._index + 1 :]
        self._entries.append(entry)
        self._index = len(self._entries) - 1

    def replace(self, entry: HistoryEntry) -> None:
        if self._index < 0:
            self.push(entry)
        else:
            self._entries[self._index] = entry

    def back(self) -> HistoryEntry | None:
        if self._index > 0:
            self._index -= 1
        return self.current

    def forward(self) -> HistoryEntry | None:
        if self._index < len(self._entries) - 1:
            self._index += 1
        return self.current
