"""Wikipedia and Wikimedia Commons adapters."""

import asyncio
import logging
import re
from typing import Any
from urllib.parse import quote

import httpx

from aiwiki.data import ImageItem, MediaResult, Summary, VideoItem
from aiwiki.dedup import dedupe_by_key, truncate
from aiwiki.sources.base import DEFAULT_USER_AGENT, HTTPSource, dig, str_or_none

logger = logging.getLogger(__name__)

COMMONS_API_URL = "https://commons.wikimedia.org/w/api.php"
MEDIA_BATCH_SIZE = 10
THUMB_WIDTH = 800

_IMAGE_EXT = re.compile(r"\.(jpg|jpeg|png|gif)$", re.IGNORECASE)
_VIDEO_EXT = re.compile(r"\.(webm|ogv|ogg)$", re.IGNORECASE)


def classify_media(mime: str | None, url: str) -> str | None:
    """Classify a file as ``"image"``, ``"video"`` or neither.

    A recognised MIME type wins; the file extension is only consulted when
    the MIME type is missing or uninformative. Audio files are never media.
    """
    if mime:
        major = mime.split("/", 1)[0].lower()
        if major in ("image", "video"):
            return major
        if major == "audio":
            return None
    if _IMAGE_EXT.search(url):
        return "image"
    if _VIDEO_EXT.search(url):
        return "video"
    return None


def _chunks(items: list[str], size: int) -> list[list[str]]:
    return [items[i : i + size] for i in range(0, len(items), size)]


class WikipediaSource(HTTPSource):
    """Search, summary, suggestion and media lookups for one Wikipedia edition.

    The primary encyclopedia is ``lang="en"``; the simplified-language
    variant used by the simplifier fallback is ``lang="simple"``.

    Args:
        lang: Wikipedia language edition subdomain.
        client: Optional shared HTTP client.
        timeout: Request timeout for self-managed clients.
        user_agent: User-Agent header.
        commons_api_url: Commons action API used for file metadata.
        media_batch_size: Files per Commons metadata request.
    """

    def __init__(
        self,
        *,
        lang: str = "en",
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
        commons_api_url: str = COMMONS_API_URL,
        media_batch_size: int = MEDIA_BATCH_SIZE,
    ) -> None:
        super().__init__(client=client, timeout=timeout, user_agent=user_agent)
        self._lang = lang
        self._api_url = f"https://{lang}.wikipedia.org/w/api.php"
        self._rest_url = f"https://{lang}.wikipedia.org/api/rest_v1"
        self._commons_api_url = commons_api_url
        self._batch_size = max(media_batch_size, 1)

    @property
    def lang(self) -> str:
        return self._lang

    async def search_title(self, query: str) -> str | None:
        """Return the best-matching page title for ``query``."""
        data = await self._get_json(
            self._api_url,
            params={"action": "query", "list": "search", "srsearch": query, "format": "json"},
        )
        title = str_or_none(dig(data, "query", "search", 0, "title"))
        return title.strip() if title else None

    async def summary_by_search(self, query: str) -> Summary | None:
        """Search for the best title, then fetch that page's summary.

        Returns:
            Summary with text, canonical URL, title and thumbnail, or None if
            the search found nothing, the summary request failed, or the
            extract is empty.
        """
        title = await self.search_title(query)
        if not title:
            return None

        slug = quote(re.sub(r"\s+", "_", title), safe="")
        data = await self._get_json(f"{self._rest_url}/page/summary/{slug}")
        if data is None:
            return None

        extract = dig(data, "extract")
        text = extract.strip() if isinstance(extract, str) else ""
        if not text:
            logger.debug("Empty summary for %r on %s", title, self._lang)
            return None

        return Summary(
            text=text,
            url=str_or_none(dig(data, "content_urls", "desktop", "page")),
            title=title,
            thumb=str_or_none(dig(data, "thumbnail", "source")),
        )

    async def title_suggestions(self, term: str, *, max_results: int = 30) -> list[str]:
        """Suggest page titles for ``term``.

        Prefix matches and full-text matches are fetched concurrently;
        prefix matches keep precedence in the merged list.
        """
        prefix_data, search_data = await asyncio.gather(
            self._get_json(
                self._api_url,
                params={
                    "action": "query",
                    "list": "prefixsearch",
                    "pssearch": term,
                    "pslimit": max_results,
                    "format": "json",
                },
            ),
            self._get_json(
                self._api_url,
                params={
                    "action": "query",
                    "list": "search",
                    "srsearch": term,
                    "srlimit": max_results,
                    "format": "json",
                },
            ),
        )

        titles: list[str] = []
        for hits in (dig(prefix_data, "query", "prefixsearch"), dig(search_data, "query", "search")):
            if not isinstance(hits, list):
                continue
            for hit in hits:
                title = str_or_none(dig(hit, "title"))
                if title:
                    titles.append(title.strip())

        return truncate(dedupe_by_key(titles, key=lambda t: t), max_results)

    async def media(self, title: str, *, max_items: int = 12) -> MediaResult:
        """List images and videos attached to page ``title``.

        Args:
            title: Canonical page title.
            max_items: Maximum files to inspect and images to return. Videos
                are capped at ``max(2, max_items // 6)``.

        Returns:
            Classified media; empty on any failure.
        """
        data = await self._get_json(
            self._api_url,
            params={
                "action": "query",
                "prop": "images",
                "titles": title,
                "imlimit": max_items,
                "format": "json",
            },
        )
        pages = dig(data, "query", "pages")
        if not isinstance(pages, dict) or not pages:
            return MediaResult()

        first_page = next(iter(pages.values()))
        files = dig(first_page, "images")
        file_titles = [
            t for t in (dig(f, "title") for f in (files if isinstance(files, list) else []))
            if isinstance(t, str)
        ]
        if not file_titles:
            return MediaResult()

        batches = _chunks(file_titles[:max_items], self._batch_size)
        infos = await asyncio.gather(*(self._file_info(batch) for batch in batches))

        images: list[ImageItem] = []
        videos: list[VideoItem] = []
        for info in (page for batch in infos for page in batch):
            file_title = str_or_none(dig(info, "title"))
            url = str_or_none(dig(info, "imageinfo", 0, "url"))
            if not file_title or not url:
                continue
            thumb = str_or_none(dig(info, "imageinfo", 0, "thumburl")) or url
            kind = classify_media(str_or_none(dig(info, "imageinfo", 0, "mime")), url)
            if kind == "image":
                images.append(ImageItem(url=url, thumb=thumb, title=file_title))
            elif kind == "video":
                videos.append(VideoItem(url=url, poster=thumb, title=file_title))

        return MediaResult(
            images=tuple(truncate(images, max_items)),
            videos=tuple(truncate(videos, max(2, max_items // 6))),
        )

    async def _file_info(self, file_titles: list[str]) -> list[dict[str, Any]]:
        """Fetch Commons metadata for one batch of file titles."""
        data = await self._get_json(
            self._commons_api_url,
            params={
                "action": "query",
                "titles": "|".join(file_titles),
                "prop": "imageinfo",
                "iiprop": "url|mime|thumbmime",
                "iiurlwidth": THUMB_WIDTH,
                "format": "json",
            },
        )
        pages = dig(data, "query", "pages")
        if not isinstance(pages, dict):
            return []
        return [page for page in pages.values() if isinstance(page, dict)]
