"""
Wikipedia and cat-fact content sources.

Handles HTTP communication with the public Wikipedia APIs and the
catfact.ninja API. Each source call yields one Item or raises
ProviderFailure; there is no retry, a failed call is simply dropped from
its batch.
"""

from __future__ import annotations

import random
from typing import Any
from urllib.parse import quote

import httpx
from loguru import logger

from ..errors import ProviderFailure
from ..models import CategoryKey, Item


class WikipediaSource:
    """HTTP client drawing random article summaries from Wikipedia categories."""

    def __init__(
        self,
        api_url: str = "https://en.wikipedia.org/w/api.php",
        rest_url: str = "https://en.wikipedia.org/api/rest_v1",
        page_url: str = "https://en.wikipedia.org/wiki",
        timeout_seconds: float = 3.5,
        member_limit: int = 50,
        client: httpx.AsyncClient | None = None,
        rng: random.Random | None = None,
    ):
        """
        Initialize Wikipedia source.

        Args:
            api_url: MediaWiki action API endpoint
            rest_url: REST API base for page summaries
            page_url: Base URL used when a summary has no page link
            timeout_seconds: Per-request timeout
            member_limit: Category members listed per draw
            client: Shared HTTP client (one is created if omitted)
            rng: Random source for category/article picks
        """
        self.api_url = api_url
        self.rest_url = rest_url.rstrip("/")
        self.page_url = page_url.rstrip("/")
        self.member_limit = member_limit
        self.rng = rng or random.Random()
        self.client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds),
            follow_redirects=True,
            headers={"Accept": "application/json"},
        )

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def get_json(self, url: str, params: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        GET a JSON document.

        Raises:
            ProviderFailure: On network error, non-success status or non-JSON body
        """
        try:
            response = await self.client.get(url, params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise ProviderFailure(f"HTTP {e.response.status_code}", source=url) from e
        except httpx.HTTPError as e:
            raise ProviderFailure(f"request failed: {e}", source=url) from e
        except ValueError as e:
            raise ProviderFailure(f"malformed JSON: {e}", source=url) from e
        if not isinstance(data, dict):
            raise ProviderFailure("unexpected payload", source=url)
        return data

    async def random_from_categories(self, categories: list[str], category: CategoryKey) -> Item:
        """
        Summary of a random article from one of the given categories.

        Args:
            categories: Wikipedia category names (without the "Category:" prefix)
            category: Subject the resulting item is filed under

        Returns:
            Item with title, extract text, page URL and thumbnail when present
        """
        wiki_category = self.rng.choice(categories)
        listing = await self.get_json(
            self.api_url,
            params={
                "action": "query",
                "list": "categorymembers",
                "cmtitle": f"Category:{wiki_category}",
                "cmlimit": self.member_limit,
                "format": "json",
                "origin": "*",
            },
        )
        members = (listing.get("query") or {}).get("categorymembers") or []
        articles = [m for m in members if isinstance(m, dict) and m.get("ns") == 0 and m.get("title")]
        if not articles:
            raise ProviderFailure(f"no pages in Category:{wiki_category}", source="wikipedia")

        pick = self.rng.choice(articles)
        title_enc = quote(pick["title"], safe="")
        summary = await self.get_json(f"{self.rest_url}/page/summary/{title_enc}")

        desktop = (summary.get("content_urls") or {}).get("desktop") or {}
        image = (summary.get("thumbnail") or {}).get("source") or (summary.get("originalimage") or {}).get("source")
        logger.debug(f"Wikipedia draw: {wiki_category} -> {pick['title']}")
        return Item(
            title=summary.get("title") or pick["title"],
            text=summary.get("extract") or summary.get("description") or pick["title"],
            category=category,
            source_url=desktop.get("page") or f"{self.page_url}/{title_enc}",
            image_url=image,
        )


class CatFactSource:
    """Single-sentence animal facts, backed by a Wikipedia biology draw."""

    TITLE = "Cat Fact"
    FALLBACK_CATEGORIES = ["Biology", "Animals", "Plants"]

    def __init__(self, wikipedia: WikipediaSource, url: str = "https://catfact.ninja/fact"):
        self.wikipedia = wikipedia
        self.url = url

    async def fetch(self) -> Item:
        try:
            data = await self.wikipedia.get_json(self.url)
            fact = data.get("fact")
            if not fact:
                raise ProviderFailure("empty fact", source=self.url)
            return Item(
                title=self.TITLE,
                text=fact,
                category=CategoryKey.NATURE,
                source_url=self.url.rsplit("/", 1)[0] + "/",
            )
        except ProviderFailure as e:
            logger.debug(f"Cat fact unavailable ({e}), falling back to Wikipedia")
            return await self.wikipedia.random_from_categories(self.FALLBACK_CATEGORIES, CategoryKey.NATURE)
