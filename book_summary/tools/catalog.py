from __future__ import annotations
import logging
from typing import List, Optional, Sequence

import httpx

from book_summary.config import MatchStrategy
from book_summary.models import CatalogCandidate, MatchResult
from book_summary.tools.similarity import similarity

log = logging.getLogger("book-summary.catalog")

GOOGLE_BOOKS_URL = "https://www.googleapis.com/books/v1/volumes"
MAX_RESULTS = 10
DEFAULT_THRESHOLD = 0.45


class GoogleBooksCatalog:
    """Google Books volume search. Every failure comes back as an empty list."""

    def __init__(
        self,
        *,
        api_key: str = "",
        timeout: float = 10.0,
        client: Optional[httpx.Client] = None,
        url: str = GOOGLE_BOOKS_URL,
    ):
        self.api_key = api_key
        self.url = url
        self.client = client or httpx.Client(timeout=timeout, follow_redirects=True)

    def search(self, query: str, *, limit: int = MAX_RESULTS) -> List[CatalogCandidate]:
        params = {"q": query, "maxResults": limit}
        if self.api_key:
            params["key"] = self.api_key
        try:
            resp = self.client.get(self.url, params=params)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            log.warning("Google Books search failed for %r: %s", query, e)
            return []

        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            if items:
                log.warning("Unexpected Google Books payload for %r: items is %s", query, type(items).__name__)
            return []
        candidates = (_to_candidate(it) for it in items[:limit] if isinstance(it, dict))
        return [c for c in candidates if c is not None]

    def close(self) -> None:
        self.client.close()


def _text(value) -> str:
    return value.strip() if isinstance(value, str) else ""


def _to_candidate(item: dict) -> Optional[CatalogCandidate]:
    info = item.get("volumeInfo")
    if not isinstance(info, dict):
        return None
    authors = info.get("authors")
    if not isinstance(authors, list):
        authors = []
    return CatalogCandidate(
        id=str(item.get("id") or ""),
        title=_text(info.get("title")),
        authors=", ".join(a for a in authors if isinstance(a, str)),
        description=info.get("description") if isinstance(info.get("description"), str) else "",
    )


def rank_candidates(query: str, candidates: Sequence[CatalogCandidate]) -> List[MatchResult]:
    """Score every candidate title against the query; best first, catalog order on ties."""
    scored = [MatchResult(candidate=c, score=similarity(query, c.title)) for c in candidates]
    return sorted(scored, key=lambda m: m.score, reverse=True)


def find_best_match(
    query: str,
    catalog,
    *,
    threshold: float = DEFAULT_THRESHOLD,
    strategy: MatchStrategy = MatchStrategy.FUZZY,
) -> Optional[MatchResult]:
    """
    Return the best catalog match for `query`, or None when nothing clears the bar.
    With MatchStrategy.NONE the catalog is skipped and the query is taken as-is.
    """
    if strategy is MatchStrategy.NONE:
        return MatchResult(candidate=CatalogCandidate(id="", title=query), score=1.0)

    candidates = catalog.search(query, limit=MAX_RESULTS)
    if not candidates:
        log.info("No catalog results for %r", query)
        return None

    ranked = rank_candidates(query, candidates)
    top = ranked[0]
    bar = 1.0 if strategy is MatchStrategy.EXACT else threshold
    if top.score >= bar:
        log.info("Matched %r -> %r (score %.2f)", query, top.candidate.title, top.score)
        return top
    log.info("Best candidate %r for %r scored %.2f, below %.2f", top.candidate.title, query, top.score, bar)
    return None
