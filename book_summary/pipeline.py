"""
Request pipeline: catalog lookup -> structured generation -> sentence reconciliation.

Everything external (catalog, generator, settings) arrives through a
SummaryContext so tests can swap in fakes.
"""
from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Any

from book_summary.config import OutputMode, Settings
from book_summary.errors import GenerationError, ParseFailure
from book_summary.models import GenerationRequest
from book_summary.schemas import SummaryResponse
from book_summary.services.reconcile import reconcile
from book_summary.services.structured import request_structured_summary, request_text_summary
from book_summary.tools.catalog import find_best_match
from book_summary.tools.filters import contains_profanity

log = logging.getLogger("book-summary")

MSG_EMPTY_TITLE = "Please enter a book title."
MSG_PROFANITY = "Let's keep it respectful. Please rephrase your request."
MSG_NOT_FOUND = "Book not found. Please check the title and try again."
MSG_NOT_EXISTS = "This book does not seem to exist, or its description is too thin to summarize."
MSG_PARSE_FAILED = "Summary generation failed (the model response could not be parsed)."
MSG_ERROR = "An error occurred."


@dataclass
class SummaryContext:
    settings: Settings
    catalog: Any
    generator: Any


def clamp_count(num: Any, *, default: int = 5, maximum: int = 70) -> int:
    """Coerce the client's sentence count into [1, maximum]; junk or 0 means `default`."""
    try:
        n = int(float(num)) if isinstance(num, str) else int(num)
    except (TypeError, ValueError, OverflowError):
        n = 0
    if not n:
        n = default
    return max(1, min(maximum, n))


def shortfall_note(delivered: int, requested: int) -> str:
    return f"(Only {delivered} of {requested} requested sentences were produced.)"


def summarize_book(title: str, style: str, num: Any, ctx: SummaryContext) -> SummaryResponse:
    """
    Run one summary request end to end. Never raises for expected failures:
    every outcome is a SummaryResponse.
    """
    settings = ctx.settings
    title = (title or "").strip()
    style = (style or "").strip() or settings.default_style
    count = clamp_count(num, default=settings.default_sentences, maximum=settings.max_sentences)

    if not title:
        return SummaryResponse(found=False, intro="", error=MSG_EMPTY_TITLE, requested_count=count)

    if settings.profanity_filter and contains_profanity(title, style):
        return SummaryResponse(found=False, intro=MSG_PROFANITY, error=MSG_PROFANITY, requested_count=count)

    # 1) resolve the title against the catalog
    match = find_best_match(
        title,
        ctx.catalog,
        threshold=settings.match_threshold,
        strategy=settings.match_strategy,
    )
    if match is None:
        return SummaryResponse(found=False, corrected_title=None, intro=MSG_NOT_FOUND, requested_count=count)

    book = match.candidate
    req = GenerationRequest(
        title=book.title or title,
        authors=book.authors,
        description=book.description,
        style=style,
        requested_count=count,
    )

    # 2) initial generation
    try:
        if settings.output_mode is OutputMode.SCHEMA:
            result = request_structured_summary(req, ctx.generator, language=settings.language)
        else:
            result = request_text_summary(req, ctx.generator, language=settings.language)
    except (ParseFailure, GenerationError) as e:
        log.warning("Generation failed for %r: %s", req.title, e)
        return SummaryResponse(
            found=True, corrected_title=req.title, intro=MSG_PARSE_FAILED, requested_count=count,
        )

    if not result.exists:
        return SummaryResponse(
            found=False,
            corrected_title=result.corrected_title or req.title,
            intro=result.intro or MSG_NOT_EXISTS,
            requested_count=count,
        )

    # 3) top up to exactly `count` sentences
    outcome = reconcile(result.sentences, count, ctx.generator, style=style)

    summary = " ".join(outcome.sentences)
    if outcome.shortfall:
        summary = f"{summary}\n\n{shortfall_note(outcome.delivered_count, count)}".lstrip()

    return SummaryResponse(
        found=True,
        corrected_title=result.corrected_title or req.title,
        intro=result.intro,
        summary=summary,
        sentences=outcome.sentences,
        requested_count=count,
        delivered_count=outcome.delivered_count,
    )


def describe_settings(settings: Settings) -> dict:
    return {
        "match_strategy": settings.match_strategy.value,
        "output_mode": settings.output_mode.value,
        "match_threshold": settings.match_threshold,
        "model": settings.chat_model,
    }
