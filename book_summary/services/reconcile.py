# book_summary/services/reconcile.py
from __future__ import annotations
import json
import logging
from typing import List, Sequence

from book_summary.config import CONTINUATION_ROUNDS, CONTINUATION_TOKENS
from book_summary.errors import GenerationError
from book_summary.models import ReconciliationOutcome
from book_summary.tools.sentences import clean_sentences, extract_json, extract_sentences

log = logging.getLogger("book-summary.reconcile")


def build_continuation_prompt(sentences: Sequence[str], need: int, style: str) -> str:
    return f"""You previously returned {len(sentences)} summary sentences. Please provide exactly {need} additional summary sentences (no numbering, no extra text), as a JSON array. They must not duplicate previous sentences and must follow the same style: "{style}".
Previous sentences:
{json.dumps(list(sentences), ensure_ascii=False, indent=2)}
Respond with only a JSON array of strings.
"""


def parse_continuation(raw: str) -> List[str]:
    """A JSON array of strings if the model complied, otherwise sentences split from the raw text."""
    parsed = extract_json(raw)
    if isinstance(parsed, list):
        return clean_sentences(parsed)
    return extract_sentences(raw)


def reconcile(
    initial: Sequence[str],
    requested_count: int,
    generator,
    *,
    style: str = "",
    max_rounds: int = CONTINUATION_ROUNDS,
) -> ReconciliationOutcome:
    """
    Top `initial` up to exactly `requested_count` sentences.

    Each round asks only for the missing count and counts against `max_rounds`
    even when it adds nothing. The result is never longer than `requested_count`.
    """
    sentences = clean_sentences(initial)[:requested_count]
    seen = set(sentences)
    rounds = 0

    while len(sentences) < requested_count and rounds < max_rounds:
        need = requested_count - len(sentences)
        rounds += 1
        log.info("Continuation round %d: need %d more sentence(s)", rounds, need)
        try:
            raw = generator.generate(
                build_continuation_prompt(sentences, need, style),
                max_output_tokens=CONTINUATION_TOKENS,
            )
        except GenerationError as e:
            log.warning("Continuation round %d failed: %s", rounds, e)
            continue

        for s in parse_continuation(raw):
            if len(sentences) >= requested_count:
                break
            if s in seen:
                continue
            seen.add(s)
            sentences.append(s)

    if len(sentences) < requested_count:
        log.warning("Only %d of %d sentences after %d round(s)", len(sentences), requested_count, rounds)
    return ReconciliationOutcome(sentences=sentences, requested_count=requested_count, rounds=rounds)
