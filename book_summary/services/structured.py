# book_summary/services/structured.py
from __future__ import annotations
import logging

from book_summary.config import INITIAL_TOKENS, PARSE_RETRIES, REPAIR_TOKENS
from book_summary.errors import ParseFailure
from book_summary.models import GenerationRequest, GenerationResult
from book_summary.tools.sentences import clean_sentences, extract_json, extract_sentences

log = logging.getLogger("book-summary.structured")

SCHEMA_LINE = '{ "exists": boolean, "corrected_title": string, "intro": string, "summary_sentences": [strings] }'


def _book_facts(req: GenerationRequest) -> str:
    description = " ".join((req.description or "").splitlines())
    return (
        f"Title: {req.title}\n"
        f"Authors: {req.authors}\n"
        f"Description: {description}"
    )


def build_summary_prompt(req: GenerationRequest, *, language: str = "Korean") -> str:
    n = req.requested_count
    return f"""You are a precise summarization assistant. Output MUST be valid JSON only (no extra text) with this exact schema:

{{
  "exists": boolean,
  "corrected_title": string,
  "intro": string,                // 1-2 sentence book intro (no invention)
  "summary_sentences": [strings]  // an array of exactly {n} sentences; each element is one sentence.
}}

Rules:
- Do NOT invent facts beyond the provided book description below. If you cannot be sure this book exists or the description is missing, set "exists": false and set "intro" to a short explanation.
- "summary_sentences" must contain exactly {n} items. If you cannot produce exactly {n} sentences without inventing content, produce as many true sentences as possible and set exists=false.
- Use the following style instruction (user-provided) to shape wording: "{req.style}"
- Language: use the language the user requested (assume {language} unless the style says otherwise).

Provided book info (from the catalog):
{_book_facts(req)}

Now produce the JSON only.
"""


def build_repair_prompt(req: GenerationRequest, previous_raw: str) -> str:
    return f"""The previous response did not contain valid JSON. Reply with ONLY valid JSON matching the schema. This is the schema:

{SCHEMA_LINE}

Reminder: summary_sentences must have exactly {req.requested_count} items if possible.
Use the same book info and style ("{req.style}").

{_book_facts(req)}

Previous output:
{previous_raw}
"""


def build_text_prompt(req: GenerationRequest, *, language: str = "Korean") -> str:
    n = req.requested_count
    return f"""Summarize the book below without inventing facts beyond its description.
On the first line write a 1-2 sentence introduction of the book.
Then write exactly {n} summary sentences, one sentence per line, no numbering, no extra text.
Style instruction (user-provided): "{req.style}"
Language: assume {language} unless the style says otherwise.

{_book_facts(req)}
"""


def _to_result(parsed: dict, req: GenerationRequest) -> GenerationResult:
    raw_sentences = parsed.get("summary_sentences")
    if isinstance(raw_sentences, str):
        sentences = extract_sentences(raw_sentences)
    elif isinstance(raw_sentences, list):
        sentences = clean_sentences(raw_sentences)
    else:
        sentences = []
    return GenerationResult(
        # only an explicit false counts as "does not exist"
        exists=parsed.get("exists") is not False,
        corrected_title=str(parsed.get("corrected_title") or req.title),
        intro=str(parsed.get("intro") or ""),
        sentences=sentences,
    )


def request_structured_summary(
    req: GenerationRequest,
    generator,
    *,
    language: str = "Korean",
    retries: int = PARSE_RETRIES,
) -> GenerationResult:
    """
    Ask for the JSON summary object and parse it defensively.
    Re-prompts up to `retries` times on unparseable output, then raises ParseFailure.
    GenerationError from the generator propagates.
    """
    raw = generator.generate(build_summary_prompt(req, language=language), max_output_tokens=INITIAL_TOKENS)
    parsed = extract_json(raw)

    tries = 0
    while not isinstance(parsed, dict) and tries < retries:
        tries += 1
        log.info("Unparseable summary output, re-prompting (%d/%d)", tries, retries)
        raw = generator.generate(build_repair_prompt(req, raw), max_output_tokens=REPAIR_TOKENS)
        parsed = extract_json(raw)

    if not isinstance(parsed, dict):
        raise ParseFailure(f"no valid JSON after {tries + 1} attempts", raw=raw)
    return _to_result(parsed, req)


def request_text_summary(req: GenerationRequest, generator, *, language: str = "Korean") -> GenerationResult:
    """Free-text variant: first line is the intro, every following sentence is summary."""
    raw = generator.generate(build_text_prompt(req, language=language), max_output_tokens=INITIAL_TOKENS)
    lines = [line.strip() for line in (raw or "").splitlines() if line.strip()]
    intro = lines[0] if lines else ""
    sentences = clean_sentences(extract_sentences("\n".join(lines[1:])))
    return GenerationResult(exists=True, corrected_title=req.title, intro=intro, sentences=sentences)
