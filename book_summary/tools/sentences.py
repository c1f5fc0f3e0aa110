from __future__ import annotations
import json
import re
from typing import Any, Iterable, List

_LINE_BREAK = re.compile(r"\r?\n")
_SENTENCE_END = re.compile(r"(?<=[.?!])\s+")
_FENCE = re.compile(r"^```[a-zA-Z]*\s*|\s*```$")


def extract_sentences(text: str) -> List[str]:
    """Split free text into sentences: by line first, then after . ? ! followed by whitespace."""
    out: List[str] = []
    for line in _LINE_BREAK.split(text or ""):
        line = line.strip()
        if not line:
            continue
        for part in _SENTENCE_END.split(line):
            part = part.strip()
            if part:
                out.append(part)
    return out


def clean_sentences(items: Iterable[Any]) -> List[str]:
    """Trim, drop blanks and non-strings, dedupe keeping first occurrence."""
    seen = set()
    out: List[str] = []
    for item in items or []:
        if not isinstance(item, str):
            continue
        s = item.strip()
        if s and s not in seen:
            seen.add(s)
            out.append(s)
    return out


def extract_json(text: str) -> Any:
    """
    Best-effort JSON from model output. Tries the whole text, then the outermost
    {...} or [...] span. Returns None when nothing parses.
    """
    if not text:
        return None
    raw = _FENCE.sub("", text.strip())
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        pass
    for open_ch, close_ch in (("{", "}"), ("[", "]")):
        start = raw.find(open_ch)
        end = raw.rfind(close_ch)
        if start >= 0 and end > start:
            try:
                return json.loads(raw[start:end + 1])
            except json.JSONDecodeError:
                continue
    return None
