from __future__ import annotations
from pathlib import Path
from typing import Iterable

from better_profanity import profanity

DATA_DIR = Path(__file__).resolve().parents[2] / "data"
WORD_LISTS = ("profanity_en.txt", "profanity_ko.txt")


def _read_words(paths: Iterable[Path]) -> list[str]:
    words: list[str] = []
    for path in paths:
        if path.exists():
            words.extend(w.strip() for w in path.read_text(encoding="utf-8").splitlines() if w.strip())
    return words


# default English list, plus optional local lists (one word per line)
profanity.load_censor_words()
_extra = _read_words(DATA_DIR / name for name in WORD_LISTS)
if _extra:
    profanity.add_censor_words(_extra)


def contains_profanity(*texts: str) -> bool:
    """True if any of the user-supplied fields (title, style) is offensive."""
    return any(profanity.contains_profanity(t) for t in texts if t)
