from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
import os

from dotenv import load_dotenv


class MatchStrategy(str, Enum):
    NONE = "none"     # skip the catalog, trust the model
    EXACT = "exact"   # accept only a case-insensitive exact title
    FUZZY = "fuzzy"   # accept the best title above the threshold


class OutputMode(str, Enum):
    TEXT = "text"
    SCHEMA = "schema"


# Retry caps
PARSE_RETRIES = 2
CONTINUATION_ROUNDS = 3

# Output-token budgets per request kind
INITIAL_TOKENS = 1400
REPAIR_TOKENS = 800
CONTINUATION_TOKENS = 600


@dataclass(frozen=True)
class Settings:
    chat_model: str = "gpt-4o-mini"
    google_books_key: str = ""
    match_strategy: MatchStrategy = MatchStrategy.FUZZY
    output_mode: OutputMode = OutputMode.SCHEMA
    match_threshold: float = 0.45
    max_sentences: int = 70
    default_sentences: int = 5
    default_style: str = "plain, neutral tone"
    language: str = "Korean"
    catalog_timeout: float = 10.0
    llm_timeout: float = 60.0
    profanity_filter: bool = True
    cors_origins: tuple[str, ...] = ("*",)
    port: int = 10000


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw in (None, ""):
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw in (None, ""):
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_bool(name: str, default: bool) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def load_settings() -> Settings:
    """
    Read settings from the environment (and a local .env, if present).
    Bad numbers fall back to defaults; unknown strategy names raise ValueError.
    """
    load_dotenv()
    origins = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]
    threshold = _env_float("MATCH_THRESHOLD", 0.45)
    return Settings(
        chat_model=os.getenv("CHAT_MODEL", "gpt-4o-mini"),
        google_books_key=os.getenv("GOOGLE_BOOKS_API_KEY", "").strip(),
        match_strategy=MatchStrategy(os.getenv("MATCH_STRATEGY", "fuzzy").strip().lower()),
        output_mode=OutputMode(os.getenv("OUTPUT_MODE", "schema").strip().lower()),
        match_threshold=min(1.0, max(0.0, threshold)),
        max_sentences=max(1, _env_int("MAX_SENTENCES", 70)),
        default_sentences=max(1, _env_int("DEFAULT_SENTENCES", 5)),
        default_style=os.getenv("DEFAULT_STYLE", "plain, neutral tone"),
        language=os.getenv("SUMMARY_LANGUAGE", "Korean"),
        catalog_timeout=_env_float("CATALOG_TIMEOUT", 10.0),
        llm_timeout=_env_float("LLM_TIMEOUT", 60.0),
        profanity_filter=_env_bool("PROFANITY_FILTER", True),
        cors_origins=tuple(origins) or ("*",),
        port=_env_int("PORT", 10000),
    )
