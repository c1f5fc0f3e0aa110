from __future__ import annotations
from dataclasses import dataclass, field
from typing import List


@dataclass(frozen=True)
class CatalogCandidate:
    id: str
    title: str
    authors: str = ""
    description: str = ""


@dataclass(frozen=True)
class MatchResult:
    candidate: CatalogCandidate
    score: float


@dataclass
class GenerationRequest:
    title: str
    authors: str
    description: str
    style: str
    requested_count: int


@dataclass
class GenerationResult:
    exists: bool
    corrected_title: str
    intro: str
    sentences: List[str] = field(default_factory=list)


@dataclass
class ReconciliationOutcome:
    sentences: List[str]
    requested_count: int
    rounds: int = 0

    @property
    def delivered_count(self) -> int:
        return len(self.sentences)

    @property
    def shortfall(self) -> int:
        return max(0, self.requested_count - self.delivered_count)
