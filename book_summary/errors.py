from __future__ import annotations


class SummaryError(Exception):
    """Base class for failures inside the summary pipeline."""


class GenerationError(SummaryError):
    """The text-generation service could not be reached or returned an error."""


class ParseFailure(SummaryError):
    """The model never produced parseable structured output."""

    def __init__(self, message: str, raw: str = ""):
        super().__init__(message)
        self.raw = raw
