import json

import pytest

from book_summary.errors import GenerationError
from book_summary.services.reconcile import parse_continuation, reconcile


class ScriptedGenerator:
    def __init__(self, *replies):
        self.replies = list(replies)
        self.prompts = []

    def generate(self, prompt, *, max_output_tokens=1200):
        self.prompts.append(prompt)
        reply = self.replies.pop(0) if self.replies else ""
        if isinstance(reply, Exception):
            raise reply
        return reply


class FloodGenerator:
    """Always answers with more sentences than asked for."""

    def __init__(self):
        self.calls = 0

    def generate(self, prompt, *, max_output_tokens=1200):
        self.calls += 1
        return json.dumps([f"Extra {self.calls}-{i}." for i in range(10)])


def test_already_complete_makes_no_calls() -> None:
    gen = ScriptedGenerator()
    out = reconcile(["A.", "B."], 2, gen)
    assert out.sentences == ["A.", "B."]
    assert out.rounds == 0
    assert gen.prompts == []


def test_over_delivery_is_truncated() -> None:
    out = reconcile([f"S{i}." for i in range(8)], 5, ScriptedGenerator())
    assert out.sentences == ["S0.", "S1.", "S2.", "S3.", "S4."]


def test_tops_up_in_one_round() -> None:
    gen = ScriptedGenerator('["D.", "E."]')
    out = reconcile(["A.", "B.", "C."], 5, gen, style="casual")
    assert out.sentences == ["A.", "B.", "C.", "D.", "E."]
    assert out.rounds == 1
    assert out.shortfall == 0
    assert "exactly 2 additional" in gen.prompts[0]
    assert '"casual"' in gen.prompts[0]
    assert '"C."' in gen.prompts[0]


def test_never_exceeds_target_mid_round() -> None:
    gen = ScriptedGenerator('["C.", "D.", "E.", "F."]')
    out = reconcile(["A.", "B."], 3, gen)
    assert out.sentences == ["A.", "B.", "C."]


def test_duplicates_are_skipped() -> None:
    gen = ScriptedGenerator('["A.", "B.", "C."]', '["C.", "D."]')
    out = reconcile(["A.", " A. ", "B."], 4, gen)
    assert out.sentences == ["A.", "B.", "C.", "D."]
    assert out.rounds == 2


def test_free_text_continuation_falls_back_to_splitting() -> None:
    gen = ScriptedGenerator("Sure. Here are more:\nC is here. D follows!")
    out = reconcile(["A.", "B."], 4, gen)
    assert out.sentences == ["A.", "B.", "Sure.", "Here are more:"]


def test_stuck_generator_stops_after_three_rounds() -> None:
    gen = ScriptedGenerator("[]", "[]", "[]", '["never used."]')
    out = reconcile(["A.", "B."], 5, gen)
    assert out.sentences == ["A.", "B."]
    assert out.rounds == 3
    assert len(gen.prompts) == 3
    assert out.delivered_count == 2
    assert out.shortfall == 3


def test_transport_errors_consume_rounds() -> None:
    gen = ScriptedGenerator(GenerationError("down"), '["B."]', GenerationError("down"))
    out = reconcile(["A."], 3, gen)
    assert out.sentences == ["A.", "B."]
    assert out.rounds == 3


@pytest.mark.parametrize("n", [1, 2, 5, 13, 70])
def test_length_bounded_for_any_count(n) -> None:
    gen = FloodGenerator()
    out = reconcile([], n, gen)
    assert len(out.sentences) <= n
    assert gen.calls <= 3


def test_parse_continuation() -> None:
    assert parse_continuation('["x", " ", "y"]') == ["x", "y"]
    assert parse_continuation('Here: ["x", "y"]') == ["x", "y"]
    assert parse_continuation("One. Two.") == ["One.", "Two."]
    assert parse_continuation("") == []
