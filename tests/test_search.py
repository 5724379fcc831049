import unittest

from tokwrap.kinds import BreakTable
from tokwrap.scorer import Scorer
from tokwrap.search import BreakState, breaks_to_indices, choose_line_breaks, search_breaks
from tokwrap.types import Limits, Token


def make_token(text: str, kind: str = "identifier", **overrides) -> Token:
    return Token(text=text, kind=kind, **overrides)


def make_scorer(hard: int, soft: int, indent: int = 4, costs=None) -> Scorer:
    table = BreakTable(costs if costs is not None else {"+": 1, ",": 1})
    return Scorer(Limits(hard, soft, indent), table)


def a_plus_b() -> list[Token]:
    return [make_token("a"), make_token("+", kind="+"), make_token("b")]


class TestBreakState(unittest.TestCase):
    def test_cheaper_state_sorts_first(self):
        self.assertLess(BreakState(0b1, 3, False), BreakState(0b1, 4, True))

    def test_solved_sorts_before_unsolved_at_equal_cost(self):
        self.assertLess(BreakState(0b1, 5, True), BreakState(0b100, 5, False))
        self.assertEqual(BreakState(0b100, 5, False).compare(BreakState(0b1, 5, True)), 1)

    def test_later_first_break_sorts_first(self):
        late = BreakState(0b1100, 5, False)
        early = BreakState(0b0110, 5, False)
        self.assertLess(late, early)
        self.assertEqual(early.compare(late), 1)

    def test_empty_placement_has_no_position_preference(self):
        self.assertEqual(BreakState(0, 5, False).compare(BreakState(0b10, 5, False)), 0)

    def test_equality_is_by_breaks_only(self):
        self.assertEqual(BreakState(0b101, 1, True), BreakState(0b101, 99, False))
        self.assertEqual(len({BreakState(0b101, 1, True), BreakState(0b101, 2, True)}), 1)
        self.assertEqual(BreakState(0b101, 1, True).break_count, 2)

    def test_breaks_to_indices(self):
        self.assertEqual(breaks_to_indices(0b1010, 100), [101, 103])
        self.assertEqual(breaks_to_indices(0, 7), [])


class TestSearch(unittest.TestCase):
    def test_breaks_when_single_line_exceeds_hard_limit(self):
        scorer = make_scorer(2, 2)
        self.assertEqual(choose_line_breaks(0, a_plus_b(), [0, 0, 0], scorer, 0, 0), [1])
        self.assertEqual(choose_line_breaks(40, a_plus_b(), [0, 0, 0], scorer, 0, 0), [41])

    def test_no_breaks_when_line_fits(self):
        scorer = make_scorer(10, 10)
        result = search_breaks(5, a_plus_b(), [0, 0, 0], scorer, 0, 0)
        self.assertEqual(result.breaks, [])
        self.assertTrue(result.solved)
        self.assertEqual(result.cost, 0)
        self.assertEqual(result.explored, 1)

    def test_soft_overflow_is_tolerated_when_gap_is_zero(self):
        scorer = make_scorer(3, 3)
        # Exactly at the hard limit: no overflow, nothing to gain from breaking.
        self.assertEqual(choose_line_breaks(0, a_plus_b(), [0, 0, 0], scorer, 0, 0), [])

    def test_soft_overflow_cheaper_than_break_keeps_single_line(self):
        # gap 4 -> newline penalty 80, overflow of 1 column costs 4.
        scorer = make_scorer(12, 8)
        tokens = [make_token("abcd"), make_token(",", kind=","), make_token("efcd")]
        self.assertEqual(choose_line_breaks(0, tokens, [0, 0, 0], scorer, 0, 0), [])

    def test_fallback_returns_cheapest_when_nothing_fits(self):
        scorer = make_scorer(10, 10)
        tokens = [make_token("x" * 20), make_token(",", kind=","), make_token("y")]
        result = search_breaks(0, tokens, [0, 0, 0], scorer, 0, 0)
        self.assertFalse(result.solved)
        self.assertEqual(result.breaks, [])
        self.assertEqual(result.explored, 2)

    def test_prefers_later_break_among_equal_cost_solutions(self):
        scorer = make_scorer(4, 4)
        tokens = [
            make_token("a"),
            make_token(",", kind=","),
            make_token("b"),
            make_token(",", kind=","),
            make_token("c"),
        ]
        self.assertEqual(choose_line_breaks(0, tokens, [0] * 5, scorer, 0, 0), [3])

    def test_prefers_shallow_break(self):
        scorer = make_scorer(6, 6)
        tokens = [
            make_token("ab"),
            make_token(",", kind=","),
            make_token("cd"),
            make_token(",", kind=","),
            make_token("ef"),
        ]
        # Breaking at either comma fits; the deeper one costs more.
        self.assertEqual(choose_line_breaks(0, tokens, [0, 0, 0, 2, 0], scorer, 0, 0), [1])
        self.assertEqual(choose_line_breaks(0, tokens, [0, 2, 0, 0, 0], scorer, 0, 0), [3])

    def test_prefers_cheap_token_kind(self):
        scorer = make_scorer(6, 6, costs={",": 0, ".": 900})
        tokens = [
            make_token("ab"),
            make_token(".", kind="."),
            make_token("cd"),
            make_token(",", kind=","),
            make_token("ef"),
        ]
        self.assertEqual(choose_line_breaks(0, tokens, [0] * 5, scorer, 0, 0), [3])

    def test_finds_solution_needing_several_breaks(self):
        scorer = make_scorer(4, 4, indent=0)
        tokens = []
        for word in ("aa", "bb", "cc", "dd"):
            tokens.extend([make_token(word), make_token(",", kind=",")])
        result = search_breaks(0, tokens, [0] * len(tokens), scorer, 0, 0)
        self.assertTrue(result.solved)
        self.assertEqual(result.breaks, [1, 3, 5])

    def test_only_first_window_is_eligible(self):
        scorer = make_scorer(20, 20)
        tokens = []
        for i in range(40):
            if i in (5, 15, 25, 35):
                tokens.append(make_token(",", kind=","))
            else:
                tokens.append(make_token("x"))
        result = search_breaks(100, tokens, [0] * 40, scorer, 0, 0)
        self.assertTrue(result.solved)
        self.assertEqual(result.breaks, [115])
        self.assertTrue(all(idx <= 100 + 31 for idx in result.breaks))

    def test_returned_breaks_are_eligible(self):
        scorer = make_scorer(5, 5, indent=0)
        tokens = [make_token("f"), make_token("(", kind="identifier"), make_token("aa"),
                  make_token(",", kind=","), make_token("bb"), make_token(",", kind=","),
                  make_token("cc"), make_token(")")]
        result = search_breaks(0, tokens, [0, 1, 1, 1, 1, 1, 1, 0], scorer, 0, 0)
        self.assertTrue(result.solved)
        for idx in result.breaks:
            self.assertEqual(tokens[idx].kind, ",")

    def test_search_is_deterministic(self):
        scorer = make_scorer(6, 4)
        tokens = []
        for word in ("alpha", "beta", "gamma"):
            tokens.extend([make_token(word), make_token("+", kind="+")])
        first = search_breaks(0, tokens, [0] * 6, scorer, 0, 1)
        second = search_breaks(0, tokens, [0] * 6, scorer, 0, 1)
        self.assertEqual(first, second)

    def test_iteration_limit_falls_back_to_best_seen(self):
        scorer = make_scorer(2, 2)
        result = search_breaks(0, a_plus_b(), [0, 0, 0], scorer, 0, 0, max_iterations=1)
        self.assertFalse(result.solved)
        self.assertEqual(result.breaks, [])
        self.assertEqual(result.explored, 1)

    def test_empty_run_yields_no_breaks(self):
        result = search_breaks(0, [], [], make_scorer(10, 10), 0, 0)
        self.assertEqual(result.breaks, [])
        self.assertTrue(result.solved)

    def test_mismatched_depths_are_rejected(self):
        with self.assertRaises(ValueError):
            search_breaks(0, a_plus_b(), [0, 0], make_scorer(10, 10), 0, 0)


if __name__ == "__main__":
    unittest.main()
