"""
Scoring engine tests.
"""

import pytest

from mathmaster.quiz import (
    AnswerSheet,
    normalize_short_answer,
    score,
    score_breakdown,
    statement_key,
)
from mathmaster.schemas import QuestionSet, ShortAnswerItem


class TestPartScores:

    def test_empty_answers_score_zero(self, question_set):
        assert score(question_set, AnswerSheet()) == 0.0

    def test_part_a_alone(self, question_set, correct_answers):
        breakdown = score_breakdown(question_set, correct_answers(question_set, "A"))
        assert breakdown.part_a == 3.0
        assert breakdown.total == 3.0

    def test_part_b_alone(self, question_set, correct_answers):
        breakdown = score_breakdown(question_set, correct_answers(question_set, "B"))
        assert breakdown.part_b == 4.0
        assert breakdown.total == 4.0

    def test_part_c_alone(self, question_set, correct_answers):
        breakdown = score_breakdown(question_set, correct_answers(question_set, "C"))
        assert breakdown.part_c == 3.0
        assert breakdown.total == 3.0

    def test_everything_correct(self, question_set, correct_answers):
        assert score(question_set, correct_answers(question_set)) == 10.0

    def test_per_item_weights(self, question_set):
        answers = AnswerSheet(
            part_a={"1": question_set.part_a[0].correct_option_index},
            part_b={statement_key("1", "1"): question_set.part_b[0].statements[0].is_true},
            part_c={"1": "10"},
        )
        breakdown = score_breakdown(question_set, answers)
        assert breakdown.part_a == 0.25
        assert breakdown.part_b == 0.25
        assert breakdown.part_c == 0.5
        assert breakdown.total == 1.0

    def test_wrong_answers_score_nothing(self, question_set):
        answers = AnswerSheet(
            part_a={item.id: (item.correct_option_index + 1) % 4 for item in question_set.part_a},
            part_b={
                statement_key(item.id, s.id): not s.is_true
                for item in question_set.part_b for s in item.statements
            },
            part_c={item.id: "wrong" for item in question_set.part_c},
        )
        assert score(question_set, answers) == 0.0

    def test_unanswered_statement_never_matches(self, question_set):
        # A false statement left blank must not count as answered "false"
        false_key = statement_key("1", "1")
        assert question_set.part_b[0].statements[0].is_true is False
        assert score(question_set, AnswerSheet(part_b={})) == 0.0
        assert score(question_set, AnswerSheet(part_b={false_key: False})) == 0.25


class TestShortAnswerNormalization:

    @pytest.fixture
    def single(self):
        return QuestionSet(part_c=[ShortAnswerItem(id="1", prompt="?", correct_answer="10")])

    def test_whitespace_is_trimmed(self, single):
        assert score(single, AnswerSheet(part_c={"1": "  10 "})) == 3.0

    def test_units_do_not_match(self, single):
        assert score(single, AnswerSheet(part_c={"1": "10kg"})) == 0.0

    def test_case_insensitive(self):
        qs = QuestionSet(part_c=[ShortAnswerItem(id="1", prompt="?", correct_answer=" Ab ")])
        assert score(qs, AnswerSheet(part_c={"1": "aB"})) == 3.0

    def test_empty_answer_never_matches(self):
        qs = QuestionSet(part_c=[ShortAnswerItem(id="1", prompt="?", correct_answer=" ")])
        assert score(qs, AnswerSheet(part_c={"1": ""})) == 0.0
        assert score(qs, AnswerSheet(part_c={"1": "   "})) == 0.0

    def test_normalize(self):
        assert normalize_short_answer("  X ") == "x"
        assert normalize_short_answer(None) == ""


class TestWeightsFromCounts:

    def test_smaller_sets_keep_distribution(self, make_question_set, correct_answers):
        qs = make_question_set(part_a=3, part_b=1, statements=2, part_c=2)
        breakdown = score_breakdown(qs, correct_answers(qs))
        assert breakdown.part_a == 3.0
        assert breakdown.part_b == 4.0
        assert breakdown.part_c == 3.0
        assert breakdown.total == 10.0

    def test_uneven_item_count(self, make_question_set, correct_answers):
        qs = make_question_set(part_a=7, part_b=0, part_c=0)
        assert score(qs, correct_answers(qs)) == 3.0

    def test_empty_parts_score_zero(self, make_question_set, correct_answers):
        qs = make_question_set(part_a=0, part_b=0, part_c=6)
        breakdown = score_breakdown(qs, correct_answers(qs))
        assert breakdown.part_a == 0.0
        assert breakdown.part_b == 0.0
        assert breakdown.total == 3.0


class TestRobustness:

    def test_unknown_ids_are_ignored(self, question_set, correct_answers):
        answers = correct_answers(question_set, "A")
        answers.part_a["999"] = 0
        answers.part_b["9-9"] = True
        answers.part_c["ghost"] = "10"
        assert score(question_set, answers) == 3.0

    def test_total_is_within_bounds(self, make_question_set, correct_answers):
        for sizes in [(1, 1, 1, 1), (12, 4, 4, 6), (5, 3, 2, 9)]:
            qs = make_question_set(*sizes)
            for parts in ["", "A", "AB", "ABC", "BC"]:
                value = score(qs, correct_answers(qs, parts))
                assert 0.0 <= value <= 10.0

    def test_deterministic(self, question_set, correct_answers):
        answers = correct_answers(question_set, "AC")
        first = score_breakdown(question_set, answers)
        second = score_breakdown(question_set, answers)
        assert first == second
        assert repr(first.total) == repr(second.total)

    def test_does_not_mutate_answers(self, question_set, correct_answers):
        answers = correct_answers(question_set)
        before = answers.copy()
        score(question_set, answers)
        assert answers == before
