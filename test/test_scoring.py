"""
Test cases for answer extraction and scoring helpers.
"""
import pytest

from src.quiz.errors import MalformedAnswerKey
from src.quiz.models import Question
from src.quiz.scoring import extract_answers, format_answers, parse_question_key, score_answers


def _questions(*correct_answers):
    return [
        Question(id=idx, quiz_id=1, question_text=f'Q{idx}', options=[], correct_answer=answer)
        for idx, answer in enumerate(correct_answers, start=1)
    ]


class TestParseQuestionKey:
    """Test cases for reading question ids out of form field names."""

    def test_numeric_suffix(self):
        assert parse_question_key('question_42') == 42

    @pytest.mark.parametrize('key', ['question_', 'question_abc', 'question_1.5', 'question_-3', 'question_ 7'])
    def test_malformed_suffix_raises(self, key):
        with pytest.raises(MalformedAnswerKey):
            parse_question_key(key)

    def test_largest_storable_id(self):
        assert parse_question_key('question_9223372036854775807') == 2 ** 63 - 1

    @pytest.mark.parametrize('key', [
        'question_9223372036854775808',
        'question_99999999999999999999',
        'question_' + '9' * 5000,
    ])
    def test_id_too_large_raises(self, key):
        with pytest.raises(MalformedAnswerKey):
            parse_question_key(key)


class TestExtractAnswers:
    """Test cases for building the accepted answer mapping."""

    def test_ignores_unrelated_keys(self, app_ctx):
        answers = extract_answers({'quizId': '1', 'csrf_token': 'x', 'question_1': 'A'}, lambda qid: True)
        assert dict(answers) == {1: 'A'}

    def test_drops_malformed_keys_without_raising(self, app_ctx):
        answers = extract_answers({'question_abc': 'A', 'question_2': 'B'}, lambda qid: True)
        assert dict(answers) == {2: 'B'}

    def test_drops_oversized_ids_without_raising(self, app_ctx):
        answers = extract_answers({
            'question_99999999999999999999': 'X',
            'question_' + '1' * 5000: 'Y',
            'question_2': 'B',
        }, lambda qid: True)
        assert dict(answers) == {2: 'B'}

    def test_drops_unknown_question_ids(self, app_ctx):
        answers = extract_answers({'question_1': 'A', 'question_99': 'X'}, lambda qid: qid != 99)
        assert dict(answers) == {1: 'A'}

    def test_result_is_read_only(self, app_ctx):
        answers = extract_answers({'question_1': 'A'}, lambda qid: True)
        with pytest.raises(TypeError):
            answers[2] = 'B'

    def test_answer_text_kept_verbatim(self, app_ctx):
        answers = extract_answers({'question_1': '  Paris '}, lambda qid: True)
        assert answers[1] == '  Paris '


class TestScoreAnswers:
    """Test cases for exact-match scoring."""

    def test_all_correct(self):
        questions = _questions('A', 'B', 'C')
        assert score_answers(questions, {1: 'A', 2: 'B', 3: 'C'}) == 3

    def test_no_answers_scores_zero(self):
        assert score_answers(_questions('A', 'B'), {}) == 0

    def test_comparison_is_case_sensitive(self):
        assert score_answers(_questions('Paris'), {1: 'paris'}) == 0

    def test_comparison_does_not_trim(self):
        assert score_answers(_questions('Paris'), {1: 'Paris '}) == 0

    def test_extra_answers_do_not_count(self):
        assert score_answers(_questions('A'), {1: 'A', 2: 'A', 3: 'A'}) == 1

    def test_unanswered_question_without_correct_answer_is_not_scored(self):
        assert score_answers(_questions(None), {}) == 0


class TestFormatAnswers:
    """Test cases for the stored answer snapshot."""

    def test_ordered_by_question_id(self):
        assert format_answers({11: 'C', 10: 'A'}) == '{10=A, 11=C}'

    def test_empty(self):
        assert format_answers({}) == '{}'
