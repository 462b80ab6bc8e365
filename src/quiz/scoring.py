"""
Quiz submission: answer extraction, scoring and persistence.

Participants post a flat form where each answer field is named
``question_<questionId>``. Answers are extracted into an immutable mapping
of question id to answer text, scored against the quiz's questions, and
recorded as a single Submission row.
"""
import re
from dataclasses import dataclass
from datetime import datetime
from types import MappingProxyType
from typing import Callable, List, Mapping, Optional, Tuple

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from src.auth.principal import Principal
from src.quiz.errors import InternalError, MalformedAnswerKey, NoQuestions, QuizNotFound
from src.quiz.models import Question, Quiz, Submission
from src.quiz.repositories import (
    MAX_ID,
    QuestionRepository,
    QuizRepository,
    SubmissionRepository,
    UserRepository,
)

QUESTION_KEY_PREFIX = "question_"
ANONYMOUS_USER_ID = 0

# Digits only; 19 digits is enough for any 64-bit id
_QUESTION_ID_RE = re.compile(r"[0-9]{1,19}")


@dataclass(frozen=True)
class ScoredResult:
    """Outcome of a recorded submission, as shown on the result page."""

    quiz: Quiz
    questions: List[Question]
    answers: Mapping[int, str]
    score: int
    total_questions: int


def parse_question_key(key: str) -> int:
    """
    Return the question id encoded in an answer field name.

    Raises:
        MalformedAnswerKey: if the part after ``question_`` is not a number,
            or is too large to be a question id
    """
    suffix = key[len(QUESTION_KEY_PREFIX):]
    if not _QUESTION_ID_RE.fullmatch(suffix):
        raise MalformedAnswerKey(key)
    question_id = int(suffix)
    if question_id > MAX_ID:
        raise MalformedAnswerKey(key)
    return question_id


def extract_answers(raw_answers: Mapping[str, str],
                    question_exists: Callable[[int], bool]) -> Mapping[int, str]:
    """
    Collect the well-formed answers from a submitted form.

    Fields without the ``question_`` prefix are ignored. Fields with a
    malformed id, or naming a question that does not exist, are dropped and
    logged. The returned mapping is read-only.
    """
    accepted = {}
    for key, value in raw_answers.items():
        if not key.startswith(QUESTION_KEY_PREFIX):
            continue
        try:
            question_id = parse_question_key(key)
        except MalformedAnswerKey as e:
            current_app.logger.warning(f"Dropping answer: {e}")
            continue
        if not question_exists(question_id):
            current_app.logger.warning(f"Dropping answer: question ID {question_id} not found")
            continue
        accepted[question_id] = value
    return MappingProxyType(accepted)


def score_answers(questions: List[Question], answers: Mapping[int, str]) -> int:
    """Count the questions whose submitted answer equals the correct answer exactly."""
    return sum(1 for question in questions if question.is_correct(answers.get(question.id)))


def format_answers(answers: Mapping[int, str]) -> str:
    """Render answers for storage, e.g. ``{10=A, 11=C}``."""
    return "{" + ", ".join(f"{qid}={answers[qid]}" for qid in sorted(answers)) + "}"


class SubmissionService:
    """
    Scores quiz attempts and records them.

    Every failure is raised as a QuizError carrying a user-facing message;
    nothing is written unless the quiz and its questions load successfully.
    """

    def __init__(self, quizzes: QuizRepository = None, questions: QuestionRepository = None,
                 submissions: SubmissionRepository = None, users: UserRepository = None):
        self.quizzes = quizzes or QuizRepository()
        self.questions = questions or QuestionRepository()
        self.submissions = submissions or SubmissionRepository()
        self.users = users or UserRepository()

    def load_quiz_for_play(self, quiz_id: int) -> Tuple[Quiz, List[Question]]:
        """Load a quiz and its questions for a participant to answer."""
        quiz = self._find_quiz(quiz_id)
        return quiz, self._load_questions(quiz_id)

    def submit(self, quiz_id: int, raw_answers: Mapping[str, str],
               principal: Optional[Principal] = None) -> ScoredResult:
        """
        Score ``raw_answers`` against the quiz's questions and record a Submission.

        Raises:
            QuizNotFound: if no quiz has ``quiz_id``; nothing is written
            NoQuestions: if the quiz has no questions; nothing is written
            InternalError: if the quiz data cannot be read or the save fails
        """
        current_app.logger.debug(f"Submitting quiz {quiz_id} with {len(raw_answers)} form fields")
        quiz = self._find_quiz(quiz_id)

        try:
            answers = extract_answers(raw_answers, self.questions.exists_by_id)
        except SQLAlchemyError:
            current_app.logger.exception(f"Failed to check question ids for quiz {quiz_id}")
            raise InternalError()

        questions = self._load_questions(quiz_id)
        score = score_answers(questions, answers)
        user_id = self._resolve_user_id(principal)

        submission = Submission(
            quiz_id=quiz_id,
            user_id=user_id,
            score=score,
            answers=format_answers(answers),
            attempt_time=datetime.utcnow(),
        )
        try:
            self.submissions.save(submission)
        except SQLAlchemyError:
            current_app.logger.exception(f"Failed to save submission for quiz {quiz_id}")
            raise InternalError("Submission failed to save. Please try again.")

        current_app.logger.info(
            f"Submission saved for user {user_id}, quiz {quiz_id}, score {score}/{len(questions)}"
        )
        return ScoredResult(
            quiz=quiz,
            questions=questions,
            answers=answers,
            score=score,
            total_questions=len(questions),
        )

    def _find_quiz(self, quiz_id: int) -> Quiz:
        try:
            quiz = self.quizzes.find_by_id(quiz_id)
        except SQLAlchemyError:
            current_app.logger.exception(f"Failed to load quiz {quiz_id}")
            raise InternalError()
        if quiz is None:
            current_app.logger.warning(f"Quiz not found for id: {quiz_id}")
            raise QuizNotFound(quiz_id)
        return quiz

    def _load_questions(self, quiz_id: int) -> List[Question]:
        try:
            questions = self.questions.find_by_quiz_id(quiz_id)
        except SQLAlchemyError:
            current_app.logger.exception(f"Failed to fetch questions for quiz {quiz_id}")
            raise InternalError()
        if not questions:
            current_app.logger.warning(f"No questions found for quiz {quiz_id}")
            raise NoQuestions(quiz_id)
        return questions

    def _resolve_user_id(self, principal: Optional[Principal]) -> int:
        if principal is None or not principal.is_authenticated:
            return ANONYMOUS_USER_ID
        try:
            user = self.users.find_by_username(principal.name)
        except SQLAlchemyError:
            current_app.logger.exception(f"Failed to look up user {principal.name}")
            self.users.session.rollback()
            return ANONYMOUS_USER_ID
        if user is None:
            current_app.logger.warning(f"User {principal.name} not found, recording as anonymous")
            return ANONYMOUS_USER_ID
        return user.id
