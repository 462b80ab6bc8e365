"""
Quiz authoring for administrators.

Saves are upserts: an existing id is overwritten in place, otherwise a new
row is created. Question content (options, correct answer) is stored as
given.
"""
from typing import List, Tuple

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from src.quiz.errors import InternalError, MissingParent, QuizNotFound
from src.quiz.models import Question, Quiz
from src.quiz.repositories import QuestionRepository, QuizRepository


class QuizAuthoringService:
    """Admin-side reads and writes of quizzes and their questions."""

    def __init__(self, quizzes: QuizRepository = None, questions: QuestionRepository = None):
        self.quizzes = quizzes or QuizRepository()
        self.questions = questions or QuestionRepository()

    def list_quizzes(self) -> List[Quiz]:
        try:
            return self.quizzes.find_all()
        except SQLAlchemyError:
            current_app.logger.exception("Failed to load quizzes")
            raise InternalError("Unable to load quizzes. Please try again later.")

    def get_quiz_with_questions(self, quiz_id: int) -> Tuple[Quiz, List[Question]]:
        try:
            quiz = self.quizzes.find_by_id(quiz_id)
            if quiz is None:
                current_app.logger.warning(f"Quiz not found for id: {quiz_id}")
                raise QuizNotFound(quiz_id, "The requested quiz could not be found.")
            return quiz, self.questions.find_by_quiz_id(quiz_id)
        except SQLAlchemyError:
            current_app.logger.exception(f"Failed to load questions for quiz {quiz_id}")
            raise InternalError("Unable to load questions. Please try again.")

    def save_quiz(self, quiz: Quiz) -> int:
        """Create or update a quiz and return its id."""
        try:
            if quiz.id is not None and self.quizzes.exists_by_id(quiz.id):
                current_app.logger.info(f"Quiz with id {quiz.id} already exists, updating")
            quiz = self.quizzes.save(quiz)
        except SQLAlchemyError:
            current_app.logger.exception("Failed to save quiz")
            raise InternalError("Failed to save quiz due to an internal error. Please try again.")
        current_app.logger.info(f"Quiz saved with id: {quiz.id}")
        return quiz.id

    def save_question(self, question: Question) -> int:
        """
        Create or update a question and return its id.

        Raises:
            MissingParent: if the question has no quiz id
            QuizNotFound: if the quiz id does not reference a stored quiz
            InternalError: if the database write fails
        """
        if question.quiz_id is None:
            current_app.logger.error("Question has no quiz id, aborting save")
            raise MissingParent()
        try:
            quiz_exists = self.quizzes.exists_by_id(question.quiz_id)
        except SQLAlchemyError:
            current_app.logger.exception(f"Failed to check quiz {question.quiz_id}")
            raise InternalError("Failed to save question due to an internal error. Please try again.")
        if not quiz_exists:
            current_app.logger.error(f"Quiz with id {question.quiz_id} does not exist")
            raise QuizNotFound(question.quiz_id, "The associated quiz could not be found.")

        try:
            question = self.questions.save(question)
        except SQLAlchemyError:
            current_app.logger.exception("Failed to save question")
            raise InternalError("Failed to save question due to an internal error. Please try again.")
        current_app.logger.info(f"Question saved with id: {question.id}")
        return question.id
