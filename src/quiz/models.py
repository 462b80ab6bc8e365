"""
Database models for quiz functionality.

A quiz owns its questions by ``quiz_id``. Submissions are append-only fact
records that reference a quiz and a user by id only.
"""
from datetime import datetime
from src import db


class Quiz(db.Model):
    """A named collection of questions."""
    __tablename__ = "quizzes"

    id = db.Column(db.Integer, primary_key=True)
    title = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    questions = db.relationship(
        "Question", backref="quiz", lazy="dynamic",
        cascade="all, delete-orphan", order_by="Question.id"
    )

    def __repr__(self) -> str:
        return f"<Quiz {self.id}: {self.title}>"

    def get_question_count(self) -> int:
        """Get total number of questions."""
        return self.questions.count()


class Question(db.Model):
    """
    A single prompt with a set of options and one correct answer.

    ``correct_answer`` is compared against submitted answers exactly,
    without trimming or case folding.
    """
    __tablename__ = "questions"

    id = db.Column(db.Integer, primary_key=True)
    quiz_id = db.Column(db.Integer, db.ForeignKey("quizzes.id", ondelete='CASCADE'), nullable=False, index=True)
    question_text = db.Column(db.Text, nullable=False)
    options = db.Column(db.JSON, nullable=False, default=list)
    correct_answer = db.Column(db.Text, nullable=True)

    def __repr__(self) -> str:
        return f"<Question {self.id}: quiz {self.quiz_id}>"

    def is_correct(self, answer) -> bool:
        return answer is not None and answer == self.correct_answer


class Submission(db.Model):
    """
    One participant's attempt at one quiz.

    ``user_id`` is 0 when the submitting user could not be resolved.
    """
    __tablename__ = "submissions"

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, nullable=False, default=0, index=True)
    quiz_id = db.Column(db.Integer, nullable=False, index=True)
    score = db.Column(db.Integer, nullable=False, default=0)
    answers = db.Column(db.Text, nullable=True)
    attempt_time = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    __table_args__ = (
        db.Index('ix_submissions_user_quiz', 'user_id', 'quiz_id'),
    )

    def __repr__(self) -> str:
        return f"<Submission {self.id}: User {self.user_id}, Quiz {self.quiz_id}, Score {self.score}>"
