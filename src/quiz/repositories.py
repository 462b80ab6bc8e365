"""
Repositories over the quiz tables.

Each repository wraps one model and the Flask-SQLAlchemy session. Writes
commit immediately; on a database error the session is rolled back and the
``SQLAlchemyError`` propagates to the caller.
"""
from typing import Generic, List, Optional, TypeVar

from sqlalchemy.exc import SQLAlchemyError

from src import db
from src.auth.models import User
from src.quiz.models import Question, Quiz, Submission

T = TypeVar("T")

# Integer primary keys are signed 64-bit on both SQLite and MySQL
MAX_ID = 2 ** 63 - 1


def is_storable_id(value) -> bool:
    """True if ``value`` fits in an integer id column."""
    return value is not None and -MAX_ID - 1 <= value <= MAX_ID


class Repository(Generic[T]):
    """
    Find/exists/save operations keyed by integer id.

    Ids outside the column range can never be stored, so lookups treat them
    as absent instead of passing them to the database driver.
    """

    model = None

    def __init__(self, session=None):
        self.session = session if session is not None else db.session

    def find_by_id(self, entity_id: int) -> Optional[T]:
        if not is_storable_id(entity_id):
            return None
        return self.session.get(self.model, entity_id)

    def find_all(self) -> List[T]:
        return self.session.query(self.model).order_by(self.model.id).all()

    def exists_by_id(self, entity_id: int) -> bool:
        if not is_storable_id(entity_id):
            return False
        query = self.session.query(self.model.id).filter(self.model.id == entity_id)
        return self.session.query(query.exists()).scalar()

    def save(self, entity: T) -> T:
        """
        Insert or update ``entity``.

        An entity whose id already exists overwrites the stored row; an entity
        without an id, or with an id that is not stored, gets a new identity.
        """
        try:
            if entity.id is not None and self.exists_by_id(entity.id):
                entity = self.session.merge(entity)
            else:
                entity.id = None
                self.session.add(entity)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            raise
        return entity


class QuizRepository(Repository[Quiz]):
    model = Quiz


class QuestionRepository(Repository[Question]):
    model = Question

    def find_by_quiz_id(self, quiz_id: int) -> List[Question]:
        if not is_storable_id(quiz_id):
            return []
        return (
            self.session.query(Question)
            .filter(Question.quiz_id == quiz_id)
            .order_by(Question.id)
            .all()
        )


class SubmissionRepository(Repository[Submission]):
    model = Submission

    def find_by_user_id(self, user_id: int) -> List[Submission]:
        return (
            self.session.query(Submission)
            .filter(Submission.user_id == user_id)
            .order_by(Submission.attempt_time.desc(), Submission.id.desc())
            .all()
        )


class UserRepository(Repository[User]):
    model = User

    def find_by_username(self, username: str) -> Optional[User]:
        return self.session.query(User).filter(User.username == username).first()
