"""
Pytest configuration and fixtures for testing.

Every test gets a fresh application backed by an in-memory SQLite database.
"""
import os

import pytest

# Set test environment variables BEFORE the application package is imported
os.environ['FLASK_ENV'] = 'testing'
os.environ['SECRET_KEY'] = 'sfndsfojoriwew09rjfjndsknfkj'
os.environ['DATABASE_URL'] = 'sqlite:///:memory:'
os.environ['MIN_PASSWORD_LENGTH'] = '8'
os.environ['LOG_LEVEL'] = 'DEBUG'

from src import create_app, db  # noqa: E402
from src.auth.models import User  # noqa: E402
from src.auth.roles import Role  # noqa: E402
from src.auth.utils import hash_password  # noqa: E402
from src.quiz.models import Question, Quiz  # noqa: E402

ADMIN_PASSWORD = 'adminpass123'
PARTICIPANT_PASSWORD = 'alicepass123'


@pytest.fixture
def app():
    """Create application for testing."""
    app = create_app({'TESTING': True, 'CSRF_ENABLED': False})
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def app_ctx(app):
    """Push an application context for tests that call services directly."""
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def users(app):
    """Seed one admin and one participant; returns their ids by role."""
    with app.app_context():
        admin = User(username='admin', password_hash=hash_password(ADMIN_PASSWORD), role=Role.ADMIN)
        participant = User(username='alice', password_hash=hash_password(PARTICIPANT_PASSWORD),
                           role=Role.PARTICIPANT)
        db.session.add_all([admin, participant])
        db.session.commit()
        return {Role.ADMIN: admin.id, Role.PARTICIPANT: participant.id}


@pytest.fixture
def sample_quiz(app):
    """Quiz 1 with questions 10 (answer "A") and 11 (answer "B")."""
    with app.app_context():
        db.session.add(Quiz(id=1, title='Sample quiz', description='Two questions'))
        db.session.add_all([
            Question(id=10, quiz_id=1, question_text='First letter?', options=['A', 'B', 'C'],
                     correct_answer='A'),
            Question(id=11, quiz_id=1, question_text='Second letter?', options=['A', 'B', 'C'],
                     correct_answer='B'),
        ])
        db.session.commit()
        return 1


@pytest.fixture
def login(client):
    """Log the test client in; returns the login response."""
    def _login(username, password):
        return client.post('/login', data={'username': username, 'password': password})
    return _login


@pytest.fixture
def admin_client(client, users, login):
    login('admin', ADMIN_PASSWORD)
    return client


@pytest.fixture
def participant_client(client, users, login):
    login('alice', PARTICIPANT_PASSWORD)
    return client
