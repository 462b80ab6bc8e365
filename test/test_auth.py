"""
Test cases for authentication and role-based access.
"""
import pytest

from src import create_app, db
from src.auth.models import User
from src.auth.principal import Principal
from src.auth.roles import Role
from src.auth.utils import verify_password
from src.security import token_matches

from conftest import ADMIN_PASSWORD, PARTICIPANT_PASSWORD


class TestRoles:
    """Test cases for the closed role set."""

    @pytest.mark.parametrize('value, expected', [
        ('ADMIN', Role.ADMIN),
        ('participant', Role.PARTICIPANT),
        ('ROLE_ADMIN', Role.ADMIN),
        (' ROLE_PARTICIPANT ', Role.PARTICIPANT),
    ])
    def test_parse(self, value, expected):
        assert Role.parse(value) is expected

    @pytest.mark.parametrize('value', ['', 'ROLE_', 'ROLE_GUEST', 'superuser'])
    def test_parse_rejects_unknown_roles(self, value):
        with pytest.raises(ValueError):
            Role.parse(value)

    def test_every_role_has_a_dashboard(self, app):
        endpoints = {rule.endpoint for rule in app.url_map.iter_rules()}
        for role in Role:
            assert role.dashboard_endpoint in endpoints

    def test_authority(self):
        assert Role.ADMIN.authority == 'ROLE_ADMIN'


class TestPrincipal:
    """Test cases for the request-scoped identity."""

    def test_anonymous(self):
        principal = Principal.from_user(None)
        assert not principal.is_authenticated
        assert principal.name is None
        assert principal.authorities == []

    def test_from_user(self):
        user = User(username='bob', password_hash='x', role=Role.ADMIN)
        principal = Principal.from_user(user)
        assert principal.is_authenticated
        assert principal.name == 'bob'
        assert principal.authorities == [Role.ADMIN]


class TestLogin:
    """Test cases for login and role-based landing."""

    def test_login_page(self, client):
        response = client.get('/login')
        assert response.status_code == 200
        assert b'name="username"' in response.data

    def test_admin_lands_on_admin_dashboard(self, client, users, login):
        response = login('admin', ADMIN_PASSWORD)
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/admin/dashboard')

    def test_participant_lands_on_participant_dashboard(self, client, users, login):
        response = login('alice', PARTICIPANT_PASSWORD)
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/participant/dashboard')

    def test_wrong_password(self, client, users, login):
        response = login('alice', 'not-the-password')
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/login')

        page = client.get('/login')
        assert b'Invalid username or password.' in page.data

    def test_missing_fields(self, client):
        response = client.post('/login', data={'username': 'alice'}, follow_redirects=True)
        assert b'Username and password are required.' in response.data

    def test_dashboard_redirects_by_role(self, participant_client):
        response = participant_client.get('/dashboard')
        assert response.headers['Location'].endswith('/participant/dashboard')

    def test_index_without_login(self, client):
        response = client.get('/')
        assert response.status_code == 302
        assert '/login' in response.headers['Location']

    def test_logout(self, participant_client):
        response = participant_client.get('/logout')
        assert response.status_code == 302

        response = participant_client.get('/participant/dashboard')
        assert response.status_code == 302
        assert '/login' in response.headers['Location']


class TestRegistration:
    """Test cases for account registration."""

    def test_register_participant(self, app, client):
        response = client.post('/register', data={
            'username': 'carol',
            'password': 'carolpass123',
            'role': 'PARTICIPANT',
        })
        assert response.status_code == 302
        assert response.headers['Location'].endswith('/login')

        with app.app_context():
            user = User.query.filter_by(username='carol').one()
            assert user.role is Role.PARTICIPANT
            assert user.password_hash != 'carolpass123'
            assert verify_password('carolpass123', user.password_hash)

    def test_register_admin_with_authority_string(self, app, client):
        client.post('/register', data={'username': 'dave', 'password': 'davepass123', 'role': 'ROLE_ADMIN'})
        with app.app_context():
            assert User.query.filter_by(username='dave').one().role is Role.ADMIN

    def test_duplicate_username(self, app, client, users):
        response = client.post('/register', data={
            'username': 'alice',
            'password': 'anotherpass123',
            'role': 'PARTICIPANT',
        }, follow_redirects=True)
        assert b'User with this username already exists.' in response.data
        with app.app_context():
            assert User.query.filter_by(username='alice').count() == 1

    def test_short_password(self, app, client):
        response = client.post('/register', data={
            'username': 'erin', 'password': 'short', 'role': 'PARTICIPANT',
        }, follow_redirects=True)
        assert b'Password must be at least 8 characters long' in response.data
        with app.app_context():
            assert User.query.filter_by(username='erin').first() is None

    def test_unknown_role(self, app, client):
        response = client.post('/register', data={
            'username': 'frank', 'password': 'frankpass123', 'role': 'ROLE_GUEST',
        }, follow_redirects=True)
        assert b'Please choose a valid role.' in response.data
        with app.app_context():
            assert User.query.filter_by(username='frank').first() is None


class TestAccessControl:
    """Test cases for role-gated pages."""

    @pytest.mark.parametrize('path', ['/admin/dashboard', '/participant/dashboard', '/participant/quiz/1'])
    def test_anonymous_is_sent_to_login(self, client, path):
        response = client.get(path)
        assert response.status_code == 302
        assert '/login' in response.headers['Location']

    @pytest.mark.parametrize('path', ['/admin/dashboard', '/admin/quiz/new', '/admin/quiz/1/questions'])
    def test_participant_cannot_open_admin_pages(self, participant_client, path):
        assert participant_client.get(path).status_code == 403

    @pytest.mark.parametrize('path', ['/participant/dashboard', '/participant/quiz/1', '/participant/submissions'])
    def test_admin_cannot_open_participant_pages(self, admin_client, path):
        assert admin_client.get(path).status_code == 403

    def test_admin_cannot_submit_answers(self, admin_client, sample_quiz):
        response = admin_client.post('/participant/quiz/submit', data={'quizId': '1', 'question_10': 'A'})
        assert response.status_code == 403


class TestCSRF:
    """Test cases for form token checks."""

    def test_post_without_token_is_rejected(self):
        app = create_app({'TESTING': True, 'CSRF_ENABLED': True})
        client = app.test_client()
        try:
            response = client.post('/login', data={'username': 'alice', 'password': 'whatever1'})
            assert response.status_code == 403
        finally:
            with app.app_context():
                db.drop_all()

    def test_post_with_session_token_is_accepted(self):
        app = create_app({'TESTING': True, 'CSRF_ENABLED': True})
        client = app.test_client()
        try:
            client.get('/login')
            with client.session_transaction() as session:
                token = session['csrf_token']
            response = client.post('/login', data={'username': 'nobody', 'password': 'whatever1',
                                                   'csrf_token': token})
            assert response.status_code == 302
        finally:
            with app.app_context():
                db.drop_all()

    def test_post_with_wrong_token_is_rejected(self):
        app = create_app({'TESTING': True, 'CSRF_ENABLED': True})
        client = app.test_client()
        try:
            client.get('/login')
            response = client.post('/login', data={'username': 'nobody', 'password': 'whatever1',
                                                   'csrf_token': 'forged'})
            assert response.status_code == 403
            assert b'Invalid form token' in response.data
        finally:
            with app.app_context():
                db.drop_all()

    def test_token_accepted_from_header(self):
        app = create_app({'TESTING': True, 'CSRF_ENABLED': True})
        client = app.test_client()
        try:
            client.get('/login')
            with client.session_transaction() as session:
                token = session['csrf_token']
            response = client.post('/login', data={'username': 'nobody', 'password': 'whatever1'},
                                   headers={'X-CSRF-Token': token})
            assert response.status_code == 302
        finally:
            with app.app_context():
                db.drop_all()

    @pytest.mark.parametrize('submitted, expected', [('', 'abc'), ('abc', ''), ('abc', None), ('abd', 'abc')])
    def test_token_mismatch(self, submitted, expected):
        assert not token_matches(submitted, expected)

    def test_token_match(self):
        assert token_matches('abc', 'abc')
