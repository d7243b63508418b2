"""
Test configuration and fixtures.
Every test gets a fresh in-memory database and its own Flask test client.
"""
import os

import pytest
from faker import Faker

os.environ.setdefault('SECRET_KEY', 'test-secret-key-for-testing-only')
os.environ.setdefault('JWT_SECRET_KEY', 'test-jwt-secret-key-for-testing')

from ceps import create_app
from ceps.extensions import db as _db
from ceps.models import User, RoleType
from ceps.services.auth_service import AuthService

fake = Faker()

TEST_PASSWORD = 'testpassword123'


@pytest.fixture(scope='function')
def app():
    """Create the application with the testing configuration and an empty schema."""
    app = create_app('testing')

    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def client(app):
    return app.test_client()


def _create_account(role):
    user = User(name=fake.name(), email=fake.unique.email().lower(), role=role)
    user.set_password(TEST_PASSWORD)
    _db.session.add(user)
    _db.session.commit()
    return user


@pytest.fixture
def make_user(app):
    """Factory for extra accounts of any role."""
    return _create_account


@pytest.fixture
def student(app):
    return _create_account(RoleType.STUDENT)


@pytest.fixture
def faculty(app):
    return _create_account(RoleType.FACULTY)


@pytest.fixture
def admin(app):
    return _create_account(RoleType.ADMIN)


@pytest.fixture
def auth_headers(app):
    """Build bearer headers for an account."""
    def _headers(user):
        token = AuthService.create_access_token(user)
        return {'Authorization': f'Bearer {token}'}
    return _headers


@pytest.fixture
def event_payload():
    return {
        'title': 'Hackathon',
        'description': 'Twenty-four hours of building',
        'date': '2025-03-01T09:00:00Z',
        'venue': 'Main Auditorium'
    }


@pytest.fixture
def create_event(client, auth_headers, event_payload):
    """Create an event through the API as the given staff account and return its JSON."""
    def _create(user, **overrides):
        response = client.post('/api/events', json=dict(event_payload, **overrides),
                               headers=auth_headers(user))
        assert response.status_code == 201
        return response.get_json()['event']
    return _create
