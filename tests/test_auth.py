from datetime import timedelta

import pytest

from ceps.models import User
from ceps.services.auth_service import AuthService


def test_register_user(client):
    """Sign-up stores the account and never returns the password hash"""
    response = client.post('/api/auth/register', json={
        'name': 'Asha Rao',
        'email': 'Asha@College.edu',
        'password': 'secret123'
    })

    assert response.status_code == 201
    data = response.get_json()
    assert data['success'] is True
    assert data['user']['email'] == 'asha@college.edu'
    assert data['user']['role'] == 'student'
    assert 'passwordHash' not in data['user']


def test_register_duplicate_email(client):
    payload = {'name': 'Asha Rao', 'email': 'asha@college.edu', 'password': 'secret123'}
    client.post('/api/auth/register', json=payload)

    response = client.post('/api/auth/register', json=dict(payload, email='ASHA@college.edu'))

    assert response.status_code == 409
    assert response.get_json()['message'] == 'User already exists with this email'


def test_register_missing_fields(client):
    response = client.post('/api/auth/register', json={'email': 'a@b.co'})

    assert response.status_code == 400
    assert response.get_json()['success'] is False


def test_register_short_password(client):
    response = client.post('/api/auth/register', json={
        'name': 'Short', 'email': 'short@college.edu', 'password': '123'
    })

    assert response.status_code == 400


def test_register_unknown_role(client):
    response = client.post('/api/auth/register', json={
        'name': 'Root', 'email': 'root@college.edu', 'password': 'secret123', 'role': 'superuser'
    })

    assert response.status_code == 400


def test_login_success(client, student):
    response = client.post('/api/auth/login', json={'email': student.email, 'password': 'testpassword123'})

    assert response.status_code == 200
    data = response.get_json()
    assert data['token']
    assert data['user']['id'] == student.id

    me = client.get('/api/auth/me', headers={'Authorization': f"Bearer {data['token']}"})
    assert me.status_code == 200
    assert me.get_json()['user']['email'] == student.email


def test_login_invalid_credentials(client, student):
    response = client.post('/api/auth/login', json={'email': student.email, 'password': 'wrongpassword'})

    assert response.status_code == 401
    assert response.get_json()['message'] == 'Invalid email or password'


def test_login_unknown_email(client):
    response = client.post('/api/auth/login', json={'email': 'nobody@college.edu', 'password': 'secret123'})

    assert response.status_code == 401


def test_missing_token(client):
    response = client.get('/api/auth/me')

    assert response.status_code == 401
    assert response.get_json()['message'] == 'No token provided'


def test_malformed_authorization_header(client, student, auth_headers):
    token = auth_headers(student)['Authorization'].split(' ', 1)[1]

    response = client.get('/api/auth/me', headers={'Authorization': f'Token {token}'})

    assert response.status_code == 401


def test_invalid_token(client):
    response = client.get('/api/auth/me', headers={'Authorization': 'Bearer not-a-real-token'})

    assert response.status_code == 401
    assert response.get_json()['message'] == 'Not authorized, invalid token'


def test_expired_token(client, student):
    token = AuthService.create_access_token(student, expires_delta=timedelta(seconds=-10))

    response = client.get('/api/auth/me', headers={'Authorization': f'Bearer {token}'})

    assert response.status_code == 401


def test_token_signed_with_other_secret(app, client, student):
    token = AuthService.create_access_token(student)
    app.config['JWT_SECRET_KEY'] = 'rotated-secret'

    response = client.get('/api/auth/me', headers={'Authorization': f'Bearer {token}'})

    assert response.status_code == 401


def test_token_for_deleted_account(client, db, make_user, auth_headers):
    user = make_user('student')
    headers = auth_headers(user)
    db.session.delete(user)
    db.session.commit()

    response = client.get('/api/auth/me', headers=headers)

    assert response.status_code == 404
    assert response.get_json()['message'] == 'User not found'


def test_student_blocked_from_staff_route(client, student, auth_headers):
    response = client.get('/api/feedback', headers=auth_headers(student))

    assert response.status_code == 403
    assert response.get_json()['success'] is False


def test_password_is_hashed(db, student):
    stored = db.session.get(User, student.id)

    assert stored.password_hash != 'testpassword123'
    assert stored.check_password('testpassword123')


@pytest.mark.parametrize('overrides', [
    {'name': 123},
    {'email': 42},
    {'password': 123456},
    {'role': 5},
])
def test_register_rejects_non_string_fields(client, db, overrides):
    payload = dict({'name': 'Asha Rao', 'email': 'asha@college.edu', 'password': 'secret123'}, **overrides)

    response = client.post('/api/auth/register', json=payload)

    assert response.status_code == 400
    assert response.get_json()['error_code'] == 'validation_error'
    assert db.session.query(User).count() == 0


@pytest.mark.parametrize('credentials', [
    {'email': 5, 'password': 'testpassword123'},
    {'password': 123456},
])
def test_login_rejects_non_string_fields(client, student, credentials):
    response = client.post('/api/auth/login', json=dict({'email': student.email}, **credentials))

    assert response.status_code == 400
    assert response.get_json()['error_code'] == 'validation_error'


@pytest.mark.parametrize('role', ['admin', 'faculty'])
def test_signup_cannot_pick_staff_role(client, db, role):
    response = client.post('/api/auth/register', json={
        'name': 'Eager', 'email': 'eager@college.edu', 'password': 'secret123', 'role': role
    })

    assert response.status_code == 400
    assert db.session.query(User).count() == 0


def test_signup_roles_follow_configuration(app, client):
    app.config['SELF_REGISTRATION_ROLES'] = ('student', 'faculty')

    response = client.post('/api/auth/register', json={
        'name': 'New Lecturer', 'email': 'lecturer@college.edu', 'password': 'secret123', 'role': 'Faculty'
    })

    assert response.status_code == 201
    assert response.get_json()['user']['role'] == 'faculty'
