import pytest

from app import create_app
from models import db

STRONG_PASSWORD = 'Passw0rd!'


@pytest.fixture
def app(tmp_path):
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'UPLOAD_FOLDER': str(tmp_path / 'Images'),
        'UPLOAD_URL_PATH': '/Images',
        'JWT_SECRET': 'test-secret-that-is-long-enough-for-hs256',
    })
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def sign_up(client, username, password=STRONG_PASSWORD, email=None):
    return client.post('/api/Authentication/SignUp', json={
        'UserName': username,
        'Email': email or f'{username}@example.com',
        'Password': password,
    })


def log_in(client, username, password=STRONG_PASSWORD):
    return client.post('/api/Authentication/login', json={'UserName': username, 'Password': password})


@pytest.fixture
def auth_headers(client):
    sign_up(client, 'manager')
    token = log_in(client, 'manager').get_json()['token']
    return {'Authorization': f'Bearer {token}'}
