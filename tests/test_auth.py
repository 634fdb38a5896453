import jwt

from auth import TOKEN_LIFETIME, password_problems
from conftest import log_in, sign_up
from models import User


def roles_of(app, username):
    with app.app_context():
        return User.query.filter_by(username=username).one().role_names


def test_first_user_becomes_admin_and_later_users_are_users(app, client):
    alice = sign_up(client, 'alice')
    assert alice.status_code == 200
    assert alice.get_json() == {'Status': 'Success', 'Message': 'User Created Successfully'}

    assert sign_up(client, 'bob').status_code == 200
    assert sign_up(client, 'carol').status_code == 200

    assert roles_of(app, 'alice') == ['Admin']
    assert roles_of(app, 'bob') == ['User']
    assert roles_of(app, 'carol') == ['User']


def test_duplicate_username_is_rejected_without_new_row(app, client):
    sign_up(client, 'alice')
    response = sign_up(client, 'alice', email='other@example.com')

    assert response.status_code == 404
    assert response.get_json() == {'Status': 'Error Message', 'Message': 'Username already exists'}
    with app.app_context():
        assert User.query.filter_by(username='alice').count() == 1


def test_sign_up_stores_hash_and_security_stamp(app, client):
    sign_up(client, 'alice')
    with app.app_context():
        user = User.query.filter_by(username='alice').one()
        assert user.password_hash != 'Passw0rd!'
        assert user.check_password('Passw0rd!')
        assert len(user.security_stamp) == 36


def test_sign_up_with_weak_password_fails(app, client):
    response = sign_up(client, 'alice', password='short')
    assert response.status_code == 500
    assert response.get_json()['Message'] == 'User Created Failed'
    with app.app_context():
        assert User.query.count() == 0


def test_sign_up_missing_fields(client):
    response = client.post('/api/Authentication/SignUp', json={'UserName': 'alice'})
    assert response.status_code == 400
    fields = {e['field'] for e in response.get_json()['errors']}
    assert 'Email' in fields
    assert 'Password' in fields


def test_password_rules():
    assert password_problems('Passw0rd!') == []
    assert 'must contain a digit' in password_problems('Password!')
    assert 'must contain a non-alphanumeric character' in password_problems('Passw0rd')
    assert 'must be at least 6 characters' in password_problems('P0a!')


def test_login_returns_token_with_name_roles_and_one_hour_expiry(app, client):
    sign_up(client, 'alice')
    sign_up(client, 'bob')

    response = log_in(client, 'bob')
    assert response.status_code == 200
    token = response.get_json()['token']

    claims = jwt.decode(
        token,
        app.config['JWT_SECRET'],
        algorithms=['HS256'],
        audience=app.config['JWT_AUDIENCE'],
        issuer=app.config['JWT_ISSUER'],
    )
    assert claims['name'] == 'bob'
    assert claims['role'] == ['User']
    assert claims['exp'] - claims['iat'] == TOKEN_LIFETIME.total_seconds() == 3600
    assert claims['jti']


def test_login_failures_are_indistinguishable(client):
    sign_up(client, 'alice')

    wrong_password = log_in(client, 'alice', password='Wr0ng!pass')
    unknown_user = log_in(client, 'nobody')

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.data == unknown_user.data == b''


def test_login_accepts_camel_case_body(client):
    sign_up(client, 'alice')
    response = client.post('/api/Authentication/login', json={'userName': 'alice', 'password': 'Passw0rd!'})
    assert response.status_code == 200
