# auth.py - sign up, login and bearer token checks

import uuid
from datetime import datetime, timedelta, timezone

import jwt
from flask import Blueprint, current_app, jsonify, request
from flask_login import LoginManager
from sqlalchemy.exc import SQLAlchemyError

from logger import Logger
from models import db, User, Role
from schemas import SignUpIn, LoginIn

logger = Logger.get_logger(__name__)

TOKEN_LIFETIME = timedelta(hours=1)
ADMIN_ROLE = 'Admin'
USER_ROLE = 'User'

auth_bp = Blueprint('authentication', __name__, url_prefix='/api/Authentication')

# login manager setup, users are identified by the bearer token on each request
login_manager = LoginManager()


@login_manager.user_loader
def load_user(user_id):
    return db.session.get(User, int(user_id))


@login_manager.request_loader
def load_user_from_request(req):
    scheme, _, token = req.headers.get('Authorization', '').partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    try:
        claims = decode_token(token.strip())
    except jwt.InvalidTokenError as exc:
        logger.debug("Rejected bearer token: %s", exc)
        return None
    return User.query.filter_by(username=claims.get('name')).first()


@login_manager.unauthorized_handler
def unauthorized():
    return '', 401, {'WWW-Authenticate': 'Bearer'}


def password_problems(password):
    """Default password rules for new accounts; returns the broken ones."""
    problems = []
    if len(password) < 6:
        problems.append('must be at least 6 characters')
    if not any(c.isdigit() for c in password):
        problems.append('must contain a digit')
    if not any(c.islower() for c in password):
        problems.append('must contain a lowercase letter')
    if not any(c.isupper() for c in password):
        problems.append('must contain an uppercase letter')
    if all(c.isalnum() for c in password):
        problems.append('must contain a non-alphanumeric character')
    return problems


def _get_or_create_role(name):
    role = Role.query.filter_by(name=name).first()
    if role is None:
        role = Role(name=name)
        db.session.add(role)
    return role


def assign_initial_role(user):
    # whoever signs up while there is no Admin role becomes the Admin,
    # everyone after that is a plain User
    if Role.query.filter_by(name=ADMIN_ROLE).first() is None:
        role = _get_or_create_role(ADMIN_ROLE)
    else:
        role = _get_or_create_role(USER_ROLE)
    user.roles.append(role)
    return role


def issue_token(user):
    issued = int(datetime.now(timezone.utc).timestamp())
    claims = {
        'name': user.username,
        'role': user.role_names,
        'jti': str(uuid.uuid4()),
        'iat': issued,
        'exp': issued + int(TOKEN_LIFETIME.total_seconds()),
        'iss': current_app.config['JWT_ISSUER'],
        'aud': current_app.config['JWT_AUDIENCE'],
    }
    return jwt.encode(claims, current_app.config['JWT_SECRET'], algorithm='HS256')


def decode_token(token):
    return jwt.decode(
        token,
        current_app.config['JWT_SECRET'],
        algorithms=['HS256'],
        audience=current_app.config['JWT_AUDIENCE'],
        issuer=current_app.config['JWT_ISSUER'],
        options={'require': ['exp', 'iat', 'name']},
    )


def _status(status, message, code):
    return jsonify({'Status': status, 'Message': message}), code


@auth_bp.route('/SignUp', methods=['POST'])
def sign_up():
    model = SignUpIn.model_validate(request.get_json(silent=True) or {})

    if User.query.filter_by(username=model.user_name).first() is not None:
        return _status('Error Message', 'Username already exists', 404)

    problems = password_problems(model.password)
    if problems:
        logger.info("Sign up for %s refused: password %s", model.user_name, ', '.join(problems))
        return _status('Error Message', 'User Created Failed', 500)

    user = User(username=model.user_name, email=model.email, security_stamp=str(uuid.uuid4()))
    user.set_password(model.password)
    db.session.add(user)
    try:
        role = assign_initial_role(user)
        db.session.commit()
    except SQLAlchemyError:
        db.session.rollback()
        logger.exception("Could not create user %s", model.user_name)
        return _status('Error Message', 'User Created Failed', 500)

    logger.info("Created user %s with role %s", user.username, role.name)
    return _status('Success', 'User Created Successfully', 200)


@auth_bp.route('/login', methods=['POST'])
def login():
    model = LoginIn.model_validate(request.get_json(silent=True) or {})

    user = User.query.filter_by(username=model.user_name).first()
    if user and user.check_password(model.password):
        logger.info("User %s logged in", user.username)
        return jsonify({'token': issue_token(user)})

    # same answer for unknown user and wrong password
    logger.info("Failed login for %s", model.user_name)
    return '', 401
