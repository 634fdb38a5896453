# app.py - builds the Flask app and wires up the API
# run this file starting the server: python app.py

import os

from flask import Flask, current_app, send_from_directory

from auth import auth_bp, login_manager
from config import Settings
from errors import register_error_handlers
from logger import Logger
from models import db
from resources import ALL_RESOURCES

logger = Logger.get_logger(__name__)


def create_app(overrides=None):
    app = Flask(__name__)
    app.config.update(Settings().to_flask_config())
    if overrides:
        app.config.update(overrides)

    db.init_app(app)
    login_manager.init_app(app)
    register_error_handlers(app, db)

    # api routes
    app.register_blueprint(auth_bp)
    for resource in ALL_RESOURCES:
        app.register_blueprint(resource.blueprint())

    # uploaded pictures, the client links straight to the imageUrl
    url_path = app.config['UPLOAD_URL_PATH']
    app.add_url_rule(f'{url_path}/<path:filename>', 'uploaded_file', uploaded_file)

    # setup database tables
    with app.app_context():
        db.create_all()
        logger.info("Database tables ready at %s", app.config['SQLALCHEMY_DATABASE_URI'])

    return app


def uploaded_file(filename):
    return send_from_directory(os.path.abspath(current_app.config['UPLOAD_FOLDER']), filename)


if __name__ == '__main__':
    create_app().run(debug=True, port=int(os.getenv('PORT', 5001)), threaded=True)
