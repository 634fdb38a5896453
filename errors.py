# errors.py - turns every failure into a JSON body the client can show

from flask import jsonify
from pydantic import ValidationError
from werkzeug.exceptions import HTTPException, InternalServerError

from logger import Logger

logger = Logger.get_logger(__name__)


class UploadError(Exception):
    """Writing an uploaded file to disk failed."""

    def __init__(self, details):
        super().__init__(details)
        self.details = details


def validation_messages(exc: ValidationError):
    errors = []
    for err in exc.errors():
        field = '.'.join(str(part) for part in err['loc']) or 'body'
        errors.append({'field': field, 'error': err['msg']})
    return errors


def register_error_handlers(app, db):

    @app.errorhandler(ValidationError)
    def handle_validation_error(exc):
        errors = validation_messages(exc)
        message = '; '.join(f"{e['field']}: {e['error']}" for e in errors)
        return jsonify({'message': message, 'errors': errors}), 400

    # the one place internal detail goes back to the caller
    @app.errorhandler(UploadError)
    def handle_upload_error(exc):
        db.session.rollback()
        return jsonify({
            'message': 'An error occurred while uploading the image.',
            'details': exc.details,
        }), 500

    @app.errorhandler(HTTPException)
    def handle_http_error(exc):
        if isinstance(exc, InternalServerError):
            db.session.rollback()
            original = getattr(exc, 'original_exception', None)
            if original is not None:
                logger.error('Unhandled error: %r', original, exc_info=original)
            return jsonify({'message': 'Internal server error.'}), 500
        response = jsonify({'message': exc.description})
        response.status_code = exc.code
        for key, value in exc.get_headers():
            if key.lower() != 'content-type':
                response.headers[key] = value
        return response
