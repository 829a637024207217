from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

from flask import Flask, request, jsonify, current_app, g
import uuid
import logging
from http import HTTPStatus
from flask_cors import CORS
from werkzeug.exceptions import HTTPException as WerkzeugHTTPException
from pythonjsonlogger.json import JsonFormatter
from marshmallow import ValidationError

from .config import Config
from .error_codes import ErrorCodes
from .exceptions import AppException
from .routes.slots import slots_bp


# Custom Logging Filter for Request ID
class RequestIdFilter(logging.Filter):
    def filter(self, record):
        try:
            record.request_id = g.get('request_id', 'N/A')
        except RuntimeError:
            # Outside application context (engine used directly)
            record.request_id = 'N/A'
        return True


def configure_logging(app):
    """
    JSON logs on one stream handler for the package logger; plain logging in debug mode.

    The app logger is named after this module, so it sits below the package
    logger and reaches the handler by propagation.
    """
    level = getattr(logging, app.config.get('LOG_LEVEL', 'INFO'), logging.INFO)
    if app.debug:
        if not app.logger.handlers:
            logging.basicConfig(level=logging.DEBUG)
        return

    handler = logging.StreamHandler()
    formatter = JsonFormatter(
        '%(asctime)s %(levelname)s %(request_id)s %(module)s %(funcName)s %(lineno)d %(message)s'
    )
    handler.setFormatter(formatter)
    handler.addFilter(RequestIdFilter())

    package_logger = logging.getLogger('slot_engine')
    package_logger.handlers.clear()
    package_logger.addHandler(handler)
    package_logger.setLevel(level)

    app.logger.handlers.clear()
    app.logger.setLevel(level)


def create_app(config_class=Config):
    """Application factory exposing the slot engine over HTTP."""
    app = Flask(__name__)
    app.config.from_object(config_class)
    app.json.sort_keys = False

    configure_logging(app)

    allowed_origins = list(getattr(config_class, 'CORS_ORIGINS_LIST', []) or [])
    if app.debug:
        allowed_origins.extend([
            "http://localhost:3000",
            "http://127.0.0.1:3000",
            "http://localhost:5173",
        ])
    if allowed_origins:
        CORS(app,
             origins=allowed_origins,
             methods=['GET', 'POST', 'OPTIONS'],
             allow_headers=['Content-Type'],
             max_age=86400)
        app.logger.info(f"CORS configured for origins: {allowed_origins}")
    else:
        app.logger.warning("No CORS origins configured - API will reject cross-origin requests")

    @app.before_request
    def assign_request_id():
        g.request_id = str(uuid.uuid4())

    @app.errorhandler(ValidationError)
    def handle_validation_error(e):
        # Marshmallow ValidationError: malformed request body
        request_id = g.get('request_id', 'N/A')
        current_app.logger.warning(
            f"Request ID: {request_id} - Validation error: {e.messages} - Error Code: {ErrorCodes.VALIDATION_ERROR}"
        )
        return jsonify({
            'request_id': request_id,
            'status': False,
            'error_code': ErrorCodes.VALIDATION_ERROR,
            'status_message': 'Input validation failed.',
            'details': {'errors': e.messages},
            'action_button': None
        }), HTTPStatus.UNPROCESSABLE_ENTITY

    @app.errorhandler(WerkzeugHTTPException)
    def handle_werkzeug_http_exception(e):
        request_id = g.get('request_id', 'N/A')
        error_code = ErrorCodes.GENERIC_ERROR
        if e.code == 404:
            error_code = ErrorCodes.NOT_FOUND
        elif e.code == 405:
            error_code = ErrorCodes.METHOD_NOT_ALLOWED
        elif e.code >= 500:
            error_code = ErrorCodes.INTERNAL_SERVER_ERROR

        current_app.logger.warning(
            f"Request ID: {request_id} - HTTPException: {e.code} - {e.name}: {e.description} - Error Code: {error_code}"
        )
        response = e.get_response()
        response.data = jsonify({
            'request_id': request_id,
            'status': False,
            'error_code': error_code,
            'status_message': e.name,
            'details': {'path': request.path, 'description': e.description},
            'action_button': None
        }).data
        response.content_type = "application/json"
        return response

    # --- Global Error Handler ---
    @app.errorhandler(Exception)
    def handle_global_exception(e):
        request_id = g.get('request_id', 'N/A')

        if isinstance(e, AppException):
            current_app.logger.error(
                f"Request ID: {request_id} - AppException: {e.error_code} - {e.status_message} - Details: {e.details}",
                exc_info=True if e.status_code >= 500 else False
            )
            return jsonify({
                'request_id': request_id,
                'status': False,
                'error_code': e.error_code,
                'status_message': e.status_message,
                'details': e.details,
                'action_button': e.action_button
            }), e.status_code

        if isinstance(e, WerkzeugHTTPException):
            return handle_werkzeug_http_exception(e)

        current_app.logger.critical(
            f"Request ID: {request_id} - Unhandled Critical Exception. Error Code: {ErrorCodes.INTERNAL_SERVER_ERROR}",
            exc_info=True
        )
        return jsonify({
            'request_id': request_id,
            'status': False,
            'error_code': ErrorCodes.INTERNAL_SERVER_ERROR,
            'status_message': 'An unexpected internal server error occurred. Please try again later.',
            'details': {},
            'action_button': None
        }), HTTPStatus.INTERNAL_SERVER_ERROR

    @app.after_request
    def add_security_headers(response):
        response.headers['X-Content-Type-Options'] = 'nosniff'
        response.headers['X-Frame-Options'] = 'DENY'
        return response

    app.register_blueprint(slots_bp)

    return app
