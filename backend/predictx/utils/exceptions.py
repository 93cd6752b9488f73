"""
API exceptions and their JSON error handlers.
"""
import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

logger = logging.getLogger(__name__)


class APIError(Exception):
    """Base API exception with status code and message."""

    status_code = 400

    def __init__(self, message=None, status_code=None):
        super().__init__(message)
        self.message = message or "Invalid request"
        if status_code is not None:
            self.status_code = status_code


class BadRequestError(APIError):
    status_code = 400


class UnauthorizedError(APIError):
    status_code = 401

    def __init__(self, message="Authentication required"):
        super().__init__(message)


class ForbiddenError(APIError):
    status_code = 403

    def __init__(self, message="Access forbidden"):
        super().__init__(message)


class NotFoundError(APIError):
    status_code = 404

    def __init__(self, message="Resource not found"):
        super().__init__(message)


class ConflictError(APIError):
    status_code = 409


def register_error_handlers(app):
    @app.errorhandler(APIError)
    def handle_api_error(error):
        return jsonify({"error": error.message}), error.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception("Unhandled error: %s", error)
        return jsonify({"error": "Internal server error"}), 500
