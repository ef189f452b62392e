"""Exception types raised by the core and their JSON rendering.

Each error carries the HTTP status the transport answers with and the payload
body. Read paths never raise for missing records; they return ``None``.
"""
import logging

from flask import jsonify
from sqlalchemy.exc import SQLAlchemyError

from .database import db

logger = logging.getLogger(__name__)


class BloodCareError(Exception):
    status_code = 500
    message = "Internal Server Error"

    def __init__(self, message=None, **extra):
        super().__init__(message or self.message)
        self.message = message or self.message
        self.extra = extra

    def to_dict(self):
        return {"message": self.message, **self.extra}


class Unauthenticated(BloodCareError):
    status_code = 401
    message = "Unauthorized Access!"


class Forbidden(BloodCareError):
    status_code = 403
    message = "Forbidden Access"


class InvalidCommand(BloodCareError):
    status_code = 400
    message = "Invalid request body"


class StoreFailure(BloodCareError):
    status_code = 500
    message = "Database operation failed"


def register_error_handlers(app):
    @app.errorhandler(BloodCareError)
    def handle_bloodcare_error(error):
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(SQLAlchemyError)
    def handle_store_error(error):
        db.session.rollback()
        logger.error("Store operation failed: %s", error)
        failure = StoreFailure()
        return jsonify(failure.to_dict()), failure.status_code
