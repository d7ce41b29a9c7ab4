from flask import current_app
from sqlalchemy.exc import SQLAlchemyError

from ..errors import AuthError, LinkError
from ..extensions import db
from .response import api_response


def register_error_handlers(app):
    @app.errorhandler(LinkError)
    def link_error(e):
        return api_response(False, e.message, None, e.status_code)

    @app.errorhandler(AuthError)
    def auth_error(e):
        return api_response(False, e.message, None, e.status_code)

    @app.errorhandler(SQLAlchemyError)
    def database_error(e):
        db.session.rollback()
        current_app.logger.error(f"Database error: {e}")
        return api_response(False, "Server Error", None, 500)

    @app.errorhandler(400)
    def bad_request(e):
        return api_response(False, "Bad Request", None, 400)

    @app.errorhandler(401)
    def unauthorized(e):
        return api_response(False, "Unauthorized", None, 401)

    @app.errorhandler(404)
    def not_found(e):
        return api_response(False, "Not Found", None, 404)

    @app.errorhandler(405)
    def method_not_allowed(e):
        return api_response(False, "Method Not Allowed", None, 405)

    @app.errorhandler(500)
    def server_error(e):
        return api_response(False, "Server Error", None, 500)
