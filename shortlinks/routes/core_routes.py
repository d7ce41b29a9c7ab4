from flask import Blueprint, current_app
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..utils.response import api_response

core_bp = Blueprint("core", __name__)


@core_bp.route("/")
def root():
    return api_response(True, "Link shortener API. Use the frontend for UI.", None)


@core_bp.route("/health")
def health():
    try:
        db.session.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as exc:
        db.session.rollback()
        current_app.logger.error(f"Health check database error: {exc}")
        database = "unavailable"

    status = "ok" if database == "ok" else "degraded"
    return {"status": status, "database": database}, 200 if status == "ok" else 503
