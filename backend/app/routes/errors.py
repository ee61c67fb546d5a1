# Overview: Shared error responses for API routes.

from flask import jsonify, current_app

from ..extensions import db


def storage_error(exc: Exception, message: str):
    """
    500 response carrying the storage engine's own message.

    IntegrityError and friends wrap the DBAPI error in `.orig`; that is the
    part worth showing (e.g. "UNIQUE constraint failed: sales.id").
    The session is rolled back so the next request starts clean.
    """
    current_app.logger.exception(message)
    db.session.rollback()
    reason = getattr(exc, "orig", None) or exc
    return jsonify({"error": str(reason)}), 500
