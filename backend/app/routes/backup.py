# Overview: Flask API routes for full-store backup download and restore.

import json

from flask import Blueprint, Response, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..services import backup_service
from ..services.backup_service import RestoreError
from ..validation import ValidationError
from .errors import storage_error

backup_bp = Blueprint("backup", __name__, url_prefix="/api")


@backup_bp.get("/backup")
def download_backup():
    """Whole store as a JSON attachment (pos_backup.json)."""
    try:
        document = backup_service.export_backup(
            db.session,
            version=current_app.config["BACKUP_FORMAT_VERSION"],
        )
    except SQLAlchemyError as e:
        return storage_error(e, "Failed to export backup")

    filename = current_app.config["BACKUP_FILENAME"]
    return Response(
        json.dumps(document, indent=2, ensure_ascii=False),
        mimetype="application/json",
        headers={"Content-Disposition": f"attachment; filename={filename}"},
    )


@backup_bp.post("/restore")
def restore_backup():
    """
    Replace the entire store with a backup document.

    Body: the document produced by GET /api/backup (only `data` is read).
    All-or-nothing: on failure the store is left untouched.
    """
    document = request.get_json(silent=True)

    try:
        data = backup_service.validate_envelope(document)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        counts = backup_service.restore_backup(db.session, data)
    except RestoreError as e:
        current_app.logger.warning("Restore rejected: %s", e)
        return jsonify({"error": str(e)}), 500
    except SQLAlchemyError as e:
        return storage_error(e, "Failed to restore backup")

    return jsonify({"success": True, "restored": counts}), 200
