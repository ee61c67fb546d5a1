from flask import Blueprint, jsonify

from app.extensions import db
from app.services import reporting_service


reports_bp = Blueprint("reports", __name__, url_prefix="/api")


@reports_bp.get("/dashboard")
def dashboard():
    """Revenue (ca), expenses (charges) and profit, all-time."""
    return jsonify(reporting_service.dashboard_summary(db.session)), 200
