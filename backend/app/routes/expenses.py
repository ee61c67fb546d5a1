# Overview: Flask API routes for expenses and expense categories.

from flask import Blueprint, request, jsonify
from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..models import Expense, ExpenseCategory
from ..services import expenses_service
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    enforce_rules_expense,
    ValidationError,
)
from .errors import storage_error

CATEGORY_POLICY = ModelValidationPolicy(
    writable_fields={"name"},
    required_on_create={"name"},
    ignore_unknown=True,
)

EXPENSE_POLICY = ModelValidationPolicy(
    writable_fields={"description", "amount", "category", "date"},
    required_on_create={"description", "amount", "category"},
    ignore_unknown=True,
)

expenses_bp = Blueprint("expenses", __name__, url_prefix="/api")


@expenses_bp.get("/expense-categories")
def list_categories():
    return jsonify(expenses_service.list_categories(db.session))


@expenses_bp.post("/expense-categories")
def create_category_route():
    payload = request.get_json(silent=True)

    try:
        patch = validate_payload(model=ExpenseCategory, payload=payload, policy=CATEGORY_POLICY, partial=False)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        category_id = expenses_service.create_category(db.session, name=patch["name"])
    except SQLAlchemyError as e:
        return storage_error(e, "Failed to create expense category")

    return jsonify({"id": category_id}), 201


@expenses_bp.get("/expenses")
def list_expenses():
    """Expenses, newest date first."""
    return jsonify(expenses_service.list_expenses(db.session))


@expenses_bp.post("/expenses")
def create_expense_route():
    """
    Record an expense.

    Body: {description, amount, category[, date]}. category is the category
    name as free text; date defaults to today.
    """
    payload = request.get_json(silent=True)

    # A null or blank date means "today", same as leaving it out
    if isinstance(payload, dict) and payload.get("date") in (None, ""):
        payload = {k: v for k, v in payload.items() if k != "date"}

    try:
        patch = validate_payload(model=Expense, payload=payload, policy=EXPENSE_POLICY, partial=False)
        enforce_rules_expense(patch)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        expenses_service.create_expense(db.session, patch=patch)
    except SQLAlchemyError as e:
        return storage_error(e, "Failed to record expense")

    return jsonify({"success": True}), 201
