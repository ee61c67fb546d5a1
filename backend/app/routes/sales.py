# Overview: Flask API routes for sales operations; parses input and returns JSON responses.

# backend/app/routes/sales.py
"""Checkout route: one request records the sale and all of its line items."""

from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..models import Sale, SaleItem
from ..services import sales_service
from ..services.sales_service import SaleLineInput
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    enforce_rules_sale,
    enforce_rules_sale_item,
    ValidationError,
)
from .errors import storage_error

SALE_POLICY = ModelValidationPolicy(
    writable_fields={"id", "total_amount", "payment_mode"},
    required_on_create={"id", "total_amount", "payment_mode"},
    ignore_unknown=True,
)

# Cart entries also carry a display-only "name"; it is dropped
SALE_ITEM_POLICY = ModelValidationPolicy(
    writable_fields={"product_id", "quantity", "unit_price"},
    required_on_create={"product_id", "quantity", "unit_price"},
    ignore_unknown=True,
)

sales_bp = Blueprint("sales", __name__, url_prefix="/api/sales")


def _parse_items(raw_items) -> list[SaleLineInput]:
    if not isinstance(raw_items, list) or not raw_items:
        raise ValidationError("items must be a non-empty list")

    items = []
    for index, raw in enumerate(raw_items):
        try:
            patch = validate_payload(model=SaleItem, payload=raw, policy=SALE_ITEM_POLICY, partial=False)
            enforce_rules_sale_item(patch)
        except ValidationError as e:
            raise ValidationError(f"items[{index}]: {e}") from e
        items.append(SaleLineInput(**patch))
    return items


@sales_bp.post("")
def create_sale_route():
    """
    Record a completed sale.

    Body: {id, total_amount, payment_mode, items: [{product_id, quantity, unit_price}]}

    The sale id is chosen by the client. total_amount is stored as sent
    unless STRICT_SALE_TOTALS is enabled.
    """
    payload = request.get_json(silent=True)

    try:
        header = validate_payload(model=Sale, payload=payload, policy=SALE_POLICY, partial=False)
        enforce_rules_sale(header)
        items = _parse_items(payload.get("items"))
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        sales_service.record_sale(
            db.session,
            sale_id=header["id"],
            total_amount=header["total_amount"],
            payment_mode=header["payment_mode"],
            items=items,
            strict_total=current_app.config.get("STRICT_SALE_TOTALS", False),
        )
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400
    except SQLAlchemyError as e:
        return storage_error(e, "Failed to record sale")

    return jsonify({"success": True}), 201
