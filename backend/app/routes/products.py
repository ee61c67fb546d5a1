# Overview: Flask API routes for products operations; parses input and returns JSON responses.

# backend/app/routes/products.py
"""
Menu (product) routes.

PUT is a patch: only the fields sent are changed, so the UI can flip
is_available by posting the product back with that single field changed.
Update and delete of an unknown id are no-ops that still report success.
"""
from flask import Blueprint, request, jsonify, current_app
from sqlalchemy.exc import SQLAlchemyError

from ..extensions import db
from ..models import Product
from ..services import products_service
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    enforce_rules_product,
    ValidationError,
)
from .errors import storage_error

PRODUCT_POLICY = ModelValidationPolicy(
    writable_fields={"name", "price", "category", "image_url", "is_available"},
    required_on_create={"name", "price", "category"},
    ignore_unknown=True,
)

products_bp = Blueprint("products", __name__, url_prefix="/api/products")


@products_bp.get("")
def list_products():
    """List the whole menu, available or not."""
    return jsonify(products_service.list_products(db.session))


@products_bp.post("")
def create_product_route():
    payload = request.get_json(silent=True)

    try:
        patch = validate_payload(model=Product, payload=payload, policy=PRODUCT_POLICY, partial=False)
        enforce_rules_product(patch)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        product_id = products_service.create_product(db.session, patch=patch)
    except SQLAlchemyError as e:
        return storage_error(e, "Failed to create product")

    return jsonify({"id": product_id}), 201


@products_bp.put("/<int:product_id>")
def update_product_route(product_id: int):
    payload = request.get_json(silent=True)

    try:
        patch = validate_payload(model=Product, payload=payload, policy=PRODUCT_POLICY, partial=True)
        enforce_rules_product(patch)
    except ValidationError as e:
        return jsonify({"error": str(e)}), 400

    try:
        updated = products_service.update_product(db.session, product_id=product_id, patch=patch)
    except SQLAlchemyError as e:
        return storage_error(e, "Failed to update product")

    if not updated:
        current_app.logger.info("Update of unknown product %s ignored", product_id)
    return jsonify({"success": True}), 200


@products_bp.delete("/<int:product_id>")
def delete_product_route(product_id: int):
    try:
        products_service.delete_product(db.session, product_id=product_id)
    except SQLAlchemyError as e:
        return storage_error(e, "Failed to delete product")

    return jsonify({"success": True}), 200
