# backend/app/services/products_service.py
"""
Products Service

Menu management. Every function takes the session it works with; routes
pass db.session, the CLI and tests may pass their own.
"""
from __future__ import annotations

from sqlalchemy.orm import Session

from ..models import Product

PRODUCT_MUTABLE_FIELDS = {"name", "price", "category", "image_url", "is_available"}


def apply_product_patch(p: Product, patch: dict) -> None:
    for k, v in patch.items():
        if k not in PRODUCT_MUTABLE_FIELDS:
            continue
        setattr(p, k, v)


def list_products(session: Session) -> list[dict]:
    products = session.query(Product).order_by(Product.id.asc()).all()
    return [p.to_dict() for p in products]


def create_product(session: Session, *, patch: dict) -> int:
    """Create product using a validated patch dict. Returns the new id."""
    p = Product()
    apply_product_patch(p, patch)

    session.add(p)
    session.commit()
    return p.id


def update_product(session: Session, *, product_id: int, patch: dict) -> bool:
    """
    Update a product in place.

    Returns False when the id does not exist; callers treat that as a no-op,
    not as an error.
    """
    p = session.get(Product, product_id)
    if p is None:
        return False

    apply_product_patch(p, patch)
    session.commit()
    return True


def delete_product(session: Session, *, product_id: int) -> bool:
    """
    Hard-delete a product.

    sale_items rows that reference it are kept as-is (they carry their own
    unit_price). Returns False if nothing was deleted.
    """
    deleted = session.query(Product).filter(Product.id == product_id).delete(synchronize_session="fetch")
    session.commit()
    return deleted > 0
