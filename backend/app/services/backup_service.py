"""
Backup / restore of the whole store.

A backup is a JSON envelope:

    {"version": "1.0", "timestamp": "...Z",
     "data": {"products": [...], "sales": [...], "sale_items": [...],
              "expenses": [...], "expense_categories": [...]}}

Export reads every table inside one read snapshot, so the five lists
describe the same instant. Restore wipes and reloads every table inside one
transactional scope: either the document is loaded completely or the store
is left exactly as it was.
"""

from __future__ import annotations

from flask import current_app
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import Product, Sale, SaleItem, Expense, ExpenseCategory
from app.time_utils import utcnow, to_utc_z
from app.validation import ValidationError, coerce_row
from .transactions import transaction, read_snapshot


# Envelope keys, in the order they appear in an exported document
BACKUP_TABLES = {
    "products": Product,
    "sales": Sale,
    "sale_items": SaleItem,
    "expenses": Expense,
    "expense_categories": ExpenseCategory,
}

# Children before parents
DELETE_ORDER = ("sale_items", "sales", "products", "expenses", "expense_categories")

# Parents before children
INSERT_ORDER = ("products", "expense_categories", "expenses", "sales", "sale_items")


class RestoreError(Exception):
    """Raised when a backup document cannot be loaded; the store is unchanged."""


def export_backup(session: Session, *, version: str = "1.0") -> dict:
    data: dict[str, list[dict]] = {}
    with read_snapshot(session):
        for key, model in BACKUP_TABLES.items():
            rows = session.query(model).order_by(model.id.asc()).all()
            data[key] = [row.to_dict() for row in rows]

    return {
        "version": version,
        "timestamp": to_utc_z(utcnow()),
        "data": data,
    }


def validate_envelope(document) -> dict:
    """
    Check the top-level shape of a restore request and return its `data` object.

    Only shape is checked here; row contents are checked while loading.
    """
    if not isinstance(document, dict):
        raise ValidationError("Invalid JSON payload")

    data = document.get("data")
    if data is None:
        raise ValidationError("No data provided")
    if not isinstance(data, dict):
        raise ValidationError("data must be an object")

    for key in BACKUP_TABLES:
        rows = data.get(key)
        if rows is not None and not isinstance(rows, list):
            raise ValidationError(f"data.{key} must be a list")

    return data


def _find_orphan_items(session: Session) -> list[int]:
    rows = (
        session.query(SaleItem.id)
        .outerjoin(Sale, SaleItem.sale_id == Sale.id)
        .filter(Sale.id.is_(None))
        .order_by(SaleItem.id.asc())
        .limit(5)
        .all()
    )
    return [r.id for r in rows]


def restore_backup(session: Session, data: dict) -> dict[str, int]:
    """
    Replace the content of all five tables with `data`.

    Ids are inserted as-is since sale_items point at sales and products by
    id. A table missing from `data` ends up empty. sale_items must reference
    a sale present in the document; product_id is not checked because
    deleting a product legitimately leaves dangling references behind.

    Returns the number of rows loaded per table.

    Raises:
        RestoreError: a row could not be loaded (everything is rolled back)
    """
    counts: dict[str, int] = {}

    with transaction(session):
        for key in DELETE_ORDER:
            session.execute(BACKUP_TABLES[key].__table__.delete())

        for key in INSERT_ORDER:
            model = BACKUP_TABLES[key]
            rows = data.get(key) or []
            for index, row in enumerate(rows):
                try:
                    values = coerce_row(model, row)
                    session.execute(model.__table__.insert().values(**values))
                except ValidationError as exc:
                    raise RestoreError(f"{key}[{index}]: {exc}") from exc
                except SQLAlchemyError as exc:
                    reason = getattr(exc, "orig", None) or exc
                    raise RestoreError(f"{key}[{index}]: {reason}") from exc
            counts[key] = len(rows)

        orphans = _find_orphan_items(session)
        if orphans:
            raise RestoreError(
                f"sale_items reference unknown sales (item ids: {', '.join(map(str, orphans))})"
            )

    current_app.logger.info(
        "Restored backup: %s",
        ", ".join(f"{key}={count}" for key, count in counts.items()),
    )
    return counts
