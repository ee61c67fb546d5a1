"""
Sales Service - checkout recording

A sale arrives fully formed from the cart: header + line items in one
request. The header and every line are written inside one transactional
scope so a failure on any line leaves no trace of the sale.
"""

from __future__ import annotations

from dataclasses import dataclass

from flask import current_app
from sqlalchemy.orm import Session

from ..models import Sale, SaleItem, SALE_STATUS_COMPLETED
from ..validation import ValidationError
from .transactions import transaction


# Tolerance when comparing a client total with the recomputed one (float amounts)
TOTAL_TOLERANCE = 0.005


@dataclass(frozen=True)
class SaleLineInput:
    product_id: int
    quantity: int
    unit_price: float

    @property
    def subtotal(self) -> float:
        return self.quantity * self.unit_price


def items_total(items: list[SaleLineInput]) -> float:
    return sum(item.subtotal for item in items)


def check_total(total_amount: float, items: list[SaleLineInput]) -> None:
    """Raise ValidationError when total_amount is not the sum of the line subtotals."""
    expected = items_total(items)
    if abs(expected - total_amount) > TOTAL_TOLERANCE:
        raise ValidationError(
            f"total_amount {total_amount} does not match sum of items {expected}"
        )


def record_sale(
    session: Session,
    *,
    sale_id: str,
    total_amount: float,
    payment_mode: str,
    items: list[SaleLineInput],
    strict_total: bool = False,
) -> Sale:
    """
    Insert one sale row and one sale_items row per entry, atomically.

    total_amount is trusted as sent unless strict_total is set. Storage
    errors (duplicate sale id, NOT NULL violation...) propagate after the
    whole unit has been rolled back.
    """
    if strict_total:
        check_total(total_amount, items)

    with transaction(session):
        sale = Sale(
            id=sale_id,
            total_amount=total_amount,
            payment_mode=payment_mode,
            status=SALE_STATUS_COMPLETED,
        )
        session.add(sale)
        # Sale row goes out first so line items reference an existing parent
        session.flush()

        for item in items:
            session.add(SaleItem(
                sale_id=sale_id,
                product_id=item.product_id,
                quantity=item.quantity,
                unit_price=item.unit_price,
            ))
        session.flush()

    current_app.logger.info(
        "Recorded sale %s: %d item(s), total %s via %s",
        sale_id, len(items), total_amount, payment_mode,
    )
    return sale

