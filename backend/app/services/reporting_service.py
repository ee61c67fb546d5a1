# Overview: Service-layer operations for reporting; aggregate reads for the dashboard.

from __future__ import annotations

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.models import Sale, Expense, SALE_STATUS_COMPLETED


def revenue_total(session: Session) -> float:
    """Sum of completed sale totals (0 when there are no sales)."""
    total = (
        session.query(func.coalesce(func.sum(Sale.total_amount), 0))
        .filter(Sale.status == SALE_STATUS_COMPLETED)
        .scalar()
    )
    return total or 0


def expenses_total(session: Session) -> float:
    """Sum of every expense amount (0 when there are no expenses)."""
    total = session.query(func.coalesce(func.sum(Expense.amount), 0)).scalar()
    return total or 0


def dashboard_summary(session: Session) -> dict:
    """
    Headline figures for the dashboard.

    - ca: chiffre d'affaires, revenue from completed sales
    - charges: total expenses
    - profit: ca - charges
    """
    ca = revenue_total(session)
    charges = expenses_total(session)
    return {
        "ca": ca,
        "charges": charges,
        "profit": ca - charges,
    }
