# Overview: Service-layer operations for expenses and expense categories.

from __future__ import annotations

from sqlalchemy.orm import Session

from ..models import Expense, ExpenseCategory


def list_categories(session: Session) -> list[dict]:
    categories = session.query(ExpenseCategory).order_by(ExpenseCategory.id.asc()).all()
    return [c.to_dict() for c in categories]


def create_category(session: Session, *, name: str) -> int:
    """Create a category; a duplicate name fails with IntegrityError."""
    category = ExpenseCategory(name=name)
    session.add(category)
    session.commit()
    return category.id


def list_expenses(session: Session) -> list[dict]:
    """Newest first; same-day expenses keep most-recent-entry first."""
    expenses = (
        session.query(Expense)
        .order_by(Expense.date.desc(), Expense.id.desc())
        .all()
    )
    return [e.to_dict() for e in expenses]


def create_expense(session: Session, *, patch: dict) -> int:
    """
    Record an expense from a validated patch.

    category is stored verbatim; it is not checked against expense_categories.
    date falls back to today when absent.
    """
    expense = Expense(**patch)
    session.add(expense)
    session.commit()
    return expense.id
