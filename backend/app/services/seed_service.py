# Overview: Starter data for a fresh install (menu and expense categories).

from __future__ import annotations

from sqlalchemy.orm import Session

from ..models import Product, ExpenseCategory
from .transactions import transaction


DEFAULT_EXPENSE_CATEGORIES = ("Loyer", "Electricité", "Eau", "Autres")

DEFAULT_PRODUCTS = (
    # (name, price, category)
    ("Burger Classique", 3500, "Plats"),
    ("Pizza Margherita", 5000, "Plats"),
    ("Coca Cola", 500, "Boissons"),
    ("Café Expresso", 1000, "Boissons"),
    ("Tiramisu", 2500, "Desserts"),
)


def seed_defaults(session: Session) -> dict[str, int]:
    """
    Fill empty tables with the starter menu and expense categories.

    Each table is checked on its own: a store that already has products but
    no categories only gets the categories. Returns rows inserted per table.
    """
    inserted = {"expense_categories": 0, "products": 0}

    with transaction(session):
        if session.query(ExpenseCategory.id).first() is None:
            for name in DEFAULT_EXPENSE_CATEGORIES:
                session.add(ExpenseCategory(name=name))
            inserted["expense_categories"] = len(DEFAULT_EXPENSE_CATEGORIES)

        if session.query(Product.id).first() is None:
            for name, price, category in DEFAULT_PRODUCTS:
                session.add(Product(name=name, price=price, category=category, is_available=True))
            inserted["products"] = len(DEFAULT_PRODUCTS)

    return inserted
