from .catalog import Product
from .sales import Sale, SaleItem, PAYMENT_MODES, SALE_STATUS_COMPLETED
from .expenses import ExpenseCategory, Expense

__all__ = [
    'Product',
    'Sale', 'SaleItem', 'PAYMENT_MODES', 'SALE_STATUS_COMPLETED',
    'ExpenseCategory', 'Expense',
]
