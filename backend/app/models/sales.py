from __future__ import annotations

from ..extensions import db
from app.time_utils import to_utc_z

# Payment tags accepted at checkout (mobile money operators + cash)
PAYMENT_MODES = ("CASH", "ORANGE_MONEY", "WAVE", "MOOV_MONEY", "SANKMONEY")

# The only status this system ever writes
SALE_STATUS_COMPLETED = "COMPLETED"


class Sale(db.Model):
    """
    Completed checkout.

    The id is generated by the client (e.g. "SALE-1718000000000") so a
    receipt can be printed before the server answers. Sales are immutable:
    there is no update or delete path.
    """
    __tablename__ = "sales"
    __table_args__ = (
        db.Index("ix_sales_status_created", "status", "created_at"),
    )

    id = db.Column(db.String(64), primary_key=True)
    created_at = db.Column(db.DateTime, nullable=False, server_default=db.func.now())
    total_amount = db.Column(db.Float, nullable=False)
    payment_mode = db.Column(db.String(32), nullable=False)
    status = db.Column(db.String(16), nullable=False, default=SALE_STATUS_COMPLETED)

    items = db.relationship("SaleItem", back_populates="sale", lazy=True, order_by="SaleItem.id")

    def __repr__(self) -> str:
        return f"<Sale id={self.id!r} total_amount={self.total_amount} payment_mode={self.payment_mode}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "created_at": to_utc_z(self.created_at),
            "total_amount": self.total_amount,
            "payment_mode": self.payment_mode,
            "status": self.status,
        }


class SaleItem(db.Model):
    """Line item on a sale. unit_price is captured at checkout, never joined live."""
    __tablename__ = "sale_items"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    sale_id = db.Column(db.String(64), db.ForeignKey("sales.id"), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False, index=True)
    quantity = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(db.Float, nullable=False)

    sale = db.relationship("Sale", back_populates="items")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "sale_id": self.sale_id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
        }
