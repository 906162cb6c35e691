from datetime import datetime
from inventory_app.extensions import db


class Transaction(db.Model):
    __tablename__ = "transactions"

    STATUS_BORROWED = "borrowed"
    STATUS_RETURNED = "returned"
    STATUS_CANCELLED = "cancelled"
    STATUSES = (STATUS_BORROWED, STATUS_RETURNED, STATUS_CANCELLED)

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    item_id = db.Column(db.Integer, db.ForeignKey("items.id"), nullable=False, index=True)

    borrow_date = db.Column(db.DateTime, nullable=False)
    due_date = db.Column(db.DateTime, nullable=False)
    return_date = db.Column(db.DateTime, nullable=True)

    status = db.Column(db.String(20), nullable=False, default=STATUS_BORROWED, index=True)  # borrowed/returned/cancelled

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    user = db.relationship("User", backref="transactions")
    item = db.relationship("Item", backref=db.backref("transactions", order_by="Transaction.id.desc()"))

    @property
    def is_terminal(self) -> bool:
        return self.status != self.STATUS_BORROWED
