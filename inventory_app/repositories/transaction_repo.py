from datetime import datetime
from inventory_app.models.transaction import Transaction
from inventory_app.extensions import db


class TransactionRepo:
    @staticmethod
    def get(transaction_id: int):
        return db.session.get(Transaction, transaction_id)

    @staticmethod
    def get_for_update(transaction_id: int):
        return Transaction.query.filter(Transaction.id == transaction_id).with_for_update().first()

    @staticmethod
    def list_filtered(user_id: int | None = None, status: str | None = None):
        q = Transaction.query
        if user_id is not None:
            q = q.filter(Transaction.user_id == user_id)
        if status:
            q = q.filter(Transaction.status == status)
        return q.order_by(Transaction.created_at.desc(), Transaction.id.desc()).all()

    @staticmethod
    def add(transaction: Transaction):
        db.session.add(transaction)
        return transaction

    @staticmethod
    def count_overdue(user_id: int, now: datetime) -> int:
        return Transaction.query.filter(
            Transaction.user_id == user_id,
            Transaction.status == Transaction.STATUS_BORROWED,
            Transaction.due_date < now
        ).count()

    @staticmethod
    def commit():
        db.session.commit()

    @staticmethod
    def flush():
        db.session.flush()
