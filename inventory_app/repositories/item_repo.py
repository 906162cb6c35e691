from datetime import datetime
from inventory_app.models.item import Item
from inventory_app.models.transaction import Transaction
from inventory_app.extensions import db


class ItemRepo:
    @staticmethod
    def _active():
        return Item.query.filter(Item.deleted_at.is_(None))

    @staticmethod
    def list_all(category_id: int | None = None, status: str | None = None):
        q = ItemRepo._active()
        if category_id:
            q = q.filter(Item.category_id == category_id)
        if status:
            q = q.filter(Item.status == status)
        return q.order_by(Item.id).all()

    @staticmethod
    def get(item_id: int):
        return ItemRepo._active().filter(Item.id == item_id).first()

    @staticmethod
    def get_for_update(item_id: int):
        # SELECT ... FOR UPDATE; engines without row locks ignore the clause
        return ItemRepo._active().filter(Item.id == item_id).with_for_update().first()

    @staticmethod
    def count_borrowed(item_id: int) -> int:
        return Transaction.query.filter_by(item_id=item_id, status=Transaction.STATUS_BORROWED).count()

    @staticmethod
    def create(item: Item):
        db.session.add(item)
        db.session.commit()
        return item

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def soft_delete(item: Item):
        item.deleted_at = datetime.utcnow()
        db.session.commit()
