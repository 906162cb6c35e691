from datetime import datetime
from inventory_app.extensions import db


class Category(db.Model):
    __tablename__ = "categories"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), unique=True, nullable=False, index=True)
    description = db.Column(db.Text, nullable=True)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # soft-deleted items are hidden from the category
    items = db.relationship(
        "Item",
        primaryjoin="and_(Category.id == Item.category_id, Item.deleted_at.is_(None))",
        viewonly=True,
        order_by="Item.id",
    )
