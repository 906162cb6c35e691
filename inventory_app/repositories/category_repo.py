from inventory_app.models.category import Category
from inventory_app.models.item import Item
from inventory_app.extensions import db


class CategoryRepo:
    @staticmethod
    def list_all():
        return Category.query.order_by(Category.id).all()

    @staticmethod
    def get(category_id: int):
        return db.session.get(Category, category_id)

    @staticmethod
    def name_taken(name: str, exclude_id: int | None = None) -> bool:
        q = Category.query.filter(Category.name == name)
        if exclude_id is not None:
            q = q.filter(Category.id != exclude_id)
        return db.session.query(q.exists()).scalar()

    @staticmethod
    def count_items(category_id: int) -> int:
        return Item.query.filter(Item.category_id == category_id, Item.deleted_at.is_(None)).count()

    @staticmethod
    def create(category: Category):
        db.session.add(category)
        db.session.commit()
        return category

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def delete(category: Category):
        # trashed items keep their row but lose the category link
        Item.query.filter(
            Item.category_id == category.id, Item.deleted_at.isnot(None)
        ).update({Item.category_id: None}, synchronize_session=False)
        db.session.delete(category)
        db.session.commit()
