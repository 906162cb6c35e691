from flask import current_app

from inventory_app.errors import BusinessRuleError, NotFoundError, ValidationError
from inventory_app.models.item import Item
from inventory_app.repositories.category_repo import CategoryRepo
from inventory_app.repositories.item_repo import ItemRepo


class ItemService:
    @staticmethod
    def list_items(category_id: int | None = None, status: str | None = None):
        return ItemRepo.list_all(category_id=category_id, status=status)

    @staticmethod
    def get_item(item_id: int):
        item = ItemRepo.get(item_id)
        if not item:
            raise NotFoundError("Item not found")
        return item

    @staticmethod
    def _ensure_category(category_id: int):
        if not CategoryRepo.get(category_id):
            raise ValidationError("The given data was invalid.",
                                  errors={"category_id": "The selected category id is invalid."})

    @staticmethod
    def create_item(data: dict):
        ItemService._ensure_category(data["category_id"])
        item = Item(
            name=data["name"],
            description=data.get("description"),
            category_id=data["category_id"],
            quantity=data["quantity"],
            image=data.get("image"),
            status=data.get("status") or Item.STATUS_AVAILABLE,
        )
        return ItemRepo.create(item)

    @staticmethod
    def update_item(item_id: int, data: dict):
        item = ItemService.get_item(item_id)
        ItemService._ensure_category(data["category_id"])

        item.name = data["name"]
        item.description = data.get("description")
        item.category_id = data["category_id"]
        item.quantity = data["quantity"]
        if data.get("image") is not None:
            item.image = data["image"]
        item.status = data.get("status") or item.status

        ItemRepo.update()
        return item

    @staticmethod
    def delete_item(item_id: int):
        item = ItemService.get_item(item_id)
        if ItemRepo.count_borrowed(item.id) > 0:
            raise BusinessRuleError("Cannot delete item with active transactions")
        ItemRepo.soft_delete(item)
        current_app.logger.info(f"[items] item={item.id} soft-deleted")
