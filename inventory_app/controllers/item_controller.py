from flask import Blueprint, request

from inventory_app.errors import ServiceError
from inventory_app.schemas import ItemRequest, ItemUpdateRequest, parse
from inventory_app.services.item_service import ItemService
from inventory_app.utils.decorators import role_required
from inventory_app.utils.responses import ok, service_error, internal_error
from inventory_app.utils.serializers import item_dict

item_bp = Blueprint("items", __name__)


def _list_items():
    try:
        category_id = request.args.get("category_id", type=int)
        status = request.args.get("status") or None
        items = ItemService.list_items(category_id=category_id, status=status)
        return ok([item_dict(i, with_category=True) for i in items])
    except Exception as e:
        return internal_error("fetch items", e)


def _show_item(item_id: int):
    try:
        item = ItemService.get_item(item_id)
        return ok(item_dict(item, with_category=True, with_transactions=True))
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        return internal_error("fetch item", e)


@item_bp.get("/user/items")
@role_required()
def list_items(principal):
    return _list_items()


@item_bp.get("/user/items/<int:item_id>")
@role_required()
def show_item(principal, item_id: int):
    return _show_item(item_id)


@item_bp.get("/admin/items")
@role_required("admin")
def admin_list_items(principal):
    return _list_items()


@item_bp.get("/admin/items/<int:item_id>")
@role_required("admin")
def admin_show_item(principal, item_id: int):
    return _show_item(item_id)


@item_bp.post("/admin/items")
@role_required("admin")
def create_item(principal):
    try:
        item = ItemService.create_item(
            parse(ItemRequest, request.get_json(silent=True)).model_dump()
        )
        return ok(item_dict(item, with_category=True), "Item created successfully", 201)
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        return internal_error("create item", e)


@item_bp.put("/admin/items/<int:item_id>")
@role_required("admin")
def update_item(principal, item_id: int):
    try:
        item = ItemService.update_item(
            item_id, parse(ItemUpdateRequest, request.get_json(silent=True)).model_dump()
        )
        return ok(item_dict(item, with_category=True), "Item updated successfully")
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        return internal_error("update item", e)


@item_bp.delete("/admin/items/<int:item_id>")
@role_required("admin")
def delete_item(principal, item_id: int):
    try:
        ItemService.delete_item(item_id)
        return ok(message="Item deleted successfully")
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        return internal_error("delete item", e)
