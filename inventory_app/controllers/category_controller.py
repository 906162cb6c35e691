from flask import Blueprint, request

from inventory_app.errors import ServiceError
from inventory_app.schemas import CategoryRequest, parse
from inventory_app.services.category_service import CategoryService
from inventory_app.utils.decorators import role_required
from inventory_app.utils.responses import ok, service_error, internal_error
from inventory_app.utils.serializers import category_dict

category_bp = Blueprint("categories", __name__)


def _list_categories():
    try:
        categories = CategoryService.list_categories()
        return ok([category_dict(c, with_items=True) for c in categories])
    except Exception as e:
        return internal_error("fetch categories", e)


def _show_category(category_id: int):
    try:
        category = CategoryService.get_category(category_id)
        return ok(category_dict(category, with_items=True))
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        return internal_error("fetch category", e)


@category_bp.get("/user/categories")
@role_required()
def list_categories(principal):
    return _list_categories()


@category_bp.get("/user/categories/<int:category_id>")
@role_required()
def show_category(principal, category_id: int):
    return _show_category(category_id)


@category_bp.get("/admin/categories")
@role_required("admin")
def admin_list_categories(principal):
    return _list_categories()


@category_bp.get("/admin/categories/<int:category_id>")
@role_required("admin")
def admin_show_category(principal, category_id: int):
    return _show_category(category_id)


@category_bp.post("/admin/categories")
@role_required("admin")
def create_category(principal):
    try:
        body = parse(CategoryRequest, request.get_json(silent=True))
        category = CategoryService.create_category(body.name, body.description)
        return ok(category_dict(category), "Category created successfully", 201)
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        return internal_error("create category", e)


@category_bp.put("/admin/categories/<int:category_id>")
@role_required("admin")
def update_category(principal, category_id: int):
    try:
        body = parse(CategoryRequest, request.get_json(silent=True))
        category = CategoryService.update_category(category_id, body.name, body.description)
        return ok(category_dict(category), "Category updated successfully")
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        return internal_error("update category", e)


@category_bp.delete("/admin/categories/<int:category_id>")
@role_required("admin")
def delete_category(principal, category_id: int):
    try:
        CategoryService.delete_category(category_id)
        return ok(message="Category deleted successfully")
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        return internal_error("delete category", e)
