from flask import Blueprint

from inventory_app.errors import ServiceError
from inventory_app.services.user_service import UserService
from inventory_app.utils.decorators import role_required
from inventory_app.utils.responses import ok, service_error, internal_error
from inventory_app.utils.serializers import user_dict

user_bp = Blueprint("users", __name__, url_prefix="/admin/users")


@user_bp.get("")
@role_required("admin")
def list_users(principal):
    try:
        return ok([user_dict(u, with_roles=True) for u in UserService.list_users()])
    except Exception as e:
        return internal_error("fetch users", e)


@user_bp.put("/<int:user_id>/toggle-restriction")
@role_required("admin")
def toggle_restriction(principal, user_id: int):
    try:
        user = UserService.toggle_restriction(user_id)
        state = "restricted" if user.is_restricted else "unrestricted"
        return ok(user_dict(user, with_roles=True), f"User {state} successfully")
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        return internal_error("toggle user restriction", e)
