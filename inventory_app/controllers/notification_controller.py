from flask import Blueprint

from inventory_app.errors import ServiceError
from inventory_app.services.notification_service import NotificationService
from inventory_app.utils.decorators import role_required
from inventory_app.utils.responses import ok, service_error, internal_error
from inventory_app.utils.serializers import notification_dict

notif_bp = Blueprint("notifications", __name__, url_prefix="/user/notifications")


@notif_bp.get("")
@role_required()
def list_notifications(principal):
    try:
        rows = NotificationService.list_for(principal)
        return ok([notification_dict(n) for n in rows])
    except Exception as e:
        return internal_error("fetch notifications", e)


@notif_bp.get("/unread-count")
@role_required()
def unread_count(principal):
    try:
        return ok({"count": NotificationService.unread_count(principal)})
    except Exception as e:
        return internal_error("get unread count", e)


@notif_bp.put("/<int:notification_id>/read")
@role_required()
def mark_as_read(principal, notification_id: int):
    try:
        NotificationService.mark_as_read(principal, notification_id)
        return ok(message="Notification marked as read")
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        return internal_error("mark notification as read", e)


@notif_bp.put("/mark-all-read")
@role_required()
def mark_all_as_read(principal):
    try:
        NotificationService.mark_all_as_read(principal)
        return ok(message="All notifications marked as read")
    except Exception as e:
        return internal_error("mark all notifications as read", e)
