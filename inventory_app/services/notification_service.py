from flask import current_app

from inventory_app.errors import NotFoundError
from inventory_app.models.notification import Notification
from inventory_app.repositories.notification_repo import NotificationRepo
from inventory_app.repositories.user_repo import UserRepo
from inventory_app.services.mail_service import MailService


class NotificationService:
    @staticmethod
    def notify(user_id: int, message: str, commit: bool = False) -> Notification:
        """
        Stores an unread notification. commit=False leaves it in the caller's
        unit of work so it is written together with the ledger change; pass the
        returned rows to mail_out() once that commit has gone through.
        """
        return NotificationRepo.log(
            Notification(user_id=user_id, message=message, status=Notification.STATUS_UNREAD),
            commit=commit,
        )

    @staticmethod
    def mail_out(entries):
        if not current_app.config.get("NOTIFY_BY_MAIL"):
            return
        for entry in entries:
            MailService.send_notification(UserRepo.get_by_id(entry.user_id), entry.message)

    @staticmethod
    def list_for(principal):
        return NotificationRepo.list_by_user(principal.id)

    @staticmethod
    def unread_count(principal) -> int:
        return NotificationRepo.unread_count(principal.id)

    @staticmethod
    def mark_as_read(principal, notification_id: int) -> Notification:
        n = NotificationRepo.get_for_user(notification_id, principal.id)
        if not n:
            raise NotFoundError("Notification not found")
        n.status = Notification.STATUS_READ
        NotificationRepo.commit()
        return n

    @staticmethod
    def mark_all_as_read(principal) -> int:
        return NotificationRepo.mark_all_read(principal.id)
