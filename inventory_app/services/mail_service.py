from flask import current_app
from flask_mail import Message

from inventory_app.extensions import mail


class MailService:
    SUBJECT = "Inventory notification"

    @staticmethod
    def send_notification(user, message: str) -> bool:
        """Mail a copy of an in-app notification; failures are logged, never raised."""
        if user is None or not user.email:
            current_app.logger.info(f"[mail] user={getattr(user, 'id', '-')} has no email, skipped")
            return False

        body = f"Hello {user.name or 'there'},\n\n{message}\n"
        try:
            mail.send(Message(subject=MailService.SUBJECT, recipients=[user.email], body=body))
        except Exception as e:
            current_app.logger.warning(f"[mail] delivery to user={user.id} failed: {e}")
            return False
        return True
