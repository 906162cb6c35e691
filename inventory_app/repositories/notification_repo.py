from inventory_app.models.notification import Notification
from inventory_app.extensions import db


class NotificationRepo:
    @staticmethod
    def list_by_user(user_id: int):
        return (
            Notification.query.filter_by(user_id=user_id)
            .order_by(Notification.created_at.desc(), Notification.id.desc())
            .all()
        )

    @staticmethod
    def get_for_user(notification_id: int, user_id: int):
        return Notification.query.filter_by(id=notification_id, user_id=user_id).first()

    @staticmethod
    def unread_count(user_id: int) -> int:
        return Notification.query.filter_by(user_id=user_id, status=Notification.STATUS_UNREAD).count()

    @staticmethod
    def mark_all_read(user_id: int) -> int:
        updated = Notification.query.filter_by(
            user_id=user_id, status=Notification.STATUS_UNREAD
        ).update({Notification.status: Notification.STATUS_READ}, synchronize_session=False)
        db.session.commit()
        return updated

    @staticmethod
    def log(entry: Notification, commit: bool = True):
        db.session.add(entry)
        if commit:
            db.session.commit()
        return entry

    @staticmethod
    def commit():
        db.session.commit()
