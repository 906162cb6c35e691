from datetime import datetime
from inventory_app.extensions import db


class Notification(db.Model):
    __tablename__ = "notifications"

    STATUS_UNREAD = "unread"
    STATUS_READ = "read"

    id = db.Column(db.Integer, primary_key=True)

    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    message = db.Column(db.String(1000), nullable=False)
    status = db.Column(db.String(10), nullable=False, default=STATUS_UNREAD)

    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    user = db.relationship("User", backref="notifications")
