from inventory_app.models.user import User
from inventory_app.models.token_blocklist import TokenBlocklist
from inventory_app.extensions import db


class UserRepo:
    @staticmethod
    def get_by_email(email: str):
        return User.query.filter_by(email=email).first()

    @staticmethod
    def get_by_id(user_id: int):
        return db.session.get(User, user_id)

    @staticmethod
    def list_all():
        return User.query.order_by(User.id.desc()).all()

    @staticmethod
    def email_taken(email: str, exclude_id: int | None = None) -> bool:
        q = User.query.filter(User.email == email)
        if exclude_id is not None:
            q = q.filter(User.id != exclude_id)
        return db.session.query(q.exists()).scalar()

    @staticmethod
    def create(user: User):
        db.session.add(user)
        db.session.commit()
        return user

    @staticmethod
    def update():
        db.session.commit()

    @staticmethod
    def revoke_token(jti: str):
        db.session.add(TokenBlocklist(jti=jti))
        db.session.commit()

    @staticmethod
    def is_token_revoked(jti: str) -> bool:
        return TokenBlocklist.query.filter_by(jti=jti).first() is not None
