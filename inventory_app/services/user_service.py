from flask import current_app

from inventory_app.errors import NotFoundError
from inventory_app.repositories.user_repo import UserRepo


class UserService:
    @staticmethod
    def list_users():
        return UserRepo.list_all()

    @staticmethod
    def toggle_restriction(user_id: int):
        user = UserRepo.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        user.is_restricted = not user.is_restricted
        UserRepo.update()
        current_app.logger.info(f"[users] user={user.id} is_restricted={user.is_restricted}")
        return user
