from flask import current_app
from flask_jwt_extended import create_access_token
from werkzeug.security import generate_password_hash, check_password_hash

from inventory_app.errors import RESTRICTED_ACCOUNT_MESSAGE, AuthenticationError, NotFoundError, ValidationError
from inventory_app.models.user import User
from inventory_app.repositories.user_repo import UserRepo


class AuthService:
    @staticmethod
    def _issue_token(user: User) -> str:
        return create_access_token(
            identity=str(user.id),
            additional_claims={"role": user.role, "email": user.email}
        )

    @staticmethod
    def register(name: str, email: str, password: str, profile_image: str | None = None,
                 role: str = User.ROLE_USER):
        if UserRepo.email_taken(email):
            raise ValidationError("The given data was invalid.",
                                  errors={"email": "The email has already been taken."})

        user = User(
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            profile_image=profile_image,
            role=role
        )
        UserRepo.create(user)
        current_app.logger.info(f"[auth] registered user={user.id} role={user.role}")
        return AuthService._issue_token(user), user

    @staticmethod
    def login(email: str, password: str):
        current_app.logger.info(f"[auth] login attempt email={email}")
        user = UserRepo.get_by_email(email)
        if not user or not check_password_hash(user.password_hash, password):
            current_app.logger.warning(f"[auth] login failed: invalid credentials email={email}")
            raise AuthenticationError("Invalid login credentials")

        if user.is_restricted:
            current_app.logger.warning(f"[auth] login refused: restricted user={user.id}")
            raise AuthenticationError(RESTRICTED_ACCOUNT_MESSAGE)

        token = AuthService._issue_token(user)
        current_app.logger.info(f"[auth] login successful user={user.id}")
        return token, user

    @staticmethod
    def logout(jti: str):
        UserRepo.revoke_token(jti)

    @staticmethod
    def current_user(principal) -> User:
        user = UserRepo.get_by_id(principal.id)
        if not user:
            raise NotFoundError("User not found")
        return user

    @staticmethod
    def update_profile(principal, name: str, email: str, profile_image: str | None = None):
        user = AuthService.current_user(principal)
        if UserRepo.email_taken(email, exclude_id=user.id):
            raise ValidationError("The given data was invalid.",
                                  errors={"email": "The email has already been taken."})

        user.name = name
        user.email = email
        if profile_image is not None:
            user.profile_image = profile_image
        UserRepo.update()
        return user

    @staticmethod
    def change_password(principal, current_password: str, new_password: str):
        user = AuthService.current_user(principal)
        if not check_password_hash(user.password_hash, current_password or ""):
            raise AuthenticationError("Current password is incorrect")

        user.password_hash = generate_password_hash(new_password)
        UserRepo.update()
        return user
