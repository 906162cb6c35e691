from flask import Blueprint, request
from flask_jwt_extended import get_jwt

from inventory_app.errors import ServiceError
from inventory_app.schemas import LoginRequest, PasswordRequest, ProfileRequest, RegisterRequest, parse
from inventory_app.services.auth_service import AuthService
from inventory_app.utils.decorators import role_required
from inventory_app.utils.responses import ok, service_error, internal_error
from inventory_app.utils.serializers import user_dict

auth_bp = Blueprint("auth", __name__)


@auth_bp.post("/register")
def register():
    try:
        body = parse(RegisterRequest, request.get_json(silent=True))
        token, user = AuthService.register(
            name=body.name,
            email=body.email,
            password=body.password,
            profile_image=body.profile_image  # role is never taken from the body
        )
        return ok({"user": user_dict(user, with_roles=True), "token": token},
                  "User registered successfully", 201)
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        return internal_error("register user", e)


@auth_bp.post("/login")
def login():
    try:
        body = parse(LoginRequest, request.get_json(silent=True))
        token, user = AuthService.login(body.email, body.password)
        return ok({"user": user_dict(user, with_roles=True), "token": token}, "Login successful")
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        return internal_error("login", e)


@auth_bp.post("/logout")
@role_required()
def logout(principal):
    try:
        AuthService.logout(get_jwt()["jti"])
        return ok(message="Successfully logged out")
    except Exception as e:
        return internal_error("logout", e)


@auth_bp.get("/user")
@role_required()
def me(principal):
    try:
        user = AuthService.current_user(principal)
        return ok(user_dict(user, with_roles=True))
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        return internal_error("fetch user", e)


@auth_bp.put("/user/profile")
@role_required()
def update_profile(principal):
    try:
        body = parse(ProfileRequest, request.get_json(silent=True))
        user = AuthService.update_profile(principal, body.name, body.email, body.profile_image)
        return ok(user_dict(user, with_roles=True), "Profile updated successfully")
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        return internal_error("update profile", e)


@auth_bp.put("/user/password")
@role_required()
def change_password(principal):
    try:
        body = parse(PasswordRequest, request.get_json(silent=True))
        AuthService.change_password(principal, body.current_password, body.password)
        return ok(message="Password changed successfully")
    except ServiceError as e:
        return service_error(e)
    except Exception as e:
        return internal_error("change password", e)
