from dataclasses import dataclass
from functools import wraps

from flask_jwt_extended import verify_jwt_in_request, get_jwt_identity

from inventory_app.repositories.user_repo import UserRepo
from inventory_app.utils.responses import fail


@dataclass(frozen=True)
class Principal:
    """The authenticated caller, handed explicitly to views and services."""

    id: int
    roles: frozenset

    @classmethod
    def from_user(cls, user):
        return cls(id=user.id, roles=frozenset(user.roles))

    def has_role(self, *roles) -> bool:
        return any(r in self.roles for r in roles)

    @property
    def is_admin(self) -> bool:
        return self.has_role("admin")


def role_required(*roles):
    """Require a valid access token and, when given, one of ``roles``.

    The wrapped view receives the resolved ``Principal`` as its first
    positional argument.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            verify_jwt_in_request()
            user = UserRepo.get_by_id(int(get_jwt_identity()))
            if not user:
                return fail("Unauthenticated", 401)

            principal = Principal.from_user(user)
            if roles and not principal.has_role(*roles):
                return fail("Forbidden", 403)
            return fn(principal, *args, **kwargs)
        return wrapper
    return decorator
