"""Role and ownership checks, plus the route decorators that apply them."""
from dataclasses import dataclass
from functools import wraps
from typing import Optional

from flask import current_app, request

from .errors import Forbidden


@dataclass(frozen=True)
class AuthContext:
    email: str
    role: Optional[str] = None
    status: Optional[str] = None

    @property
    def is_admin(self):
        return self.role == "admin"


class AccessGuard:
    def __init__(self, users):
        self.users = users

    def authorize(self, principal_email):
        user = self.users.get_user(principal_email)
        if user is None:
            return AuthContext(email=principal_email)
        return AuthContext(email=principal_email, role=user.role, status=user.status)

    def require_role(self, context, role):
        # A principal with no user record has no role and is rejected.
        if context.role != role:
            raise Forbidden(f"{role.capitalize()} only Actions!", role=context.role)

    def require_self(self, context, email):
        if email != context.email:
            raise Forbidden(email=context.email, role=context.role)


def services():
    return current_app.extensions["bloodcare"]


def token_required(f):
    """Resolve the bearer token and pass the caller's AuthContext to the view."""
    @wraps(f)
    def decorated(*args, **kwargs):
        svc = services()
        email = svc.identity.resolve(request.headers.get("Authorization"))
        return f(svc.guard.authorize(email), *args, **kwargs)
    return decorated


def role_required(role):
    def decorator(f):
        @wraps(f)
        @token_required
        def decorated_function(auth_ctx, *args, **kwargs):
            services().guard.require_role(auth_ctx, role)
            return f(auth_ctx, *args, **kwargs)
        return decorated_function
    return decorator
