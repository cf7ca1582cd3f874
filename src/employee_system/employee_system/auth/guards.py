from __future__ import annotations

from functools import wraps
from typing import Any, Callable, Optional

from flask import g, request

from ..core.constants import SESSION_COOKIE_NAME
from ..core.exceptions import Forbidden, NotFound, Unauthorized
from ..users.model import Principal, User
from .service import AuthService

# Loads a user-owned entity by id; the entity must expose `user_id`.
ResourceLoader = Callable[[str], Optional[Any]]


class Guards:
    """Route decorators for session, role and company-ownership checks.

    Every check raises before the wrapped view runs, so a rejected request
    never reaches storage writes.
    """

    def __init__(self, auth: AuthService, *, cookie_name: str = SESSION_COOKIE_NAME):
        self._auth = auth
        self.cookie_name = cookie_name

    def session_token(self) -> Optional[str]:
        return request.cookies.get(self.cookie_name)

    def load_principal(self) -> Optional[Principal]:
        if "principal" not in g:
            g.principal = self._auth.current_principal(self.session_token())
        return g.principal

    def _authenticated(self) -> Principal:
        principal = self.load_principal()
        if principal is None:
            raise Unauthorized()
        return principal

    def require_auth(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            self._authenticated()
            return view(*args, **kwargs)

        return wrapper

    def require_admin(self, view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            principal = self.load_principal()
            if principal is None or not principal.is_administrative:
                raise Forbidden()
            return view(*args, **kwargs)

        return wrapper

    def owns_user(self, param: str = "user_id"):
        """Require the `param` path argument to name a user of the caller's company."""

        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                principal = self._authenticated()
                g.target_user = self._auth.verify_company_ownership(principal, kwargs.get(param))
                return view(*args, **kwargs)

            return wrapper

        return decorator

    def owns_resource(self, param: str, loader: ResourceLoader, *, label: str = "Record"):
        """Load the entity named by `param` and require its owner to share the caller's company."""

        def decorator(view):
            @wraps(view)
            def wrapper(*args, **kwargs):
                principal = self._authenticated()
                resource = loader(str(kwargs.get(param)))
                if resource is None:
                    raise NotFound(f"{label} not found or does not belong to your company")
                try:
                    g.target_user = self._auth.verify_company_ownership(principal, resource.user_id)
                except NotFound:
                    raise NotFound(f"{label} not found or does not belong to your company") from None
                g.resource = resource
                return view(*args, **kwargs)

            return wrapper

        return decorator


def current_principal() -> Principal:
    """Principal resolved by a guard for this request."""
    return g.principal


def target_user() -> User:
    return g.target_user
