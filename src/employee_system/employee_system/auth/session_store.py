from __future__ import annotations

import secrets
from typing import Optional, Protocol

from ..users.model import Principal


class SessionStore(Protocol):
    """Server-side sessions keyed by an opaque token.

    Implementations apply an absolute time-to-live measured from `create`;
    `update` replaces the principal without extending it. `destroy` must raise
    SessionDestroyFailure when the backing store cannot remove the session.
    """

    def create(self, principal: Principal) -> str:
        raise NotImplementedError

    def get(self, token: str) -> Optional[Principal]:
        raise NotImplementedError

    def update(self, token: str, principal: Principal) -> None:
        raise NotImplementedError

    def destroy(self, token: str) -> None:
        raise NotImplementedError


def new_token() -> str:
    return secrets.token_urlsafe(32)
