from __future__ import annotations

import json
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

import mysql.connector

from ..common.datetime_utils import utc_now
from ..core.constants import DEFAULT_SESSION_TTL_HOURS
from ..core.exceptions import SessionDestroyFailure
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from ..users.model import Principal
from .session_store import SessionStore, new_token

logger = logging.getLogger(__name__)


class MySQLSessionStore(SessionStore):
    def __init__(
        self,
        conn_factory: DatabaseConnection,
        *,
        ttl: timedelta = timedelta(hours=DEFAULT_SESSION_TTL_HOURS),
        clock: Callable[[], datetime] = utc_now,
    ):
        self._conn_factory = conn_factory
        self._ttl = ttl
        self._clock = clock

    def create(self, principal: Principal) -> str:
        token = new_token()
        now = self._clock()
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM sessions WHERE expires_at <= %s", (now,))
            if cur.rowcount:
                logger.info("Purged %s expired sessions", cur.rowcount)
            cur.execute(
                """
                INSERT INTO sessions(token, user_id, principal, created_at, expires_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (token, principal.id, json.dumps(principal.to_dict()), now, now + self._ttl),
            )
        return token

    def get(self, token: str) -> Optional[Principal]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT principal, expires_at FROM sessions WHERE token=%s", (token,))
            row = fetchone(cur)
            if not row:
                return None
            if row["expires_at"] <= self._clock():
                cur.execute("DELETE FROM sessions WHERE token=%s", (token,))
                return None
            return Principal.from_dict(json.loads(row["principal"]))

    def update(self, token: str, principal: Principal) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE sessions SET principal=%s WHERE token=%s",
                (json.dumps(principal.to_dict()), token),
            )

    def destroy(self, token: str) -> None:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("DELETE FROM sessions WHERE token=%s", (token,))
        except mysql.connector.Error as e:
            logger.error("Session delete failed: %s", e)
            raise SessionDestroyFailure() from e

