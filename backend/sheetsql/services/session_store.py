from __future__ import annotations
import logging
import threading
import uuid
from typing import Dict, Tuple

from sheetsql.core.errors import SessionNotFound
from sheetsql.models.session import Session

LOG = logging.getLogger(__name__)


class SessionStore:
    """
    In-process map session_id -> (Session, latest ticket).

    Every question takes a ticket; its outcome is committed only if no newer
    ticket was issued meanwhile. Uploads go through `replace`, which always
    wins and outdates every question still in flight.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: Dict[str, Tuple[Session, int]] = {}

    def create(self) -> str:
        sid = uuid.uuid4().hex
        with self._lock:
            self._items[sid] = (Session(), 0)
        return sid

    def get(self, sid: str) -> Session:
        with self._lock:
            if sid not in self._items:
                raise SessionNotFound(sid)
            return self._items[sid][0]

    def issue_ticket(self, sid: str) -> int:
        with self._lock:
            if sid not in self._items:
                raise SessionNotFound(sid)
            session, ticket = self._items[sid]
            self._items[sid] = (session, ticket + 1)
            return ticket + 1

    def is_current(self, sid: str, ticket: int) -> bool:
        with self._lock:
            return sid in self._items and self._items[sid][1] == ticket

    def apply(self, sid: str, ticket: int, new: Session) -> bool:
        with self._lock:
            if sid not in self._items:
                raise SessionNotFound(sid)
            old, latest = self._items[sid]
            if ticket != latest:
                stale = True
            else:
                stale = False
                self._items[sid] = (new, latest)

        if stale:
            LOG.info("Discarding stale result for session %s (ticket %d < %d)", sid, ticket, latest)
            if new.engine is not None and new.engine is not old.engine:
                new.engine.dispose()
            return False
        if old.engine is not None and old.engine is not new.engine:
            old.engine.dispose()
        return True

    def replace(self, sid: str, new: Session) -> int:
        """Commit a whole new dataset: takes the newest ticket and applies it in one step."""
        with self._lock:
            if sid not in self._items:
                raise SessionNotFound(sid)
            old, latest = self._items[sid]
            self._items[sid] = (new, latest + 1)
        if old.engine is not None and old.engine is not new.engine:
            old.engine.dispose()
        return latest + 1

    def drop(self, sid: str) -> None:
        with self._lock:
            session, _ = self._items.pop(sid, (None, 0))
        if session is not None and session.engine is not None:
            session.engine.dispose()


store = SessionStore()
