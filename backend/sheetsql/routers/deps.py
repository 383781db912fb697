from fastapi import HTTPException

from sheetsql.constants.sql_query import TABLE_NAME
from sheetsql.core.errors import SessionNotFound
from sheetsql.models.session import Session
from sheetsql.schemas.session_state import SessionState
from sheetsql.services.session_store import store


def get_session(session_id: str) -> Session:
    try:
        return store.get(session_id)
    except SessionNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))


def state_of(session_id: str) -> SessionState:
    return SessionState.from_session(session_id, get_session(session_id), TABLE_NAME)
