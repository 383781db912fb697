# sheetsql/routers/ask.py
import logging

from fastapi import APIRouter, HTTPException, Response, status
from starlette.concurrency import run_in_threadpool

from sheetsql.agents.sql_agent.translator import translate_question
from sheetsql.core.config import settings
from sheetsql.core.errors import RateLimitError, TranslationError
from sheetsql.routers.deps import get_session, state_of
from sheetsql.schemas.ask import AskRequest, AskResponse, QueryRequest
from sheetsql.services.executor import run_query
from sheetsql.services.exporter import export_csv
from sheetsql.services.session_store import store

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["ask"])


def _require_loaded(session_id: str):
    session = get_session(session_id)
    if not session.loaded:
        raise HTTPException(status_code=409, detail="No dataset loaded. Upload a file or load the sample first.")
    return session


def _execute(session_id: str, ticket: int, sql: str) -> AskResponse:
    current = get_session(session_id)
    executed = run_query(current, sql, read_only=settings.READ_ONLY_QUERIES)
    applied = store.apply(session_id, ticket, executed)
    return AskResponse(sql=sql, stale=not applied, state=state_of(session_id))


def _fail(session_id: str, ticket: int, badge: str) -> None:
    if store.is_current(session_id, ticket):
        store.apply(session_id, ticket, get_session(session_id).evolve(status=badge))


@router.post("/{session_id}/ask", response_model=AskResponse)
async def ask(session_id: str, req: AskRequest) -> AskResponse:
    question = (req.question or "").strip()
    if not question:
        raise HTTPException(status_code=400, detail="Question is empty.")
    session = _require_loaded(session_id)
    ticket = store.issue_ticket(session_id)

    try:
        sql = await run_in_threadpool(translate_question, question, session.schema, settings=settings)
    except RateLimitError as e:
        LOG.warning("Rate limited: %s", e)
        _fail(session_id, ticket, "Quota Reached")
        headers = {"Retry-After": e.retry_after} if e.retry_after else None
        raise HTTPException(status_code=429, detail=e.user_message, headers=headers)
    except TranslationError as e:
        LOG.error("Translation failed: %s", e)
        _fail(session_id, ticket, "API Error")
        raise HTTPException(status_code=502, detail=e.user_message)

    if not store.is_current(session_id, ticket):
        LOG.info("Question %r superseded before execution", question)
        return AskResponse(sql=sql, stale=True, state=state_of(session_id))
    return await run_in_threadpool(_execute, session_id, ticket, sql)


@router.post("/{session_id}/query", response_model=AskResponse, summary="Run a SQL statement directly")
def query(session_id: str, req: QueryRequest) -> AskResponse:
    _require_loaded(session_id)
    ticket = store.issue_ticket(session_id)
    return _execute(session_id, ticket, req.sql)


@router.get("/{session_id}/export", summary="Download the last result as CSV")
def export(session_id: str) -> Response:
    session = get_session(session_id)
    out = export_csv(session.result, prefix=settings.EXPORT_PREFIX)
    if out is None:
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    return Response(
        content=out.content,
        media_type=out.media_type,
        headers={"Content-Disposition": f'attachment; filename="{out.filename}"'},
    )
