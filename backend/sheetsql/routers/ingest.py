# sheetsql/routers/ingest.py
import logging

from fastapi import APIRouter, File, HTTPException, UploadFile, status
from starlette.concurrency import run_in_threadpool

from sheetsql.core.config import settings
from sheetsql.core.errors import DatasetError, ParseError
from sheetsql.routers.deps import get_session, state_of
from sheetsql.schemas.session_state import SessionCreated, SessionState
from sheetsql.services.dataset_loader import load_dataset, load_sample
from sheetsql.services.file_parser import is_supported, parse_upload
from sheetsql.services.session_store import store

LOG = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("", response_model=SessionCreated, status_code=status.HTTP_201_CREATED)
def create_session() -> SessionCreated:
    return SessionCreated(session_id=store.create())


@router.get("/{session_id}", response_model=SessionState)
def read_session(session_id: str) -> SessionState:
    return state_of(session_id)


@router.delete("/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(session_id: str) -> None:
    get_session(session_id)
    store.drop(session_id)


@router.post("/{session_id}/sample", response_model=SessionState, summary="Load the built-in sample dataset")
def sample(session_id: str) -> SessionState:
    session = get_session(session_id)
    loaded = load_sample(session, preview_limit=settings.PREVIEW_LIMIT)
    store.replace(session_id, loaded)
    return state_of(session_id)


@router.post(
    "/{session_id}/upload",
    response_model=SessionState,
    summary="Upload a CSV or Excel file; its first sheet replaces the session table",
)
async def upload(session_id: str, file: UploadFile = File(..., description="CSV or Excel file")) -> SessionState:
    session = get_session(session_id)
    if not is_supported(file.filename or ""):
        raise HTTPException(status_code=415, detail="Please upload a .csv, .xlsx or .xls file.")

    content = await file.read()
    try:
        sheet = await run_in_threadpool(parse_upload, file.filename, content)
        loaded = await run_in_threadpool(
            load_dataset, session, sheet.rows, sheet.columns, preview_limit=settings.PREVIEW_LIMIT
        )
    except (ParseError, DatasetError) as e:
        LOG.warning("Upload %s rejected: %s", file.filename, e)
        raise HTTPException(status_code=400, detail=f"Ingest failed: {e}")

    store.replace(session_id, loaded)
    return state_of(session_id)
