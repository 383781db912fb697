import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from sheetsql.core.config import settings
from sheetsql.core.errors import NoDatasetError, SessionNotFound, SheetSQLError
from sheetsql.routers import ask, ingest

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
LOG = logging.getLogger("sheetsql")

app = FastAPI(
    title="SheetSQL API",
    version="0.1.0",
    description=(
        "One in-memory SQLite table (`user_data`) per session. Upload a CSV or the first sheet "
        "of an Excel workbook, ask a question, get the generated SQL, the rows and a CSV export."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS, allow_methods=["*"], allow_headers=["*"],
)

_STATUS_FOR = {SessionNotFound: 404, NoDatasetError: 409}


@app.exception_handler(SheetSQLError)
async def pipeline_error(request: Request, exc: SheetSQLError) -> JSONResponse:
    code = next((c for t, c in _STATUS_FOR.items() if isinstance(exc, t)), 400)
    LOG.info("%s %s -> %d: %s", request.method, request.url.path, code, exc)
    return JSONResponse(status_code=code, content={"detail": str(exc)})


app.include_router(ingest.router)
app.include_router(ask.router)


@app.get("/healthz", tags=["meta"])
def healthz():
    return {"status": "ok", "llm_provider": settings.LLM_PROVIDER}
